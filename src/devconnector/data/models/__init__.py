"""ORM models package for database tables.

This package provides SQLAlchemy ORM models for the three documents the API
stores:
- User: account identity and credentials
- Profile: developer profile with embedded experience/education lists
- Post: a post with embedded likes and comments

All models inherit from the shared Base declarative class defined in data.db.
"""

from devconnector.data.db import Base
from devconnector.data.models.post import Post
from devconnector.data.models.profile import Profile
from devconnector.data.models.user import User

__all__ = ["Base", "Post", "Profile", "User"]
