"""Route handlers for the API."""

from devconnector.api.routes import auth, health, posts, profile, users

__all__ = ["auth", "health", "posts", "profile", "users"]
