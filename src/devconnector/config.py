"""Process configuration.

Settings are read from the environment (and an optional ``.env`` file) once at
startup and handed to the application factory. Nothing else in the package
reads environment variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_PORT = 5000


class ConfigurationError(RuntimeError):
    """Raised at startup when the environment does not describe a usable setup."""


def _default_database_url() -> str:
    project_root = Path(__file__).resolve().parents[2]
    return f"sqlite:///{(project_root / 'devconnector.db').as_posix()}"


def _port_from_env() -> int:
    raw = os.getenv("PORT", str(DEFAULT_PORT))
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ConfigurationError(f"PORT must be between 1 and 65535, got {port}")
    return port


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the API.

    Attributes:
        jwt_secret: Key used to sign and verify auth tokens.
        database_url: SQLAlchemy URL of the document store.
        host: Interface the server binds to.
        port: Listening port.
        log_level: Root logging level name.
    """

    jwt_secret: str
    database_url: str = ""
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from environment variables, loading ``.env`` first.

        Raises:
            ConfigurationError: If ``JWT_SECRET`` is unset or a value is malformed.
        """
        load_dotenv()
        jwt_secret = os.getenv("JWT_SECRET")
        if not jwt_secret:
            logger.error("JWT_SECRET is not set; refusing to start without a signing key")
            raise ConfigurationError("JWT_SECRET must be set")
        return cls(
            jwt_secret=jwt_secret,
            database_url=os.getenv("DB_URL") or _default_database_url(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_port_from_env(),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
