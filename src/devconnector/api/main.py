"""FastAPI application entry point for the DevConnector API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from devconnector import __version__
from devconnector.api.routes import auth, health, posts, profile, users
from devconnector.config import Settings
from devconnector.data.db import Database
from devconnector.services.errors import ApiError, FieldError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


def _field_error(error: dict) -> FieldError:
    """Turn one pydantic error into a field message.

    Validators raise ``ValueError`` with the message meant for the client;
    pydantic keeps it under ``ctx["error"]``. Other error types keep
    pydantic's own summary.
    """
    loc = error.get("loc", ())
    param = str(loc[-1]) if len(loc) > 1 else None
    location = str(loc[0]) if loc else "body"
    msg = str(error.get("msg", "Invalid value"))
    if error.get("type") == "value_error":
        ctx_error = (error.get("ctx") or {}).get("error")
        msg = str(ctx_error) if ctx_error is not None else msg.removeprefix("Value error, ")
    return FieldError(msg=msg, param=param, location=location)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [_field_error(e).to_dict() for e in exc.errors()]
    return JSONResponse(status_code=400, content={"errors": errors})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"msg": "Server Error"})


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application around one settings object and one store handle.

    Args:
        settings: Process configuration; read from the environment if omitted.
        database: Store handle; built from ``settings.database_url`` if omitted.
    """
    settings = settings or Settings.from_env()
    database = database or Database(settings.database_url)
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Create tables on startup and release connections on shutdown."""
        database.create_tables()
        logger.info("Application startup")
        yield
        database.dispose()
        logger.info("Application shutdown")

    app = FastAPI(
        title="DevConnector API",
        description="Developer profiles, posts and authentication",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health.router)
    app.include_router(users.router, prefix="/api")
    app.include_router(auth.router, prefix="/api")
    app.include_router(profile.router, prefix="/api")
    app.include_router(posts.router, prefix="/api")
    return app


def main() -> None:
    """Start the server."""
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
