"""Liveness routes."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    """Plain-text liveness string."""
    return "API Running."


@router.get("/health")
def health_check() -> dict[str, str]:
    """Return the current status of the API."""
    return {"status": "healthy"}
