"""Shared FastAPI dependencies."""

from typing import Optional

from fastapi import Header

from app.core import Unauthorized
from app.data import get_session

BEARER_SCHEME = "bearer"


def bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """
    Access token from the Authorization header, or None when absent.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None
    return token.strip() or None


def require_token(token: Optional[str]) -> str:
    if not token:
        raise Unauthorized("No token")
    return token


__all__ = ["bearer_token", "require_token", "get_session"]
