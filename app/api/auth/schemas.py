"""Pydantic schemas for the auth API."""

from typing import Optional

from pydantic import BaseModel


class RefreshResponse(BaseModel):
    access_token: str
    expires_in: Optional[int] = None
