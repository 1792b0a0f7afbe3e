from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.core import InternalError, log_exception
from app.spotify import SpotifyApiError, get_current_user

from ..deps import bearer_token, require_token

router = APIRouter()


class ProfileResponse(BaseModel):
    userId: str
    avatarUrl: Optional[str] = None
    displayName: Optional[str] = None


@router.get("/me", response_model=ProfileResponse)
def get_me(token: Optional[str] = Depends(bearer_token)) -> ProfileResponse:
    """
    Snapshot of the Spotify account behind the bearer token.
    """
    access_token = require_token(token)
    try:
        user = get_current_user(access_token)
    except SpotifyApiError:
        log_exception("Error fetching Spotify profile")
        raise InternalError("Error fetching profile")

    return ProfileResponse(
        userId=user.id,
        avatarUrl=user.avatar_url,
        displayName=user.display_name,
    )
