from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core import InternalError, ValidationError, log_exception, log_step
from app.services import add_track, get_or_create_managed_playlist, managed_playlist_exists
from app.spotify import SpotifyApiError

from ..deps import bearer_token, get_session, require_token
from .schemas import (
    AddTrackRequest,
    PlaylistCreatedResponse,
    PlaylistExistsResponse,
    SuccessResponse,
)

router = APIRouter()


@router.post("/create", response_model=PlaylistCreatedResponse)
def create_playlist(
    token: Optional[str] = Depends(bearer_token),
    session: Session = Depends(get_session),
) -> PlaylistCreatedResponse:
    """
    Return the user's managed playlist, creating it on first use.

    The stored mapping is verified upstream so a playlist deleted in Spotify
    is recreated instead of being returned stale.
    """
    access_token = require_token(token)

    log_step("Resolving managed playlist...")
    try:
        playlist_id = get_or_create_managed_playlist(session, access_token, verify=True)
    except (SpotifyApiError, SQLAlchemyError):
        log_exception("Error creating playlist")
        raise InternalError("Error creating playlist")

    return PlaylistCreatedResponse(playlist_id=playlist_id)


@router.post("/add", response_model=SuccessResponse)
def add_to_playlist(
    body: Optional[AddTrackRequest] = Body(default=None),
    token: Optional[str] = Depends(bearer_token),
    session: Session = Depends(get_session),
) -> SuccessResponse:
    """
    Add a track URI to the managed playlist.

    Missing token or uri is a 400; NotFound (stale playlist) propagates as 404.
    """
    uri = body.uri if body else None
    if not token or not uri:
        raise ValidationError("Missing data")

    try:
        add_track(session, token, uri)
    except (SpotifyApiError, SQLAlchemyError):
        log_exception("Error adding track")
        raise InternalError("Error adding track")

    return SuccessResponse(success=True)


@router.get("/exists", response_model=PlaylistExistsResponse)
def playlist_exists(
    token: Optional[str] = Depends(bearer_token),
    session: Session = Depends(get_session),
) -> PlaylistExistsResponse:
    access_token = require_token(token)
    try:
        exists = managed_playlist_exists(session, access_token)
    except (SpotifyApiError, SQLAlchemyError):
        log_exception("Error checking playlist")
        raise InternalError("Error checking playlist")
    return PlaylistExistsResponse(exists=exists)
