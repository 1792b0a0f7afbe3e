from typing import Optional

from pydantic import BaseModel


class AddTrackRequest(BaseModel):
    uri: Optional[str] = None


class PlaylistCreatedResponse(BaseModel):
    playlist_id: str


class PlaylistExistsResponse(BaseModel):
    exists: bool


class SuccessResponse(BaseModel):
    success: bool = True
