from dataclasses import dataclass
from typing import Optional

from app.spotify.client import SpotifyApiError, sp_get


@dataclass
class SpotifyUser:
    id: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None


def get_current_user(access_token: str) -> SpotifyUser:
    data = sp_get(access_token, "me")
    if not isinstance(data, dict) or not data.get("id"):
        raise SpotifyApiError("GET /me returned no user id")

    images = data.get("images") or []
    avatar_url = images[0].get("url") if images else None
    return SpotifyUser(
        id=data["id"],
        display_name=data.get("display_name"),
        avatar_url=avatar_url,
    )


def get_current_user_id(access_token: str) -> str:
    return get_current_user(access_token).id
