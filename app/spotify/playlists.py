"""Playlist helpers for the Spotify Web API."""

from typing import Dict, Iterator, List, Optional

from app.config import PLAYLISTS_PAGE_SIZE
from app.spotify.client import SpotifyApiError, sp_get, sp_post


def iter_user_playlists(access_token: str) -> Iterator[Dict]:
    """
    Yield the current user's playlists, following `next` cursors page by page.
    """
    url: Optional[str] = "me/playlists"
    params: Optional[Dict] = {"limit": PLAYLISTS_PAGE_SIZE}

    while url:
        data = sp_get(access_token, url, params=params) or {}
        for item in data.get("items") or []:
            if item:
                yield item
        url = data.get("next")
        params = None  # next URL already includes params


def find_playlist_by_name(access_token: str, name: str) -> Optional[Dict]:
    """
    Return the first playlist whose name matches `name` ignoring case.
    """
    wanted = name.casefold()
    for playlist in iter_user_playlists(access_token):
        if (playlist.get("name") or "").casefold() == wanted:
            return playlist
    return None


def create_playlist(
    access_token: str,
    user_id: str,
    name: str,
    description: str,
    public: bool = False,
) -> Dict:
    payload = {
        "name": name,
        "description": description,
        "public": public,
    }
    playlist = sp_post(access_token, f"users/{user_id}/playlists", json=payload)
    if not isinstance(playlist, dict) or not playlist.get("id"):
        raise SpotifyApiError("Playlist creation returned no playlist id")
    return playlist


def playlist_exists(access_token: str, playlist_id: str) -> bool:
    """
    True if the playlist is still reachable upstream, False on 404.
    """
    try:
        sp_get(access_token, f"playlists/{playlist_id}", params={"fields": "id"})
    except SpotifyApiError as e:
        if e.upstream_status == 404:
            return False
        raise
    return True


def add_tracks_to_playlist(
    access_token: str, playlist_id: str, uris: List[str]
) -> Optional[str]:
    """
    Append track URIs to a playlist and return the new snapshot id.
    """
    data = sp_post(access_token, f"playlists/{playlist_id}/tracks", json={"uris": uris})
    if isinstance(data, dict):
        return data.get("snapshot_id")
    return None
