"""Public façade for the app.spotify package.

This module exposes the Spotify integration used by the services and the API
layer: OAuth token exchange, the current user's profile, and managed-playlist
helpers. Callers should import these symbols from this façade instead of the
internal auth, client, users, or playlists modules.
"""

from .auth import (
    TokenSet,
    build_spotify_auth_url,
    exchange_code,
    exchange_refresh_token,
    generate_state,
    states_match,
)
from .client import SpotifyApiError, spotify_headers
from .playlists import (
    add_tracks_to_playlist,
    create_playlist,
    find_playlist_by_name,
    iter_user_playlists,
    playlist_exists,
)
from .users import SpotifyUser, get_current_user, get_current_user_id

__all__ = [
    "TokenSet",
    "build_spotify_auth_url",
    "exchange_code",
    "exchange_refresh_token",
    "generate_state",
    "states_match",
    "SpotifyApiError",
    "spotify_headers",
    "SpotifyUser",
    "get_current_user",
    "get_current_user_id",
    "iter_user_playlists",
    "find_playlist_by_name",
    "create_playlist",
    "playlist_exists",
    "add_tracks_to_playlist",
]
