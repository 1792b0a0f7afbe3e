"""Managed playlist reconciliation.

Each Spotify user owns exactly one "SoundHaven" playlist tracked in the
`user_playlists` table. The mapping is reconciled lazily:

  1. stored mapping (optionally verified upstream, stale rows are dropped)
  2. an existing upstream playlist with the managed name (case-insensitive)
  3. a freshly created private playlist

Two concurrent first requests may both create an upstream playlist; the
unique constraint on user_id decides which mapping is kept and the other
playlist is reported as orphaned.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import MANAGED_PLAYLIST_DESCRIPTION, MANAGED_PLAYLIST_NAME
from app.core import NotFound, log_info, log_step, log_success, log_warning
from app.data import ManagedPlaylistRepository
from app.spotify import (
    SpotifyApiError,
    add_tracks_to_playlist,
    create_playlist,
    find_playlist_by_name,
    get_current_user_id,
    playlist_exists,
)


def _remember(repo: ManagedPlaylistRepository, user_id: str, playlist_id: str) -> str:
    """
    Persist the mapping; on a lost insert race return the winner's playlist id.
    """
    try:
        repo.create(user_id, playlist_id)
    except IntegrityError:
        winner = repo.get(user_id)
        if winner is None:
            raise
        if winner.playlist_id != playlist_id:
            log_warning(
                f"Concurrent playlist creation for user {user_id}: "
                f"keeping {winner.playlist_id}, playlist {playlist_id} is orphaned."
            )
        return winner.playlist_id
    return playlist_id


def _stored_playlist_id(
    repo: ManagedPlaylistRepository,
    access_token: str,
    user_id: str,
    verify: bool,
) -> Optional[str]:
    record = repo.get(user_id)
    if record is None:
        return None
    if not verify:
        return record.playlist_id

    if playlist_exists(access_token, record.playlist_id):
        return record.playlist_id

    log_warning(
        f"Managed playlist {record.playlist_id} for user {user_id} "
        "no longer exists upstream; dropping stale record."
    )
    repo.delete(record)
    return None


def _adopt_existing(
    repo: ManagedPlaylistRepository, access_token: str, user_id: str
) -> Optional[str]:
    log_step(f"Searching playlists of {user_id} for '{MANAGED_PLAYLIST_NAME}'...")
    playlist = find_playlist_by_name(access_token, MANAGED_PLAYLIST_NAME)
    if playlist is None:
        return None
    log_info(f"Adopting existing playlist {playlist['id']} for user {user_id}.")
    return _remember(repo, user_id, playlist["id"])


def get_or_create_managed_playlist(
    session: Session, access_token: str, verify: bool = False
) -> str:
    """
    Return the id of the user's managed playlist, creating it if needed.

    With verify=False the stored id is trusted without an upstream check.
    """
    repo = ManagedPlaylistRepository(session)
    user_id = get_current_user_id(access_token)

    playlist_id = _stored_playlist_id(repo, access_token, user_id, verify)
    if playlist_id:
        return playlist_id

    playlist_id = _adopt_existing(repo, access_token, user_id)
    if playlist_id:
        return playlist_id

    playlist = create_playlist(
        access_token,
        user_id,
        name=MANAGED_PLAYLIST_NAME,
        description=MANAGED_PLAYLIST_DESCRIPTION,
        public=False,
    )
    log_success(f"Created managed playlist {playlist['id']} for user {user_id}.")
    return _remember(repo, user_id, playlist["id"])


def managed_playlist_exists(session: Session, access_token: str) -> bool:
    """
    Whether the user has a live managed playlist. Never creates one.
    """
    repo = ManagedPlaylistRepository(session)
    user_id = get_current_user_id(access_token)

    if _stored_playlist_id(repo, access_token, user_id, verify=True):
        return True
    return _adopt_existing(repo, access_token, user_id) is not None


def add_track(session: Session, access_token: str, track_uri: str) -> None:
    """
    Append a track to the user's managed playlist. No retry on failure.

    A 404 from Spotify means the stored playlist was deleted out-of-band:
    the stale mapping is dropped and NotFound is raised.
    """
    playlist_id = get_or_create_managed_playlist(session, access_token)
    try:
        add_tracks_to_playlist(access_token, playlist_id, [track_uri])
    except SpotifyApiError as e:
        if e.upstream_status != 404:
            raise
        repo = ManagedPlaylistRepository(session)
        user_id = get_current_user_id(access_token)
        record = repo.get(user_id)
        if record is not None and record.playlist_id == playlist_id:
            repo.delete(record)
        raise NotFound("Playlist not found") from e
    log_info(f"Added {track_uri} to playlist {playlist_id}.")
