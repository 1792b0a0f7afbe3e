"""Per-user log of discovered tracks."""

import datetime as dt
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core import NotFound
from app.data import DiscoveryLog, DiscoveryLogRepository, utcnow


def record_discovery(
    session: Session,
    user_id: str,
    card_title: str,
    track_uri: str,
    added: bool = False,
    now: Optional[dt.datetime] = None,
) -> Tuple[DiscoveryLog, bool]:
    """
    Record that a user discovered a track.

    Idempotent per (user_id, track_uri): an existing entry is returned
    unchanged. The boolean is True only when a new entry was created.
    """
    repo = DiscoveryLogRepository(session)
    existing = repo.find(user_id, track_uri)
    if existing is not None:
        return existing, False

    entry = repo.create(
        user_id=user_id,
        card_title=card_title,
        track_uri=track_uri,
        added=added,
        created_at=now,
    )
    return entry, True


def mark_added(
    session: Session, user_id: str, track_uri: str
) -> Tuple[DiscoveryLog, bool]:
    """
    Flip `added` to True. Returns (entry, changed); changed is False when the
    entry was already marked, in which case nothing is written.
    """
    repo = DiscoveryLogRepository(session)
    entry = repo.find(user_id, track_uri)
    if entry is None:
        raise NotFound("Log not found")
    if entry.added:
        return entry, False
    return repo.mark_added(entry), True


def list_discoveries(session: Session, user_id: str) -> List[DiscoveryLog]:
    return DiscoveryLogRepository(session).list_for_user(user_id)


def utc_day_bounds(now: dt.datetime) -> Tuple[dt.datetime, dt.datetime]:
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + dt.timedelta(days=1)


def todays_discovery(
    session: Session, user_id: str, now: Optional[dt.datetime] = None
) -> Optional[DiscoveryLog]:
    """
    Earliest entry the user created during the current UTC day, if any.
    """
    start, end = utc_day_bounds(now or utcnow())
    return DiscoveryLogRepository(session).first_between(user_id, start, end)
