"""Public façade for the app.data package.

This module exposes the ORM models, the session lifecycle helpers and the
repositories that are safe to import from other packages. Callers should use
this façade instead of importing from the internal database, models or
repositories modules directly.
"""

from .database import SessionLocal, dispose_engine, get_session, init_db
from .models import Base, Card, DailyCard, DiscoveryLog, UserPlaylist, utcnow
from .repositories import (
    CardRepository,
    DailyCardRepository,
    DiscoveryLogRepository,
    ManagedPlaylistRepository,
)
from .seed import DEFAULT_CARDS

__all__ = [
    "Base",
    "UserPlaylist",
    "DiscoveryLog",
    "Card",
    "DailyCard",
    "utcnow",
    "SessionLocal",
    "get_session",
    "init_db",
    "dispose_engine",
    "ManagedPlaylistRepository",
    "DiscoveryLogRepository",
    "CardRepository",
    "DailyCardRepository",
    "DEFAULT_CARDS",
]
