"""Public façade for the app.services package.

Domain operations used by the API routers: managed playlist reconciliation,
the discovery ledger and the card deck. Each operation takes the request's
SQLAlchemy session as its first argument.
"""

from .cards import daily_cards, list_cards, seed_cards
from .discovery_ledger import (
    list_discoveries,
    mark_added,
    record_discovery,
    todays_discovery,
)
from .playlist_reconciler import (
    add_track,
    get_or_create_managed_playlist,
    managed_playlist_exists,
)

__all__ = [
    "get_or_create_managed_playlist",
    "managed_playlist_exists",
    "add_track",
    "record_discovery",
    "mark_added",
    "list_discoveries",
    "todays_discovery",
    "list_cards",
    "seed_cards",
    "daily_cards",
]
