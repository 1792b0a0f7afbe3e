from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.data import DiscoveryLog


class RecordDiscoveryRequest(BaseModel):
    userId: Optional[str] = None
    cardTitle: Optional[str] = None
    trackUri: Optional[str] = None
    added: Optional[bool] = False


class MarkAsAddedRequest(BaseModel):
    userId: Optional[str] = None
    trackUri: Optional[str] = None


class DiscoveryLogOut(BaseModel):
    id: str
    userId: str
    cardTitle: str
    trackUri: str
    added: bool
    createdAt: datetime


class MarkAsAddedResponse(BaseModel):
    message: str
    log: DiscoveryLogOut


def serialize_log(entry: DiscoveryLog) -> DiscoveryLogOut:
    """Convert a DiscoveryLog row to its camelCase API representation."""
    return DiscoveryLogOut(
        id=entry.id,
        userId=entry.user_id,
        cardTitle=entry.card_title,
        trackUri=entry.track_uri,
        added=entry.added,
        createdAt=entry.created_at,
    )
