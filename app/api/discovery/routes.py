from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from app.core import NotFound, ValidationError, log_info
from app.services import list_discoveries, mark_added, record_discovery, todays_discovery

from ..deps import get_session
from .schemas import (
    DiscoveryLogOut,
    MarkAsAddedRequest,
    MarkAsAddedResponse,
    RecordDiscoveryRequest,
    serialize_log,
)

router = APIRouter()


def _require_user_id(user_id: Optional[str]) -> str:
    if not user_id:
        raise ValidationError("Missing userId")
    return user_id


@router.post("", response_model=DiscoveryLogOut)
def post_discovery(
    body: Optional[RecordDiscoveryRequest] = Body(default=None),
    session: Session = Depends(get_session),
) -> DiscoveryLogOut:
    """
    Record a discovered track. Posting the same (userId, trackUri) again
    returns the original entry untouched.
    """
    if body is None or not (body.userId and body.cardTitle and body.trackUri):
        raise ValidationError("Missing fields")

    entry, created = record_discovery(
        session,
        user_id=body.userId,
        card_title=body.cardTitle,
        track_uri=body.trackUri,
        added=bool(body.added),
    )
    if not created:
        log_info(f"Discovery already recorded for {body.userId} / {body.trackUri}.")
    return serialize_log(entry)


@router.post("/mark-as-added", response_model=MarkAsAddedResponse)
def post_mark_as_added(
    body: Optional[MarkAsAddedRequest] = Body(default=None),
    session: Session = Depends(get_session),
) -> MarkAsAddedResponse:
    if body is None or not (body.userId and body.trackUri):
        raise ValidationError("Missing fields")

    entry, changed = mark_added(session, body.userId, body.trackUri)
    message = "Marked as added" if changed else "Already marked"
    return MarkAsAddedResponse(message=message, log=serialize_log(entry))


@router.get("/all", response_model=List[DiscoveryLogOut])
def get_all_discoveries(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    session: Session = Depends(get_session),
) -> List[DiscoveryLogOut]:
    """Every discovery of the user, newest first."""
    entries = list_discoveries(session, _require_user_id(user_id))
    return [serialize_log(e) for e in entries]


@router.get("/today", response_model=DiscoveryLogOut)
def get_todays_discovery(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    session: Session = Depends(get_session),
) -> DiscoveryLogOut:
    entry = todays_discovery(session, _require_user_id(user_id))
    if entry is None:
        raise NotFound("No discovery today")
    return serialize_log(entry)
