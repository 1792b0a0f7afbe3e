from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core import InternalError, ValidationError, log_exception
from app.services import daily_cards, list_cards, seed_cards

from ..deps import get_session
from .schemas import CardOut, serialize_card

router = APIRouter()


@router.get("", response_model=List[CardOut])
def get_cards(session: Session = Depends(get_session)) -> List[CardOut]:
    try:
        cards = list_cards(session)
    except SQLAlchemyError:
        log_exception("Error in /api/cards")
        raise InternalError("Internal server error")
    return [serialize_card(c) for c in cards]


@router.get("/daily", response_model=List[CardOut])
def get_daily_cards(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    session: Session = Depends(get_session),
) -> List[CardOut]:
    """
    Today's cards for the user (UTC day), assigned on the first request of the day.
    """
    if not user_id:
        raise ValidationError("Missing userId")
    return [serialize_card(c) for c in daily_cards(session, user_id)]


@router.post("/seed")
def post_seed_cards(session: Session = Depends(get_session)) -> Dict[str, bool]:
    try:
        seed_cards(session)
    except SQLAlchemyError:
        session.rollback()
        log_exception("Error inserting cards")
        raise InternalError("Error inserting cards")
    return {"success": True}
