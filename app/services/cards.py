"""Card deck and daily card selection.

Every user gets DAILY_CARDS_COUNT cards per UTC day, drawn without
replacement from the cards they have not discovered yet. Once assigned, a
day's deck never changes.
"""

import datetime as dt
import random
from itertools import cycle, islice
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import DAILY_CARDS_COUNT
from app.core import log_info, log_success, log_warning
from app.data import (
    DEFAULT_CARDS,
    Card,
    CardRepository,
    DailyCardRepository,
    DiscoveryLogRepository,
    utcnow,
)


def list_cards(session: Session) -> List[Card]:
    return CardRepository(session).list_all()


def seed_cards(session: Session) -> int:
    """
    Insert the built-in deck, skipping cards whose uri already exists.
    Returns the number of inserted cards.
    """
    repo = CardRepository(session)
    inserted = sum(1 for card in DEFAULT_CARDS if repo.insert_if_absent(card))
    session.commit()
    log_success(f"Card seed done: {inserted} inserted, {len(DEFAULT_CARDS) - inserted} kept.")
    return inserted


def _day_start(day: dt.date) -> dt.datetime:
    return dt.datetime(day.year, day.month, day.day)


def _pad(cards: List[Card], count: int) -> List[Card]:
    """
    Repeat cards in order until `count` items, for decks smaller than a day's draw.
    """
    if not cards or len(cards) >= count:
        return cards
    return list(islice(cycle(cards), count))


def _draw(session: Session, user_id: str, rng: random.Random) -> List[Card]:
    cards = CardRepository(session)
    seen = DiscoveryLogRepository(session).track_uris_for_user(user_id)

    pool = cards.list_excluding_uris(seen)
    if len(pool) < DAILY_CARDS_COUNT:
        pool = cards.list_all()

    return rng.sample(pool, min(DAILY_CARDS_COUNT, len(pool)))


def daily_cards(
    session: Session,
    user_id: str,
    today: Optional[dt.date] = None,
    rng: Optional[random.Random] = None,
) -> List[Card]:
    """
    Return the user's cards for `today` (UTC), assigning them on first call.
    """
    day = _day_start(today or utcnow().date())
    assignments = DailyCardRepository(session)

    existing = assignments.list_for_day(user_id, day)
    if existing:
        return _pad([a.card for a in existing], DAILY_CARDS_COUNT)

    chosen = _draw(session, user_id, rng or random.Random())
    if not chosen:
        return []

    try:
        assignments.create_many(user_id, chosen, day)
    except IntegrityError:
        log_warning(
            f"Daily cards for {user_id} on {day.date()} were assigned concurrently; "
            "returning the stored set."
        )
        return _pad([a.card for a in assignments.list_for_day(user_id, day)], DAILY_CARDS_COUNT)

    log_info(f"Assigned {len(chosen)} daily cards to {user_id} for {day.date()}.")
    return _pad(chosen, DAILY_CARDS_COUNT)
