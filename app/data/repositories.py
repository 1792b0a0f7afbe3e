import datetime as dt
from typing import Any, Dict, Iterable, List, Optional, Set

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import Card, DailyCard, DiscoveryLog, UserPlaylist, utcnow


def _commit(session: Session) -> None:
    """Commit, rolling back first if it fails so the session stays usable."""
    try:
        session.commit()
    except Exception:
        session.rollback()
        raise


class ManagedPlaylistRepository:
    """Repository for the user → managed playlist mapping."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> Optional[UserPlaylist]:
        stmt = select(UserPlaylist).where(UserPlaylist.user_id == user_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def create(self, user_id: str, playlist_id: str) -> UserPlaylist:
        """Insert and commit a mapping.

        The unique constraint on user_id surfaces as IntegrityError; the
        session is rolled back before it propagates.
        """

        record = UserPlaylist(user_id=user_id, playlist_id=playlist_id)
        self.session.add(record)
        _commit(self.session)
        return record

    def delete(self, record: UserPlaylist) -> None:
        self.session.delete(record)
        _commit(self.session)


class DiscoveryLogRepository:
    """Repository for discovery log entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self, user_id: str, track_uri: str) -> Optional[DiscoveryLog]:
        stmt = (
            select(DiscoveryLog)
            .where(DiscoveryLog.user_id == user_id, DiscoveryLog.track_uri == track_uri)
            .order_by(DiscoveryLog.created_at)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def create(
        self,
        user_id: str,
        card_title: str,
        track_uri: str,
        added: bool = False,
        created_at: Optional[dt.datetime] = None,
    ) -> DiscoveryLog:
        entry = DiscoveryLog(
            user_id=user_id,
            card_title=card_title,
            track_uri=track_uri,
            added=added,
            created_at=created_at or utcnow(),
        )
        self.session.add(entry)
        _commit(self.session)
        return entry

    def mark_added(self, entry: DiscoveryLog) -> DiscoveryLog:
        entry.added = True
        _commit(self.session)
        return entry

    def list_for_user(self, user_id: str) -> List[DiscoveryLog]:
        stmt = (
            select(DiscoveryLog)
            .where(DiscoveryLog.user_id == user_id)
            .order_by(DiscoveryLog.created_at.desc())
        )
        return list(self.session.execute(stmt).scalars())

    def first_between(
        self, user_id: str, start: dt.datetime, end: dt.datetime
    ) -> Optional[DiscoveryLog]:
        """Earliest entry with start <= created_at < end."""

        stmt = (
            select(DiscoveryLog)
            .where(
                DiscoveryLog.user_id == user_id,
                DiscoveryLog.created_at >= start,
                DiscoveryLog.created_at < end,
            )
            .order_by(DiscoveryLog.created_at)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def track_uris_for_user(self, user_id: str) -> Set[str]:
        stmt = select(DiscoveryLog.track_uri).where(DiscoveryLog.user_id == user_id)
        return set(self.session.execute(stmt).scalars())


class CardRepository:
    """Repository for the content card deck."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self) -> List[Card]:
        return list(self.session.execute(select(Card).order_by(Card.id)).scalars())

    def list_excluding_uris(self, uris: Iterable[str]) -> List[Card]:
        excluded = list(uris)
        stmt = select(Card).order_by(Card.id)
        if excluded:
            stmt = stmt.where(Card.uri.not_in(excluded))
        return list(self.session.execute(stmt).scalars())

    def get_by_uri(self, uri: str) -> Optional[Card]:
        return self.session.execute(
            select(Card).where(Card.uri == uri)
        ).scalar_one_or_none()

    def insert_if_absent(self, data: Dict[str, Any]) -> bool:
        """Insert a card unless one with the same uri exists.

        Existing cards are never overwritten. Returns True when inserted.
        The caller commits.
        """

        if self.get_by_uri(data["uri"]) is not None:
            return False
        self.session.add(Card(**data))
        self.session.flush()
        return True


class DailyCardRepository:
    """Repository for per-day card assignments."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_day(self, user_id: str, day: dt.datetime) -> List[DailyCard]:
        stmt = (
            select(DailyCard)
            .where(DailyCard.user_id == user_id, DailyCard.date == day)
            .order_by(DailyCard.slot)
        )
        return list(self.session.execute(stmt).scalars().unique())

    def create_many(
        self, user_id: str, cards: List[Card], day: dt.datetime
    ) -> List[DailyCard]:
        """Insert all assignments in one transaction.

        Each card takes the next slot of the day. Rolls back and re-raises on
        IntegrityError: a concurrent request already filled one of the slots.
        """

        rows = [
            DailyCard(user_id=user_id, card_id=c.id, date=day, slot=slot)
            for slot, c in enumerate(cards)
        ]
        self.session.add_all(rows)
        _commit(self.session)
        return rows
