from __future__ import annotations

import datetime as dt
import uuid

import sqlalchemy as sa
from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> dt.datetime:
    """Naive UTC timestamp, matching the TIMESTAMP columns below."""
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


def _uuid() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    metadata = sa.MetaData(naming_convention=NAMING_CONVENTION)


class UserPlaylist(Base):
    """The single managed playlist tracked for a Spotify user."""

    __tablename__ = "user_playlists"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    playlist_id: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )


class DiscoveryLog(Base):
    __tablename__ = "discovery_logs"
    __table_args__ = (sa.Index("ix_discovery_logs_user_track", "user_id", "track_uri"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    card_title: Mapped[str] = mapped_column(Text, nullable=False)
    track_uri: Mapped[str] = mapped_column(String(255), nullable=False)
    added: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )


class Card(Base):
    __tablename__ = "cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    artist: Mapped[str] = mapped_column(Text, nullable=False)
    uri: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    img: Mapped[str] = mapped_column(Text, nullable=False)
    cover: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)


class DailyCard(Base):
    """One card assigned to a user for one UTC day."""

    __tablename__ = "daily_cards"
    __table_args__ = (
        sa.UniqueConstraint("user_id", "card_id", "date", name="uq_daily_cards_user_card_date"),
        sa.UniqueConstraint("user_id", "date", "slot", name="uq_daily_cards_user_date_slot"),
        sa.Index("ix_daily_cards_user_date", "user_id", "date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    card_id: Mapped[int] = mapped_column(
        ForeignKey("cards.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    # UTC midnight of the assignment day
    date: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False)
    # position in the day's deck, 0 .. DAILY_CARDS_COUNT - 1
    slot: Mapped[int] = mapped_column(Integer, nullable=False)

    card: Mapped[Card] = relationship(lazy="joined")
