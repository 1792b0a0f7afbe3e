import datetime as dt
import random

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError

import app.services.cards as cards_service
from app.data import Card, DailyCard, DailyCardRepository, DEFAULT_CARDS
from app.services import daily_cards, record_discovery, seed_cards


def _add_cards(session, count: int) -> list:
    cards = [
        Card(
            title=f"Card {i}",
            artist=f"Artist {i}",
            uri=f"spotify:track:{i}",
            img=f"/art/{i}.png",
            cover=f"/cover/{i}.png",
            description=f"Description {i}",
        )
        for i in range(count)
    ]
    session.add_all(cards)
    session.commit()
    return cards


def _assignment_count(session, user_id: str) -> int:
    stmt = select(func.count()).select_from(DailyCard).where(DailyCard.user_id == user_id)
    return session.execute(stmt).scalar_one()


def test_three_distinct_cards_per_day(session) -> None:
    _add_cards(session, 10)

    cards = daily_cards(session, "u1", today=dt.date(2024, 1, 1), rng=random.Random(1))

    assert len(cards) == 3
    assert len({c.id for c in cards}) == 3
    assert _assignment_count(session, "u1") == 3


def test_same_day_is_memoized(session) -> None:
    _add_cards(session, 10)
    day = dt.date(2024, 1, 1)

    first = daily_cards(session, "u1", today=day, rng=random.Random(1))
    second = daily_cards(session, "u1", today=day, rng=random.Random(99))

    assert [c.id for c in first] == [c.id for c in second]
    assert _assignment_count(session, "u1") == 3


def test_next_day_gets_new_assignments(session) -> None:
    _add_cards(session, 10)

    daily_cards(session, "u1", today=dt.date(2024, 1, 1), rng=random.Random(1))
    next_day = daily_cards(session, "u1", today=dt.date(2024, 1, 2), rng=random.Random(2))

    assert len(next_day) == 3
    assert _assignment_count(session, "u1") == 6


def test_discovered_cards_are_excluded(session) -> None:
    cards = _add_cards(session, 5)
    record_discovery(session, "u1", cards[0].title, cards[0].uri)
    record_discovery(session, "u1", cards[1].title, cards[1].uri)

    chosen = daily_cards(session, "u1", today=dt.date(2024, 1, 1), rng=random.Random(3))

    assert {c.uri for c in chosen} == {cards[2].uri, cards[3].uri, cards[4].uri}


def test_pool_widens_when_fewer_than_three_unseen(session) -> None:
    cards = _add_cards(session, 4)
    for card in cards[:3]:
        record_discovery(session, "u1", card.title, card.uri)

    chosen = daily_cards(session, "u1", today=dt.date(2024, 1, 1), rng=random.Random(4))

    assert len(chosen) == 3
    assert len({c.id for c in chosen}) == 3


def test_small_pool_is_padded_with_repeats(session) -> None:
    cards = _add_cards(session, 2)
    day = dt.date(2024, 1, 1)

    chosen = daily_cards(session, "u1", today=day, rng=random.Random(5))
    again = daily_cards(session, "u1", today=day)

    assert len(chosen) == 3
    assert {c.id for c in chosen} == {c.id for c in cards}
    assert [c.id for c in again] == [c.id for c in chosen]
    assert _assignment_count(session, "u1") == 2


def test_disjoint_decks_for_the_same_day_conflict(session, session_factory) -> None:
    cards = _add_cards(session, 6)
    day = dt.datetime(2024, 1, 1)

    DailyCardRepository(session).create_many("u1", cards[:3], day)
    other = session_factory()
    try:
        with pytest.raises(IntegrityError):
            DailyCardRepository(other).create_many("u1", cards[3:], day)
    finally:
        other.close()

    assert _assignment_count(session, "u1") == 3


def test_concurrent_first_request_returns_winning_deck(
    session, session_factory, monkeypatch
) -> None:
    _add_cards(session, 6)
    day = dt.date(2024, 1, 1)
    original_draw = cards_service._draw

    def draw_then_lose_race(draw_session, user_id, rng):
        chosen = original_draw(draw_session, user_id, rng)
        taken = {c.id for c in chosen}
        rival = session_factory()
        try:
            rival_cards = [
                c
                for c in rival.execute(select(Card).order_by(Card.id)).scalars()
                if c.id not in taken
            ]
            DailyCardRepository(rival).create_many(
                user_id, rival_cards[:3], dt.datetime(2024, 1, 1)
            )
        finally:
            rival.close()
        return chosen

    monkeypatch.setattr(cards_service, "_draw", draw_then_lose_race)

    result = daily_cards(session, "u1", today=day, rng=random.Random(7))

    stored = [
        a.card_id
        for a in DailyCardRepository(session).list_for_day("u1", dt.datetime(2024, 1, 1))
    ]
    assert len(result) == 3
    assert [c.id for c in result] == stored
    assert _assignment_count(session, "u1") == 3


def test_empty_pool_returns_nothing(session) -> None:
    assert daily_cards(session, "u1", today=dt.date(2024, 1, 1)) == []


def test_seed_is_idempotent(session) -> None:
    assert seed_cards(session) == len(DEFAULT_CARDS)
    assert seed_cards(session) == 0

    total = session.execute(select(func.count()).select_from(Card)).scalar_one()
    assert total == len(DEFAULT_CARDS)


def test_cards_endpoints(client) -> None:
    assert client.get("/api/cards").json() == []

    seeded = client.post("/api/cards/seed")
    assert seeded.status_code == 200
    assert seeded.json() == {"success": True}

    cards = client.get("/api/cards").json()
    assert {c["uri"] for c in cards} == {c["uri"] for c in DEFAULT_CARDS}
    assert set(cards[0]) == {"id", "title", "artist", "uri", "img", "cover", "description"}

    daily = client.get("/api/cards/daily", params={"userId": "u1"})
    assert daily.status_code == 200
    assert len(daily.json()) == 3
    assert client.get("/api/cards/daily", params={"userId": "u1"}).json() == daily.json()

    assert client.get("/api/cards/daily").status_code == 400


def test_daily_cards_store_failure_is_json_500(client, monkeypatch) -> None:
    def broken_store(*_args, **_kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr("app.api.cards.routes.daily_cards", broken_store)

    response = client.get("/api/cards/daily", params={"userId": "u1"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
