"""Engine and session lifecycle for the relational store.

The engine is created once per process; each request gets its own Session
through the `get_session` dependency.
"""

from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.config import DATABASE_URL
from app.core import log_info

from .models import Base


def build_engine(url: str = DATABASE_URL) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = build_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(bind: Engine | None = None) -> None:
    """
    Create missing tables. Existing tables are left untouched.
    """
    target = bind or engine
    Base.metadata.create_all(bind=target)
    log_info(f"Database ready ({target.url.render_as_string(hide_password=True)}).")


def dispose_engine() -> None:
    engine.dispose()


def get_session() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
