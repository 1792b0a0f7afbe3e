import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional
from urllib.parse import parse_qs, urlparse

import pytest

# Settings are read at import time; make them deterministic for the test run.
os.environ.setdefault("SPOTIFY_CLIENT_ID", "test-client-id")
os.environ.setdefault("SPOTIFY_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("SPOTIFY_REDIRECT_URI", "http://localhost:4000/api/auth/callback")
os.environ.setdefault("CLIENT_URL", "http://localhost:3000")
os.environ.setdefault("CLIENT_VERCEL_URL", "https://soundhaven.vercel.app")
os.environ.setdefault("APP_ENV", "development")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from app.api.fastapi_app import app  # noqa: E402
from app.config import SPOTIFY_API_BASE  # noqa: E402
from app.data import Base, get_session  # noqa: E402


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.reason = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    @property
    def content(self) -> bytes:
        if self._payload is None:
            return self.text.encode("utf-8")
        return b"{}"

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeSpotify:
    """
    In-memory stand-in for the Spotify Web API, plugged in place of
    `requests.request` in app.spotify.client.
    """

    def __init__(self) -> None:
        self.users: Dict[str, Dict[str, Any]] = {}
        self.playlists: Dict[str, List[Dict[str, Any]]] = {}
        self.tracks: Dict[str, List[str]] = {}
        self.calls: List[Dict[str, Any]] = []
        self.page_size_seen: List[Optional[int]] = []
        self.on_create: Optional[Callable[[str, str], None]] = None
        self.fail_me_with: Optional[int] = None
        self._next_id = 0

    def add_user(
        self,
        token: str,
        user_id: str,
        display_name: str = "Test User",
        avatar_url: Optional[str] = "https://img/avatar.png",
    ) -> None:
        images = [{"url": avatar_url}] if avatar_url else []
        self.users[token] = {"id": user_id, "display_name": display_name, "images": images}
        self.playlists.setdefault(user_id, [])

    def add_playlist(self, user_id: str, name: str, playlist_id: Optional[str] = None) -> str:
        if playlist_id is None:
            self._next_id += 1
            playlist_id = f"pl-{self._next_id}"
        self.playlists.setdefault(user_id, []).append({"id": playlist_id, "name": name})
        self.tracks[playlist_id] = []
        return playlist_id

    def delete_playlist(self, playlist_id: str) -> None:
        for items in self.playlists.values():
            items[:] = [p for p in items if p["id"] != playlist_id]
        self.tracks.pop(playlist_id, None)

    def count(self, method: str, path: str) -> int:
        return sum(1 for c in self.calls if c["method"] == method and c["path"] == path)

    def _user_for(self, headers: Dict[str, str]) -> Optional[Dict[str, Any]]:
        token = headers.get("Authorization", "").replace("Bearer ", "")
        return self.users.get(token)

    def __call__(self, method, url, headers=None, params=None, json=None, timeout=None):
        parsed = urlparse(url)
        path = parsed.path.replace(urlparse(SPOTIFY_API_BASE).path, "", 1)
        query = {k: v[0] for k, v in parse_qs(parsed.query).items()}
        query.update(params or {})
        self.calls.append({"method": method, "path": path, "json": json, "timeout": timeout})

        user = self._user_for(headers or {})
        if user is None:
            return FakeResponse(401, {"error": {"status": 401, "message": "Invalid access token"}})

        if method == "GET" and path == "/me":
            if self.fail_me_with:
                return FakeResponse(self.fail_me_with, {"error": {"message": "boom"}})
            return FakeResponse(200, user)

        if method == "GET" and path == "/me/playlists":
            limit = int(query.get("limit", 50))
            offset = int(query.get("offset", 0))
            self.page_size_seen.append(limit)
            items = self.playlists.get(user["id"], [])
            page = items[offset : offset + limit]
            next_url = None
            if offset + limit < len(items):
                next_url = f"{SPOTIFY_API_BASE}/me/playlists?offset={offset + limit}&limit={limit}"
            return FakeResponse(200, {"items": page, "next": next_url})

        if method == "GET" and path.startswith("/playlists/"):
            playlist_id = path.split("/")[2]
            if playlist_id in self.tracks:
                return FakeResponse(200, {"id": playlist_id})
            return FakeResponse(404, {"error": {"status": 404, "message": "Not found"}})

        if method == "POST" and path.startswith("/users/") and path.endswith("/playlists"):
            owner = path.split("/")[2]
            playlist_id = self.add_playlist(owner, json["name"])
            if self.on_create:
                self.on_create(owner, playlist_id)
            return FakeResponse(201, {"id": playlist_id, "name": json["name"], "public": json["public"]})

        if method == "POST" and path.startswith("/playlists/") and path.endswith("/tracks"):
            playlist_id = path.split("/")[2]
            if playlist_id not in self.tracks:
                return FakeResponse(404, {"error": {"status": 404, "message": "Not found"}})
            self.tracks[playlist_id].extend(json["uris"])
            return FakeResponse(201, {"snapshot_id": "snap-1"})

        return FakeResponse(404, {"error": {"status": 404, "message": "Unknown endpoint"}})


class FakeTokenEndpoint:
    """Stand-in for `requests.post` against the accounts token endpoint."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.responses: List[Any] = []

    def queue(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.responses.append(FakeResponse(status_code, payload, text))

    def queue_error(self, exc: Exception) -> None:
        self.responses.append(exc)

    def __call__(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "data": dict(data or {}), "headers": headers, "timeout": timeout})
        if not self.responses:
            raise AssertionError("Unexpected call to the token endpoint")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def engine(tmp_path: Path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def session(session_factory) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory) -> Iterator[TestClient]:
    def _override_session() -> Iterator[Session]:
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_session] = _override_session
    try:
        yield TestClient(app, follow_redirects=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def spotify(monkeypatch) -> FakeSpotify:
    fake = FakeSpotify()
    monkeypatch.setattr("app.spotify.client.requests.request", fake, raising=True)
    return fake


@pytest.fixture
def token_endpoint(monkeypatch) -> FakeTokenEndpoint:
    fake = FakeTokenEndpoint()
    monkeypatch.setattr("app.spotify.auth.requests.post", fake, raising=True)
    return fake
