"""Pytest configuration and fixtures for Stash.

API tests drive stash.api.app:app through httpx's ASGI transport against an
in-memory SQLite database and an in-memory blob store. Client tests talk to
a fake gateway served by httpx.MockTransport.
"""

import asyncio
import os
import re
from datetime import UTC, datetime, timedelta

os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "")

import httpx  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from jose import jwt  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from stash.api.app import app  # noqa: E402
from stash.client.actions import ClipboardError  # noqa: E402
from stash.client.gateway import GatewayClient  # noqa: E402
from stash.client.palette import CommandPalette  # noqa: E402
from stash.config import settings  # noqa: E402
from stash.db import get_db, init_db  # noqa: E402
from stash.storage import StorageError, get_blob_store  # noqa: E402

USER_ID = "11111111-1111-1111-1111-111111111111"
OTHER_USER_ID = "22222222-2222-2222-2222-222222222222"
CLIENT_TOKEN = "client-token"


def make_token(
    user_id: str,
    expires_in: int = 3600,
    secret: str | None = None,
    audience: str = "authenticated",
) -> str:
    claims = {
        "sub": user_id,
        "aud": audience,
        "exp": datetime.now(UTC) + timedelta(seconds=expires_in),
    }
    return jwt.encode(claims, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def bearer(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


class FakeBlobStore:
    """In-memory blob store."""

    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail_upload = False
        self.fail_sign = False
        self.signed: list[str] = []

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        if self.fail_upload:
            raise StorageError("bucket unavailable")
        if path in self.objects:
            raise StorageError(f"Object already exists: {path}")
        self.objects[path] = (data, content_type)

    def remove(self, paths: list[str]) -> None:
        for path in paths:
            self.objects.pop(path, None)

    def create_signed_url(self, path: str, expires_in: int) -> str:
        if self.fail_sign:
            raise StorageError("signing key unavailable")
        self.signed.append(path)
        return f"https://storage.test/{path}?expires_in={expires_in}&n={len(self.signed)}"


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
async def client(session_factory, blob_store) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return bearer(USER_ID)


@pytest.fixture
def other_headers() -> dict[str, str]:
    return bearer(OTHER_USER_ID)


# Client-side fakes


class FakeGateway:
    """Serves /links, /snippets, /resumes and /resumes/{id}/url from lists."""

    RESUME_URL = re.compile(r"^/resumes/([^/]+)/url$")

    def __init__(self):
        self.links: list[dict] = []
        self.snippets: list[dict] = []
        self.resumes: list[dict] = []
        self.failing: set[str] = set()
        self.snippet_delays: dict[str, float] = {}
        self.fail_signing = False
        self.requests: list[httpx.Request] = []

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.headers.get("Authorization") != f"Bearer {CLIENT_TOKEN}":
            return httpx.Response(401, json={"error": "Unauthorized", "code": "UNAUTHORIZED"})
        if path in self.failing:
            return httpx.Response(500, json={"error": "boom", "code": "DB_ERROR"})

        if path == "/links":
            return httpx.Response(200, json={"data": self.links})
        if path == "/snippets":
            search = request.url.params.get("search")
            delay = self.snippet_delays.get(search or "")
            if delay:
                await asyncio.sleep(delay)
            data = self.snippets
            if search:
                needle = search.lower()
                data = [
                    s for s in data
                    if needle in s["title"].lower() or needle in s["body"].lower()
                ]
            return httpx.Response(200, json={"data": data})
        if path == "/resumes":
            return httpx.Response(200, json={"data": self.resumes})

        match = self.RESUME_URL.match(path)
        if match:
            if self.fail_signing:
                return httpx.Response(500, json={"error": "Failed to generate URL", "code": "STORAGE_ERROR"})
            n = len(self.calls(path))
            return httpx.Response(
                200,
                json={
                    "url": f"https://storage.test/{match.group(1)}.pdf?sig={n}",
                    "expiresAt": "2026-10-19T13:00:00+00:00",
                },
            )
        return httpx.Response(404, json={"error": "Not found", "code": "NOT_FOUND"})


class FakeClipboard:
    def __init__(self, fail: bool = False):
        self.copied: list[str] = []
        self.fail = fail

    def copy(self, text: str) -> None:
        if self.fail:
            raise ClipboardError("no clipboard mechanism")
        self.copied.append(text)


class FakeOpener:
    def __init__(self):
        self.opened: list[str] = []

    def open(self, url: str) -> None:
        self.opened.append(url)


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
async def gateway_client(fake_gateway) -> GatewayClient:
    async with GatewayClient(base_url="http://stash.test", transport=fake_gateway.transport()) as gc:
        yield gc


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def opener() -> FakeOpener:
    return FakeOpener()


@pytest.fixture
def notices() -> list[str]:
    return []


@pytest.fixture
def palette(gateway_client, clipboard, opener, notices) -> CommandPalette:
    return CommandPalette(
        gateway_client,
        credentials=lambda: CLIENT_TOKEN,
        clipboard=clipboard,
        opener=opener,
        notify=notices.append,
        debounce_seconds=0.01,
    )


def link(id: str, label: str, url: str, category: str = "general") -> dict:
    return {"id": id, "label": label, "url": url, "category": category}


def snippet(id: str, title: str, body: str) -> dict:
    return {"id": id, "title": title, "body": body, "tags": []}


def resume(id: str, label: str, role_type: str | None = None) -> dict:
    return {"id": id, "label": label, "role_type": role_type}
