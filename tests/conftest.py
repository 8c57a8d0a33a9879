# tests/conftest.py
import asyncio

import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

from carefund.core.errors import Internal, Unauthenticated
from carefund.deps import get_blobs, get_chat, get_identity, get_qr, get_store
from carefund.main import app
from carefund.repos.inmemory import InMemoryStore
from carefund.services.chat import normalize_history


# ---------- Fake collaborators ----------
class FakeQR:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.rendered = []

    async def render(self, uri: str) -> str:
        if self.fail:
            raise Internal("Error generating QR code")
        self.rendered.append(uri)
        return "data:image/png;base64,QUJD"


class FakeBlobs:
    """Uploads succeed after `delays[name]` seconds unless `name` is in `failing`."""

    def __init__(self, failing=(), delays=None):
        self.failing = set(failing)
        self.delays = delays or {}
        self.uploaded = []

    async def put(self, name: str, data: bytes, content_type=None) -> str:
        await asyncio.sleep(self.delays.get(name, 0))
        if name in self.failing:
            raise Internal(f"Upload of {name} failed")
        self.uploaded.append(name)
        return f"https://blob.test/{name}"


class FakeIdentity:
    def __init__(self, tokens=None):
        self.tokens = dict(tokens or {})

    async def verify(self, token: str) -> dict:
        if token not in self.tokens:
            raise Unauthenticated("Authentication failed")
        return self.tokens[token]


class FakeChat:
    def __init__(self):
        self.calls = []

    async def reply(self, history):
        turns = normalize_history(history)
        self.calls.append(turns)
        return f"echo: {turns[-1]['parts'][0]}"


ALICE = {"sub": "g-1", "name": "Alice", "email": "alice@x.com", "picture": "https://pics.test/a.png"}


# ---------- Fixtures ----------
@pytest.fixture(scope="session")
def anyio_backend():
    # keep AnyIO on asyncio for the whole test session
    return "asyncio"

@pytest.fixture
def store():
    return InMemoryStore()

@pytest.fixture
def qr():
    return FakeQR()

@pytest.fixture
def blobs():
    return FakeBlobs()

@pytest.fixture
def identity():
    return FakeIdentity({"tok-alice": ALICE, "tok-alice-2": dict(ALICE, name="Alice Renamed")})

@pytest.fixture
def chat():
    return FakeChat()

@pytest.fixture
async def test_client(store, qr, blobs, identity, chat):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_qr] = lambda: qr
    app.dependency_overrides[get_blobs] = lambda: blobs
    app.dependency_overrides[get_identity] = lambda: identity
    app.dependency_overrides[get_chat] = lambda: chat
    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app, raise_app_exceptions=True)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
    finally:
        app.dependency_overrides.clear()
