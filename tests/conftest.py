import itertools

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from auth import InvalidTokenError
from main import Collaborators, create_app
from settings import Settings

VALID_TOKEN = "good-token"
OTHER_TOKEN = "other-token"


class FakeVerifier:
    """Accepts two known tokens, rejects everything else."""

    def __init__(self):
        self.calls = []
        self.users = {VALID_TOKEN: "user-1", OTHER_TOKEN: "user-2"}

    def verify(self, token):
        self.calls.append(token)
        if token not in self.users:
            raise InvalidTokenError("bad token")
        return {"uid": self.users[token], "email": "someone@example.com"}


class InMemoryStore:
    """Dict-backed stand-in for Firestore with the same ordering rules."""

    def __init__(self):
        self.chats = {}
        self.messages = {}
        self.calls = []
        self._ids = itertools.count(1)
        self.fail_on = None

    def _maybe_fail(self, op):
        self.calls.append(op)
        if self.fail_on == op:
            raise RuntimeError(f"{op} unavailable")

    def create_conversation(self, uid, title, created_at):
        self._maybe_fail("create_conversation")
        chat_id = f"chat-{next(self._ids)}"
        self.chats.setdefault(uid, {})[chat_id] = {"title": title, "createdAt": created_at}
        return chat_id

    def add_message(self, uid, chat_id, role, text, created_at):
        self._maybe_fail("add_message")
        msg = {"role": role, "text": text, "createdAt": created_at}
        self.messages.setdefault((uid, chat_id), []).append(msg)
        return f"msg-{next(self._ids)}"

    def list_conversations(self, uid):
        self._maybe_fail("list_conversations")
        chats = [{"id": cid, **data} for cid, data in self.chats.get(uid, {}).items()]
        return sorted(chats, key=lambda c: c["createdAt"], reverse=True)

    def list_messages(self, uid, chat_id):
        self._maybe_fail("list_messages")
        return sorted(self.messages.get((uid, chat_id), []), key=lambda m: m["createdAt"])


class FakeGenerator:
    def __init__(self, text="Big news! Our new sneaker just dropped."):
        self.text = text
        self.prompts = []
        self.error = None

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.text


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def app(verifier, store, generator):
    collaborators = Collaborators(verifier=verifier, store=store, generator=generator)
    return create_app(collaborators=collaborators, settings=Settings())


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
