"""Shared test fixtures: in-memory stand-ins for Supabase and the model API."""

import json
import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from brainybot.config.settings import Settings
from brainybot.db.models import MESSAGES
from brainybot.inputs.data_url import encode_data_url
from brainybot.inputs.images import SignatureImageDecoder
from brainybot.llm.client import LLMClient
from brainybot.main import create_app
from brainybot.services import Services

JWT_SECRET = "test-jwt-secret-with-enough-length-for-hs256"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class FakeDatabase:
    def __init__(self):
        self.conversations: dict[str, dict] = {}
        self.messages: list[dict] = []
        self.profiles: dict[str, dict] = {}
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def now(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()


class FakeConversationRepository:
    def __init__(self, db: FakeDatabase):
        self._db = db

    def create(self, user_id, data):
        now = self._db.now()
        row = {"id": str(uuid.uuid4()), "user_id": user_id, "created_at": now, "updated_at": now, **data}
        self._db.conversations[row["id"]] = row
        return dict(row)

    def list_by_user(self, user_id):
        rows = [c for c in self._db.conversations.values() if c["user_id"] == user_id]
        rows.sort(key=lambda c: c["updated_at"], reverse=True)
        return [
            {**c, MESSAGES: [m for m in self._db.messages if m["conversation_id"] == c["id"]]}
            for c in rows
        ]

    def get_latest(self, user_id):
        rows = self.list_by_user(user_id)
        if not rows:
            return None
        rows[0].pop(MESSAGES)
        return rows[0]

    def get_by_id(self, conversation_id):
        row = self._db.conversations.get(conversation_id)
        return dict(row) if row else None

    def update(self, conversation_id, data):
        row = self._db.conversations.get(conversation_id)
        if row is None:
            return None
        row.update(data, updated_at=self._db.now())
        return dict(row)

    def delete(self, conversation_id):
        self._db.messages = [m for m in self._db.messages if m["conversation_id"] != conversation_id]
        return self._db.conversations.pop(conversation_id, None) is not None


class FakeMessageRepository:
    def __init__(self, db: FakeDatabase):
        self._db = db

    def append(self, conversation_id, role, content, input_type=None):
        row = {
            "id": str(uuid.uuid4()),
            "conversation_id": conversation_id,
            "role": role,
            "content": content,
            "input_type": input_type,
            "created_at": self._db.now(),
        }
        self._db.messages.append(row)
        return dict(row)

    def list_by_conversation(self, conversation_id):
        rows = [dict(m) for m in self._db.messages if m["conversation_id"] == conversation_id]
        return sorted(rows, key=lambda m: m["created_at"])


class FakeProfileRepository:
    def __init__(self, db: FakeDatabase):
        self._db = db

    def get(self, user_id):
        return self._db.profiles.get(user_id)

    def upsert(self, user_id, age, education_level):
        row = self._db.profiles.setdefault(user_id, {"id": str(uuid.uuid4()), "user_id": user_id})
        row.update(age=age, education_level=education_level)
        return dict(row)


class FakeLLM(LLMClient):
    """Streams the configured chunks; `error` is raised on open, `fail_after` mid-stream."""

    def __init__(self):
        self.chunks = ["Hello", ", ", "student", "!"]
        self.error: Exception | None = None
        self.fail_after: int | None = None
        self.requests = []

    async def stream(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self._fragments()

    async def _fragments(self):
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i == self.fail_after:
                raise RuntimeError("upstream connection reset")
            yield chunk


class FakeTranscriber:
    def __init__(self):
        self.transcript = "What is photosynthesis?"
        self.calls = []

    async def transcribe(self, audio, mime_type="audio/webm"):
        self.calls.append((audio, mime_type))
        return self.transcript


class FakeAuthGateway:
    def __init__(self):
        self.accounts: dict[str, str] = {}

    def _tokens(self, email):
        return {"access_token": f"access-{email}", "refresh_token": f"refresh-{email}", "token_type": "bearer"}

    def sign_up(self, email, password):
        self.accounts[email] = password
        return self._tokens(email)

    def sign_in(self, email, password):
        from fastapi import HTTPException

        if self.accounts.get(email) != password:
            raise HTTPException(status_code=401, detail="Invalid email or password")
        return self._tokens(email)

    def refresh(self, refresh_token):
        return {"access_token": "access-refreshed", "refresh_token": "refresh-rotated", "token_type": "bearer"}


def make_token(user_id: str, secret: str = JWT_SECRET, **claims) -> str:
    payload = {
        "sub": user_id,
        "email": f"{user_id}@example.com",
        "aud": "authenticated",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def collect_text(lines) -> tuple[str, bool]:
    """Reassemble a relayed reply from SSE lines. Returns (text, saw_done)."""
    text = ""
    for line in lines:
        if not line.startswith("data: "):
            continue
        data = line[len("data: "):]
        if data == "[DONE]":
            return text, True
        text += json.loads(data)["text"]
    return text, False


@pytest.fixture(autouse=True)
def word_token_counter(monkeypatch):
    """Keep tests offline: tiktoken downloads its vocabulary on first use."""
    monkeypatch.setattr("brainybot.llm.context.count_tokens", lambda text: len(text.split()))


@pytest.fixture
def settings():
    return Settings(
        SUPABASE_URL="https://example.supabase.co",
        SUPABASE_ANON_KEY="anon-key",
        SUPABASE_SERVICE_ROLE_KEY="service-key",
        SUPABASE_JWT_SECRET=JWT_SECRET,
        GOOGLE_AI_API_KEY="test-key",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def fake_transcriber():
    return FakeTranscriber()


@pytest.fixture
def services(settings, fake_db, fake_llm, fake_transcriber):
    return Services(
        settings=settings,
        conversations=FakeConversationRepository(fake_db),
        messages=FakeMessageRepository(fake_db),
        profiles=FakeProfileRepository(fake_db),
        llm=fake_llm,
        transcriber=fake_transcriber,
        image_decoder=SignatureImageDecoder(settings.MAX_IMAGE_BYTES),
        auth=FakeAuthGateway(),
    )


@pytest.fixture
def client(services):
    return TestClient(create_app(services))


@pytest.fixture
def user_id():
    return str(uuid.uuid4())


@pytest.fixture
def auth_header(user_id):
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
def other_auth_header():
    return {"Authorization": f"Bearer {make_token(str(uuid.uuid4()))}"}


@pytest.fixture
def token_factory():
    return make_token


@pytest.fixture
def png_data_url():
    return encode_data_url("image/png", PNG_BYTES)
