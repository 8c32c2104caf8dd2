"""
Shared fixtures for the StudyPath backend tests.

Provides fake relay connections, fake AI collaborators and a FastAPI
TestClient whose app state is wired to those fakes.
"""

import copy
import json

import pytest
from fastapi.testclient import TestClient

from services.relay.connection import RelayConnection
from services.relay.session_relay import SessionRelay


class FakeConnection(RelayConnection):
    """Relay connection that records every delivered frame."""

    def __init__(self, channel_open=True):
        super().__init__()
        self.channel_open = channel_open
        self.frames = []

    def _channel_open(self):
        return self.channel_open

    async def _transmit(self, text):
        self.frames.append(json.loads(text))
        return True


class FakeReplyGenerator:
    """Stand-in for ReplyGenerator that answers deterministically."""

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    async def generate(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return f"Reply to: {text}"


class FakeGuidanceClient:
    """Stand-in for GuidanceClient returning a fixed JSON object."""

    def __init__(self, response=None, error=None):
        self.response = response or {}
        self.error = error
        self.prompts = []

    async def request_json(self, prompt, client=None):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.response)


@pytest.fixture
def make_connection():
    return FakeConnection


@pytest.fixture
def database_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_DIR", str(tmp_path / "db"))
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    return tmp_path / "db"


@pytest.fixture
def app(database_env):
    from main import create_app

    return create_app()


@pytest.fixture
def client(app):
    """TestClient with the AI collaborators replaced by fakes after startup."""
    with TestClient(app) as test_client:
        app.state.reply_generator = FakeReplyGenerator()
        app.state.guidance_client = FakeGuidanceClient()
        app.state.chat_relay = SessionRelay(app.state.reply_generator.generate, reply_timeout=5)
        yield test_client
