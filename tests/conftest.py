"""
Shared fixtures: completion-client doubles so no test talks to Groq.
"""
import os

# Tracing off before any module applies @opik.track
os.environ.setdefault("OPIK_TRACK_DISABLE", "true")

import pytest

from tutor_agents.agents.tutor_agent import build_tutor


class FakeClient:
    """Returns a canned reply and records every prompt."""

    def __init__(self, reply: str = "model answer"):
        self.reply = reply
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


class FailingClient:
    """Raises on every call, like an unreachable or rate-limited service."""

    def __init__(self, error: Exception = None):
        self.error = error or RuntimeError("service unavailable")
        self.calls = 0

    def complete(self, prompt: str) -> str:
        self.calls += 1
        raise self.error


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def failing_client() -> FailingClient:
    return FailingClient()


@pytest.fixture
def tutor(fake_client):
    return build_tutor(fake_client)
