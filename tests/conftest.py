"""Shared fixtures for TranslatePal API tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from translatepal.app import main as app_main
from translatepal.app.dependencies import get_prompt
from translatepal.app.rate_limit import InMemoryRateLimiter
from translatepal.app.schemas import TranslationRequest, TranslationResult


class FakePrompt:
    """Stand-in for the model call that replays queued outcomes in order."""

    def __init__(self, *outcomes: str | Exception) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[TranslationRequest] = []

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        self.calls.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return TranslationResult(translated_text=outcome)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer settings out of the test run."""
    monkeypatch.setattr(app_main, "load_dotenv", lambda: False)
    for name in (
        "TRANSLATEPAL_MODEL_URL",
        "TRANSLATEPAL_MODEL",
        "TRANSLATEPAL_API_KEY",
        "TRANSLATEPAL_TIMEOUT_SECONDS",
        "TRANSLATEPAL_FORM_TTL_SECONDS",
        "TRANSLATEPAL_MAX_FORMS",
        "TRANSLATEPAL_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_prompt() -> FakePrompt:
    return FakePrompt()


@pytest.fixture
def client(fake_prompt: FakePrompt, monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """App client with the model call replaced and a fresh rate limiter."""
    monkeypatch.setattr(
        "translatepal.app.rate_limit.rate_limiter",
        InMemoryRateLimiter(max_requests=1000, window_seconds=60),
    )

    app_main.app.dependency_overrides[get_prompt] = lambda: fake_prompt
    try:
        with TestClient(app_main.app) as test_client:
            yield test_client
    finally:
        app_main.app.dependency_overrides.clear()
