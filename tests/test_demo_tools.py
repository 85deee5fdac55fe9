"""Tests for the local mock model and the command-line client."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest
import requests
from fastapi.testclient import TestClient

import translate_client
from demo_model.mock_model import ChatCompletionRequest, chat_completions
from demo_model.mock_model import app as mock_model_app
from translatepal.app.prompt import TranslationPrompt
from translatepal.app.schemas import TranslationRequest


@pytest.fixture
def mock_model() -> TestClient:
    return TestClient(mock_model_app)


def test_mock_model_answers_with_structured_translation(mock_model: TestClient) -> None:
    prompt = TranslationPrompt(endpoint="http://mock/v1/chat/completions", model="mock")
    payload = prompt.build_payload(
        TranslationRequest(text="Hello\nworld", source_language="English", target_language="French")
    )

    response = mock_model.post("/v1/chat/completions", json=payload)

    assert response.status_code == 200
    content = response.json()["choices"][0]["message"]["content"]
    assert json.loads(content) == {"translatedText": "[french] Hello\nworld"}


def test_mock_model_rejects_unknown_prompt(mock_model: TestClient) -> None:
    response = mock_model.post(
        "/v1/chat/completions",
        json={"model": "mock", "messages": [{"role": "user", "content": "Tell me a joke"}]},
    )

    assert response.status_code == 400


def test_prompt_round_trip_against_mock_model(monkeypatch: pytest.MonkeyPatch) -> None:
    """The prompt's request and response shapes line up with the mock model."""

    async def fake_post(self, url: str, json: dict[str, Any]):  # noqa: ANN001
        return httpx.Response(status_code=200, json=chat_completions(ChatCompletionRequest.model_validate(json)))

    monkeypatch.setattr(httpx.AsyncClient, "post", fake_post)
    prompt = TranslationPrompt(endpoint="http://mock/v1/chat/completions", model="mock")

    result = asyncio.run(
        prompt.translate(TranslationRequest(text="Hello", source_language="English", target_language="Spanish"))
    )

    assert result.translated_text == "[spanish] Hello"


class FakeResponse:
    def __init__(self, payload: Any) -> None:
        self.payload = payload

    def raise_for_status(self) -> None:
        return None

    def json(self) -> Any:
        return self.payload


def test_translate_client_prints_translation_and_swap(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    posted: list[dict[str, Any]] = []

    def fake_get(url: str, timeout: int) -> FakeResponse:
        assert url.endswith("/api/v1/languages")
        return FakeResponse([{"value": "English", "label": "English"}, {"value": "Spanish", "label": "Spanish"}])

    def fake_post(url: str, json: dict[str, Any], timeout: int) -> FakeResponse:
        assert url.endswith("/api/v1/translate")
        posted.append(json)
        return FakeResponse({"translatedText": "Hola" if json["targetLanguage"] == "Spanish" else "Hello"})

    monkeypatch.setattr(requests, "get", fake_get)
    monkeypatch.setattr(requests, "post", fake_post)

    translate_client.main(["Hello", "--swap"])

    assert posted == [
        {"text": "Hello", "sourceLanguage": "English", "targetLanguage": "Spanish"},
        {"text": "Hola", "sourceLanguage": "Spanish", "targetLanguage": "English"},
    ]
    out = capsys.readouterr().out
    assert "Languages: English, Spanish" in out
    assert "English -> Spanish: Hola" in out
    assert "Spanish -> English: Hello" in out
