"""Translation prompt sent to an OpenAI-compatible chat-completions endpoint.

- ``build_prompt`` renders the instruction for one request.
- ``TranslationPrompt.translate`` issues exactly one call and returns the
  model's structured answer, or raises ``RemoteCallError``.
"""

import logging
from time import perf_counter
from typing import Any, Protocol

import httpx
from pydantic import BaseModel, Field, ValidationError

from .schemas import TranslationRequest, TranslationResult
from .settings import Settings

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = "Translate the following text from {source} to {target}:\n\n{text}"
OUTPUT_SCHEMA_NAME = "translateTextOutput"


class RemoteCallError(Exception):
    """The model call failed or its answer did not match the output schema."""


class TranslationAnswer(BaseModel):
    """The model's answer, accepted only in the exact shape of the declared schema."""

    translated_text: str = Field(..., alias="translatedText", description="The translated text.")

    model_config = {"extra": "forbid", "strict": True}


class Translator(Protocol):
    async def translate(self, request: TranslationRequest) -> TranslationResult:
        ...


def build_prompt(request: TranslationRequest) -> str:
    return PROMPT_TEMPLATE.format(
        source=request.source_language,
        target=request.target_language,
        text=request.text,
    )


def output_schema() -> dict[str, Any]:
    return TranslationAnswer.model_json_schema(by_alias=True)


def _message_content(body: Any) -> str:
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise RemoteCallError("Model response has no message content.") from exc
    if not isinstance(content, str):
        raise RemoteCallError("Model response has no message content.")
    return content


class TranslationPrompt:
    def __init__(
        self,
        endpoint: str,
        model: str,
        api_key: str | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self.endpoint = endpoint
        self.model = model
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "TranslationPrompt":
        return cls(
            endpoint=settings.model_url,
            model=settings.model,
            api_key=settings.api_key,
            timeout_seconds=settings.timeout_seconds,
        )

    def headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def build_payload(self, request: TranslationRequest) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": build_prompt(request)}],
            "response_format": {
                "type": "json_schema",
                "json_schema": {
                    "name": OUTPUT_SCHEMA_NAME,
                    "strict": True,
                    "schema": output_schema(),
                },
            },
        }

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        payload = self.build_payload(request)
        started = perf_counter()

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, headers=self.headers()) as client:
                response = await client.post(self.endpoint, json=payload)
        except httpx.TimeoutException as exc:
            raise RemoteCallError("Model call timed out.") from exc
        except httpx.RequestError as exc:
            raise RemoteCallError("Failed to reach model endpoint.") from exc
        latency_ms = (perf_counter() - started) * 1000

        if response.status_code >= 400:
            raise RemoteCallError(f"Model returned HTTP {response.status_code}.")

        try:
            body = response.json()
        except ValueError as exc:
            raise RemoteCallError("Model returned a non-JSON response.") from exc

        content = _message_content(body)
        try:
            answer = TranslationAnswer.model_validate_json(content)
        except ValidationError as exc:
            raise RemoteCallError("Model output does not match the translation schema.") from exc

        logger.info(
            "Translated %d chars %s -> %s in %.0f ms",
            len(request.text),
            request.source_language,
            request.target_language,
            latency_ms,
        )
        return TranslationResult(translated_text=answer.translated_text)
