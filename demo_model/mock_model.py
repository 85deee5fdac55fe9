import json
import re
from typing import Any

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field

app = FastAPI(title="MockTranslationModel", version="0.1.0")

PROMPT_PATTERN = re.compile(
    r"^Translate the following text from (?P<source>.+?) to (?P<target>.+?):\n\n(?P<text>.*)$",
    re.DOTALL,
)


class ChatMessage(BaseModel):
    role: str
    content: str


class ChatCompletionRequest(BaseModel):
    model: str
    messages: list[ChatMessage] = Field(..., min_length=1)
    response_format: dict[str, Any] | None = None


@app.post("/v1/chat/completions")
def chat_completions(payload: ChatCompletionRequest) -> dict[str, Any]:
    match = PROMPT_PATTERN.match(payload.messages[-1].content)
    if not match:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unrecognised prompt.")

    translated = f"[{match['target'].lower()}] {match['text']}"
    return {
        "id": "mock-completion",
        "object": "chat.completion",
        "model": payload.model,
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {
                    "role": "assistant",
                    "content": json.dumps({"translatedText": translated}),
                },
            }
        ],
    }
