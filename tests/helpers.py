"""Shared test helpers."""
import json

import httpx

from creatorai.memory import KeyValueStore

TEST_PREAMBLE = "You are a test assistant for content creators."


def gemini_body(text: str = "Here is a reply", tokens: int | None = 42) -> dict:
    """Build a successful generateContent response body."""
    body: dict = {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}
    if tokens is not None:
        body["usageMetadata"] = {"totalTokenCount": tokens}
    return body


def request_text(request: httpx.Request) -> str:
    """Return the assembled prompt sent in a captured request."""
    return json.loads(request.content)["contents"][0]["parts"][0]["text"]


class FailingStore(KeyValueStore):
    """Store whose every operation fails."""

    def __init__(self) -> None:
        self.calls = 0

    def get(self, key: str) -> str | None:
        self.calls += 1
        raise OSError("disk unavailable")

    def set(self, key: str, value: str) -> None:
        self.calls += 1
        raise OSError("disk unavailable")

    def remove(self, key: str) -> None:
        self.calls += 1
        raise OSError("disk unavailable")

    @property
    def backend_type(self) -> str:
        return "failing"
