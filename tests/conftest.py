"""Pytest configuration and shared fixtures."""
import os

import httpx
import pytest

from creatorai.llm import GeminiClient
from creatorai.memory import InMemoryKeyValueStore

from .helpers import TEST_PREAMBLE, FailingStore, gemini_body


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {"gemini": os.getenv("GEMINI_API_KEY")}


@pytest.fixture
def store():
    """Return an empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def make_client():
    """Factory for Gemini clients backed by an httpx MockTransport.

    The handler receives each httpx.Request and returns an httpx.Response
    (it may be async, and may raise httpx errors).
    """
    def _make(handler, **kwargs) -> GeminiClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        kwargs.setdefault("preamble", TEST_PREAMBLE)
        return GeminiClient(api_key="test-key", http_client=http_client, **kwargs)

    return _make


@pytest.fixture
def captured():
    """List collecting the requests seen by a mock handler."""
    return []


@pytest.fixture
def ok_handler(captured):
    """Handler answering every request successfully with a numbered reply."""
    def _handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=gemini_body(f"reply {len(captured)}"))

    return _handler
