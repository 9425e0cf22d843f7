"""Client configuration.

Settings are a typed model with explicit defaults, read once from the
environment by the embedding application and passed to the factories.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError
from .llm.providers.gemini import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT
from .memory.history import DEFAULT_HISTORY_KEY


class Settings(BaseModel):
    """Application configuration values derived from environment variables."""

    api_key: str | None = Field(default=None, description="Gemini API key")
    model: str = Field(default=DEFAULT_MODEL, description="Gemini model identifier")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Models collection URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    max_history: int = Field(default=20, ge=1, description="Maximum stored conversation messages")
    store_path: Path = Field(
        default=Path("~/.creatorai/store.json"),
        description="JSON file backing the key-value store",
    )
    history_key: str = Field(default=DEFAULT_HISTORY_KEY, description="Store key for the history")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Environment variables:
            GEMINI_API_KEY: Gemini API key
            GEMINI_MODEL: Model (default: gemini-2.5-flash)
            GEMINI_BASE_URL: Models collection URL
            GEMINI_TIMEOUT: Request timeout in seconds (default: 30)
            CREATORAI_MAX_HISTORY: History cap (default: 20)
            CREATORAI_STORE_PATH: Store file (default: ~/.creatorai/store.json)
            CREATORAI_HISTORY_KEY: Store key for the history

        Raises:
            ConfigurationError: If a value cannot be parsed
        """
        env = os.environ if environ is None else environ
        mapping = {
            "api_key": "GEMINI_API_KEY",
            "model": "GEMINI_MODEL",
            "base_url": "GEMINI_BASE_URL",
            "timeout": "GEMINI_TIMEOUT",
            "max_history": "CREATORAI_MAX_HISTORY",
            "store_path": "CREATORAI_STORE_PATH",
            "history_key": "CREATORAI_HISTORY_KEY",
        }
        values = {field: env[var] for field, var in mapping.items() if env.get(var)}

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def require_api_key(self) -> str:
        """Return the configured API key, raising if it is missing."""
        if not self.api_key:
            raise ConfigurationError(
                "Missing GEMINI_API_KEY environment variable. "
                "Set it before starting the application."
            )
        return self.api_key
