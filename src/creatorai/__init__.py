"""
creatorai: Gemini-backed assistant client for content creators.

Builds prompts with persona, history and context, calls the Gemini
generateContent endpoint with a hard timeout, and always answers with a
structured result, falling back to canned replies when a request fails.
"""

__version__ = "0.1.0"

from .config import Settings
from .errors import (
    ConfigurationError,
    ContractError,
    CreatorAIError,
    PersistenceError,
    RemoteError,
    RequestError,
    TransportError,
)
from .llm import (
    ChatAssistant,
    ChatFailure,
    ChatSuccess,
    ConnectionReport,
    GeminiClient,
    GenerationOptions,
    SimulatedAssistant,
    StatsSnapshot,
    create_assistant,
)
from .memory import (
    ConversationHistory,
    ConversationMessage,
    KeyValueStore,
    create_key_value_store,
)
from .preferences import Preferences, Theme

__all__ = [
    "Settings",
    "ConfigurationError",
    "ContractError",
    "CreatorAIError",
    "PersistenceError",
    "RemoteError",
    "RequestError",
    "TransportError",
    "ChatAssistant",
    "ChatFailure",
    "ChatSuccess",
    "ConnectionReport",
    "GeminiClient",
    "GenerationOptions",
    "SimulatedAssistant",
    "StatsSnapshot",
    "create_assistant",
    "ConversationHistory",
    "ConversationMessage",
    "KeyValueStore",
    "create_key_value_store",
    "Preferences",
    "Theme",
]
