"""Conversation memory module for creatorai.

Provides key-value persistence and the capped conversation history.
"""

from .base import KeyValueStore
from .factory import create_key_value_store
from .file import JsonFileKeyValueStore
from .history import DEFAULT_HISTORY_KEY, ConversationHistory
from .in_memory import InMemoryKeyValueStore
from .models import ConversationMessage, MessageRole

__all__ = [
    "DEFAULT_HISTORY_KEY",
    "ConversationHistory",
    "ConversationMessage",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MessageRole",
    "create_key_value_store",
]
