"""Capped conversation history with best-effort persistence.

The in-memory list is the source of truth. Every mutation is mirrored to an
optional key-value store as a whole-list overwrite; storage failures are
reported through the error channel and never change the in-memory result.
"""

import logging
from collections.abc import Callable, Iterator

from pydantic import ValidationError

from ..errors import PersistenceError
from .base import KeyValueStore
from .models import ConversationMessage, MessageList, MessageRole

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "gemini_chat_history"

ErrorCallback = Callable[[PersistenceError], None]


class ConversationHistory:
    """Ordered user/assistant turns, oldest evicted first beyond ``max_history``."""

    def __init__(
        self,
        max_history: int = 20,
        store: KeyValueStore | None = None,
        storage_key: str = DEFAULT_HISTORY_KEY,
        error_callback: ErrorCallback | None = None,
    ):
        if max_history < 1:
            raise ValueError(f"max_history must be at least 1, got {max_history}")
        self._max_history = max_history
        self._store = store
        self._storage_key = storage_key
        self._error_callback = error_callback
        self._messages: list[ConversationMessage] = []

    def set_error_callback(self, callback: ErrorCallback | None) -> None:
        """Set the callback that receives persistence failures.

        Args:
            callback: Function called with each PersistenceError, or None
        """
        self._error_callback = callback

    @property
    def max_history(self) -> int:
        return self._max_history

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def messages(self) -> list[ConversationMessage]:
        """Copy of the current history, oldest first."""
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ConversationMessage]:
        return iter(list(self._messages))

    def recent(self, limit: int) -> list[ConversationMessage]:
        """Return up to ``limit`` most recent messages, oldest first."""
        if limit <= 0:
            return []
        return self._messages[-limit:]

    def add(self, role: MessageRole | str, content: str) -> ConversationMessage:
        """Append a new timestamped message and enforce the cap.

        Args:
            role: "user" or "assistant"
            content: Message text

        Returns:
            The created message
        """
        message = ConversationMessage(role=MessageRole(role), content=content)
        self.append(message)
        return message

    def append(self, *messages: ConversationMessage) -> None:
        """Append already-built messages as one mutation (persisted once)."""
        self._messages.extend(messages)
        overflow = len(self._messages) - self._max_history
        if overflow > 0:
            del self._messages[:overflow]
        self._persist()

    def load(self) -> list[ConversationMessage]:
        """Restore the most recent ``max_history`` messages from the store.

        Missing or malformed stored data is treated as absent and leaves the
        in-memory history untouched.

        Returns:
            The history after loading
        """
        if self._store is None:
            return self.messages

        try:
            raw = self._store.get(self._storage_key)
        except Exception as e:
            self._report(e, "read")
            return self.messages

        if raw is None:
            return self.messages

        try:
            restored = MessageList.validate_json(raw)
        except ValidationError:
            logger.debug("Discarding malformed history stored under %r", self._storage_key)
            return self.messages

        self._messages = restored[-self._max_history:]
        return self.messages

    def clear(self) -> None:
        """Empty the history and remove the stored copy."""
        self._messages = []
        if self._store is None:
            return
        try:
            self._store.remove(self._storage_key)
        except Exception as e:
            self._report(e, "remove")

    def _persist(self) -> None:
        if self._store is None:
            return
        try:
            self._store.set(self._storage_key, MessageList.dump_json(self._messages).decode("utf-8"))
        except Exception as e:
            self._report(e, "write")

    def _report(self, exc: Exception, operation: str) -> None:
        """Log a persistence failure once and forward it to the callback."""
        error = exc if isinstance(exc, PersistenceError) else PersistenceError(
            operation, self._storage_key, exc
        )
        logger.warning("History persistence failed: %s", error)
        if self._error_callback:
            try:
                self._error_callback(error)
            except Exception:
                logger.exception("History error callback raised")
