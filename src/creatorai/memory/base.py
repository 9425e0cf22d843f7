"""Abstract base class for key-value persistence backends.

This module defines the storage surface used for conversation history,
theme and token preferences. The abstraction hides:
- Storage format (dict, JSON file, ...)
- Persistence mechanism (process memory, local file)

All operations are synchronous. Implementations raise
``PersistenceError`` when the underlying medium fails.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract string-to-string store (the localStorage-style surface)."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, overwriting any previous one."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Removing a missing key is not an error."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
