"""Theme and authentication-token preferences.

Thin accessors over the key-value store. The token is only checked for
presence; it is never validated or refreshed.
"""

import logging
from collections.abc import Callable
from enum import Enum

from .errors import PersistenceError
from .memory.base import KeyValueStore

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
AUTH_TOKEN_KEY = "authToken"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Preferences:
    """User preferences persisted in a key-value store.

    Storage failures are logged, forwarded to the error callback and
    otherwise ignored: reads fall back to defaults, writes are dropped.
    """

    def __init__(
        self,
        store: KeyValueStore,
        error_callback: Callable[[PersistenceError], None] | None = None,
    ):
        self._store = store
        self._error_callback = error_callback

    def _get(self, key: str) -> str | None:
        try:
            return self._store.get(key)
        except Exception as e:
            self._report(e, "read", key)
            return None

    def _set(self, key: str, value: str) -> None:
        try:
            self._store.set(key, value)
        except Exception as e:
            self._report(e, "write", key)

    def _report(self, exc: Exception, operation: str, key: str) -> None:
        error = exc if isinstance(exc, PersistenceError) else PersistenceError(operation, key, exc)
        logger.warning("Preference persistence failed: %s", error)
        if self._error_callback:
            try:
                self._error_callback(error)
            except Exception:
                logger.exception("Preference error callback raised")

    @property
    def theme(self) -> Theme:
        """Current theme; unknown or missing values read as light."""
        stored = self._get(THEME_KEY)
        try:
            return Theme(stored)
        except ValueError:
            return Theme.LIGHT

    def set_theme(self, theme: Theme | str) -> Theme:
        selected = Theme(theme)
        self._set(THEME_KEY, selected.value)
        return selected

    def toggle_theme(self) -> Theme:
        """Switch between light and dark and persist the choice."""
        new_theme = Theme.DARK if self.theme == Theme.LIGHT else Theme.LIGHT
        return self.set_theme(new_theme)

    def auth_token(self) -> str | None:
        token = self._get(AUTH_TOKEN_KEY)
        return token or None

    def set_auth_token(self, token: str) -> None:
        self._set(AUTH_TOKEN_KEY, token)

    def clear_auth_token(self) -> None:
        try:
            self._store.remove(AUTH_TOKEN_KEY)
        except Exception as e:
            self._report(e, "remove", AUTH_TOKEN_KEY)

    def is_authenticated(self) -> bool:
        """Presence check only."""
        return self.auth_token() is not None
