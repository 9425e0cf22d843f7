import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any
from uuid import uuid4

from ..errors import RequestError
from ..memory.history import ConversationHistory
from ..memory.models import ConversationMessage, MessageRole, utc_now
from .fallback import fallback_response
from .models import (
    ChatFailure,
    ChatResult,
    ChatSuccess,
    ConnectionReport,
    ErrorInfo,
    Generation,
    GenerationOptions,
    RequestStats,
    StatsSnapshot,
)

logger = logging.getLogger(__name__)

# Options used by the connectivity probe
PROBE_PROMPT = "Hello"
PROBE_OPTIONS = GenerationOptions(max_tokens=10, temperature=0.1, use_history=False)


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:16]}"


class ChatAssistant(ABC):
    """Abstract base class for chat assistants.

    This module hides the design decision of where replies come from.
    Subclasses only implement ``_generate``; the base class owns:
    - Option resolution against client defaults
    - The single-slot in-flight guard (overlapping calls are queued)
    - Request statistics
    - Conversation history (appended only for successful turns)
    - Conversion of request errors into fallback results

    Supports async context manager protocol for proper resource cleanup:
        async with assistant:
            result = await assistant.send_message("Give me a video idea")
        # Automatically cleaned up
    """

    # Number of history entries folded into each prompt
    HISTORY_TRANSCRIPT_LIMIT = 5

    def __init__(
        self,
        *,
        defaults: GenerationOptions | None = None,
        history: ConversationHistory | None = None,
        max_history: int | None = None,
    ):
        self._defaults = defaults or GenerationOptions()
        if history is not None and max_history is not None:
            raise ValueError("Pass either history or max_history, not both")
        self._history = history if history is not None else ConversationHistory(
            max_history=20 if max_history is None else max_history
        )
        self._stats = RequestStats()
        self._lock = asyncio.Lock()

    @property
    @abstractmethod
    def model(self) -> str:
        """Identifier of the model (or generator) producing replies."""

    @abstractmethod
    async def _generate(
        self,
        prompt: str,
        options: GenerationOptions,
        recent: list[ConversationMessage],
    ) -> Generation:
        """Produce a reply for one prompt.

        Args:
            prompt: The user prompt, unmodified
            options: Fully resolved generation options
            recent: History entries to fold into the prompt (empty when disabled)

        Returns:
            Generation with reply text and token count

        Raises:
            RequestError: Any recoverable failure (transport, remote, contract)
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    @property
    def defaults(self) -> GenerationOptions:
        return self._defaults

    @property
    def history(self) -> list[ConversationMessage]:
        """Copy of the conversation history, oldest first."""
        return self._history.messages

    @property
    def conversation(self) -> ConversationHistory:
        return self._history

    @property
    def in_flight(self) -> bool:
        """Whether a request currently holds the in-flight slot."""
        return self._lock.locked()

    def fallback_for(self, prompt: str) -> str:
        """Reply returned in place of a completion when a request fails."""
        return fallback_response(prompt)

    async def send_message(
        self,
        prompt: str,
        options: GenerationOptions | None = None,
    ) -> ChatResult:
        """Send a prompt and return a structured success or failure result.

        No error from the backend propagates: request errors, and anything
        unexpected (reported with kind "internal"), are counted, logged and
        turned into a ChatFailure carrying a fallback reply. Overlapping calls wait
        for the in-flight slot, so history and stats follow call order.

        Args:
            prompt: User prompt (sent as-is, no validation)
            options: Per-call overrides layered over the client defaults

        Returns:
            ChatSuccess or ChatFailure
        """
        resolved = self._defaults.resolve(options)

        async with self._lock:
            self._stats.last_request_time = utc_now()
            try:
                user_message = ConversationMessage(role=MessageRole.USER, content=prompt)
                recent = self._history.recent(self.HISTORY_TRANSCRIPT_LIMIT) if resolved.use_history else []
                logger.debug("Sending request to %s (%d history entries)", self.model, len(recent))
                generation = await self._generate(prompt, resolved, recent)
            except RequestError as e:
                logger.warning("Request to %s failed (%s/%s): %s", self.model, e.kind, e.code, e)
                return self._failure(prompt, ErrorInfo(message=e.message, kind=e.kind, code=e.code))
            except Exception as e:
                logger.exception("Unexpected error during request to %s", self.model)
                return self._failure(
                    prompt,
                    ErrorInfo(message=f"Unexpected error: {e}", kind="internal", code="INTERNAL_ERROR"),
                )

            self._stats.record_success(generation.tokens)
            self._history.append(
                user_message,
                ConversationMessage(role=MessageRole.ASSISTANT, content=generation.text),
            )
            return ChatSuccess(
                message=generation.text,
                tokens=generation.tokens,
                request_id=new_id("req"),
                stats=self._stats.snapshot(),
            )

    def _failure(self, prompt: str, error: ErrorInfo) -> ChatFailure:
        self._stats.record_failure()
        return ChatFailure(
            message=self.fallback_for(prompt),
            error=error,
            error_id=new_id("err"),
            stats=self._stats.snapshot(),
        )

    def add_to_history(self, role: MessageRole | str, content: str) -> ConversationMessage:
        """Append a message to the history outside of a request."""
        return self._history.add(role, content)

    def load_history(self) -> list[ConversationMessage]:
        """Restore history from the persistence store, if any."""
        return self._history.load()

    def clear_history(self) -> None:
        """Empty the history and its persisted copy."""
        self._history.clear()

    def get_stats(self) -> StatsSnapshot:
        """Return counters plus freshly derived average_tokens and success_rate."""
        return self._stats.snapshot()

    def reset_stats(self) -> None:
        """Start counting from zero again."""
        self._stats = RequestStats()

    async def test_connection(self) -> ConnectionReport:
        """Probe connectivity with a minimal, history-free request.

        Returns:
            ConnectionReport with the success flag and round-trip latency
        """
        started = time.perf_counter()
        result = await self.send_message(PROBE_PROMPT, PROBE_OPTIONS)
        latency_ms = (time.perf_counter() - started) * 1000

        return ConnectionReport(
            connected=result.success,
            model=self.model,
            latency_ms=round(latency_ms, 2),
            response=result.message,
            error=None if isinstance(result, ChatSuccess) else result.error,
        )

    async def __aenter__(self) -> "ChatAssistant":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
