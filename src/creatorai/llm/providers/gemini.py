"""Google Gemini client over the ``generateContent`` REST endpoint.

Reference: https://ai.google.dev/api/generate-content

Every request is a single POST bounded by a hard total timeout. Transport
failures, non-2xx statuses and malformed bodies are raised as RequestError
subclasses and turned into fallback results by ChatAssistant.send_message.
"""

import asyncio
import json
import logging
from typing import Any

import httpx

from ...errors import ConfigurationError, ContractError, RemoteError, TransportError
from ...memory.history import ConversationHistory
from ...memory.models import ConversationMessage
from ...prompts import get_persona_preamble
from ..base import ChatAssistant
from ..models import Generation, GenerationOptions

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT = 30.0


class GeminiClient(ChatAssistant):
    """Gemini request client.

    Hidden design decisions:
    - Prompt assembly (persona preamble, history transcript, context block)
    - Wire format of requests and responses
    - Timeout enforcement and error classification
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        defaults: GenerationOptions | None = None,
        history: ConversationHistory | None = None,
        max_history: int | None = None,
        preamble: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the Gemini client.

        Args:
            api_key: Google AI API key (required)
            model: Model identifier (gemini-2.5-flash, gemini-2.5-pro, ...)
            base_url: Models collection URL, without trailing slash
            timeout: Hard limit in seconds for one request
            defaults: Client-wide generation options
            history: Conversation history (a fresh in-memory one when omitted)
            max_history: Cap for the history created when ``history`` is omitted
                (default 20); passing both raises ValueError
            preamble: Persona preamble (the packaged persona prompt when omitted)
            http_client: Pre-configured httpx client; not closed by ``close``

        Raises:
            ConfigurationError: If the API key is missing or blank
            ValueError: If both ``history`` and ``max_history`` are given
        """
        if not api_key or not api_key.strip():
            raise ConfigurationError("Gemini client requires an API key")

        super().__init__(defaults=defaults, history=history, max_history=max_history)
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._preamble = preamble
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def model(self) -> str:
        """Get the model name."""
        return self._model

    @property
    def endpoint(self) -> str:
        """URL of the generateContent method (the key is sent as a query parameter)."""
        return f"{self._base_url}/{self._model}:generateContent"

    @property
    def timeout(self) -> float:
        return self._timeout

    def build_prompt(
        self,
        prompt: str,
        options: GenerationOptions,
        recent: list[ConversationMessage],
    ) -> str:
        """Assemble the text sent to the model.

        Sections, separated by blank lines: persona preamble, recent
        conversation (when given), additional context (when set), prompt.
        """
        sections = [self._preamble if self._preamble is not None else get_persona_preamble()]

        if recent:
            transcript = "\n".join(message.to_transcript_line() for message in recent)
            sections.append(f"Recent conversation:\n{transcript}")

        if options.context:
            sections.append(f"Additional context:\n{options.context}")

        sections.append(f"User: {prompt}")
        return "\n\n".join(sections)

    def build_payload(
        self,
        prompt: str,
        options: GenerationOptions,
        recent: list[ConversationMessage],
    ) -> dict[str, Any]:
        """Build the JSON request body."""
        return {
            "contents": [
                {"parts": [{"text": self.build_prompt(prompt, options, recent)}]}
            ],
            "generationConfig": options.to_generation_config(),
        }

    def _extract_content(self, body: Any) -> str:
        """Extract the first candidate's text, validating the response shape.

        Raises:
            ContractError: If candidates, content or text are missing
        """
        if not isinstance(body, dict):
            raise ContractError("Response body is not a JSON object")

        candidates = body.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            raise ContractError("Response contains no candidates")

        candidate = candidates[0]
        content = candidate.get("content") if isinstance(candidate, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts:
            raise ContractError("First candidate has no content parts")

        texts = [
            part["text"] for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        text = "".join(texts)
        if not text:
            raise ContractError("First candidate has no text")
        return text

    @staticmethod
    def _extract_tokens(body: dict[str, Any]) -> int:
        usage = body.get("usageMetadata")
        if not isinstance(usage, dict):
            return 0
        total = usage.get("totalTokenCount")
        if isinstance(total, bool) or not isinstance(total, int):
            return 0
        return total

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            return str(body["error"].get("message", body["error"]))
        return str(body)[:200]

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        # ASCII-escaped so lone surrogates in user text still serialize
        body = json.dumps(payload).encode("ascii")
        try:
            return await asyncio.wait_for(
                self._client.post(
                    self.endpoint,
                    params={"key": self._api_key},
                    content=body,
                    headers={"Content-Type": "application/json"},
                ),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise TransportError.timeout(self._timeout) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"Network error: {e}") from e

    async def _generate(
        self,
        prompt: str,
        options: GenerationOptions,
        recent: list[ConversationMessage],
    ) -> Generation:
        """Issue one generateContent call.

        Args:
            prompt: User prompt
            options: Resolved generation options
            recent: History entries for the transcript

        Returns:
            Generation with the first candidate's text and total token count
        """
        payload = self.build_payload(prompt, options, recent)
        logger.debug("POST %s (maxOutputTokens=%d)", self.endpoint, options.max_tokens)

        response = await self._post(payload)

        if not response.is_success:
            raise RemoteError(
                f"Gemini API returned HTTP {response.status_code}: {self._error_detail(response)}",
                response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ContractError("Response body is not valid JSON") from e

        text = self._extract_content(body)
        return Generation(text=text, tokens=self._extract_tokens(body))

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
