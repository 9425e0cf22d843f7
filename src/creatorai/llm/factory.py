from typing import Any

from ..errors import ConfigurationError
from .base import ChatAssistant
from .providers import GeminiClient, SimulatedAssistant


def create_assistant(kind: str, **config: Any) -> ChatAssistant:
    """Create a chat assistant instance.

    This factory function hides the instantiation logic for different backends.

    Args:
        kind: Assistant type ('gemini', 'simulated')
        **config: Backend-specific configuration
            For Gemini:
                - api_key: str (required)
                - model: str (default: 'gemini-2.5-flash')
                - base_url: str
                - timeout: float (default: 30.0)
                - defaults, history, max_history, preamble, http_client
            For simulated:
                - delay: float (default: 0.0)
                - defaults, history, max_history

    Returns:
        Initialized assistant instance

    Raises:
        ValueError: If assistant type is not supported
        ConfigurationError: If required configuration is missing

    Examples:
        >>> assistant = create_assistant(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-2.5-flash"
        ... )

        >>> assistant = create_assistant("simulated", delay=0.5)
    """
    kind_lower = kind.lower()

    if kind_lower == "gemini":
        if not config.get("api_key"):
            raise ConfigurationError("Gemini assistant requires 'api_key' in config")
        return GeminiClient(**config)

    if kind_lower == "simulated":
        return SimulatedAssistant(**config)

    raise ValueError(
        f"Unsupported assistant: {kind}. "
        f"Supported assistants: 'gemini', 'simulated'"
    )
