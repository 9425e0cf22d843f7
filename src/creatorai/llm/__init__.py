from .base import ChatAssistant
from .factory import create_assistant
from .fallback import FALLBACK_RESPONSES, GENERIC_FALLBACK_RESPONSE, fallback_response
from .models import (
    ChatFailure,
    ChatResult,
    ChatSuccess,
    ConnectionReport,
    ErrorInfo,
    GenerationOptions,
    RequestStats,
    StatsSnapshot,
)
from .providers import GeminiClient, SimulatedAssistant

__all__ = [
    "ChatAssistant",
    "create_assistant",
    "FALLBACK_RESPONSES",
    "GENERIC_FALLBACK_RESPONSE",
    "fallback_response",
    "ChatFailure",
    "ChatResult",
    "ChatSuccess",
    "ConnectionReport",
    "ErrorInfo",
    "GenerationOptions",
    "RequestStats",
    "StatsSnapshot",
    "GeminiClient",
    "SimulatedAssistant",
]
