from .gemini import GeminiClient
from .simulated import SimulatedAssistant

__all__ = ["GeminiClient", "SimulatedAssistant"]
