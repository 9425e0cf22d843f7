"""Local assistant that answers from canned responses.

Useful for demos and offline use: it shares the ChatAssistant contract
(history, statistics, result types) but never touches the network.
"""

import asyncio

from ...memory.history import ConversationHistory
from ...memory.models import ConversationMessage
from ..base import ChatAssistant
from ..fallback import fallback_response
from ..models import Generation, GenerationOptions

SIMULATED_RESPONSES: tuple[tuple[str, str], ...] = (
    (
        "hello",
        "Hi there! I'm the studio helper. Ask me about titles, thumbnails, "
        "upload schedules or collaborations.",
    ),
    (
        "title",
        "Strong titles promise one clear benefit, stay under 60 characters and put "
        "the key phrase first. Try writing ten variations and keep the best two.",
    ),
    (
        "thumbnail",
        "Thumbnails work best with one focal point, a readable three-word caption "
        "and colors that contrast with the platform's background.",
    ),
    (
        "schedule",
        "Consistency beats volume: pick upload days you can sustain for three months "
        "and announce them on your channel banner.",
    ),
    (
        "collab",
        "For collaborations, reach out to creators of a similar size with an "
        "audience that overlaps yours, and pitch a concrete episode idea.",
    ),
)

SIMULATED_DEFAULT_RESPONSE = (
    "I'm running in offline mode with a limited set of answers. "
    "Try asking about titles, thumbnails, schedules or collaborations."
)


class SimulatedAssistant(ChatAssistant):
    """Canned-response assistant.

    Replies are chosen by first keyword match over SIMULATED_RESPONSES,
    after an optional delay that imitates network latency.
    """

    def __init__(
        self,
        *,
        delay: float = 0.0,
        defaults: GenerationOptions | None = None,
        history: ConversationHistory | None = None,
        max_history: int | None = None,
    ):
        super().__init__(defaults=defaults, history=history, max_history=max_history)
        self._delay = delay

    @property
    def model(self) -> str:
        return "simulated"

    async def _generate(
        self,
        prompt: str,
        options: GenerationOptions,
        recent: list[ConversationMessage],
    ) -> Generation:
        if self._delay > 0:
            await asyncio.sleep(self._delay)

        text = fallback_response(prompt, SIMULATED_RESPONSES, SIMULATED_DEFAULT_RESPONSE)
        return Generation(text=text, tokens=len(text.split()))

    async def close(self) -> None:
        """Nothing to release."""
        pass
