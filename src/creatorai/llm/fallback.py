"""Canned replies used when a generation request fails.

The table is an ordered tuple: the first keyword found in the prompt wins,
regardless of how many later keywords also appear.
"""

FALLBACK_RESPONSES: tuple[tuple[str, str], ...] = (
    (
        "idea",
        "Here are a few directions to get you started while the assistant is unavailable:\n"
        "1. Turn a common question from your audience into a short explainer.\n"
        "2. Document a behind-the-scenes look at how you make your content.\n"
        "3. Start a recurring series around a theme your viewers already enjoy.\n"
        "Pick one and sketch three possible titles for it.",
    ),
    (
        "script",
        "A reliable script structure to work from:\n"
        "- Hook (first 5 seconds): a question or bold statement.\n"
        "- Intro: who you are and what the viewer will get.\n"
        "- Body: three key points, each with an example.\n"
        "- Call to action: ask for a comment, like or subscription.\n"
        "- Outro: tease the next episode.",
    ),
    (
        "analysis",
        "When reviewing performance, start with these numbers:\n"
        "- Click-through rate of thumbnails and titles.\n"
        "- Average view duration and where viewers drop off.\n"
        "- Returning versus new viewers.\n"
        "Compare your last five uploads to spot which topics hold attention longest.",
    ),
    (
        "design",
        "Design checklist for thumbnails and channel art:\n"
        "- Use at most three high-contrast colors.\n"
        "- Keep text under five words and readable at small sizes.\n"
        "- Show a clear face or focal object.\n"
        "- Keep the style consistent across uploads so your work is recognizable.",
    ),
    (
        "broadcast",
        "Before going live, check that:\n"
        "- Audio levels are tested and the microphone is not clipping.\n"
        "- The stream title and schedule were announced in advance.\n"
        "- A moderator is ready for chat.\n"
        "- You have a loose run sheet with segments and timings.",
    ),
)

GENERIC_FALLBACK_RESPONSE = (
    "Sorry, I couldn't reach the assistant just now. "
    "Could you be more specific about what you need? For example, ask for video "
    "ideas, a script outline, a channel analysis, design tips or broadcast preparation."
)


def fallback_response(
    prompt: str,
    table: tuple[tuple[str, str], ...] = FALLBACK_RESPONSES,
    default: str = GENERIC_FALLBACK_RESPONSE,
) -> str:
    """Pick the canned reply for a failed request.

    Args:
        prompt: The original user prompt
        table: Ordered (keyword, reply) pairs
        default: Reply used when no keyword matches

    Returns:
        Reply of the first keyword contained in the prompt (case-insensitive)
    """
    lowered = prompt.lower()
    for keyword, reply in table:
        if keyword.lower() in lowered:
            return reply
    return default
