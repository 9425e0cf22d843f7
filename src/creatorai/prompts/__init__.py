"""Persona preamble shipped with the package.

The text lives in ``persona.txt`` so it can be edited without touching the
request code. ``GeminiClient(preamble=...)`` replaces it per client.
"""

from functools import cache
from importlib.resources import files

PERSONA_RESOURCE = "persona.txt"


@cache
def get_persona_preamble() -> str:
    """Role text that opens every Gemini request, read once per process."""
    return files(__package__).joinpath(PERSONA_RESOURCE).read_text(encoding="utf-8").strip()


__all__ = ["PERSONA_RESOURCE", "get_persona_preamble"]
