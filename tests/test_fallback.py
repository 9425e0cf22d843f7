"""Unit tests for fallback reply selection."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from creatorai.llm import FALLBACK_RESPONSES, GENERIC_FALLBACK_RESPONSE, fallback_response

REPLIES = dict(FALLBACK_RESPONSES)


class TestFallbackTable:
    """Tests for the keyword table itself."""

    def test_table_order(self):
        """Test the keywords are checked in their documented order."""
        assert [keyword for keyword, _ in FALLBACK_RESPONSES] == [
            "idea", "script", "analysis", "design", "broadcast",
        ]

    def test_replies_are_distinct(self):
        replies = [reply for _, reply in FALLBACK_RESPONSES]
        assert len(set(replies)) == len(replies)
        assert GENERIC_FALLBACK_RESPONSE not in replies


class TestFallbackResponse:
    """Tests for fallback_response."""

    @pytest.mark.parametrize("keyword", [k for k, _ in FALLBACK_RESPONSES])
    def test_each_keyword(self, keyword):
        assert fallback_response(f"please help with {keyword} work") == REPLIES[keyword]

    def test_case_insensitive(self):
        assert fallback_response("NEED A VIDEO IDEA") == REPLIES["idea"]

    def test_substring_match(self):
        """Test keywords match inside longer words."""
        assert fallback_response("some ideas please") == REPLIES["idea"]
        assert fallback_response("my designer is away") == REPLIES["design"]

    def test_first_match_wins(self):
        """Test table order, not prompt order, decides between keywords."""
        assert fallback_response("broadcast design analysis script idea") == REPLIES["idea"]
        assert fallback_response("broadcast then design") == REPLIES["design"]

    def test_no_match(self):
        assert fallback_response("what's the weather like?") == GENERIC_FALLBACK_RESPONSE

    def test_empty_prompt(self):
        assert fallback_response("") == GENERIC_FALLBACK_RESPONSE

    def test_custom_table(self):
        table = (("b", "second"), ("a", "first"))
        assert fallback_response("a b", table, "none") == "second"
        assert fallback_response("zzz", table, "none") == "none"

    @given(st.text(), st.text())
    def test_idea_always_wins(self, prefix: str, suffix: str):
        """Property test: any prompt containing 'idea' gets the idea reply."""
        assert fallback_response(f"{prefix}idea{suffix}") == REPLIES["idea"]

    @given(st.text(alphabet="0123456789 .,!?-"))
    def test_keywordless_prompts_get_generic(self, prompt: str):
        """Property test: prompts without keywords get the generic reply."""
        assert fallback_response(prompt) == GENERIC_FALLBACK_RESPONSE
