"""Unit tests for generation options and request statistics."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from creatorai.llm import GenerationOptions, RequestStats


class TestGenerationOptions:
    """Tests for GenerationOptions."""

    def test_defaults(self):
        """Test that every option has its documented default."""
        options = GenerationOptions()

        assert options.temperature == 0.7
        assert options.top_k == 40
        assert options.top_p == 0.95
        assert options.max_tokens == 2048
        assert options.use_history is True
        assert options.context is None

    def test_resolve_without_overrides(self):
        defaults = GenerationOptions(temperature=0.3)
        assert defaults.resolve(None) is defaults

    def test_resolve_only_explicit_fields(self):
        """Test that fields left at their default do not clobber client defaults."""
        defaults = GenerationOptions(temperature=0.3, max_tokens=512)
        overrides = GenerationOptions(use_history=False)

        resolved = defaults.resolve(overrides)

        assert resolved.temperature == 0.3
        assert resolved.max_tokens == 512
        assert resolved.use_history is False

    def test_explicit_default_value_still_overrides(self):
        """Test that explicitly passing the default value wins over client defaults."""
        defaults = GenerationOptions(temperature=0.3)
        resolved = defaults.resolve(GenerationOptions(temperature=0.7))
        assert resolved.temperature == 0.7

    def test_generation_config_wire_names(self):
        options = GenerationOptions(temperature=1.0, top_k=10, top_p=0.5, max_tokens=100)
        assert options.to_generation_config() == {
            "temperature": 1.0,
            "topK": 10,
            "topP": 0.5,
            "maxOutputTokens": 100,
        }

    @pytest.mark.parametrize("field,value", [
        ("temperature", -0.1),
        ("temperature", 2.5),
        ("top_k", 0),
        ("top_p", 1.5),
        ("max_tokens", 0),
    ])
    def test_out_of_range_values_fail(self, field, value):
        """Test that invalid sampling values fail validation."""
        with pytest.raises(ValueError):
            GenerationOptions(**{field: value})

    def test_options_are_frozen(self):
        options = GenerationOptions()
        with pytest.raises(ValueError):
            options.temperature = 1.0  # type: ignore[misc]


class TestRequestStats:
    """Tests for RequestStats and its derived metrics."""

    def test_zero_requests(self):
        """Test derived metrics are zero without requests."""
        snapshot = RequestStats().snapshot()

        assert snapshot.total_requests == 0
        assert snapshot.average_tokens == 0
        assert snapshot.success_rate == 0

    def test_average_tokens(self):
        stats = RequestStats()
        stats.record_success(30)
        stats.record_success(10)
        stats.record_failure()

        assert stats.average_tokens == pytest.approx(40 / 3)

    @pytest.mark.parametrize("successes,failures,expected", [
        (1, 0, 100),
        (0, 1, 0),
        (1, 1, 50),
        (2, 1, 67),
        (1, 2, 33),
        (1, 7, 13),
    ])
    def test_success_rate_rounding(self, successes, failures, expected):
        """Test success rate is a percentage rounded half up."""
        stats = RequestStats()
        for _ in range(successes):
            stats.record_success(1)
        for _ in range(failures):
            stats.record_failure()

        assert stats.success_rate == expected

    def test_snapshot_is_a_copy(self):
        stats = RequestStats()
        snapshot = stats.snapshot()
        stats.record_success(5)
        assert snapshot.total_requests == 0

    @given(st.lists(st.tuples(st.booleans(), st.integers(min_value=0, max_value=10_000))))
    def test_counter_invariant(self, outcomes):
        """Property test: total always equals successful plus failed."""
        stats = RequestStats()
        for succeeded, tokens in outcomes:
            if succeeded:
                stats.record_success(tokens)
            else:
                stats.record_failure()
            assert stats.total_requests == stats.successful_requests + stats.failed_requests

        assert 0 <= stats.success_rate <= 100
        assert stats.total_tokens == sum(t for ok, t in outcomes if ok)
