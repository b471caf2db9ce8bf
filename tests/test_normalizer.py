"""
Tests for string normalization.
"""

import pytest

from datalayer.normalizer import normalize


class TestNormalize:
    """Test normalize()."""

    def test_pipe_becomes_hyphen(self):
        assert normalize("Test|String") == "test-string"

    def test_whitespace_runs_collapse(self):
        """Leading/trailing whitespace is trimmed and internal runs become one hyphen."""
        assert normalize("  Test  String  ") == "test-string"
        assert normalize("Air\tMax \n 90") == "air-max-90"

    def test_empty_input(self):
        assert normalize("") == ""
        assert normalize(None) == ""

    def test_non_string_input_is_coerced(self):
        assert normalize(42) == "42"

    @pytest.mark.parametrize("value", [
        "Test String",
        "  Mixed | CASE  value ",
        "already-normal",
        "Ünïcode Brand | Ltd",
        "a||b",
    ])
    def test_idempotent(self, value):
        """Normalizing twice gives the same result as normalizing once."""
        once = normalize(value)
        assert normalize(once) == once
