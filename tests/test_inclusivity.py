"""Tests for boundary inclusivity."""

from __future__ import annotations

import pytest

from rangealgebra.errors import ParseError
from rangealgebra.inclusivity import Inclusivity, render_value


class TestFlags:
    """Tests for the per-boundary flags."""

    @pytest.mark.parametrize(
        ("inclusivity", "lower", "upper"),
        [
            (Inclusivity.NEITHER, False, False),
            (Inclusivity.LOWER, True, False),
            (Inclusivity.UPPER, False, True),
            (Inclusivity.BOTH, True, True),
        ],
    )
    def test_flags_round_trip(
        self, inclusivity: Inclusivity, lower: bool, upper: bool
    ) -> None:
        """Test that from_flags inverts includes_lower/includes_upper."""
        assert inclusivity.includes_lower is lower
        assert inclusivity.includes_upper is upper
        assert Inclusivity.from_flags(lower, upper) is inclusivity

    def test_brackets(self) -> None:
        """Test the bracket pair of each inclusivity."""
        assert Inclusivity.NEITHER.brackets == ("(", ")")
        assert Inclusivity.LOWER.brackets == ("[", ")")
        assert Inclusivity.UPPER.brackets == ("(", "]")
        assert Inclusivity.BOTH.brackets == ("[", "]")

    def test_merge_takes_lower_then_upper(self) -> None:
        """Test merge keeps the lower side of the first and upper side of the second."""
        assert Inclusivity.merge(Inclusivity.LOWER, Inclusivity.UPPER) is Inclusivity.BOTH
        assert Inclusivity.merge(Inclusivity.UPPER, Inclusivity.LOWER) is Inclusivity.NEITHER
        assert Inclusivity.merge(Inclusivity.BOTH, Inclusivity.NEITHER) is Inclusivity.LOWER
        assert Inclusivity.merge(Inclusivity.NEITHER, Inclusivity.BOTH) is Inclusivity.UPPER


class TestBetween:
    """Tests for betweenness."""

    def test_inclusive_bounds(self) -> None:
        """Test both bounds included."""
        assert Inclusivity.BOTH.between(1, 1, 2)
        assert Inclusivity.BOTH.between(1, 2, 2)
        assert Inclusivity.BOTH.between(1, 1.5, 2)
        assert not Inclusivity.BOTH.between(1, 2.5, 2)

    def test_exclusive_bounds(self) -> None:
        """Test both bounds excluded."""
        assert not Inclusivity.NEITHER.between(1, 1, 2)
        assert not Inclusivity.NEITHER.between(1, 2, 2)
        assert Inclusivity.NEITHER.between(1, 1.5, 2)

    def test_half_open(self) -> None:
        """Test lower-only and upper-only inclusion."""
        assert Inclusivity.LOWER.between(1, 1, 2)
        assert not Inclusivity.LOWER.between(1, 2, 2)
        assert not Inclusivity.UPPER.between(1, 1, 2)
        assert Inclusivity.UPPER.between(1, 2, 2)

    def test_unbounded_sides(self) -> None:
        """Test that a None bound places no constraint."""
        assert Inclusivity.NEITHER.between(None, -1000, 0)
        assert not Inclusivity.NEITHER.between(None, 0, 0)
        assert Inclusivity.LOWER.between(0, 10**9, None)
        assert Inclusivity.NEITHER.between(None, 42, None)

    def test_strings(self) -> None:
        """Test betweenness over strings."""
        assert Inclusivity.LOWER.between("apple", "banana", "cherry")
        assert not Inclusivity.LOWER.between("apple", "cherry", "cherry")


class TestRendering:
    """Tests for rendering bounds and values."""

    def test_range_to_string(self) -> None:
        """Test rendering bounded and unbounded ranges."""
        assert Inclusivity.LOWER.range_to_string(1, 5) == "[1, 5)"
        assert Inclusivity.UPPER.range_to_string(None, 55.1) == "(-∞, 55.1]"
        assert Inclusivity.LOWER.range_to_string(3, None) == "[3, ∞)"
        assert Inclusivity.NEITHER.range_to_string(None, None) == "(-∞, ∞)"

    def test_render_plain_values(self) -> None:
        """Test values that need no quoting."""
        assert render_value(2.5) == "2.5"
        assert render_value(-3) == "-3"
        assert render_value("abc") == "abc"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("New York", '"New York"'),
            ("a,b", '"a,b"'),
            ("x]", '"x]"'),
            ("", '""'),
            ("null", '"null"'),
            ("inf", '"inf"'),
            ("-Infinity", '"-Infinity"'),
            ('say "hi"', '"say \\"hi\\""'),
            ("back\\slash x", '"back\\\\slash x"'),
        ],
    )
    def test_render_quoted_values(self, value: str, expected: str) -> None:
        """Test values that must be quoted to read back unchanged."""
        assert render_value(value) == expected

    def test_render_float_infinity_is_quoted(self) -> None:
        """Test that a float infinity is not mistaken for an unbounded side."""
        assert render_value(float("inf")) == '"inf"'


class TestFromString:
    """Tests for reading inclusivity from brackets."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("(1, 2)", Inclusivity.NEITHER),
            ("[1, 2)", Inclusivity.LOWER),
            ("(1, 2]", Inclusivity.UPPER),
            ("[1, 2]", Inclusivity.BOTH),
            ("  [1, 2)  ", Inclusivity.LOWER),
            ("[]", Inclusivity.BOTH),
        ],
    )
    def test_valid(self, text: str, expected: Inclusivity) -> None:
        """Test literals with valid brackets."""
        assert Inclusivity.from_string(text) is expected

    @pytest.mark.parametrize("text", ["", "   ", "(", "1, 2", "{1, 2}", "[1, 2"])
    def test_invalid(self, text: str) -> None:
        """Test that missing or wrong brackets raise ParseError."""
        with pytest.raises(ParseError):
            Inclusivity.from_string(text)

    def test_from_brackets_rejects_reversed(self) -> None:
        """Test that a closing bracket cannot open a literal."""
        with pytest.raises(ParseError, match="Mismatched range brackets"):
            Inclusivity.from_brackets(")", "(")
