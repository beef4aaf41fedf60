"""Boundary inclusion for ranges.

Every range records whether its lower and upper boundary values are members
of the range. The four combinations are enumerated by :class:`Inclusivity`,
which also knows how to test betweenness, how to combine the boundaries of
two adjoining ranges and how to render a pair of bounds as text.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from rangealgebra.errors import ParseError

# Characters that cannot appear in a bare (unquoted) literal value.
_NEEDS_QUOTES = re.compile(r'[\s,()\[\]"]')

# Bare words that the parser reads as something other than a value.
_RESERVED = re.compile(r"[+-]?(∞|inf|infty|infinity)|null", re.IGNORECASE)

LOWER_INFINITY = "-∞"
UPPER_INFINITY = "∞"


def render_value(value: Any) -> str:
    """Render a bound or element value for use inside a range literal.

    Values are written bare unless they would not read back as the same
    literal, in which case they are double-quoted with ``\\`` and ``"``
    escaped.

    Parameters
    ----------
    value : Any
        The value to render.

    Returns
    -------
    str
        The literal text.

    Examples
    --------
    >>> render_value(2.5)
    '2.5'
    >>> render_value("New York")
    '"New York"'
    >>> render_value(float("inf"))
    '"inf"'
    """
    text = str(value)
    if not text or _NEEDS_QUOTES.search(text) or _RESERVED.fullmatch(text):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


class Inclusivity(str, Enum):
    """Which boundaries of a range are members of the range.

    Attributes
    ----------
    NEITHER : str
        Neither boundary is included, ``(x, y)``.
    LOWER : str
        Only the lower boundary is included, ``[x, y)``.
    UPPER : str
        Only the upper boundary is included, ``(x, y]``.
    BOTH : str
        Both boundaries are included, ``[x, y]``.
    """

    NEITHER = "neither"
    LOWER = "lower"
    UPPER = "upper"
    BOTH = "both"

    @property
    def includes_lower(self) -> bool:
        """Whether the lower boundary is a member of the range."""
        return self in (Inclusivity.LOWER, Inclusivity.BOTH)

    @property
    def includes_upper(self) -> bool:
        """Whether the upper boundary is a member of the range."""
        return self in (Inclusivity.UPPER, Inclusivity.BOTH)

    @property
    def brackets(self) -> tuple[str, str]:
        """The opening and closing bracket for this inclusivity."""
        return ("[" if self.includes_lower else "(", "]" if self.includes_upper else ")")

    def between(self, minimum: Any, item: Any, maximum: Any) -> bool:
        """Test whether ``item`` lies between ``minimum`` and ``maximum``.

        Parameters
        ----------
        minimum : Any
            Lower bound, or None for no lower bound.
        item : Any
            The value being tested.
        maximum : Any
            Upper bound, or None for no upper bound.

        Returns
        -------
        bool
            True if ``item`` is within the bounds under this inclusivity.

        Examples
        --------
        >>> Inclusivity.LOWER.between(1, 1, 2)
        True
        >>> Inclusivity.LOWER.between(1, 2, 2)
        False
        >>> Inclusivity.NEITHER.between(None, -1000, 0)
        True
        """
        if minimum is not None:
            if self.includes_lower:
                if not minimum <= item:
                    return False
            elif not minimum < item:
                return False
        if maximum is not None:
            if self.includes_upper:
                return item <= maximum
            return item < maximum
        return True

    def range_to_string(self, minimum: Any, maximum: Any) -> str:
        """Render the range ``minimum`` to ``maximum`` with this inclusivity.

        Parameters
        ----------
        minimum : Any
            Lower bound, or None for no lower bound (rendered ``-∞``).
        maximum : Any
            Upper bound, or None for no upper bound (rendered ``∞``).

        Returns
        -------
        str
            The range literal.

        Examples
        --------
        >>> Inclusivity.UPPER.range_to_string(None, 55.1)
        '(-∞, 55.1]'
        """
        lower = LOWER_INFINITY if minimum is None else render_value(minimum)
        upper = UPPER_INFINITY if maximum is None else render_value(maximum)
        opening, closing = self.brackets
        return f"{opening}{lower}, {upper}{closing}"

    @classmethod
    def from_flags(cls, lower: bool, upper: bool) -> Inclusivity:
        """Build an inclusivity from per-boundary flags."""
        if lower:
            return cls.BOTH if upper else cls.LOWER
        return cls.UPPER if upper else cls.NEITHER

    @classmethod
    def merge(cls, lower: Inclusivity, upper: Inclusivity) -> Inclusivity:
        """Combine the lower side of one range with the upper side of another.

        Used when two adjoining or overlapping ranges are joined: the result
        keeps the lower boundary inclusion of ``lower`` and the upper
        boundary inclusion of ``upper``.

        Parameters
        ----------
        lower : Inclusivity
            Inclusivity of the range supplying the lower bound.
        upper : Inclusivity
            Inclusivity of the range supplying the upper bound.

        Returns
        -------
        Inclusivity
            The merged inclusivity.

        Examples
        --------
        >>> Inclusivity.merge(Inclusivity.LOWER, Inclusivity.UPPER)
        <Inclusivity.BOTH: 'both'>
        >>> Inclusivity.merge(Inclusivity.UPPER, Inclusivity.LOWER)
        <Inclusivity.NEITHER: 'neither'>
        """
        return cls.from_flags(lower.includes_lower, upper.includes_upper)

    @classmethod
    def from_brackets(cls, opening: str, closing: str) -> Inclusivity:
        """Determine the inclusivity from an opening and closing bracket.

        Raises
        ------
        ParseError
            If either bracket is not one of ``(``/``[`` or ``)``/``]``.
        """
        if opening not in ("(", "[") or closing not in (")", "]"):
            raise ParseError(f"Mismatched range brackets: {opening!r} and {closing!r}")
        return cls.from_flags(opening == "[", closing == "]")

    @classmethod
    def from_string(cls, text: str) -> Inclusivity:
        """Determine the inclusivity of a range literal from its brackets.

        Parameters
        ----------
        text : str
            A range literal that starts with ``(`` or ``[`` and ends with
            ``)`` or ``]`` (surrounding whitespace is ignored).

        Returns
        -------
        Inclusivity
            The inclusivity described by the brackets.

        Raises
        ------
        ParseError
            If the literal is blank or its brackets are missing or mismatched.

        Examples
        --------
        >>> Inclusivity.from_string(" [1, 2) ")
        <Inclusivity.LOWER: 'lower'>
        """
        stripped = text.strip()
        if len(stripped) < 2:
            raise ParseError("Range literal is too short to carry brackets", text=text)
        try:
            return cls.from_brackets(stripped[0], stripped[-1])
        except ParseError as e:
            raise ParseError(e.message, text=text) from e
