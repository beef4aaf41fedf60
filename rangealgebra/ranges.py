"""Range variants and the algebra over them.

A range is an immutable set of values drawn from a totally ordered type.
Every range is one of eight variants:

- :class:`EmptyRange` contains nothing.
- :class:`InfiniteRange` contains every ordered value.
- :class:`SingleElementRange` contains exactly one value.
- :class:`NullElementRange` contains only ``None``, which lies outside the
  ordered values.
- :class:`SingleIntervalRange` is bounded on both sides.
- :class:`FloorRange` is bounded below only.
- :class:`CeilingRange` is bounded above only.
- :class:`MultipleIntervalRange` is a disjoint union of the above, kept as a
  sorted tuple of fragments no two of which could be joined into one.

Union, subtraction and intersection are implemented once, in this module, by
matching on the variants of both operands. Pairwise operations between
interval-shaped ranges are driven by the :class:`Overlap` classification of
the two operands.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import IntEnum
from functools import cmp_to_key
from re import Pattern
from typing import TYPE_CHECKING, Any, ClassVar, NamedTuple, assert_never, cast

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from sortedcontainers import SortedKeyList

from rangealgebra.inclusivity import Inclusivity, render_value

if TYPE_CHECKING:
    from rangealgebra.config import ParserConfig


class Overlap(IntEnum):
    """How one range relates to another.

    Codes are always read from the point of view of the range the
    classification was requested on (``this``) against ``other``.

    Attributes
    ----------
    DISJOINT : int
        The ranges share no elements.
    UPPER_OVERLAP : int
        ``other`` overlaps ``this`` around its upper bound and extends past it.
    CONTAINS : int
        ``this`` contains ``other`` (including the case of equal bounds).
    CONTAINED_BY : int
        ``other`` contains ``this``.
    LOWER_OVERLAP : int
        ``other`` overlaps ``this`` around its lower bound and extends below it.
    """

    DISJOINT = 0
    UPPER_OVERLAP = 1
    CONTAINS = 2
    CONTAINED_BY = 3
    LOWER_OVERLAP = 4


class Range(BaseModel):
    """Base class for all range variants.

    Ranges are frozen: every operation returns a new range and never
    modifies its operands. Two ranges are equal when they are the same
    variant with equal fields.

    Examples
    --------
    >>> a = SingleIntervalRange(min=1, max=5, inclusivity=Inclusivity.LOWER)
    >>> b = SingleIntervalRange(min=2, max=3, inclusivity=Inclusivity.BOTH)
    >>> print(a - b)
    [1, 2) ∪ (3, 5)
    >>> print(a & b)
    [2, 3]
    >>> 4 in a - b
    True
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    def contains(self, item: Any) -> bool:
        """Test whether ``item`` is a member of this range."""
        return _contains(_variant(self), item)

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    @property
    def lower_bound(self) -> Any:
        """The lower bound, or None when the range is unbounded below or has no bounds."""
        return _lower_bound(_variant(self))

    @property
    def upper_bound(self) -> Any:
        """The upper bound, or None when the range is unbounded above or has no bounds."""
        return _upper_bound(_variant(self))

    @property
    def is_empty(self) -> bool:
        """Whether this range contains no values at all.

        An interval with equal bounds that excludes either of them is empty.
        """
        return isinstance(_normalize(_variant(self)), EmptyRange)

    def relation_to(self, other: Range) -> Overlap:
        """Classify how ``other`` relates to this range.

        Parameters
        ----------
        other : Range
            The range to compare against.

        Returns
        -------
        Overlap
            The relationship code, read from this range's point of view.

        Examples
        --------
        >>> a = SingleIntervalRange(min=1, max=3, inclusivity=Inclusivity.BOTH)
        >>> a.relation_to(SingleIntervalRange(min=2, max=5))
        <Overlap.UPPER_OVERLAP: 1>
        >>> a.relation_to(EmptyRange())
        <Overlap.CONTAINS: 2>
        """
        return _relation(_variant(self), _variant(other))

    def mergeability_with(self, other: Range) -> Overlap:
        """Classify ``other`` like :meth:`relation_to`, but report ranges
        that exactly touch (and could therefore be joined into one
        contiguous range) as overlapping rather than disjoint."""
        return _mergeability(_variant(self), _variant(other))

    def union(self, other: Range) -> Range:
        """Return the range of values in this range or ``other``."""
        return _union(_variant(self), _variant(other))

    def subtract(self, other: Range) -> Range:
        """Return the range of values in this range but not in ``other``."""
        return _subtract(_variant(self), _variant(other))

    def intersect(self, other: Range) -> Range:
        """Return the range of values in both this range and ``other``."""
        return _intersect(_variant(self), _variant(other))

    def __or__(self, other: Range) -> Range:
        return self.union(other)

    def __add__(self, other: Range) -> Range:
        return self.union(other)

    def __sub__(self, other: Range) -> Range:
        return self.subtract(other)

    def __and__(self, other: Range) -> Range:
        return self.intersect(other)

    def __str__(self) -> str:
        return _render(_variant(self))

    @classmethod
    def parse(
        cls,
        expression: str,
        converter: Callable[[str], Any],
        infinity_markers: str | Pattern[str] | None = None,
        config: ParserConfig | None = None,
    ) -> Range:
        """Parse a range expression such as ``"(1, 2) + [2, 3)"``.

        See :func:`rangealgebra.parser.parse`.
        """
        from rangealgebra.parser import parse

        return parse(expression, converter, infinity_markers=infinity_markers, config=config)


class EmptyRange(Range):
    """The range containing no values.

    Examples
    --------
    >>> str(EmptyRange())
    '[]'
    """

    inclusivity: ClassVar[Inclusivity] = Inclusivity.NEITHER


class InfiniteRange(Range):
    """The range containing every ordered value.

    ``None`` is not an ordered value, so it is not contained; see
    :class:`NullElementRange`.

    Examples
    --------
    >>> str(InfiniteRange())
    '(-∞, ∞)'
    >>> 10**100 in InfiniteRange()
    True
    """

    inclusivity: ClassVar[Inclusivity] = Inclusivity.NEITHER


class NullElementRange(Range):
    """The range containing only ``None``."""

    inclusivity: ClassVar[Inclusivity] = Inclusivity.BOTH


class SingleElementRange(Range):
    """A range containing exactly one value.

    Attributes
    ----------
    element : Any
        The single member (compared by equality).

    Examples
    --------
    >>> point = SingleElementRange(element=2.0)
    >>> str(point)
    '[2.0]'
    >>> point.contains(2)
    True
    """

    inclusivity: ClassVar[Inclusivity] = Inclusivity.BOTH

    element: Any

    @field_validator("element")
    @classmethod
    def validate_element(cls, v: Any) -> Any:
        """Reject ``None``, which is represented by :class:`NullElementRange`."""
        if v is None:
            raise ValueError("element must not be None; use NullElementRange")
        return v


class SingleIntervalRange(Range):
    """A range bounded on both sides.

    Reversed bounds are swapped so that ``min <= max``. Equal bounds are
    accepted as given and are not turned into a :class:`SingleElementRange`,
    but the algebra treats such a range as the one value it holds when both
    bounds are included and as empty otherwise.

    Attributes
    ----------
    min : Any
        Lower bound.
    max : Any
        Upper bound.
    inclusivity : Inclusivity
        Which bounds are members of the range (default: lower only).

    Examples
    --------
    >>> r = SingleIntervalRange(min=5, max=1)
    >>> (r.min, r.max)
    (1, 5)
    >>> str(r)
    '[1, 5)'
    """

    min: Any
    max: Any
    inclusivity: Inclusivity = Inclusivity.LOWER

    @model_validator(mode="before")
    @classmethod
    def order_bounds(cls, data: Any) -> Any:
        """Swap the bounds when they are given in descending order."""
        if isinstance(data, dict):
            low, high = data.get("min"), data.get("max")
            if low is not None and high is not None and high < low:
                return {**data, "min": high, "max": low}
        return data

    @field_validator("min", "max")
    @classmethod
    def validate_bound(cls, v: Any) -> Any:
        """Reject ``None`` bounds, which belong to the half-bounded variants."""
        if v is None:
            raise ValueError("bounds must not be None; use FloorRange or CeilingRange")
        return v


class FloorRange(Range):
    """A range bounded below only.

    An inclusivity that includes the upper boundary is downgraded, since
    there is no upper boundary: ``BOTH`` becomes ``LOWER`` and ``UPPER``
    becomes ``NEITHER``.

    Attributes
    ----------
    floor : Any
        Lower bound.
    inclusivity : Inclusivity
        ``LOWER`` or ``NEITHER`` (default: ``LOWER``).

    Examples
    --------
    >>> str(FloorRange(floor=3, inclusivity=Inclusivity.BOTH))
    '[3, ∞)'
    """

    floor: Any
    inclusivity: Inclusivity = Inclusivity.LOWER

    @field_validator("floor")
    @classmethod
    def validate_floor(cls, v: Any) -> Any:
        """Reject a ``None`` floor."""
        if v is None:
            raise ValueError("floor must not be None; use InfiniteRange")
        return v

    @field_validator("inclusivity")
    @classmethod
    def drop_upper(cls, v: Inclusivity) -> Inclusivity:
        """Keep only the lower boundary inclusion."""
        return Inclusivity.from_flags(v.includes_lower, False)


class CeilingRange(Range):
    """A range bounded above only.

    An inclusivity that includes the lower boundary is downgraded: ``BOTH``
    becomes ``UPPER`` and ``LOWER`` becomes ``NEITHER``.

    Attributes
    ----------
    ceiling : Any
        Upper bound.
    inclusivity : Inclusivity
        ``UPPER`` or ``NEITHER`` (default: ``UPPER``).

    Examples
    --------
    >>> str(CeilingRange(ceiling=55.1))
    '(-∞, 55.1]'
    """

    ceiling: Any
    inclusivity: Inclusivity = Inclusivity.UPPER

    @field_validator("ceiling")
    @classmethod
    def validate_ceiling(cls, v: Any) -> Any:
        """Reject a ``None`` ceiling."""
        if v is None:
            raise ValueError("ceiling must not be None; use InfiniteRange")
        return v

    @field_validator("inclusivity")
    @classmethod
    def drop_lower(cls, v: Inclusivity) -> Inclusivity:
        """Keep only the upper boundary inclusion."""
        return Inclusivity.from_flags(False, v.includes_upper)


class MultipleIntervalRange(Range):
    """A disjoint union of two or more ranges.

    The fragments are sorted in ascending order (unbounded-below first, the
    null element last) and no two neighbouring fragments overlap or touch,
    so every set of values has exactly one fragment tuple. Use :meth:`of` to
    build one from arbitrary ranges.

    Attributes
    ----------
    fragments : tuple[Range, ...]
        The constituent ranges.

    Examples
    --------
    >>> r = MultipleIntervalRange.of(
    ...     SingleIntervalRange(min=5, max=6),
    ...     SingleIntervalRange(min=1, max=2),
    ... )
    >>> str(r)
    '[1, 2) ∪ [5, 6)'
    >>> r.inclusivity
    <Inclusivity.LOWER: 'lower'>
    """

    fragments: tuple[Range, ...]

    @model_validator(mode="after")
    def validate_fragments(self) -> MultipleIntervalRange:
        """Validate that the fragments are canonical.

        Raises
        ------
        ValueError
            If there are fewer than two fragments, a fragment is empty or
            itself a multi-interval range, or two neighbouring fragments are
            out of order or could be merged.
        """
        if len(self.fragments) < 2:
            raise ValueError("a multiple interval range needs at least two fragments")
        for fragment in self.fragments:
            if fragment.is_empty or isinstance(fragment, MultipleIntervalRange):
                raise ValueError(f"invalid fragment: {fragment!r}")
        for left, right in zip(self.fragments, self.fragments[1:], strict=False):
            if _compare_fragments(_variant(left), _variant(right)) > 0:
                raise ValueError(f"fragments out of order: {left} before {right}")
            if _mergeability(_variant(left), _variant(right)) is not Overlap.DISJOINT:
                raise ValueError(f"fragments {left} and {right} should be merged")
        return self

    @classmethod
    def of(cls, *ranges: Range) -> Range:
        """Build the union of ``ranges`` in canonical form.

        Returns
        -------
        Range
            :class:`EmptyRange` when nothing remains, the single fragment
            when only one remains, otherwise a :class:`MultipleIntervalRange`.
        """
        return _combine(ranges)

    @property
    def inclusivity(self) -> Inclusivity:
        """Net inclusivity: the first fragment's lower side and the last fragment's upper side."""
        spans = [span for span in map(_span, self.fragments) if span is not None]
        if not spans:
            return Inclusivity.BOTH
        return Inclusivity.merge(spans[0].inclusivity, spans[-1].inclusivity)

    def subtract_from(self, minuend: Range) -> Range:
        """Return ``minuend`` minus every fragment of this range."""
        return _subtract_fragments(_variant(minuend), self)


RangeVariant = (
    EmptyRange
    | InfiniteRange
    | NullElementRange
    | SingleElementRange
    | SingleIntervalRange
    | FloorRange
    | CeilingRange
    | MultipleIntervalRange
)

# Variants that are a single contiguous run of ordered values.
IntervalVariant = InfiniteRange | SingleElementRange | SingleIntervalRange | FloorRange | CeilingRange


def _variant(r: Range) -> RangeVariant:
    return cast("RangeVariant", r)


class _Span(NamedTuple):
    """Bounds of an interval-shaped range; None is -∞ below and +∞ above."""

    lower: Any
    upper: Any
    inclusivity: Inclusivity


def _span(r: Range) -> _Span | None:
    r = _variant(r)
    match r:
        case InfiniteRange():
            return _Span(None, None, Inclusivity.NEITHER)
        case SingleElementRange(element=element):
            return _Span(element, element, Inclusivity.BOTH)
        case SingleIntervalRange(min=low, max=high, inclusivity=inclusivity):
            return _Span(low, high, inclusivity)
        case FloorRange(floor=floor, inclusivity=inclusivity):
            return _Span(floor, None, inclusivity)
        case CeilingRange(ceiling=ceiling, inclusivity=inclusivity):
            return _Span(None, ceiling, inclusivity)
        case EmptyRange() | NullElementRange() | MultipleIntervalRange():
            return None
        case _:
            assert_never(r)


def _normalize(r: RangeVariant) -> RangeVariant:
    """Replace an interval with equal bounds by the point or empty range it holds."""
    if isinstance(r, SingleIntervalRange) and not r.min < r.max:
        if r.inclusivity is Inclusivity.BOTH:
            return SingleElementRange(element=r.min)
        return EmptyRange()
    return r


def _compare_lower(a: _Span, b: _Span) -> int:
    """Order two lower bounds; an inclusive bound starts before an exclusive one."""
    if a.lower is None or b.lower is None:
        if a.lower is None and b.lower is None:
            return 0
        return -1 if a.lower is None else 1
    if a.lower < b.lower:
        return -1
    if b.lower < a.lower:
        return 1
    if a.inclusivity.includes_lower == b.inclusivity.includes_lower:
        return 0
    return -1 if a.inclusivity.includes_lower else 1


def _compare_upper(a: _Span, b: _Span) -> int:
    """Order two upper bounds; an inclusive bound ends after an exclusive one."""
    if a.upper is None or b.upper is None:
        if a.upper is None and b.upper is None:
            return 0
        return 1 if a.upper is None else -1
    if a.upper < b.upper:
        return -1
    if b.upper < a.upper:
        return 1
    if a.inclusivity.includes_upper == b.inclusivity.includes_upper:
        return 0
    return 1 if a.inclusivity.includes_upper else -1


def _join(low: _Span, high: _Span) -> _Span:
    """Span from the lower side of ``low`` to the upper side of ``high``."""
    return _Span(low.lower, high.upper, Inclusivity.merge(low.inclusivity, high.inclusivity))


def _span_is_empty(s: _Span) -> bool:
    if s.lower is None or s.upper is None:
        return False
    if s.lower < s.upper:
        return False
    if s.upper < s.lower:
        return True
    return s.inclusivity is not Inclusivity.BOTH


def _touches(upper: _Span, lower: _Span) -> bool:
    """Whether ``upper`` ends exactly where ``lower`` starts, with no gap."""
    if upper.upper is None or lower.lower is None:
        return False
    if upper.upper < lower.lower or lower.lower < upper.upper:
        return False
    return upper.inclusivity.includes_upper or lower.inclusivity.includes_lower


def _from_span(s: _Span) -> Range:
    """Build the narrowest variant covering exactly the values of ``s``."""
    if _span_is_empty(s):
        return EmptyRange()
    if s.lower is None and s.upper is None:
        return InfiniteRange()
    if s.lower is None:
        return CeilingRange(ceiling=s.upper, inclusivity=s.inclusivity)
    if s.upper is None:
        return FloorRange(floor=s.lower, inclusivity=s.inclusivity)
    if not s.lower < s.upper:
        return SingleElementRange(element=s.lower)
    return SingleIntervalRange(min=s.lower, max=s.upper, inclusivity=s.inclusivity)


def _span_relation(this: _Span, other: _Span) -> Overlap:
    lower = _compare_lower(this, other)
    upper = _compare_upper(this, other)
    overlap = _join(other if lower <= 0 else this, this if upper <= 0 else other)
    if _span_is_empty(overlap):
        return Overlap.DISJOINT
    if lower <= 0 and upper >= 0:
        return Overlap.CONTAINS
    if lower >= 0 and upper <= 0:
        return Overlap.CONTAINED_BY
    if upper < 0:
        return Overlap.UPPER_OVERLAP
    return Overlap.LOWER_OVERLAP


def _span_mergeability(this: _Span, other: _Span) -> Overlap:
    relation = _span_relation(this, other)
    if relation is Overlap.DISJOINT:
        if _touches(this, other):
            return Overlap.UPPER_OVERLAP
        if _touches(other, this):
            return Overlap.LOWER_OVERLAP
    return relation


def _compare_fragments(a: RangeVariant, b: RangeVariant) -> int:
    """Sort order of multi-interval fragments; the null element sorts last."""
    a_span, b_span = _span(a), _span(b)
    if a_span is None or b_span is None:
        return (a_span is None) - (b_span is None)
    return _compare_lower(a_span, b_span) or _compare_upper(a_span, b_span)


def _fragments(r: RangeVariant) -> tuple[Range, ...]:
    r = _normalize(r)
    match r:
        case MultipleIntervalRange(fragments=fragments):
            return fragments
        case EmptyRange():
            return ()
        case (
            InfiniteRange()
            | NullElementRange()
            | SingleElementRange()
            | SingleIntervalRange()
            | FloorRange()
            | CeilingRange()
        ):
            return (r,)
        case _:
            assert_never(r)


_FRAGMENT_KEY = cmp_to_key(lambda a, b: _compare_fragments(_variant(a), _variant(b)))


def _add_fragment(fragments: SortedKeyList, fragment: Range) -> int:
    """Add ``fragment`` after any equal fragments and return its position."""
    index = fragments.bisect_right(fragment)
    fragments.add(fragment)
    return index


def _insert_fragment(fragments: SortedKeyList, fragment: Range) -> None:
    """Insert ``fragment`` and merge it with any neighbours it overlaps or touches."""
    index = _add_fragment(fragments, fragment)
    while index > 0 and _mergeability(
        _variant(fragments[index]), _variant(fragments[index - 1])
    ) is not Overlap.DISJOINT:
        left = fragments.pop(index - 1)
        merged = _union(_variant(left), _variant(fragments.pop(index - 1)))
        index = _add_fragment(fragments, merged)
    while index < len(fragments) - 1 and _mergeability(
        _variant(fragments[index]), _variant(fragments[index + 1])
    ) is not Overlap.DISJOINT:
        merged = _union(_variant(fragments.pop(index)), _variant(fragments.pop(index)))
        index = _add_fragment(fragments, merged)


def _combine(ranges: Iterable[Range]) -> Range:
    """Union of ``ranges``, collapsed to the narrowest variant."""
    fragments = SortedKeyList(key=_FRAGMENT_KEY)
    for r in ranges:
        for fragment in _fragments(_variant(r)):
            _insert_fragment(fragments, fragment)
    if len(fragments) == 0:
        return EmptyRange()
    if len(fragments) == 1:
        return fragments[0]
    return MultipleIntervalRange(fragments=tuple(fragments))


def _subtract_fragments(minuend: RangeVariant, subtrahend: RangeVariant) -> Range:
    """Subtract every fragment of ``subtrahend`` from every piece of ``minuend``."""
    pieces = list(_fragments(minuend))
    for cut in _fragments(subtrahend):
        pieces = [
            piece
            for remainder in pieces
            for piece in _fragments(_variant(_subtract(_variant(remainder), _variant(cut))))
        ]
    return _combine(pieces)


def _set_relation(this: RangeVariant, other: RangeVariant) -> Overlap:
    """Classify ranges that are not both interval-shaped, using the algebra itself."""
    if _subtract(other, this).is_empty:
        return Overlap.CONTAINS
    if _subtract(this, other).is_empty:
        return Overlap.CONTAINED_BY
    if _intersect(this, other).is_empty:
        return Overlap.DISJOINT
    this_hull = _Span(this.lower_bound, this.upper_bound, this.inclusivity)
    other_hull = _Span(other.lower_bound, other.upper_bound, other.inclusivity)
    if _compare_upper(this_hull, other_hull) < 0:
        return Overlap.UPPER_OVERLAP
    return Overlap.LOWER_OVERLAP


def _contains(r: RangeVariant, item: Any) -> bool:
    match r:
        case EmptyRange():
            return False
        case InfiniteRange():
            return item is not None
        case NullElementRange():
            return item is None
        case SingleElementRange(element=element):
            return item is not None and item == element
        case SingleIntervalRange(min=low, max=high, inclusivity=inclusivity):
            return item is not None and inclusivity.between(low, item, high)
        case FloorRange(floor=floor, inclusivity=inclusivity):
            return item is not None and inclusivity.between(floor, item, None)
        case CeilingRange(ceiling=ceiling, inclusivity=inclusivity):
            return item is not None and inclusivity.between(None, item, ceiling)
        case MultipleIntervalRange(fragments=fragments):
            return any(_contains(_variant(f), item) for f in fragments)
        case _:
            assert_never(r)


def _lower_bound(r: RangeVariant) -> Any:
    match r:
        case EmptyRange() | InfiniteRange() | NullElementRange() | CeilingRange():
            return None
        case SingleElementRange(element=element):
            return element
        case SingleIntervalRange(min=low):
            return low
        case FloorRange(floor=floor):
            return floor
        case MultipleIntervalRange(fragments=fragments):
            return _lower_bound(_variant(fragments[0]))
        case _:
            assert_never(r)


def _upper_bound(r: RangeVariant) -> Any:
    match r:
        case EmptyRange() | InfiniteRange() | NullElementRange() | FloorRange():
            return None
        case SingleElementRange(element=element):
            return element
        case SingleIntervalRange(max=high):
            return high
        case CeilingRange(ceiling=ceiling):
            return ceiling
        case MultipleIntervalRange(fragments=fragments):
            ordered = [f for f in fragments if not isinstance(f, NullElementRange)]
            return _upper_bound(_variant(ordered[-1])) if ordered else None
        case _:
            assert_never(r)


def _render(r: RangeVariant) -> str:
    match r:
        case EmptyRange():
            return "[]"
        case InfiniteRange():
            return Inclusivity.NEITHER.range_to_string(None, None)
        case NullElementRange():
            return "[null]"
        case SingleElementRange(element=element):
            return f"[{render_value(element)}]"
        case SingleIntervalRange(min=low, max=high, inclusivity=inclusivity):
            return inclusivity.range_to_string(low, high)
        case FloorRange(floor=floor, inclusivity=inclusivity):
            return inclusivity.range_to_string(floor, None)
        case CeilingRange(ceiling=ceiling, inclusivity=inclusivity):
            return inclusivity.range_to_string(None, ceiling)
        case MultipleIntervalRange(fragments=fragments):
            return " ∪ ".join(str(f) for f in fragments)
        case _:
            assert_never(r)


def _relation(this: RangeVariant, other: RangeVariant) -> Overlap:
    this, other = _normalize(this), _normalize(other)
    match (this, other):
        case (_, EmptyRange()):
            return Overlap.CONTAINS
        case (EmptyRange(), _):
            return Overlap.CONTAINED_BY
        case (MultipleIntervalRange(), _) | (_, MultipleIntervalRange()):
            return _set_relation(this, other)
        case (NullElementRange(), NullElementRange()):
            return Overlap.CONTAINS
        case (NullElementRange(), _) | (_, NullElementRange()):
            return Overlap.DISJOINT
    return _span_relation(_interval_span(this), _interval_span(other))


def _mergeability(this: RangeVariant, other: RangeVariant) -> Overlap:
    this, other = _normalize(this), _normalize(other)
    this_span, other_span = _span(this), _span(other)
    if this_span is None or other_span is None:
        return _relation(this, other)
    return _span_mergeability(this_span, other_span)


def _union(this: RangeVariant, other: RangeVariant) -> Range:
    this, other = _normalize(this), _normalize(other)
    match (this, other):
        case (EmptyRange(), _):
            return other
        case (_, EmptyRange()):
            return this
        case (MultipleIntervalRange(), _) | (_, MultipleIntervalRange()):
            return _combine((this, other))
        case (NullElementRange(), NullElementRange()):
            return this
        case (NullElementRange(), _) | (_, NullElementRange()):
            return _combine((this, other))
    this_span, other_span = _interval_span(this), _interval_span(other)
    match _span_mergeability(this_span, other_span):
        case Overlap.CONTAINS:
            return this
        case Overlap.CONTAINED_BY:
            return other
        case Overlap.UPPER_OVERLAP:
            return _from_span(_join(this_span, other_span))
        case Overlap.LOWER_OVERLAP:
            return _from_span(_join(other_span, this_span))
        case Overlap.DISJOINT:
            return _combine((this, other))


def _subtract(this: RangeVariant, other: RangeVariant) -> Range:
    this, other = _normalize(this), _normalize(other)
    match (this, other):
        case (EmptyRange(), _):
            return this
        case (_, EmptyRange()):
            return this
        case (MultipleIntervalRange(), _):
            return _subtract_fragments(this, other)
        case (_, MultipleIntervalRange()):
            return other.subtract_from(this)
        case (NullElementRange(), NullElementRange()):
            return EmptyRange()
        case (NullElementRange(), _) | (_, NullElementRange()):
            return this
    this_span, other_span = _interval_span(this), _interval_span(other)
    relation = _span_relation(this_span, other_span)
    if relation is Overlap.DISJOINT:
        return this
    if relation is Overlap.CONTAINED_BY:
        return EmptyRange()
    pieces: list[Range] = []
    if relation in (Overlap.CONTAINS, Overlap.UPPER_OVERLAP) and other_span.lower is not None:
        below = _Span(
            this_span.lower,
            other_span.lower,
            Inclusivity.from_flags(
                this_span.inclusivity.includes_lower,
                not other_span.inclusivity.includes_lower,
            ),
        )
        pieces.append(_from_span(below))
    if relation in (Overlap.CONTAINS, Overlap.LOWER_OVERLAP) and other_span.upper is not None:
        above = _Span(
            other_span.upper,
            this_span.upper,
            Inclusivity.from_flags(
                not other_span.inclusivity.includes_upper,
                this_span.inclusivity.includes_upper,
            ),
        )
        pieces.append(_from_span(above))
    return _combine(pieces)


def _intersect(this: RangeVariant, other: RangeVariant) -> Range:
    this, other = _normalize(this), _normalize(other)
    match (this, other):
        case (EmptyRange(), _):
            return this
        case (_, EmptyRange()):
            return other
        case (MultipleIntervalRange(), _) | (_, MultipleIntervalRange()):
            return _combine(
                _intersect(_variant(a), _variant(b))
                for a in _fragments(this)
                for b in _fragments(other)
            )
        case (NullElementRange(), NullElementRange()):
            return this
        case (NullElementRange(), _) | (_, NullElementRange()):
            return EmptyRange()
    this_span, other_span = _interval_span(this), _interval_span(other)
    match _span_relation(this_span, other_span):
        case Overlap.CONTAINS:
            return other
        case Overlap.CONTAINED_BY:
            return this
        case Overlap.UPPER_OVERLAP:
            return _from_span(_join(other_span, this_span))
        case Overlap.LOWER_OVERLAP:
            return _from_span(_join(this_span, other_span))
        case Overlap.DISJOINT:
            return EmptyRange()


def _interval_span(r: RangeVariant) -> _Span:
    span = _span(r)
    if span is None:
        raise TypeError(f"{type(r).__name__} has no interval bounds")
    return span
