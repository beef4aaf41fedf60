"""Reduction of parsed range expressions.

A parsed expression is a flat sequence of ranges and binary operators. It is
folded left to right into a single range: a range with no operator in front
of it is unioned into the result, and an operator combines the result so far
with the range that follows it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from rangealgebra.errors import ParseError
from rangealgebra.ranges import EmptyRange, Range

logger = logging.getLogger(__name__)


class Operator(str, Enum):
    """Binary operators available in range expressions.

    Attributes
    ----------
    UNION : str
        ``∪``, ``u``, ``U`` or ``union``.
    INTERSECTION : str
        ``∩``, ``i``, ``I``, ``intersect`` or ``intersection``.
    ADDITION : str
        ``+``, the same as union.
    SUBTRACTION : str
        ``-``.
    """

    UNION = "union"
    INTERSECTION = "intersection"
    ADDITION = "addition"
    SUBTRACTION = "subtraction"

    def apply(self, left: Range, right: Range) -> Range:
        """Apply this operator to two ranges."""
        if self is Operator.INTERSECTION:
            return left.intersect(right)
        if self is Operator.SUBTRACTION:
            return left.subtract(right)
        return left.union(right)


def evaluate(elements: Sequence[Range | Operator]) -> Range:
    """Fold a sequence of ranges and operators into one range.

    The first range is taken as written. An operator at the start of the
    sequence takes the empty range as its left operand. An empty sequence
    evaluates to the empty range.

    Parameters
    ----------
    elements : Sequence[Range | Operator]
        Ranges and operators in source order.

    Returns
    -------
    Range
        The reduced range.

    Raises
    ------
    ParseError
        If an operator follows another operator or ends the sequence.

    Examples
    --------
    >>> from rangealgebra.ranges import SingleIntervalRange
    >>> a = SingleIntervalRange(min=1, max=5)
    >>> b = SingleIntervalRange(min=2, max=3)
    >>> str(evaluate([a, Operator.SUBTRACTION, b]))
    '[1, 2) ∪ [3, 5)'
    """
    result: Range | None = None
    pending: Operator | None = None
    for element in elements:
        if isinstance(element, Operator):
            if pending is not None:
                raise ParseError(
                    f"Operator {element.value!r} cannot follow operator {pending.value!r}"
                )
            pending = element
            continue
        if result is None and pending is None:
            result = element
            continue
        left = EmptyRange() if result is None else result
        operator = Operator.UNION if pending is None else pending
        logger.debug("Applying %s to %s and %s", operator.value, left, element)
        result = operator.apply(left, element)
        pending = None
    if pending is not None:
        raise ParseError(f"Operator {pending.value!r} is missing its right operand")
    return EmptyRange() if result is None else result
