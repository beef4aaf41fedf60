"""Range expression parser.

This module reads range expressions such as ``"(1, 2) + [2, 3)"`` or
``"(-∞, 0) ∪ [null]"`` using the Lark parsing library. The parse tree is
turned into a flat sequence of ranges and operators, which
:func:`rangealgebra.evaluator.evaluate` folds into a single range.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path
from re import Pattern
from typing import Any, NamedTuple, cast

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, UnexpectedCharacters, UnexpectedInput, VisitError

from rangealgebra.config import DEFAULT_CONFIG, ParserConfig
from rangealgebra.errors import ConversionError, ParseError
from rangealgebra.evaluator import Operator, evaluate
from rangealgebra.inclusivity import Inclusivity
from rangealgebra.ranges import (
    CeilingRange,
    EmptyRange,
    FloorRange,
    InfiniteRange,
    NullElementRange,
    Range,
    SingleElementRange,
    SingleIntervalRange,
)

logger = logging.getLogger(__name__)

# Load grammar from file
_GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"
_GRAMMAR = _GRAMMAR_PATH.read_text(encoding="utf-8")

_PARSER = Lark(
    _GRAMMAR,
    start="start",
    parser="lalr",
    propagate_positions=True,
)

_OPERATORS = {
    "UNION": Operator.UNION,
    "INTERSECTION": Operator.INTERSECTION,
    "PLUS": Operator.ADDITION,
    "MINUS": Operator.SUBTRACTION,
}

_ESCAPES = {"t": "\t", "b": "\b", "n": "\n", "r": "\r", "f": "\f", "'": "'", '"': '"', "\\": "\\"}
_ESCAPE_SEQUENCE = re.compile(r"\\([tbnrf'\"\\])")


class _Value(NamedTuple):
    """A literal value as written, before conversion."""

    text: str
    quoted: bool
    line: int | None
    column: int | None


def _unescape(text: str) -> str:
    return _ESCAPE_SEQUENCE.sub(lambda m: _ESCAPES[m.group(1)], text)


class RangeBuilder(Transformer):  # type: ignore[type-arg]
    """Transformer that turns a Lark parse tree into ranges and operators.

    Parameters
    ----------
    converter : Callable[[str], Any]
        Converts literal text into an element value.
    infinity_pattern : Pattern[str]
        Pattern that marks a bare value as unbounded.
    null_literal : str
        Bare word that denotes the null element.
    """

    def __init__(
        self,
        converter: Callable[[str], Any],
        infinity_pattern: Pattern[str],
        null_literal: str,
    ) -> None:
        super().__init__()
        self._converter = converter
        self._infinity_pattern = infinity_pattern
        self._null_literal = null_literal

    def bare_value(self, items: list[Token]) -> _Value:
        """Transform an unquoted value."""
        token = items[0]
        return _Value(str(token), quoted=False, line=token.line, column=token.column)

    def quoted_value(self, items: list[Token]) -> _Value:
        """Transform a quoted value, removing the quotes and escapes."""
        token = items[0]
        return _Value(
            _unescape(str(token)[1:-1]), quoted=True, line=token.line, column=token.column
        )

    def operator(self, items: list[Token]) -> Operator:
        """Transform an operator token."""
        return _OPERATORS[items[0].type]

    def interval(self, items: list[Token | _Value]) -> Range:
        """Transform a two-valued literal into a bounded or unbounded range."""
        opening, closing = items[0], items[3]
        lower, upper = cast("_Value", items[1]), cast("_Value", items[2])
        inclusivity = Inclusivity.from_brackets(str(opening), str(closing))
        lower_unbounded = self._is_infinite(lower)
        upper_unbounded = self._is_infinite(upper)
        if lower_unbounded and upper_unbounded:
            return InfiniteRange()
        if lower_unbounded:
            return CeilingRange(ceiling=self._convert(upper), inclusivity=inclusivity)
        if upper_unbounded:
            return FloorRange(floor=self._convert(lower), inclusivity=inclusivity)
        return SingleIntervalRange(
            min=self._convert(lower), max=self._convert(upper), inclusivity=inclusivity
        )

    def element(self, items: list[Token | _Value]) -> Range:
        """Transform a single-valued literal."""
        values = [item for item in items if isinstance(item, _Value)]
        if not values:
            return EmptyRange()
        value = values[0]
        if not value.quoted and value.text == self._null_literal:
            return NullElementRange()
        return SingleElementRange(element=self._convert(value))

    def start(self, items: list[Range | Operator]) -> list[Range | Operator]:
        """Collect the top-level sequence."""
        return list(items)

    def _is_infinite(self, value: _Value) -> bool:
        return not value.quoted and self._infinity_pattern.fullmatch(value.text) is not None

    def _convert(self, value: _Value) -> Any:
        try:
            converted = self._converter(value.text)
        except Exception as e:
            raise ConversionError(
                f"Cannot convert {value.text!r}: {e}",
                value=value.text,
                line=value.line,
                column=value.column,
            ) from e
        if converted is None:
            raise ConversionError(
                f"Converter returned None for {value.text!r}",
                value=value.text,
                line=value.line,
                column=value.column,
            )
        return converted


def _resolve_infinity_pattern(
    infinity_markers: str | Pattern[str] | None, config: ParserConfig
) -> Pattern[str]:
    if infinity_markers is None:
        return config.infinity_pattern
    if isinstance(infinity_markers, str):
        return re.compile(infinity_markers, re.IGNORECASE)
    return re.compile(infinity_markers.pattern, infinity_markers.flags | re.IGNORECASE)


def tokenize(
    expression: str,
    converter: Callable[[str], Any],
    infinity_markers: str | Pattern[str] | None = None,
    config: ParserConfig | None = None,
) -> list[Range | Operator]:
    """Parse a range expression into its ranges and operators.

    Parameters
    ----------
    expression : str
        Range expression to parse.
    converter : Callable[[str], Any]
        Converts literal text into element values.
    infinity_markers : str | Pattern[str] | None
        Pattern for unbounded values; overrides ``config`` when given.
        Matched case-insensitively.
    config : ParserConfig | None
        Parser settings (default: :data:`rangealgebra.config.DEFAULT_CONFIG`).

    Returns
    -------
    list[Range | Operator]
        Literal ranges and operators in source order.

    Raises
    ------
    ParseError
        If the expression is malformed.
    ConversionError
        If a literal value cannot be converted.

    Examples
    --------
    >>> elements = tokenize("(1, 2) - [3]", float)
    >>> len(elements)
    3
    >>> elements[1]
    <Operator.SUBTRACTION: 'subtraction'>
    """
    config = config or DEFAULT_CONFIG
    builder = RangeBuilder(
        converter,
        _resolve_infinity_pattern(infinity_markers, config),
        config.null_literal,
    )
    try:
        tree = _PARSER.parse(expression)
        result = builder.transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc.with_text(expression) from e.orig_exc.__cause__
        raise ParseError(f"Invalid range literal: {e.orig_exc}", text=expression) from e.orig_exc
    except UnexpectedCharacters as e:
        # Must come before UnexpectedInput
        raise ParseError(
            f"Unexpected character {expression[e.pos_in_stream]!r}",
            line=e.line,
            column=e.column,
            text=expression,
        ) from e
    except UnexpectedInput as e:
        token_str = getattr(e, "token", "end of input")
        raise ParseError(
            f"Unexpected input: {token_str}",
            line=e.line,
            column=e.column,
            text=expression,
        ) from e
    except LarkError as e:
        raise ParseError(f"Parse error: {e}", text=expression) from e

    logger.debug("Parsed %d element(s) from %r", len(result), expression)
    return result


def parse(
    expression: str,
    converter: Callable[[str], Any],
    infinity_markers: str | Pattern[str] | None = None,
    config: ParserConfig | None = None,
) -> Range:
    """Parse and evaluate a range expression.

    Parameters
    ----------
    expression : str
        Range expression to parse.
    converter : Callable[[str], Any]
        Converts literal text into element values.
    infinity_markers : str | Pattern[str] | None
        Pattern for unbounded values; overrides ``config`` when given.
    config : ParserConfig | None
        Parser settings.

    Returns
    -------
    Range
        The range the expression describes.

    Raises
    ------
    ParseError
        If the expression is malformed.
    ConversionError
        If a literal value cannot be converted.

    Examples
    --------
    >>> str(parse("(1, 2)+[2, 3)", float))
    '(1.0, 3.0)'
    >>> str(parse("(-∞, 55.1]", float))
    '(-∞, 55.1]'
    >>> str(parse('("2.0")', float))
    '[2.0]'
    """
    elements = tokenize(expression, converter, infinity_markers=infinity_markers, config=config)
    try:
        return evaluate(elements)
    except ParseError as e:
        raise e.with_text(expression) from e.__cause__
