"""rangealgebra - Set algebra over ranges of ordered values.

Ranges of any totally ordered element type can be built directly, combined
with union, intersection and subtraction, classified against one another,
and read from or written to a compact textual notation such as
``"[1, 5) - [2, 3]"``.
"""

from __future__ import annotations

from rangealgebra.config import DEFAULT_CONFIG, ParserConfig
from rangealgebra.errors import ConversionError, ParseError, RangeError
from rangealgebra.evaluator import Operator, evaluate
from rangealgebra.inclusivity import Inclusivity, render_value
from rangealgebra.parser import parse, tokenize
from rangealgebra.ranges import (
    CeilingRange,
    EmptyRange,
    FloorRange,
    InfiniteRange,
    MultipleIntervalRange,
    NullElementRange,
    Overlap,
    Range,
    SingleElementRange,
    SingleIntervalRange,
)

__version__ = "0.1.0"

__all__ = [
    # Ranges
    "Range",
    "EmptyRange",
    "InfiniteRange",
    "NullElementRange",
    "SingleElementRange",
    "SingleIntervalRange",
    "FloorRange",
    "CeilingRange",
    "MultipleIntervalRange",
    "Overlap",
    "Inclusivity",
    "render_value",
    # Parsing
    "parse",
    "tokenize",
    "evaluate",
    "Operator",
    "ParserConfig",
    "DEFAULT_CONFIG",
    # Errors
    "RangeError",
    "ParseError",
    "ConversionError",
]
