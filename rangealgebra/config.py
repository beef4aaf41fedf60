"""Parser configuration."""

from __future__ import annotations

import os
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_INFINITY_MARKERS = r"[+-]?(∞|inf|infty|infinity)"

ENV_PREFIX = "RANGEALGEBRA_"


class ParserConfig(BaseModel):
    """Settings for reading range expressions.

    Parameters
    ----------
    infinity_markers : str
        Regular expression that marks an unbounded side when it fully
        matches a bare literal value. Matched case-insensitively.
    null_literal : str
        Bare word that denotes the null element in a single-element literal.

    Examples
    --------
    >>> config = ParserConfig()
    >>> bool(config.infinity_pattern.fullmatch("-Infinity"))
    True
    >>> config.null_literal
    'null'
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    infinity_markers: str = Field(
        default=DEFAULT_INFINITY_MARKERS,
        description="Pattern for unbounded literal values",
    )
    null_literal: str = Field(
        default="null", min_length=1, description="Literal for the null element"
    )

    @field_validator("infinity_markers")
    @classmethod
    def validate_infinity_markers(cls, v: str) -> str:
        """Validate that the infinity markers compile as a regular expression."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"infinity_markers is not a valid pattern: {e}") from e
        return v

    @property
    def infinity_pattern(self) -> re.Pattern[str]:
        """The compiled, case-insensitive infinity-marker pattern."""
        return re.compile(self.infinity_markers, re.IGNORECASE)

    @classmethod
    def from_env(cls) -> ParserConfig:
        """Build a configuration from ``RANGEALGEBRA_*`` environment variables.

        ``RANGEALGEBRA_INFINITY_MARKERS`` and ``RANGEALGEBRA_NULL_LITERAL``
        override the defaults when set.
        """
        overrides = {}
        for field_name in cls.model_fields:
            value = os.environ.get(f"{ENV_PREFIX}{field_name.upper()}")
            if value is not None:
                overrides[field_name] = value
        return cls(**overrides)


DEFAULT_CONFIG = ParserConfig()
