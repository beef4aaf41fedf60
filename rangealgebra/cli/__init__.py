"""Command-line interface.

Provides commands for evaluating range expressions, testing membership
and comparing two ranges.
"""

from __future__ import annotations

from rangealgebra.cli.main import cli

__all__ = ["cli"]
