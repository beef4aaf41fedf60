"""Main CLI entry point for rangealgebra.

This module defines the main CLI group and the commands for evaluating,
querying and comparing range expressions.
"""

from __future__ import annotations

import logging
from typing import Any

import click
from pydantic import ValidationError
from rich.table import Table
from rich.text import Text

from rangealgebra import __version__
from rangealgebra.cli.utils import VALUE_TYPES, console, print_error
from rangealgebra.config import ParserConfig
from rangealgebra.errors import RangeError
from rangealgebra.parser import parse
from rangealgebra.ranges import Range

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="rangealgebra")
@click.option(
    "--type",
    "value_type",
    type=click.Choice(sorted(VALUE_TYPES)),
    default="float",
    show_default=True,
    help="Element type that literal values are converted to",
)
@click.option(
    "--infinity-markers",
    type=str,
    default=None,
    help="Regular expression for unbounded values (overrides RANGEALGEBRA_INFINITY_MARKERS)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    value_type: str,
    infinity_markers: str | None,
    verbose: bool,
) -> None:
    r"""Set algebra over ranges of ordered values.

    \b
    Examples:
        $ rangealgebra eval "(1, 2) + [2, 3)"
        $ rangealgebra --type int contains "[1, 5) - [2, 3]" 4
        $ rangealgebra --type date compare "[2024-01-01, 2024-06-01)" "[2024-03-01, ∞)"
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        config = ParserConfig.from_env()
        if infinity_markers is not None:
            config = ParserConfig(**{**config.model_dump(), "infinity_markers": infinity_markers})
    except ValidationError as e:
        print_error(f"Invalid parser configuration: {e}")
        ctx.exit(1)

    ctx.ensure_object(dict)
    ctx.obj["converter"] = VALUE_TYPES[value_type]
    ctx.obj["config"] = config
    logger.debug("Using %s values", value_type)


def _parse(ctx: click.Context, expression: str) -> Range:
    return parse(expression, ctx.obj["converter"], config=ctx.obj["config"])


def _show(text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


@cli.command(name="eval")
@click.argument("expression")
@click.pass_context
def eval_command(ctx: click.Context, expression: str) -> None:
    """Evaluate a range expression and print the resulting range.

    Parameters
    ----------
    ctx : click.Context
        Click context object.
    expression : str
        Range expression, e.g. ``"[1, 5) - [2, 3]"``.
    """
    try:
        _show(str(_parse(ctx, expression)))
    except (RangeError, ValidationError, TypeError) as e:
        print_error(str(e))
        ctx.exit(1)


@cli.command()
@click.argument("expression")
@click.argument("value")
@click.pass_context
def contains(ctx: click.Context, expression: str, value: str) -> None:
    """Print whether VALUE is a member of the range EXPRESSION.

    VALUE is converted with the selected --type; the null literal tests
    membership of the null element.

    Parameters
    ----------
    ctx : click.Context
        Click context object.
    expression : str
        Range expression.
    value : str
        Candidate element.
    """
    config: ParserConfig = ctx.obj["config"]
    item: Any = None
    if value != config.null_literal:
        try:
            item = ctx.obj["converter"](value)
        except (ValueError, ArithmeticError) as e:
            raise click.BadParameter(f"cannot convert {value!r}: {e}", param_hint="VALUE") from e
    try:
        _show("true" if _parse(ctx, expression).contains(item) else "false")
    except (RangeError, ValidationError, TypeError) as e:
        print_error(str(e))
        ctx.exit(1)


@cli.command()
@click.argument("left")
@click.argument("right")
@click.pass_context
def compare(ctx: click.Context, left: str, right: str) -> None:
    """Compare two range expressions.

    Prints a table with the relation of RIGHT to LEFT and the results of
    union, intersection and both differences.

    Parameters
    ----------
    ctx : click.Context
        Click context object.
    left : str
        First range expression.
    right : str
        Second range expression.
    """
    try:
        a = _parse(ctx, left)
        b = _parse(ctx, right)
        rows = [
            ("relation", a.relation_to(b).name),
            ("union", str(a | b)),
            ("intersection", str(a & b)),
            ("left - right", str(a - b)),
            ("right - left", str(b - a)),
        ]
    except (RangeError, ValidationError, TypeError) as e:
        print_error(str(e))
        ctx.exit(1)

    table = Table(title=Text(f"{a} vs {b}"))
    table.add_column("Operation", style="cyan")
    table.add_column("Result", style="green")
    for name, result in rows:
        table.add_row(name, Text(result))
    console.print(table)
