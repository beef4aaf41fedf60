"""CLI entry point for rangealgebra package.

Allows running via: python -m rangealgebra
"""

from __future__ import annotations

from rangealgebra.cli import cli

if __name__ == "__main__":
    cli()
