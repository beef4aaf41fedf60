"""Root pytest configuration for rangealgebra tests."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from rangealgebra.inclusivity import Inclusivity
from rangealgebra.ranges import SingleIntervalRange


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep parser settings from the environment out of tests."""
    monkeypatch.delenv("RANGEALGEBRA_INFINITY_MARKERS", raising=False)
    monkeypatch.delenv("RANGEALGEBRA_NULL_LITERAL", raising=False)


@pytest.fixture
def closed_open() -> SingleIntervalRange:
    """Provide [1, 5)."""
    return SingleIntervalRange(min=1, max=5, inclusivity=Inclusivity.LOWER)
