"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chesslite.core.engine import RulesEngine
from chesslite.core.enums import MoveKind
from chesslite.core.move import MoveOutcome
from chesslite.core.types import parse_square

PlayFn = Callable[..., list[MoveOutcome]]


@pytest.fixture
def engine() -> RulesEngine:
    """Engine on the standard starting position."""
    return RulesEngine()


@pytest.fixture
def play() -> PlayFn:
    """Return a helper that plays ``"e2e4"``-style moves on an engine.

    Every move must be accepted; the outcomes are returned in order.
    """

    def _play(eng: RulesEngine, *moves: str) -> list[MoveOutcome]:
        outcomes: list[MoveOutcome] = []
        for text in moves:
            outcome = eng.execute_move(parse_square(text[:2]), parse_square(text[2:4]))
            assert outcome.kind != MoveKind.INVALID, f"{text} was rejected"
            outcomes.append(outcome)
        return outcomes

    return _play
