"""Tests for game-layer definitions."""

import dataclasses

import pytest

from chesslite.core.notation import STARTING_FEN
from chesslite.game.interfaces import GameConfig, GamePhase


class TestGameConfig:
    def test_defaults(self) -> None:
        cfg = GameConfig()
        assert cfg.start_fen == STARTING_FEN
        assert cfg.auto_queen is False

    def test_frozen(self) -> None:
        cfg = GameConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.auto_queen = True  # type: ignore[misc]


def test_phase_order() -> None:
    assert GamePhase.NOT_STARTED < GamePhase.AWAITING_MOVE < GamePhase.GAME_OVER
