"""Shared definitions for the game layer: phases, end reasons, configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from chesslite.core.notation import STARTING_FEN


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a finished game ended."""

    CHECKMATE = auto()
    STALEMATE = auto()
    TIMEOUT = auto()
    RESIGNATION = auto()


# ── Configuration ────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Session settings.

    Args:
        start_fen: Position every new game starts from.
        auto_queen: Promote to a queen without waiting for a choice.
    """

    start_fen: str = STARTING_FEN
    auto_queen: bool = False
