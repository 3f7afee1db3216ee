"""High-level chess rules: checkmate and stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesslite.core.enums import Color, GameResult
from chesslite.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chesslite.core.state import GameState


class Rules:
    """Static rule-checker that operates on a :class:`GameState`.

    Draws by repetition or the fifty-move rule are not detected.
    """

    @staticmethod
    def is_in_check(state: GameState, color: Color | None = None) -> bool:
        gen = MoveGenerator(state)
        return gen.is_in_check(state.side_to_move if color is None else color)

    @staticmethod
    def is_checkmate(state: GameState, color: Color | None = None) -> bool:
        color = state.side_to_move if color is None else color
        gen = MoveGenerator(state)
        if not gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def is_stalemate(state: GameState, color: Color | None = None) -> bool:
        color = state.side_to_move if color is None else color
        gen = MoveGenerator(state)
        if gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def game_result(state: GameState) -> GameResult:
        """Determine the result from the point of view of the side to move."""
        color = state.side_to_move
        gen = MoveGenerator(state)
        if gen.has_legal_move(color):
            return GameResult.IN_PROGRESS
        if gen.is_in_check(color):
            return GameResult.win_for(color.opposite)
        return GameResult.DRAW  # stalemate
