"""GameState — board plus the bookkeeping the rules need between moves."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesslite.core.board import Board
from chesslite.core.enums import CastlingRights, CastlingSide, Color
from chesslite.core.types import Square


def _fresh_king_moved() -> dict[Color, bool]:
    return {Color.WHITE: False, Color.BLACK: False}


@dataclass(eq=True)
class GameState:
    """Full chess position: board, side to move, castling, en passant.

    Created once per game and mutated in place by
    :class:`~chesslite.core.engine.RulesEngine`.  Equality compares every
    field, so a snapshot taken with :meth:`copy` can be compared against the
    live state.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    king_moved: dict[Color, bool] = field(default_factory=_fresh_king_moved)
    promotion_pending: Square | None = None

    @classmethod
    def initial(cls) -> GameState:
        """Standard starting position with full castling rights."""
        return cls()

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def has_castling_right(self, color: Color, side: CastlingSide) -> bool:
        return bool(self.castling & CastlingRights.for_side(color, side))

    def set_castling_right(self, color: Color, side: CastlingSide, value: bool) -> None:
        flag = CastlingRights.for_side(color, side)
        if value:
            self.castling |= flag
        else:
            self.castling &= ~flag

    def mark_king_moved(self, color: Color) -> None:
        """Record that *color*'s king left home; both castles are gone."""
        self.king_moved[color] = True
        self.castling &= ~CastlingRights.for_color(color)

    # ── En passant ───────────────────────────────────────────────────────

    def set_en_passant(self, sq: Square) -> None:
        self.en_passant = sq

    def clear_en_passant(self) -> None:
        self.en_passant = None

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> GameState:
        """Independent deep copy."""
        return GameState(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            king_moved=dict(self.king_moved),
            promotion_pending=self.promotion_pending,
        )
