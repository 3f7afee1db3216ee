"""RulesEngine — the single entry point a front end talks to.

Quick start::

    from chesslite.core import RulesEngine, parse_square

    engine = RulesEngine()
    engine.legal_moves(parse_square("e2"))   # [e3, e4]
    engine.execute_move(parse_square("e2"), parse_square("e4"))
"""

from __future__ import annotations

import logging

from chesslite.core.attacks import promotion_row
from chesslite.core.enums import CastlingRights, Color, MoveKind, PieceType
from chesslite.core.move import MoveOutcome
from chesslite.core.move_generator import (
    ROOK_HOME_COLS,
    MoveGenerator,
    en_passant_victim,
    home_row,
)
from chesslite.core.piece import Piece
from chesslite.core.rules import Rules
from chesslite.core.state import GameState
from chesslite.core.types import Square

_LOGGER = logging.getLogger(__name__)

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


def _rook_corners() -> dict[Square, CastlingRights]:
    corners: dict[Square, CastlingRights] = {}
    for color in (Color.WHITE, Color.BLACK):
        for side, col in ROOK_HOME_COLS.items():
            corners[Square(home_row(color), col)] = CastlingRights.for_side(color, side)
    return corners


_ROOK_CORNERS = _rook_corners()


class PromotionError(ValueError):
    """``complete_promotion`` was called out of sequence or with a bad piece."""


class RulesEngine:
    """Owns a :class:`GameState` and applies the rules of chess to it.

    Queries never change the state.  :meth:`execute_move` and
    :meth:`complete_promotion` either apply their whole effect or leave the
    state untouched.
    """

    __slots__ = ("_state",)

    def __init__(self, state: GameState | None = None) -> None:
        self._state = state if state is not None else GameState.initial()

    @classmethod
    def from_fen(cls, fen: str) -> RulesEngine:
        from chesslite.core.notation import state_from_fen

        return cls(state_from_fen(fen))

    def to_fen(self) -> str:
        from chesslite.core.notation import state_to_fen

        return state_to_fen(self._state)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def promotion_pending(self) -> Square | None:
        return self._state.promotion_pending

    def side_to_move(self) -> Color:
        return self._state.side_to_move

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, sq: Square) -> list[Square]:
        """Legal destinations for the piece on *sq*.

        Empty for an empty square, an opponent's piece, or while a promotion
        choice is outstanding.
        """
        state = self._state
        piece = state.board[sq]
        if piece is None or piece.color != state.side_to_move:
            return []
        if state.promotion_pending is not None:
            return []
        return MoveGenerator(state).legal_moves(sq)

    def is_in_check(self, color: Color) -> bool:
        return Rules.is_in_check(self._state, color)

    def checkmate(self, color: Color) -> bool:
        return Rules.is_checkmate(self._state, color)

    def stalemate(self, color: Color) -> bool:
        return Rules.is_stalemate(self._state, color)

    # ── Mutations ────────────────────────────────────────────────────────

    def execute_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        """Play *from_sq*→*to_sq* for the side to move if it is legal."""
        if to_sq not in self.legal_moves(from_sq):
            _LOGGER.debug("Rejected move %s%s", from_sq, to_sq)
            return MoveOutcome.invalid()

        state = self._state
        board = state.board
        piece = board[from_sq]
        assert piece is not None

        if piece.piece_type == PieceType.KING and abs(to_sq.col - from_sq.col) == 2:
            self._castle(from_sq, to_sq, piece.color)
            return MoveOutcome(MoveKind.CASTLED)

        victim_sq = en_passant_victim(state, from_sq, to_sq)
        captured = board.move_piece(from_sq, to_sq)
        if victim_sq is not None:
            captured = board[victim_sq]
            board[victim_sq] = None

        self._update_castling(piece, from_sq, to_sq)

        if piece.piece_type == PieceType.PAWN and abs(to_sq.row - from_sq.row) == 2:
            state.set_en_passant(Square((from_sq.row + to_sq.row) // 2, from_sq.col))
        else:
            state.clear_en_passant()

        if piece.piece_type == PieceType.PAWN and to_sq.row == promotion_row(piece.color):
            state.promotion_pending = to_sq
            return MoveOutcome.promotion_pending(to_sq)

        state.side_to_move = state.side_to_move.opposite
        if captured is not None:
            return MoveOutcome(MoveKind.MOVED_WITH_CAPTURE)
        return MoveOutcome(MoveKind.MOVED)

    def complete_promotion(self, sq: Square, piece_type: PieceType) -> None:
        """Replace the pawn waiting on *sq* and hand the turn over."""
        state = self._state
        if state.promotion_pending is None or state.promotion_pending != sq:
            raise PromotionError(f"No promotion pending on {sq}")
        if piece_type not in PROMOTION_TYPES:
            raise PromotionError(f"Cannot promote to {piece_type.name}")

        pawn = state.board[sq]
        assert pawn is not None
        state.board[sq] = Piece(pawn.color, piece_type)
        state.promotion_pending = None
        state.side_to_move = state.side_to_move.opposite
        _LOGGER.debug("Promoted on %s to %s", sq, piece_type.name)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _castle(self, king_from: Square, king_to: Square, color: Color) -> None:
        state = self._state
        board = state.board
        row = king_from.row
        if king_to.col > king_from.col:
            rook_from, rook_to = Square(row, 7), Square(row, king_to.col - 1)
        else:
            rook_from, rook_to = Square(row, 0), Square(row, king_to.col + 1)

        board.move_piece(king_from, king_to)
        board.move_piece(rook_from, rook_to)
        state.mark_king_moved(color)
        state.clear_en_passant()
        state.side_to_move = state.side_to_move.opposite

    def _update_castling(self, piece: Piece, from_sq: Square, to_sq: Square) -> None:
        state = self._state
        if piece.piece_type == PieceType.KING:
            state.mark_king_moved(piece.color)

        # A rook leaving its corner, or anything landing on one, ends that castle.
        for sq in (from_sq, to_sq):
            flag = _ROOK_CORNERS.get(sq)
            if flag is not None:
                state.castling &= ~flag
