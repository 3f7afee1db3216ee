"""Pseudo-legal move generation and the legality filter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesslite.core import attacks
from chesslite.core.attacks import KING_OFFSETS, KNIGHT_OFFSETS, SLIDER_DIRS
from chesslite.core.enums import CastlingSide, Color, PieceType
from chesslite.core.types import Square

if TYPE_CHECKING:
    from chesslite.core.piece import Piece
    from chesslite.core.state import GameState

KING_HOME_COL = 4
ROOK_HOME_COLS: dict[CastlingSide, int] = {
    CastlingSide.KINGSIDE: 7,
    CastlingSide.QUEENSIDE: 0,
}


def home_row(color: Color) -> int:
    return 7 if color == Color.WHITE else 0


def en_passant_victim(state: GameState, from_sq: Square, to_sq: Square) -> Square | None:
    """Square of the pawn taken if *from_sq*→*to_sq* is an en-passant capture."""
    piece = state.board[from_sq]
    if (
        piece is None
        or piece.piece_type != PieceType.PAWN
        or state.en_passant is None
        or to_sq != state.en_passant
        or from_sq.col == to_sq.col
        or state.board[to_sq] is not None
    ):
        return None
    return Square(from_sq.row, to_sq.col)


class MoveGenerator:
    """Generates moves for the pieces of a :class:`GameState`.

    The legality filter mutates the board while probing a move but always
    restores it before returning.
    """

    __slots__ = ("_state", "_board")

    def __init__(self, state: GameState) -> None:
        self._state = state
        self._board = state.board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, sq: Square) -> list[Square]:
        """Legal destinations of the piece on *sq*, regardless of whose turn it is."""
        return [
            to_sq
            for to_sq in self.pseudo_legal_moves(sq)
            if not self.leaves_king_in_check(sq, to_sq)
        ]

    def legal_moves_for_color(self, color: Color) -> dict[Square, list[Square]]:
        """Every *color* piece that can move, mapped to its legal destinations."""
        result: dict[Square, list[Square]] = {}
        for sq in self._board.pieces(color):
            moves = self.legal_moves(sq)
            if moves:
                result[sq] = moves
        return result

    def has_legal_move(self, color: Color) -> bool:
        return any(self.legal_moves(sq) for sq in self._board.pieces(color))

    def pseudo_legal_moves(self, sq: Square) -> list[Square]:
        """Destinations allowed by the piece's movement pattern (may leave own king in check)."""
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Square] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(sq, piece, KNIGHT_OFFSETS, moves)
        elif ptype == PieceType.KING:
            self._gen_steps(sq, piece, KING_OFFSETS, moves)
            self._gen_castling(sq, piece.color, moves)
        else:
            self._gen_sliding(sq, piece, SLIDER_DIRS[ptype], moves)
        return moves

    def leaves_king_in_check(self, from_sq: Square, to_sq: Square) -> bool:
        """Would moving the piece on *from_sq* to *to_sq* expose its own king?

        The board is restored square-for-square before returning, including
        when the check test raises.
        """
        board = self._board
        piece = board[from_sq]
        if piece is None:
            return False

        victim_sq = en_passant_victim(self._state, from_sq, to_sq)
        captured = board.move_piece(from_sq, to_sq)
        lifted: Piece | None = None
        if victim_sq is not None:
            lifted = board[victim_sq]
            board[victim_sq] = None
        try:
            return attacks.is_in_check(board, piece.color)
        finally:
            board[from_sq] = piece
            board[to_sq] = captured
            if victim_sq is not None:
                board[victim_sq] = lifted

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return attacks.is_in_check(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return attacks.is_square_attacked(self._board, sq, by_color)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, piece: Piece, moves: list[Square]) -> None:
        board = self._board
        direction = attacks.pawn_direction(piece.color)

        one_step = sq.offset(direction, 0)
        if one_step is not None and board.is_empty(one_step):
            moves.append(one_step)
            if sq.row == attacks.pawn_start_row(piece.color):
                two_step = sq.offset(2 * direction, 0)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(two_step)

        for d_col in (-1, 1):
            cap_sq = sq.offset(direction, d_col)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != piece.color:
                    moves.append(cap_sq)
            elif cap_sq == self._state.en_passant:
                passed = board[Square(sq.row, cap_sq.col)]
                if (
                    passed is not None
                    and passed.piece_type == PieceType.PAWN
                    and passed.color != piece.color
                ):
                    moves.append(cap_sq)

    def _gen_steps(
        self,
        sq: Square,
        piece: Piece,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for d_row, d_col in offsets:
            to_sq = sq.offset(d_row, d_col)
            if to_sq is None:
                continue
            target = board[to_sq]
            if target is None or target.color != piece.color:
                moves.append(to_sq)

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        directions: tuple[tuple[int, int], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for d_row, d_col in directions:
            to_sq = sq.offset(d_row, d_col)
            while to_sq is not None:
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    to_sq = to_sq.offset(d_row, d_col)
                    continue
                if target.color != piece.color:
                    moves.append(to_sq)
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Square]) -> None:
        if self._state.king_moved[color]:
            return
        if king_sq != Square(home_row(color), KING_HOME_COL):
            return
        if self.is_in_check(color):
            return

        for side in (CastlingSide.KINGSIDE, CastlingSide.QUEENSIDE):
            if self.can_castle(king_sq, color, side):
                step = 1 if side == CastlingSide.KINGSIDE else -1
                moves.append(Square(king_sq.row, king_sq.col + 2 * step))

    def can_castle(self, king_sq: Square, color: Color, side: CastlingSide) -> bool:
        """Castling eligibility apart from the king-moved and in-check gates."""
        if not self._state.has_castling_right(color, side):
            return False

        board = self._board
        row = king_sq.row
        rook_col = ROOK_HOME_COLS[side]
        step = 1 if rook_col > king_sq.col else -1

        for col in range(king_sq.col + step, rook_col, step):
            if not board.is_empty(Square(row, col)):
                return False

        # The rights flag can outlive the rook, so look at the square itself.
        rook = board[Square(row, rook_col)]
        if rook is None or rook.piece_type != PieceType.ROOK or rook.color != color:
            return False

        opponent = color.opposite
        for col in range(king_sq.col, king_sq.col + 3 * step, step):
            if self.is_square_attacked(Square(row, col), opponent):
                return False
        return True
