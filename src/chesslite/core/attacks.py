"""Board geometry and attack detection.

Attack shapes for knights, kings and sliders coincide with their move
shapes.  Pawns differ: a pawn attacks both forward diagonals whether or not
anything stands there, and never attacks the square in front of it.
"""

from __future__ import annotations

from chesslite.core.board import Board
from chesslite.core.enums import Color, PieceType
from chesslite.core.types import Square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


def pawn_direction(color: Color) -> int:
    """Row step of a pawn of *color*: White heads to row 0, Black to row 7."""
    return -1 if color == Color.WHITE else 1


def pawn_start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def is_line_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """True when *from_sq* and *to_sq* share a rank, file or diagonal and
    every square strictly between them is empty.
    """
    d_row = to_sq.row - from_sq.row
    d_col = to_sq.col - from_sq.col
    if (d_row, d_col) == (0, 0):
        return False
    if d_row and d_col and abs(d_row) != abs(d_col):
        return False

    step_row, step_col = _sign(d_row), _sign(d_col)
    row, col = from_sq.row + step_row, from_sq.col + step_col
    while (row, col) != to_sq:
        if board[Square(row, col)] is not None:
            return False
        row += step_row
        col += step_col
    return True


def attacks_square(board: Board, from_sq: Square, target: Square) -> bool:
    """Does the piece on *from_sq* attack *target*?"""
    piece = board[from_sq]
    if piece is None or from_sq == target:
        return False

    d_row = target.row - from_sq.row
    d_col = target.col - from_sq.col
    ptype = piece.piece_type

    if ptype == PieceType.PAWN:
        return d_row == pawn_direction(piece.color) and abs(d_col) == 1
    if ptype == PieceType.KNIGHT:
        return (d_row, d_col) in KNIGHT_OFFSETS
    if ptype == PieceType.KING:
        return max(abs(d_row), abs(d_col)) == 1

    diagonal = abs(d_row) == abs(d_col)
    straight = d_row == 0 or d_col == 0
    if ptype == PieceType.BISHOP and not diagonal:
        return False
    if ptype == PieceType.ROOK and not straight:
        return False
    return is_line_clear(board, from_sq, target)


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    return any(attacks_square(board, from_sq, sq) for from_sq in board.pieces(by_color))


def attackers_of(board: Board, sq: Square, by_color: Color) -> list[Square]:
    """Squares of every *by_color* piece attacking *sq*."""
    return [from_sq for from_sq in board.pieces(by_color) if attacks_square(board, from_sq, sq)]


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    Raises ``ValueError`` when *color* has no king on the board.
    """
    return is_square_attacked(board, board.king_square(color), color.opposite)
