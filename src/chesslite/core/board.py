"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from chesslite.core.enums import Color, PieceType
from chesslite.core.piece import Piece
from chesslite.core.types import ALL_SQUARES, Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional pieces, indexed by :class:`Square`.

    The board does no legality checking of its own; callers decide which
    relocations are allowed.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._grid[sq[0]][sq[1]] = piece

    def piece_at(self, sq: Square) -> Piece | None:
        return self._grid[sq[0]][sq[1]]

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq[0]][sq[1]] is None

    def move_piece(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Relocate whatever stands on *from_sq* to *to_sq*.

        Returns the piece that was overwritten on *to_sq*, if any.
        """
        captured = self[to_sq]
        self[to_sq] = self[from_sq]
        self[from_sq] = None
        return captured

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, in row-major order."""
        grid = self._grid
        return [
            sq
            for sq in ALL_SQUARES
            if (p := grid[sq.row][sq.col]) is not None and p.color == color
        ]

    def find(self, piece: Piece) -> list[Square]:
        """Squares holding exactly *piece*."""
        grid = self._grid
        return [sq for sq in ALL_SQUARES if grid[sq.row][sq.col] == piece]

    def king_square(self, color: Color) -> Square:
        """Return the king square for *color*."""
        king = Piece(color, PieceType.KING)
        for sq in ALL_SQUARES:
            if self._grid[sq.row][sq.col] == king:
                return sq
        raise ValueError(f"No {color.name} king on board")

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b[Square(0, col)] = Piece(Color.BLACK, pt)
            b[Square(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Square(7, col)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
