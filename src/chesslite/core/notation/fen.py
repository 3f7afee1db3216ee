"""FEN parsing and serialization for :class:`GameState`.

The halfmove clock and fullmove number are accepted on input but not
tracked, so output always carries ``0 1``.
"""

from __future__ import annotations

from chesslite.core.board import Board
from chesslite.core.enums import CastlingRights, Color, PieceType
from chesslite.core.piece import Piece
from chesslite.core.state import GameState
from chesslite.core.types import Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}

_KING_HOMES: dict[Color, Square] = {
    Color.WHITE: Square(7, 4),
    Color.BLACK: Square(0, 4),
}


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[Square(row, col)] = Piece.from_char(ch)
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
    return board


def state_from_fen(fen: str) -> GameState:
    """Parse a FEN string into a :class:`GameState`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    board = _parse_placement(placement, fen)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        expected_row = 2 if side == Color.WHITE else 5
        if ep.row != expected_row:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5–6. Clocks (optional, validated then dropped)
    for text in parts[4:]:
        if not text.isdigit():
            raise ValueError(f"Invalid FEN move counter: {text!r}")

    king_moved = {
        color: board[home] != Piece(color, PieceType.KING)
        for color, home in _KING_HOMES.items()
    }
    return GameState(
        board=board,
        side_to_move=side,
        castling=castling,
        en_passant=ep,
        king_moved=king_moved,
    )


def state_to_fen(state: GameState) -> str:
    """Serialise a :class:`GameState` to FEN."""
    # 1. Board
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = state.board[Square(row, col)]
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if state.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if state.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = square_name(state.en_passant) if state.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} 0 1"
