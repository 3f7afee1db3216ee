"""Notation package: FEN parsing and serialization."""

from chesslite.core.notation.fen import STARTING_FEN, state_from_fen, state_to_fen

__all__ = [
    "STARTING_FEN",
    "state_from_fen",
    "state_to_fen",
]
