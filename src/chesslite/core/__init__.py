"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chesslite.core import RulesEngine, parse_square

    engine = RulesEngine()
    for sq in engine.legal_moves(parse_square("g1")):
        print(sq)
"""

from chesslite.core.board import Board
from chesslite.core.engine import PROMOTION_TYPES, PromotionError, RulesEngine
from chesslite.core.enums import (
    CastlingRights,
    CastlingSide,
    Color,
    GameResult,
    MoveKind,
    PieceType,
)
from chesslite.core.move import MoveOutcome
from chesslite.core.move_generator import MoveGenerator
from chesslite.core.notation import STARTING_FEN, state_from_fen, state_to_fen
from chesslite.core.piece import Piece
from chesslite.core.rules import Rules
from chesslite.core.state import GameState
from chesslite.core.types import Square, is_in_bounds, parse_square, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "CastlingSide",
    "Color",
    "GameResult",
    "MoveKind",
    "PieceType",
    # Types / helpers
    "Square",
    "is_in_bounds",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "GameState",
    "MoveGenerator",
    "MoveOutcome",
    "Piece",
    "PromotionError",
    "PROMOTION_TYPES",
    "Rules",
    "RulesEngine",
    # Notation
    "STARTING_FEN",
    "state_from_fen",
    "state_to_fen",
]
