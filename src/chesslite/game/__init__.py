"""Game management layer — selection, turn flow and game-over tracking.

Quick start::

    from chesslite.core import parse_square
    from chesslite.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.click(parse_square("e2"))
    ctrl.click(parse_square("e4"))
"""

from chesslite.game.controller import GameController, GameEvents
from chesslite.game.interfaces import GameConfig, GameEndReason, GamePhase

__all__ = [
    "GameConfig",
    "GameController",
    "GameEndReason",
    "GameEvents",
    "GamePhase",
]
