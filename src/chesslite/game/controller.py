"""GameController — runs one game on top of :class:`RulesEngine`.

Tracks the selected square, the game phase and the result, and emits
events via simple callbacks so a UI / tests can subscribe.  Rendering,
clocks and sound live outside; a clock reports time-outs via
:meth:`GameController.flag_fall`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chesslite.core.engine import PromotionError, RulesEngine
from chesslite.core.enums import Color, GameResult, MoveKind, PieceType
from chesslite.core.move import MoveOutcome
from chesslite.core.types import Square
from chesslite.game.interfaces import GameConfig, GameEndReason, GamePhase

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Square, Square, MoveOutcome], None]  # from, to, outcome
PromotionCallback = Callable[[Square, Color], None]  # square, promoting color
CheckCallback = Callable[[Color], None]  # color in check
GameOverCallback = Callable[[GameResult, GameEndReason], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Orchestrates a chess game: selection, moves, promotion, game end.

    Methods are meant to be called from a single thread.
    """

    __slots__ = (
        "_config",
        "_engine",
        "_phase",
        "_result",
        "_end_reason",
        "_selected",
        "_last_move",
        "_promotion_outcome",
        "events",
    )

    def __init__(self, config: GameConfig | None = None) -> None:
        self._config = config if config is not None else GameConfig()
        self._engine = RulesEngine()
        self._phase = GamePhase.NOT_STARTED
        self._result = GameResult.IN_PROGRESS
        self._end_reason: GameEndReason | None = None
        self._selected: Square | None = None
        self._last_move: tuple[Square, Square] | None = None
        self._promotion_outcome: MoveOutcome | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def engine(self) -> RulesEngine:
        return self._engine

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def end_reason(self) -> GameEndReason | None:
        return self._end_reason

    @property
    def selected(self) -> Square | None:
        return self._selected

    @property
    def is_game_over(self) -> bool:
        return self._phase == GamePhase.GAME_OVER

    @property
    def side_to_move(self) -> Color:
        return self._engine.side_to_move()

    def highlighted_moves(self) -> list[Square]:
        """Legal destinations of the selected piece (empty if none selected)."""
        if self._selected is None:
            return []
        return self._engine.legal_moves(self._selected)

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        """Set up a new game from *fen* or the configured start position."""
        self._engine = RulesEngine.from_fen(fen or self._config.start_fen)
        self._result = GameResult.IN_PROGRESS
        self._end_reason = None
        self._selected = None
        self._last_move = None
        self._promotion_outcome = None
        _LOGGER.debug("New game: %s", self._engine.to_fen())
        self._set_phase(GamePhase.AWAITING_MOVE)
        self._evaluate_position()

    def resign(self, color: Color) -> None:
        if self._phase in (GamePhase.NOT_STARTED, GamePhase.GAME_OVER):
            return
        self._finish(GameResult.win_for(color.opposite), GameEndReason.RESIGNATION)

    def flag_fall(self, color: Color) -> None:
        """Time ran out for *color*."""
        if self._phase in (GamePhase.NOT_STARTED, GamePhase.GAME_OVER):
            return
        self._finish(GameResult.win_for(color.opposite), GameEndReason.TIMEOUT)

    # ── Input ────────────────────────────────────────────────────────────

    def click(self, sq: Square) -> MoveOutcome | None:
        """Feed a square picked by the user.

        With nothing selected, picking one of the mover's pieces selects it.
        With a selection, picking the same square clears it, picking another
        own piece switches to it, and any other square attempts the move.
        Returns the move outcome when a move was attempted.
        """
        if self._phase != GamePhase.AWAITING_MOVE:
            return None

        piece = self._engine.state.board[sq]
        own = piece is not None and piece.color == self.side_to_move

        if self._selected is None:
            if own:
                self.select(sq)
            return None
        if sq == self._selected:
            self.deselect()
            return None
        if own:
            self.select(sq)
            return None
        return self.submit_move(self._selected, sq)

    def select(self, sq: Square) -> list[Square]:
        """Select the mover's piece on *sq* and return its legal destinations."""
        piece = self._engine.state.board[sq]
        if (
            self._phase != GamePhase.AWAITING_MOVE
            or piece is None
            or piece.color != self.side_to_move
        ):
            return []
        self._selected = sq
        return self._engine.legal_moves(sq)

    def deselect(self) -> None:
        self._selected = None

    def submit_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        """Play a move. An invalid request clears the selection and changes nothing else.

        A promoting move returns ``PROMOTION_PENDING`` and waits for
        :meth:`choose_promotion`, unless ``auto_queen`` is set, in which case
        it is finished at once and reported as ``MOVED`` or
        ``MOVED_WITH_CAPTURE``.
        """
        if self._phase != GamePhase.AWAITING_MOVE:
            return MoveOutcome.invalid()

        # Promotions never capture en passant, so the target square tells.
        captures = self._engine.state.board[to_sq] is not None
        outcome = self._engine.execute_move(from_sq, to_sq)
        self._selected = None
        if not outcome.accepted:
            return outcome

        self._last_move = (from_sq, to_sq)
        _LOGGER.debug("Move %s%s -> %s", from_sq, to_sq, outcome)

        if outcome.kind == MoveKind.PROMOTION_PENDING:
            assert outcome.square is not None
            self._promotion_outcome = MoveOutcome(
                MoveKind.MOVED_WITH_CAPTURE if captures else MoveKind.MOVED
            )
            if self._config.auto_queen:
                self._engine.complete_promotion(outcome.square, PieceType.QUEEN)
                return self._after_promotion()
            self._set_phase(GamePhase.AWAITING_PROMOTION)
            color = self.side_to_move
            for cb in self.events.on_promotion_required:
                cb(outcome.square, color)
            return outcome

        self._after_move(outcome)
        return outcome

    def choose_promotion(self, piece_type: PieceType) -> None:
        """Finish a pending promotion with *piece_type*.

        Raises :class:`~chesslite.core.engine.PromotionError` when no promotion
        is pending or *piece_type* is not a legal choice.
        """
        sq = self._engine.promotion_pending
        if self._phase != GamePhase.AWAITING_PROMOTION or sq is None:
            raise PromotionError("No promotion pending")
        self._engine.complete_promotion(sq, piece_type)
        self._set_phase(GamePhase.AWAITING_MOVE)
        self._after_promotion()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _after_promotion(self) -> MoveOutcome:
        outcome = self._promotion_outcome
        assert outcome is not None
        self._promotion_outcome = None
        self._after_move(outcome)
        return outcome

    def _after_move(self, outcome: MoveOutcome) -> None:
        if self._last_move is not None:
            from_sq, to_sq = self._last_move
            for cb in self.events.on_move:
                cb(from_sq, to_sq, outcome)
        self._evaluate_position()

    def _evaluate_position(self) -> None:
        engine = self._engine
        color = engine.side_to_move()
        if engine.checkmate(color):
            self._finish(GameResult.win_for(color.opposite), GameEndReason.CHECKMATE)
        elif engine.stalemate(color):
            self._finish(GameResult.DRAW, GameEndReason.STALEMATE)
        elif engine.is_in_check(color):
            for cb in self.events.on_check:
                cb(color)

    def _finish(self, result: GameResult, reason: GameEndReason) -> None:
        self._result = result
        self._end_reason = reason
        self._selected = None
        _LOGGER.info("Game over: %s (%s)", result.name, reason.name)
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result, reason)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
