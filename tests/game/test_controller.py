"""Tests for GameController — selection, turn flow and game end."""

import logging

import pytest

from chesslite.core.engine import PromotionError
from chesslite.core.enums import Color, GameResult, MoveKind, PieceType
from chesslite.core.piece import Piece
from chesslite.core.types import A7, A8, B8, E1, E2, E4, E7, parse_square
from chesslite.game.controller import GameController
from chesslite.game.interfaces import GameConfig, GameEndReason, GamePhase

PROMOTION_FEN = "4k3/P7/8/8/8/8/8/4K3 w - - 0 1"


def _started(fen: str | None = None, **config: object) -> GameController:
    ctrl = GameController(GameConfig(**config)) if config else GameController()
    ctrl.new_game(fen)
    return ctrl


def _move(ctrl: GameController, text: str) -> None:
    outcome = ctrl.submit_move(parse_square(text[:2]), parse_square(text[2:]))
    assert outcome.accepted, text


class TestNewGame:
    def test_not_started(self) -> None:
        ctrl = GameController()
        assert ctrl.phase == GamePhase.NOT_STARTED
        assert ctrl.click(E2) is None
        assert ctrl.selected is None

    def test_phase_awaiting(self) -> None:
        ctrl = _started()
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.result == GameResult.IN_PROGRESS
        assert ctrl.side_to_move == Color.WHITE

    def test_custom_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        ctrl = _started(fen)
        assert ctrl.side_to_move == Color.BLACK

    def test_config_start_fen(self) -> None:
        ctrl = _started(start_fen=PROMOTION_FEN)
        assert ctrl.engine.state.board[A7] == Piece(Color.WHITE, PieceType.PAWN)

    def test_finished_position_ends_immediately(self) -> None:
        ctrl = _started("7k/5K2/6Q1/8/8/8/8/8 b - - 0 1")
        assert ctrl.is_game_over
        assert ctrl.end_reason == GameEndReason.STALEMATE

    def test_new_game_resets(self) -> None:
        ctrl = _started()
        ctrl.resign(Color.WHITE)
        ctrl.new_game()
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.result == GameResult.IN_PROGRESS
        assert ctrl.end_reason is None


class TestSelection:
    def test_select_own_piece(self) -> None:
        ctrl = _started()
        assert ctrl.click(E2) is None
        assert ctrl.selected == E2
        assert set(ctrl.highlighted_moves()) == {parse_square("e3"), E4}

    def test_cannot_select_opponent(self) -> None:
        ctrl = _started()
        ctrl.click(E7)
        assert ctrl.selected is None
        assert ctrl.select(E7) == []

    def test_click_again_deselects(self) -> None:
        ctrl = _started()
        ctrl.click(E2)
        ctrl.click(E2)
        assert ctrl.selected is None
        assert ctrl.highlighted_moves() == []

    def test_click_other_own_piece_switches(self) -> None:
        ctrl = _started()
        ctrl.click(E2)
        ctrl.click(parse_square("g1"))
        assert ctrl.selected == parse_square("g1")

    def test_click_destination_moves(self) -> None:
        ctrl = _started()
        ctrl.click(E2)
        outcome = ctrl.click(E4)
        assert outcome is not None and outcome.kind == MoveKind.MOVED
        assert ctrl.selected is None
        assert ctrl.side_to_move == Color.BLACK

    def test_click_illegal_destination_clears_selection(self) -> None:
        ctrl = _started()
        ctrl.click(E2)
        outcome = ctrl.click(parse_square("e5"))
        assert outcome is not None and outcome.kind == MoveKind.INVALID
        assert ctrl.selected is None
        assert ctrl.side_to_move == Color.WHITE


class TestEvents:
    def test_move_and_check_events(self) -> None:
        ctrl = _started()
        moves: list[tuple[str, str]] = []
        checks: list[Color] = []
        ctrl.events.on_move.append(lambda f, t, _o: moves.append((str(f), str(t))))
        ctrl.events.on_check.append(checks.append)

        for text in ("e2e4", "f7f6", "d1h5"):
            _move(ctrl, text)
        assert moves == [("e2", "e4"), ("f7", "f6"), ("d1", "h5")]
        assert checks == [Color.BLACK]

    def test_phase_events(self) -> None:
        ctrl = GameController()
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.new_game()
        ctrl.resign(Color.BLACK)
        assert phases == [GamePhase.AWAITING_MOVE, GamePhase.GAME_OVER]


class TestGameEnd:
    def test_checkmate(self, caplog: pytest.LogCaptureFixture) -> None:
        ctrl = _started()
        results: list[tuple[GameResult, GameEndReason]] = []
        ctrl.events.on_game_over.append(lambda r, why: results.append((r, why)))

        with caplog.at_level(logging.INFO, logger="chesslite.game.controller"):
            for text in ("f2f3", "e7e5", "g2g4", "d8h4"):
                _move(ctrl, text)

        assert ctrl.is_game_over
        assert ctrl.result == GameResult.BLACK_WINS
        assert ctrl.end_reason == GameEndReason.CHECKMATE
        assert results == [(GameResult.BLACK_WINS, GameEndReason.CHECKMATE)]
        assert "Game over" in caplog.text

    def test_stalemate(self) -> None:
        ctrl = _started("7k/5K2/8/6Q1/8/8/8/8 w - - 0 1")
        _move(ctrl, "g5g6")
        assert ctrl.result == GameResult.DRAW
        assert ctrl.end_reason == GameEndReason.STALEMATE

    def test_no_moves_after_game_over(self) -> None:
        ctrl = _started()
        ctrl.resign(Color.WHITE)
        assert ctrl.result == GameResult.BLACK_WINS
        assert ctrl.end_reason == GameEndReason.RESIGNATION
        outcome = ctrl.submit_move(E2, E4)
        assert outcome.kind == MoveKind.INVALID
        assert ctrl.click(E2) is None

    def test_flag_fall(self) -> None:
        ctrl = _started()
        ctrl.flag_fall(Color.BLACK)
        assert ctrl.result == GameResult.WHITE_WINS
        assert ctrl.end_reason == GameEndReason.TIMEOUT

    def test_second_ending_ignored(self) -> None:
        ctrl = _started()
        ctrl.flag_fall(Color.WHITE)
        ctrl.resign(Color.BLACK)
        assert ctrl.result == GameResult.BLACK_WINS
        assert ctrl.end_reason == GameEndReason.TIMEOUT


class TestPromotion:
    def test_waits_for_choice(self) -> None:
        ctrl = _started(PROMOTION_FEN)
        requests: list[tuple[str, Color]] = []
        moves: list[MoveKind] = []
        ctrl.events.on_promotion_required.append(lambda sq, c: requests.append((str(sq), c)))
        ctrl.events.on_move.append(lambda _f, _t, o: moves.append(o.kind))

        outcome = ctrl.submit_move(A7, A8)
        assert outcome.kind == MoveKind.PROMOTION_PENDING
        assert ctrl.phase == GamePhase.AWAITING_PROMOTION
        assert requests == [("a8", Color.WHITE)]
        assert moves == []

        # Input is ignored until the choice is made.
        assert ctrl.click(E1) is None
        assert ctrl.submit_move(E1, E2).kind == MoveKind.INVALID

        ctrl.choose_promotion(PieceType.ROOK)
        assert ctrl.engine.state.board[A8] == Piece(Color.WHITE, PieceType.ROOK)
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.side_to_move == Color.BLACK
        assert moves == [MoveKind.MOVED]

    def test_capture_promotion_reported_as_capture(self) -> None:
        ctrl = _started("1n2k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        moves: list[MoveKind] = []
        ctrl.events.on_move.append(lambda _f, _t, o: moves.append(o.kind))

        ctrl.submit_move(A7, B8)
        ctrl.choose_promotion(PieceType.KNIGHT)
        assert moves == [MoveKind.MOVED_WITH_CAPTURE]

    def test_bad_choice_keeps_waiting(self) -> None:
        ctrl = _started(PROMOTION_FEN)
        moves: list[MoveKind] = []
        ctrl.events.on_move.append(lambda _f, _t, o: moves.append(o.kind))

        ctrl.submit_move(A7, A8)
        with pytest.raises(PromotionError):
            ctrl.choose_promotion(PieceType.KING)
        assert ctrl.phase == GamePhase.AWAITING_PROMOTION

        ctrl.choose_promotion(PieceType.QUEEN)
        assert moves == [MoveKind.MOVED]

    def test_choose_without_pending_raises(self) -> None:
        ctrl = _started()
        with pytest.raises(PromotionError):
            ctrl.choose_promotion(PieceType.QUEEN)

    def test_auto_queen(self) -> None:
        ctrl = _started(start_fen=PROMOTION_FEN, auto_queen=True)
        moves: list[tuple[str, str, MoveKind]] = []
        ctrl.events.on_move.append(lambda f, t, o: moves.append((str(f), str(t), o.kind)))

        outcome = ctrl.submit_move(A7, A8)
        assert outcome.kind == MoveKind.MOVED
        assert ctrl.engine.promotion_pending is None
        assert moves == [("a7", "a8", MoveKind.MOVED)]
        assert ctrl.engine.state.board[A8] == Piece(Color.WHITE, PieceType.QUEEN)
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.side_to_move == Color.BLACK

    def test_auto_queen_capture(self) -> None:
        ctrl = _started(start_fen="1n2k3/P7/8/8/8/8/8/4K3 w - - 0 1", auto_queen=True)
        outcome = ctrl.submit_move(A7, B8)
        assert outcome.kind == MoveKind.MOVED_WITH_CAPTURE
        assert outcome.is_capture
        assert ctrl.engine.state.board[B8] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_promotion_can_mate(self) -> None:
        ctrl = _started("k7/2P5/1K6/8/8/8/8/8 w - - 0 1")
        ctrl.submit_move(parse_square("c7"), parse_square("c8"))
        ctrl.choose_promotion(PieceType.QUEEN)
        assert ctrl.result == GameResult.WHITE_WINS
        assert ctrl.end_reason == GameEndReason.CHECKMATE
