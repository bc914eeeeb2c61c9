"""Tests for GameController, the orchestrator."""

import logging

import pytest

from gambit.core.enums import CastlingRights, Color, GameResult, PieceType
from gambit.core.errors import IllegalMoveError, MoveError
from gambit.core.move import Move
from gambit.core.notation import parse_uci, state_to_fen
from gambit.core.piece import Piece
from gambit.core.state import GameState
from gambit.core.types import parse_square
from gambit.engine.flat_search import FlatSearchEngine
from gambit.engine.search import SearchResult
from gambit.game.controller import GameController, game_over_message

STALEMATE_FEN = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"
CASTLING_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"
EN_PASSANT_FEN = "4k3/8/8/3Pp3/8/8/8/4K3 w - e6 0 2"
PROMOTION_FEN = "1r2k3/P7/8/8/8/8/8/4K3 w - - 0 1"


class _ScriptedEngine:
    """Plays a fixed list of moves and remembers the positions it was shown."""

    def __init__(self, *moves: str) -> None:
        self.moves = list(moves)
        self.seen: list[str] = []

    def search(self, state: GameState) -> SearchResult:
        self.seen.append(state_to_fen(state))
        if not self.moves:
            return SearchResult(None, 0)
        return SearchResult(parse_uci(state, self.moves.pop(0)), 0)

    def find_best_move(self, state: GameState) -> Move | None:
        return self.search(state).best_move


def _play(ctrl: GameController, *moves: str) -> None:
    for text in moves:
        ctrl.make_move(parse_uci(ctrl.state, text))


def _snapshot(ctrl: GameController) -> tuple[object, ...]:
    state = ctrl.state
    return (
        state_to_fen(state),
        dict(state.position_count),
        ctrl.captured_pieces(Color.WHITE),
        ctrl.captured_pieces(Color.BLACK),
        state.check,
        state.checkmate,
        state.stalemate,
        len(state.move_history),
    )


class TestNewGame:
    def test_defaults(self) -> None:
        ctrl = GameController()
        assert ctrl.current_player == Color.WHITE
        assert ctrl.move_history == []
        assert not ctrl.ai_enabled
        assert ctrl.ai_color == Color.BLACK
        assert isinstance(ctrl.engine, FlatSearchEngine)

    def test_custom_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        ctrl = GameController()
        ctrl.start_new_game(fen)
        assert ctrl.current_player == Color.BLACK
        assert state_to_fen(ctrl.state) == fen

    def test_restart_discards_game(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4")
        ctrl.initialize()
        assert ctrl.move_history == []
        assert not ctrl.undo_move()

    def test_board_updated_on_start(self) -> None:
        ctrl = GameController()
        calls: list[str] = []
        ctrl.events.on_board_updated.append(lambda: calls.append("board"))
        ctrl.start_new_game()
        assert calls == ["board"]

    def test_finished_position_reports_game_over(self) -> None:
        ctrl = GameController()
        endings: list[tuple[GameResult, str]] = []
        ctrl.events.on_game_over.append(lambda r, m: endings.append((r, m)))
        ctrl.start_new_game(STALEMATE_FEN)
        assert ctrl.is_stalemate()
        assert endings == [(GameResult.DRAW, "Stalemate! The game is a draw.")]


class TestMoves:
    def test_legal_move_applied(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4")
        assert ctrl.current_player == Color.BLACK
        assert ctrl.move_history == [Move.from_uci("e2e4")]
        assert ctrl.en_passant_target is not None

    def test_illegal_move_raises(self) -> None:
        ctrl = GameController()
        with pytest.raises(IllegalMoveError) as info:
            ctrl.make_move(Move.from_uci("e7e5"))
        assert info.value.reason == MoveError.WRONG_COLOR
        assert ctrl.move_history == []

    def test_try_move_reports_reason(self) -> None:
        ctrl = GameController()
        outcome = ctrl.try_move(Move.from_uci("e2e5"))
        assert not outcome
        assert outcome.error == MoveError.ILLEGAL_MOVE
        assert ctrl.current_player == Color.WHITE

    def test_try_move_success(self) -> None:
        ctrl = GameController()
        outcome = ctrl.try_move(Move.from_uci("g1f3"))
        assert outcome
        assert outcome.applied
        assert outcome.error is None

    def test_check_query(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "f7f6", "d1h5")
        assert ctrl.is_check()
        assert not ctrl.is_checkmate()
        assert not ctrl.is_game_over()

    def test_captured_pieces(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "d7d5", "e4d5")
        assert ctrl.captured_pieces(Color.WHITE) == [Piece(Color.BLACK, PieceType.PAWN)]
        assert ctrl.captured_pieces(Color.BLACK) == []

    def test_move_history_is_a_copy(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4")
        ctrl.move_history.clear()
        assert len(ctrl.move_history) == 1


class TestEvents:
    def test_move_then_board(self) -> None:
        ctrl = GameController()
        calls: list[str] = []
        ctrl.events.on_move.append(lambda m, st: calls.append(f"move {m}"))
        ctrl.events.on_board_updated.append(lambda: calls.append("board"))
        _play(ctrl, "e2e4")
        assert calls == ["move e2e4", "board"]

    def test_move_event_sees_new_state(self) -> None:
        ctrl = GameController()
        players: list[Color] = []
        ctrl.events.on_move.append(lambda m, st: players.append(st.current_player))
        _play(ctrl, "e2e4")
        assert players == [Color.BLACK]

    def test_checkmate_event(self) -> None:
        ctrl = GameController()
        calls: list[str] = []
        endings: list[tuple[GameResult, str]] = []
        ctrl.events.on_move.append(lambda m, st: calls.append("move"))
        ctrl.events.on_board_updated.append(lambda: calls.append("board"))
        ctrl.events.on_game_over.append(lambda r, m: calls.append("over"))
        ctrl.events.on_game_over.append(lambda r, m: endings.append((r, m)))
        _play(ctrl, "e2e4", "e7e5", "d1h5", "b8c6", "f1c4", "g8f6", "h5f7")
        assert ctrl.is_checkmate()
        assert ctrl.is_game_over()
        assert calls[-3:] == ["move", "board", "over"]
        assert endings == [(GameResult.WHITE_WINS, "Checkmate! White wins.")]

    def test_no_moves_after_game_over(self) -> None:
        ctrl = GameController()
        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        outcome = ctrl.try_move(Move.from_uci("a2a3"))
        assert outcome.error == MoveError.GAME_OVER


class TestUndo:
    def test_nothing_to_undo(self) -> None:
        assert not GameController().undo_move()

    def test_restores_position_exactly(self) -> None:
        ctrl = GameController()
        _play(ctrl, "g1f3", "g8f6", "f3g1")
        fen = state_to_fen(ctrl.state)
        repetitions = ctrl.state.repetition_count()
        _play(ctrl, "f6g8")
        assert ctrl.undo_move()
        assert state_to_fen(ctrl.state) == fen
        assert ctrl.state.repetition_count() == repetitions
        assert len(ctrl.move_history) == 3

    def test_restores_rook_capture_and_rights(self) -> None:
        ctrl = GameController()
        ctrl.start_new_game("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        _play(ctrl, "a1a8")
        assert ctrl.captured_pieces(Color.WHITE) == [Piece(Color.BLACK, PieceType.ROOK)]
        ctrl.undo_move()
        assert ctrl.captured_pieces(Color.WHITE) == []
        assert state_to_fen(ctrl.state) == "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    @pytest.mark.parametrize(
        ("fen", "move"),
        [
            (CASTLING_FEN, "e1g1"),
            (CASTLING_FEN, "e1c1"),
            (EN_PASSANT_FEN, "d5e6"),
            (PROMOTION_FEN, "a7b8n"),
            (PROMOTION_FEN, "a7b8q"),
        ],
        ids=["kingside", "queenside", "en-passant", "underpromotion", "promotion-check"],
    )
    def test_special_moves_round_trip(self, fen: str, move: str) -> None:
        ctrl = GameController()
        ctrl.start_new_game(fen)
        before = _snapshot(ctrl)
        _play(ctrl, move)
        assert _snapshot(ctrl) != before
        assert ctrl.undo_move()
        assert _snapshot(ctrl) == before

    def test_en_passant_capture_undone(self) -> None:
        ctrl = GameController()
        ctrl.start_new_game(EN_PASSANT_FEN)
        _play(ctrl, "d5e6")
        assert ctrl.board[parse_square("e5")] is None
        assert ctrl.captured_pieces(Color.WHITE) == [Piece(Color.BLACK, PieceType.PAWN)]
        ctrl.undo_move()
        assert ctrl.board[parse_square("e5")] == Piece(Color.BLACK, PieceType.PAWN)
        assert ctrl.en_passant_target == parse_square("e6")

    def test_checking_promotion_undone(self) -> None:
        ctrl = GameController()
        ctrl.start_new_game(PROMOTION_FEN)
        _play(ctrl, "a7b8q")
        assert ctrl.is_check()
        assert ctrl.captured_pieces(Color.WHITE) == [Piece(Color.BLACK, PieceType.ROOK)]
        ctrl.undo_move()
        assert not ctrl.is_check()
        assert ctrl.board[parse_square("a7")] == Piece(Color.WHITE, PieceType.PAWN)

    def test_castling_undone(self) -> None:
        ctrl = GameController()
        ctrl.start_new_game(CASTLING_FEN)
        _play(ctrl, "e1g1")
        assert ctrl.board[parse_square("f1")] == Piece(Color.WHITE, PieceType.ROOK)
        ctrl.undo_move()
        assert ctrl.board[parse_square("h1")] == Piece(Color.WHITE, PieceType.ROOK)
        assert ctrl.board[parse_square("e1")] == Piece(Color.WHITE, PieceType.KING)
        assert ctrl.state.castling == CastlingRights.ALL

    def test_undo_after_game_over(self) -> None:
        ctrl = GameController()
        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        assert ctrl.undo_move()
        assert not ctrl.is_game_over()
        assert ctrl.current_player == Color.BLACK

    def test_undo_fires_board_updated(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4")
        calls: list[str] = []
        ctrl.events.on_board_updated.append(lambda: calls.append("board"))
        ctrl.undo_move()
        assert calls == ["board"]


class TestAI:
    def test_disabled_by_default(self) -> None:
        engine = _ScriptedEngine("e7e5")
        ctrl = GameController(engine)
        _play(ctrl, "e2e4")
        assert engine.seen == []
        assert ctrl.current_player == Color.BLACK

    def test_replies_before_returning(self) -> None:
        engine = _ScriptedEngine("e7e5")
        ctrl = GameController(engine)
        ctrl.set_ai_enabled(True)
        assert engine.seen == []
        _play(ctrl, "e2e4")
        assert ctrl.move_history == [Move.from_uci("e2e4"), Move.from_uci("e7e5")]
        assert ctrl.current_player == Color.WHITE

    def test_real_engine_replies(self) -> None:
        ctrl = GameController()
        ctrl.set_ai_enabled(True)
        _play(ctrl, "e2e4")
        assert len(ctrl.move_history) == 2
        assert ctrl.current_player == Color.WHITE

    def test_switching_color_plays_at_once(self) -> None:
        engine = _ScriptedEngine("d2d4")
        ctrl = GameController(engine)
        ctrl.set_ai_enabled(True)
        ctrl.set_ai_color(Color.WHITE)
        assert ctrl.move_history == [Move.from_uci("d2d4")]
        assert ctrl.current_player == Color.BLACK

    def test_enabling_on_ai_turn_plays_at_once(self) -> None:
        engine = _ScriptedEngine("e7e5")
        ctrl = GameController(engine)
        _play(ctrl, "e2e4")
        ctrl.set_ai_enabled(True)
        assert len(ctrl.move_history) == 2

    def test_ai_can_deliver_mate(self) -> None:
        engine = _ScriptedEngine("e7e5", "d8h4")
        ctrl = GameController(engine)
        ctrl.set_ai_enabled(True)
        endings: list[GameResult] = []
        ctrl.events.on_game_over.append(lambda r, m: endings.append(r))
        _play(ctrl, "f2f3", "g2g4")
        assert ctrl.is_checkmate()
        assert endings == [GameResult.BLACK_WINS]

    def test_undo_does_not_trigger_reply(self) -> None:
        engine = _ScriptedEngine("e7e5")
        ctrl = GameController(engine)
        ctrl.set_ai_enabled(True)
        _play(ctrl, "e2e4")
        assert ctrl.undo_move()
        assert ctrl.current_player == Color.BLACK
        assert len(engine.seen) == 1

    def test_engine_without_move_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        ctrl = GameController(_ScriptedEngine())
        with caplog.at_level(logging.WARNING, logger="gambit.game.controller"):
            ctrl.set_ai_enabled(True)
            ctrl.set_ai_color(Color.WHITE)
        assert ctrl.move_history == []
        assert any("AI found no move" in r.getMessage() for r in caplog.records)

    def test_get_best_move_for_other_state(self) -> None:
        engine = _ScriptedEngine("e2e4")
        ctrl = GameController(engine)
        other = GameState()
        assert ctrl.get_best_move(other) == Move.from_uci("e2e4")
        assert ctrl.move_history == []


class TestGameOverMessage:
    def test_in_progress_is_empty(self) -> None:
        assert game_over_message(GameState()) == ""

    @pytest.mark.parametrize(
        ("fen", "message"),
        [
            (STALEMATE_FEN, "Stalemate! The game is a draw."),
            ("4k3/8/8/8/8/8/8/4K3 w - - 0 1", "Draw by insufficient material."),
            ("4k3/8/8/8/8/8/8/R3K3 w - - 100 90", "Draw by the fifty-move rule."),
        ],
    )
    def test_draws(self, fen: str, message: str) -> None:
        ctrl = GameController()
        ctrl.start_new_game(fen)
        assert ctrl.is_draw()
        assert game_over_message(ctrl.state) == message

    def test_threefold(self) -> None:
        ctrl = GameController()
        _play(ctrl, *(("g1f3", "g8f6", "f3g1", "f6g8") * 2))
        assert game_over_message(ctrl.state) == "Draw by threefold repetition."

    def test_black_wins(self) -> None:
        ctrl = GameController()
        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        assert game_over_message(ctrl.state) == "Checkmate! Black wins."
