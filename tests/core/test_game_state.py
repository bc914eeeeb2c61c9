"""Tests for GameState bookkeeping and move rejection."""

import pytest

from gambit.core.enums import Color, GameStatus, PieceType
from gambit.core.errors import IllegalMoveError, MoveError, MoveOutcome
from gambit.core.move import Move
from gambit.core.notation import parse_uci, play_uci, state_from_fen, state_to_fen
from gambit.core.piece import Piece
from gambit.core.state import GameState
from gambit.core.types import parse_square

KNIGHT_SHUFFLE = ("g1f3", "g8f6", "f3g1", "f6g8")


def _sq(name: str) -> int:
    return parse_square(name)


class TestInitialState:
    def test_defaults(self) -> None:
        state = GameState()
        assert state.current_player == Color.WHITE
        assert state.half_move_clock == 0
        assert state.fullmove_number == 1
        assert state.en_passant_target is None
        assert state.move_history == []
        assert state.status == GameStatus.IN_PROGRESS

    def test_start_position_counted_once(self) -> None:
        assert GameState().repetition_count() == 1


class TestMakeMove:
    def test_turn_alternates(self) -> None:
        state = GameState()
        play_uci(state, "e2e4")
        assert state.current_player == Color.BLACK
        assert state.fullmove_number == 1
        play_uci(state, "e7e5")
        assert state.current_player == Color.WHITE
        assert state.fullmove_number == 2

    def test_history_records_moves(self) -> None:
        state = GameState()
        play_uci(state, "d2d4", "d7d5")
        assert [str(m) for m in state.move_history] == ["d2d4", "d7d5"]

    def test_half_move_clock(self) -> None:
        state = GameState()
        play_uci(state, "g1f3")
        assert state.half_move_clock == 1
        play_uci(state, "b8c6")
        assert state.half_move_clock == 2
        play_uci(state, "e2e4")
        assert state.half_move_clock == 0

    def test_capture_resets_clock_and_records_piece(self) -> None:
        state = GameState()
        play_uci(state, "g1f3", "d7d5", "b1c3", "g8f6", "c3d5")
        assert state.half_move_clock == 0
        assert state.captured_by(Color.WHITE) == [Piece(Color.BLACK, PieceType.PAWN)]
        assert state.captured_by(Color.BLACK) == []

    def test_captured_by_returns_a_copy(self) -> None:
        state = GameState()
        state.captured_by(Color.WHITE).append(Piece(Color.BLACK, PieceType.QUEEN))
        assert state.captured_by(Color.WHITE) == []

    def test_returns_executed_move(self) -> None:
        state = GameState()
        assert state.make_move(Move(_sq("e2"), _sq("e4"))) == Move(_sq("e2"), _sq("e4"))

    def test_check_flag(self) -> None:
        state = GameState()
        play_uci(state, "e2e4", "f7f6", "d1h5")
        assert state.check
        assert state.status == GameStatus.CHECK


class TestRejection:
    @pytest.mark.parametrize(
        ("text", "reason"),
        [
            ("e3e4", MoveError.NO_PIECE),
            ("e7e5", MoveError.WRONG_COLOR),
            ("e2e5", MoveError.ILLEGAL_MOVE),
            ("a1a3", MoveError.ILLEGAL_MOVE),
            ("b1d2", MoveError.ILLEGAL_MOVE),
        ],
    )
    def test_reasons(self, text: str, reason: MoveError) -> None:
        state = GameState()
        with pytest.raises(IllegalMoveError) as info:
            state.make_move(Move.from_uci(text))
        assert info.value.reason == reason

    def test_pinned_piece(self) -> None:
        state = state_from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        with pytest.raises(IllegalMoveError) as info:
            state.make_move(parse_uci(state, "e2d3"))
        assert info.value.reason == MoveError.LEAVES_KING_IN_CHECK

    def test_rejected_move_leaves_state_untouched(self) -> None:
        state = GameState()
        play_uci(state, "e2e4")
        before = state_to_fen(state)
        history = list(state.move_history)
        with pytest.raises(IllegalMoveError):
            state.make_move(parse_uci(state, "e8e7"))
        assert state_to_fen(state) == before
        assert state.move_history == history
        assert state.repetition_count() == 1

    def test_error_is_a_value_error(self) -> None:
        err = IllegalMoveError(MoveError.NO_PIECE, Move(_sq("e3"), _sq("e4")))
        assert isinstance(err, ValueError)
        assert "e3e4" in str(err)

    def test_is_legal(self) -> None:
        state = GameState()
        assert state.is_legal(Move(_sq("e2"), _sq("e4")))
        assert not state.is_legal(Move(_sq("e2"), _sq("e5")))


class TestMoveOutcome:
    def test_truthiness(self) -> None:
        move = Move(_sq("e2"), _sq("e4"))
        assert MoveOutcome(move)
        assert MoveOutcome(move).applied
        rejected = MoveOutcome(move, MoveError.GAME_OVER)
        assert not rejected
        assert not rejected.applied


class TestSimulation:
    def test_simulated_move_skips_bookkeeping(self) -> None:
        state = GameState()
        state.make_move(Move(_sq("e2"), _sq("e4")), simulate=True)
        assert state.board[_sq("e4")] == Piece(Color.WHITE, PieceType.PAWN)
        assert state.en_passant_target == _sq("e3")
        assert state.current_player == Color.WHITE
        assert state.move_history == []
        assert state.half_move_clock == 0


class TestCopy:
    def test_copy_is_independent(self) -> None:
        state = GameState()
        play_uci(state, "e2e4")
        clone = state.copy()
        play_uci(clone, "e7e5", "g1f3")
        assert len(state.move_history) == 1
        assert state.current_player == Color.BLACK
        assert state.board.is_empty(_sq("e5"))
        assert len(state.position_count) == 2
        assert len(clone.position_count) == 4

    def test_clone_alias(self) -> None:
        state = GameState()
        assert state.clone().board == state.board


class TestRepetition:
    def test_signature_ignores_history(self) -> None:
        state = GameState()
        start = state.signature()
        play_uci(state, *KNIGHT_SHUFFLE)
        assert state.signature() == start
        assert state.repetition_count() == 2

    def test_signature_includes_side_to_move(self) -> None:
        white = state_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        black = state_from_fen("4k3/8/8/8/8/8/8/R3K3 b - - 0 1")
        assert white.signature() != black.signature()

    def test_signature_includes_castling_rights(self) -> None:
        with_rights = state_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        without = state_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w - - 0 1")
        assert with_rights.signature() != without.signature()

    def test_threefold_after_second_cycle(self) -> None:
        state = GameState()
        play_uci(state, *KNIGHT_SHUFFLE)
        assert not state.is_draw
        play_uci(state, *KNIGHT_SHUFFLE[:3])
        assert not state.is_draw
        play_uci(state, KNIGHT_SHUFFLE[3])
        assert state.repetition_count() == 3
        assert state.is_draw
        assert state.status == GameStatus.DRAW


class TestFiftyMoveRule:
    FEN = "4k3/8/8/8/8/8/8/R3K3 w - - 99 80"

    def test_hundredth_half_move_draws(self) -> None:
        state = state_from_fen(self.FEN)
        assert not state.is_draw
        play_uci(state, "a1a2")
        assert state.half_move_clock == 100
        assert state.is_draw
        assert state.is_game_over

    def test_pawn_move_resets(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/P7/4K3 w - - 99 80")
        play_uci(state, "a2a3")
        assert state.half_move_clock == 0
        assert not state.is_draw
