"""Tests for position signatures."""

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.notation import play_uci, state_from_fen
from gambit.core.piece import Piece
from gambit.core.state import GameState
from gambit.core.types import parse_square
from gambit.core.zobrist import (
    CASTLING_KEYS,
    EN_PASSANT_FILE_KEYS,
    PIECE_KEYS,
    position_key,
)


class TestKeyTables:
    def test_one_table_per_piece(self) -> None:
        assert len(PIECE_KEYS) == 12
        assert all(len(keys) == 64 for keys in PIECE_KEYS.values())
        assert PIECE_KEYS[Piece(Color.WHITE, PieceType.KNIGHT)][0] != PIECE_KEYS[
            Piece(Color.BLACK, PieceType.KNIGHT)
        ][0]

    def test_keys_are_distinct(self) -> None:
        keys = [k for table in PIECE_KEYS.values() for k in table]
        keys += list(CASTLING_KEYS.values()) + list(EN_PASSANT_FILE_KEYS)
        assert len(set(keys)) == len(keys)

    def test_castling_keys_cover_single_rights(self) -> None:
        assert set(CASTLING_KEYS) == {
            CastlingRights.WHITE_KINGSIDE,
            CastlingRights.WHITE_QUEENSIDE,
            CastlingRights.BLACK_KINGSIDE,
            CastlingRights.BLACK_QUEENSIDE,
        }


class TestPositionKey:
    def test_empty_board_white_to_move(self) -> None:
        assert position_key(Board(), Color.WHITE, CastlingRights.NONE, None) == 0

    def test_transposition_matches(self) -> None:
        first = GameState()
        play_uci(first, "g1f3", "g8f6", "b1c3")
        second = GameState()
        play_uci(second, "b1c3", "g8f6", "g1f3")
        assert first.signature() == second.signature()

    def test_side_to_move_counts(self) -> None:
        board = Board.initial()
        white = position_key(board, Color.WHITE, CastlingRights.ALL, None)
        black = position_key(board, Color.BLACK, CastlingRights.ALL, None)
        assert white != black

    def test_each_castling_right_counts(self) -> None:
        board = Board.initial()
        full = position_key(board, Color.WHITE, CastlingRights.ALL, None)
        keys = {
            position_key(board, Color.WHITE, CastlingRights.ALL ^ right, None)
            for right in CASTLING_KEYS
        }
        assert len(keys) == 4
        assert full not in keys

    def test_en_passant_target_counts(self) -> None:
        with_target = state_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        without = state_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - - 0 1")
        assert with_target.board == without.board
        assert with_target.signature() != without.signature()

    def test_en_passant_enters_by_file(self) -> None:
        board = Board.initial()
        base = position_key(board, Color.BLACK, CastlingRights.ALL, None)
        target = position_key(board, Color.BLACK, CastlingRights.ALL, parse_square("e3"))
        assert base ^ target == EN_PASSANT_FILE_KEYS[4]
