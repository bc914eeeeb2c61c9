"""Tests for Board, Piece and square helpers."""

import pytest

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import (
    file_of,
    is_light_square,
    make_square,
    offset_square,
    parse_square,
    rank_of,
    square_name,
)


class TestSquares:
    def test_a1_is_zero(self) -> None:
        assert parse_square("a1") == 0
        assert parse_square("h8") == 63

    def test_round_trip_name(self) -> None:
        for sq in range(64):
            assert parse_square(square_name(sq)) == sq

    def test_file_and_rank(self) -> None:
        e4 = parse_square("e4")
        assert file_of(e4) == 4
        assert rank_of(e4) == 3

    def test_make_square_off_board(self) -> None:
        with pytest.raises(ValueError):
            make_square(8, 0)

    def test_parse_rejects_garbage(self) -> None:
        for bad in ("", "i1", "a9", "e44"):
            with pytest.raises(ValueError):
                parse_square(bad)

    def test_offset_square(self) -> None:
        assert offset_square(parse_square("h4"), 1, 0) is None
        assert offset_square(parse_square("e4"), -1, 1) == parse_square("d5")

    def test_square_colors(self) -> None:
        assert not is_light_square(parse_square("a1"))
        assert is_light_square(parse_square("h1"))
        assert is_light_square(parse_square("d1"))


class TestPiece:
    def test_fen_letters(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.KNIGHT)) == "N"
        assert str(Piece(Color.BLACK, PieceType.QUEEN)) == "q"

    def test_from_char(self) -> None:
        assert Piece.from_char("n") == Piece(Color.BLACK, PieceType.KNIGHT)
        assert Piece.from_char("K") == Piece(Color.WHITE, PieceType.KING)
        with pytest.raises(ValueError):
            Piece.from_char("x")

    def test_values(self) -> None:
        assert Piece(Color.WHITE, PieceType.PAWN).value == 100
        assert Piece(Color.BLACK, PieceType.QUEEN).value == 900
        assert Piece(Color.WHITE, PieceType.KING).value == 0

    def test_promoted_keeps_color(self) -> None:
        pawn = Piece(Color.BLACK, PieceType.PAWN)
        assert pawn.promoted(PieceType.KNIGHT) == Piece(Color.BLACK, PieceType.KNIGHT)


class TestBoard:
    def test_initial_layout(self) -> None:
        board = Board.initial()
        assert board[parse_square("e1")] == Piece(Color.WHITE, PieceType.KING)
        assert board[parse_square("d8")] == Piece(Color.BLACK, PieceType.QUEEN)
        assert board.count() == 32
        assert board.count(Color.WHITE) == 16

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for rank in range(2, 6):
            for file in range(8):
                assert board.is_empty(make_square(file, rank))

    def test_move_piece_returns_capture(self) -> None:
        board = Board()
        board[parse_square("a1")] = Piece(Color.WHITE, PieceType.ROOK)
        board[parse_square("a8")] = Piece(Color.BLACK, PieceType.ROOK)
        captured = board.move_piece(Move(parse_square("a1"), parse_square("a8")))
        assert captured == Piece(Color.BLACK, PieceType.ROOK)
        assert board.is_empty(parse_square("a1"))

    def test_move_from_empty_square_raises(self) -> None:
        with pytest.raises(ValueError):
            Board().move_piece(Move(parse_square("a1"), parse_square("a2")))

    def test_copy_is_independent(self) -> None:
        board = Board.initial()
        clone = board.copy()
        clone[parse_square("e2")] = None
        assert board[parse_square("e2")] is not None
        assert clone != board

    def test_direct_slot_access(self) -> None:
        board = Board()
        queen = Piece(Color.BLACK, PieceType.QUEEN)
        board.set_piece_at(parse_square("d4"), queen)
        assert board.piece_at(parse_square("d4")) == queen
        assert board[parse_square("d4")] is queen
        board.set_piece_at(parse_square("d4"), None)
        assert board.piece_at(parse_square("d4")) is None

    def test_king_square(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.BLACK) == parse_square("e8")

    def test_missing_king_raises(self) -> None:
        with pytest.raises(ValueError):
            Board().king_square(Color.WHITE)

    def test_text_diagram_uses_fen_letters(self) -> None:
        lines = repr(Board.initial()).splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[4] == "4 . . . . . . . ."
        assert lines[7] == "1 R N B Q K B N R"
        assert lines[8] == "  a b c d e f g h"

    def test_pieces_in_square_order(self) -> None:
        board = Board.initial()
        assert board.pieces(Color.WHITE, PieceType.KNIGHT) == [
            parse_square("b1"),
            parse_square("g1"),
        ]


class TestMove:
    def test_uci_text(self) -> None:
        move = Move(parse_square("e7"), parse_square("e8"), PieceType.QUEEN)
        assert str(move) == "e7e8q"

    def test_from_uci(self) -> None:
        move = Move.from_uci("a7a8n")
        assert move.promotion == PieceType.KNIGHT

    def test_cannot_promote_to_king(self) -> None:
        with pytest.raises(ValueError):
            Move(parse_square("e7"), parse_square("e8"), PieceType.KING)

    def test_castling_needs_rook_squares(self) -> None:
        with pytest.raises(ValueError):
            Move(parse_square("e1"), parse_square("g1"), is_castling=True)

    def test_moves_are_hashable_values(self) -> None:
        a = Move(parse_square("e2"), parse_square("e4"))
        b = Move(parse_square("e2"), parse_square("e4"))
        assert a == b
        assert len({a, b}) == 1
