"""Legality oracle: pseudo-legal generation filtered by trial execution."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color, PieceType
from gambit.core.errors import MoveError
from gambit.core.move import Move
from gambit.core.move_generator import king_in_check, pseudo_legal_moves
from gambit.core.special import castling, en_passant, promotion
from gambit.core.types import Square, file_of

if TYPE_CHECKING:
    from gambit.core.state import GameState


class MoveValidator:
    """Static legality checks operating on a :class:`GameState`.

    A pseudo-legal move is legal when executing it on a disposable copy of
    the state leaves the mover's king out of check.
    """

    @staticmethod
    def generate_basic_moves(state: GameState, sq: Square) -> list[Move]:
        """Pseudo-legal moves of the piece on *sq*, en passant included."""
        moves = [m for m in pseudo_legal_moves(state.board, sq) if m.source == sq]
        moves.extend(en_passant.capture_moves(state, sq))
        return moves

    @staticmethod
    def is_king_in_check(state: GameState, color: Color) -> bool:
        return king_in_check(state.board, color)

    @staticmethod
    def leaves_king_in_check(state: GameState, move: Move) -> bool:
        """Trial-execute *move* on a copy and test the mover's king."""
        piece = state.board[move.source]
        if piece is None:
            return True
        trial = state.copy()
        trial.make_move(move, simulate=True)
        return king_in_check(trial.board, piece.color)

    @staticmethod
    def has_legal_moves(state: GameState, color: Color) -> bool:
        for sq in state.board.all_pieces(color):
            for move in MoveValidator.generate_basic_moves(state, sq):
                if not MoveValidator.leaves_king_in_check(state, move):
                    return True
        return False

    @staticmethod
    def legal_moves(
        state: GameState,
        color: Color | None = None,
        expand_promotions: bool = False,
    ) -> list[Move]:
        """Every legal move for *color* (default: side to move).

        Moves come in rank-major source order with castling last.  Pawn moves
        onto the back rank carry no promotion type unless
        *expand_promotions* asks for one move per promotion piece.
        """
        color = state.current_player if color is None else color
        moves: list[Move] = []
        for sq in state.board.all_pieces(color):
            for move in MoveValidator.generate_basic_moves(state, sq):
                if MoveValidator.leaves_king_in_check(state, move):
                    continue
                if expand_promotions and promotion.is_promotion_move(state.board, move):
                    moves.extend(promotion.expand(move))
                else:
                    moves.append(move)
        if color == state.current_player:
            moves.extend(castling.legal_moves(state))
        return moves

    @staticmethod
    def legal_moves_from(state: GameState, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq* for the side to move."""
        return [
            m
            for m in MoveValidator.legal_moves(state)
            if m.source == sq
        ]

    @staticmethod
    def is_castling_attempt(state: GameState, move: Move) -> bool:
        """A king stepping two files sideways is a castling attempt."""
        if move.is_castling:
            return True
        piece = state.board[move.source]
        return (
            piece is not None
            and piece.piece_type == PieceType.KING
            and abs(file_of(move.target) - file_of(move.source)) == 2
        )

    @staticmethod
    def validate(state: GameState, move: Move) -> MoveError | None:
        """Reason *move* is illegal for the side to move, or ``None``."""
        if state.is_game_over:
            return MoveError.GAME_OVER
        board = state.board
        piece = board[move.source]
        if piece is None:
            return MoveError.NO_PIECE
        if piece.color != state.current_player:
            return MoveError.WRONG_COLOR

        if MoveValidator.is_castling_attempt(state, move):
            return castling.validate(state, move)

        plain = Move(move.source, move.target)
        if plain not in MoveValidator.generate_basic_moves(state, move.source):
            if (
                piece.piece_type == PieceType.PAWN
                and move.target == state.en_passant_target
            ):
                return MoveError.EN_PASSANT_INVALID
            return MoveError.ILLEGAL_MOVE

        if promotion.is_promotion_move(board, move):
            if move.promotion is None:
                return MoveError.PROMOTION_REQUIRED
        elif move.promotion is not None:
            return MoveError.INVALID_PROMOTION

        if MoveValidator.leaves_king_in_check(state, move):
            return MoveError.LEAVES_KING_IN_CHECK
        return None

    @staticmethod
    def is_legal(state: GameState, move: Move) -> bool:
        return MoveValidator.validate(state, move) is None
