"""Single-move application pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color, PieceType
from gambit.core.errors import IllegalMoveError, MoveError
from gambit.core.special import castling, en_passant, promotion
from gambit.core.validator import MoveValidator

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.piece import Piece
    from gambit.core.state import GameState


class MoveExecutor:
    """Applies an already-validated move to a :class:`GameState`.

    A simulated move only touches the board and the en-passant target so a
    disposable copy can be checked for king safety.  A real move also
    updates captures, castling rights, clocks, history, the repetition
    table, the side to move and the check/mate flags.
    """

    @staticmethod
    def execute(state: GameState, move: Move, simulate: bool = False) -> Piece | None:
        """Apply *move*; returns the captured piece, if any."""
        board = state.board
        piece = board[move.source]
        if piece is None:
            raise ValueError(f"No piece on square {move.source}")

        is_promotion = promotion.is_promotion_move(board, move)
        if is_promotion and move.promotion is None and not simulate:
            raise IllegalMoveError(MoveError.PROMOTION_REQUIRED, move)

        # Read the target before anything clears it.
        previous_ep = state.en_passant_target
        is_ep_capture = en_passant.is_capture(board, move, previous_ep)

        captured: Piece | None
        if MoveValidator.is_castling_attempt(state, move):
            side = castling.side_for(move)
            if side is None:
                raise ValueError(f"{move} is not a castling move")
            castling.execute(board, side.move)
            captured = None
        elif is_ep_capture:
            captured = en_passant.execute(board, move)
        elif is_promotion:
            captured = promotion.execute(board, move, simulate)
        else:
            captured = board.move_piece(move)

        next_ep = None if is_ep_capture else en_passant.double_push_target(piece, move)
        if next_ep is not None:
            state.en_passant_target = next_ep
        elif not simulate:
            state.en_passant_target = None

        if simulate:
            return captured

        if captured is not None:
            state.captured_pieces[piece.color].append(captured)
        state.castling &= ~castling.forfeited_rights(move, piece.piece_type, piece.color)

        if piece.piece_type == PieceType.PAWN or captured is not None:
            state.half_move_clock = 0
        else:
            state.half_move_clock += 1
        if piece.color == Color.BLACK:
            state.fullmove_number += 1

        state.move_history.append(move)
        state.current_player = state.current_player.opposite
        state.record_position()
        state.refresh_status()
        return captured
