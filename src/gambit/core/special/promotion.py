"""Pawn promotion: detection, candidate expansion and execution."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import PROMOTION_TYPES, PieceType
from gambit.core.errors import IllegalMoveError, MoveError
from gambit.core.types import rank_of

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.move import Move
    from gambit.core.piece import Piece

SIMULATION_DEFAULT = PieceType.QUEEN


def is_promotion_move(board: Board, move: Move) -> bool:
    """A pawn move whose target is the back rank for the pawn's color."""
    piece = board[move.source]
    return (
        piece is not None
        and piece.piece_type == PieceType.PAWN
        and rank_of(move.target) == piece.color.promotion_rank
    )


def expand(move: Move) -> list[Move]:
    """One move per promotion piece type, queen first."""
    return [move.with_promotion(pt) for pt in PROMOTION_TYPES]


def execute(board: Board, move: Move, simulate: bool = False) -> Piece | None:
    """Replace the pawn with the promoted piece; returns any captured piece.

    A simulated promotion without a type becomes a queen.
    """
    piece_type = move.promotion
    if piece_type is None:
        if not simulate:
            raise IllegalMoveError(MoveError.PROMOTION_REQUIRED, move)
        piece_type = SIMULATION_DEFAULT

    pawn = board[move.source]
    if pawn is None:
        raise ValueError(f"No pawn on square {move.source}")
    captured = board[move.target]
    board[move.source] = None
    board[move.target] = pawn.promoted(piece_type)
    return captured
