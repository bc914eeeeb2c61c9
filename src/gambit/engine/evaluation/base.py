"""Evaluator protocol and board queries shared by the evaluators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from gambit.core.enums import Color, PieceType
from gambit.core.move_generator import attacks_square
from gambit.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from gambit.core.board import Board

KING_VALUE = 20_000


class Evaluator(Protocol):
    """Static evaluation: higher is better for *side*, in centipawns."""

    def evaluate(self, board: Board, side: Color) -> int: ...


def relative(white_minus_black: int | float, side: Color) -> int:
    """Turn a white-minus-black score into *side*'s point of view."""
    score = int(white_minus_black)
    return score if side == Color.WHITE else -score


# ── Files and pawns ──────────────────────────────────────────────────────────


def is_open_file(board: Board, file: int) -> bool:
    """No pawn of either color on *file*."""
    for rank in range(8):
        piece = board[make_square(file, rank)]
        if piece is not None and piece.piece_type == PieceType.PAWN:
            return False
    return True


def is_semi_open_file(board: Board, file: int, color: Color) -> bool:
    """No pawn of *color* on *file*."""
    for rank in range(8):
        piece = board[make_square(file, rank)]
        if piece is not None and piece.is_type(color, PieceType.PAWN):
            return False
    return True


def is_passed_pawn(board: Board, sq: Square, color: Color) -> bool:
    """No enemy pawn ahead of *sq* on its own or an adjacent file."""
    file = file_of(sq)
    rank = rank_of(sq)
    for enemy in board.pieces(color.opposite, PieceType.PAWN):
        if abs(file_of(enemy) - file) > 1:
            continue
        ahead = rank_of(enemy) > rank if color == Color.WHITE else rank_of(enemy) < rank
        if ahead:
            return False
    return True


def relative_rank(sq: Square, color: Color) -> int:
    """Rank counted from *color*'s own back rank (0..7)."""
    rank = rank_of(sq)
    return rank if color == Color.WHITE else 7 - rank


# ── Attack queries ───────────────────────────────────────────────────────────


def is_attacked_by(board: Board, sq: Square, color: Color) -> bool:
    """Whether any piece of *color* attacks *sq*, whatever stands on it."""
    return any(
        attacks_square(board, from_sq, sq)
        for from_sq, piece in board.occupied()
        if piece.color == color
    )


def is_defended(board: Board, sq: Square, color: Color) -> bool:
    """Whether another piece of *color* covers *sq*."""
    return any(
        attacks_square(board, from_sq, sq)
        for from_sq, piece in board.occupied()
        if piece.color == color and from_sq != sq
    )


def cheapest_attacker_value(board: Board, sq: Square, color: Color) -> int | None:
    values = [
        piece_value(piece.piece_type)
        for from_sq, piece in board.occupied()
        if piece.color == color and attacks_square(board, from_sq, sq)
    ]
    return min(values) if values else None


def piece_value(piece_type: PieceType) -> int:
    """Material value, with the king weighted far above everything else."""
    return KING_VALUE if piece_type == PieceType.KING else piece_type.value_cp
