"""Material balance with a bishop-pair bonus."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from gambit.core.enums import Color, PieceType
from gambit.core.types import is_light_square
from gambit.engine.evaluation.base import relative

if TYPE_CHECKING:
    from gambit.core.board import Board

BISHOP_PAIR_BONUS: Final = 50


def material_sum(board: Board, color: Color) -> int:
    """Standard piece values of *color*, king excluded."""
    return sum(piece.value for _, piece in board.occupied() if piece.color == color)


def bishop_pair_bonus(board: Board, color: Color) -> int:
    """Full bonus for bishops on both square colors, half for same-colored ones."""
    bishops = board.pieces(color, PieceType.BISHOP)
    if len(bishops) < 2:
        return 0
    shades = {is_light_square(sq) for sq in bishops}
    return BISHOP_PAIR_BONUS if len(shades) == 2 else BISHOP_PAIR_BONUS // 2


class MaterialEvaluator:
    """Counts material; the simplest evaluator and a useful test baseline."""

    __slots__ = ()

    def evaluate(self, board: Board, side: Color) -> int:
        score = 0
        for color, sign in ((Color.WHITE, 1), (Color.BLACK, -1)):
            score += sign * (material_sum(board, color) + bishop_pair_bonus(board, color))
        return relative(score, side)
