"""Pawn-structure terms whose weight grows toward the endgame."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from gambit.core.enums import Color, PieceType
from gambit.core.types import Square, file_of
from gambit.engine.evaluation.base import is_passed_pawn, relative, relative_rank

if TYPE_CHECKING:
    from gambit.core.board import Board

DOUBLED_PAWN_PENALTY: Final = -25
ISOLATED_PAWN_PENALTY: Final = -20
BACKWARD_PAWN_PENALTY: Final = -15
PASSED_PAWN_BONUS: Final = 20
PAWN_ISLAND_PENALTY: Final = -10
PAWN_CHAIN_BONUS: Final = 5


def _leading_pawns(board: Board, color: Color) -> dict[int, Square]:
    """Most advanced *color* pawn on each occupied file."""
    leaders: dict[int, Square] = {}
    for sq in board.pieces(color, PieceType.PAWN):
        file = file_of(sq)
        best = leaders.get(file)
        if best is None or relative_rank(sq, color) > relative_rank(best, color):
            leaders[file] = sq
    return leaders


class PawnStructureEvaluator:
    """Doubled, isolated, backward and passed pawns plus islands and chains."""

    __slots__ = ()

    def evaluate(self, board: Board, side: Color, phase: float = 0.0) -> int:
        white = self.score_color(board, Color.WHITE, phase)
        black = self.score_color(board, Color.BLACK, phase)
        return relative(white - black, side)

    def score_color(self, board: Board, color: Color, phase: float) -> int:
        counts = [0] * 8
        for sq in board.pieces(color, PieceType.PAWN):
            counts[file_of(sq)] += 1
        leaders = _leading_pawns(board, color)
        score = 0

        for count in counts:
            if count > 1:
                score += int(DOUBLED_PAWN_PENALTY * (count - 1) * (1 + 0.5 * phase))

        for file, sq in leaders.items():
            neighbours = [f for f in (file - 1, file + 1) if 0 <= f < 8 and counts[f]]
            if not neighbours:
                score += int(ISOLATED_PAWN_PENALTY * (1 + 0.7 * phase))
            elif any(
                relative_rank(leaders[f], color) > relative_rank(sq, color)
                for f in neighbours
            ):
                score += int(BACKWARD_PAWN_PENALTY * (1 + 0.2 * phase))

            if is_passed_pawn(board, sq, color):
                score += self.passed_pawn_bonus(relative_rank(sq, color), phase)

        score += self._islands(counts) + self._chains(leaders, color)
        return score

    @staticmethod
    def passed_pawn_bonus(rel_rank: int, phase: float) -> int:
        bonus = int(PASSED_PAWN_BONUS * (1 + phase)) + (rel_rank - 1) * 10
        if phase > 0.7 and rel_rank >= 5:
            bonus += (rel_rank - 4) * 20
        return bonus

    @staticmethod
    def _islands(counts: list[int]) -> int:
        islands = 0
        previous = 0
        for count in counts:
            if count and not previous:
                islands += 1
            previous = count
        return PAWN_ISLAND_PENALTY * (islands - 1) if islands > 1 else 0

    @staticmethod
    def _chains(leaders: dict[int, Square], color: Color) -> int:
        score = 0
        for file in range(7):
            left, right = leaders.get(file), leaders.get(file + 1)
            if left is None or right is None:
                continue
            if abs(relative_rank(left, color) - relative_rank(right, color)) == 1:
                score += PAWN_CHAIN_BONUS
        return score
