"""King shelter in the opening and middlegame, king activity in the endgame."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from gambit.core.enums import Color, PieceType
from gambit.core.move_generator import KNIGHT_TARGETS, attacks_square
from gambit.core.types import (
    Square,
    file_of,
    make_square,
    manhattan_distance,
    rank_of,
)
from gambit.engine.evaluation.base import (
    is_open_file,
    is_passed_pawn,
    is_semi_open_file,
    relative,
    relative_rank,
)

if TYPE_CHECKING:
    from gambit.core.board import Board

KING_ZONE_RADIUS: Final = 2
PAWN_SHIELD_BONUS: Final = 10
OPEN_FILE_NEAR_KING_PENALTY: Final = -25
KING_IN_CENTER_PENALTY: Final = -50
ENDGAME_THRESHOLD: Final = 0.7

ATTACKER_WEIGHTS: Final[dict[PieceType, int]] = {
    PieceType.PAWN: 0,
    PieceType.KNIGHT: 2,
    PieceType.BISHOP: 2,
    PieceType.ROOK: 3,
    PieceType.QUEEN: 5,
    PieceType.KING: 0,
}


def is_castled(king_sq: Square, color: Color) -> bool:
    """King on g or c of its home rank."""
    return rank_of(king_sq) == color.home_rank and file_of(king_sq) in (2, 6)


def is_in_center(king_sq: Square) -> bool:
    return 2 <= file_of(king_sq) <= 5 and 2 <= rank_of(king_sq) <= 5


def king_zone(king_sq: Square, radius: int = KING_ZONE_RADIUS) -> set[Square]:
    kf, kr = file_of(king_sq), rank_of(king_sq)
    return {
        make_square(f, r)
        for f in range(max(0, kf - radius), min(7, kf + radius) + 1)
        for r in range(max(0, kr - radius), min(7, kr + radius) + 1)
    }


class KingSafetyEvaluator:
    """Pawn shield, nearby open files, central exposure and attackers.

    The shelter score fades out as the phase approaches the endgame.  Past
    :data:`ENDGAME_THRESHOLD` the king is instead rewarded for activity.
    """

    __slots__ = ()

    def evaluate(self, board: Board, side: Color, phase: float = 0.0) -> int:
        if phase > ENDGAME_THRESHOLD:
            return self.king_activity(board, side)

        white = self.shelter(board, Color.WHITE, phase)
        black = self.shelter(board, Color.BLACK, phase)
        return relative((white - black) * (1.0 - phase), side)

    def shelter(self, board: Board, color: Color, phase: float) -> int:
        king_sq = board.find_king(color)
        if king_sq is None:
            return 0
        score = self.pawn_shield(board, king_sq, color)
        score += self.files_near_king(board, king_sq, color)
        if is_in_center(king_sq):
            score += int(KING_IN_CENTER_PENALTY * (1.0 - phase))
        score += self.attack_danger(board, king_sq, color, phase)
        return score

    @staticmethod
    def pawn_shield(board: Board, king_sq: Square, color: Color) -> int:
        """+10 per own pawn in front of a castled king, -5 per gap."""
        if not is_castled(king_sq, color):
            return 0
        kf, kr = file_of(king_sq), rank_of(king_sq)
        files = range(max(0, kf - 1), min(7, kf + 1) + 1)
        depth = 2 if kr == color.home_rank else 1
        score = 0
        for step in range(1, depth + 1):
            rank = kr + step * color.forward
            if not 0 <= rank < 8:
                continue
            for f in files:
                piece = board[make_square(f, rank)]
                if piece is not None and piece.is_type(color, PieceType.PAWN):
                    score += PAWN_SHIELD_BONUS
                else:
                    score -= PAWN_SHIELD_BONUS // 2
        return score

    @staticmethod
    def files_near_king(board: Board, king_sq: Square, color: Color) -> int:
        score = 0
        kf = file_of(king_sq)
        for f in range(max(0, kf - 1), min(7, kf + 1) + 1):
            if is_open_file(board, f):
                score += OPEN_FILE_NEAR_KING_PENALTY
            elif is_semi_open_file(board, f, color):
                score += int(OPEN_FILE_NEAR_KING_PENALTY / 2)
        return score

    @staticmethod
    def attack_danger(board: Board, king_sq: Square, color: Color, phase: float) -> int:
        """Penalty once two or more enemy pieces bear on the king zone."""
        zone = king_zone(king_sq)
        attackers = 0
        weight = 0
        for sq, piece in board.occupied():
            if piece.color == color or piece.piece_type in (PieceType.KING, PieceType.PAWN):
                continue
            if sq in zone or reaches_zone(board, sq, piece.piece_type, zone):
                attackers += 1
                weight += ATTACKER_WEIGHTS[piece.piece_type]
        if attackers < 2:
            return 0
        return int(-weight * attackers * (1.0 - 0.7 * phase))

    # -- Endgame --------------------------------------------------------------

    def king_activity(self, board: Board, side: Color) -> int:
        white = self.activity(board, Color.WHITE)
        black = self.activity(board, Color.BLACK)
        return relative(white - black, side)

    @staticmethod
    def activity(board: Board, color: Color) -> int:
        """Centralization plus proximity to the passed pawns that matter."""
        king_sq = board.find_king(color)
        if king_sq is None:
            return 0
        kf, kr = file_of(king_sq), rank_of(king_sq)
        score = (7 - (int(abs(kf - 3.5)) + int(abs(kr - 3.5)))) * 5

        for sq in board.pieces(color.opposite, PieceType.PAWN):
            if is_passed_pawn(board, sq, color.opposite):
                score += 3 * (14 - manhattan_distance(king_sq, sq))

        for sq in board.pieces(color, PieceType.PAWN):
            if not is_passed_pawn(board, sq, color):
                continue
            distance = manhattan_distance(king_sq, sq)
            if relative_rank(sq, color) >= 5 and distance <= 2:
                score -= 5
            else:
                score += 2 * (7 - distance)
        return score


def reaches_zone(board: Board, sq: Square, piece_type: PieceType, zone: set[Square]) -> bool:
    if piece_type == PieceType.KNIGHT:
        return any(target in zone for target in KNIGHT_TARGETS[sq])
    return any(attacks_square(board, sq, target) for target in zone)
