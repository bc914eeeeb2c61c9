"""Evaluators that only make sense in one stage of the game.

Each one scores the features that dominate its stage: development and the
center in the opening, king attacks and loose pieces in the middlegame,
king activity and passed pawns in the endgame.  All of them satisfy the
:class:`~gambit.engine.evaluation.base.Evaluator` protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from gambit.core.enums import Color, PieceType
from gambit.core.move_generator import attackers_of
from gambit.core.types import (
    Square,
    file_of,
    make_square,
    manhattan_distance,
    rank_of,
)
from gambit.engine.evaluation.base import (
    is_attacked_by,
    is_defended,
    is_passed_pawn,
    piece_value,
    relative,
    relative_rank,
)
from gambit.engine.evaluation.king_safety import (
    ATTACKER_WEIGHTS,
    KingSafetyEvaluator,
    is_castled,
    is_in_center,
    king_zone,
    reaches_zone,
)
from gambit.engine.evaluation.material import material_sum
from gambit.engine.evaluation.pawn_structure import PawnStructureEvaluator

if TYPE_CHECKING:
    from gambit.core.board import Board

# ── Opening ──────────────────────────────────────────────────────────────────

DEVELOPMENT_BONUS: Final = 15
FIANCHETTO_BONUS: Final = 15
EARLY_QUEEN_PENALTY: Final = -15
BLOCKED_CENTER_PAWN_PENALTY: Final = -15
BACK_RANK_CONNECTED_BONUS: Final = 10
CASTLED_BONUS: Final = 30
CENTER_CONTROL_BONUS: Final = 10
CENTER_ATTACK_BONUS: Final = 3
EXTENDED_CENTER_BONUS: Final = 3
UNCASTLED_CENTER_KING_PENALTY: Final = -20

CENTER: Final = tuple(make_square(f, r) for r in (3, 4) for f in (3, 4))
EXTENDED_CENTER: Final = tuple(
    make_square(f, r)
    for r in range(2, 6)
    for f in range(2, 6)
    if make_square(f, r) not in CENTER
)

# Files of the knight and bishop home squares.
_MINOR_HOME_FILES: Final = (1, 6, 2, 5)
_SPACE_BY_RANK: Final = {2: 2, 3: 4, 4: 6, 5: 8}

# ── Middlegame ───────────────────────────────────────────────────────────────

MIDDLEGAME_CENTER_KING_PENALTY: Final = -40
LOOSE_PIECE_PENALTY: Final = -10

# ── Endgame ──────────────────────────────────────────────────────────────────

ENDGAME_VALUE_FACTORS: Final[dict[PieceType, float]] = {
    PieceType.KNIGHT: 0.9,
    PieceType.BISHOP: 1.1,
    PieceType.ROOK: 1.2,
}
KING_CENTRALIZATION_BONUS: Final = 10
KING_OPPOSITION_BONUS: Final = 15
STOP_PASSER_BONUS: Final = 5
ESCORT_PASSER_BONUS: Final = 3
PASSED_PAWN_BASE: Final = 30
PASSED_PAWN_RANK_BONUS: Final = 10
PROTECTED_PASSER_BONUS: Final = 15
OUTSIDE_PASSER_BONUS: Final = 20
CLEAR_PATH_BONUS: Final = 10
CONNECTED_PASSERS_BONUS: Final = 40


def developed_minors(board: Board, color: Color) -> int:
    """Empty knight and bishop home squares of *color*."""
    home = color.home_rank
    return sum(1 for f in _MINOR_HOME_FILES if board.is_empty(make_square(f, home)))


def passed_pawns(board: Board, color: Color) -> list[Square]:
    return [
        sq
        for sq in board.pieces(color, PieceType.PAWN)
        if is_passed_pawn(board, sq, color)
    ]


class OpeningEvaluator:
    """Development, center control, early king safety and space."""

    __slots__ = ()

    def evaluate(self, board: Board, side: Color) -> int:
        total_developed = developed_minors(board, Color.WHITE) + developed_minors(
            board, Color.BLACK
        )
        white = self.score_color(board, Color.WHITE, total_developed)
        black = self.score_color(board, Color.BLACK, total_developed)
        return relative(white - black, side)

    def score_color(self, board: Board, color: Color, total_developed: int) -> int:
        return (
            self.development(board, color)
            + self.center_control(board, color)
            + self.king_safety(board, color, total_developed)
            + self.space(board, color)
        )

    def development(self, board: Board, color: Color) -> int:
        home = color.home_rank
        developed = developed_minors(board, color)
        score = developed * DEVELOPMENT_BONUS

        second = home + color.forward
        for f in (1, 6):
            piece = board[make_square(f, second)]
            if piece is not None and piece.is_type(color, PieceType.BISHOP):
                score += FIANCHETTO_BONUS

        if board.is_empty(make_square(3, home)) and developed < 3:
            score += EARLY_QUEEN_PENALTY

        if self.center_pawn_blocked(board, color):
            score += BLOCKED_CENTER_PAWN_PENALTY

        if all(board.is_empty(make_square(f, home)) for f in range(1, 7)):
            score += BACK_RANK_CONNECTED_BONUS

        king_sq = board.find_king(color)
        if king_sq is not None and is_castled(king_sq, color):
            score += CASTLED_BONUS
        return score

    @staticmethod
    def center_pawn_blocked(board: Board, color: Color) -> bool:
        """A d- or e-pawn still at home with its own piece standing in front."""
        pawn_rank = color.home_rank + color.forward
        block_rank = pawn_rank + color.forward
        for f in (3, 4):
            pawn = board[make_square(f, pawn_rank)]
            blocker = board[make_square(f, block_rank)]
            if (
                pawn is not None
                and pawn.is_type(color, PieceType.PAWN)
                and blocker is not None
                and blocker.color == color
            ):
                return True
        return False

    @staticmethod
    def center_control(board: Board, color: Color) -> int:
        score = 0
        for sq in CENTER:
            piece = board[sq]
            if piece is not None and piece.color == color:
                if piece.piece_type == PieceType.PAWN:
                    score += CENTER_CONTROL_BONUS * 2
                elif piece.piece_type == PieceType.KNIGHT:
                    score += CENTER_CONTROL_BONUS
                else:
                    score += CENTER_CONTROL_BONUS // 2
            score += len(attackers_of(board, sq, color)) * CENTER_ATTACK_BONUS

        for sq in EXTENDED_CENTER:
            piece = board[sq]
            if piece is not None and piece.color == color:
                score += EXTENDED_CENTER_BONUS
        return score

    @staticmethod
    def king_safety(board: Board, color: Color, total_developed: int) -> int:
        king_sq = board.find_king(color)
        if king_sq is None:
            return 0
        if is_castled(king_sq, color):
            score = CASTLED_BONUS
            shield_rank = rank_of(king_sq) + color.forward
            kf = file_of(king_sq)
            for f in range(max(0, kf - 1), min(7, kf + 1) + 1):
                piece = board[make_square(f, shield_rank)]
                if piece is not None and piece.is_type(color, PieceType.PAWN):
                    score += 5
                else:
                    score -= 5
            return score
        if total_developed >= 6 and is_in_center(king_sq):
            return UNCASTLED_CENTER_KING_PENALTY
        return 0

    @staticmethod
    def space(board: Board, color: Color) -> int:
        score = 0
        advanced_files: set[int] = set()
        for sq in board.pieces(color, PieceType.PAWN):
            rel = relative_rank(sq, color)
            score += _SPACE_BY_RANK.get(rel, 0)
            if rel != 1:
                advanced_files.add(file_of(sq))
        if len(advanced_files) > 3:
            score -= (len(advanced_files) - 3) * 5
        return score


class MiddlegameEvaluator:
    """Material, pawn structure, king tropism and loose pieces."""

    __slots__ = ("_pawns",)

    def __init__(self) -> None:
        self._pawns = PawnStructureEvaluator()

    def evaluate(self, board: Board, side: Color) -> int:
        white = self.score_color(board, Color.WHITE)
        black = self.score_color(board, Color.BLACK)
        return relative(white - black, side)

    def score_color(self, board: Board, color: Color) -> int:
        score = material_sum(board, color)
        score += self._pawns.score_color(board, color, 0.5)
        score += self.king_exposure(board, color)
        score += self.loose_pieces(board, color)
        return score

    @staticmethod
    def king_exposure(board: Board, color: Color) -> int:
        king_sq = board.find_king(color)
        if king_sq is None:
            return 0
        score = 0
        if is_in_center(king_sq):
            score += MIDDLEGAME_CENTER_KING_PENALTY
        score += KingSafetyEvaluator.pawn_shield(board, king_sq, color)
        score += KingSafetyEvaluator.files_near_king(board, king_sq, color)
        score += MiddlegameEvaluator.tropism(board, king_sq, color)
        return score

    @staticmethod
    def tropism(board: Board, king_sq: Square, color: Color) -> int:
        """Penalty for enemy pieces gathering around *color*'s king."""
        zone = king_zone(king_sq)
        attackers = 0
        weight = 0
        for sq, piece in board.occupied():
            if piece.color == color or piece.piece_type == PieceType.KING:
                continue
            if sq in zone or reaches_zone(board, sq, piece.piece_type, zone):
                attackers += 1
                weight += max(ATTACKER_WEIGHTS[piece.piece_type], 1)
        if attackers < 2:
            return 0
        return -weight * attackers

    @staticmethod
    def loose_pieces(board: Board, color: Color) -> int:
        """Reward enemy pieces left en prise, punish our own."""
        score = 0
        for sq, piece in board.occupied():
            if piece.piece_type == PieceType.KING:
                continue
            owner = piece.color
            if is_defended(board, sq, owner) or not is_attacked_by(board, sq, owner.opposite):
                continue
            if owner == color:
                score += LOOSE_PIECE_PENALTY
            else:
                score += piece_value(piece.piece_type) // 10
        return score


class EndgameEvaluator:
    """Endgame material, king activity and passed pawns.

    The opposition bonus goes to *side*: the evaluator is asked about the
    position after *side* has moved, so the other king must give way.
    """

    __slots__ = ()

    def evaluate(self, board: Board, side: Color) -> int:
        score = 0
        for color, sign in ((Color.WHITE, 1), (Color.BLACK, -1)):
            score += sign * (
                self.material(board, color)
                + self.king(board, color)
                + self.pawns(board, color)
            )
        result = relative(score, side)
        if self.in_opposition(board):
            result += KING_OPPOSITION_BONUS
        return result

    @staticmethod
    def material(board: Board, color: Color) -> int:
        total = 0
        for _, piece in board.occupied():
            if piece.color == color:
                total += int(piece.value * ENDGAME_VALUE_FACTORS.get(piece.piece_type, 1.0))
        return total

    @staticmethod
    def king(board: Board, color: Color) -> int:
        king_sq = board.find_king(color)
        if king_sq is None:
            return 0
        kf, kr = file_of(king_sq), rank_of(king_sq)
        distance = int(abs(kf - 3.5)) + int(abs(kr - 3.5))
        score = KING_CENTRALIZATION_BONUS * (7 - distance)

        enemy = color.opposite
        for sq in passed_pawns(board, enemy):
            queening = make_square(file_of(sq), enemy.promotion_rank)
            score += STOP_PASSER_BONUS * (14 - manhattan_distance(king_sq, queening))
        for sq in passed_pawns(board, color):
            score += ESCORT_PASSER_BONUS * (7 - manhattan_distance(king_sq, sq))
        return score

    @staticmethod
    def in_opposition(board: Board) -> bool:
        white = board.find_king(Color.WHITE)
        black = board.find_king(Color.BLACK)
        if white is None or black is None:
            return False
        df = abs(file_of(white) - file_of(black))
        dr = abs(rank_of(white) - rank_of(black))
        return (df, dr) in ((0, 2), (2, 0), (2, 2))

    def pawns(self, board: Board, color: Color) -> int:
        counts = [0] * 8
        for sq in board.pieces(color, PieceType.PAWN):
            counts[file_of(sq)] += 1

        passers = passed_pawns(board, color)
        score = 0
        for sq in passers:
            rel = relative_rank(sq, color)
            score += PASSED_PAWN_BASE + PASSED_PAWN_RANK_BONUS * (rel - 1)
            if self.pawn_protected(board, sq, color):
                score += PROTECTED_PASSER_BONUS
            if self.is_outside(sq, counts):
                score += OUTSIDE_PASSER_BONUS
            score += self.path_bonus(board, sq, color)

        files = sorted(file_of(sq) for sq in passers)
        for left, right in zip(files, files[1:]):
            if right - left == 1:
                score += CONNECTED_PASSERS_BONUS
        return score

    @staticmethod
    def pawn_protected(board: Board, sq: Square, color: Color) -> bool:
        rank = rank_of(sq) - color.forward
        if not 0 <= rank < 8:
            return False
        for df in (-1, 1):
            f = file_of(sq) + df
            if not 0 <= f < 8:
                continue
            piece = board[make_square(f, rank)]
            if piece is not None and piece.is_type(color, PieceType.PAWN):
                return True
        return False

    @staticmethod
    def is_outside(sq: Square, counts: list[int]) -> bool:
        """Passer on the a/b or g/h files with no own pawn nearer the edge."""
        f = file_of(sq)
        if f <= 1:
            return not any(counts[:f])
        if f >= 6:
            return not any(counts[f + 1 :])
        return False

    @staticmethod
    def path_bonus(board: Board, sq: Square, color: Color) -> int:
        f = file_of(sq)
        rank = rank_of(sq) + color.forward
        while 0 <= rank < 8:
            if not board.is_empty(make_square(f, rank)):
                return 0
            rank += color.forward
        distance = abs(color.promotion_rank - rank_of(sq))
        return CLEAR_PATH_BONUS * (8 - distance)
