"""Piece activity: mobility, outposts, open files and piece placement."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from gambit.core.enums import Color, PieceType
from gambit.core.move_generator import (
    BISHOP_RAYS,
    path_is_clear,
    pawn_attack_squares,
    pseudo_legal_moves,
)
from gambit.core.types import Square, file_of, is_light_square, rank_of
from gambit.engine.evaluation.base import (
    is_open_file,
    is_semi_open_file,
    relative,
    relative_rank,
)

if TYPE_CHECKING:
    from gambit.core.board import Board

MOBILITY_WEIGHTS: Final[dict[PieceType, int]] = {
    PieceType.KNIGHT: 4,
    PieceType.BISHOP: 5,
    PieceType.ROOK: 2,
    PieceType.QUEEN: 1,
}

KNIGHT_CENTER_BONUS: Final = 10
KNIGHT_RIM_PENALTY: Final = -15
KNIGHT_OUTPOST_BONUS: Final = 25
BISHOP_OUTPOST_BONUS: Final = 15
OUTPOST_SUPPORT_BONUS: Final = 10
BISHOP_PAIR_BONUS: Final = 10
OPEN_DIAGONAL_BONUS: Final = 5
BLOCKED_DIAGONAL_PENALTY: Final = -2
BAD_BISHOP_PENALTY: Final = -3
ROOK_OPEN_FILE_BONUS: Final = 20
ROOK_SEMI_OPEN_FILE_BONUS: Final = 10
ROOK_SEVENTH_RANK_BONUS: Final = 30
ROOK_SEVENTH_LATE_BONUS: Final = 10
EARLY_QUEEN_PENALTY: Final = -15
QUEEN_CENTER_BONUS: Final = 10
CONNECTED_ROOKS_BONUS: Final = 15

_MINORS: Final = (PieceType.KNIGHT, PieceType.BISHOP)


def mobility_multiplier(phase: float) -> float:
    """Mobility matters less while the pieces are still at home."""
    if phase < 0.3:
        return 0.7
    if phase > 0.7:
        return 0.8
    return 1.0


def is_central(sq: Square) -> bool:
    """Inside the c3-f6 block."""
    return 2 <= file_of(sq) <= 5 and 2 <= rank_of(sq) <= 5


def is_on_rim(sq: Square) -> bool:
    return file_of(sq) in (0, 7) or rank_of(sq) in (0, 7)


def is_outpost(board: Board, sq: Square, color: Color) -> bool:
    """Square in the enemy half with no enemy pawn currently covering it."""
    if relative_rank(sq, color) < 4:
        return False
    for pawn_sq in pawn_attack_squares(sq, color):
        piece = board[pawn_sq]
        if piece is not None and piece.is_type(color.opposite, PieceType.PAWN):
            return False
    return True


def is_pawn_supported(board: Board, sq: Square, color: Color) -> bool:
    """Whether a friendly pawn defends *sq*."""
    for pawn_sq in pawn_attack_squares(sq, color.opposite):
        piece = board[pawn_sq]
        if piece is not None and piece.is_type(color, PieceType.PAWN):
            return True
    return False


class PieceActivityEvaluator:
    """Scores how well each side's pieces are placed and how freely they move.

    Mobility counts pseudo-legal moves weighted per piece type and scaled by
    :func:`mobility_multiplier`.  Placement terms are piece specific: knight
    centralisation and outposts, the bishop pair and open diagonals, rooks on
    open files and the seventh rank, and early queen sorties.
    """

    __slots__ = ()

    def evaluate(self, board: Board, side: Color, phase: float = 0.0) -> int:
        white = self.score_color(board, Color.WHITE, phase)
        black = self.score_color(board, Color.BLACK, phase)
        return relative(white - black, side)

    def score_color(self, board: Board, color: Color, phase: float) -> int:
        multiplier = mobility_multiplier(phase)
        score = 0
        for sq, piece in board.occupied():
            if piece.color != color:
                continue
            match piece.piece_type:
                case PieceType.KNIGHT:
                    score += self.knight(board, sq, color)
                case PieceType.BISHOP:
                    score += self.bishop(board, sq, color)
                case PieceType.ROOK:
                    score += self.rook(board, sq, color, phase)
                case PieceType.QUEEN:
                    score += self.queen(board, sq, color, phase)
                case _:
                    continue
            score += int(self.mobility(board, sq) * multiplier)
        return score + self.connected_rooks(board, color)

    def mobility(self, board: Board, sq: Square) -> int:
        piece = board[sq]
        if piece is None:
            return 0
        weight = MOBILITY_WEIGHTS.get(piece.piece_type, 0)
        return len(pseudo_legal_moves(board, sq)) * weight

    # ── Per piece ────────────────────────────────────────────────────────

    def knight(self, board: Board, sq: Square, color: Color) -> int:
        score = 0
        if is_central(sq):
            score += KNIGHT_CENTER_BONUS
        if is_on_rim(sq):
            score += KNIGHT_RIM_PENALTY
        if is_outpost(board, sq, color):
            score += KNIGHT_OUTPOST_BONUS
            if is_pawn_supported(board, sq, color):
                score += OUTPOST_SUPPORT_BONUS
        return score

    def bishop(self, board: Board, sq: Square, color: Color) -> int:
        score = 0
        if self.has_bishop_pair(board, color):
            score += BISHOP_PAIR_BONUS

        for ray in BISHOP_RAYS[sq]:
            if not ray:
                continue
            if board[ray[0]] is None:
                score += OPEN_DIAGONAL_BONUS
            else:
                score += BLOCKED_DIAGONAL_PENALTY

        if is_outpost(board, sq, color):
            score += BISHOP_OUTPOST_BONUS

        shade = is_light_square(sq)
        own_pawns = sum(
            1
            for pawn_sq in board.pieces(color, PieceType.PAWN)
            if is_light_square(pawn_sq) == shade
        )
        return score + own_pawns * BAD_BISHOP_PENALTY

    def rook(self, board: Board, sq: Square, color: Color, phase: float) -> int:
        score = 0
        file = file_of(sq)
        if is_open_file(board, file):
            score += ROOK_OPEN_FILE_BONUS
        elif is_semi_open_file(board, file, color):
            score += ROOK_SEMI_OPEN_FILE_BONUS

        if relative_rank(sq, color) == 6:
            score += ROOK_SEVENTH_RANK_BONUS
            if phase > 0.5:
                score += ROOK_SEVENTH_LATE_BONUS
        return score

    def queen(self, board: Board, sq: Square, color: Color, phase: float) -> int:
        if phase < 0.3:
            if rank_of(sq) != color.home_rank and not self.minors_developed(board, color):
                return EARLY_QUEEN_PENALTY
            return 0
        if phase <= 0.7 and is_central(sq):
            return QUEEN_CENTER_BONUS
        return 0

    # ── Whole-side terms ─────────────────────────────────────────────────

    @staticmethod
    def has_bishop_pair(board: Board, color: Color) -> bool:
        shades = {is_light_square(sq) for sq in board.pieces(color, PieceType.BISHOP)}
        return len(shades) == 2

    @staticmethod
    def minors_developed(board: Board, color: Color) -> bool:
        """More than half of *color*'s knights and bishops left the home rank."""
        minors = [sq for pt in _MINORS for sq in board.pieces(color, pt)]
        if not minors:
            return True
        developed = sum(1 for sq in minors if rank_of(sq) != color.home_rank)
        return developed * 2 > len(minors)

    @staticmethod
    def connected_rooks(board: Board, color: Color) -> int:
        rooks = board.pieces(color, PieceType.ROOK)
        for i, first in enumerate(rooks):
            for second in rooks[i + 1 :]:
                aligned = (
                    rank_of(first) == rank_of(second)
                    or file_of(first) == file_of(second)
                )
                if aligned and path_is_clear(board, first, second):
                    return CONNECTED_ROOKS_BONUS
        return 0
