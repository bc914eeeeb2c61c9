"""Short-range tactical motifs: hanging pieces, forks, pins, checks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from gambit.core.enums import Color, PieceType
from gambit.core.move_generator import (
    KNIGHT_TARGETS,
    QUEEN_DIRS,
    attacks_square,
    pawn_attack_squares,
    piece_attacks,
    pseudo_legal_moves,
)
from gambit.core.piece import Piece
from gambit.core.types import Square, offset_square
from gambit.engine.evaluation.base import (
    cheapest_attacker_value,
    is_attacked_by,
    is_defended,
    piece_value,
    relative,
)

if TYPE_CHECKING:
    from gambit.core.board import Board

HANGING_PIECE_PENALTY: Final = -35
CHECK_BONUS: Final = 20
FORK_POTENTIAL_BONUS: Final = 15
PIN_POTENTIAL_BONUS: Final = 15
DISCOVERED_ATTACK_BONUS: Final = 25
ATTACKED_DEFENDED_PENALTY: Final = -5

_DISCOVERY_TARGETS = (PieceType.QUEEN, PieceType.ROOK, PieceType.KING)


def _line_pieces(board: Board, sq: Square, df: int, dr: int) -> list[tuple[Square, Piece]]:
    """Pieces met walking from *sq* in direction (df, dr), nearest first."""
    found: list[tuple[Square, Piece]] = []
    cur = offset_square(sq, df, dr)
    while cur is not None:
        piece = board[cur]
        if piece is not None:
            found.append((cur, piece))
        cur = offset_square(cur, df, dr)
    return found


def _slides_along(piece_type: PieceType, df: int, dr: int) -> bool:
    if piece_type == PieceType.QUEEN:
        return True
    if piece_type == PieceType.ROOK:
        return df == 0 or dr == 0
    if piece_type == PieceType.BISHOP:
        return df != 0 and dr != 0
    return False


class TacticalEvaluator:
    """Scores immediate tactical chances for both sides.

    Each motif is scored for white and black independently; the result is
    the difference from *side*'s point of view.
    """

    __slots__ = ()

    def evaluate(self, board: Board, side: Color) -> int:
        white = self.score_color(board, Color.WHITE)
        black = self.score_color(board, Color.BLACK)
        return relative(white - black, side)

    def score_color(self, board: Board, color: Color) -> int:
        return (
            self.hanging_pieces(board, color)
            + self.pieces_under_attack(board, color)
            + self.fork_potential(board, color)
            + self.pin_potential(board, color)
            + self.discovered_attacks(board, color)
            + self.check_potential(board, color)
        )

    # -- Hanging and attacked pieces ------------------------------------------

    def hanging_pieces(self, board: Board, color: Color) -> int:
        """Undefended enemy pieces are targets, undefended own pieces liabilities.

        Pawns and kings are left out on both sides.
        """
        opponent = color.opposite
        score = 0
        for sq, piece in board.occupied():
            if piece.piece_type in (PieceType.PAWN, PieceType.KING):
                continue
            if piece.color == opponent:
                if is_defended(board, sq, opponent):
                    continue
                value = piece_value(piece.piece_type)
                score += value // 10
                cheapest = cheapest_attacker_value(board, sq, color)
                if cheapest is not None and value > cheapest:
                    score += value // 5
            else:
                if is_defended(board, sq, color):
                    continue
                if is_attacked_by(board, sq, opponent):
                    score += HANGING_PIECE_PENALTY
                else:
                    score += int(HANGING_PIECE_PENALTY / 2)
        return score

    def pieces_under_attack(self, board: Board, color: Color) -> int:
        score = 0
        for sq, piece in board.occupied():
            if piece.color != color or piece.piece_type == PieceType.KING:
                continue
            if not is_attacked_by(board, sq, color.opposite):
                continue
            if is_defended(board, sq, color):
                score += ATTACKED_DEFENDED_PENALTY
            else:
                score -= piece_value(piece.piece_type) // 5
        return score

    # -- Forks ----------------------------------------------------------------

    def fork_potential(self, board: Board, color: Color) -> int:
        """Knight hops and pawn diagonals from which two or more pieces are hit."""
        score = 0
        knight = Piece(color, PieceType.KNIGHT)
        for sq, piece in board.occupied():
            if piece.color != color:
                continue
            if piece.piece_type == PieceType.KNIGHT:
                squares: tuple[Square, ...] | list[Square] = KNIGHT_TARGETS[sq]
            elif piece.piece_type == PieceType.PAWN:
                squares = pawn_attack_squares(sq, color)
            else:
                continue
            for target in squares:
                hits = self._targets_from(board, knight, target, color.opposite)
                if hits >= 2:
                    score += FORK_POTENTIAL_BONUS * (hits - 1)
        return score

    @staticmethod
    def _targets_from(board: Board, knight: Piece, from_sq: Square, victims: Color) -> int:
        return sum(
            1
            for sq, piece in board.occupied()
            if piece.color == victims
            and piece.piece_type != PieceType.PAWN
            and piece_attacks(board, knight, from_sq, sq)
        )

    # -- Pins and discoveries -------------------------------------------------

    def pin_potential(self, board: Board, color: Color) -> int:
        """Own sliders with an enemy piece and then the enemy king behind it."""
        score = 0
        opponent = color.opposite
        for sq, piece in board.occupied():
            if piece.color != color or not piece.piece_type.is_slider:
                continue
            for df, dr in QUEEN_DIRS:
                if not _slides_along(piece.piece_type, df, dr):
                    continue
                line = _line_pieces(board, sq, df, dr)[:2]
                if len(line) < 2:
                    continue
                (_, first), (_, second) = line
                if first.color == opponent and second.is_type(opponent, PieceType.KING):
                    score += PIN_POTENTIAL_BONUS
        return score

    def discovered_attacks(self, board: Board, color: Color) -> int:
        """Own pieces masking an own slider's line onto a valuable enemy piece."""
        score = 0
        opponent = color.opposite
        for sq, piece in board.occupied():
            if piece.color != color:
                continue
            for df, dr in QUEEN_DIRS:
                behind = _line_pieces(board, sq, -df, -dr)[:1]
                if not behind:
                    continue
                _, back = behind[0]
                if back.color != color or not _slides_along(back.piece_type, df, dr):
                    continue
                ahead = _line_pieces(board, sq, df, dr)[:1]
                if ahead:
                    _, target = ahead[0]
                    if target.color == opponent and target.piece_type in _DISCOVERY_TARGETS:
                        score += DISCOVERED_ATTACK_BONUS
                        break
        return score

    # -- Checks ---------------------------------------------------------------

    def check_potential(self, board: Board, color: Color) -> int:
        """Direct checks score fully, one-move checking chances half."""
        king_sq = board.find_king(color.opposite)
        if king_sq is None:
            return 0
        score = 0
        for sq, piece in board.occupied():
            if piece.color != color:
                continue
            if attacks_square(board, sq, king_sq):
                score += CHECK_BONUS
            for move in pseudo_legal_moves(board, sq):
                if piece_attacks(board, piece, move.target, king_sq):
                    score += CHECK_BONUS // 2
        return score
