"""Game phase detection.

Two views of the same question are offered: a continuous phase value in
``[0, 1]`` derived from the material left on the board, and a discrete
:class:`GamePhase` classification that also looks at development.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Final

from gambit.core.enums import PieceType
from gambit.core.types import parse_square

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.state import GameState

# Non-king material at the start (kept at the historical value, which
# makes the starting position clamp to exactly 0).
STARTING_MATERIAL: Final = 7800

OPENING_THRESHOLD: Final = 0.3
ENDGAME_THRESHOLD: Final = 0.7

OPENING_PIECE_COUNT: Final = 28
ENDGAME_PIECE_COUNT: Final = 15
QUEENLESS_ENDGAME_PIECE_COUNT: Final = 20
DEVELOPED_THRESHOLD: Final = 8
MIN_MOVES_FOR_MIDDLEGAME: Final = 10

_MINOR_HOME_SQUARES: Final = tuple(
    parse_square(name) for name in ("b1", "g1", "b8", "g8", "c1", "f1", "c8", "f8")
)
_KING_HOME_SQUARES: Final = (parse_square("e1"), parse_square("e8"))


class GamePhase(Enum):
    OPENING = "Opening"
    MIDDLEGAME = "Middlegame"
    ENDGAME = "Endgame"


def calculate_phase_value(board: Board) -> float:
    """0.0 with all material on the board, rising to 1.0 as it comes off."""
    material = sum(
        piece.value
        for _, piece in board.occupied()
        if piece.piece_type != PieceType.KING
    )
    return max(0.0, min(1.0, 1.0 - material / STARTING_MATERIAL))


def phase_for_value(phase: float) -> GamePhase:
    if phase >= ENDGAME_THRESHOLD:
        return GamePhase.ENDGAME
    if phase >= OPENING_THRESHOLD:
        return GamePhase.MIDDLEGAME
    return GamePhase.OPENING


def development_score(board: Board) -> int:
    """Vacated minor-piece home squares, with a moved king counting double."""
    score = sum(1 for sq in _MINOR_HOME_SQUARES if board.is_empty(sq))
    score += sum(2 for sq in _KING_HOME_SQUARES if board.is_empty(sq))
    return score


def detect_phase(state: GameState) -> GamePhase:
    """Classify *state* by piece count, queens and development."""
    board = state.board
    pieces = board.count()

    if pieces <= ENDGAME_PIECE_COUNT:
        return GamePhase.ENDGAME
    if pieces <= QUEENLESS_ENDGAME_PIECE_COUNT and not any(
        piece.piece_type == PieceType.QUEEN for _, piece in board.occupied()
    ):
        return GamePhase.ENDGAME
    if pieces >= OPENING_PIECE_COUNT:
        if (
            len(state.move_history) >= MIN_MOVES_FOR_MIDDLEGAME
            and development_score(board) >= DEVELOPED_THRESHOLD
        ):
            return GamePhase.MIDDLEGAME
        return GamePhase.OPENING
    return GamePhase.MIDDLEGAME
