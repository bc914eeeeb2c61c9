"""Weighted blend of every evaluation component, tuned per game phase."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from gambit.engine.evaluation.activity import PieceActivityEvaluator
from gambit.engine.evaluation.king_safety import KingSafetyEvaluator
from gambit.engine.evaluation.material import MaterialEvaluator
from gambit.engine.evaluation.pawn_structure import PawnStructureEvaluator
from gambit.engine.evaluation.phases import (
    EndgameEvaluator,
    MiddlegameEvaluator,
    OpeningEvaluator,
)
from gambit.engine.evaluation.piece_square import PieceSquareEvaluator
from gambit.engine.evaluation.tactical import TacticalEvaluator
from gambit.engine.phase import GamePhase, calculate_phase_value, phase_for_value

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.enums import Color
    from gambit.engine.evaluation.base import Evaluator


@dataclass(frozen=True, slots=True)
class PhaseWeights:
    """Multipliers applied to each component; material always counts once."""

    pawn_structure: float = 1.0
    king_safety: float = 1.0
    activity: float = 1.0
    tactical: float = 1.0
    piece_square: float = 1.0
    phase_specific: float = 1.0


PHASE_WEIGHTS: Final[dict[GamePhase, PhaseWeights]] = {
    GamePhase.OPENING: PhaseWeights(
        pawn_structure=0.7,
        king_safety=1.2,
        activity=1.3,
        tactical=0.6,
        piece_square=1.5,
    ),
    GamePhase.MIDDLEGAME: PhaseWeights(king_safety=1.5, activity=1.5),
    GamePhase.ENDGAME: PhaseWeights(
        pawn_structure=1.5,
        king_safety=0.5,
        tactical=0.8,
        piece_square=0.7,
        phase_specific=1.5,
    ),
}


class PositionEvaluator:
    """Full static evaluation.

    The material-derived phase value picks a weight band and the matching
    phase evaluator; the remaining components are phase-aware themselves.
    Component scores are weighted as floats and truncated once at the end.
    """

    __slots__ = (
        "_weights",
        "_material",
        "_pawns",
        "_king",
        "_activity",
        "_tactical",
        "_pst",
        "_phase_evaluators",
    )

    def __init__(self, weights: dict[GamePhase, PhaseWeights] | None = None) -> None:
        self._weights = dict(PHASE_WEIGHTS if weights is None else weights)
        self._material = MaterialEvaluator()
        self._pawns = PawnStructureEvaluator()
        self._king = KingSafetyEvaluator()
        self._activity = PieceActivityEvaluator()
        self._tactical = TacticalEvaluator()
        self._pst = PieceSquareEvaluator()
        self._phase_evaluators: dict[GamePhase, Evaluator] = {
            GamePhase.OPENING: OpeningEvaluator(),
            GamePhase.MIDDLEGAME: MiddlegameEvaluator(),
            GamePhase.ENDGAME: EndgameEvaluator(),
        }

    def evaluate(self, board: Board, side: Color) -> int:
        phase = calculate_phase_value(board)
        band = phase_for_value(phase)
        w = self._weights[band]

        score = float(self._material.evaluate(board, side))
        score += self._pawns.evaluate(board, side, phase) * w.pawn_structure
        score += self._king.evaluate(board, side, phase) * w.king_safety
        score += self._activity.evaluate(board, side, phase) * w.activity
        score += self._tactical.evaluate(board, side) * w.tactical
        score += self._pst.evaluate(board, side, phase) * w.piece_square
        score += self._phase_evaluators[band].evaluate(board, side) * w.phase_specific
        return int(score)
