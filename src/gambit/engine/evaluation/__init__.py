"""Static evaluators: every one scores a board in centipawns for one side."""

from gambit.engine.evaluation.activity import PieceActivityEvaluator
from gambit.engine.evaluation.base import Evaluator
from gambit.engine.evaluation.king_safety import KingSafetyEvaluator
from gambit.engine.evaluation.material import MaterialEvaluator
from gambit.engine.evaluation.pawn_structure import PawnStructureEvaluator
from gambit.engine.evaluation.phases import (
    EndgameEvaluator,
    MiddlegameEvaluator,
    OpeningEvaluator,
)
from gambit.engine.evaluation.piece_square import PieceSquareEvaluator
from gambit.engine.evaluation.positional import (
    PHASE_WEIGHTS,
    PhaseWeights,
    PositionEvaluator,
)
from gambit.engine.evaluation.tactical import TacticalEvaluator

__all__ = [
    "PHASE_WEIGHTS",
    "EndgameEvaluator",
    "Evaluator",
    "KingSafetyEvaluator",
    "MaterialEvaluator",
    "MiddlegameEvaluator",
    "OpeningEvaluator",
    "PawnStructureEvaluator",
    "PhaseWeights",
    "PieceActivityEvaluator",
    "PieceSquareEvaluator",
    "PositionEvaluator",
    "TacticalEvaluator",
]
