"""Chess engine package: static evaluation and depth-one move selection."""

from gambit.engine.flat_search import FlatSearchEngine
from gambit.engine.phase import GamePhase, calculate_phase_value, detect_phase
from gambit.engine.search import EngineSettings, EvaluatorKind, IEngine, SearchResult
from gambit.engine.states import InCheckState, PhaseState, StateManager

DefaultEngine: type[IEngine] = FlatSearchEngine

__all__ = [
    "DefaultEngine",
    "EngineSettings",
    "EvaluatorKind",
    "FlatSearchEngine",
    "GamePhase",
    "IEngine",
    "InCheckState",
    "PhaseState",
    "SearchResult",
    "StateManager",
    "calculate_phase_value",
    "detect_phase",
]
