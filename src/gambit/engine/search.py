"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.state import GameState


class EvaluatorKind(Enum):
    """Which static evaluation scores the candidate positions."""

    STATE = "state"
    POSITIONAL = "positional"
    MATERIAL = "material"


@dataclass(slots=True, frozen=True)
class EngineSettings:
    """Configuration for a move computation."""

    evaluator: EvaluatorKind = EvaluatorKind.STATE
    expand_promotions: bool = True
    log_candidates: bool = False


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``candidates`` holds every legal move with its score, in the order the
    moves were generated.
    """

    best_move: Move | None
    score_cp: int
    candidates: tuple[tuple[Move, int], ...] = field(default_factory=tuple)
    state_name: str = ""


class IEngine(Protocol):
    """Protocol for chess engines used by the game layer."""

    def search(self, state: GameState) -> SearchResult: ...

    def find_best_move(self, state: GameState) -> Move | None: ...
