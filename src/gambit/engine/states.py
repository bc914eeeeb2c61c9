"""Evaluation states: which evaluator the engine trusts at this point of the game."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final, Protocol

from gambit.core.validator import MoveValidator
from gambit.engine.evaluation.king_safety import KingSafetyEvaluator
from gambit.engine.evaluation.material import MaterialEvaluator
from gambit.engine.evaluation.phases import (
    EndgameEvaluator,
    MiddlegameEvaluator,
    OpeningEvaluator,
)
from gambit.engine.evaluation.tactical import TacticalEvaluator
from gambit.engine.phase import GamePhase, calculate_phase_value, phase_for_value

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.enums import Color
    from gambit.core.state import GameState
    from gambit.engine.evaluation.base import Evaluator

_LOGGER = logging.getLogger(__name__)

KING_SAFETY_WEIGHT: Final = 3.0
TACTICAL_WEIGHT: Final = 1.5
IN_CHECK_PHASE: Final = 0.5


class ChessState(Protocol):
    """A named evaluation strategy."""

    @property
    def name(self) -> str: ...

    def evaluate(self, board: Board, side: Color) -> int: ...


class PhaseState:
    """Delegates to the evaluator of one game phase.

    *base*, when given, is added on top; the opening evaluator scores no
    material of its own and is paired with :class:`MaterialEvaluator`.
    """

    __slots__ = ("_name", "_evaluator", "_base")

    def __init__(self, name: str, evaluator: Evaluator, base: Evaluator | None = None) -> None:
        self._name = name
        self._evaluator = evaluator
        self._base = base

    @property
    def name(self) -> str:
        return self._name

    def evaluate(self, board: Board, side: Color) -> int:
        score = self._evaluator.evaluate(board, side)
        if self._base is not None:
            score += self._base.evaluate(board, side)
        return score

    def __repr__(self) -> str:
        return f"PhaseState({self._name!r})"


class InCheckState:
    """Used while the side to move is in check: king safety dominates."""

    __slots__ = ("_material", "_king", "_tactical")

    def __init__(self) -> None:
        self._material = MaterialEvaluator()
        self._king = KingSafetyEvaluator()
        self._tactical = TacticalEvaluator()

    @property
    def name(self) -> str:
        return "InCheck"

    def evaluate(self, board: Board, side: Color) -> int:
        score = self._material.evaluate(board, side)
        score += int(self._king.evaluate(board, side, IN_CHECK_PHASE) * KING_SAFETY_WEIGHT)
        score += int(self._tactical.evaluate(board, side) * TACTICAL_WEIGHT)
        return score

    def __repr__(self) -> str:
        return "InCheckState()"


class StateManager:
    """Picks the evaluation state for a game and remembers the last one.

    Being in check overrides everything; otherwise the material-derived
    phase value selects the opening, middlegame or endgame state.  Every
    change of state is logged at DEBUG level.
    """

    __slots__ = ("_phase_states", "_in_check", "_current", "_previous")

    def __init__(self) -> None:
        self._phase_states: dict[GamePhase, ChessState] = {
            GamePhase.OPENING: PhaseState(
                GamePhase.OPENING.value, OpeningEvaluator(), MaterialEvaluator()
            ),
            GamePhase.MIDDLEGAME: PhaseState(
                GamePhase.MIDDLEGAME.value, MiddlegameEvaluator()
            ),
            GamePhase.ENDGAME: PhaseState(GamePhase.ENDGAME.value, EndgameEvaluator()),
        }
        self._in_check: ChessState = InCheckState()
        self._current: ChessState = self._phase_states[GamePhase.OPENING]
        self._previous: ChessState = self._current

    @property
    def current(self) -> ChessState:
        return self._current

    @property
    def previous(self) -> ChessState:
        return self._previous

    @property
    def in_check_state(self) -> ChessState:
        return self._in_check

    def phase_state(self, phase: GamePhase) -> ChessState:
        return self._phase_states[phase]

    def update(self, state: GameState) -> ChessState:
        """Re-classify *state* and return the state now in effect."""
        self._previous = self._current
        if MoveValidator.is_king_in_check(state, state.current_player):
            new = self._in_check
        else:
            phase = calculate_phase_value(state.board)
            new = self._phase_states[phase_for_value(phase)]

        if new is not self._current:
            _LOGGER.debug("State transition: %s -> %s", self._current.name, new.name)
            self._current = new
        return self._current
