"""Depth-one move selection: play every legal move once and score the result."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import TYPE_CHECKING

from gambit.core.special import promotion
from gambit.core.validator import MoveValidator
from gambit.engine.evaluation.material import MaterialEvaluator
from gambit.engine.evaluation.positional import PositionEvaluator
from gambit.engine.search import EngineSettings, EvaluatorKind, IEngine, SearchResult
from gambit.engine.states import StateManager

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.state import GameState
    from gambit.engine.evaluation.base import Evaluator

_LOGGER = logging.getLogger(__name__)

_NO_SCORE = -(2**31)


class FlatSearchEngine(IEngine):
    """Evaluates each legal move on a simulated copy of the game.

    Candidates are tried in generation order and only a strictly higher
    score replaces the current best, so the first of several equally good
    moves wins.  Promotions are tried with every promotion piece unless
    :attr:`EngineSettings.expand_promotions` is off, in which case the
    simulation's default queen is assumed and the returned move carries it.
    """

    __slots__ = ("_settings", "_states", "_positional", "_material")

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self._settings = settings or EngineSettings()
        self._states = StateManager()
        self._positional = PositionEvaluator()
        self._material = MaterialEvaluator()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @settings.setter
    def settings(self, value: EngineSettings) -> None:
        self._settings = value

    @property
    def state_manager(self) -> StateManager:
        return self._states

    def find_best_move(self, state: GameState) -> Move | None:
        return self.search(state).best_move

    def search(self, state: GameState) -> SearchResult:
        started = perf_counter()
        evaluator, state_name = self._select_evaluator(state)
        side = state.current_player

        moves = MoveValidator.legal_moves(
            state, expand_promotions=self._settings.expand_promotions
        )
        if not moves:
            _LOGGER.info("No legal move for %s (%s)", side, state_name)
            return SearchResult(None, 0, (), state_name)

        best_move: Move | None = None
        best_score = _NO_SCORE
        candidates: list[tuple[Move, int]] = []
        for move in moves:
            if move.promotion is None and promotion.is_promotion_move(state.board, move):
                move = move.with_promotion(promotion.SIMULATION_DEFAULT)
            trial = state.clone()
            played = trial.make_move(move, simulate=True)
            score = evaluator.evaluate(trial.board, side)
            candidates.append((played, score))
            if score > best_score:
                best_score = score
                best_move = played

        elapsed_ms = (perf_counter() - started) * 1000.0
        if self._settings.log_candidates or _LOGGER.isEnabledFor(logging.DEBUG):
            self._log_candidates(candidates, best_move)
        _LOGGER.info(
            "Selected %s for %s: %d cp (%s, %d candidates, %.1f ms)",
            best_move,
            side,
            best_score,
            state_name,
            len(candidates),
            elapsed_ms,
        )
        return SearchResult(best_move, best_score, tuple(candidates), state_name)

    def _select_evaluator(self, state: GameState) -> tuple[Evaluator, str]:
        match self._settings.evaluator:
            case EvaluatorKind.STATE:
                current = self._states.update(state)
                return current, current.name
            case EvaluatorKind.POSITIONAL:
                return self._positional, "Positional"
            case EvaluatorKind.MATERIAL:
                return self._material, "Material"
        raise ValueError(f"Unknown evaluator kind: {self._settings.evaluator!r}")

    def _log_candidates(
        self, candidates: list[tuple[Move, int]], best_move: Move | None
    ) -> None:
        level = logging.INFO if self._settings.log_candidates else logging.DEBUG
        ranked = sorted(candidates, key=lambda item: item[1], reverse=True)
        for move, score in ranked:
            marker = " <<< selected" if move == best_move else ""
            _LOGGER.log(level, "  %s: %d%s", move, score, marker)
