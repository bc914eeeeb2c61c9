"""GameController: the central orchestrator of a chess game.

Coordinates the GameState, the undo snapshots and the AI opponent.
Emits events via simple callbacks so a front end or tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from gambit.core.board import Board
from gambit.core.enums import Color, DrawReason, GameResult
from gambit.core.errors import IllegalMoveError, MoveOutcome
from gambit.core.move import Move
from gambit.core.notation import state_from_fen
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.state import GameState
from gambit.core.types import Square
from gambit.engine.flat_search import FlatSearchEngine
from gambit.engine.search import IEngine
from gambit.game.interfaces import IGameController

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

BoardUpdatedCallback = Callable[[], None]
GameOverCallback = Callable[[GameResult, str], None]  # result, message
MoveCallback = Callable[[Move, "GameState"], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_board_updated: list[BoardUpdatedCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)


_DRAW_MESSAGES: dict[DrawReason, str] = {
    DrawReason.STALEMATE: "Stalemate! The game is a draw.",
    DrawReason.INSUFFICIENT_MATERIAL: "Draw by insufficient material.",
    DrawReason.FIFTY_MOVE_RULE: "Draw by the fifty-move rule.",
    DrawReason.THREEFOLD_REPETITION: "Draw by threefold repetition.",
}


def game_over_message(state: GameState) -> str:
    """Human-readable description of how *state* ended, or ``""``."""
    if state.checkmate:
        winner = state.current_player.opposite
        return f"Checkmate! {winner.name.capitalize()} wins."
    return _DRAW_MESSAGES.get(Rules.draw_reason(state), "")


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns one game: applies moves, keeps undo snapshots, plays the AI.

    Every applied ply pushes a full copy of the resulting state, so undo
    restores board, clocks, castling rights and repetition counts exactly.
    When the AI is enabled and owns the side to move it replies at once,
    on the calling thread, before the triggering call returns.
    """

    __slots__ = (
        "_state",
        "_snapshots",
        "_engine",
        "_ai_enabled",
        "_ai_color",
        "events",
    )

    def __init__(self, engine: IEngine | None = None) -> None:
        self._engine: IEngine = engine if engine is not None else FlatSearchEngine()
        self._ai_enabled = False
        self._ai_color = Color.BLACK
        self._state = GameState()
        self._snapshots: list[GameState] = [self._state.copy()]
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def engine(self) -> IEngine:
        return self._engine

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def current_player(self) -> Color:
        return self._state.current_player

    @property
    def move_history(self) -> list[Move]:
        return list(self._state.move_history)

    @property
    def en_passant_target(self) -> Square | None:
        return self._state.en_passant_target

    @property
    def ai_enabled(self) -> bool:
        return self._ai_enabled

    @property
    def ai_color(self) -> Color:
        return self._ai_color

    def captured_pieces(self, color: Color) -> list[Piece]:
        return self._state.captured_by(color)

    def is_check(self) -> bool:
        return self._state.check

    def is_checkmate(self) -> bool:
        return self._state.checkmate

    def is_stalemate(self) -> bool:
        return self._state.stalemate

    def is_draw(self) -> bool:
        return self._state.is_draw

    def is_game_over(self) -> bool:
        return self._state.is_game_over

    # ── IGameController impl ─────────────────────────────────────────────

    def start_new_game(self, fen: str | None = None) -> None:
        self._state = GameState() if fen is None else state_from_fen(fen)
        self._snapshots = [self._state.copy()]
        _LOGGER.info("New game started (%s to move)", self._state.current_player)
        self._emit_board_updated()
        if self._state.is_game_over:
            self._emit_game_over()
            return
        self._play_ai_reply()

    initialize = start_new_game

    def make_move(self, move: Move) -> None:
        self._apply(move)
        if not self._state.is_game_over:
            self._play_ai_reply()

    def try_move(self, move: Move) -> MoveOutcome:
        try:
            self.make_move(move)
        except IllegalMoveError as exc:
            _LOGGER.debug("Rejected %s: %s", move, exc.reason.value)
            return MoveOutcome(move, exc.reason)
        return MoveOutcome(move)

    def undo_move(self) -> bool:
        if len(self._snapshots) <= 1:
            return False
        self._snapshots.pop()
        self._state = self._snapshots[-1].copy()
        _LOGGER.debug("Undo: %d plies remain", len(self._state.move_history))
        self._emit_board_updated()
        return True

    # ── AI ───────────────────────────────────────────────────────────────

    def set_ai_enabled(self, enabled: bool) -> None:
        self._ai_enabled = enabled
        if enabled:
            self._play_ai_reply()

    def set_ai_color(self, color: Color) -> None:
        self._ai_color = color
        if self._ai_enabled:
            self._play_ai_reply()

    def get_best_move(self, state: GameState | None = None) -> Move | None:
        """Engine's choice for *state* (default: the current game)."""
        return self._engine.find_best_move(self._state if state is None else state)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _apply(self, move: Move) -> Move:
        played = self._state.make_move(move)
        self._snapshots.append(self._state.copy())
        _LOGGER.debug("Played %s (%s)", played, self._state.status.name)
        self._emit_move(played)
        self._emit_board_updated()
        if self._state.is_game_over:
            self._emit_game_over()
        return played

    def _play_ai_reply(self) -> None:
        state = self._state
        if (
            not self._ai_enabled
            or state.current_player != self._ai_color
            or state.is_game_over
        ):
            return
        move = self._engine.find_best_move(state)
        if move is None:
            _LOGGER.warning("AI found no move for %s", self._ai_color)
            return
        self._apply(move)

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_board_updated(self) -> None:
        for cb in self.events.on_board_updated:
            cb()

    def _emit_game_over(self) -> None:
        result = self._state.result
        message = game_over_message(self._state)
        _LOGGER.info("Game over: %s", message or result.name)
        for cb in self.events.on_game_over:
            cb(result, message)
