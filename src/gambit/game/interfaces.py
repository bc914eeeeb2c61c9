"""Abstract interfaces for the game layer.

Front ends (a GUI, a console loop, tests) depend on these ABCs rather than
on :class:`~gambit.game.controller.GameController` itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.enums import Color
    from gambit.core.errors import MoveOutcome
    from gambit.core.move import Move
    from gambit.core.piece import Piece
    from gambit.core.state import GameState
    from gambit.core.types import Square


class IGameController(ABC):
    """Interface for the object that owns and drives a game."""

    @abstractmethod
    def start_new_game(self, fen: str | None = None) -> None:
        """Discard the current game and set up a fresh one."""

    @abstractmethod
    def make_move(self, move: Move) -> None:
        """Apply *move*; raises :class:`~gambit.core.errors.IllegalMoveError`."""

    @abstractmethod
    def try_move(self, move: Move) -> MoveOutcome:
        """Apply *move* if legal; report the rejection reason otherwise."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Take back the last ply. Returns ``False`` when there is none."""

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    @abstractmethod
    def state(self) -> GameState: ...

    @property
    @abstractmethod
    def board(self) -> Board: ...

    @property
    @abstractmethod
    def current_player(self) -> Color: ...

    @property
    @abstractmethod
    def move_history(self) -> list[Move]: ...

    @property
    @abstractmethod
    def en_passant_target(self) -> Square | None: ...

    @abstractmethod
    def captured_pieces(self, color: Color) -> list[Piece]: ...

    @abstractmethod
    def is_check(self) -> bool: ...

    @abstractmethod
    def is_checkmate(self) -> bool: ...

    @abstractmethod
    def is_stalemate(self) -> bool: ...

    @abstractmethod
    def is_draw(self) -> bool: ...

    # ── AI ───────────────────────────────────────────────────────────────

    @abstractmethod
    def set_ai_enabled(self, enabled: bool) -> None: ...

    @abstractmethod
    def set_ai_color(self, color: Color) -> None: ...

    @abstractmethod
    def get_best_move(self, state: GameState | None = None) -> Move | None: ...
