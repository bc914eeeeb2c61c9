"""Move rejection kinds and the exception that carries them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gambit.core.move import Move


class MoveError(Enum):
    """Why a move was rejected."""

    NO_PIECE = "no piece on the source square"
    WRONG_COLOR = "piece does not belong to the side to move"
    ILLEGAL_MOVE = "move is not legal for this piece"
    LEAVES_KING_IN_CHECK = "move leaves own king in check"
    PROMOTION_REQUIRED = "promotion move needs a promotion piece type"
    INVALID_PROMOTION = "promotion type given for a non-promotion move"
    CASTLING_BLOCKED = "castling is not allowed in this position"
    EN_PASSANT_INVALID = "en passant capture is not available"
    GAME_OVER = "game is already over"


class IllegalMoveError(ValueError):
    """Raised when a move is rejected; the game state is left unchanged."""

    def __init__(self, reason: MoveError, move: Move | None = None) -> None:
        self.reason = reason
        self.move = move
        detail = f" ({move})" if move is not None else ""
        super().__init__(f"Illegal move{detail}: {reason.value}")


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of attempting a move: either applied or rejected with a reason."""

    move: Move
    error: MoveError | None = None

    @property
    def applied(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.applied
