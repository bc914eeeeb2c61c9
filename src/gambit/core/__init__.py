"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from gambit.core import GameState, parse_uci

    state = GameState()
    state.make_move(parse_uci(state, "e2e4"))
    for move in state.legal_moves():
        print(move)
"""

from gambit.core.board import Board
from gambit.core.enums import (
    CastlingRights,
    Color,
    DrawReason,
    GameResult,
    GameStatus,
    PieceType,
)
from gambit.core.errors import IllegalMoveError, MoveError, MoveOutcome
from gambit.core.executor import MoveExecutor
from gambit.core.move import Move
from gambit.core.notation import (
    STARTING_FEN,
    parse_uci,
    play_uci,
    state_from_fen,
    state_to_fen,
)
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.state import GameState
from gambit.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)
from gambit.core.validator import MoveValidator

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "DrawReason",
    "GameResult",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "GameState",
    "Move",
    "MoveExecutor",
    "MoveValidator",
    "Piece",
    "Rules",
    # Errors
    "IllegalMoveError",
    "MoveError",
    "MoveOutcome",
    # Notation
    "STARTING_FEN",
    "parse_uci",
    "play_uci",
    "state_from_fen",
    "state_to_fen",
]
