"""Text formats: FEN positions and long-algebraic (UCI) moves."""

from gambit.core.notation.fen import (
    STARTING_FEN,
    board_to_fen,
    state_from_fen,
    state_to_fen,
)
from gambit.core.notation.uci import parse_uci, play_uci

__all__ = [
    "STARTING_FEN",
    "board_to_fen",
    "parse_uci",
    "play_uci",
    "state_from_fen",
    "state_to_fen",
]
