"""Resolve long-algebraic move text against a position."""

from __future__ import annotations

from gambit.core.errors import IllegalMoveError, MoveError
from gambit.core.move import Move
from gambit.core.special import castling
from gambit.core.state import GameState
from gambit.core.validator import MoveValidator


def parse_uci(state: GameState, text: str) -> Move:
    """Turn text such as ``e1g1`` or ``a7a8q`` into a playable :class:`Move`.

    King moves of two files are filled in with their castling rook squares.
    The move is not validated beyond that; raises :class:`ValueError` for
    malformed text.
    """
    move = Move.from_uci(text)
    if MoveValidator.is_castling_attempt(state, move):
        side = castling.side_for(move)
        if side is None:
            raise IllegalMoveError(MoveError.ILLEGAL_MOVE, move)
        return side.move
    return move


def play_uci(state: GameState, *moves: str) -> None:
    """Play a sequence of moves given as text, validating each one."""
    for text in moves:
        state.make_move(parse_uci(state, text))
