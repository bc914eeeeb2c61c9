"""Position signatures for repetition tracking.

A signature XORs one fixed 64-bit key per occupied (piece, square), one per
castling right still held, one for the en passant file and one when black
is to move.  Keys come from a seeded splitmix64 stream, so signatures are
identical between runs.
"""

from __future__ import annotations

from collections.abc import Iterator
from itertools import count
from typing import Final

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, file_of

_SEED: Final = 0xA5B3C7D9E1F23412
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF

_SINGLE_RIGHTS: Final = (
    CastlingRights.WHITE_KINGSIDE,
    CastlingRights.WHITE_QUEENSIDE,
    CastlingRights.BLACK_KINGSIDE,
    CastlingRights.BLACK_QUEENSIDE,
)


def _splitmix64(state: int) -> int:
    z = (state + 0x9E3779B97F4A7C15) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


def _key_stream() -> Iterator[int]:
    for n in count():
        yield _splitmix64(_SEED + n)


_keys = _key_stream()

PIECE_KEYS: Final[dict[Piece, tuple[int, ...]]] = {
    Piece(color, piece_type): tuple(next(_keys) for _ in range(64))
    for color in Color
    for piece_type in PieceType
}
BLACK_TO_MOVE_KEY: Final = next(_keys)
CASTLING_KEYS: Final[dict[CastlingRights, int]] = {
    right: next(_keys) for right in _SINGLE_RIGHTS
}
EN_PASSANT_FILE_KEYS: Final = tuple(next(_keys) for _ in range(8))

del _keys


def position_key(
    board: Board,
    side_to_move: Color,
    castling: CastlingRights,
    en_passant: Square | None,
) -> int:
    """Signature of placement, side to move, castling rights and en passant.

    The en passant square enters by file only; its rank follows from the
    side to move.
    """
    key = 0
    for sq, piece in board.occupied():
        key ^= PIECE_KEYS[piece][sq]
    if side_to_move == Color.BLACK:
        key ^= BLACK_TO_MOVE_KEY
    for right, right_key in CASTLING_KEYS.items():
        if castling & right:
            key ^= right_key
    if en_passant is not None:
        key ^= EN_PASSANT_FILE_KEYS[file_of(en_passant)]
    return key
