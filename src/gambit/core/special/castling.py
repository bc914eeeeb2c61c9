"""Castling: move templates, legality and execution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.errors import MoveError
from gambit.core.move import Move
from gambit.core.move_generator import king_in_check
from gambit.core.types import Square, make_square

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.state import GameState


@dataclass(frozen=True, slots=True)
class CastlingSide:
    """Fixed squares involved in one castling option."""

    color: Color
    kingside: bool
    right: CastlingRights
    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square
    between: tuple[Square, ...]
    king_path: tuple[Square, ...]

    @property
    def move(self) -> Move:
        return Move(
            self.king_from,
            self.king_to,
            is_castling=True,
            rook_source=self.rook_from,
            rook_target=self.rook_to,
        )


def _side(color: Color, kingside: bool) -> CastlingSide:
    rank = color.home_rank
    if kingside:
        return CastlingSide(
            color=color,
            kingside=True,
            right=CastlingRights.for_side(color, True),
            king_from=make_square(4, rank),
            king_to=make_square(6, rank),
            rook_from=make_square(7, rank),
            rook_to=make_square(5, rank),
            between=(make_square(5, rank), make_square(6, rank)),
            king_path=(make_square(5, rank), make_square(6, rank)),
        )
    return CastlingSide(
        color=color,
        kingside=False,
        right=CastlingRights.for_side(color, False),
        king_from=make_square(4, rank),
        king_to=make_square(2, rank),
        rook_from=make_square(0, rank),
        rook_to=make_square(3, rank),
        between=(make_square(1, rank), make_square(2, rank), make_square(3, rank)),
        king_path=(make_square(3, rank), make_square(2, rank)),
    )


CASTLING_SIDES: tuple[CastlingSide, ...] = tuple(
    _side(color, kingside) for color in Color for kingside in (True, False)
)

# Rook corner -> right forfeited when anything moves from or onto it.
ROOK_CORNERS: dict[Square, CastlingRights] = {
    side.rook_from: side.right for side in CASTLING_SIDES
}


def kingside_move(color: Color) -> Move:
    return _side(color, True).move


def queenside_move(color: Color) -> Move:
    return _side(color, False).move


def side_for(move: Move) -> CastlingSide | None:
    """The castling option whose king path *move* describes, if any."""
    for side in CASTLING_SIDES:
        if move.source == side.king_from and move.target == side.king_to:
            return side
    return None


def validate(state: GameState, move: Move) -> MoveError | None:
    """Check every castling precondition; ``None`` means castling is legal."""
    side = side_for(move)
    if side is None or side.color != state.current_player:
        return MoveError.CASTLING_BLOCKED

    board = state.board
    king = board[side.king_from]
    rook = board[side.rook_from]
    if not state.castling & side.right:
        return MoveError.CASTLING_BLOCKED
    if king is None or not king.is_type(side.color, PieceType.KING):
        return MoveError.CASTLING_BLOCKED
    if rook is None or not rook.is_type(side.color, PieceType.ROOK):
        return MoveError.CASTLING_BLOCKED
    if any(not board.is_empty(sq) for sq in side.between):
        return MoveError.CASTLING_BLOCKED
    if king_in_check(board, side.color):
        return MoveError.CASTLING_BLOCKED

    # Probe each square the king crosses or lands on with a disposable board.
    for sq in side.king_path:
        scratch = board.copy()
        scratch[side.king_from] = None
        scratch[sq] = king
        if king_in_check(scratch, side.color):
            return MoveError.CASTLING_BLOCKED
    return None


def is_valid(state: GameState, move: Move) -> bool:
    return validate(state, move) is None


def legal_moves(state: GameState) -> list[Move]:
    """Castling moves available to the side to move (kingside first)."""
    color = state.current_player
    return [
        side.move
        for side in CASTLING_SIDES
        if side.color == color and validate(state, side.move) is None
    ]


def execute(board: Board, move: Move) -> None:
    """Relocate king and rook together."""
    assert move.rook_source is not None and move.rook_target is not None
    king = board[move.source]
    rook = board[move.rook_source]
    if king is None or rook is None:
        raise ValueError(f"Castling {move} without king and rook in place")
    board[move.source] = None
    board[move.rook_source] = None
    board[move.target] = king
    board[move.rook_target] = rook


def forfeited_rights(move: Move, moved_type: PieceType, color: Color) -> CastlingRights:
    """Rights lost by playing *move* with a piece of *moved_type*."""
    lost = CastlingRights.NONE
    if moved_type == PieceType.KING:
        lost |= CastlingRights.for_color(color)
    for sq in (move.source, move.target):
        lost |= ROOK_CORNERS.get(sq, CastlingRights.NONE)
    return lost
