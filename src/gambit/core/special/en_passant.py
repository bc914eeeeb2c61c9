"""En passant: capture detection, generation and execution."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import PieceType
from gambit.core.move import Move
from gambit.core.move_generator import pawn_attack_squares
from gambit.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.piece import Piece
    from gambit.core.state import GameState


def captured_pawn_square(move: Move) -> Square:
    """The victim stands on the capturing pawn's rank and the target's file."""
    return make_square(file_of(move.target), rank_of(move.source))


def is_capture(board: Board, move: Move, target: Square | None) -> bool:
    """Whether *move* is a pawn capturing onto the en-passant *target*."""
    if target is None or move.target != target:
        return False
    piece = board[move.source]
    return piece is not None and piece.piece_type == PieceType.PAWN


def capture_moves(state: GameState, sq: Square) -> list[Move]:
    """En-passant captures available to the pawn on *sq*."""
    target = state.en_passant_target
    pawn = state.board[sq]
    if target is None or pawn is None or pawn.piece_type != PieceType.PAWN:
        return []
    if target not in pawn_attack_squares(sq, pawn.color):
        return []
    move = Move(sq, target)
    victim = state.board[captured_pawn_square(move)]
    if victim is None or not victim.is_type(pawn.color.opposite, PieceType.PAWN):
        return []
    return [move]


def execute(board: Board, move: Move) -> Piece | None:
    """Remove the passed pawn, then move the capturing pawn."""
    victim_sq = captured_pawn_square(move)
    victim = board[victim_sq]
    board[victim_sq] = None
    board.move_piece(move)
    return victim


def double_push_target(piece: Piece, move: Move) -> Square | None:
    """Intermediate square after a two-square pawn advance, else ``None``."""
    if piece.piece_type != PieceType.PAWN:
        return None
    if abs(rank_of(move.target) - rank_of(move.source)) != 2:
        return None
    return make_square(file_of(move.source), (rank_of(move.source) + rank_of(move.target)) // 2)
