"""High-level chess rules: draw detection and game result."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color, DrawReason, GameResult, PieceType
from gambit.core.types import is_light_square

if TYPE_CHECKING:
    from gambit.core.state import GameState

_MINOR_PIECES = (PieceType.BISHOP, PieceType.KNIGHT)


class Rules:
    """Static rule-checker that operates on a :class:`GameState`.

    Every draw condition is automatic; nothing here waits for a claim.
    """

    @staticmethod
    def is_fifty_move_rule(state: GameState) -> bool:
        return state.half_move_clock >= 100  # 100 half-moves = 50 full moves

    @staticmethod
    def is_threefold_repetition(state: GameState) -> bool:
        return state.repetition_count() >= 3

    @staticmethod
    def is_insufficient_material(state: GameState) -> bool:
        """K vs K, K+minor vs K, and bishops all on one square color.

        Any pawn, rook or queen on the board means mate is still possible.
        """
        minors: dict[Color, list[tuple[int, PieceType]]] = {
            Color.WHITE: [],
            Color.BLACK: [],
        }
        for sq, piece in state.board.occupied():
            if piece.piece_type == PieceType.KING:
                continue
            if piece.piece_type not in _MINOR_PIECES:
                return False
            minors[piece.color].append((sq, piece.piece_type))

        white, black = minors[Color.WHITE], minors[Color.BLACK]
        if not white and not black:
            return True

        # A lone minor piece against a bare king.
        if len(white) + len(black) == 1:
            return True

        everything = white + black
        if all(pt == PieceType.BISHOP for _, pt in everything):
            shades = {is_light_square(sq) for sq, _ in everything}
            return len(shades) == 1
        return False

    @staticmethod
    def draw_reason(state: GameState) -> DrawReason:
        """First applicable draw rule, or :attr:`DrawReason.NONE`."""
        if state.stalemate:
            return DrawReason.STALEMATE
        if Rules.is_insufficient_material(state):
            return DrawReason.INSUFFICIENT_MATERIAL
        if Rules.is_fifty_move_rule(state):
            return DrawReason.FIFTY_MOVE_RULE
        if Rules.is_threefold_repetition(state):
            return DrawReason.THREEFOLD_REPETITION
        return DrawReason.NONE

    @staticmethod
    def is_draw(state: GameState) -> bool:
        return Rules.draw_reason(state) != DrawReason.NONE

    @staticmethod
    def game_result(state: GameState) -> GameResult:
        """Determine the current game result from the state's flags."""
        if state.checkmate:
            return (
                GameResult.BLACK_WINS
                if state.current_player == Color.WHITE
                else GameResult.WHITE_WINS
            )
        if Rules.is_draw(state):
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
