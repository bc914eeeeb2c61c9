"""GameState: board plus turn, history, draw counters and status flags."""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, GameResult, GameStatus
from gambit.core.errors import IllegalMoveError
from gambit.core.executor import MoveExecutor
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.special import castling
from gambit.core.types import Square
from gambit.core.validator import MoveValidator
from gambit.core.zobrist import position_key


class GameState:
    """Complete game: position, side to move, bookkeeping and status.

    ``position_count`` maps position signatures to how often they occurred;
    the position a state is created with counts once.  Copies made with
    :meth:`copy` carry their own table, so simulating moves never touches
    the real game's repetition record.
    """

    __slots__ = (
        "board",
        "current_player",
        "castling",
        "en_passant_target",
        "half_move_clock",
        "fullmove_number",
        "move_history",
        "captured_pieces",
        "position_count",
        "check",
        "checkmate",
        "stalemate",
    )

    def __init__(
        self,
        board: Board | None = None,
        current_player: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant_target: Square | None = None,
        half_move_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.current_player = current_player
        self.castling = castling
        self.en_passant_target = en_passant_target
        self.half_move_clock = half_move_clock
        self.fullmove_number = fullmove_number
        self.move_history: list[Move] = []
        self.captured_pieces: dict[Color, list[Piece]] = {
            Color.WHITE: [],
            Color.BLACK: [],
        }
        self.position_count: dict[int, int] = {}
        self.check = False
        self.checkmate = False
        self.stalemate = False
        self.record_position()
        self.refresh_status()

    # ── Moves ────────────────────────────────────────────────────────────

    def make_move(self, move: Move, simulate: bool = False) -> Move:
        """Validate and apply *move*; returns the move as executed.

        Real moves are validated first and raise :class:`IllegalMoveError`
        without touching the state.  Simulated moves skip validation and
        all bookkeeping beyond the board and en-passant target.
        """
        if not simulate:
            error = MoveValidator.validate(self, move)
            if error is not None:
                raise IllegalMoveError(error, move)
            if MoveValidator.is_castling_attempt(self, move):
                side = castling.side_for(move)
                assert side is not None
                move = side.move
        MoveExecutor.execute(self, move, simulate)
        return move

    def legal_moves(self, expand_promotions: bool = False) -> list[Move]:
        return MoveValidator.legal_moves(self, expand_promotions=expand_promotions)

    def is_legal(self, move: Move) -> bool:
        return MoveValidator.is_legal(self, move)

    # ── Repetition ───────────────────────────────────────────────────────

    def signature(self) -> int:
        """Signature of the current position for repetition detection."""
        return position_key(
            self.board, self.current_player, self.castling, self.en_passant_target
        )

    def record_position(self) -> None:
        key = self.signature()
        self.position_count[key] = self.position_count.get(key, 0) + 1

    def repetition_count(self) -> int:
        """How many times the current position has occurred."""
        return self.position_count.get(self.signature(), 0)

    # ── Status ───────────────────────────────────────────────────────────

    def refresh_status(self) -> None:
        """Recompute check, checkmate and stalemate for the side to move."""
        color = self.current_player
        self.check = MoveValidator.is_king_in_check(self, color)
        if MoveValidator.has_legal_moves(self, color):
            self.checkmate = False
            self.stalemate = False
        else:
            self.checkmate = self.check
            self.stalemate = not self.check

    @property
    def is_draw(self) -> bool:
        return Rules.is_draw(self)

    @property
    def is_game_over(self) -> bool:
        return self.checkmate or self.stalemate or self.is_draw

    @property
    def result(self) -> GameResult:
        return Rules.game_result(self)

    @property
    def winner(self) -> Color | None:
        return self.current_player.opposite if self.checkmate else None

    @property
    def status(self) -> GameStatus:
        if self.checkmate:
            return GameStatus.CHECKMATE
        if self.stalemate:
            return GameStatus.STALEMATE
        if self.is_draw:
            return GameStatus.DRAW
        if self.check:
            return GameStatus.CHECK
        return GameStatus.IN_PROGRESS

    def captured_by(self, color: Color) -> list[Piece]:
        """Pieces *color* has captured, in capture order."""
        return list(self.captured_pieces[color])

    # ── Copying ──────────────────────────────────────────────────────────

    def copy(self) -> GameState:
        """Independent deep copy (pieces are immutable and shared)."""
        clone = GameState.__new__(GameState)
        clone.board = self.board.copy()
        clone.current_player = self.current_player
        clone.castling = self.castling
        clone.en_passant_target = self.en_passant_target
        clone.half_move_clock = self.half_move_clock
        clone.fullmove_number = self.fullmove_number
        clone.move_history = self.move_history.copy()
        clone.captured_pieces = {
            color: pieces.copy() for color, pieces in self.captured_pieces.items()
        }
        clone.position_count = self.position_count.copy()
        clone.check = self.check
        clone.checkmate = self.checkmate
        clone.stalemate = self.stalemate
        return clone

    clone = copy

    def __repr__(self) -> str:
        return (
            f"GameState(to_move={self.current_player}, status={self.status.name}, "
            f"plies={len(self.move_history)})"
        )
