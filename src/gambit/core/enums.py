"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank direction pawns of this color advance in."""
        return 1 if self is Color.WHITE else -1

    @property
    def home_rank(self) -> int:
        """Rank index (0–7) of this color's back rank."""
        return 0 if self is Color.WHITE else 7

    @property
    def promotion_rank(self) -> int:
        """Rank index (0–7) a pawn of this color promotes on."""
        return 7 if self is Color.WHITE else 0

    def __str__(self) -> str:
        return self.name.lower()


_PIECE_VALUES: dict[int, int] = {1: 100, 2: 320, 3: 330, 4: 500, 5: 900, 6: 0}


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def value_cp(self) -> int:
        """Standard material value in centipawns (the king is unvalued)."""
        return _PIECE_VALUES[self.value]

    @property
    def is_slider(self) -> bool:
        return self in (PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN)


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_side(cls, color: Color, kingside: bool) -> CastlingRights:
        if color == Color.WHITE:
            return cls.WHITE_KINGSIDE if kingside else cls.WHITE_QUEENSIDE
        return cls.BLACK_KINGSIDE if kingside else cls.BLACK_QUEENSIDE

    @classmethod
    def for_color(cls, color: Color) -> CastlingRights:
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH


class GameStatus(IntEnum):
    """Status of the side to move after the last applied move."""

    IN_PROGRESS = 0
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()
    DRAW = auto()


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3


class DrawReason(IntEnum):
    """Which rule ended the game in a draw."""

    NONE = 0
    STALEMATE = auto()
    FIFTY_MOVE_RULE = auto()
    THREEFOLD_REPETITION = auto()
    INSUFFICIENT_MATERIAL = auto()
