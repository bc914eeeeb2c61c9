"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, make_square

if TYPE_CHECKING:
    from gambit.core.move import Move

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-square board of immutable :class:`Piece` values.

    Squares are plain ints (see :mod:`gambit.core.types`).  The board does
    no legality checking: callers validate before writing.
    """

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._squares[sq] = piece

    def piece_at(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def set_piece_at(self, sq: Square, piece: Piece | None) -> None:
        """Direct slot write; no legality check."""
        self._squares[sq] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """``(square, piece)`` pairs in rank-major order (a1, b1, ... h8)."""
        for sq, piece in enumerate(self._squares):
            if piece is not None:
                yield sq, piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [
            sq
            for sq, p in enumerate(self._squares)
            if p is not None and p.color == color and p.piece_type == piece_type
        ]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [
            sq
            for sq, p in enumerate(self._squares)
            if p is not None and p.color == color
        ]

    def count(self, color: Color | None = None) -> int:
        """Number of pieces on the board, optionally for one color."""
        return sum(
            1
            for p in self._squares
            if p is not None and (color is None or p.color == color)
        )

    def find_king(self, color: Color) -> Square | None:
        for sq, p in enumerate(self._squares):
            if p is not None and p.piece_type == PieceType.KING and p.color == color:
                return sq
        return None

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self.find_king(color)
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    # -- Mutation / copying -------------------------------------------------

    def move_piece(self, move: Move) -> Piece | None:
        """Relocate the piece on ``move.source`` to ``move.target``.

        Returns whatever occupied the target square.  Special-move side
        effects (rook relocation, en-passant removal, promotion) are applied
        by the handlers in :mod:`gambit.core.special`.
        """
        piece = self._squares[move.source]
        if piece is None:
            raise ValueError(f"No piece on square {move.source}")
        captured = self._squares[move.target]
        self._squares[move.target] = piece
        self._squares[move.source] = None
        return captured

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        return b

    clone = copy

    def clear(self) -> None:
        self._squares = [None] * 64

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, pt in enumerate(_BACK_RANK):
            b[make_square(f, 0)] = Piece(Color.WHITE, pt)
            b[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            b[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
