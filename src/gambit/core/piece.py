"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color, PieceType

_FEN_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_LETTER_TYPES: dict[str, PieceType] = {v: k for k, v in _FEN_LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece.

    Pieces carry no identity or movement history; castling eligibility is
    tracked by :class:`~gambit.core.enums.CastlingRights` on the game state.
    """

    color: Color
    piece_type: PieceType

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _FEN_LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        ptype = _LETTER_TYPES.get(char.lower()) if len(char) == 1 else None
        if ptype is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)

    @property
    def value(self) -> int:
        """Material value in centipawns."""
        return self.piece_type.value_cp

    # ── Predicates ───────────────────────────────────────────────────────

    def is_type(self, color: Color, piece_type: PieceType) -> bool:
        return self.color == color and self.piece_type == piece_type

    def promoted(self, piece_type: PieceType) -> Piece:
        """A new piece of the same color and the given type."""
        return Piece(self.color, piece_type)
