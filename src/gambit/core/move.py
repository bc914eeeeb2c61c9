"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import PieceType
from gambit.core.types import Square, is_valid_square, parse_square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
_CHAR_PROMOS: dict[str, PieceType] = {v: k for k, v in _PROMO_CHARS.items()}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable description of a single ply.

    A move is side-effect free; all mutation happens when a
    :class:`~gambit.core.state.GameState` executes it.  ``promotion`` is
    ``None`` for pawn moves onto the back rank until the caller picks a
    piece type.  Castling moves carry the rook's source and target squares.
    """

    source: Square
    target: Square
    promotion: PieceType | None = None
    is_castling: bool = False
    rook_source: Square | None = None
    rook_target: Square | None = None

    def __post_init__(self) -> None:
        if not (is_valid_square(self.source) and is_valid_square(self.target)):
            raise ValueError(f"Move squares off the board: {self.source}, {self.target}")
        if self.promotion in (PieceType.KING, PieceType.PAWN):
            raise ValueError(f"Cannot promote to {self.promotion.name}")
        if self.is_castling and (self.rook_source is None or self.rook_target is None):
            raise ValueError("Castling move needs both rook squares")

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.source)}{square_name(self.target)}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)

    # ── Construction helpers ─────────────────────────────────────────────

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Plain move from long-algebraic text such as ``e7e8q``.

        Castling metadata cannot be recovered from text alone; use
        :func:`gambit.core.notation.parse_uci` to resolve a move against a
        position.
        """
        text = text.strip().lower()
        if len(text) not in (4, 5):
            raise ValueError(f"Invalid UCI move: {text!r}")
        promotion: PieceType | None = None
        if len(text) == 5:
            promotion = _CHAR_PROMOS.get(text[4])
            if promotion is None:
                raise ValueError(f"Invalid promotion piece in {text!r}")
        return cls(parse_square(text[:2]), parse_square(text[2:4]), promotion)

    def with_promotion(self, piece_type: PieceType) -> Move:
        """Copy of this move with the promotion type filled in."""
        return Move(self.source, self.target, piece_type)
