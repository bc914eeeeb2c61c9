"""Special-move handlers: castling, en passant and promotion.

Each module offers the legality check for its move kind and the board
side effects of executing it.  Bookkeeping that spans the whole game state
(clocks, history, castling rights) stays in
:class:`~gambit.core.executor.MoveExecutor`.
"""

from gambit.core.special import castling, en_passant, promotion

__all__ = ["castling", "en_passant", "promotion"]
