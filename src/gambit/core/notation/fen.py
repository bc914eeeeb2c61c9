"""FEN parsing and serialization for :class:`GameState`."""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.piece import Piece
from gambit.core.state import GameState
from gambit.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_LETTERS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not 1 <= step <= 8:
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[make_square(file, rank)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    for color in Color:
        if len(board.pieces(color, PieceType.KING)) != 1:
            raise ValueError(f"FEN needs exactly one {color} king: {fen!r}")
    return board


def _parse_castling(text: str) -> CastlingRights:
    rights = CastlingRights.NONE
    if text == "-":
        return rights
    table = dict(_CASTLING_LETTERS)
    for ch in text:
        right = table.get(ch)
        if right is None or rights & right:
            raise ValueError(f"Invalid FEN castling field: {text!r}")
        rights |= right
    return rights


def _parse_en_passant(text: str, side: Color) -> Square | None:
    if text == "-":
        return None
    ep = parse_square(text)
    expected_rank = 5 if side == Color.WHITE else 2
    if rank_of(ep) != expected_rank:
        raise ValueError(f"Invalid FEN en-passant square for side-to-move: {text!r}")
    return ep


def state_from_fen(fen: str) -> GameState:
    """Parse a FEN string into a fresh :class:`GameState`.

    The clock fields are optional and default to ``0`` and ``1``.
    """
    parts = fen.split()
    if not 4 <= len(parts) <= 6:
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = _parse_placement(placement, fen)

    if side_part not in ("w", "b"):
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")
    side = Color.WHITE if side_part == "w" else Color.BLACK

    castling = _parse_castling(castling_part)
    ep = _parse_en_passant(ep_part, side)

    halfmove = int(parts[4]) if len(parts) > 4 else 0
    fullmove = int(parts[5]) if len(parts) > 5 else 1
    if halfmove < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")
    if fullmove < 1:
        raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    return GameState(board, side, castling, ep, halfmove, fullmove)


def board_to_fen(board: Board) -> str:
    """Piece-placement field only."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def state_to_fen(state: GameState) -> str:
    """Serialise a :class:`GameState` to FEN."""
    side = "w" if state.current_player == Color.WHITE else "b"
    rights = "".join(ch for ch, right in _CASTLING_LETTERS if state.castling & right)
    ep = square_name(state.en_passant_target) if state.en_passant_target is not None else "-"
    return (
        f"{board_to_fen(state.board)} {side} {rights or '-'} {ep} "
        f"{state.half_move_clock} {state.fullmove_number}"
    )
