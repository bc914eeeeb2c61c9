"""Pseudo-legal move generation per piece type + geometric attack helpers.

Nothing here knows about turn order, castling rights or the en-passant
target: those live on :class:`~gambit.core.state.GameState` and are handled
by :mod:`gambit.core.special` and :mod:`gambit.core.validator`.
"""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square, file_of, make_square, rank_of

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)

BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: BISHOP_RAYS,
    PieceType.ROOK: ROOK_RAYS,
    PieceType.QUEEN: QUEEN_RAYS,
}


def slider_rays(piece_type: PieceType, sq: Square) -> tuple[tuple[Square, ...], ...]:
    """Rays walked by a sliding *piece_type* standing on *sq*."""
    return _SLIDER_RAYS[piece_type][sq]


# -- Pseudo-legal generation -------------------------------------------------


def pseudo_legal_moves(board: Board, sq: Square) -> list[Move]:
    """Moves reachable by the piece on *sq* ignoring king safety.

    Pawn moves onto the last rank carry no promotion type; castling and en
    passant are not produced here.
    """
    piece = board[sq]
    if piece is None:
        return []

    color = piece.color
    match piece.piece_type:
        case PieceType.PAWN:
            return _pawn_moves(board, sq, color)
        case PieceType.KNIGHT:
            return _step_moves(board, sq, color, KNIGHT_TARGETS[sq])
        case PieceType.BISHOP:
            return _slide_moves(board, sq, color, BISHOP_RAYS[sq])
        case PieceType.ROOK:
            return _slide_moves(board, sq, color, ROOK_RAYS[sq])
        case PieceType.QUEEN:
            return _slide_moves(board, sq, color, QUEEN_RAYS[sq])
        case PieceType.KING:
            return _step_moves(board, sq, color, KING_TARGETS[sq])
    raise ValueError(f"Unknown piece type: {piece.piece_type!r}")


def _pawn_moves(board: Board, sq: Square, color: Color) -> list[Move]:
    moves: list[Move] = []
    file_idx = file_of(sq)
    rank_idx = rank_of(sq)
    step = color.forward
    next_rank = rank_idx + step
    if not 0 <= next_rank < 8:
        return moves

    one_step = make_square(file_idx, next_rank)
    if board.is_empty(one_step):
        moves.append(Move(sq, one_step))
        start_rank = 1 if color == Color.WHITE else 6
        if rank_idx == start_rank:
            two_step = make_square(file_idx, rank_idx + 2 * step)
            if board.is_empty(two_step):
                moves.append(Move(sq, two_step))

    for df in (-1, 1):
        cap_file = file_idx + df
        if not 0 <= cap_file < 8:
            continue
        cap_sq = make_square(cap_file, next_rank)
        target = board[cap_sq]
        if target is not None and target.color != color:
            moves.append(Move(sq, cap_sq))
    return moves


def _step_moves(
    board: Board,
    sq: Square,
    color: Color,
    targets: tuple[Square, ...],
) -> list[Move]:
    moves: list[Move] = []
    for to_sq in targets:
        target = board[to_sq]
        if target is None or target.color != color:
            moves.append(Move(sq, to_sq))
    return moves


def _slide_moves(
    board: Board,
    sq: Square,
    color: Color,
    rays: tuple[tuple[Square, ...], ...],
) -> list[Move]:
    moves: list[Move] = []
    for ray in rays:
        for to_sq in ray:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
                continue
            if target.color != color:
                moves.append(Move(sq, to_sq))
            break
    return moves


# -- Attack geometry ---------------------------------------------------------


def pawn_attack_squares(sq: Square, color: Color) -> list[Square]:
    """Diagonal squares a pawn of *color* on *sq* attacks."""
    rank_idx = rank_of(sq) + color.forward
    if not 0 <= rank_idx < 8:
        return []
    file_idx = file_of(sq)
    return [
        make_square(file_idx + df, rank_idx)
        for df in (-1, 1)
        if 0 <= file_idx + df < 8
    ]


def attacked_squares(board: Board, sq: Square) -> list[Square]:
    """Squares the piece on *sq* attacks, whatever occupies them.

    Unlike :func:`pseudo_legal_moves` this includes squares held by friendly
    pieces (defence) and pawn diagonals onto empty squares.
    """
    piece = board[sq]
    if piece is None:
        return []
    match piece.piece_type:
        case PieceType.PAWN:
            return pawn_attack_squares(sq, piece.color)
        case PieceType.KNIGHT:
            return list(KNIGHT_TARGETS[sq])
        case PieceType.KING:
            return list(KING_TARGETS[sq])
        case _:
            squares: list[Square] = []
            for ray in slider_rays(piece.piece_type, sq):
                for to_sq in ray:
                    squares.append(to_sq)
                    if board[to_sq] is not None:
                        break
            return squares


def path_is_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Whether every square strictly between two aligned squares is empty."""
    df = file_of(to_sq) - file_of(from_sq)
    dr = rank_of(to_sq) - rank_of(from_sq)
    step_f = (df > 0) - (df < 0)
    step_r = (dr > 0) - (dr < 0)
    f = file_of(from_sq) + step_f
    r = rank_of(from_sq) + step_r
    while (f, r) != (file_of(to_sq), rank_of(to_sq)):
        if board[make_square(f, r)] is not None:
            return False
        f += step_f
        r += step_r
    return True


def attacks_square(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Whether the piece on *from_sq* attacks *to_sq* (geometry + blockers)."""
    piece = board[from_sq]
    if piece is None:
        return False
    return piece_attacks(board, piece, from_sq, to_sq)


def piece_attacks(board: Board, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    """Whether *piece*, standing on *from_sq*, would attack *to_sq*.

    *piece* need not actually occupy *from_sq*; the evaluators use this to
    ask what a piece could reach after moving.
    """
    if from_sq == to_sq:
        return False
    df = file_of(to_sq) - file_of(from_sq)
    dr = rank_of(to_sq) - rank_of(from_sq)
    straight = df == 0 or dr == 0
    diagonal = abs(df) == abs(dr)

    match piece.piece_type:
        case PieceType.PAWN:
            return dr == piece.color.forward and abs(df) == 1
        case PieceType.KNIGHT:
            return {abs(df), abs(dr)} == {1, 2}
        case PieceType.KING:
            return max(abs(df), abs(dr)) == 1
        case PieceType.BISHOP:
            return diagonal and path_is_clear(board, from_sq, to_sq)
        case PieceType.ROOK:
            return straight and path_is_clear(board, from_sq, to_sq)
        case PieceType.QUEEN:
            return (straight or diagonal) and path_is_clear(board, from_sq, to_sq)
    return False


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    for from_sq in pawn_attack_squares(sq, by_color.opposite):
        piece = board[from_sq]
        if piece is not None and piece.is_type(by_color, PieceType.PAWN):
            return True

    for from_sq in KNIGHT_TARGETS[sq]:
        piece = board[from_sq]
        if piece is not None and piece.is_type(by_color, PieceType.KNIGHT):
            return True

    for from_sq in KING_TARGETS[sq]:
        piece = board[from_sq]
        if piece is not None and piece.is_type(by_color, PieceType.KING):
            return True

    for rays, sliders in (
        (BISHOP_RAYS[sq], (PieceType.BISHOP, PieceType.QUEEN)),
        (ROOK_RAYS[sq], (PieceType.ROOK, PieceType.QUEEN)),
    ):
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in sliders:
                    return True
                break

    return False


def attackers_of(board: Board, sq: Square, by_color: Color) -> list[Square]:
    """Squares of *by_color* pieces attacking *sq*, in rank-major order."""
    return [
        from_sq
        for from_sq, piece in board.occupied()
        if piece.color == by_color and attacks_square(board, from_sq, sq)
    ]


def king_in_check(board: Board, color: Color) -> bool:
    """Whether *color*'s king could be captured by a pseudo-legal reply.

    Equivalent to scanning every opposing piece's pseudo-legal targets for
    the king square, answered from the king's side instead.
    """
    king_sq = board.king_square(color)
    return is_square_attacked(board, king_sq, color.opposite)
