"""Shapes, prototypes and live pieces.

A :data:`Shape` is a square 0/1 matrix stored as a tuple of tuples so pieces
and prototypes stay hashable and immutable.  Pieces are replaced, never
mutated, on every move or rotation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import random
from typing import List, Optional, Sequence, Tuple

Shape = Tuple[Tuple[int, ...], ...]


def make_shape(rows: Sequence[Sequence[int]]) -> Shape:
    """Normalise any nested sequence into a 0/1 :data:`Shape`."""

    return tuple(tuple(1 if cell else 0 for cell in row) for row in rows)


def rotate_shape(shape: Shape) -> Shape:
    """Return ``shape`` rotated a quarter-turn clockwise.

    The result has the same ``N x N`` size as the input and satisfies
    ``out[r][c] == shape[N - 1 - c][r]``.  No bounds checking is done here;
    whether the rotated piece fits is decided by :func:`polyfall.utils.collides`.
    """

    return tuple(zip(*shape[::-1]))


def shape_cells(shape: Shape) -> List[Tuple[int, int]]:
    """Return the ``(row, col)`` offsets of every occupied cell in ``shape``."""

    return [
        (r, c)
        for r, row in enumerate(shape)
        for c, cell in enumerate(row)
        if cell
    ]


@dataclass(frozen=True)
class PieceProto:
    """Immutable template a session spawns pieces from."""

    type_id: int
    shape: Shape

    @property
    def size(self) -> int:
        return len(self.shape)

    @property
    def block_count(self) -> int:
        return len(shape_cells(self.shape))


@dataclass(frozen=True)
class Piece:
    """Live piece: a shape plus the board offset of its bounding box."""

    shape: Shape
    x: int
    y: int
    type_id: int

    @property
    def size(self) -> int:
        return len(self.shape)

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def with_shape(self, shape: Shape) -> "Piece":
        return replace(self, shape=shape)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the board ``(row, col)`` coordinates this piece occupies."""

        return [(self.y + dr, self.x + dc) for dr, dc in shape_cells(self.shape)]


# Used when a session somehow has no prototypes to draw from.
FALLBACK_PROTO = PieceProto(type_id=1, shape=((1,),))


def spawn_column(cols: int, size: int) -> int:
    """Return the horizontal spawn offset for a shape of ``size`` columns."""

    return cols // 2 - size // 2


def at_spawn(piece: Piece, cols: int) -> Piece:
    """Return ``piece`` moved back to the spawn position."""

    return replace(piece, x=spawn_column(cols, piece.size), y=0)


def piece_from_proto(proto: PieceProto, cols: int) -> Piece:
    """Spawn a fresh piece from ``proto`` at the spawn column."""

    return Piece(
        shape=proto.shape,
        x=spawn_column(cols, proto.size),
        y=0,
        type_id=proto.type_id,
    )


def random_piece(
    protos: Sequence[PieceProto], cols: int, rng: Optional[random.Random] = None
) -> Piece:
    """Return a spawn-positioned piece drawn uniformly from ``protos``."""

    rng = rng or random.Random()
    pool = list(protos) or [FALLBACK_PROTO]
    return piece_from_proto(rng.choice(pool), cols)
