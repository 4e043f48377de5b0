"""Utility helpers for the engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Grid, overlay
from .piece import Piece, Shape, shape_cells


def collides(
    board: Grid,
    piece: Piece,
    cols: int,
    rows: int,
    dx: int = 0,
    dy: int = 0,
    override_shape: Optional[Shape] = None,
) -> bool:
    """Return ``True`` if ``piece`` moved by ``dx``/``dy`` would not fit.

    ``override_shape`` replaces the piece's own shape, which lets callers test
    a prospective rotation before committing it.  A cell collides when it is
    outside ``[0, cols)`` horizontally, at or below ``rows``, or on an
    occupied board cell.  Cells above row ``0`` are allowed so pieces can
    overhang the top edge.

    Every legality check in the engine goes through this function: sideways
    moves, soft and hard drops, rotation and spawn placement.
    """

    shape = override_shape if override_shape is not None else piece.shape
    for dr, dc in shape_cells(shape):
        row = piece.y + dr + dy
        col = piece.x + dc + dx
        if col < 0 or col >= cols or row >= rows:
            return True
        if row < 0:
            continue
        if board[row, col] != 0:
            return True
    return False


def drop_distance(board: Grid, piece: Piece, cols: int, rows: int) -> int:
    """Return how many rows ``piece`` can fall before it is blocked."""

    distance = 0
    while not collides(board, piece, cols, rows, 0, distance + 1):
        distance += 1
    return distance


def ghost_piece(board: Grid, piece: Piece, cols: int, rows: int) -> Piece:
    """Return the resting position ``piece`` would reach with a hard drop.

    Display only; nothing is locked.
    """

    return piece.moved(0, drop_distance(board, piece, cols, rows))


def render_grid(board: Grid, active: Optional[Piece] = None) -> List[List[int]]:
    """Return the board as nested lists with ``active`` overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without touching the session's board.
    """

    grid = overlay(board, active) if active is not None else board
    return grid.tolist()
