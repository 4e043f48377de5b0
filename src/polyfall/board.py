"""Board representation for the playfield.

The board is a ``(rows, cols)`` :class:`numpy.ndarray`.  ``0`` marks an empty
cell; any positive value is the type id of the prototype that filled it.
Every helper returns a new grid so snapshots handed to renderers are never
changed behind their back.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .piece import Piece

Grid = NDArray[np.uint8]


def create_empty_board(rows: int, cols: int) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((rows, cols), dtype=np.uint8)


def board_from_rows(rows: Sequence[Sequence[int]]) -> Grid:
    """Return a board built from nested rows, e.g. a hand-written test grid.

    Raises:
        ValueError: If the rows do not all have the same length.
    """

    widths = {len(row) for row in rows}
    if len(widths) > 1:
        raise ValueError("All board rows must have the same length")
    return np.array(rows, dtype=np.uint8)


def _stamp(board: Grid, piece: Piece) -> Grid:
    grid = board.copy()
    rows, cols = grid.shape
    value = np.uint8(piece.type_id)
    for row, col in piece.blocks():
        # Cells above the top edge or off the grid are skipped.
        if 0 <= row < rows and 0 <= col < cols:
            grid[row, col] = value
    return grid


def overlay(board: Grid, piece: Piece) -> Grid:
    """Return a copy of ``board`` with ``piece`` drawn on top, for display."""

    return _stamp(board, piece)


def lock_piece(board: Grid, piece: Piece) -> Grid:
    """Return a copy of ``board`` with ``piece`` committed into its cells."""

    return _stamp(board, piece)


def clear_lines(board: Grid, cols: int, rows: int) -> Tuple[Grid, int]:
    """Remove completed rows and return ``(new_board, lines_cleared)``.

    Every full row is removed in one pass and replaced by an empty row at the
    top, so the rows above shift down while keeping their order.
    """

    full_rows = np.all(board != 0, axis=1)
    cleared = int(np.count_nonzero(full_rows))
    if not cleared:
        return board.copy(), 0
    remaining = board[~full_rows]
    new_rows = np.zeros((cleared, cols), dtype=board.dtype)
    grid = np.vstack((new_rows, remaining))
    return grid, cleared
