from __future__ import annotations

import numpy as np
import pytest

from polyfall.board import (
    board_from_rows,
    clear_lines,
    create_empty_board,
    lock_piece,
    overlay,
)
from polyfall.piece import Piece, make_shape

COLS = 6
ROWS = 10


def test_create_empty_board() -> None:
    board = create_empty_board(ROWS, COLS)
    assert board.shape == (ROWS, COLS)
    assert not board.any()


def test_board_from_rows_rejects_ragged_input() -> None:
    with pytest.raises(ValueError):
        board_from_rows([[0, 0], [0]])


def test_lock_returns_new_board_with_type_id() -> None:
    board = create_empty_board(ROWS, COLS)
    piece = Piece(shape=make_shape([[0, 1], [1, 1]]), x=1, y=8, type_id=7)
    locked = lock_piece(board, piece)
    assert not board.any()
    assert locked[8, 2] == 7
    assert locked[9, 1] == 7
    assert locked[9, 2] == 7
    assert locked[8, 1] == 0


def test_overlay_skips_cells_above_and_outside_the_grid() -> None:
    board = create_empty_board(ROWS, COLS)
    piece = Piece(shape=make_shape([[1, 1], [1, 1]]), x=COLS - 1, y=-1, type_id=3)
    shown = overlay(board, piece)
    assert int(np.count_nonzero(shown)) == 1
    assert shown[0, COLS - 1] == 3


def test_clear_without_full_rows_is_identity() -> None:
    board = create_empty_board(ROWS, COLS)
    board[ROWS - 1, :COLS - 1] = 2
    board[4, 3] = 1
    cleared, lines = clear_lines(board, COLS, ROWS)
    assert lines == 0
    assert np.array_equal(cleared, board)


def test_clearing_single_bottom_row_empties_board() -> None:
    board = create_empty_board(ROWS, COLS)
    board[ROWS - 1, :] = 1
    cleared, lines = clear_lines(board, COLS, ROWS)
    assert lines == 1
    assert not cleared.any()
    assert cleared.shape == (ROWS, COLS)


def test_rows_above_shift_down_in_order() -> None:
    board = create_empty_board(ROWS, COLS)
    board[9, :] = 1
    board[8, 0] = 5
    board[7, :] = 2
    board[6, 1] = 6
    cleared, lines = clear_lines(board, COLS, ROWS)
    assert lines == 2
    assert cleared[9].tolist() == [5, 0, 0, 0, 0, 0]
    assert cleared[8].tolist() == [0, 6, 0, 0, 0, 0]
    assert int(np.count_nonzero(cleared)) == 2
    # Input snapshot is left untouched.
    assert board[9].all()
