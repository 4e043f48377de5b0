from __future__ import annotations

from dataclasses import replace
import random

import pytest

from polyfall import game_state as lc
from polyfall.board import create_empty_board
from polyfall.config import ConfigError, GameConfig
from polyfall.driver import LEVEL_NOTICE_MS, GameDriver
from polyfall.engine import Engine
from polyfall.piece import PieceProto, make_shape

SMALL = GameConfig(cols=6, rows=10, lines_per_level=5)
DOT = PieceProto(1, make_shape([[1, 0], [0, 0]]))


def _driver() -> GameDriver:
    return GameDriver(engine=Engine(SMALL, rng=random.Random(0)))


def _floor_with_gap():
    board = create_empty_board(SMALL.rows, SMALL.cols)
    board[SMALL.rows - 1, :] = 1
    board[SMALL.rows - 1, 2] = 0
    return board


def test_ticks_once_interval_has_elapsed() -> None:
    driver = _driver()
    driver.advance(0)
    driver.advance(SMALL.speed_for_level(1) - 1)
    assert driver.state.current.y == 0
    driver.advance(SMALL.speed_for_level(1))
    assert driver.state.current.y == 1
    assert driver.drop_accum == 0


def test_pause_suppresses_ticks_and_gameplay_keys() -> None:
    driver = _driver()
    driver.advance(0)
    driver.handle_key("Escape")
    assert driver.paused
    x_before = driver.state.current.x
    driver.advance(5000)
    driver.handle_key("ArrowLeft")
    assert driver.state.current.y == 0
    assert driver.state.current.x == x_before

    driver.handle_key("Escape")
    assert not driver.paused
    driver.handle_key("ArrowLeft")
    assert driver.state.current.x == x_before - 1


def test_unbound_keys_are_ignored() -> None:
    driver = _driver()
    before = driver.state
    assert driver.handle_key("KeyQ") is before


def test_level_notice_is_shown_and_rescheduled() -> None:
    driver = _driver()
    driver.engine.state = lc.new_game(
        SMALL, random.Random(0), board=_floor_with_gap(), prototypes=(DOT,)
    )
    driver.advance(1000)
    driver.handle_key("Space")
    assert driver.state.lines == 1
    assert driver.notice_level == 1
    assert driver.notice_until == 1000 + LEVEL_NOTICE_MS

    driver.advance(1500)
    assert driver.notice_level == 1
    driver.engine.state = replace(driver.state, board=_floor_with_gap())
    driver.handle_key("Space")
    assert driver.notice_until == 1500 + LEVEL_NOTICE_MS

    driver.advance(2000)
    assert driver.notice_level == 1
    driver.advance(1500 + LEVEL_NOTICE_MS)
    assert driver.notice_level is None


def test_invalid_config_keeps_running_session() -> None:
    driver = _driver()
    before = driver.state
    with pytest.raises(ConfigError):
        driver.apply_config(GameConfig(cols=3))
    assert driver.state is before


def test_apply_config_starts_fresh_session() -> None:
    driver = _driver()
    driver.advance(100)
    driver.advance(400)
    driver.paused = True
    config = GameConfig(cols=10, rows=22, shape_type_count=4)
    state = driver.apply_config(config)
    assert (state.cols, state.rows) == (10, 22)
    assert len(state.prototypes) == 4
    assert driver.last_ts is None
    assert driver.drop_accum == 0
    assert not driver.paused


def test_restart_resets_timers() -> None:
    driver = _driver()
    driver.advance(10)
    driver.advance(500)
    driver.restart()
    assert driver.last_ts is None
    assert driver.drop_accum == 0
    assert driver.notice_level is None


def test_no_ticks_after_game_over() -> None:
    driver = _driver()
    board = create_empty_board(SMALL.rows, SMALL.cols)
    board[:4, :] = 1
    driver.engine.state = lc.new_game(SMALL, random.Random(0), board=board)
    assert driver.state.game_over
    before = driver.state
    driver.advance(0)
    driver.advance(10_000)
    assert driver.state is before


def test_clear_before_first_frame_is_timed_from_next_frame() -> None:
    driver = _driver()
    driver.engine.state = lc.new_game(
        SMALL, random.Random(0), board=_floor_with_gap(), prototypes=(DOT,)
    )
    driver.handle_key("Space")
    assert driver.state.lines == 1
    assert driver.notice_level == 1

    driver.advance(5000)
    assert driver.notice_level == 1
    assert driver.notice_until == 5000 + LEVEL_NOTICE_MS
    driver.advance(5000 + LEVEL_NOTICE_MS)
    assert driver.notice_level is None


def test_key_timestamp_times_the_notice() -> None:
    driver = _driver()
    driver.engine.state = lc.new_game(
        SMALL, random.Random(0), board=_floor_with_gap(), prototypes=(DOT,)
    )
    driver.advance(1000)
    driver.handle_key("Space", ts=1200)
    assert driver.notice_until == 1200 + LEVEL_NOTICE_MS
    driver.advance(1000 + LEVEL_NOTICE_MS)
    assert driver.notice_level == 1
