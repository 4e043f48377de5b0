"""Headless host loop gluing a clock and a key source to the engine.

The engine owns no timer.  :class:`GameDriver` is fed timestamps by whatever
frame loop the front-end uses (``requestAnimationFrame``, a pygame clock, a
test) and key codes by its input layer, and turns them into ``tick`` and
action calls.  It also times the transient level notification.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional

from .config import GameConfig
from .engine import Engine
from .game_state import GameState

LOGGER = logging.getLogger(__name__)

# How long the level notification stays up after a line clear.
LEVEL_NOTICE_MS = 800.0
# Always delivered, even while paused.
PAUSE_KEY = "Escape"


@dataclass
class GameDriver:
    engine: Engine = field(default_factory=Engine)
    paused: bool = False
    last_ts: Optional[float] = None
    drop_accum: float = 0.0
    notice_until: Optional[float] = None
    notice_pending: bool = False
    seen_clear_events: int = 0

    @property
    def state(self) -> GameState:
        return self.engine.state

    @property
    def notice_level(self) -> Optional[int]:
        """Level to show in the notification, or ``None`` when hidden."""

        if self.notice_until is None and not self.notice_pending:
            return None
        return self.state.level

    def _reset_timers(self) -> None:
        # A fresh session must not inherit time accumulated by the old one.
        self.last_ts = None
        self.drop_accum = 0.0
        self.notice_until = None
        self.notice_pending = False
        self.seen_clear_events = self.state.clear_events

    def _note_clear_events(self, now: Optional[float]) -> None:
        if self.state.clear_events == self.seen_clear_events:
            return
        self.seen_clear_events = self.state.clear_events
        if now is None:
            # No clock reading yet; the countdown starts with the next frame.
            self.notice_until = None
            self.notice_pending = True
            return
        # A new clear restarts the countdown of a notification still showing.
        self.notice_until = now + LEVEL_NOTICE_MS
        self.notice_pending = False

    def advance(self, ts: float) -> GameState:
        """Account for time up to ``ts`` (ms) and tick when the interval is due."""

        if self.last_ts is None:
            self.last_ts = ts
        dt = ts - self.last_ts
        self.last_ts = ts
        if self.notice_pending:
            self.notice_pending = False
            self.notice_until = ts + LEVEL_NOTICE_MS
        if self.notice_until is not None and ts >= self.notice_until:
            self.notice_until = None
        if self.paused or self.state.game_over:
            return self.state
        self.drop_accum += dt
        if self.drop_accum >= self.state.speed_ms:
            self.drop_accum = 0.0
            self.engine.tick()
            self._note_clear_events(ts)
        return self.state

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        LOGGER.debug("Paused" if self.paused else "Resumed")
        return self.paused

    def handle_key(self, code: str, ts: Optional[float] = None) -> GameState:
        """Deliver a physical key code to the session.

        ``ts`` is the time of the key event in ms.  Without it the level
        notification is timed from the last frame, or from the next one when
        no frame has been seen yet.
        """

        if code == PAUSE_KEY:
            self.toggle_pause()
            return self.state
        if self.paused:
            return self.state
        action = self.engine.config.keys.action_for(code)
        if action is None:
            return self.state
        self.engine.apply(action)
        self._note_clear_events(ts if ts is not None else self.last_ts)
        return self.state

    def restart(self) -> GameState:
        self.engine.new_game()
        self._reset_timers()
        return self.state

    def apply_config(self, config: GameConfig) -> GameState:
        """Validate ``config`` and start a new session with it.

        Raises:
            ConfigError: If ``config`` is invalid; the running session is kept.
        """

        config.validate()
        LOGGER.info("Applying new configuration (%dx%d)", config.cols, config.rows)
        self.engine.new_game(config)
        self._reset_timers()
        self.paused = False
        return self.state
