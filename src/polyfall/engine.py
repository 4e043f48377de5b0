"""Host-facing engine facade.

:class:`Engine` keeps the latest :class:`~polyfall.game_state.GameState` for
hosts that prefer calling methods to threading snapshots through the pure
transitions themselves.  Every gameplay method returns the updated state.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional

from . import game_state as lifecycle
from .config import DEFAULT_CONFIG, Action, GameConfig
from .game_state import GameState
from .piece import Piece
from .utils import ghost_piece, render_grid

LOGGER = logging.getLogger(__name__)

Transition = Callable[[GameState], GameState]

ACTION_TRANSITIONS: Dict[Action, Transition] = {
    Action.LEFT: lifecycle.move_left,
    Action.RIGHT: lifecycle.move_right,
    Action.SOFT_DROP: lifecycle.soft_drop,
    Action.ROTATE: lifecycle.rotate,
    Action.HARD_DROP: lifecycle.hard_drop,
    Action.HOLD: lifecycle.hold,
}


class Engine:
    """Single-threaded owner of one game session."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self.state: GameState = lifecycle.new_game(config or DEFAULT_CONFIG, self._rng)

    @property
    def config(self) -> GameConfig:
        return self.state.config

    def new_game(self, config: Optional[GameConfig] = None) -> GameState:
        """Discard the session and start over, optionally with a new config."""

        config = config or self.config
        LOGGER.info(
            "Starting new game (%dx%d, %d shape types)",
            config.cols,
            config.rows,
            config.shape_type_count,
        )
        self.state = lifecycle.new_game(config, self._rng)
        return self.state

    def _apply(self, transition: Transition) -> GameState:
        self.state = transition(self.state)
        return self.state

    def tick(self) -> GameState:
        return self._apply(lifecycle.tick)

    def move_left(self) -> GameState:
        return self._apply(lifecycle.move_left)

    def move_right(self) -> GameState:
        return self._apply(lifecycle.move_right)

    def soft_drop(self) -> GameState:
        return self._apply(lifecycle.soft_drop)

    def rotate(self) -> GameState:
        return self._apply(lifecycle.rotate)

    def hard_drop(self) -> GameState:
        return self._apply(lifecycle.hard_drop)

    def hold(self) -> GameState:
        return self._apply(lifecycle.hold)

    def apply(self, action: Action) -> GameState:
        """Dispatch a logical :class:`Action` delivered by the input source."""

        return self._apply(ACTION_TRANSITIONS[action])

    # ------------------------------------------------------------------
    # Display helpers (no state change)
    # ------------------------------------------------------------------
    def ghost(self) -> Optional[Piece]:
        """Return where the active piece would land, or ``None``."""

        state = self.state
        if state.current is None:
            return None
        return ghost_piece(state.board, state.current, state.cols, state.rows)

    def display_grid(self) -> List[List[int]]:
        """Return the board with the active piece overlaid."""

        return render_grid(self.state.board, self.state.current)
