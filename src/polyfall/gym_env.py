"""Gymnasium wrapper driving the engine one input per step.

Observation is the flattened 0/1 occupancy of the board with the active piece
overlaid (``rows * cols`` values).  Actions are:

  0 no-op, 1 left, 2 right, 3 soft drop, 4 rotate, 5 hard drop, 6 hold

Each step applies the action and then one gravity tick.  The reward is the
score gained during the step; the episode terminates on game over.
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import DEFAULT_CONFIG, Action, GameConfig
from .engine import Engine
from .game_state import GameState

STEP_ACTIONS = (
    None,
    Action.LEFT,
    Action.RIGHT,
    Action.SOFT_DROP,
    Action.ROTATE,
    Action.HARD_DROP,
    Action.HOLD,
)


class PolyfallEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 30,
    }

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        max_steps: Optional[int] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.config = (config or DEFAULT_CONFIG).validate()
        self.render_mode = render_mode
        self.action_space = spaces.Discrete(len(STEP_ACTIONS))
        self.observation_space = spaces.Box(
            low=0.0,
            high=1.0,
            shape=(self.config.rows * self.config.cols,),
            dtype=np.float32,
        )
        self._max_steps = max_steps
        self._steps = 0
        self._engine: Optional[Engine] = None

    # ----------------------- Env API -----------------------
    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        rng = random.Random(seed)
        self._engine = Engine(self.config, rng=rng)
        self._steps = 0
        return self._observation(), self._info()

    def step(self, action: int):
        if self._engine is None:
            raise RuntimeError("Call reset() before step()")
        before = self._engine.state.score
        logical = STEP_ACTIONS[int(action)]
        if logical is not None:
            self._engine.apply(logical)
        self._engine.tick()
        self._steps += 1
        state = self._engine.state
        terminated = state.game_over
        truncated = self._max_steps is not None and self._steps >= self._max_steps
        reward = float(state.score - before)
        return self._observation(), reward, terminated, truncated, self._info()

    def render(self):
        if self._engine is None:
            return ""
        return "\n".join(
            "".join("#" if cell else "." for cell in row)
            for row in self._engine.display_grid()
        )

    def close(self):
        return None

    # -------------------- Helpers -------------------------
    @property
    def state(self) -> Optional[GameState]:
        return self._engine.state if self._engine is not None else None

    def _observation(self) -> np.ndarray:
        assert self._engine is not None
        grid = np.array(self._engine.display_grid(), dtype=np.float32)
        return (grid > 0).astype(np.float32).reshape(-1)

    def _info(self) -> Dict[str, Any]:
        assert self._engine is not None
        state = self._engine.state
        return {
            "score": state.score,
            "lines": state.lines,
            "level": state.level,
            "last_cleared": state.last_cleared,
        }
