"""Game configuration consumed by the engine.

Configuration is validated once at the settings boundary (see
:meth:`GameConfig.validate`).  The engine itself assumes it was handed a valid
config and never re-checks the ranges below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


class ConfigError(ValueError):
    """Raised when a :class:`GameConfig` violates a range or consistency rule."""

    def __init__(self, errors: List[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


class Action(str, Enum):
    """Logical gameplay actions an input source can deliver."""

    LEFT = "left"
    RIGHT = "right"
    SOFT_DROP = "softDrop"
    ROTATE = "rotate"
    HARD_DROP = "hardDrop"
    HOLD = "hold"


@dataclass(frozen=True)
class SpeedEntry:
    level: int
    speed: int  # tick interval in milliseconds


@dataclass(frozen=True)
class KeyBindings:
    """Physical key codes bound to each logical action."""

    left: str = "ArrowLeft"
    right: str = "ArrowRight"
    soft_drop: str = "ArrowDown"
    rotate: str = "ArrowUp"
    hard_drop: str = "Space"
    hold: str = "KeyC"

    def action_for(self, code: str) -> Optional[Action]:
        """Return the :class:`Action` bound to ``code`` or ``None``."""

        bindings = {
            self.left: Action.LEFT,
            self.right: Action.RIGHT,
            self.soft_drop: Action.SOFT_DROP,
            self.rotate: Action.ROTATE,
            self.hard_drop: Action.HARD_DROP,
            self.hold: Action.HOLD,
        }
        return bindings.get(code)


DEFAULT_SPEED_TABLE: Tuple[SpeedEntry, ...] = tuple(
    SpeedEntry(level, speed)
    for level, speed in enumerate(
        (800, 700, 600, 500, 430, 380, 340, 300, 260, 230,
         200, 180, 160, 140, 120, 110, 100, 90, 80, 70),
        start=1,
    )
)

# Maximum number of prototypes a single session may define.
MAX_SHAPE_TYPES = 50
MAX_LINES_PER_LEVEL = 20


@dataclass(frozen=True)
class GameConfig:
    """Board dimensions, shape-generation constraints and pacing."""

    cols: int = 14
    rows: int = 20
    shape_type_count: int = 10
    min_shape_size: int = 3
    max_shape_size: int = 4
    min_blocks_per_shape: int = 3
    max_blocks_per_shape: int = 7
    lines_per_level: int = 5
    speed_table: Tuple[SpeedEntry, ...] = DEFAULT_SPEED_TABLE
    keys: KeyBindings = field(default_factory=KeyBindings)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def errors(self) -> List[str]:
        """Return a human readable description of every violated rule."""

        problems: List[str] = []
        if self.cols < 6:
            problems.append("cols must be at least 6")
        if self.rows < 10:
            problems.append("rows must be at least 10")
        if not 1 <= self.shape_type_count <= MAX_SHAPE_TYPES:
            problems.append(f"shapeTypeCount must be between 1 and {MAX_SHAPE_TYPES}")
        if self.min_shape_size < 2:
            problems.append("minShapeSize must be at least 2")
        if self.max_shape_size < self.min_shape_size:
            problems.append("maxShapeSize must not be smaller than minShapeSize")
        if self.min_blocks_per_shape < 1:
            problems.append("minBlocksPerShape must be at least 1")
        if self.max_blocks_per_shape < self.min_blocks_per_shape:
            problems.append("maxBlocksPerShape must not be smaller than minBlocksPerShape")
        if self.max_blocks_per_shape > self.max_shape_size ** 2:
            problems.append("maxBlocksPerShape must fit within maxShapeSize squared")
        if not 1 <= self.lines_per_level <= MAX_LINES_PER_LEVEL:
            problems.append(f"linesPerLevel must be between 1 and {MAX_LINES_PER_LEVEL}")
        if not self.speed_table:
            problems.append("speedTable must contain at least one entry")
        return problems

    def is_valid(self) -> bool:
        return not self.errors()

    def validate(self) -> "GameConfig":
        """Return ``self`` or raise :class:`ConfigError` listing every problem."""

        problems = self.errors()
        if problems:
            raise ConfigError(problems)
        return self

    # ------------------------------------------------------------------
    # Derived pacing
    # ------------------------------------------------------------------
    def level_for_lines(self, lines: int) -> int:
        """Return the level reached after clearing ``lines`` in total."""

        return lines // self.lines_per_level + 1

    def speed_for_level(self, level: int) -> int:
        """Return the tick interval in milliseconds for ``level``.

        Levels without an exact entry use the last entry of the table, which
        clamps levels beyond the table's range.
        """

        for entry in self.speed_table:
            if entry.level == level:
                return entry.speed
        return self.speed_table[-1].speed

    # ------------------------------------------------------------------
    # External shape
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        """Build a config from the camelCase mapping used by hosts.

        Keys that are absent keep their default value.  No validation is
        performed; call :meth:`validate` on the result.
        """

        defaults = cls()
        speed_table = defaults.speed_table
        if "speedTable" in data:
            speed_table = tuple(
                SpeedEntry(int(entry["level"]), int(entry["speed"]))
                for entry in data["speedTable"]
            )
        keys = defaults.keys
        if "keys" in data:
            raw = data["keys"]
            keys = KeyBindings(
                left=raw.get("left", keys.left),
                right=raw.get("right", keys.right),
                soft_drop=raw.get("softDrop", keys.soft_drop),
                rotate=raw.get("rotate", keys.rotate),
                hard_drop=raw.get("hardDrop", keys.hard_drop),
                hold=raw.get("hold", keys.hold),
            )
        return cls(
            cols=int(data.get("cols", defaults.cols)),
            rows=int(data.get("rows", defaults.rows)),
            shape_type_count=int(data.get("shapeTypeCount", defaults.shape_type_count)),
            min_shape_size=int(data.get("minShapeSize", defaults.min_shape_size)),
            max_shape_size=int(data.get("maxShapeSize", defaults.max_shape_size)),
            min_blocks_per_shape=int(
                data.get("minBlocksPerShape", defaults.min_blocks_per_shape)
            ),
            max_blocks_per_shape=int(
                data.get("maxBlocksPerShape", defaults.max_blocks_per_shape)
            ),
            lines_per_level=int(data.get("linesPerLevel", defaults.lines_per_level)),
            speed_table=speed_table,
            keys=keys,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cols": self.cols,
            "rows": self.rows,
            "shapeTypeCount": self.shape_type_count,
            "minShapeSize": self.min_shape_size,
            "maxShapeSize": self.max_shape_size,
            "minBlocksPerShape": self.min_blocks_per_shape,
            "maxBlocksPerShape": self.max_blocks_per_shape,
            "linesPerLevel": self.lines_per_level,
            "speedTable": [
                {"level": entry.level, "speed": entry.speed}
                for entry in self.speed_table
            ],
            "keys": {
                "left": self.keys.left,
                "right": self.keys.right,
                "softDrop": self.keys.soft_drop,
                "rotate": self.keys.rotate,
                "hardDrop": self.keys.hard_drop,
                "hold": self.keys.hold,
            },
        }


DEFAULT_CONFIG = GameConfig()
