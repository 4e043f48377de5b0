"""Configurable falling-block puzzle engine with procedurally generated pieces."""

from .config import (
    DEFAULT_CONFIG,
    Action,
    ConfigError,
    GameConfig,
    KeyBindings,
    SpeedEntry,
)
from .piece import Piece, PieceProto, Shape, rotate_shape
from .shapes import generate_prototypes
from .board import clear_lines, create_empty_board, lock_piece, overlay
from .scoring import line_score
from .utils import collides, ghost_piece, render_grid
from .game_state import GameState, Phase
from .engine import Engine
from .driver import GameDriver
from .gym_env import PolyfallEnv

__all__ = [
    "DEFAULT_CONFIG",
    "Action",
    "ConfigError",
    "GameConfig",
    "KeyBindings",
    "SpeedEntry",
    "Piece",
    "PieceProto",
    "Shape",
    "rotate_shape",
    "generate_prototypes",
    "clear_lines",
    "create_empty_board",
    "lock_piece",
    "overlay",
    "line_score",
    "collides",
    "ghost_piece",
    "render_grid",
    "GameState",
    "Phase",
    "Engine",
    "GameDriver",
    "PolyfallEnv",
]
