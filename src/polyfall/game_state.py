"""Session state and the piece lifecycle.

:class:`GameState` is an immutable snapshot.  Every transition below takes a
state and returns the next one, so hosts always render from the value they
were handed and a tick can never observe half of an input action.

Lifecycle::

    EMPTY --spawn--> ACTIVE --lock/clear/respawn--> ACTIVE
                        |                             |
                        +------ blocked spawn --------+--> GAME_OVER

Illegal requests (blocked moves, refused rotations, rejected holds, any
action after game over) return the state unchanged instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
import logging
import random
from typing import Optional, Sequence, Tuple

from .board import Grid, clear_lines, create_empty_board, lock_piece
from .config import GameConfig
from .piece import (
    Piece,
    PieceProto,
    Shape,
    at_spawn,
    piece_from_proto,
    random_piece,
    rotate_shape,
)
from .scoring import line_score
from .shapes import generate_prototypes
from .utils import collides, ghost_piece

LOGGER = logging.getLogger(__name__)


class Phase(str, Enum):
    """Observable lifecycle phases.  Locking happens inside a single call."""

    EMPTY = "empty"
    ACTIVE = "active"
    GAME_OVER = "game_over"


@dataclass(frozen=True, eq=False)
class GameState:
    """Snapshot of one game session."""

    config: GameConfig
    prototypes: Tuple[PieceProto, ...]
    board: Grid
    current: Optional[Piece] = None
    upcoming: Optional[Piece] = None
    held: Optional[PieceProto] = None
    score: int = 0
    lines: int = 0
    pieces: int = 0
    game_over: bool = False
    last_cleared: int = 0
    clear_events: int = 0
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def level(self) -> int:
        return self.config.level_for_lines(self.lines)

    @property
    def speed_ms(self) -> int:
        """Tick interval the host scheduler should use at the current level."""

        return self.config.speed_for_level(self.level)

    @property
    def phase(self) -> Phase:
        if self.game_over:
            return Phase.GAME_OVER
        if self.current is None:
            return Phase.EMPTY
        return Phase.ACTIVE

    def proto_for(self, type_id: int) -> Optional[PieceProto]:
        """Return the session prototype with ``type_id`` if there is one."""

        for proto in self.prototypes:
            if proto.type_id == type_id:
                return proto
        return None

    def collides(
        self,
        piece: Piece,
        dx: int = 0,
        dy: int = 0,
        override_shape: Optional[Shape] = None,
    ) -> bool:
        return collides(
            self.board, piece, self.cols, self.rows, dx, dy, override_shape
        )


def _playable(state: GameState) -> bool:
    return not state.game_over and state.current is not None


# ----------------------------------------------------------------------
# Session setup
# ----------------------------------------------------------------------
def new_game(
    config: GameConfig,
    rng: Optional[random.Random] = None,
    board: Optional[Grid] = None,
    prototypes: Optional[Sequence[PieceProto]] = None,
) -> GameState:
    """Start a session: generate prototypes, clear the board and spawn.

    ``board`` and ``prototypes`` replace the empty board and the generated
    prototype set, which is mostly useful for setting up specific positions.

    Raises:
        ValueError: If ``board`` does not match the configured dimensions.
    """

    rng = rng or random.Random()
    if prototypes is None:
        prototypes = generate_prototypes(config, rng)
    if board is None:
        board = create_empty_board(config.rows, config.cols)
    elif tuple(board.shape) != (config.rows, config.cols):
        raise ValueError(
            f"Board shape {tuple(board.shape)} does not match "
            f"{config.rows}x{config.cols}"
        )
    state = GameState(
        config=config,
        prototypes=tuple(prototypes),
        board=board.copy(),
        rng=rng,
    )
    LOGGER.debug(
        "New game on %dx%d board with %d prototypes",
        config.cols,
        config.rows,
        len(state.prototypes),
    )
    return spawn(state)


def spawn(state: GameState) -> GameState:
    """Activate the queued piece and queue a fresh one.

    The first spawn of a session has nothing queued and draws a random piece
    instead.  If the spawned piece does not fit at the spawn position the
    session is over and both the active and the queued piece are cleared.
    """

    if state.game_over:
        return state
    source = state.upcoming or random_piece(state.prototypes, state.cols, state.rng)
    piece = at_spawn(source, state.cols)
    queued = random_piece(state.prototypes, state.cols, state.rng)
    if state.collides(piece):
        LOGGER.info(
            "Game over: spawn blocked (score=%d, lines=%d, level=%d)",
            state.score,
            state.lines,
            state.level,
        )
        return replace(state, current=None, upcoming=None, game_over=True)
    LOGGER.debug("Spawned type %d at x=%d", piece.type_id, piece.x)
    return replace(state, current=piece, upcoming=queued)


# ----------------------------------------------------------------------
# Movement
# ----------------------------------------------------------------------
def _shift(state: GameState, dx: int) -> GameState:
    if not _playable(state) or state.collides(state.current, dx, 0):
        return state
    return replace(state, current=state.current.moved(dx, 0))


def move_left(state: GameState) -> GameState:
    return _shift(state, -1)


def move_right(state: GameState) -> GameState:
    return _shift(state, 1)


def soft_drop(state: GameState) -> GameState:
    """Move the active piece down one row, locking it if it is blocked."""

    if not _playable(state):
        return state
    if state.collides(state.current, 0, 1):
        return lock(state)
    return replace(state, current=state.current.moved(0, 1))


def tick(state: GameState) -> GameState:
    """Advance gravity by one step; called by the host's scheduler."""

    return soft_drop(state)


def rotate(state: GameState) -> GameState:
    """Rotate the active piece clockwise unless the result would collide.

    No alternative offsets are tried: a blocked rotation is refused.
    """

    if not _playable(state):
        return state
    rotated = rotate_shape(state.current.shape)
    if state.collides(state.current, override_shape=rotated):
        return state
    return replace(state, current=state.current.with_shape(rotated))


def hard_drop(state: GameState) -> GameState:
    """Drop the active piece as far as it goes and lock it there."""

    if not _playable(state):
        return state
    landed = ghost_piece(state.board, state.current, state.cols, state.rows)
    return lock(replace(state, current=landed))


# ----------------------------------------------------------------------
# Locking
# ----------------------------------------------------------------------
def lock(state: GameState) -> GameState:
    """Commit the active piece, clear rows, score and spawn the next piece.

    Points are awarded with the level in effect before the cleared rows are
    added to the running total.
    """

    if not _playable(state):
        return state
    piece = state.current
    board = lock_piece(state.board, piece)
    board, cleared = clear_lines(board, state.cols, state.rows)
    level = state.level
    score = state.score + line_score(cleared, level)
    clear_events = state.clear_events
    if cleared:
        clear_events += 1
        LOGGER.info(
            "Cleared %d line(s) at level %d; score %d -> %d",
            cleared,
            level,
            state.score,
            score,
        )
    locked = replace(
        state,
        board=board,
        current=None,
        score=score,
        lines=state.lines + cleared,
        pieces=state.pieces + 1,
        last_cleared=cleared,
        clear_events=clear_events,
    )
    if locked.level != level:
        LOGGER.info("Level up: %d -> %d", level, locked.level)
    return spawn(locked)


# ----------------------------------------------------------------------
# Hold
# ----------------------------------------------------------------------
def hold(state: GameState) -> GameState:
    """Swap the active piece with the held prototype.

    With an empty hold the active piece, in its current rotation, is stored
    and the queued piece spawns.  With an occupied hold the held prototype
    spawns in place of the active piece, unless it would collide, in which
    case nothing changes.
    Holding is allowed any number of times per piece.
    """

    if not _playable(state):
        return state
    current = state.current
    proto = PieceProto(type_id=current.type_id, shape=current.shape)
    if state.held is None:
        spawned = spawn(replace(state, current=None))
        if spawned.game_over:
            return spawned
        LOGGER.debug("Held type %d", proto.type_id)
        return replace(spawned, held=proto)

    swapped = piece_from_proto(state.held, state.cols)
    if state.collides(swapped):
        LOGGER.debug("Hold rejected: type %d does not fit", state.held.type_id)
        return state
    LOGGER.debug("Swapped type %d for held type %d", proto.type_id, swapped.type_id)
    return replace(state, current=swapped, held=proto)
