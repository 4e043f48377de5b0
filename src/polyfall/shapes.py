"""Procedural generation of the prototypes used in one session."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Set

from .config import GameConfig
from .piece import PieceProto, Shape

LOGGER = logging.getLogger(__name__)

# Attempts made to find a shape not already in the set before accepting a
# duplicate.
MAX_DISTINCT_ATTEMPTS = 10


def random_shape(
    size: int, min_blocks: int, max_blocks: int, rng: random.Random
) -> Shape:
    """Return a ``size x size`` shape with a random number of filled cells.

    The filled-cell count is drawn from ``[min_blocks, min(max_blocks,
    size**2)]``.  When ``min_blocks`` exceeds ``size**2`` the box is filled
    completely.  Cells are not required to be connected.
    """

    upper = min(max_blocks, size * size)
    lower = min(max(min_blocks, 1), upper)
    target = rng.randint(lower, upper)
    filled = set(rng.sample(range(size * size), target))
    return tuple(
        tuple(1 if r * size + c in filled else 0 for c in range(size))
        for r in range(size)
    )


def generate_prototypes(
    config: GameConfig, rng: Optional[random.Random] = None
) -> List[PieceProto]:
    """Build ``config.shape_type_count`` prototypes with ids ``1..count``.

    Each prototype gets a size drawn uniformly from ``[min_shape_size,
    max_shape_size]``.  Shapes already present in the set are redrawn up to
    :data:`MAX_DISTINCT_ATTEMPTS` times; after that the duplicate is kept, as
    small size/block ranges may not admit enough distinct shapes.
    """

    rng = rng or random.Random()
    protos: List[PieceProto] = []
    seen: Set[Shape] = set()
    for type_id in range(1, config.shape_type_count + 1):
        attempts = 0
        while True:
            size = rng.randint(config.min_shape_size, config.max_shape_size)
            shape = random_shape(
                size,
                config.min_blocks_per_shape,
                config.max_blocks_per_shape,
                rng,
            )
            attempts += 1
            if shape not in seen or attempts >= MAX_DISTINCT_ATTEMPTS:
                break
        if shape in seen:
            LOGGER.debug("Accepting duplicate shape for type %d", type_id)
        seen.add(shape)
        protos.append(PieceProto(type_id=type_id, shape=shape))
    LOGGER.debug("Generated %d prototypes", len(protos))
    return protos
