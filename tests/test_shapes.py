from __future__ import annotations

from dataclasses import replace
import random

from polyfall.config import DEFAULT_CONFIG
from polyfall.piece import shape_cells
from polyfall.shapes import generate_prototypes, random_shape


def test_generates_requested_number_with_sequential_ids() -> None:
    protos = generate_prototypes(DEFAULT_CONFIG, random.Random(7))
    assert len(protos) == DEFAULT_CONFIG.shape_type_count
    assert [p.type_id for p in protos] == list(range(1, 11))


def test_shapes_respect_size_and_block_limits() -> None:
    config = replace(
        DEFAULT_CONFIG,
        shape_type_count=50,
        min_shape_size=2,
        max_shape_size=5,
        min_blocks_per_shape=2,
        max_blocks_per_shape=6,
    )
    for proto in generate_prototypes(config, random.Random(3)):
        size = len(proto.shape)
        assert 2 <= size <= 5
        assert all(len(row) == size for row in proto.shape)
        assert all(cell in (0, 1) for row in proto.shape for cell in row)
        assert 2 <= proto.block_count <= min(6, size * size)


def test_block_count_clamped_to_small_boxes() -> None:
    # Size 2 boxes hold only four cells even though at least five are asked for.
    config = replace(
        DEFAULT_CONFIG,
        shape_type_count=20,
        min_shape_size=2,
        max_shape_size=3,
        min_blocks_per_shape=5,
        max_blocks_per_shape=9,
    )
    for proto in generate_prototypes(config, random.Random(11)):
        if proto.size == 2:
            assert proto.shape == ((1, 1), (1, 1))
        else:
            assert proto.block_count >= 5


def test_seeded_generation_is_reproducible() -> None:
    first = generate_prototypes(DEFAULT_CONFIG, random.Random(42))
    second = generate_prototypes(DEFAULT_CONFIG, random.Random(42))
    assert first == second


def test_prototypes_are_distinct_when_space_allows() -> None:
    protos = generate_prototypes(DEFAULT_CONFIG, random.Random(5))
    shapes = [p.shape for p in protos]
    assert len(set(shapes)) == len(shapes)


def test_random_shape_never_empty() -> None:
    rng = random.Random(0)
    for _ in range(100):
        shape = random_shape(3, 1, 1, rng)
        assert len(shape_cells(shape)) == 1
