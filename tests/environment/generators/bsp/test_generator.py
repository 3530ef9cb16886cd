"""End-to-end tests for BSPDungeonGenerator."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from delve.environment.generators import (
    BaseMapGenerator,
    BSPConfig,
    BSPDungeonGenerator,
    GeneratedMapData,
)
from delve.environment.grid import TileOverlapError
from delve.environment.tile_types import TileType
from delve.util.coordinates import Rect
from delve.util.performance import enable_performance_tracking, perf_tracker


def _generate(seed=42, **overrides) -> GeneratedMapData:
    return BSPDungeonGenerator(BSPConfig(**overrides), seed=seed).generate()


def test_generator_is_a_map_generator() -> None:
    generator = BSPDungeonGenerator(BSPConfig(size=(40, 30)))
    assert isinstance(generator, BaseMapGenerator)
    assert (generator.map_width, generator.map_height) == (40, 30)


def test_constructor_validates_config() -> None:
    generator = BSPDungeonGenerator(BSPConfig(depth=100, corridor_size=0))
    assert generator.config.depth == 25
    assert generator.config.corridor_size == 1


def test_same_seed_gives_identical_layout() -> None:
    first = _generate(seed=7)
    second = _generate(seed=7)

    np.testing.assert_array_equal(first.tiles, second.tiles)
    assert first.rooms == second.rooms
    assert first.corridors == second.corridors


def test_repeated_generate_calls_are_identical() -> None:
    generator = BSPDungeonGenerator(BSPConfig(), seed="burrito1")
    first = generator.generate()
    second = generator.generate()

    np.testing.assert_array_equal(first.tiles, second.tiles)
    assert first.tree is not second.tree
    assert generator.tree is second.tree


def test_different_seeds_give_different_layouts() -> None:
    first = _generate(seed=1)
    second = _generate(seed=2)
    assert not np.array_equal(first.tiles, second.tiles)


@pytest.mark.parametrize("seed", [0, 1, 2, "burrito1", "cave"])
def test_layout_is_well_formed(seed) -> None:
    data = _generate(seed=seed, size=(80, 48))
    tree = data.tree

    assert data.grid.size == (80, 48)
    assert len(data.rooms) == len(tree.leaves)
    bounds = Rect(0, 0, 79, 47)
    for leaf, room in zip(tree.leaves, data.rooms, strict=True):
        assert leaf.room is room
        assert leaf.rect.contains_rect(room.rect)
        assert all(isinstance(v, int) for v in (*room.start, *room.end))
    for corridor in data.corridors:
        assert bounds.contains_rect(corridor.rect)
        assert tree.nodes[corridor.node].corridor is corridor


def test_corridors_are_carved_on_the_grid() -> None:
    data = _generate(seed=3)
    assert data.corridors
    for corridor in data.corridors:
        x, y = corridor.start
        assert data.grid.get(x, y) == TileType.CORRIDOR


def test_without_rooms_grid_stays_empty() -> None:
    generator = BSPDungeonGenerator(BSPConfig(), seed=5, generate_rooms=False)
    data = generator.generate()

    assert data.rooms == []
    assert data.corridors == []
    assert data.grid.size == (generator.map_width, generator.map_height)
    assert data.grid.count(TileType.SOLID) == 0
    assert len(data.tree.leaves) > 1


def test_without_corridors_only_rooms_are_painted() -> None:
    generator = BSPDungeonGenerator(BSPConfig(), seed=5, generate_corridors=False)
    data = generator.generate()

    assert data.corridors == []
    assert data.grid.count(TileType.CORRIDOR) == 0
    assert data.grid.count(TileType.ROOM) == sum(
        r.size[0] * r.size[1] for r in data.rooms
    )


def test_depth_zero_gives_single_room() -> None:
    data = _generate(depth=0, size=(30, 20))

    assert len(data.rooms) == 1
    assert data.corridors == []
    assert data.tree.root.room is data.rooms[0]


def test_min_size_too_large_to_split_gives_single_room() -> None:
    data = _generate(size=(20, 20), depth=6, node_min_size=(11, 11))
    assert len(data.tree.leaves) == 1
    assert len(data.rooms) == 1


def test_debug_checks_pass_for_generated_rooms() -> None:
    generator = BSPDungeonGenerator(
        BSPConfig(debug_checks=True), seed=11, generate_corridors=False
    )
    generator.generate()


@pytest.mark.parametrize("seed", [0, 1, 2, 3, "burrito1"])
def test_padded_wide_corridors_never_cut_through_rooms(seed) -> None:
    data = _generate(
        seed=seed, size=(80, 48), depth=5, corridor_size=3, corridor_padding=1
    )

    assert data.grid.count(TileType.ROOM) == sum(
        r.size[0] * r.size[1] for r in data.rooms
    )
    for room in data.rooms:
        assert not data.grid.any_in_rect(TileType.CORRIDOR, room.start, room.end)


@pytest.mark.parametrize("seed", range(8))
def test_corridors_never_overlap_each_other(seed) -> None:
    data = _generate(
        seed=seed,
        size=(80, 48),
        depth=6,
        corridor_size=2,
        corridor_padding=0,
        debug_checks=True,
    )

    # Every corridor cell is painted exactly once
    assert data.grid.count(TileType.CORRIDOR) == sum(
        c.rect.width * c.rect.height for c in data.corridors
    )
    for corridor in data.corridors:
        node = data.tree.nodes[corridor.node]
        assert node.room_range.contains_rect(corridor.rect)


def test_debug_checks_surface_overlaps(monkeypatch) -> None:
    generator = BSPDungeonGenerator(BSPConfig(debug_checks=True), seed=11)

    def place_same_room_twice(self, tree, grid=None):
        leaf = tree.leaves[0]
        room = self.place_room(tree, leaf)
        return [room, room]

    monkeypatch.setattr(
        "delve.environment.generators.bsp.rooms.RoomPlacer.place_rooms",
        place_same_room_twice,
    )
    with pytest.raises(TileOverlapError):
        generator.generate()


def test_generation_logs_summary(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="delve"):
        data = _generate(seed=9)

    assert f"{len(data.rooms)} rooms" in caplog.text


def test_phase_timings_are_recorded_when_tracking() -> None:
    enable_performance_tracking()
    _generate(seed=4)

    for phase in ("bsp.tree", "bsp.rooms", "bsp.paint_rooms", "bsp.corridors"):
        stats = perf_tracker.get_stats(phase)
        assert stats is not None
        assert stats.call_count == 1


def test_unseeded_generation_still_produces_rooms() -> None:
    data = BSPDungeonGenerator(BSPConfig(size=(40, 30)), seed=None).generate()
    assert len(data.rooms) == len(data.tree.leaves) >= 1
