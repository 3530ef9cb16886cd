from __future__ import annotations

import logging

import pytest

from delve import config
from delve.environment.generators.bsp import BSPConfig
from delve.environment.generators.bsp.config import MAX_DEPTH


def test_defaults_come_from_config_module() -> None:
    cfg = BSPConfig()
    assert cfg.size == (config.MAP_WIDTH, config.MAP_HEIGHT)
    assert cfg.depth == config.BSP_DEPTH
    assert cfg.node_min_size == config.BSP_NODE_MIN_SIZE


def test_ratio_range_is_centered_on_half() -> None:
    cfg = BSPConfig(ratio_spread=0.4)
    assert cfg.min_ratio == pytest.approx(0.3)
    assert cfg.max_ratio == pytest.approx(0.7)

    zero = BSPConfig(ratio_spread=0.0)
    assert zero.min_ratio == zero.max_ratio == 0.5


def test_max_axis_size_is_longest_side() -> None:
    assert BSPConfig(size=(30, 70)).max_axis_size == 70


def test_validated_clamps_out_of_range_values() -> None:
    cfg = BSPConfig(
        size=(0, -3),
        depth=99,
        ratio_spread=1.5,
        node_min_size=(0, 0),
        room_size_ratio_range=(0.0, 2.0),
        room_padding=9,
        corridor_size=0,
        corridor_padding=-1,
    ).validated()

    assert cfg.size == (1, 1)
    assert cfg.depth == MAX_DEPTH
    assert cfg.ratio_spread == 1.0
    assert cfg.node_min_size == (1, 1)
    assert cfg.room_size_ratio_range == (0.2, 1.0)
    assert cfg.room_padding == 3
    assert cfg.corridor_size == 1
    assert cfg.corridor_padding == 0


def test_validated_keeps_valid_values() -> None:
    cfg = BSPConfig(size=(40, 30), depth=3, corridor_size=2, corridor_padding=1)
    assert cfg.validated() == cfg


def test_validated_warns_when_min_size_is_too_small(caplog) -> None:
    cfg = BSPConfig(node_min_size=(4, 10), room_padding=1, corridor_size=3)
    with caplog.at_level(logging.WARNING):
        validated = cfg.validated()

    assert "too small" in caplog.text
    assert validated.node_min_size == (4, 10)


def test_validated_is_quiet_for_default_config(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        BSPConfig().validated()
    assert caplog.records == []


def test_config_is_frozen() -> None:
    cfg = BSPConfig()
    with pytest.raises(AttributeError):
        cfg.depth = 3  # type: ignore[misc]
