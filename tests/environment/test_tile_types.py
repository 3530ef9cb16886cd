import numpy as np

from delve.environment.tile_types import TILE_GLYPHS, TileType, get_mask_map, matches


def test_solid_covers_every_non_empty_kind():
    for tile in (TileType.ROOM, TileType.CORRIDOR, TileType.DOOR):
        assert matches(tile, TileType.SOLID)


def test_empty_never_matches():
    assert not matches(TileType.EMPTY, TileType.SOLID)
    assert not matches(TileType.EMPTY, TileType.EMPTY)


def test_single_kind_mask():
    assert matches(TileType.ROOM, TileType.ROOM)
    assert not matches(TileType.CORRIDOR, TileType.ROOM)
    assert matches(TileType.CORRIDOR, TileType.ROOM | TileType.CORRIDOR)


def test_matches_accepts_raw_grid_values():
    assert matches(np.uint8(2), TileType.CORRIDOR)
    assert not matches(0, 7)


def test_get_mask_map_agrees_with_matches():
    tiles = np.array(
        [[TileType.EMPTY, TileType.ROOM], [TileType.CORRIDOR, TileType.DOOR]],
        dtype=np.uint8,
    )
    mask = get_mask_map(tiles, TileType.ROOM | TileType.DOOR)

    assert mask.tolist() == [[False, True], [False, True]]
    expected = [[matches(int(v), TileType.SOLID) for v in row] for row in tiles]
    assert get_mask_map(tiles, TileType.SOLID).tolist() == expected


def test_every_tile_type_has_a_glyph():
    for tile in (TileType.EMPTY, TileType.ROOM, TileType.CORRIDOR, TileType.DOOR):
        assert len(TILE_GLYPHS[tile]) == 1
