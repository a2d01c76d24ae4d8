"""
Unit tests for the Grid terrain query and tile resolution.
"""

import pytest

from engine.error_handler import ValidationError
from world.grid import Grid
from world.tiles import PLAYER_WALKABLE_TILES, StructuredTile, TileType, sign_tile, tile_type_of


class TestGrid:
    """Tests for Grid."""

    def test_from_strings_dimensions_and_legend(self, make_grid):
        """Test that ASCII rows map to the right size and tiles."""
        grid = make_grid("..O", "#~R")
        assert grid.width == 3
        assert grid.height == 2
        assert grid.tile_type_at(2, 0) == TileType.PITFALL
        assert grid.tile_type_at(0, 1) == TileType.WALL
        assert grid.tile_type_at(1, 1) == TileType.WATER
        assert grid.tile_type_at(2, 1) == TileType.ROCK

    def test_out_of_bounds_is_never_walkable(self, open_grid):
        """Test that off-board lookups fail closed instead of raising."""
        assert open_grid.tile_at(-1, 0) is None
        assert open_grid.tile_type_at(0, 10) is None
        assert not open_grid.is_walkable(10, 0)
        assert not open_grid.is_walkable(0, -1)

    def test_malformed_cells_are_not_walkable(self):
        """Test that unknown codes and junk values are treated as blocked."""
        grid = Grid([[0, "junk", None, 999, True]])
        assert grid.is_walkable(0, 0)
        for x in range(1, 5):
            assert grid.tile_type_at(x, 0) is None
            assert not grid.is_walkable(x, 0)

    def test_structured_tiles_use_their_type(self):
        """Test that structured tiles resolve to their terrain tag."""
        grid = Grid([[sign_tile("Beware the rooks"), StructuredTile(TileType.FLOOR)]])
        assert grid.tile_type_at(0, 0) == TileType.SIGN
        assert grid.tile_at(0, 0).message == "Beware the rooks"
        assert not grid.is_walkable(0, 0)
        assert grid.is_walkable(1, 0)

    def test_ragged_rows_rejected(self):
        """Test that rows of different length raise a ValidationError."""
        with pytest.raises(ValidationError):
            Grid([[0, 0], [0]])

    def test_exit_is_walkable_for_player_only(self, make_grid):
        """Test the player and enemy walkable sets differ on exits."""
        grid = make_grid("E.")
        assert not grid.is_walkable(0, 0)
        assert grid.is_walkable(0, 0, PLAYER_WALKABLE_TILES)

    def test_set_tile_and_find(self, open_grid):
        """Test writing a tile and finding it again."""
        open_grid.set_tile(3, 4, TileType.PITFALL)
        assert open_grid.find(TileType.PITFALL) == [(3, 4)]

        with pytest.raises(ValidationError):
            open_grid.set_tile(10, 0, TileType.WALL)


class TestTileTypeOf:
    """Tests for raw tile value resolution."""

    def test_plain_codes(self):
        """Test integer codes resolve to TileType members."""
        assert tile_type_of(0) == TileType.FLOOR
        assert tile_type_of(49) == TileType.PITFALL

    def test_duck_typed_structured_tile(self):
        """Test objects exposing tile_type are accepted."""
        class Portal:
            tile_type = 29

        assert tile_type_of(Portal()) == TileType.PORT

    def test_strings_are_malformed(self):
        """Test strings never resolve, even if they look numeric."""
        assert tile_type_of("0") is None
