# world/grid.py

from typing import Any, Iterable, List, Optional, Sequence, Tuple

from engine.error_handler import ValidationError
from world.tiles import (
    ENEMY_WALKABLE_TILES,
    TileType,
    sign_tile,
    tile_type_of,
)


# Characters accepted by Grid.from_strings
ASCII_LEGEND = {
    ".": TileType.FLOOR,
    "#": TileType.WALL,
    "R": TileType.ROCK,
    "~": TileType.WATER,
    "O": TileType.PITFALL,
    "E": TileType.EXIT,
    "g": TileType.GRASS,
    "H": TileType.HOUSE,
    "P": TileType.PORT,
}


class Grid:
    """
    Fixed-size 2D field of tile values, indexed as rows[y][x].

    Cells hold either a plain terrain tag or a structured tile. Lookups
    outside the board or on malformed cells never raise; they report
    "nothing there", which the walkability checks treat as blocked.
    """

    def __init__(self, rows: Sequence[Sequence[Any]]) -> None:
        self.rows: List[List[Any]] = [list(row) for row in rows]
        self.height: int = len(self.rows)
        self.width: int = len(self.rows[0]) if self.height > 0 else 0

        for y, row in enumerate(self.rows):
            if len(row) != self.width:
                raise ValidationError(
                    f"Grid row {y} has {len(row)} cells, expected {self.width}"
                )

    @classmethod
    def filled(cls, width: int, height: int, tile: Any = TileType.FLOOR) -> "Grid":
        return cls([[tile] * width for _ in range(height)])

    @classmethod
    def from_strings(cls, lines: Iterable[str]) -> "Grid":
        """
        Build a grid from ASCII art, one string per row.

        Unknown characters are kept as-is so they behave like malformed
        terrain. 'S' becomes a sign with an empty message.
        """
        rows: List[List[Any]] = []
        for line in lines:
            row: List[Any] = []
            for ch in line:
                if ch == "S":
                    row.append(sign_tile(""))
                else:
                    row.append(ASCII_LEGEND.get(ch, ch))
            rows.append(row)
        return cls(rows)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Any:
        """Raw cell value, or None when (x, y) is off the board."""
        if not self.in_bounds(x, y):
            return None
        return self.rows[y][x]

    def tile_type_at(self, x: int, y: int) -> Optional[TileType]:
        return tile_type_of(self.tile_at(x, y))

    def is_walkable(self, x: int, y: int, allowed: Iterable[TileType] = ENEMY_WALKABLE_TILES) -> bool:
        """
        Check terrain walkability for the given set of allowed tile types.

        Off-board and malformed cells are never walkable.
        """
        tile_type = self.tile_type_at(x, y)
        if tile_type is None:
            return False
        return tile_type in allowed

    def set_tile(self, x: int, y: int, value: Any) -> None:
        if not self.in_bounds(x, y):
            raise ValidationError(f"Cannot set tile outside the grid at ({x}, {y})")
        self.rows[y][x] = value

    def find(self, tile_type: TileType) -> List[Tuple[int, int]]:
        """All coordinates holding the given terrain tag, row by row."""
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if self.tile_type_at(x, y) == tile_type
        ]
