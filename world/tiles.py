# world/tiles.py

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional

import settings


class TileType(IntEnum):
    """Terrain tags stored in grid cells."""
    FLOOR = settings.TILE_FLOOR
    WALL = settings.TILE_WALL
    GRASS = settings.TILE_GRASS
    EXIT = settings.TILE_EXIT
    ROCK = settings.TILE_ROCK
    HOUSE = settings.TILE_HOUSE
    WATER = settings.TILE_WATER
    FOOD = settings.TILE_FOOD
    AXE = settings.TILE_AXE
    HAMMER = settings.TILE_HAMMER
    NOTE = settings.TILE_NOTE
    BISHOP_SPEAR = settings.TILE_BISHOP_SPEAR
    BOMB = settings.TILE_BOMB
    SIGN = settings.TILE_SIGN
    HEART = settings.TILE_HEART
    HORSE_ICON = settings.TILE_HORSE_ICON
    PORT = settings.TILE_PORT
    PITFALL = settings.TILE_PITFALL


ENEMY_WALKABLE_TILES = frozenset(TileType(t) for t in settings.ENEMY_WALKABLE_TILES)
PLAYER_WALKABLE_TILES = frozenset(TileType(t) for t in settings.PLAYER_WALKABLE_TILES)


@dataclass(frozen=True)
class StructuredTile:
    """
    A tile that carries extra data on top of its terrain tag.

    Signs keep their message here, ports keep where they lead, and so on.
    """
    tile_type: TileType
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def message(self) -> Optional[str]:
        return self.metadata.get("message")


def sign_tile(message: str) -> StructuredTile:
    return StructuredTile(TileType.SIGN, {"message": message})


def tile_type_of(value: Any) -> Optional[TileType]:
    """
    Resolve a raw cell value to its terrain tag.

    Returns None for anything that is not a known tag or structured tile,
    so callers can treat malformed cells as blocked.
    """
    if isinstance(value, StructuredTile):
        return value.tile_type
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return TileType(value)
        except ValueError:
            return None
    # Duck-typed structured tiles coming from other systems
    raw = getattr(value, "tile_type", None)
    if raw is not None and not isinstance(value, (str, bytes)):
        return tile_type_of(raw)
    return None
