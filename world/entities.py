# world/entities.py

import itertools
from dataclasses import dataclass, field
from typing import Optional, Tuple

from settings import ENEMY_DEFAULT_ATTACK, ENEMY_DEFAULT_HEALTH, PLAYER_MAX_HEALTH
from engine.battle.types import Archetype
from world.grid import Grid
from world.tiles import ENEMY_WALKABLE_TILES, PLAYER_WALKABLE_TILES


_enemy_ids = itertools.count(1)


def _next_enemy_id() -> str:
    return f"enemy-{next(_enemy_ids)}"


@dataclass(eq=False)
class Player:
    """
    The player as seen by the enemy decision core.

    Enemies only read the position and call the damage / bump / reposition
    hooks below; everything else about the player lives elsewhere.
    """
    x: int
    y: int
    health: int = PLAYER_MAX_HEALTH
    max_health: int = PLAYER_MAX_HEALTH
    last_x: Optional[int] = None
    last_y: Optional[int] = None
    bump_direction: Optional[Tuple[int, int]] = None

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def take_damage(self, amount: int) -> None:
        self.health = max(0, self.health - amount)

    def is_dead(self) -> bool:
        return self.health <= 0

    def set_position(self, x: int, y: int) -> None:
        self.last_x, self.last_y = self.x, self.y
        self.x, self.y = x, y

    def start_bump(self, dx: int, dy: int) -> None:
        """Record the direction of a bump so the renderer can nudge the sprite."""
        self.bump_direction = (dx, dy)

    def is_walkable(self, x: int, y: int, grid: Grid) -> bool:
        return grid.is_walkable(x, y, PLAYER_WALKABLE_TILES)


@dataclass(eq=False)
class Enemy:
    """
    Gameplay state of one enemy.

    Only what the decision core needs: position, previous position,
    archetype, attack power and the pawn's movement direction.
    Animation state is kept by the effects presenter, keyed by `id`.
    """
    x: int
    y: int
    archetype: Archetype = Archetype.KING
    attack: int = ENEMY_DEFAULT_ATTACK
    health: int = ENEMY_DEFAULT_HEALTH
    id: str = field(default_factory=_next_enemy_id)
    movement_direction: int = 1  # pawns: +1 walks south, -1 north
    last_x: Optional[int] = None
    last_y: Optional[int] = None

    def __post_init__(self) -> None:
        self.archetype = Archetype.from_name(self.archetype)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def set_position(self, x: int, y: int) -> None:
        self.last_x, self.last_y = self.x, self.y
        self.x, self.y = x, y

    def take_damage(self, amount: int) -> None:
        self.health = max(0, self.health - amount)

    def is_dead(self) -> bool:
        return self.health <= 0

    def is_walkable(self, x: int, y: int, grid: Grid) -> bool:
        """Terrain-only check; enemy occupancy is handled by the callers."""
        return grid.is_walkable(x, y, ENEMY_WALKABLE_TILES)
