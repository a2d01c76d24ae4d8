"""
Per-turn game context handed to the enemy decision core.

Carries the turn bookkeeping (which tiles enemies started on, which tiles
have been claimed), the player's just-attacked flag, and the optional
collaborators for presentation and world transitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Protocol, Set

from engine.battle.effects import EffectsPresenter
from engine.battle.types import Coord
from engine.config import AIConfig, get_config

if TYPE_CHECKING:
    from world.entities import Enemy


class WorldTransition(Protocol):
    """Receives enemies that fell through a pitfall."""

    def enemy_fell_into_pitfall(self, enemy: "Enemy", x: int, y: int, context: "GameContext") -> None:
        ...


@dataclass
class GameContext:
    """
    Shared state for one enemy turn.
    """
    player_just_attacked: bool = False
    initial_enemy_tiles_this_turn: Set[Coord] = field(default_factory=set)
    occupied_tiles_this_turn: Set[Coord] = field(default_factory=set)
    presenter: Optional[EffectsPresenter] = None
    world: Optional[WorldTransition] = None
    config: AIConfig = field(default_factory=get_config)

    def begin_turn(self, enemies: List["Enemy"]) -> None:
        """Reset bookkeeping and remember where every enemy starts."""
        self.initial_enemy_tiles_this_turn = {(e.x, e.y) for e in enemies}
        self.occupied_tiles_this_turn = set()

    def is_reserved(self, tile: Coord, mover: Coord) -> bool:
        """
        Whether a tile is off limits this turn for the enemy standing on `mover`.

        Reserved tiles are those another enemy started the turn on and those
        someone has already moved into.
        """
        if tile in self.initial_enemy_tiles_this_turn and tile != mover:
            return True
        return tile in self.occupied_tiles_this_turn

    def claim_tile(self, tile: Coord) -> None:
        self.occupied_tiles_this_turn.add(tile)

    def release_tile(self, tile: Coord) -> None:
        self.initial_enemy_tiles_this_turn.discard(tile)
        self.occupied_tiles_this_turn.discard(tile)
