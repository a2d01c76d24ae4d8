"""
Enemy battle logic: archetypes, geometry, pathfinding and turn resolution.
"""

from .types import Archetype, Coord
from .context import GameContext

__all__ = [
    "Archetype",
    "Coord",
    "GameContext",
]
