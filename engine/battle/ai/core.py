"""
Core enemy AI module.

decide_move() is the single entry point the turn scheduler calls for each
enemy. It dispatches to the archetype's profile and guarantees the result
is either None or a cell the enemy can actually stand on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from engine.battle.context import GameContext
from engine.battle.types import Coord
from engine.error_handler import get_logger
from telemetry.logger import telemetry

from .pipeline import DecisionRequest
from .profiles import get_ai_profile_handler

if TYPE_CHECKING:
    from world.entities import Enemy, Player
    from world.grid import Grid

log = get_logger("core")


def decide_move(
    enemy: "Enemy",
    player: "Player",
    player_pos: Coord,
    grid: "Grid",
    enemies: List["Enemy"],
    is_simulation: bool = False,
    context: Optional[GameContext] = None,
) -> Optional[Coord]:
    """
    Decide what one enemy does this turn.

    Args:
        enemy: The enemy whose turn it is
        player: The player (damaged, bumped or pushed as a side effect)
        player_pos: Player's (x, y) as seen by this decision
        grid: Terrain
        enemies: Live roster in turn order, including `enemy`
        is_simulation: Look-ahead mode; no damage, effects or pitfall falls
        context: Turn bookkeeping and collaborators (a fresh one if omitted)

    Returns:
        Destination (x, y) the enemy intends to move to, or None when it
        attacked, bumped, fell through a pitfall or has nowhere to go.
    """
    if context is None:
        context = GameContext()

    request = DecisionRequest(
        enemy=enemy,
        player=player,
        player_pos=player_pos,
        grid=grid,
        enemies=enemies,
        simulation=is_simulation,
        context=context,
    )
    origin = request.origin
    handler = get_ai_profile_handler(enemy.archetype)
    destination = handler(request)

    if destination is not None and not request.can_enter(destination):
        log.warning(
            "%s (%s) proposed unwalkable cell %s; holding position",
            enemy.id, enemy.archetype.value, destination,
        )
        request.stage = "rejected"
        destination = None

    if not is_simulation:
        log.debug(
            "%s (%s) at %s -> %s [%s]",
            enemy.id, enemy.archetype.value, origin, destination, request.stage,
        )
        telemetry.log_decision(enemy.id, enemy.archetype.value, origin, destination, request.stage)

    return destination
