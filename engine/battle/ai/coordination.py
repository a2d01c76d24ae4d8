"""
Coordination system for enemy AI.

Leader/follower targeting: once the group is big enough, one leader chases
the player and everyone else converges on the leader, so the group arrives
staggered instead of mobbing the player all at once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from engine.battle.types import Coord
from engine.config import AIConfig, get_config

if TYPE_CHECKING:
    from world.entities import Enemy


def group_leader(enemies: Sequence["Enemy"], config: Optional[AIConfig] = None) -> Optional["Enemy"]:
    """
    The group leader, or None when the roster is too small to need one.

    The leader is always the first enemy in roster order.
    """
    config = config or get_config()
    if len(enemies) < config.leader_group_size:
        return None
    return enemies[0]


def select_target(
    enemy: "Enemy",
    player_pos: Coord,
    enemies: Sequence["Enemy"],
    config: Optional[AIConfig] = None,
) -> Coord:
    """
    Cell this enemy should path toward this turn.

    Args:
        enemy: The enemy deciding its move
        player_pos: Player's (x, y)
        enemies: Full roster in turn order
        config: AI tunables (roster size that triggers leader/follower)

    Returns:
        The player's cell for the leader and for small groups, otherwise
        the leader's current cell.
    """
    leader = group_leader(enemies, config)
    if leader is None or leader is enemy:
        return player_pos
    return (leader.x, leader.y)
