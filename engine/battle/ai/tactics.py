"""
Cooperative positioning for enemy groups.

Pure functions over the roster: how tightly a cell keeps the group
together, how well it spreads attackers around the player, whether it
would hide behind an ally, and where to step back when threatened.
The pipeline layers these on top of the raw pathfinding step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

import settings

from engine.battle.geometry import is_knight_move, manhattan
from engine.battle.pathfinding import movement_directions
from engine.battle.types import Archetype, Coord, rules_for
from engine.config import AIConfig, get_config
from engine.error_handler import get_logger

if TYPE_CHECKING:
    from world.entities import Enemy
    from world.grid import Grid

log = get_logger("tactics")


def ally_distance(
    cell: Coord,
    enemy: "Enemy",
    enemies: Sequence["Enemy"],
    isolated_distance: float = settings.AI_ISOLATED_ALLY_DISTANCE,
) -> float:
    """
    Average Manhattan distance from `cell` to the other enemies.

    Allies standing on `cell` itself are ignored. Lower means a tighter group.
    Returns `isolated_distance` when nobody else is around.
    """
    total = 0
    count = 0
    for other in enemies:
        if other is enemy:
            continue
        dist = manhattan(cell, (other.x, other.y))
        if dist > 0:
            total += dist
            count += 1
    return total / count if count else isolated_distance


def _sector(dx: int, dy: int) -> Optional[str]:
    """Compass sector of an offset from the player (y grows southward)."""
    if dx == 0 and dy == 0:
        return None
    ns = "N" if dy < 0 else "S" if dy > 0 else ""
    ew = "W" if dx < 0 else "E" if dx > 0 else ""
    return ns + ew


def direction_diversity(
    cell: Coord,
    player: Coord,
    enemy: "Enemy",
    enemies: Sequence["Enemy"],
) -> float:
    """
    Share of the other enemies that are NOT in the same compass sector as `cell`.

    Sectors are the eight directions around the player. Higher means the
    group is coming at the player from more sides. 1.0 with no allies.
    """
    mine = _sector(cell[0] - player[0], cell[1] - player[1])
    total = 0
    same = 0
    for other in enemies:
        if other is enemy:
            continue
        total += 1
        if _sector(other.x - player[0], other.y - player[1]) == mine:
            same += 1
    return (total - same) / total if total else 1.0


def is_stacked_behind(
    cell: Coord,
    player: Coord,
    enemy: "Enemy",
    enemies: Sequence["Enemy"],
) -> bool:
    """
    Whether `cell` sits directly behind an ally as seen from the player.

    Behind means on the same column, row or diagonal through the player,
    on the same side, and farther away than the ally.
    """
    tx = cell[0] - player[0]
    ty = cell[1] - player[1]

    for other in enemies:
        if other is enemy:
            continue
        ex = other.x - player[0]
        ey = other.y - player[1]

        vertical = tx == 0 and ex == 0 and (
            (ty > 0 and 0 < ey < ty) or (ty < 0 and ty < ey < 0)
        )
        horizontal = ty == 0 and ey == 0 and (
            (tx > 0 and 0 < ex < tx) or (tx < 0 and tx < ex < 0)
        )
        if vertical or horizontal:
            return True

        on_diagonals = abs(tx) == abs(ty) and abs(ex) == abs(ey)
        farther = abs(tx) + abs(ty) > abs(ex) + abs(ey)
        same_side = tx * ex > 0 and ty * ey > 0
        if on_diagonals and farther and same_side:
            return True

    return False


def _open_steps(
    enemy: "Enemy",
    grid: "Grid",
    enemies: Sequence["Enemy"],
) -> List[Coord]:
    """Single steps from the enemy's cell that are on the board, walkable and unoccupied."""
    occupied = {(e.x, e.y) for e in enemies}
    steps: List[Coord] = []
    for dx, dy in movement_directions(enemy.archetype):
        cell = (enemy.x + dx, enemy.y + dy)
        if not grid.in_bounds(*cell):
            continue
        if not enemy.is_walkable(cell[0], cell[1], grid):
            continue
        if cell in occupied:
            continue
        steps.append(cell)
    return steps


def defensive_moves(
    enemy: "Enemy",
    player: Coord,
    grid: "Grid",
    enemies: Sequence["Enemy"],
    threat_range: int = settings.AI_THREAT_RANGE,
) -> List[Coord]:
    """
    Retreat candidates from the enemy's current cell, best first.

    A candidate must be farther from the player than the enemy is now.
    When the enemy is already inside the threat range the candidate must
    also leave it. Ranked by distance gained; ties keep direction order.
    """
    current_dist = manhattan((enemy.x, enemy.y), player)
    currently_vulnerable = current_dist <= threat_range

    scored: List[Tuple[int, Coord]] = []
    for cell in _open_steps(enemy, grid, enemies):
        new_dist = manhattan(cell, player)
        still_vulnerable = new_dist <= threat_range
        if new_dist > current_dist and (not still_vulnerable or not currently_vulnerable):
            scored.append((new_dist - current_dist, cell))

    # sorted() is stable, so equal gains stay in direction order
    scored = sorted(scored, key=lambda item: item[0], reverse=True)
    return [cell for _, cell in scored]


def apply_tactical_adjustments(
    enemy: "Enemy",
    proposed: Coord,
    player: Coord,
    grid: "Grid",
    enemies: Sequence["Enemy"],
    config: Optional[AIConfig] = None,
) -> Coord:
    """
    Swap the proposed step for a single step that plays better with the group.

    Looks at each single step from the enemy's current cell and takes the
    first one that either pulls noticeably closer to the allies or spreads
    the attack to a less crowded side, as long as it keeps within a couple
    of tiles of the proposed distance to the player and does not line up
    behind an ally.
    """
    config = config or get_config()
    if not config.tactics_enabled:
        return proposed

    proposed_dist = manhattan(proposed, player)
    proposed_clustering = ally_distance(proposed, enemy, enemies, config.isolated_ally_distance)
    proposed_diversity = direction_diversity(proposed, player, enemy, enemies)

    for alt in _open_steps(enemy, grid, enemies):
        if alt == player:
            continue
        alt_dist = manhattan(alt, player)
        clustering_gain = proposed_clustering - ally_distance(
            alt, enemy, enemies, config.isolated_ally_distance
        )
        diversity_gain = direction_diversity(alt, player, enemy, enemies) - proposed_diversity

        if not (clustering_gain > config.clustering_gain_threshold or diversity_gain > 0):
            continue
        if alt_dist > proposed_dist + config.max_extra_player_distance:
            continue
        if is_stacked_behind(alt, player, enemy, enemies):
            continue

        log.debug(
            "%s redirects %s -> %s (clustering %+.2f, diversity %+.2f)",
            enemy.id, proposed, alt, clustering_gain, diversity_gain,
        )
        return alt

    return proposed


def apply_defensive_moves(
    enemy: "Enemy",
    proposed: Coord,
    player: Coord,
    grid: "Grid",
    enemies: Sequence["Enemy"],
    config: Optional[AIConfig] = None,
) -> Coord:
    """
    Replace a step that ends inside the threat range with a retreat, if one exists.

    Pieces that never retreat (queen, king) are left alone, and so is a
    knight jumping straight onto the player.
    """
    config = config or get_config()
    if not rules_for(enemy.archetype).retreats:
        return proposed

    if (
        enemy.archetype == Archetype.KNIGHT
        and proposed == player
        and is_knight_move((enemy.x, enemy.y), proposed)
    ):
        return proposed

    if manhattan(proposed, player) > config.threat_range:
        return proposed

    candidates = defensive_moves(enemy, player, grid, enemies, config.threat_range)
    if not candidates:
        return proposed

    log.debug("%s retreats %s -> %s (candidates %s)", enemy.id, proposed, candidates[0], candidates)
    return candidates[0]

