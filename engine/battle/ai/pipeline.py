"""
Base movement pipeline shared by every enemy archetype.

One decision runs these stages in order:

1. pick a target (player, or the group leader for followers)
2. breadth-first path toward it
3. stretch the first step into a straight-line charge where allowed
4. tactical redirect for flanking / group cohesion
5. defensive retreat when the step ends too close to the player
6. settle the destination: blocked cells, pitfalls, contact with the player

When no path exists the enemy takes any free adjacent step instead.
Archetype profiles call into this module and only replace the stages
that make their piece different.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Set, Tuple

from engine.battle.context import GameContext
from engine.battle.geometry import can_strike, chebyshev, unit_step
from engine.battle.interaction import (
    perform_attack,
    pitfall_transition,
    ram_attack,
    resolve_player_contact,
)
from engine.battle.line_of_sight import has_clear_lane
from engine.battle.pathfinding import charge_directions, find_path, movement_directions
from engine.battle.types import Archetype, ArchetypeRules, Coord, rules_for
from engine.error_handler import get_logger
from world.tiles import TileType

from .coordination import select_target
from .tactics import apply_defensive_moves, apply_tactical_adjustments

if TYPE_CHECKING:
    from world.entities import Enemy, Player
    from world.grid import Grid

log = get_logger("pipeline")

# Pieces that leave a smoke trail when they cover more than one tile
SMOKE_TRAIL_ARCHETYPES = frozenset({Archetype.ROOK, Archetype.BISHOP})


@dataclass
class DecisionRequest:
    """Everything one enemy needs to decide its move this turn."""
    enemy: "Enemy"
    player: "Player"
    player_pos: Coord
    grid: "Grid"
    enemies: List["Enemy"]
    simulation: bool
    context: GameContext
    stage: str = "pipeline"

    @property
    def origin(self) -> Coord:
        return (self.enemy.x, self.enemy.y)

    @property
    def rules(self) -> ArchetypeRules:
        return rules_for(self.enemy.archetype)

    @property
    def live(self) -> bool:
        return not self.simulation

    def other_enemy_cells(self) -> Set[Coord]:
        return {(e.x, e.y) for e in self.enemies if e is not self.enemy}

    def occupied_by_other(self, cell: Coord) -> bool:
        return any(e is not self.enemy and (e.x, e.y) == cell for e in self.enemies)

    def can_enter(self, cell: Coord) -> bool:
        """On the board and walkable terrain for this enemy."""
        return self.grid.in_bounds(*cell) and self.enemy.is_walkable(cell[0], cell[1], self.grid)

    def terrain_walkable(self, x: int, y: int) -> bool:
        return self.enemy.is_walkable(x, y, self.grid)


def plan_path(request: DecisionRequest) -> Optional[List[Coord]]:
    """
    Path from the enemy to its target for this turn.

    Cells held by other enemies are avoided, except the target cell itself
    so followers can still home in on their leader.
    """
    target = select_target(request.enemy, request.player_pos, request.enemies, request.context.config)
    blocked = request.other_enemy_cells() - {target}

    def walkable(x: int, y: int) -> bool:
        return (x, y) not in blocked and request.terrain_walkable(x, y)

    path = find_path(request.origin, target, walkable, movement_directions(request.enemy.archetype))
    if request.live:
        log.debug("%s targets %s, path %s", request.enemy.id, target, path)
    return path


def extend_charge(request: DecisionRequest, path: List[Coord]) -> Coord:
    """
    Turn the first step of the path into a multi-tile charge.

    Only for pieces with charge directions, and only while the path keeps
    going straight along the first step's direction over walkable cells
    with no enemy on them. The player's cell is never part of a charge.
    """
    next_step = path[1]
    ox, oy = request.origin
    step = (next_step[0] - ox, next_step[1] - oy)
    if step not in charge_directions(request.enemy.archetype):
        return next_step

    destination = next_step
    for distance, cell in enumerate(path[2:], start=2):
        if cell != (ox + step[0] * distance, oy + step[1] * distance):
            break
        if cell == request.player_pos:
            break
        if not request.can_enter(cell) or request.occupied_by_other(cell):
            break
        destination = cell

    if destination != next_step and request.live:
        log.debug("%s charges %s -> %s", request.enemy.id, request.origin, destination)
    return destination


def find_fallback_move(request: DecisionRequest) -> Optional[Coord]:
    """First free single step in the enemy's own direction order, if any."""
    ox, oy = request.origin
    for dx, dy in movement_directions(request.enemy.archetype):
        cell = (ox + dx, oy + dy)
        if cell == request.player_pos:
            continue
        if not request.can_enter(cell):
            continue
        if request.occupied_by_other(cell):
            continue
        return cell
    return None


def settle_destination(request: DecisionRequest, cell: Coord) -> Optional[Coord]:
    """
    Final checks on a destination before it is handed back to the caller.

    Holds if another enemy stands there, drops the enemy through a pitfall,
    and turns contact with the player into an attack or a bump.
    """
    if request.occupied_by_other(cell):
        request.stage = "held"
        return None

    if cell != request.player_pos and request.grid.tile_type_at(*cell) == TileType.PITFALL:
        if request.simulation:
            return cell
        request.stage = "pitfall"
        pitfall_transition(request.enemy, cell[0], cell[1], request.enemies, request.context)
        return None

    result = resolve_player_contact(
        request.enemy, request.player, cell, request.context, simulation=request.simulation
    )
    if result is None:
        request.stage = "contact"
    return result


def run_base_pipeline(request: DecisionRequest, path: Optional[List[Coord]] = None) -> Optional[Coord]:
    """
    Shared decision sequence.

    Args:
        request: The decision being made
        path: A path already planned by the caller, to avoid searching twice

    Returns:
        Destination cell, or None if the enemy attacked, bumped, fell or is stuck
    """
    enemy = request.enemy
    config = request.context.config
    if path is None:
        path = plan_path(request)

    if not path or len(path) < 2:
        request.stage = "fallback"
        fallback = find_fallback_move(request)
        return settle_destination(request, fallback) if fallback is not None else None

    next_step = extend_charge(request, path)
    next_step = apply_tactical_adjustments(
        enemy, next_step, request.player_pos, request.grid, request.enemies, config
    )
    retreat_from = next_step
    next_step = apply_defensive_moves(
        enemy, next_step, request.player_pos, request.grid, request.enemies, config
    )
    if next_step != retreat_from:
        request.stage = "retreat"

    if (
        request.live
        and request.context.presenter is not None
        and enemy.archetype in SMOKE_TRAIL_ARCHETYPES
        and chebyshev(request.origin, next_step) > 1
    ):
        request.context.presenter.add_smoke_trail(enemy.id, request.origin, next_step)

    if not request.can_enter(next_step):
        request.stage = "fallback"
        fallback = find_fallback_move(request)
        return settle_destination(request, fallback) if fallback is not None else None

    return settle_destination(request, next_step)


def try_lane_charge(request: DecisionRequest) -> Tuple[bool, Optional[Coord]]:
    """
    Ram the player along a clear straight lane.

    Returns (handled, destination). When the player is in the piece's lane
    with nothing in between, the piece either attacks from where it stands
    (adjacent) or charges to the lane cell next to the player and rams.
    When the player attacked this tick the charge still happens but the ram
    is held. handled is False when there is no usable lane.
    """
    rules = request.rules
    if rules.charge_lane is None:
        return False, None

    origin = request.origin
    player_cell = request.player_pos
    if not has_clear_lane(
        origin, player_cell, rules.charge_lane, request.terrain_walkable, request.other_enemy_cells()
    ):
        return False, None

    request.stage = "charge"
    if can_strike(origin, player_cell, rules.attack):
        if request.live:
            perform_attack(request.enemy, request.player, request.context)
        return True, None

    dx, dy = unit_step(origin, player_cell)
    landing = (player_cell[0] - dx, player_cell[1] - dy)
    if not request.can_enter(landing) or request.occupied_by_other(landing):
        return True, None
    # Reserved for another enemy this turn: no charge and no ram
    if request.context.is_reserved(landing, origin):
        request.stage = "held"
        return True, None

    if request.grid.tile_type_at(*landing) == TileType.PITFALL:
        return True, settle_destination(request, landing)

    if request.live:
        context = request.context
        if context.player_just_attacked:
            if context.presenter is not None:
                context.presenter.add_smoke_trail(request.enemy.id, origin, landing)
            log.debug("%s charges %s -> %s, holds its ram: player just attacked",
                      request.enemy.id, origin, landing)
        else:
            ram_attack(request.enemy, request.player, request.grid, request.enemies, context)
            log.debug("%s charges %s -> %s and rams the player", request.enemy.id, origin, landing)
    return True, landing
