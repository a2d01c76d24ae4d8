"""
Pawn AI profile.

Walks one tile at a time along its vertical axis and turns around when the
way ahead is blocked. Strikes only diagonally forward.
"""

from typing import Optional

from engine.battle.geometry import can_strike
from engine.battle.interaction import blocked_bump, perform_attack
from engine.battle.types import Coord

from ..pipeline import DecisionRequest, settle_destination


def _blocked(request: DecisionRequest, cell: Coord) -> bool:
    return not request.can_enter(cell) or request.occupied_by_other(cell)


def _bump(request: DecisionRequest) -> None:
    request.stage = "bump"
    if request.live:
        blocked_bump(request.enemy, request.player, request.context)


def decide_pawn_move(request: DecisionRequest) -> Optional[Coord]:
    enemy = request.enemy
    x, y = request.origin
    direction = enemy.movement_direction

    # A suppressed diagonal attack leaves the pawn free to walk on
    if not request.context.player_just_attacked and can_strike(
        (x, y), request.player_pos, "diagonal_forward", direction
    ):
        request.stage = "attack"
        if request.live:
            perform_attack(enemy, request.player, request.context)
        return None

    ahead = (x, y + direction)
    if ahead == request.player_pos:
        _bump(request)
        return None

    if _blocked(request, ahead):
        direction = -direction
        # Simulation leaves the stored direction alone
        if request.live:
            enemy.movement_direction = direction
        ahead = (x, y + direction)
        if ahead == request.player_pos:
            _bump(request)
            return None
        if _blocked(request, ahead):
            request.stage = "stuck"
            return None

    return settle_destination(request, ahead)
