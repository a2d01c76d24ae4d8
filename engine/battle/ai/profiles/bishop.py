"""
Bishop AI profile.

Charges along diagonals when the player is in a clear diagonal lane.
Out of lane and within the threat range it backs away first, so it keeps
fishing for a diagonal instead of trading blows up close.
"""

from typing import Optional

from engine.battle.geometry import manhattan
from engine.battle.types import Coord

from ..pipeline import DecisionRequest, run_base_pipeline, settle_destination, try_lane_charge
from ..tactics import defensive_moves


def decide_bishop_move(request: DecisionRequest) -> Optional[Coord]:
    handled, destination = try_lane_charge(request)
    if handled:
        return destination

    threat_range = request.context.config.threat_range
    if manhattan(request.origin, request.player_pos) <= threat_range:
        retreats = defensive_moves(
            request.enemy, request.player_pos, request.grid, request.enemies, threat_range
        )
        if retreats:
            request.stage = "retreat"
            return settle_destination(request, retreats[0])

    return run_base_pipeline(request)
