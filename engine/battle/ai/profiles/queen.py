"""
Queen AI profile.

The most aggressive piece: attacks anything adjacent, charges down any
clear row, column or diagonal to the player, and never retreats.
"""

from typing import Optional

from engine.battle.types import Coord

from ..pipeline import DecisionRequest, run_base_pipeline, try_lane_charge


def decide_queen_move(request: DecisionRequest) -> Optional[Coord]:
    handled, destination = try_lane_charge(request)
    if handled:
        return destination
    return run_base_pipeline(request)
