"""
Rook AI profile.

Charges along rows and columns. With the player in a clear orthogonal lane
it rams; otherwise it follows the base pipeline, retreat included.
"""

from typing import Optional

from engine.battle.types import Coord

from ..pipeline import DecisionRequest, run_base_pipeline, try_lane_charge


def decide_rook_move(request: DecisionRequest) -> Optional[Coord]:
    handled, destination = try_lane_charge(request)
    if handled:
        return destination
    return run_base_pipeline(request)
