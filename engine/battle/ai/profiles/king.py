"""
King AI profile.

Steps one tile in any direction. Hits anything next to it before thinking
about moving, and never backs off.
"""

from typing import Optional

from engine.battle.geometry import chebyshev
from engine.battle.interaction import perform_attack
from engine.battle.types import Coord

from ..pipeline import DecisionRequest, run_base_pipeline


def decide_king_move(request: DecisionRequest) -> Optional[Coord]:
    if chebyshev(request.origin, request.player_pos) == 1:
        request.stage = "attack"
        if request.live:
            perform_attack(request.enemy, request.player, request.context)
        return None
    return run_base_pipeline(request)
