"""
Knight AI profile.

Moves only in L-shaped jumps and may jump over anything in between.
Landing on the player is its attack: the player is hit and knocked aside
and the knight takes the cell (see interaction.knight_bump).
"""

from typing import Optional

from engine.battle.geometry import is_knight_move
from engine.battle.interaction import knight_bump
from engine.battle.types import Coord

from ..pipeline import DecisionRequest, plan_path, run_base_pipeline


def decide_knight_move(request: DecisionRequest) -> Optional[Coord]:
    path = plan_path(request)
    if path and len(path) > 1:
        jump = path[1]
        if jump == request.player_pos and is_knight_move(request.origin, jump):
            request.stage = "knight_bump"
            if request.live:
                knight_bump(request.enemy, request.player, request.grid, request.enemies, request.context)
            return None
    return run_base_pipeline(request, path=path)
