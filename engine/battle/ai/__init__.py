"""
Enemy AI system.

Per-turn movement decisions for chess-piece enemies, organized into
separate modules: pipeline stages, tactics, coordination and one profile
per archetype.
"""

from .core import decide_move
from .pipeline import DecisionRequest, run_base_pipeline
from .profiles import AIProfile, get_ai_profile_handler, register_profile
from .coordination import group_leader, select_target
from .tactics import (
    ally_distance,
    apply_defensive_moves,
    apply_tactical_adjustments,
    defensive_moves,
    direction_diversity,
    is_stacked_behind,
)

__all__ = [
    # Core
    "decide_move",
    "DecisionRequest",
    "run_base_pipeline",
    # Profiles
    "AIProfile",
    "get_ai_profile_handler",
    "register_profile",
    # Coordination
    "group_leader",
    "select_target",
    # Tactics
    "ally_distance",
    "apply_defensive_moves",
    "apply_tactical_adjustments",
    "defensive_moves",
    "direction_diversity",
    "is_stacked_behind",
]
