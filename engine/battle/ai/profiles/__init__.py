"""
AI profile system.

One decision function per archetype. Each profile takes a DecisionRequest
and returns the enemy's destination, or None when the enemy attacked,
bumped, fell, or cannot move. Profiles reuse the base pipeline and only
replace the stages that make their piece different.
"""

from typing import Dict, Optional, Protocol

from engine.battle.types import Archetype, Coord
from engine.error_handler import AIError

from ..pipeline import DecisionRequest


class AIProfile(Protocol):
    """Protocol for archetype decision functions."""

    def __call__(self, request: DecisionRequest) -> Optional[Coord]:
        ...


# Profile registry
_PROFILE_HANDLERS: Dict[Archetype, AIProfile] = {}


def register_profile(archetype: Archetype, handler: AIProfile) -> None:
    """Register the decision function for an archetype."""
    _PROFILE_HANDLERS[archetype] = handler


def get_ai_profile_handler(archetype: Archetype) -> AIProfile:
    """
    Get the decision function for an archetype.

    Raises:
        AIError: if no profile is registered for it
    """
    try:
        return _PROFILE_HANDLERS[archetype]
    except KeyError:
        raise AIError(f"No AI profile registered for archetype {archetype!r}") from None


# Import profile implementations
from .pawn import decide_pawn_move
from .bishop import decide_bishop_move
from .rook import decide_rook_move
from .queen import decide_queen_move
from .king import decide_king_move
from .knight import decide_knight_move

# Register all profiles
register_profile(Archetype.PAWN, decide_pawn_move)
register_profile(Archetype.BISHOP, decide_bishop_move)
register_profile(Archetype.ROOK, decide_rook_move)
register_profile(Archetype.QUEEN, decide_queen_move)
register_profile(Archetype.KING, decide_king_move)
register_profile(Archetype.KNIGHT, decide_knight_move)

missing = set(Archetype) - set(_PROFILE_HANDLERS)
if missing:
    raise AIError(f"Archetypes without an AI profile: {sorted(a.value for a in missing)}")
del missing

__all__ = [
    "AIProfile",
    "register_profile",
    "get_ai_profile_handler",
]
