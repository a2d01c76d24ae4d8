"""
Battle type definitions.

Contains the archetype tag, coordinate aliases and the per-archetype rule
table used throughout the enemy decision core.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Literal, Optional, Tuple

from engine.error_handler import ValidationError


# Type aliases
Coord = Tuple[int, int]
Direction = Tuple[int, int]
AttackGeometry = Literal["diagonal_forward", "diagonal", "orthogonal", "any_adjacent", "knight"]
LaneKind = Literal["orthogonal", "diagonal", "any"]


# Direction sets. Order is stable so searches stay deterministic.
ORTHOGONAL_DIRECTIONS: Tuple[Direction, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))
DIAGONAL_DIRECTIONS: Tuple[Direction, ...] = ((-1, -1), (1, -1), (-1, 1), (1, 1))
ALL_DIRECTIONS: Tuple[Direction, ...] = ORTHOGONAL_DIRECTIONS + DIAGONAL_DIRECTIONS
VERTICAL_DIRECTIONS: Tuple[Direction, ...] = ((0, -1), (0, 1))
KNIGHT_DIRECTIONS: Tuple[Direction, ...] = (
    (1, 2), (1, -2), (-1, 2), (-1, -2),
    (2, 1), (2, -1), (-2, 1), (-2, -1),
)


class Archetype(str, Enum):
    """Chess-piece behavior category of an enemy."""
    PAWN = "pawn"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
    KNIGHT = "knight"

    @classmethod
    def from_name(cls, name: "str | Archetype") -> "Archetype":
        """
        Resolve a chess name or a creature name (e.g. "lizardeaux") to an archetype.

        Raises:
            ValidationError: if the name is not recognised
        """
        if isinstance(name, Archetype):
            return name
        key = str(name).strip().lower()
        archetype = _ARCHETYPE_ALIASES.get(key)
        if archetype is None:
            try:
                archetype = cls(key)
            except ValueError:
                raise ValidationError(f"Unknown enemy archetype: {name!r}") from None
        return archetype


_ARCHETYPE_ALIASES: Dict[str, Archetype] = {
    "lizardy": Archetype.PAWN,
    "zard": Archetype.BISHOP,
    "lizardeaux": Archetype.ROOK,
    "lazerd": Archetype.QUEEN,
    "lizardo": Archetype.KING,
    "lizord": Archetype.KNIGHT,
}


@dataclass(frozen=True)
class ArchetypeRules:
    """
    Static movement and attack rules for one archetype.

    - move_directions: single-step offsets used for pathfinding and fallback moves
    - charge_directions: straight lines along which a multi-tile charge is allowed
    - charge_lane: which straight lanes to the player count for a ram charge
    - attack: adjacency pattern from which the piece may strike the player
    - retreats: whether the defensive override may pull this piece back
    """
    move_directions: Tuple[Direction, ...]
    attack: AttackGeometry
    charge_directions: Tuple[Direction, ...] = ()
    charge_lane: Optional[LaneKind] = None
    retreats: bool = True

    @property
    def can_charge(self) -> bool:
        return bool(self.charge_directions)


ARCHETYPE_RULES: Dict[Archetype, ArchetypeRules] = {
    Archetype.PAWN: ArchetypeRules(
        move_directions=VERTICAL_DIRECTIONS,
        attack="diagonal_forward",
    ),
    Archetype.BISHOP: ArchetypeRules(
        move_directions=DIAGONAL_DIRECTIONS,
        attack="diagonal",
        charge_directions=DIAGONAL_DIRECTIONS,
        charge_lane="diagonal",
    ),
    Archetype.ROOK: ArchetypeRules(
        move_directions=ORTHOGONAL_DIRECTIONS,
        attack="orthogonal",
        charge_directions=ORTHOGONAL_DIRECTIONS,
        charge_lane="orthogonal",
    ),
    Archetype.QUEEN: ArchetypeRules(
        move_directions=ALL_DIRECTIONS,
        attack="any_adjacent",
        charge_directions=ALL_DIRECTIONS,
        charge_lane="any",
        retreats=False,
    ),
    Archetype.KING: ArchetypeRules(
        move_directions=ALL_DIRECTIONS,
        attack="any_adjacent",
        retreats=False,
    ),
    Archetype.KNIGHT: ArchetypeRules(
        move_directions=KNIGHT_DIRECTIONS,
        attack="knight",
    ),
}


def rules_for(archetype: Archetype) -> ArchetypeRules:
    return ARCHETYPE_RULES[archetype]
