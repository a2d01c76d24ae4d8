"""
Straight-lane checks used by charging pieces.

A lane is the row, column or diagonal between two cells. It is clear when
every cell strictly between the ends can be walked on and, optionally,
holds no enemy.
"""

from typing import Callable, Iterable, List, Optional

from engine.battle.geometry import straight_line_direction
from engine.battle.types import Coord, LaneKind

WalkablePredicate = Callable[[int, int], bool]


def lane_kind(a: Coord, b: Coord) -> Optional[LaneKind]:
    """'orthogonal' or 'diagonal' for cells on a shared line, else None."""
    direction = straight_line_direction(a, b)
    if direction is None:
        return None
    if direction[0] == 0 or direction[1] == 0:
        return "orthogonal"
    return "diagonal"


def lane_matches(a: Coord, b: Coord, allowed: LaneKind) -> bool:
    kind = lane_kind(a, b)
    if kind is None:
        return False
    return allowed == "any" or kind == allowed


def cells_between(a: Coord, b: Coord) -> List[Coord]:
    """Cells strictly between a and b along their shared line (empty if none)."""
    direction = straight_line_direction(a, b)
    if direction is None:
        return []
    cells: List[Coord] = []
    x, y = a[0] + direction[0], a[1] + direction[1]
    while (x, y) != b:
        cells.append((x, y))
        x += direction[0]
        y += direction[1]
    return cells


def has_clear_lane(
    a: Coord,
    b: Coord,
    allowed: LaneKind,
    is_walkable: WalkablePredicate,
    occupied: Iterable[Coord] = (),
) -> bool:
    """
    Whether a piece at `a` can see `b` along a lane of the allowed kind.

    Args:
        a: Viewer cell
        b: Target cell (its own contents are not checked)
        allowed: Which lanes count ("orthogonal", "diagonal" or "any")
        is_walkable: Terrain predicate for the intermediate cells
        occupied: Cells holding other pieces that block the lane
    """
    if not lane_matches(a, b, allowed):
        return False
    blocked = set(occupied)
    for x, y in cells_between(a, b):
        if not is_walkable(x, y) or (x, y) in blocked:
            return False
    return True
