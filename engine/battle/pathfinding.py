"""
Enemy pathfinding module.

Breadth-first search over the grid using each archetype's own step set,
so a bishop only ever walks diagonals and a knight only ever jumps in L's.
Every step costs the same, which makes BFS return a shortest path by
number of moves.
"""

from collections import deque
from typing import Callable, Deque, Dict, Iterable, List, Optional, Tuple

from engine.battle.types import Archetype, Coord, Direction, rules_for

WalkablePredicate = Callable[[int, int], bool]


def movement_directions(archetype: Archetype) -> Tuple[Direction, ...]:
    """Single-step offsets the archetype may use."""
    return rules_for(archetype).move_directions


def charge_directions(archetype: Archetype) -> Tuple[Direction, ...]:
    """Straight lines along which the archetype may charge (empty if it cannot)."""
    return rules_for(archetype).charge_directions


def find_path(
    start: Coord,
    target: Coord,
    is_walkable: WalkablePredicate,
    directions: Iterable[Direction],
) -> Optional[List[Coord]]:
    """
    Find a shortest path from start to target.

    Args:
        start: Starting cell (x, y)
        target: Goal cell (x, y)
        is_walkable: Predicate deciding whether a cell may be entered
        directions: Step offsets allowed for the moving piece

    Returns:
        The path as a list of (x, y) tuples including both ends, [start]
        when start == target, or None if the target cannot be reached.
    """
    if start == target:
        return [start]

    steps = tuple(directions)
    came_from: Dict[Coord, Optional[Coord]] = {start: None}
    queue: Deque[Coord] = deque([start])

    while queue:
        current = queue.popleft()

        if current == target:
            path: List[Coord] = []
            node: Optional[Coord] = current
            while node is not None:
                path.append(node)
                node = came_from[node]
            path.reverse()
            return path

        for dx, dy in steps:
            neighbor = (current[0] + dx, current[1] + dy)
            if neighbor in came_from:
                continue
            if not is_walkable(neighbor[0], neighbor[1]):
                continue
            came_from[neighbor] = current
            queue.append(neighbor)

    return None  # No path found

