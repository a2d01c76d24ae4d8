"""
Grid distance and adjacency helpers.

Pure functions on (x, y) tuples, shared by pathfinding, tactics and
interaction resolution.
"""

from typing import Optional

from engine.battle.types import AttackGeometry, Coord, Direction


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def chebyshev(a: Coord, b: Coord) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def is_adjacent(a: Coord, b: Coord) -> bool:
    """Any of the 8 neighbouring cells."""
    return chebyshev(a, b) == 1


def is_orthogonally_adjacent(a: Coord, b: Coord) -> bool:
    return manhattan(a, b) == 1


def is_diagonally_adjacent(a: Coord, b: Coord) -> bool:
    return abs(a[0] - b[0]) == 1 and abs(a[1] - b[1]) == 1


def is_knight_move(a: Coord, b: Coord) -> bool:
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return (dx == 1 and dy == 2) or (dx == 2 and dy == 1)


def sign(value: int) -> int:
    return (value > 0) - (value < 0)


def unit_step(a: Coord, b: Coord) -> Direction:
    """Per-axis sign of the vector from a to b."""
    return (sign(b[0] - a[0]), sign(b[1] - a[1]))


def straight_line_direction(a: Coord, b: Coord) -> Optional[Direction]:
    """
    Unit direction from a to b when they share a row, column or diagonal.

    Returns None for the same cell or for cells not on a straight line.
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    if dx == 0 and dy == 0:
        return None
    if dx == 0 or dy == 0 or abs(dx) == abs(dy):
        return (sign(dx), sign(dy))
    return None


def can_strike(attacker: Coord, target: Coord, geometry: AttackGeometry, forward: int = 1) -> bool:
    """
    Whether an attacker at `attacker` may hit `target` with the given pattern.

    Args:
        attacker: Attacker cell
        target: Target cell
        geometry: Attack pattern of the attacker's archetype
        forward: Vertical walking direction, used by the pawn pattern
    """
    if geometry == "diagonal_forward":
        return abs(target[0] - attacker[0]) == 1 and target[1] - attacker[1] == forward
    if geometry == "diagonal":
        return is_diagonally_adjacent(attacker, target)
    if geometry == "orthogonal":
        return is_orthogonally_adjacent(attacker, target)
    if geometry == "any_adjacent":
        return is_adjacent(attacker, target)
    if geometry == "knight":
        return is_knight_move(attacker, target)
    return False
