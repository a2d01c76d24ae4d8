"""
Interaction resolution between an enemy and the player.

Turns a proposed destination into what actually happens: a standard
attack, a blocked bump, a knight bump with knockback, a charging ram, or
a fall through a pitfall. These functions mutate game state and notify
the presenter; only resolve_player_contact knows how to stay quiet in
simulation mode, the rest must not be called there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from engine.battle.context import GameContext
from engine.battle.geometry import can_strike, sign
from engine.battle.line_of_sight import cells_between
from engine.battle.types import Coord, rules_for
from engine.error_handler import get_logger, log_error

if TYPE_CHECKING:
    from world.entities import Enemy, Player
    from world.grid import Grid

log = get_logger("interaction")


def _occupied_by_enemy(cell: Coord, enemies: List["Enemy"]) -> bool:
    return any((e.x, e.y) == cell for e in enemies)


def perform_attack(enemy: "Enemy", player: "Player", context: GameContext) -> bool:
    """
    Standard attack on the player from the enemy's current cell.

    Skipped when the player attacked this same tick, so an enemy does not
    retaliate in the middle of being hit.

    Returns:
        True if damage was dealt
    """
    if context.player_just_attacked:
        log.debug("%s holds its attack: player just attacked", enemy.id)
        return False

    player.take_damage(enemy.attack)
    player.start_bump(enemy.x - player.x, enemy.y - player.y)

    presenter = context.presenter
    if presenter is not None:
        presenter.start_bump(enemy.id, player.x - enemy.x, player.y - enemy.y)
        presenter.start_attack(enemy.id)
        presenter.play_sound("attack")

    log.debug(
        "%s (%s) attacks player at %s for %d, player health %d",
        enemy.id, enemy.archetype.value, (player.x, player.y), enemy.attack, player.health,
    )
    return True


def blocked_bump(enemy: "Enemy", player: "Player", context: GameContext) -> None:
    """Collision feedback only: no damage, nobody moves."""
    dx = sign(player.x - enemy.x)
    dy = sign(player.y - enemy.y)
    player.start_bump(-dx, -dy)
    if context.presenter is not None:
        context.presenter.start_bump(enemy.id, dx, dy)
    log.debug("%s bumps into the player at %s", enemy.id, (player.x, player.y))


def knockback_cell(attacker: Coord, target: Coord) -> Coord:
    """
    Cell the target is pushed to when hit from `attacker`.

    The push follows the dominant axis of the attack, or goes diagonally
    when both axes are equal.
    """
    dx = target[0] - attacker[0]
    dy = target[1] - attacker[1]
    x, y = target
    if abs(dx) > abs(dy):
        x += sign(dx)
    elif abs(dy) > abs(dx):
        y += sign(dy)
    else:
        x += sign(dx)
        y += sign(dy)
    return (x, y)


def ram_attack(
    enemy: "Enemy",
    player: "Player",
    grid: "Grid",
    enemies: List["Enemy"],
    context: GameContext,
) -> None:
    """
    Hit the player at the end of a straight charge.

    Damage and bump feedback, smoke over the traversed lane, then the
    player is shoved one more cell along the charge if they can stand there.
    """
    origin = (enemy.x, enemy.y)
    target = (player.x, player.y)

    player.take_damage(enemy.attack)
    player.start_bump(sign(enemy.x - player.x), sign(enemy.y - player.y))

    presenter = context.presenter
    if presenter is not None:
        presenter.start_bump(enemy.id, sign(player.x - enemy.x), sign(player.y - enemy.y))
        presenter.start_attack(enemy.id)
        presenter.play_sound("attack")
        for x, y in cells_between(origin, target):
            presenter.add_smoke(enemy.id, x, y)

    if player.is_dead():
        log.debug("%s rams and kills the player at %s", enemy.id, target)
        return

    kx, ky = knockback_cell(origin, target)
    if player.is_walkable(kx, ky, grid) and not _occupied_by_enemy((kx, ky), enemies):
        player.set_position(kx, ky)
        log.debug("%s rams player from %s to %s", enemy.id, target, (kx, ky))
    else:
        log.debug("%s rams player at %s, no room to knock back", enemy.id, target)


def knight_bump(
    enemy: "Enemy",
    player: "Player",
    grid: "Grid",
    enemies: List["Enemy"],
    context: GameContext,
) -> bool:
    """
    Knight landing on the player's cell.

    The player takes damage and is pushed to the orthogonal neighbour that
    is walkable, free of enemies, and farthest from the knight's starting
    cell. The knight then takes the vacated cell. If the player dies or has
    nowhere to go, the knight stays where it was.

    Returns:
        True if the knight moved into the player's old cell
    """
    origin = (enemy.x, enemy.y)
    px, py = player.x, player.y

    player.take_damage(enemy.attack)
    presenter = context.presenter
    if presenter is not None:
        presenter.start_attack(enemy.id)
        presenter.play_sound("attack")

    if player.is_dead():
        log.debug("Knight %s kills the player at %s", enemy.id, (px, py))
        return False

    best: Optional[Coord] = None
    best_score = -1
    for cx, cy in ((px, py - 1), (px, py + 1), (px - 1, py), (px + 1, py)):
        if not player.is_walkable(cx, cy, grid):
            continue
        if _occupied_by_enemy((cx, cy), enemies):
            continue
        score = abs(cx - origin[0]) + abs(cy - origin[1])
        if score > best_score:
            best, best_score = (cx, cy), score

    if best is None:
        player.start_bump(sign(px - origin[0]), sign(py - origin[1]))
        log.debug("Knight %s hits player at %s, no knockback cell", enemy.id, (px, py))
        return False

    player.set_position(*best)
    player.start_bump(best[0] - px, best[1] - py)

    enemy.set_position(px, py)
    context.claim_tile((px, py))
    if presenter is not None:
        presenter.start_bump(enemy.id, px - origin[0], py - origin[1])
        presenter.start_knight_charge(enemy.id, origin, (px, py))
        presenter.start_lift(enemy.id)

    log.debug("Knight %s knocks player from %s to %s", enemy.id, (px, py), best)
    return True


def pitfall_transition(
    enemy: "Enemy",
    x: int,
    y: int,
    enemies: List["Enemy"],
    context: GameContext,
) -> None:
    """
    Hand an enemy that stepped onto a pitfall to the world-transition collaborator.

    The enemy leaves the live roster and its tiles are released from the
    turn bookkeeping before the collaborator is told about the fall.
    """
    if enemy in enemies:
        enemies.remove(enemy)
    context.release_tile((enemy.x, enemy.y))

    if context.presenter is not None:
        context.presenter.play_sound("pitfall")
        context.presenter.forget(enemy.id)

    log.debug("%s falls through pitfall at %s", enemy.id, (x, y))

    if context.world is not None:
        try:
            context.world.enemy_fell_into_pitfall(enemy, x, y, context)
        except Exception as e:
            log_error(e, "pitfall_transition")
            raise


def resolve_player_contact(
    enemy: "Enemy",
    player: "Player",
    destination: Coord,
    context: GameContext,
    simulation: bool = False,
) -> Optional[Coord]:
    """
    Settle a destination that touches the player.

    - Destination is the player's cell: attack if the enemy's pattern allows
      it from where it stands, otherwise a blocked bump. No move either way.
    - Destination is the enemy's own cell with the player in reach: attack.
    - Anything else is returned unchanged.

    In simulation the outcome is the same but nothing is hit or bumped.
    """
    here = (enemy.x, enemy.y)
    player_cell = (player.x, player.y)
    geometry = rules_for(enemy.archetype).attack
    in_reach = can_strike(here, player_cell, geometry, enemy.movement_direction)

    if destination == player_cell:
        if simulation:
            return None
        if in_reach:
            perform_attack(enemy, player, context)
        else:
            blocked_bump(enemy, player, context)
        return None

    if destination == here and in_reach:
        if not simulation:
            perform_attack(enemy, player, context)
        return None

    return destination
