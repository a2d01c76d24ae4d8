"""
Enemy turn scheduler.

Runs every enemy's decision in roster order, one at a time, and applies
each accepted move before the next enemy decides. Later enemies therefore
see where earlier ones ended up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from engine.battle.ai import decide_move
from engine.battle.context import GameContext
from engine.battle.types import Archetype, Coord
from engine.error_handler import get_logger
from telemetry.logger import telemetry

if TYPE_CHECKING:
    from world.entities import Enemy, Player
    from world.grid import Grid

log = get_logger("turns")


@dataclass
class TurnOutcome:
    """What one enemy ended up doing this turn."""
    enemy_id: str
    origin: Coord
    destination: Optional[Coord]
    moved: bool


class EnemyTurnRunner:
    """
    Processes one enemy turn over the whole roster.

    Responsibilities:
    - Record where every enemy starts the turn
    - Ask decide_move() for each enemy in roster order
    - Reject destinations another enemy holds, started on, or already claimed
    - Move the enemy and claim its new tile
    """

    def __init__(self, context: Optional[GameContext] = None) -> None:
        self.context = context or GameContext()

    def run(self, enemies: List["Enemy"], player: "Player", grid: "Grid") -> List[TurnOutcome]:
        """
        Resolve one turn for every enemy on the roster.

        Args:
            enemies: Live roster in turn order; enemies falling through a
                pitfall are removed from it
            player: The player
            grid: Terrain

        Returns:
            One TurnOutcome per enemy that got to act
        """
        context = self.context
        context.begin_turn(enemies)
        turn = telemetry.next_turn()
        log.debug("Enemy turn %d: %d enemies", turn, len(enemies))
        outcomes: List[TurnOutcome] = []

        for enemy in list(enemies):
            if player.is_dead():
                log.debug("Player is dead; ending enemy turn early")
                break
            if enemy not in enemies or enemy.is_dead():
                continue

            origin = (enemy.x, enemy.y)
            move = decide_move(enemy, player, (player.x, player.y), grid, enemies, False, context)

            moved = False
            if move is not None:
                if self.is_move_valid(enemy, move, enemies):
                    self.execute_move(enemy, move)
                    moved = True
                else:
                    log.debug("%s move %s -> %s rejected", enemy.id, origin, move)

            outcomes.append(TurnOutcome(enemy.id, origin, move, moved))

        telemetry.log(
            "enemy_turn",
            enemies=len(outcomes),
            moved=sum(1 for o in outcomes if o.moved),
            player_health=player.health,
        )
        return outcomes

    def is_move_valid(self, enemy: "Enemy", move: Coord, enemies: List["Enemy"]) -> bool:
        """
        Check a destination against live occupancy and this turn's bookkeeping.

        A tile is off limits if another enemy stands on it now, if another
        enemy started the turn on it, or if someone already moved there.
        """
        if any(e is not enemy and (e.x, e.y) == move for e in enemies):
            return False
        return not self.context.is_reserved(move, (enemy.x, enemy.y))

    def execute_move(self, enemy: "Enemy", move: Coord) -> None:
        origin = (enemy.x, enemy.y)
        self.context.claim_tile(move)
        enemy.set_position(*move)

        presenter = self.context.presenter
        if presenter is not None:
            presenter.start_lift(enemy.id)
            if enemy.archetype == Archetype.KNIGHT:
                presenter.start_knight_charge(enemy.id, origin, move)
