from .enemy_turns import EnemyTurnRunner, TurnOutcome

__all__ = [
    "EnemyTurnRunner",
    "TurnOutcome",
]
