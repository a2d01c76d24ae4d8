"""
Tests for EnemyTurnRunner.
"""

from engine.managers import EnemyTurnRunner
from world.entities import Player
from world.tiles import TileType


class TestEnemyTurnRunner:
    """Tests for sequential turn processing."""

    def test_single_enemy_moves(self, open_grid, make_enemy, context):
        king = make_enemy(0, 0, "king")
        player = Player(5, 0)
        runner = EnemyTurnRunner(context)

        outcomes = runner.run([king], player, open_grid)

        assert len(outcomes) == 1
        assert outcomes[0].moved is True
        assert king.x == 1
        assert king.position in context.occupied_tiles_this_turn
        assert king.id in context.presenter.lift_frames

    def test_start_tile_stays_reserved(self, make_grid, make_enemy, quiet_context):
        """Test an enemy cannot step into a tile another enemy started on."""
        grid = make_grid("........", "########")
        front = make_enemy(1, 0, "king")
        back = make_enemy(0, 0, "king")
        runner = EnemyTurnRunner(quiet_context)

        outcomes = runner.run([front, back], Player(7, 0), grid)

        assert front.position == (2, 0)
        assert outcomes[1].destination == (1, 0)
        assert outcomes[1].moved is False
        assert back.position == (0, 0)

    def test_pitfall_removes_enemy_from_roster(self, open_grid, make_enemy, context, world):
        open_grid.set_tile(5, 6, TileType.PITFALL)
        context.world = world
        pawn = make_enemy(5, 5, "pawn")
        king = make_enemy(0, 0, "king")
        roster = [pawn, king]

        outcomes = EnemyTurnRunner(context).run(roster, Player(9, 9), open_grid)

        assert roster == [king]
        assert world.falls == [(pawn, 5, 6)]
        assert outcomes[0].destination is None
        assert len(outcomes) == 2

    def test_dead_player_ends_turn(self, open_grid, make_enemy, context):
        king = make_enemy(0, 0, "king")
        player = Player(5, 5, health=0)

        assert EnemyTurnRunner(context).run([king], player, open_grid) == []
        assert king.position == (0, 0)

    def test_turn_stops_once_player_dies(self, open_grid, make_enemy, context):
        """Test later enemies do not act after the killing blow."""
        first = make_enemy(5, 4, "king")
        second = make_enemy(5, 6, "king")
        player = Player(5, 5, health=1)

        outcomes = EnemyTurnRunner(context).run([first, second], player, open_grid)

        assert player.is_dead()
        assert [o.enemy_id for o in outcomes] == [first.id]

    def test_knight_move_starts_charge_animation(self, open_grid, make_enemy, context):
        knight = make_enemy(0, 0, "knight")
        runner = EnemyTurnRunner(context)

        runner.execute_move(knight, (1, 2))

        assert knight.position == (1, 2)
        assert context.presenter.charges[knight.id].start == (0, 0)

    def test_ram_waits_for_a_landing_the_runner_would_accept(self, open_grid, make_enemy, quiet_context):
        """Test a charge onto a tile vacated this turn neither moves nor hits."""
        knight = make_enemy(2, 6, "knight")
        rook = make_enemy(2, 1, "rook")
        player = Player(2, 7, health=10)

        outcomes = EnemyTurnRunner(quiet_context).run([knight, rook], player, open_grid)

        assert knight.position != (2, 6)
        assert outcomes[1].destination is None
        assert outcomes[1].moved is False
        assert rook.position == (2, 1)
        assert player.health == 10
        assert player.position == (2, 7)


class TestIsMoveValid:
    """Tests for destination validation."""

    def test_rules(self, make_enemy, context):
        a = make_enemy(1, 1)
        b = make_enemy(3, 3)
        runner = EnemyTurnRunner(context)
        context.begin_turn([a, b])

        assert runner.is_move_valid(a, (2, 2), [a, b])
        assert runner.is_move_valid(a, (1, 1), [a, b])
        assert not runner.is_move_valid(a, (3, 3), [a, b])

        b.set_position(5, 5)
        assert not runner.is_move_valid(a, (3, 3), [a, b])

        context.claim_tile((4, 4))
        assert not runner.is_move_valid(a, (4, 4), [a, b])
