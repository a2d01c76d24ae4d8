"""
Tests for enemy/player interaction resolution.
"""

import pytest

import settings
from engine.battle.interaction import (
    knight_bump,
    knockback_cell,
    perform_attack,
    pitfall_transition,
    ram_attack,
    resolve_player_contact,
)
from world.entities import Player
from world.tiles import TileType


class TestKnockbackCell:
    """Tests for knockback direction."""

    def test_dominant_vertical_axis(self):
        assert knockback_cell((2, 2), (2, 5)) == (2, 6)

    def test_dominant_horizontal_axis(self):
        assert knockback_cell((0, 0), (3, 1)) == (4, 1)

    def test_equal_axes_push_diagonally(self):
        assert knockback_cell((0, 0), (2, 2)) == (3, 3)
        assert knockback_cell((5, 5), (4, 4)) == (3, 3)


class TestPerformAttack:
    """Tests for standard attacks."""

    def test_deals_damage_and_bumps(self, make_enemy, context):
        """Test damage plus bump feedback on both sides."""
        king = make_enemy(5, 5, "king", attack=2)
        player = Player(5, 6, health=10)

        assert perform_attack(king, player, context) is True
        assert player.health == 8
        assert player.bump_direction == (0, -1)
        assert context.presenter.bump_offsets[king.id].length() == pytest.approx(
            settings.BUMP_OFFSET_PIXELS
        )
        assert context.presenter.is_attacking(king.id)

    def test_suppressed_when_player_just_attacked(self, make_enemy, context):
        """Test no retaliation in the tick the player attacked."""
        context.player_just_attacked = True
        king = make_enemy(5, 5, "king")
        player = Player(5, 6, health=10)

        assert perform_attack(king, player, context) is False
        assert player.health == 10
        assert context.presenter.played_sounds == []


class TestRamAttack:
    """Tests for charge rams."""

    def test_knocks_player_back_along_lane(self, open_grid, make_enemy, context):
        """Test rook at (2,2) ramming a player at (2,5)."""
        rook = make_enemy(2, 2, "rook")
        player = Player(2, 5, health=10)

        ram_attack(rook, player, open_grid, [rook], context)

        assert player.health == 9
        assert player.position == (2, 6)
        assert player.bump_direction == (0, -1)
        assert [(p.x, p.y) for p in context.presenter.smoke[rook.id]] == [(2, 3), (2, 4)]

    def test_no_knockback_into_enemy(self, open_grid, make_enemy, context):
        """Test the player is not pushed onto another enemy."""
        rook = make_enemy(2, 2, "rook")
        other = make_enemy(2, 6, "pawn")
        player = Player(2, 5, health=10)

        ram_attack(rook, player, open_grid, [rook, other], context)

        assert player.position == (2, 5)

    def test_no_knockback_into_wall(self, open_grid, make_enemy, context):
        open_grid.set_tile(2, 6, TileType.WALL)
        rook = make_enemy(2, 2, "rook")
        player = Player(2, 5, health=10)

        ram_attack(rook, player, open_grid, [rook], context)

        assert player.position == (2, 5)

    def test_lethal_ram_leaves_player_in_place(self, open_grid, make_enemy, context):
        rook = make_enemy(2, 2, "rook")
        player = Player(2, 5, health=1)

        ram_attack(rook, player, open_grid, [rook], context)

        assert player.is_dead()
        assert player.position == (2, 5)


class TestKnightBump:
    """Tests for knight bumps."""

    def test_lethal_bump_keeps_knight_home(self, open_grid, make_enemy, context):
        knight = make_enemy(3, 3, "knight")
        player = Player(4, 5, health=1)

        assert knight_bump(knight, player, open_grid, [knight], context) is False
        assert player.is_dead()
        assert knight.position == (3, 3)

    def test_knockback_skips_enemy_cells(self, open_grid, make_enemy, context):
        """Test the farthest free orthogonal cell wins."""
        knight = make_enemy(3, 3, "knight")
        blocker = make_enemy(4, 6, "pawn")
        player = Player(4, 5, health=10)

        assert knight_bump(knight, player, open_grid, [knight, blocker], context) is True
        # (4, 6) would win, but an enemy holds it
        assert player.position == (5, 5)
        assert knight.position == (4, 5)
        assert knight.id in context.presenter.charges


class TestResolvePlayerContact:
    """Tests for destinations that touch the player."""

    def test_bump_when_pattern_cannot_strike(self, make_enemy, context):
        """Test a rook diagonal to the player bumps instead of attacking."""
        rook = make_enemy(4, 4, "rook")
        player = Player(5, 5, health=10)

        assert resolve_player_contact(rook, player, (5, 5), context) is None
        assert player.health == 10
        assert player.bump_direction == (-1, -1)

    def test_attack_when_in_reach(self, make_enemy, context):
        king = make_enemy(5, 4, "king")
        player = Player(5, 5, health=10)

        assert resolve_player_contact(king, player, (5, 5), context) is None
        assert player.health == 9

    def test_holding_position_in_reach_attacks(self, make_enemy, context):
        king = make_enemy(5, 4, "king")
        player = Player(5, 5, health=10)

        assert resolve_player_contact(king, player, (5, 4), context) is None
        assert player.health == 9

    def test_simulation_has_no_effect(self, make_enemy, context):
        king = make_enemy(5, 4, "king")
        player = Player(5, 5, health=10)

        assert resolve_player_contact(king, player, (5, 5), context, simulation=True) is None
        assert player.health == 10
        assert context.presenter.played_sounds == []

    def test_unrelated_destination_passes_through(self, make_enemy, context):
        king = make_enemy(0, 0, "king")
        player = Player(5, 5)

        assert resolve_player_contact(king, player, (1, 1), context) == (1, 1)


class ExplodingWorld:
    def enemy_fell_into_pitfall(self, enemy, x, y, context):
        raise RuntimeError("floor generation failed")


class TestPitfallTransition:
    """Tests for pitfall falls."""

    def test_removes_enemy_and_notifies_world(self, make_enemy, context, world):
        pawn = make_enemy(5, 5, "pawn")
        other = make_enemy(0, 0, "king")
        roster = [pawn, other]
        context.world = world
        context.begin_turn(roster)
        context.presenter.start_attack(pawn.id)

        pitfall_transition(pawn, 5, 6, roster, context)

        assert roster == [other]
        assert (5, 5) not in context.initial_enemy_tiles_this_turn
        assert world.falls == [(pawn, 5, 6)]
        assert not context.presenter.is_attacking(pawn.id)

    def test_world_failure_propagates(self, make_enemy, context):
        pawn = make_enemy(5, 5, "pawn")
        roster = [pawn]
        context.world = ExplodingWorld()

        with pytest.raises(RuntimeError):
            pitfall_transition(pawn, 5, 6, roster, context)
        assert roster == []
