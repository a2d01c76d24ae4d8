"""
Tests for EffectsPresenter.
"""

import pytest

import settings
from engine.battle.effects import EffectsPresenter


class FakeSound:
    def __init__(self):
        self.plays = 0

    def play(self):
        self.plays += 1


class TestEffectsPresenter:
    """Tests for animation and sound bookkeeping."""

    def test_smoke_trail_covers_cells_between(self, presenter):
        presenter.add_smoke_trail("rook", (2, 2), (2, 6))
        assert [(p.x, p.y) for p in presenter.smoke["rook"]] == [(2, 3), (2, 4), (2, 5)]

    def test_smoke_trail_on_bent_move(self, presenter):
        presenter.add_smoke_trail("bishop", (0, 0), (4, 2))
        assert [(p.x, p.y) for p in presenter.smoke["bishop"]] == [(1, 0), (2, 1), (3, 2)]

    def test_bump_offset_length(self, presenter):
        presenter.start_bump("king", 1, 1)
        assert presenter.bump_offsets["king"].length() == pytest.approx(settings.BUMP_OFFSET_PIXELS)

    def test_zero_bump_does_not_raise(self, presenter):
        presenter.start_bump("king", 0, 0)
        assert presenter.bump_offsets["king"].length() == 0

    def test_update_decays_and_expires(self, presenter):
        """Test every counter runs down and is dropped at zero."""
        presenter.start_bump("king", 0, 1)
        presenter.start_attack("king")
        presenter.add_smoke("rook", 1, 1, frames=1)

        presenter.update()

        assert presenter.bump_offsets["king"].length() == pytest.approx(
            settings.BUMP_OFFSET_PIXELS * settings.BUMP_DECAY
        )
        assert presenter.attack_frames["king"] == settings.ATTACK_ANIMATION_FRAMES - 1
        assert "rook" not in presenter.smoke

        for _ in range(settings.ATTACK_ANIMATION_FRAMES):
            presenter.update()
        assert not presenter.is_attacking("king")
        assert "king" not in presenter.bump_offsets

    def test_play_sound_uses_registered_sound(self):
        sound = FakeSound()
        presenter = EffectsPresenter(sounds={"attack": sound})

        presenter.play_sound("attack")
        presenter.play_sound("pitfall")

        assert sound.plays == 1
        assert presenter.played_sounds == ["attack", "pitfall"]

    def test_forget_drops_actor_state(self, presenter):
        presenter.start_lift("knight")
        presenter.start_knight_charge("knight", (0, 0), (1, 2))

        presenter.forget("knight")

        assert "knight" not in presenter.lift_frames
        assert "knight" not in presenter.charges
