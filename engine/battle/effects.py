"""
Presentation side of enemy actions.

The decision core reports what happened (bumps, smoke, attacks, lifts,
sounds) to an EffectsPresenter. All animation state lives here, keyed by
actor id, so the gameplay entities stay free of frame counters. Nothing
in here affects decisions and the core never calls it in simulation mode.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pygame

from settings import (
    ATTACK_ANIMATION_FRAMES,
    BUMP_DECAY,
    BUMP_OFFSET_PIXELS,
    HORSE_CHARGE_FRAMES,
    LIFT_FRAMES,
    SMOKE_ANIMATION_FRAMES,
)

PLAYER_ID = "player"


@dataclass
class SmokePuff:
    """A smoke cloud left on a tile by a fast-moving enemy."""
    x: int
    y: int
    frames: int = SMOKE_ANIMATION_FRAMES


@dataclass
class ChargeAnimation:
    """Knight jump from one tile to another."""
    start: Tuple[int, int]
    end: Tuple[int, int]
    frames: int = HORSE_CHARGE_FRAMES


class EffectsPresenter:
    """
    Collects visual and audio feedback for enemy actions.

    Sounds are looked up by name in `sounds`; names with no registered
    pygame Sound are still recorded in `played_sounds`.
    """

    def __init__(self, sounds: Optional[Dict[str, "pygame.mixer.Sound"]] = None):
        self.sounds: Dict[str, "pygame.mixer.Sound"] = dict(sounds or {})
        self.played_sounds: List[str] = []
        self.bump_offsets: Dict[str, pygame.Vector2] = {}
        self.smoke: Dict[str, List[SmokePuff]] = {}
        self.attack_frames: Dict[str, int] = {}
        self.lift_frames: Dict[str, int] = {}
        self.charges: Dict[str, ChargeAnimation] = {}

    def start_bump(self, actor_id: str, dx: int, dy: int) -> None:
        """Nudge an actor's sprite toward (dx, dy); it springs back in update()."""
        offset = pygame.Vector2(dx, dy)
        if offset.length_squared() > 0:
            offset.scale_to_length(BUMP_OFFSET_PIXELS)
        self.bump_offsets[actor_id] = offset

    def start_attack(self, actor_id: str) -> None:
        self.attack_frames[actor_id] = ATTACK_ANIMATION_FRAMES

    def start_lift(self, actor_id: str) -> None:
        self.lift_frames[actor_id] = LIFT_FRAMES

    def start_knight_charge(self, actor_id: str, start: Tuple[int, int], end: Tuple[int, int]) -> None:
        self.charges[actor_id] = ChargeAnimation(start, end)

    def add_smoke(self, actor_id: str, x: int, y: int, frames: int = SMOKE_ANIMATION_FRAMES) -> None:
        self.smoke.setdefault(actor_id, []).append(SmokePuff(x, y, frames))

    def add_smoke_trail(self, actor_id: str, start: Tuple[int, int], end: Tuple[int, int]) -> None:
        """
        Lay smoke on every tile strictly between start and end.

        Walks the longer axis one tile at a time and rounds the other, so a
        slightly bent move still leaves a continuous trail.
        """
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        dist_x, dist_y = abs(dx), abs(dy)

        if dist_x >= dist_y:
            step_x = 1 if dx > 0 else -1
            for i in range(1, dist_x):
                self.add_smoke(actor_id, start[0] + i * step_x, start[1] + round(i * dy / dist_x))
        else:
            step_y = 1 if dy > 0 else -1
            for i in range(1, dist_y):
                self.add_smoke(actor_id, start[0] + round(i * dx / dist_y), start[1] + i * step_y)

    def play_sound(self, name: str) -> None:
        self.played_sounds.append(name)
        sound = self.sounds.get(name)
        if sound is not None:
            sound.play()

    def is_attacking(self, actor_id: str) -> bool:
        return self.attack_frames.get(actor_id, 0) > 0

    def update(self) -> None:
        """Advance every running animation by one frame."""
        for actor_id, offset in list(self.bump_offsets.items()):
            offset = offset * BUMP_DECAY
            if offset.length() < 0.5:
                del self.bump_offsets[actor_id]
            else:
                self.bump_offsets[actor_id] = offset

        for counters in (self.attack_frames, self.lift_frames):
            for actor_id in list(counters):
                counters[actor_id] -= 1
                if counters[actor_id] <= 0:
                    del counters[actor_id]

        for actor_id, puffs in list(self.smoke.items()):
            for puff in puffs:
                puff.frames -= 1
            alive = [p for p in puffs if p.frames > 0]
            if alive:
                self.smoke[actor_id] = alive
            else:
                del self.smoke[actor_id]

        for actor_id, charge in list(self.charges.items()):
            charge.frames -= 1
            if charge.frames <= 0:
                del self.charges[actor_id]

    def forget(self, actor_id: str) -> None:
        """Drop all animation state for an actor that left the board."""
        for store in (self.bump_offsets, self.smoke, self.attack_frames, self.lift_frames, self.charges):
            store.pop(actor_id, None)
