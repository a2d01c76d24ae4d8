"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test files.
"""

import os

# Headless pygame for the test session
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest
import pygame
from typing import Callable, Generator, List

from engine.battle.context import GameContext
from engine.battle.effects import EffectsPresenter
from engine.config import AIConfig
from world.entities import Enemy, Player
from world.grid import Grid


@pytest.fixture(scope="session", autouse=True)
def pygame_init() -> Generator[None, None, None]:
    """
    Initialize pygame for the test session.
    This runs once before all tests and cleans up after.
    """
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def open_grid() -> Grid:
    """
    An empty 10x10 floor grid.
    """
    return Grid.filled(10, 10)


@pytest.fixture
def make_grid() -> Callable[..., Grid]:
    """
    Build a grid from ASCII rows ('.' floor, '#' wall, 'O' pitfall, ...).
    """
    def _make(*rows: str) -> Grid:
        return Grid.from_strings(rows)
    return _make


@pytest.fixture
def player() -> Player:
    return Player(x=5, y=5, health=10, max_health=10)


@pytest.fixture
def ai_config() -> AIConfig:
    """
    Fresh tunables, independent of the global config.
    """
    return AIConfig()


@pytest.fixture
def presenter() -> EffectsPresenter:
    return EffectsPresenter()


@pytest.fixture
def context(presenter: EffectsPresenter, ai_config: AIConfig) -> GameContext:
    """
    A turn context with a recording presenter attached.
    """
    return GameContext(presenter=presenter, config=ai_config)


@pytest.fixture
def quiet_context(ai_config: AIConfig) -> GameContext:
    """
    A turn context with tactical redirects switched off, for tests that
    check raw movement rules.
    """
    ai_config.tactics_enabled = False
    return GameContext(presenter=EffectsPresenter(), config=ai_config)


@pytest.fixture
def make_enemy() -> Callable[..., Enemy]:
    def _make(x: int, y: int, archetype: str = "king", **kwargs) -> Enemy:
        return Enemy(x=x, y=y, archetype=archetype, **kwargs)
    return _make


class RecordingWorld:
    """World-transition collaborator that remembers pitfall falls."""

    def __init__(self) -> None:
        self.falls: List[tuple] = []

    def enemy_fell_into_pitfall(self, enemy, x, y, context) -> None:
        self.falls.append((enemy, x, y))


@pytest.fixture
def world() -> RecordingWorld:
    return RecordingWorld()
