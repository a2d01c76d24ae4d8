"""
AI tuning configuration with JSON save/load.

Defaults come from settings.py; a JSON file can override any of them.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import settings
from engine.error_handler import ConfigError, get_logger

log = get_logger("config")

# Config file location
CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
CONFIG_FILE = CONFIG_DIR / "enemy_ai.json"


class AIConfig:
    """Tunables for the enemy decision core."""

    def __init__(self) -> None:
        self.leader_group_size: int = settings.AI_LEADER_GROUP_SIZE
        self.threat_range: int = settings.AI_THREAT_RANGE
        self.clustering_gain_threshold: float = settings.AI_CLUSTERING_GAIN_THRESHOLD
        self.max_extra_player_distance: int = settings.AI_MAX_EXTRA_PLAYER_DISTANCE
        self.isolated_ally_distance: float = settings.AI_ISOLATED_ALLY_DISTANCE
        self.tactics_enabled: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for saving."""
        return {
            "leader_group_size": self.leader_group_size,
            "threat_range": self.threat_range,
            "clustering_gain_threshold": self.clustering_gain_threshold,
            "max_extra_player_distance": self.max_extra_player_distance,
            "isolated_ally_distance": self.isolated_ally_distance,
            "tactics_enabled": self.tactics_enabled,
        }

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Load config from dictionary. Missing keys fall back to settings.py."""
        self.leader_group_size = int(data.get("leader_group_size", settings.AI_LEADER_GROUP_SIZE))
        self.threat_range = int(data.get("threat_range", settings.AI_THREAT_RANGE))
        self.clustering_gain_threshold = float(
            data.get("clustering_gain_threshold", settings.AI_CLUSTERING_GAIN_THRESHOLD)
        )
        self.max_extra_player_distance = int(
            data.get("max_extra_player_distance", settings.AI_MAX_EXTRA_PLAYER_DISTANCE)
        )
        self.isolated_ally_distance = float(
            data.get("isolated_ally_distance", settings.AI_ISOLATED_ALLY_DISTANCE)
        )
        self.tactics_enabled = bool(data.get("tactics_enabled", True))

    def save(self, path: Optional[Path] = None) -> None:
        """
        Save config to a JSON file.

        Raises:
            ConfigError: if the file cannot be written
        """
        path = path or CONFIG_FILE
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigError(f"Error saving AI config to {path}: {e}") from e

    def load(self, path: Optional[Path] = None) -> bool:
        """
        Load config from a JSON file.

        Returns False when the file does not exist.

        Raises:
            ConfigError: if the file exists but cannot be parsed
        """
        path = path or CONFIG_FILE
        if not path.exists():
            return False

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            self.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            raise ConfigError(f"Error loading AI config from {path}: {e}") from e
        log.debug("Loaded AI config from %s: %s", path, self.to_dict())
        return True


# Global config instance
_config = AIConfig()


def get_config() -> AIConfig:
    """Get the global config instance."""
    return _config


def load_config(path: Optional[Path] = None) -> AIConfig:
    """Load and return the config."""
    _config.load(path)
    return _config


def save_config(path: Optional[Path] = None) -> None:
    """Save the global config."""
    _config.save(path)
