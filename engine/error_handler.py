"""
Centralized error handling and logging system.

This module provides:
- The "enemy_ai" logger with file and console handlers
- Custom exception types for the decision core
- log_error() for reporting collaborator failures with context
"""
import logging
import traceback
from pathlib import Path
from typing import Optional
from datetime import datetime

# Setup logging directory
LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_DIR.mkdir(parents=True, exist_ok=True)

# Configure logger
logger = logging.getLogger("enemy_ai")
logger.setLevel(logging.DEBUG)

# Prevent duplicate handlers
if not logger.handlers:
    # File handler for detailed decision traces
    log_file = LOG_DIR / f"enemy_ai_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )

    # Console handler for warnings/errors
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter('%(levelname)s: %(message)s')
    )

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)


def get_logger(area: str) -> logging.Logger:
    """Child logger for one area of the decision core (e.g. "pipeline")."""
    return logger.getChild(area)


class GameError(Exception):
    """Base exception for game-specific errors."""
    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class AIError(GameError):
    """A caller broke the decision core's contract."""
    pass


class ConfigError(GameError):
    """Error while reading or writing AI tunables."""
    pass


class ValidationError(GameError):
    """Error when validation fails."""
    pass


def log_error(
    error: Exception,
    context: str = "",
) -> None:
    """
    Log an error with context information.

    Args:
        error: The exception that occurred
        context: Where the error occurred (e.g., "pitfall_transition")
    """
    error_type = type(error).__name__
    error_msg = str(error)
    trace = traceback.format_exc()

    logger.error(f"Error in {context}: {error_type}: {error_msg}\n{trace}")
