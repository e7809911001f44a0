"""Deterministic, replayable UNO rules engine."""

from uno_engine.config import GameConfig, Settings, configure_logging, get_settings
from uno_engine.engine import ErrorCode, GameError, UnoGame

__all__ = [
    "UnoGame",
    "GameConfig",
    "GameError",
    "ErrorCode",
    "Settings",
    "configure_logging",
    "get_settings",
]
