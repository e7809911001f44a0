"""Game engine module - UNO rules, deck handling and replay.

This module provides:
- UnoGame, the facade that owns a game's state
- Move validation returning ValidationResult instead of raising
- Move application returning typed outcomes
- GameError with a stable ErrorCode for every illegal move

Usage:
    from uno_engine.engine import GameError, UnoGame
    from uno_engine.schemas import Card, Color, Rank

    game = UnoGame()
    game.join("alice", "bob")

    try:
        outcome = game.play("alice", Card(rank=Rank.SKIP, color=Color.RED))
        print(outcome.summary)
    except GameError as e:
        print(f"Error: {e.code} - {e.message}")
"""

# Deck
from .deck import DeckManager

# Errors
from .errors import (
    ErrorCode,
    EventIndexError,
    GameError,
    ReplayError,
    RetentionModeError,
)

# Facade
from .game import UnoGame

# Outcomes
from .outcomes import (
    AnyMoveOutcome,
    BluffFailed,
    BluffSucceeded,
    CardPlayed,
    CardsDrawn,
    ColorChanged,
    GameFinished,
    MoveOutcome,
    PlayerFinished,
    TurnPassed,
)

# Main processing
from .process import apply_move

# Validation
from .validation import ExpectedCard, ValidationResult, card_matches, validate_move

__all__ = [
    # Facade
    "UnoGame",
    "DeckManager",
    # Errors
    "ErrorCode",
    "GameError",
    "ReplayError",
    "RetentionModeError",
    "EventIndexError",
    # Outcomes
    "MoveOutcome",
    "AnyMoveOutcome",
    "CardPlayed",
    "PlayerFinished",
    "GameFinished",
    "CardsDrawn",
    "TurnPassed",
    "BluffSucceeded",
    "BluffFailed",
    "ColorChanged",
    # Processing
    "apply_move",
    # Validation
    "ValidationResult",
    "ExpectedCard",
    "validate_move",
    "card_matches",
]
