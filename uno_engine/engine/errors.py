"""Engine error types.

``GameError`` is raised for anything a player (or caller acting for one) did
wrong. The rule validator never raises it directly: it returns it inside a
``ValidationResult`` so the same checks can double as boolean checks.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    # Structural
    TOO_FEW_PLAYERS = "TOO_FEW_PLAYERS"
    TOO_MANY_PLAYERS = "TOO_MANY_PLAYERS"
    INVALID_ID = "INVALID_ID"
    PLAYER_NOT_IN_GAME = "PLAYER_NOT_IN_GAME"
    PLAYER_LACKS_CARD = "PLAYER_LACKS_CARD"
    DECK_PILE_EXHAUSTED = "DECK_PILE_EXHAUSTED"
    # Turn and sequencing
    NOT_PLAYERS_TURN = "NOT_PLAYERS_TURN"
    MUST_PICK_COLOR = "MUST_PICK_COLOR"
    MUST_DRAW_OR_PLAY_STACK = "MUST_DRAW_OR_PLAY_STACK"
    MUST_DRAW_OR_CALL_BLUFF = "MUST_DRAW_OR_CALL_BLUFF"
    MUST_NOT_PLAY_LAST_SWITCHING_CARD = "MUST_NOT_PLAY_LAST_SWITCHING_CARD"
    MUST_PLAY_EXPECTED_CARD = "MUST_PLAY_EXPECTED_CARD"
    MUST_NOT_DRAW_TWICE = "MUST_NOT_DRAW_TWICE"
    MUST_NOT_PASS_WITHOUT_DRAW = "MUST_NOT_PASS_WITHOUT_DRAW"
    CANNOT_CALL_BLUFF = "CANNOT_CALL_BLUFF"
    CANNOT_SWITCH_COLORS = "CANNOT_SWITCH_COLORS"
    # Terminal
    GAME_ENDED = "GAME_ENDED"


class GameError(Exception):
    """Base exception for game rule and roster errors."""

    def __init__(self, code: ErrorCode, message: str, data: dict[str, Any] | None = None):
        self.code = code
        self.message = message
        self.data = data or {}
        super().__init__(f"[{code.value}] {message}")


class ReplayError(Exception):
    """Caller misuse of the replay API."""


class RetentionModeError(ReplayError):
    """Operation needs the full event log, but the game keeps a bounded one."""


class EventIndexError(ReplayError, IndexError):
    """Event index outside the retained log."""
