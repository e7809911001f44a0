"""Pydantic data model: cards, moves, events and the game state root."""

from .cards import (
    ACTION_RANKS,
    COLOR_SWITCHING_RANKS,
    NUMBER_RANKS,
    Card,
    Color,
    Rank,
    build_deck,
)
from .events import (
    AdminEvent,
    AnyGameEvent,
    BluffCallFailed,
    BluffCallSucceeded,
    GameEnded,
    GameOver,
    PileRecycled,
    PlayerJoined,
    PlayerLeft,
    PlayerWon,
    SeedChanged,
)
from .game_state import (
    BOUNDED_EVENT_WINDOW,
    COLOR_HISTORY_LENGTH,
    ENGINE_ID,
    HAND_SIZE,
    MAX_PLAYERS,
    MIN_PLAYERS,
    GameState,
    RetentionMode,
)
from .moves import (
    AnyMove,
    CallBluff,
    ChooseColor,
    Draw,
    GameEvent,
    GameMove,
    Pass,
    PlayCard,
    build_move_from_payload,
)

__all__ = [
    # Cards
    "Card",
    "Color",
    "Rank",
    "NUMBER_RANKS",
    "ACTION_RANKS",
    "COLOR_SWITCHING_RANKS",
    "build_deck",
    # Moves
    "GameEvent",
    "GameMove",
    "AnyMove",
    "PlayCard",
    "Draw",
    "Pass",
    "CallBluff",
    "ChooseColor",
    "build_move_from_payload",
    # Administrative events
    "AdminEvent",
    "AnyGameEvent",
    "SeedChanged",
    "PileRecycled",
    "PlayerJoined",
    "PlayerLeft",
    "PlayerWon",
    "GameEnded",
    "BluffCallSucceeded",
    "BluffCallFailed",
    "GameOver",
    # State
    "GameState",
    "RetentionMode",
    "ENGINE_ID",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "HAND_SIZE",
    "BOUNDED_EVENT_WINDOW",
    "COLOR_HISTORY_LENGTH",
]
