from collections import deque
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from .cards import Card, Color
from .events import AnyGameEvent

# Reserved author of administrative plays (the opening discard)
ENGINE_ID = "ENGINE"

MIN_PLAYERS = 2
MAX_PLAYERS = 10
HAND_SIZE = 7

# A bluff check looks past the wild draw four, color choice and bluff call,
# then needs the two moves before those: 3 + 2.
BOUNDED_EVENT_WINDOW = 5
COLOR_HISTORY_LENGTH = 3


class RetentionMode(str, Enum):
    FULL = "full"
    BOUNDED = "bounded"


class GameState(BaseModel):
    """Complete game state.

    Everything needed to continue a game lives here, including the RNG state
    (``seed``), so a serialized snapshot resumes identically. The engine is the
    only writer; callers get deep copies.
    """

    turn_counter: int = 0
    turn_direction: int = Field(1, description="1 or -1")
    players: list[str] = Field(default_factory=list)
    seed: int
    initial_seed: int
    hands: dict[str, list[Card]] = Field(default_factory=dict)
    draw_pile: list[Card] = Field(default_factory=list)
    discard_pile: list[Card] = Field(default_factory=list)
    stacked_draw_two_count: int = 0
    color_history: deque[Card | Color] = Field(default_factory=deque)
    ended: bool = False
    events: deque[AnyGameEvent] = Field(default_factory=deque)
    stack_plus_twos_enabled: bool = True
    retention_mode: RetentionMode = RetentionMode.FULL

    @model_validator(mode="after")
    def bind_capacities(self) -> "GameState":
        """Restore the fixed capacities that plain lists lose in JSON."""
        window = (
            BOUNDED_EVENT_WINDOW
            if self.retention_mode == RetentionMode.BOUNDED
            else None
        )
        self.events = deque(self.events, maxlen=window)
        self.color_history = deque(self.color_history, maxlen=COLOR_HISTORY_LENGTH)
        return self

    def top_discard(self) -> Card | None:
        """Return the top card on the discard pile."""
        return self.discard_pile[-1] if self.discard_pile else None
