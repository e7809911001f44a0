"""Administrative event types - recorded by the engine itself, never submitted.

Administrative events make a full-retention log auditable and replayable:
- RNG consumption (seed changes on every shuffle)
- Pile recycling when the draw pile runs out
- Roster changes, which replay needs to re-deal hands
- Bluff outcomes, wins and the end of the game

In bounded retention they are built but never kept.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from .moves import CallBluff, ChooseColor, Draw, GameEvent, Pass, PlayCard


class AdminEvent(GameEvent):
    """Base class for engine-generated events."""


class SeedChanged(AdminEvent):
    """The deck was shuffled, advancing the RNG."""

    event_type: Literal["seed_changed"] = "seed_changed"
    new_seed: int


class PileRecycled(AdminEvent):
    """The discard pile was shuffled back into an empty draw pile."""

    event_type: Literal["pile_recycled"] = "pile_recycled"


class PlayerJoined(AdminEvent):
    """A player joined and was dealt a hand."""

    event_type: Literal["player_joined"] = "player_joined"
    player_id: str


class PlayerLeft(AdminEvent):
    """A player left the game."""

    event_type: Literal["player_left"] = "player_left"
    player_id: str


class PlayerWon(AdminEvent):
    """A player emptied their hand."""

    event_type: Literal["player_won"] = "player_won"
    player_id: str


class GameEnded(AdminEvent):
    """Only one player still holds cards."""

    event_type: Literal["game_ended"] = "game_ended"
    loser: str


class BluffCallSucceeded(AdminEvent):
    """The accused could have played another card, and draws 4."""

    event_type: Literal["bluff_call_succeeded"] = "bluff_call_succeeded"
    by: str = Field(..., description="Player who called the bluff")
    of: str = Field(..., description="Player who played the wild draw four")


class BluffCallFailed(AdminEvent):
    """The wild draw four was legitimate, and the accuser draws 6."""

    event_type: Literal["bluff_call_failed"] = "bluff_call_failed"
    by: str = Field(..., description="Player who called the bluff")
    of: str = Field(..., description="Player who played the wild draw four")


# Union of every log entry, moves and administrative events alike
AnyGameEvent = Annotated[
    PlayCard
    | Draw
    | Pass
    | CallBluff
    | ChooseColor
    | SeedChanged
    | PileRecycled
    | PlayerJoined
    | PlayerLeft
    | PlayerWon
    | GameEnded
    | BluffCallSucceeded
    | BluffCallFailed,
    Field(discriminator="event_type"),
]


class GameOver(BaseModel):
    """Result of a finished game."""

    loser: str
