"""Domain move types - the actions a player can submit to the engine.

Every move is also a log entry: accepted moves are appended to the game's
event log as-is, next to the administrative events in ``events.py``.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from .cards import Card, Color


class GameEvent(BaseModel):
    """Base class for everything recorded in the event log."""

    event_type: str


class GameMove(GameEvent):
    """Base class for player-initiated moves."""

    by: str = Field(..., description="ID of the player making the move")


class PlayCard(GameMove):
    """Player puts a card from their hand onto the discard pile."""

    event_type: Literal["card_played"] = "card_played"
    card: Card


class Draw(GameMove):
    """Player draws one card, or the pending penalty after a draw two / wild draw four."""

    event_type: Literal["draw"] = "draw"


class Pass(GameMove):
    """Player ends their turn after drawing."""

    event_type: Literal["pass"] = "pass"


class CallBluff(GameMove):
    """Player challenges the wild draw four played against them."""

    event_type: Literal["bluff_called"] = "bluff_called"


class ChooseColor(GameMove):
    """Player names the color after playing a wild or wild draw four."""

    event_type: Literal["color_chosen"] = "color_chosen"
    color: Color


# Union type for all player moves
AnyMove = Annotated[
    PlayCard | Draw | Pass | CallBluff | ChooseColor,
    Field(discriminator="event_type"),
]


def build_move_from_payload(payload: dict) -> GameMove:
    """Build a typed move from a raw payload dict.

    Args:
        payload: Dict with 'event_type' and 'by' keys plus move-specific fields.

    Returns:
        The appropriate GameMove subtype.

    Raises:
        ValueError: If event_type is missing or unknown.
    """
    event_type = payload.get("event_type")

    if event_type == "card_played":
        return PlayCard.model_validate(payload)
    elif event_type == "draw":
        return Draw.model_validate(payload)
    elif event_type == "pass":
        return Pass.model_validate(payload)
    elif event_type == "bluff_called":
        return CallBluff.model_validate(payload)
    elif event_type == "color_chosen":
        return ChooseColor.model_validate(payload)
    else:
        raise ValueError(f"Unknown move type: {event_type}")
