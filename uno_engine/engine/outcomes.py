"""Move outcome types - what a successfully applied move did.

Every outcome carries a human-readable ``summary`` alongside its data, so a
front end can show it directly.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from uno_engine.schemas.cards import Card, Color


class MoveOutcome(BaseModel):
    """Base class for all move outcomes."""

    outcome_type: str
    summary: str


class CardPlayed(MoveOutcome):
    outcome_type: Literal["card_played"] = "card_played"
    card: Card


class PlayerFinished(MoveOutcome):
    """The mover emptied their hand; the game continues for the others."""

    outcome_type: Literal["player_won"] = "player_won"
    won: str


class GameFinished(MoveOutcome):
    """The mover emptied their hand and only one player is left holding cards."""

    outcome_type: Literal["player_won_game_ended"] = "player_won_game_ended"
    won: str
    lost: str


class CardsDrawn(MoveOutcome):
    outcome_type: Literal["cards_drawn"] = "cards_drawn"
    cards: list[Card]
    count: int


class TurnPassed(MoveOutcome):
    outcome_type: Literal["turn_passed"] = "turn_passed"


class BluffSucceeded(MoveOutcome):
    outcome_type: Literal["bluff_call_succeeded"] = "bluff_call_succeeded"
    by: str
    of: str


class BluffFailed(MoveOutcome):
    outcome_type: Literal["bluff_call_failed"] = "bluff_call_failed"
    by: str
    of: str


class ColorChanged(MoveOutcome):
    outcome_type: Literal["color_changed"] = "color_changed"
    to: Color


AnyMoveOutcome = Annotated[
    CardPlayed
    | PlayerFinished
    | GameFinished
    | CardsDrawn
    | TurnPassed
    | BluffSucceeded
    | BluffFailed
    | ColorChanged,
    Field(discriminator="outcome_type"),
]
