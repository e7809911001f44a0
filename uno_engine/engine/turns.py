"""Turn order arithmetic."""

import logging

from uno_engine.schemas.game_state import GameState

logger = logging.getLogger(__name__)


def active_player(state: GameState) -> str | None:
    """Return the player expected to move, or None if nobody holds a hand.

    Rotation follows the order hands were dealt in. Players who emptied their
    hand keep their seat in the rotation.
    """
    seats = list(state.hands)
    if not seats:
        return None
    return seats[abs(state.turn_counter) % len(seats)]


def advance_turn(state: GameState, multiplier: int = 1) -> None:
    """Move the turn counter in the current direction."""
    previous = state.turn_counter
    state.turn_counter += state.turn_direction * multiplier
    logger.debug(
        "Turn counter: %d -> %d (direction=%d, multiplier=%d)",
        previous,
        state.turn_counter,
        state.turn_direction,
        multiplier,
    )


def players_with_cards(state: GameState) -> list[str]:
    """Return, in seat order, the players still holding at least one card."""
    return [player_id for player_id, hand in state.hands.items() if hand]


def find_loser(state: GameState) -> str | None:
    """Return the last player holding cards once the game has ended."""
    if not state.ended:
        return None
    remaining = players_with_cards(state)
    return remaining[0] if remaining else None
