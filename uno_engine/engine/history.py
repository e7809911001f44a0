"""Event log access and retention policy.

The log lives in ``GameState.events``. In full retention it is an unbounded
deque holding moves and administrative events. In bounded retention it is a
deque with a fixed ``maxlen`` that only ever receives moves, so the oldest
move falls off when a new one arrives.
"""

import logging

from uno_engine.schemas.events import AdminEvent
from uno_engine.schemas.game_state import GameState, RetentionMode
from uno_engine.schemas.moves import GameEvent, GameMove

logger = logging.getLogger(__name__)


def record_event(state: GameState, event: GameEvent) -> None:
    """Append an event to the log according to the game's retention mode."""
    if isinstance(event, AdminEvent) and state.retention_mode == RetentionMode.BOUNDED:
        logger.debug("Dropping administrative event in bounded mode: %s", event.event_type)
        return

    state.events.append(event)
    logger.debug("Recorded event: %s (log size=%d)", event.event_type, len(state.events))


def domain_moves(state: GameState) -> list[GameMove]:
    """Return the player moves in the log, oldest first."""
    return [event for event in state.events if isinstance(event, GameMove)]


def recent_moves(state: GameState, skip: int = 0) -> tuple[GameMove | None, GameMove | None]:
    """Return the last and second-last moves, ignoring the ``skip`` most recent.

    Either entry is ``None`` when the log does not reach back that far.
    """
    moves = domain_moves(state)
    if skip:
        moves = moves[:-skip]

    last = moves[-1] if moves else None
    second_last = moves[-2] if len(moves) >= 2 else None
    return last, second_last
