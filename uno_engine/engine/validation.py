"""Validation layer for player moves.

validate_move() checks a move against the current state and returns a
ValidationResult instead of raising, so the engine can:
- raise the carried GameError for moves submitted by a player
- filter candidate moves for valid_moves()
- test hypothetical plays when resolving a bluff call
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from uno_engine.schemas.cards import COLOR_SWITCHING_RANKS, Card, Color, Rank
from uno_engine.schemas.game_state import MIN_PLAYERS, GameState
from uno_engine.schemas.moves import (
    CallBluff,
    ChooseColor,
    Draw,
    GameMove,
    Pass,
    PlayCard,
)

from .errors import ErrorCode, GameError
from .history import recent_moves
from .turns import active_player, find_loser

logger = logging.getLogger(__name__)

# A bluff call is judged as of just before the wild draw four, color choice
# and bluff call that make up the challenge.
BLUFF_SITE_OFFSET = 3


@dataclass
class ValidationResult:
    """Result of validating a move before applying it."""

    is_valid: bool = True
    error: GameError | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(is_valid=True)

    @classmethod
    def failure(
        cls,
        code: ErrorCode,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> "ValidationResult":
        """Create a validation failure carrying the error to raise."""
        return cls(is_valid=False, error=GameError(code, message, data))

    @property
    def error_code(self) -> ErrorCode | None:
        return self.error.code if self.error else None


class ExpectedCard(BaseModel):
    """What the next play has to match. ``None`` on an axis means anything goes."""

    expected_rank: Rank | None = None
    expected_color: Color | None = None


def _played(move: GameMove | None, ranks: tuple[Rank, ...]) -> bool:
    """True if ``move`` is a card play of one of ``ranks``."""
    return isinstance(move, PlayCard) and move.card.rank in ranks


def expected_card(state: GameState, bluff_site_check: bool = False) -> ExpectedCard:
    """Compute the rank and color a play must match.

    The rank comes from the top of the discard pile, unless that card is a
    wild (or the pile was just recycled). The color comes from the color
    history: the most recent entry normally, or the entry from before the
    challenged wild draw four when checking a bluff.
    """
    top = state.top_discard()
    expected_rank = top.rank if top is not None and not top.is_color_switching else None

    offset = BLUFF_SITE_OFFSET if bluff_site_check else 1
    expected_color = None
    if len(state.color_history) >= offset:
        entry = state.color_history[-offset]
        expected_color = entry.color if isinstance(entry, Card) else entry

    return ExpectedCard(expected_rank=expected_rank, expected_color=expected_color)


def card_matches(card: Card, expected: ExpectedCard) -> bool:
    """Check if a card can go on a pile with the given expectation."""
    if card.rank == expected.expected_rank:
        return True
    if card.color is None or expected.expected_color is None:
        return True
    return card.color == expected.expected_color


def _describe_expectation(expected: ExpectedCard, found: Card) -> str:
    parts = []
    if expected.expected_rank is not None:
        parts.append(f"rank {expected.expected_rank.value}")
    if expected.expected_color is not None:
        parts.append(f"color {expected.expected_color.value}")
    return f"Must play card of {' or '.join(parts)}, found {found}"


def validate_move(
    state: GameState,
    move: GameMove,
    bluff_site_check: bool = False,
) -> ValidationResult:
    """Validate a move against the current state.

    Checks, in order:
    - At least two players are in the game (not for bluff-site checks)
    - It is the mover's turn (not for bluff-site checks)
    - The game has not ended
    - A pending color choice, draw two or wild draw four is answered
    - The rules specific to the move type

    Args:
        state: Current game state.
        move: The move to validate.
        bluff_site_check: Judge the move as if the last three moves (wild draw
            four, color choice, bluff call) had not happened yet.

    Returns:
        ValidationResult indicating success or failure with the error to raise.
    """
    move_type = move.event_type
    logger.debug(
        "Validating move: type=%s, player=%s, bluff_site_check=%s",
        move_type,
        move.by,
        bluff_site_check,
    )

    if not bluff_site_check:
        player_count = len(state.players)
        if player_count < MIN_PLAYERS:
            logger.warning("Validation failed: TOO_FEW_PLAYERS, count=%d", player_count)
            return ValidationResult.failure(
                ErrorCode.TOO_FEW_PLAYERS,
                "An active game must have at least two players",
                {"player_count": player_count},
            )

        current = active_player(state)
        if move.by != current:
            logger.warning(
                "Validation failed: NOT_PLAYERS_TURN, current=%s, attempted=%s",
                current,
                move.by,
            )
            return ValidationResult.failure(
                ErrorCode.NOT_PLAYERS_TURN,
                "It is not your turn",
                {"player_id": move.by},
            )

    if state.ended:
        loser = find_loser(state)
        logger.warning("Validation failed: GAME_ENDED, loser=%s", loser)
        return ValidationResult.failure(
            ErrorCode.GAME_ENDED,
            "This game has ended",
            {"loser": loser},
        )

    skip = BLUFF_SITE_OFFSET if bluff_site_check else 0
    last, second_last = recent_moves(state, skip=skip)

    if _played(last, COLOR_SWITCHING_RANKS) and not isinstance(move, ChooseColor):
        logger.warning("Validation failed: MUST_PICK_COLOR, attempted=%s", move_type)
        return ValidationResult.failure(
            ErrorCode.MUST_PICK_COLOR,
            "Must pick color after playing a color switching card",
            {"performed_move": move},
        )

    if (
        _played(last, (Rank.DRAW_TWO,))
        and not isinstance(move, Draw)
        and not _played(move, (Rank.DRAW_TWO,))
    ):
        logger.warning("Validation failed: MUST_DRAW_OR_PLAY_STACK, attempted=%s", move_type)
        return ValidationResult.failure(
            ErrorCode.MUST_DRAW_OR_PLAY_STACK,
            "Must draw or play another draw two on a draw two",
            {"performed_move": move},
        )

    if _played(second_last, (Rank.WILD_DRAW_FOUR,)) and not isinstance(
        move, (Draw, CallBluff)
    ):
        logger.warning("Validation failed: MUST_DRAW_OR_CALL_BLUFF, attempted=%s", move_type)
        return ValidationResult.failure(
            ErrorCode.MUST_DRAW_OR_CALL_BLUFF,
            "Must either draw or call bluff after a wild draw four",
            {"performed_move": move},
        )

    if isinstance(move, PlayCard):
        card = move.card
        hand = state.hands.get(move.by, [])
        if card.is_color_switching and len(hand) == 1:
            logger.warning(
                "Validation failed: MUST_NOT_PLAY_LAST_SWITCHING_CARD, card=%s", card
            )
            return ValidationResult.failure(
                ErrorCode.MUST_NOT_PLAY_LAST_SWITCHING_CARD,
                "Cannot play a wild or wild draw four as the last card",
                {"performed_move": move},
            )

        expected = expected_card(state, bluff_site_check)
        if not card_matches(card, expected):
            logger.warning(
                "Validation failed: MUST_PLAY_EXPECTED_CARD, expected=%s, found=%s",
                expected,
                card,
            )
            return ValidationResult.failure(
                ErrorCode.MUST_PLAY_EXPECTED_CARD,
                _describe_expectation(expected, card),
                {"expected": expected, "found": card},
            )

    elif isinstance(move, Draw):
        if isinstance(last, Draw) and last.by == move.by:
            logger.warning("Validation failed: MUST_NOT_DRAW_TWICE, player=%s", move.by)
            return ValidationResult.failure(
                ErrorCode.MUST_NOT_DRAW_TWICE,
                "Cannot draw twice in a row",
            )

    elif isinstance(move, Pass):
        if not (isinstance(last, Draw) and last.by == move.by):
            logger.warning("Validation failed: MUST_NOT_PASS_WITHOUT_DRAW, player=%s", move.by)
            return ValidationResult.failure(
                ErrorCode.MUST_NOT_PASS_WITHOUT_DRAW,
                "Cannot pass without drawing",
            )

    elif isinstance(move, CallBluff):
        # Always judged against the live log, whatever the offset
        _, challenged = recent_moves(state)
        if not _played(challenged, (Rank.WILD_DRAW_FOUR,)):
            logger.warning("Validation failed: CANNOT_CALL_BLUFF, player=%s", move.by)
            return ValidationResult.failure(
                ErrorCode.CANNOT_CALL_BLUFF,
                "You cannot call bluff when the last card is not a wild draw four "
                "or a color has not yet been chosen",
            )

    elif isinstance(move, ChooseColor):
        if not (_played(last, COLOR_SWITCHING_RANKS) and last.by == move.by):
            logger.warning("Validation failed: CANNOT_SWITCH_COLORS, player=%s", move.by)
            return ValidationResult.failure(
                ErrorCode.CANNOT_SWITCH_COLORS,
                "You can only switch colors if you played a wild or wild draw four "
                "in the last turn",
            )

    else:
        raise TypeError(f"Unhandled move type: {type(move).__name__}")

    logger.debug("Move validated successfully: type=%s", move_type)
    return ValidationResult.ok()
