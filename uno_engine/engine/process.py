"""Move application.

apply_move() mutates the game state for a move that already passed
validate_move(), records the move and any administrative events, and returns
a MoveOutcome describing what happened.
"""

import logging

from uno_engine.schemas.cards import Card, Rank
from uno_engine.schemas.events import (
    BluffCallFailed,
    BluffCallSucceeded,
    GameEnded,
    PlayerWon,
)
from uno_engine.schemas.game_state import ENGINE_ID, GameState
from uno_engine.schemas.moves import (
    CallBluff,
    ChooseColor,
    Draw,
    GameMove,
    Pass,
    PlayCard,
)

from .deck import DeckManager
from .errors import ErrorCode, GameError
from .history import record_event, recent_moves
from .outcomes import (
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
from .turns import advance_turn, players_with_cards
from .validation import validate_move

logger = logging.getLogger(__name__)

BLUFF_PENALTY = 4
FAILED_BLUFF_PENALTY = 6
WILD_DRAW_FOUR_PENALTY = 4
DRAW_TWO_PENALTY = 2


def apply_move(state: GameState, move: GameMove, deck: DeckManager) -> MoveOutcome:
    """Apply a validated move and return its outcome.

    Args:
        state: Game state to mutate.
        move: A move that validate_move() accepted.
        deck: Card source for any draws the move causes.

    Returns:
        The outcome variant matching the move.
    """
    logger.debug("Applying move: type=%s, player=%s", move.event_type, move.by)

    if isinstance(move, PlayCard):
        return process_play(state, move)
    elif isinstance(move, Draw):
        return process_draw(state, move, deck)
    elif isinstance(move, Pass):
        return process_pass(state, move)
    elif isinstance(move, CallBluff):
        return process_bluff_call(state, move, deck)
    elif isinstance(move, ChooseColor):
        return process_color_choice(state, move)

    raise TypeError(f"Unhandled move type: {type(move).__name__}")


def process_play(state: GameState, move: PlayCard) -> MoveOutcome:
    """Move a card from the player's hand to the discard pile and resolve its effect.

    Handles:
    - Draw two stacking counter
    - Reverse flipping the direction (acting as a skip with two players)
    - Skip jumping over the next player
    - Wins, and the end of the game when one player is left holding cards
    """
    card = move.card
    hand = state.hands[move.by]
    index = next(
        (i for i, held in enumerate(hand) if held.rank == card.rank and held.color == card.color),
        None,
    )
    if index is None:
        logger.warning("Play rejected: PLAYER_LACKS_CARD, player=%s, card=%s", move.by, card)
        raise GameError(
            ErrorCode.PLAYER_LACKS_CARD,
            "You do not have this card",
            {"player_id": move.by, "card": card},
        )
    hand.pop(index)

    record_event(state, move)
    state.color_history.append(card)
    state.discard_pile.append(card)

    if card.rank == Rank.DRAW_TWO:
        state.stacked_draw_two_count += 1
        logger.debug("Draw two stack is now %d", state.stacked_draw_two_count)

    if card.rank == Rank.REVERSE:
        state.turn_direction *= -1
        logger.debug("Direction reversed: now %d", state.turn_direction)

    # Wilds keep the turn until the color is chosen
    if not card.is_color_switching:
        multiplier = 1
        if card.rank == Rank.SKIP:
            multiplier = 2
        elif card.rank == Rank.REVERSE and len(state.players) == 2:
            multiplier = 2
        advance_turn(state, multiplier)

    logger.info("Card played: player=%s, card=%s, cards_left=%d", move.by, card, len(hand))

    if hand:
        return CardPlayed(card=card, summary=f"Player {move.by} played {card}")

    record_event(state, PlayerWon(player_id=move.by))
    remaining = players_with_cards(state)

    if len(remaining) == 1:
        loser = remaining[0]
        state.ended = True
        record_event(state, GameEnded(loser=loser))
        logger.info("Game ended: winner=%s, loser=%s", move.by, loser)
        return GameFinished(
            won=move.by,
            lost=loser,
            summary=f"Player {move.by} won! Game ended.",
        )

    logger.info("Player won: player=%s, players_with_cards=%d", move.by, len(remaining))
    return PlayerFinished(won=move.by, summary=f"Player {move.by} won!")


def _draw_count(state: GameState) -> int:
    """How many cards the next draw takes, given the last two moves."""
    last, second_last = recent_moves(state)

    if isinstance(last, PlayCard) and last.card.rank == Rank.DRAW_TWO:
        if not state.stack_plus_twos_enabled:
            return DRAW_TWO_PENALTY
        # The opening discard can be a draw two nobody stacked
        return DRAW_TWO_PENALTY * max(state.stacked_draw_two_count, 1)

    if isinstance(second_last, PlayCard) and second_last.card.rank == Rank.WILD_DRAW_FOUR:
        return WILD_DRAW_FOUR_PENALTY

    return 1


def process_draw(state: GameState, move: Draw, deck: DeckManager) -> CardsDrawn:
    """Draw one card, or take the pending draw two / wild draw four penalty.

    Taking a penalty forfeits the rest of the turn.
    """
    count = _draw_count(state)
    deck.ensure_supply(state, count)
    cards = deck.draw_cards(state, count)
    state.hands[move.by].extend(cards)

    if count != 1:
        advance_turn(state)

    record_event(state, move)
    state.stacked_draw_two_count = 0

    logger.info("Cards drawn: player=%s, count=%d", move.by, count)
    return CardsDrawn(cards=cards, count=count, summary=f"Drawing {count} card(s)")


def process_pass(state: GameState, move: Pass) -> TurnPassed:
    record_event(state, move)
    advance_turn(state)
    logger.info("Turn passed: player=%s", move.by)
    return TurnPassed(summary="Turn passed")


def was_bluff(state: GameState, move: CallBluff, accused_hand: list[Card]) -> bool:
    """Check each non-wild card of the accused against the pre-challenge pile.

    The check runs on a copy with the bluff call already logged, so the
    bluff-site look-back lands on the moves before the wild draw four.
    """
    scratch = state.model_copy(deep=True)
    record_event(scratch, move)
    return any(
        validate_move(scratch, PlayCard(by=ENGINE_ID, card=card), bluff_site_check=True).is_valid
        for card in accused_hand
        if not card.is_color_switching
    )


def process_bluff_call(state: GameState, move: CallBluff, deck: DeckManager) -> MoveOutcome:
    """Resolve a challenge against the wild draw four played two moves ago.

    The accused was bluffing if any card they still hold, other than a wild,
    would have been a legal play right before the wild draw four.
    """
    _, challenged = recent_moves(state)
    accused = challenged.by
    accused_hand = state.hands[accused]

    bluffed = was_bluff(state, move, accused_hand)
    deck.ensure_supply(state, BLUFF_PENALTY if bluffed else FAILED_BLUFF_PENALTY)

    record_event(state, move)
    advance_turn(state)

    if bluffed:
        accused_hand.extend(deck.draw_cards(state, BLUFF_PENALTY))
        record_event(state, BluffCallSucceeded(by=move.by, of=accused))
        logger.info("Bluff call succeeded: by=%s, of=%s", move.by, accused)
        return BluffSucceeded(
            by=move.by,
            of=accused,
            summary=f"Bluff called! Giving {BLUFF_PENALTY} cards to the previous player.",
        )

    state.hands[move.by].extend(deck.draw_cards(state, FAILED_BLUFF_PENALTY))
    record_event(state, BluffCallFailed(by=move.by, of=accused))
    logger.info("Bluff call failed: by=%s, of=%s", move.by, accused)
    return BluffFailed(
        by=move.by,
        of=accused,
        summary=f"Bluff call failed! Giving {FAILED_BLUFF_PENALTY} cards to the current player.",
    )


def process_color_choice(state: GameState, move: ChooseColor) -> ColorChanged:
    state.color_history.append(move.color)
    record_event(state, move)
    advance_turn(state)
    logger.info("Color chosen: player=%s, color=%s", move.by, move.color.value)
    return ColorChanged(to=move.color, summary=f"Color changed to {move.color.value}")
