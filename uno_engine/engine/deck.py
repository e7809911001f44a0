"""Draw pile and discard pile management."""

import logging
import math

from uno_engine.schemas.cards import Card, build_deck
from uno_engine.schemas.events import PileRecycled, SeedChanged
from uno_engine.schemas.game_state import ENGINE_ID, GameState
from uno_engine.schemas.moves import PlayCard

from .errors import ErrorCode, GameError
from .history import record_event
from .rng import next_random

logger = logging.getLogger(__name__)


class DeckManager:
    """Owns every card movement between the draw pile and the discard pile.

    Stateless apart from the ``GameState`` it is handed, so one instance can
    serve an engine across rewinds. Subclasses may override ``draw_top`` and
    ``deal_opening_card`` to feed the game a fixed card sequence.
    """

    def shuffle(self, state: GameState, pile: list[Card]) -> None:
        """Fisher-Yates shuffle ``pile`` in place using the game's RNG."""
        for i in range(len(pile) - 1, 0, -1):
            j = math.floor(next_random(state) * (i + 1))
            pile[i], pile[j] = pile[j], pile[i]

        logger.debug("Shuffled %d cards, seed is now %d", len(pile), state.seed)
        record_event(state, SeedChanged(new_seed=state.seed))

    def draw_top(self, state: GameState) -> Card:
        """Take the top card of the draw pile, recycling the discard pile if needed.

        Raises:
            GameError: DECK_PILE_EXHAUSTED if both piles are empty.
        """
        if not state.draw_pile:
            if not state.discard_pile:
                logger.warning("Draw failed: draw pile and discard pile are both empty")
                raise GameError(
                    ErrorCode.DECK_PILE_EXHAUSTED,
                    "Both the draw pile and the discard pile are exhausted, cannot draw",
                )

            logger.info("Draw pile empty, recycling %d discarded cards", len(state.discard_pile))
            state.draw_pile = state.discard_pile
            state.discard_pile = []
            self.shuffle(state, state.draw_pile)
            record_event(state, PileRecycled())

        return state.draw_pile.pop(0)

    def ensure_supply(self, state: GameState, count: int) -> None:
        """Fail before any card moves if fewer than ``count`` cards can be drawn.

        Raises:
            GameError: DECK_PILE_EXHAUSTED if both piles together are too small.
        """
        available = len(state.draw_pile) + len(state.discard_pile)
        if available < count:
            logger.warning("Draw refused: need %d cards, %d available", count, available)
            raise GameError(
                ErrorCode.DECK_PILE_EXHAUSTED,
                "Both the draw pile and the discard pile are exhausted, cannot draw",
            )

    def draw_cards(self, state: GameState, count: int) -> list[Card]:
        """Draw ``count`` cards one at a time."""
        return [self.draw_top(state) for _ in range(count)]

    def deal_opening_card(self, state: GameState) -> Card:
        """Remove the first card that does not switch colors from the draw pile."""
        index = next(
            i for i, card in enumerate(state.draw_pile) if not card.is_color_switching
        )
        return state.draw_pile.pop(index)

    def initialize(self, state: GameState) -> None:
        """Build and shuffle a fresh deck, then turn over the opening discard.

        The opening card is logged as a play by the engine, so the first player
        always has a concrete rank and color to match.
        """
        state.draw_pile = build_deck()
        self.shuffle(state, state.draw_pile)

        opening = self.deal_opening_card(state)
        state.discard_pile = [opening]
        state.color_history.clear()
        state.color_history.append(opening)
        record_event(state, PlayCard(by=ENGINE_ID, card=opening))

        logger.info("Deck initialized: opening card=%s, draw pile=%d", opening, len(state.draw_pile))
