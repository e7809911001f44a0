"""Shared fixtures for UNO engine tests."""

import pytest

from uno_engine.config import GameConfig
from uno_engine.engine import DeckManager, UnoGame
from uno_engine.schemas import (
    Card,
    Color,
    GameMove,
    GameState,
    PlayCard,
    Rank,
    RetentionMode,
)

# Fixed player IDs for deterministic testing
PLAYER_1_ID = "alice"
PLAYER_2_ID = "bob"
PLAYER_3_ID = "carol"
PLAYER_4_ID = "dave"
PLAYER_IDS = [PLAYER_1_ID, PLAYER_2_ID, PLAYER_3_ID, PLAYER_4_ID]

TEST_SEED = "uno-test-seed"

# Commonly used cards
RED_ONE = Card(rank=Rank.ONE, color=Color.RED)
RED_TWO = Card(rank=Rank.TWO, color=Color.RED)
RED_FIVE = Card(rank=Rank.FIVE, color=Color.RED)
RED_SKIP = Card(rank=Rank.SKIP, color=Color.RED)
RED_REVERSE = Card(rank=Rank.REVERSE, color=Color.RED)
RED_DRAW_TWO = Card(rank=Rank.DRAW_TWO, color=Color.RED)
BLUE_ONE = Card(rank=Rank.ONE, color=Color.BLUE)
BLUE_TWO = Card(rank=Rank.TWO, color=Color.BLUE)
BLUE_SEVEN = Card(rank=Rank.SEVEN, color=Color.BLUE)
BLUE_DRAW_TWO = Card(rank=Rank.DRAW_TWO, color=Color.BLUE)
GREEN_THREE = Card(rank=Rank.THREE, color=Color.GREEN)
GREEN_EIGHT = Card(rank=Rank.EIGHT, color=Color.GREEN)
YELLOW_NINE = Card(rank=Rank.NINE, color=Color.YELLOW)
WILD = Card(rank=Rank.WILD)
WILD_DRAW_FOUR = Card(rank=Rank.WILD_DRAW_FOUR)


def card(rank: Rank, color: Color | None = None) -> Card:
    """Helper to create a card."""
    return Card(rank=rank, color=color)


class RiggedDeckManager(DeckManager):
    """Deck manager that hands out chosen cards instead of shuffled ones.

    The real deck is still built and shuffled, and every draw still takes a
    card off it, so pile sizes and recycling behave as in a normal game.
    """

    def __init__(self, opening: Card):
        self.opening = opening
        self.upcoming: list[Card] = []

    def deal_opening_card(self, state: GameState) -> Card:
        super().deal_opening_card(state)
        return self.opening

    def draw_top(self, state: GameState) -> Card:
        drawn = super().draw_top(state)
        if self.upcoming:
            return self.upcoming.pop(0)
        return drawn


def make_game(
    opening: Card,
    *hands: list[Card],
    draws: list[Card] | None = None,
    stack_plus_twos: bool = True,
    retention_mode: RetentionMode = RetentionMode.FULL,
) -> UnoGame:
    """Create a started game with a fixed opening card and fixed hands.

    One player joins per hand, in PLAYER_IDS order. ``draws`` are the cards
    the next draws return, in order.
    """
    deck = RiggedDeckManager(opening)
    game = UnoGame(
        GameConfig(
            stack_plus_twos=stack_plus_twos,
            initial_seed=TEST_SEED,
            retention_mode=retention_mode,
        ),
        deck=deck,
    )
    game.join(*PLAYER_IDS[: len(hands)])
    for player_id, hand in zip(PLAYER_IDS, hands):
        game._state.hands[player_id] = list(hand)
    deck.upcoming.extend(draws or [])
    return game


def make_seeded_game(seed: str | int = TEST_SEED, player_count: int = 2, **config) -> UnoGame:
    """Create a shuffled game with a fixed seed and joined players."""
    game = UnoGame(GameConfig(initial_seed=seed, **config))
    game.join(*PLAYER_IDS[:player_count])
    return game


def play_greedily(game: UnoGame, steps: int) -> list[GameMove]:
    """Make up to ``steps`` legal moves, preferring card plays.

    The choice only depends on the game state, so two games in the same
    state make the same moves.
    """
    made: list[GameMove] = []
    for _ in range(steps):
        player_id = game.active_player()
        moves = game.valid_moves(player_id) if player_id is not None else []
        if not moves:
            break
        plays = [move for move in moves if isinstance(move, PlayCard)]
        move = plays[0] if plays else moves[-1]
        game.submit_move(move)
        made.append(move)
    return made


def total_cards(state: GameState) -> int:
    """Count cards across hands, draw pile and discard pile."""
    in_hands = sum(len(hand) for hand in state.hands.values())
    return in_hands + len(state.draw_pile) + len(state.discard_pile)


@pytest.fixture(params=[RetentionMode.FULL, RetentionMode.BOUNDED], ids=["full", "bounded"])
def retention_mode(request) -> RetentionMode:
    """Run a test under both retention modes."""
    return request.param


@pytest.fixture
def seeded_game() -> UnoGame:
    """Two-player shuffled game with a fixed seed."""
    return make_seeded_game()
