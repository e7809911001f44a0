"""Tests for calling a wild draw four bluff.

A wild draw four is a bluff when its player held another card, other than a
wild, that matched the color in play just before it.
"""

import pytest

from uno_engine.engine import ErrorCode, GameError
from uno_engine.schemas import Color

from .conftest import (
    BLUE_SEVEN,
    BLUE_TWO,
    GREEN_EIGHT,
    GREEN_THREE,
    PLAYER_1_ID,
    PLAYER_2_ID,
    PLAYER_3_ID,
    RED_FIVE,
    RED_ONE,
    WILD,
    WILD_DRAW_FOUR,
    YELLOW_NINE,
    make_game,
)


def play_wild_draw_four(game, color: Color = Color.BLUE) -> None:
    game.play(PLAYER_1_ID, WILD_DRAW_FOUR)
    game.choose_color(PLAYER_1_ID, color)


class TestBluffCall:
    """Test resolving bluff calls."""

    def test_bluff_call_succeeds(self, retention_mode):
        """The accused held a red card while red was in play."""
        game = make_game(
            RED_ONE,
            [WILD_DRAW_FOUR, RED_FIVE, GREEN_THREE],
            [GREEN_EIGHT, BLUE_TWO],
            retention_mode=retention_mode,
        )
        play_wild_draw_four(game)

        outcome = game.call_bluff(PLAYER_2_ID)

        assert outcome.outcome_type == "bluff_call_succeeded"
        assert outcome.by == PLAYER_2_ID
        assert outcome.of == PLAYER_1_ID
        assert len(game.hand_of(PLAYER_1_ID)) == 6
        assert len(game.hand_of(PLAYER_2_ID)) == 2
        assert game.active_player() == PLAYER_1_ID

    def test_bluff_call_fails(self):
        game = make_game(
            RED_ONE,
            [WILD_DRAW_FOUR, GREEN_THREE, BLUE_SEVEN],
            [GREEN_EIGHT, BLUE_TWO],
        )
        play_wild_draw_four(game)

        outcome = game.call_bluff(PLAYER_2_ID)

        assert outcome.outcome_type == "bluff_call_failed"
        assert outcome.by == PLAYER_2_ID
        assert outcome.of == PLAYER_1_ID
        assert len(game.hand_of(PLAYER_1_ID)) == 2
        assert len(game.hand_of(PLAYER_2_ID)) == 8

    def test_held_wild_does_not_count_as_bluff(self):
        game = make_game(
            RED_ONE,
            [WILD_DRAW_FOUR, WILD, GREEN_THREE],
            [GREEN_EIGHT, BLUE_TWO],
        )
        play_wild_draw_four(game)

        outcome = game.call_bluff(PLAYER_2_ID)

        assert outcome.outcome_type == "bluff_call_failed"

    def test_judged_against_color_before_wild_draw_four(self):
        """A color chosen earlier is the one the accused had to match."""
        game = make_game(
            RED_ONE,
            [WILD, WILD_DRAW_FOUR, RED_FIVE, YELLOW_NINE],
            [GREEN_EIGHT, BLUE_TWO],
        )
        game.play(PLAYER_1_ID, WILD)
        game.choose_color(PLAYER_1_ID, Color.GREEN)
        game.play(PLAYER_2_ID, GREEN_EIGHT)
        play_wild_draw_four(game)

        outcome = game.call_bluff(PLAYER_2_ID)

        assert outcome.outcome_type == "bluff_call_failed"

    def test_outcome_events_recorded(self):
        game = make_game(
            RED_ONE,
            [WILD_DRAW_FOUR, RED_FIVE, GREEN_THREE],
            [GREEN_EIGHT, BLUE_TWO],
        )
        play_wild_draw_four(game)
        game.call_bluff(PLAYER_2_ID)

        events = game.events_of_type("bluff_call_succeeded")
        assert len(events) == 1
        assert events[0].by == PLAYER_2_ID
        assert events[0].of == PLAYER_1_ID
        assert len(game.events_of_type("bluff_called")) == 1

    def test_cannot_call_bluff_before_color_chosen(self):
        game = make_game(
            RED_ONE,
            [WILD_DRAW_FOUR, RED_FIVE],
            [GREEN_EIGHT, BLUE_TWO],
        )
        game.play(PLAYER_1_ID, WILD_DRAW_FOUR)

        with pytest.raises(GameError) as exc_info:
            game.call_bluff(PLAYER_2_ID)

        assert exc_info.value.code == ErrorCode.NOT_PLAYERS_TURN

    def test_accused_must_still_be_in_game(self):
        game = make_game(
            RED_ONE,
            [WILD_DRAW_FOUR, RED_FIVE],
            [GREEN_EIGHT, BLUE_TWO],
            [GREEN_THREE, YELLOW_NINE],
        )
        play_wild_draw_four(game)
        game.leave(PLAYER_1_ID)
        before = game.state.model_dump()

        with pytest.raises(GameError) as exc_info:
            game.call_bluff(PLAYER_3_ID)

        assert exc_info.value.code == ErrorCode.PLAYER_NOT_IN_GAME
        assert exc_info.value.data == {"player_id": PLAYER_1_ID}
        assert game.state.model_dump() == before
