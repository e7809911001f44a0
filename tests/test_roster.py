"""Tests for players joining and leaving."""

import pytest

from uno_engine.config import GameConfig
from uno_engine.engine import ErrorCode, GameError, UnoGame
from uno_engine.schemas import ENGINE_ID, MAX_PLAYERS

from .conftest import (
    GREEN_EIGHT,
    PLAYER_1_ID,
    PLAYER_2_ID,
    PLAYER_3_ID,
    RED_FIVE,
    RED_ONE,
    make_game,
    make_seeded_game,
)


@pytest.fixture
def empty_game() -> UnoGame:
    return UnoGame(GameConfig(initial_seed="roster"))


class TestJoin:
    """Test seating players."""

    def test_join_records_players_in_order(self, empty_game):
        empty_game.join(PLAYER_1_ID, PLAYER_2_ID)

        state = empty_game.state
        assert state.players == [PLAYER_1_ID, PLAYER_2_ID]
        assert list(state.hands) == [PLAYER_1_ID, PLAYER_2_ID]
        assert [e.player_id for e in empty_game.events_of_type("player_joined")] == [
            PLAYER_1_ID,
            PLAYER_2_ID,
        ]

    def test_join_up_to_ten_players(self, empty_game):
        ids = [f"player-{i}" for i in range(MAX_PLAYERS)]

        empty_game.join(*ids)

        assert empty_game.state.players == ids

    def test_eleventh_player_rejected(self, empty_game):
        empty_game.join(*[f"player-{i}" for i in range(MAX_PLAYERS)])

        with pytest.raises(GameError) as exc_info:
            empty_game.join("late")

        assert exc_info.value.code == ErrorCode.TOO_MANY_PLAYERS
        assert exc_info.value.data == {"player_count": MAX_PLAYERS}

    def test_player_cap_checked_before_ids(self, empty_game):
        empty_game.join(*[f"player-{i}" for i in range(MAX_PLAYERS)])

        with pytest.raises(GameError) as exc_info:
            empty_game.join(ENGINE_ID)

        assert exc_info.value.code == ErrorCode.TOO_MANY_PLAYERS

    @pytest.mark.parametrize("bad_id", [ENGINE_ID, "", 7], ids=["engine", "empty", "not_a_string"])
    def test_invalid_ids_rejected(self, empty_game, bad_id):
        with pytest.raises(GameError) as exc_info:
            empty_game.join(bad_id)

        assert exc_info.value.code == ErrorCode.INVALID_ID

    def test_duplicate_id_rejected(self, empty_game):
        empty_game.join(PLAYER_1_ID)

        with pytest.raises(GameError) as exc_info:
            empty_game.join(PLAYER_1_ID)

        assert exc_info.value.code == ErrorCode.INVALID_ID

    def test_rejected_join_deals_nobody(self, empty_game):
        before = empty_game.state.model_dump()

        with pytest.raises(GameError):
            empty_game.join(PLAYER_1_ID, PLAYER_1_ID)

        assert empty_game.state.model_dump() == before

    def test_join_mid_game(self):
        game = make_seeded_game()
        game.draw(PLAYER_1_ID)

        game.join(PLAYER_3_ID)

        assert len(game.hand_of(PLAYER_3_ID)) == 7


class TestLeave:
    """Test removing players."""

    def test_leave_removes_player_and_hand(self):
        game = make_seeded_game(player_count=3)

        game.leave(PLAYER_2_ID)

        state = game.state
        assert state.players == [PLAYER_1_ID, PLAYER_3_ID]
        assert PLAYER_2_ID not in state.hands
        assert game.events_of_type("player_left")[0].player_id == PLAYER_2_ID

    def test_leave_unknown_player(self):
        game = make_seeded_game()

        with pytest.raises(GameError) as exc_info:
            game.leave("zed")

        assert exc_info.value.code == ErrorCode.PLAYER_NOT_IN_GAME
        assert exc_info.value.message == "This player is not in the game"

    def test_leave_twice_in_one_call(self):
        game = make_seeded_game()

        with pytest.raises(GameError):
            game.leave(PLAYER_1_ID, PLAYER_1_ID)

        assert game.state.players == [PLAYER_1_ID, PLAYER_2_ID]

    def test_game_needs_two_players_after_leave(self):
        game = make_seeded_game()
        game.leave(PLAYER_1_ID)

        with pytest.raises(GameError) as exc_info:
            game.draw(PLAYER_2_ID)

        assert exc_info.value.code == ErrorCode.TOO_FEW_PLAYERS

    def test_player_can_rejoin(self):
        game = make_seeded_game()
        game.leave(PLAYER_1_ID)

        game.join(PLAYER_1_ID)

        assert game.state.players == [PLAYER_2_ID, PLAYER_1_ID]
        assert len(game.hand_of(PLAYER_1_ID)) == 7


class TestRosterAfterGameEnds:
    """Test that the roster is frozen once the game has ended."""

    def test_loser_cannot_leave(self):
        game = make_game(RED_ONE, [RED_FIVE], [GREEN_EIGHT])
        game.play(PLAYER_1_ID, RED_FIVE)
        before = game.state.model_dump()

        with pytest.raises(GameError) as exc_info:
            game.leave(PLAYER_2_ID)

        assert exc_info.value.code == ErrorCode.GAME_ENDED
        assert exc_info.value.data == {"loser": PLAYER_2_ID}
        assert game.has_ended().loser == PLAYER_2_ID
        assert game.state.model_dump() == before

    def test_nobody_can_join(self):
        game = make_game(RED_ONE, [RED_FIVE], [GREEN_EIGHT])
        game.play(PLAYER_1_ID, RED_FIVE)

        with pytest.raises(GameError) as exc_info:
            game.join(PLAYER_3_ID)

        assert exc_info.value.code == ErrorCode.GAME_ENDED
        assert exc_info.value.data == {"loser": PLAYER_2_ID}
        assert game.state.players == [PLAYER_1_ID, PLAYER_2_ID]

    def test_moves_still_report_game_ended(self):
        game = make_game(RED_ONE, [RED_FIVE], [GREEN_EIGHT])
        game.play(PLAYER_1_ID, RED_FIVE)

        with pytest.raises(GameError):
            game.leave(PLAYER_2_ID)
        with pytest.raises(GameError) as exc_info:
            game.draw(PLAYER_2_ID)

        assert exc_info.value.code == ErrorCode.GAME_ENDED
        assert exc_info.value.data == {"loser": PLAYER_2_ID}
