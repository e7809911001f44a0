"""Engine facade - the public entry point for running a game.

UnoGame owns a single GameState and is the only thing that mutates it:
- Roster changes go through join() / leave()
- Moves go through submit_move(), which validates, applies and logs them
- Readers get deep copies via ``state``, hand_of() and get_pile()
"""

import logging
from typing import Annotated

from pydantic import StringConstraints, TypeAdapter, ValidationError

from uno_engine.config import GameConfig
from uno_engine.schemas.cards import Card, Color
from uno_engine.schemas.events import GameEnded, GameOver, PlayerJoined, PlayerLeft
from uno_engine.schemas.game_state import (
    ENGINE_ID,
    HAND_SIZE,
    MAX_PLAYERS,
    GameState,
    RetentionMode,
)
from uno_engine.schemas.moves import (
    CallBluff,
    ChooseColor,
    Draw,
    GameEvent,
    GameMove,
    Pass,
    PlayCard,
)

from .deck import DeckManager
from .errors import ErrorCode, EventIndexError, GameError, RetentionModeError
from .history import record_event, recent_moves
from .outcomes import MoveOutcome
from .process import apply_move
from .rng import derive_seed
from .turns import active_player, find_loser
from .validation import ExpectedCard, ValidationResult, expected_card, validate_move

logger = logging.getLogger(__name__)

_player_id_adapter = TypeAdapter(Annotated[str, StringConstraints(min_length=1)])


def _is_valid_id(player_id: object) -> bool:
    try:
        _player_id_adapter.validate_python(player_id, strict=True)
    except ValidationError:
        return False
    return True


class UnoGame:
    """A single game of UNO.

    Usage:
        game = UnoGame(GameConfig(initial_seed="table-7"))
        game.join("alice", "bob")

        outcome = game.play("alice", Card(rank=Rank.FIVE, color=Color.RED))
        print(outcome.summary)

    Illegal moves raise GameError with a code and data describing why.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        snapshot: str | None = None,
        deck: DeckManager | None = None,
    ):
        if config is not None and snapshot is not None:
            raise ValueError("Pass either a config or a snapshot, not both")

        self._deck = deck or DeckManager()

        if snapshot is not None:
            self._state = GameState.model_validate_json(snapshot)
            logger.info(
                "Game restored from snapshot: players=%d, events=%d",
                len(self._state.players),
                len(self._state.events),
            )
            return

        config = config or GameConfig.from_settings()
        seed = derive_seed(config.initial_seed)
        self._state = GameState(
            seed=seed,
            initial_seed=seed,
            stack_plus_twos_enabled=config.stack_plus_twos,
            retention_mode=config.retention_mode,
        )
        self._deck.initialize(self._state)
        logger.info(
            "Game created: seed=%d, stack_plus_twos=%s, retention_mode=%s",
            seed,
            config.stack_plus_twos,
            config.retention_mode.value,
        )

    # --- State access ---

    @property
    def state(self) -> GameState:
        """A deep copy of the game state; changing it has no effect on the game."""
        return self._state.model_copy(deep=True)

    def serialize(self) -> str:
        """Snapshot the whole state as JSON, accepted by ``UnoGame(snapshot=...)``."""
        return self._state.model_dump_json()

    def clone(self) -> "UnoGame":
        """Create an independent game with the exact same state."""
        return UnoGame(snapshot=self.serialize())

    def _hand(self, player_id: str) -> list[Card]:
        hand = self._state.hands.get(player_id)
        if hand is None:
            logger.warning("Player not in game: %s", player_id)
            raise GameError(
                ErrorCode.PLAYER_NOT_IN_GAME,
                "This player is not in the game",
                {"player_id": player_id},
            )
        return hand

    def hand_of(self, player_id: str) -> list[Card]:
        """Return a copy of a player's hand."""
        return list(self._hand(player_id))

    def get_pile(self) -> list[Card]:
        """Return a copy of the discard pile, bottom card first."""
        return list(self._state.discard_pile)

    def events_of_type(self, event_type: str) -> list[GameEvent]:
        """Return copies of the logged events with the given ``event_type``."""
        return [
            event.model_copy(deep=True)
            for event in self._state.events
            if event.event_type == event_type
        ]

    def active_player(self) -> str | None:
        """The player expected to make the next move."""
        return active_player(self._state)

    def expected_card(self, bluff_site_check: bool = False) -> ExpectedCard:
        """The rank and color the next play must match (``None`` means any)."""
        return expected_card(self._state, bluff_site_check)

    def has_ended(self) -> GameOver | None:
        """Return the loser once only one player holds cards, otherwise None."""
        loser = find_loser(self._state)
        if loser is None:
            return None
        return GameOver(loser=loser)

    # --- Roster ---

    def _ensure_not_ended(self, action: str) -> None:
        if not self._state.ended:
            return
        loser = find_loser(self._state)
        logger.warning("%s rejected: GAME_ENDED, loser=%s", action, loser)
        raise GameError(ErrorCode.GAME_ENDED, "This game has ended", {"loser": loser})

    def join(self, *player_ids: str) -> None:
        """Seat new players and deal each of them a hand.

        Every ID is checked before anyone is dealt in, so a rejected call
        leaves the game untouched. The roster is frozen once the game ends.
        """
        self._ensure_not_ended("Join")

        player_count = len(self._state.players)
        if player_count + len(player_ids) > MAX_PLAYERS:
            logger.warning(
                "Join rejected: TOO_MANY_PLAYERS, current=%d, joining=%d",
                player_count,
                len(player_ids),
            )
            raise GameError(
                ErrorCode.TOO_MANY_PLAYERS,
                f"At most {MAX_PLAYERS} players can join a game",
                {"player_count": player_count},
            )

        seated = set(self._state.players)
        for player_id in player_ids:
            if player_id == ENGINE_ID or not _is_valid_id(player_id) or player_id in seated:
                logger.warning("Join rejected: INVALID_ID, id=%r", player_id)
                raise GameError(
                    ErrorCode.INVALID_ID,
                    f"{player_id} is an invalid id",
                    {"id": player_id},
                )
            seated.add(player_id)

        self._deck.ensure_supply(self._state, HAND_SIZE * len(player_ids))

        for player_id in player_ids:
            hand = self._deck.draw_cards(self._state, HAND_SIZE)
            self._state.players.append(player_id)
            self._state.hands[player_id] = hand
            record_event(self._state, PlayerJoined(player_id=player_id))
            logger.info("Player joined: %s (players=%d)", player_id, len(self._state.players))

    def leave(self, *player_ids: str) -> None:
        """Remove players and their hands from the game."""
        self._ensure_not_ended("Leave")

        remaining = list(self._state.players)
        for player_id in player_ids:
            if player_id not in remaining:
                logger.warning("Leave rejected: PLAYER_NOT_IN_GAME, id=%s", player_id)
                raise GameError(
                    ErrorCode.PLAYER_NOT_IN_GAME,
                    "This player is not in the game",
                    {"player_id": player_id},
                )
            remaining.remove(player_id)

        for player_id in player_ids:
            self._state.players.remove(player_id)
            self._state.hands.pop(player_id, None)
            record_event(self._state, PlayerLeft(player_id=player_id))
            logger.info("Player left: %s (players=%d)", player_id, len(self._state.players))

    # --- Moves ---

    def check_move(self, move: GameMove, bluff_site_check: bool = False) -> ValidationResult:
        """Validate a move without applying it."""
        return validate_move(self._state, move, bluff_site_check)

    def submit_move(self, move: GameMove) -> MoveOutcome:
        """Validate and apply a move.

        This is the generic entry point; play(), draw(), pass_turn(),
        call_bluff() and choose_color() build the move and call it.

        Raises:
            GameError: If the mover is unknown or the move breaks a rule.
        """
        move_type = move.event_type
        logger.info("Processing move: type=%s, player=%s", move_type, move.by)

        if not _is_valid_id(move.by):
            logger.warning("Move rejected: INVALID_ID, id=%r", move.by)
            raise GameError(ErrorCode.INVALID_ID, "Invalid player ID", {"id": move.by})

        hand = self._hand(move.by)

        validation = validate_move(self._state, move)
        if not validation.is_valid:
            logger.warning(
                "Move validation failed: code=%s, message=%s, player=%s, move=%s",
                validation.error.code.value,
                validation.error.message,
                move.by,
                move_type,
            )
            raise validation.error

        if isinstance(move, PlayCard) and not any(
            held.rank == move.card.rank and held.color == move.card.color for held in hand
        ):
            logger.warning("Move rejected: PLAYER_LACKS_CARD, player=%s, card=%s", move.by, move.card)
            raise GameError(
                ErrorCode.PLAYER_LACKS_CARD,
                "You do not have this card",
                {"player_id": move.by, "card": move.card},
            )

        if isinstance(move, CallBluff):
            _, challenged = recent_moves(self._state)
            # The accused may have left since playing the wild draw four
            self._hand(challenged.by)

        outcome = apply_move(self._state, move, self._deck)
        logger.info(
            "Move processed successfully: type=%s, player=%s, outcome=%s",
            move_type,
            move.by,
            outcome.outcome_type,
        )
        return outcome

    def play(self, player_id: str, card: Card) -> MoveOutcome:
        """Play a card from the player's hand."""
        return self.submit_move(PlayCard(by=player_id, card=card))

    def draw(self, player_id: str) -> MoveOutcome:
        """Draw a card, or take the pending draw penalty."""
        return self.submit_move(Draw(by=player_id))

    def pass_turn(self, player_id: str) -> MoveOutcome:
        """End the turn after drawing."""
        return self.submit_move(Pass(by=player_id))

    def call_bluff(self, player_id: str) -> MoveOutcome:
        """Challenge the wild draw four just played against the player."""
        return self.submit_move(CallBluff(by=player_id))

    def choose_color(self, player_id: str, color: Color) -> MoveOutcome:
        """Name the color after playing a wild or wild draw four."""
        return self.submit_move(ChooseColor(by=player_id, color=color))

    def valid_moves(self, player_id: str) -> list[GameMove]:
        """List the moves the player could legally make right now.

        Only one ChooseColor is returned: if one color may be chosen, any may.
        """
        candidates: list[GameMove] = [
            Draw(by=player_id),
            CallBluff(by=player_id),
            Pass(by=player_id),
            ChooseColor(by=player_id, color=Color.RED),
            *(PlayCard(by=player_id, card=card) for card in self._hand(player_id)),
        ]
        return [move for move in candidates if validate_move(self._state, move).is_valid]

    # --- Replay ---

    def jump_to_index(self, index: int) -> list[GameEvent]:
        """Rewind the game so the event at ``index`` is the last one logged.

        The state is rebuilt from scratch: a fresh game with the same initial
        seed replays the roster changes and player moves up to ``index``.
        Negative indexes count from the end.

        Returns:
            The events that were discarded.

        Raises:
            RetentionModeError: The game keeps a bounded log.
            EventIndexError: ``index`` is outside the log.
        """
        if self._state.retention_mode != RetentionMode.FULL:
            raise RetentionModeError("Cannot jump to an event index in bounded retention mode")

        events = list(self._state.events)
        length = len(events)
        if index < -length or index >= length:
            raise EventIndexError(f"Invalid event index {index} for a log of {length} events")
        if index < 0:
            index += length

        kept, discarded = events[: index + 1], events[index + 1 :]
        logger.info("Jumping to event %d: replaying %d events, discarding %d", index, len(kept), len(discarded))

        replay = UnoGame(
            GameConfig(
                stack_plus_twos=self._state.stack_plus_twos_enabled,
                initial_seed=self._state.initial_seed,
                retention_mode=RetentionMode.FULL,
            )
        )
        for event in kept:
            if isinstance(event, GameEnded):
                break
            if isinstance(event, PlayerJoined):
                replay.join(event.player_id)
            elif isinstance(event, PlayerLeft):
                replay.leave(event.player_id)
            elif isinstance(event, GameMove) and event.by != ENGINE_ID:
                replay.submit_move(event)

        self._state = replay._state
        return discarded
