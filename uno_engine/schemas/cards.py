from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"


class Rank(str, Enum):
    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    THREE = "three"
    FOUR = "four"
    FIVE = "five"
    SIX = "six"
    SEVEN = "seven"
    EIGHT = "eight"
    NINE = "nine"
    # Non color-switching specials
    DRAW_TWO = "draw_two"
    REVERSE = "reverse"
    SKIP = "skip"
    # Color-switching specials
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"


NUMBER_RANKS = (
    Rank.ZERO,
    Rank.ONE,
    Rank.TWO,
    Rank.THREE,
    Rank.FOUR,
    Rank.FIVE,
    Rank.SIX,
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.NINE,
)
ACTION_RANKS = (Rank.DRAW_TWO, Rank.REVERSE, Rank.SKIP)
COLOR_SWITCHING_RANKS = (Rank.WILD, Rank.WILD_DRAW_FOUR)


class Card(BaseModel):
    """A single card.

    Number and action cards carry a color. Wild and wild draw four never do:
    the color chosen after playing one is tracked in the game's color history.
    """

    model_config = ConfigDict(frozen=True)

    rank: Rank
    color: Color | None = None

    @model_validator(mode="after")
    def check_color_matches_rank(self) -> "Card":
        if self.rank in COLOR_SWITCHING_RANKS and self.color is not None:
            raise ValueError(f"{self.rank.value} cards must not carry a color")
        if self.rank not in COLOR_SWITCHING_RANKS and self.color is None:
            raise ValueError(f"{self.rank.value} cards must carry a color")
        return self

    @property
    def is_color_switching(self) -> bool:
        return self.rank in COLOR_SWITCHING_RANKS

    def __str__(self) -> str:
        if self.color is None:
            return self.rank.value
        return f"{self.color.value} {self.rank.value}"


def build_deck() -> list[Card]:
    """Create the standard 108-card deck in a fixed, unshuffled order.

    - 4 colors x one zero: 4 cards
    - 4 colors x two each of one-nine, draw two, reverse, skip: 96 cards
    - 4 wild, 4 wild draw four: 8 cards
    """
    cards: list[Card] = [Card(rank=Rank.ZERO, color=color) for color in Color]

    for color in Color:
        for rank in (*NUMBER_RANKS[1:], *ACTION_RANKS):
            cards.append(Card(rank=rank, color=color))
            cards.append(Card(rank=rank, color=color))

    for rank in COLOR_SWITCHING_RANKS:
        cards.extend(Card(rank=rank) for _ in range(4))

    return cards
