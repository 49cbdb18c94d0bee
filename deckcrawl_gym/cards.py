"""Card-level primitives and deck building.

Goals
-----
* **Closed variant** – a card is either a :class:`RegularCard` or a
  :class:`Joker`; dispatch with ``match`` over the two, never subclass further.
* **Low memory footprint** – `@dataclass(slots=True, frozen=True)` avoids per‑instance `__dict__`.
* **Total order** – regular cards sort by rank then suit, every regular card
  sorts below every joker, and the black joker sorts below the red one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, unique
from functools import total_ordering
from typing import Final, List, Protocol, Sequence, Tuple, Union

from deckcrawl_gym.constants import JOKER_VALUE


@unique
class Suit(IntEnum):
    """Card suit (♥ ♦ ♣ ♠), ordered as it breaks ties between equal ranks."""

    HEARTS: int = 0
    DIAMONDS: int = 1
    CLUBS: int = 2
    SPADES: int = 3

    def symbol(self) -> str:  # → "♥" / "♦" / "♣" / "♠"
        return "♥♦♣♠"[self]


@unique
class Rank(IntEnum):
    """Card rank encoded as its *face value* so maths just works."""

    ACE: int = 1
    TWO: int = 2
    THREE: int = 3
    FOUR: int = 4
    FIVE: int = 5
    SIX: int = 6
    SEVEN: int = 7
    EIGHT: int = 8
    NINE: int = 9
    TEN: int = 10
    JACK: int = 11
    QUEEN: int = 12
    KING: int = 13

    @property
    def short(self) -> str:  # → "A", "2" … "10", "J", "Q", "K"
        lookup: Final = {
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }
        return lookup.get(self, str(self.value))


@unique
class JokerColor(IntEnum):
    BLACK: int = 0
    RED: int = 1


@total_ordering
@dataclass(frozen=True, slots=True)
class RegularCard:
    """Immutable ranked playing card."""

    suit: Suit
    rank: Rank

    @property
    def value(self) -> int:
        return int(self.rank)

    @property
    def is_monster(self) -> bool:
        return self.suit in (Suit.CLUBS, Suit.SPADES)

    @property
    def is_potion(self) -> bool:
        return self.suit is Suit.HEARTS

    @property
    def is_weapon(self) -> bool:
        return self.suit is Suit.DIAMONDS

    def sort_key(self) -> Tuple[int, int, int]:
        return (0, int(self.rank), int(self.suit))

    def __str__(self) -> str:
        return f"{self.rank.short}{self.suit.symbol()}"

    def __lt__(self, other: "Card") -> bool:
        if not isinstance(other, (RegularCard, Joker)):
            return NotImplemented
        return self.sort_key() < other.sort_key()


@total_ordering
@dataclass(frozen=True, slots=True)
class Joker:
    """Wildcard that destroys another card in the room for money."""

    color: JokerColor

    @property
    def value(self) -> int:
        return JOKER_VALUE

    # Jokers are never monsters, potions or weapons
    is_monster = False
    is_potion = False
    is_weapon = False

    def sort_key(self) -> Tuple[int, int, int]:
        return (1, int(self.color), 0)

    def __str__(self) -> str:
        return "Jo"

    def __lt__(self, other: "Card") -> bool:
        if not isinstance(other, (RegularCard, Joker)):
            return NotImplemented
        return self.sort_key() < other.sort_key()


Card = Union[RegularCard, Joker]


class Shuffler(Protocol):
    def shuffle(self, stream: str, seq: List) -> None: ...


# ---------------------------------------------------------------------------
# Deck building
# ---------------------------------------------------------------------------

def create_deck() -> List[Card]:
    """Return the 54 cards in a fixed order: suit-major, then both jokers."""
    deck: List[Card] = [RegularCard(suit, rank) for suit in Suit for rank in Rank]
    deck.append(Joker(JokerColor.BLACK))
    deck.append(Joker(JokerColor.RED))
    return deck


def build_deck(rng: Shuffler) -> List[Card]:
    deck = create_deck()
    rng.shuffle("deck_shuffle", deck)
    return deck


def partition_deck(cards: Sequence[Card]) -> Tuple[List[Card], List[Card], List[Card]]:
    """Split a (shuffled) deck into ``(dungeon, shop, bosses)``.

    Cards keep their relative order inside each pool. Ranks Ace to Three are
    left out of the game entirely. Bosses come back sorted so they can be
    released two at a time, weakest first.
    """
    dungeon: List[Card] = []
    shop: List[Card] = []
    bosses: List[Card] = []

    for card in cards:
        match card:
            case RegularCard(rank=rank) if Rank.FOUR <= rank <= Rank.NINE:
                dungeon.append(card)
            case RegularCard(suit=Suit.HEARTS | Suit.DIAMONDS, rank=rank) if rank >= Rank.TEN:
                shop.append(card)
            case RegularCard(suit=Suit.CLUBS | Suit.SPADES, rank=rank) if rank >= Rank.TEN:
                bosses.append(card)
            case RegularCard():
                pass
            case Joker():
                shop.append(card)

    bosses.sort()
    return dungeon, shop, bosses


__all__ = [
    "Suit",
    "Rank",
    "JokerColor",
    "RegularCard",
    "Joker",
    "Card",
    "create_deck",
    "build_deck",
    "partition_deck",
]
