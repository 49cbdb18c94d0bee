"""
Shared pytest fixtures for the DeckCrawl test suite.

This module provides:
- a shuffler that leaves every pile in place, for hand-built scenarios
- a card shorthand parser (``"5C"``, ``"10H"``, ``"KS"``, ``"JoB"``)
- a game factory that lays out the dungeon, room, shop and bosses directly
"""

import pytest

from deckcrawl_gym.cards import Joker, JokerColor, Rank, RegularCard, Suit
from deckcrawl_gym.game import Game

SUITS = {"H": Suit.HEARTS, "D": Suit.DIAMONDS, "C": Suit.CLUBS, "S": Suit.SPADES}
RANKS = {"A": Rank.ACE, "J": Rank.JACK, "Q": Rank.QUEEN, "K": Rank.KING}


class NoShuffle:
    """Records shuffle requests without reordering anything."""

    def __init__(self):
        self.calls = []

    def shuffle(self, stream, seq):
        self.calls.append((stream, len(seq)))


def card(code):
    if code == "JoB":
        return Joker(JokerColor.BLACK)
    if code == "JoR":
        return Joker(JokerColor.RED)
    rank, suit = code[:-1], code[-1]
    return RegularCard(SUITS[suit], RANKS.get(rank) or Rank(int(rank)))


def cards(*codes):
    return [card(c) for c in codes]


@pytest.fixture
def no_shuffle():
    return NoShuffle()


@pytest.fixture
def make_game(no_shuffle):
    """Factory: ``make_game(room=[...], dungeon=[...], ...)`` with card codes."""

    def _make(room=(), dungeon=(), bosses=(), shop=(), stock=(), **attrs):
        game = Game(no_shuffle)
        game.room = cards(*room)
        game.dungeon = cards(*dungeon)
        game.dungeon_discard = []
        game.bosses = cards(*bosses)
        game.shop.pool = cards(*shop)
        game.shop.stock = cards(*stock)
        for name, value in attrs.items():
            setattr(game, name, value)
        return game

    return _make
