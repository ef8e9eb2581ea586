"""
Cards - The standard 52-card deck shared by every game.

Provides:
- Card value type (suit + rank)
- Deck creation, shuffling, and dealing
- Rank/suit ordering helpers used by placement rules
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import random


class Suit(str, Enum):
    """Card suits, in canonical deck order."""
    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"


class Rank(str, Enum):
    """Card ranks, in ascending order (Ace low)."""
    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


RANK_ORDER: list[Rank] = list(Rank)
RED_SUITS = frozenset({Suit.HEARTS, Suit.DIAMONDS})


class EmptyDeckError(Exception):
    """Raised when dealing from a deck with no cards left."""


@dataclass(frozen=True)
class Card:
    """An immutable playing card."""
    suit: Suit
    rank: Rank

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"


def rank_value(rank: Rank) -> int:
    """Ace=1 ... King=13."""
    return RANK_ORDER.index(rank) + 1


def is_red(suit: Suit) -> bool:
    return suit in RED_SUITS


def create_deck() -> list[Card]:
    """
    Create the 52 canonical cards.

    Order is suit-major (♠, ♥, ♦, ♣) and rank-minor (A..K).
    """
    return [Card(suit=suit, rank=rank) for suit in Suit for rank in Rank]


def shuffle(deck: list[Card], rng: random.Random | None = None) -> list[Card]:
    """
    Return a uniformly shuffled copy of the deck.

    The input list is never mutated. Pass a seeded rng for
    reproducible deals.
    """
    shuffled = list(deck)
    (rng or random).shuffle(shuffled)
    return shuffled


def deal_one(deck: list) -> Card:
    """
    Remove and return the last card of the deck.

    Raises:
        EmptyDeckError: if the deck is empty
    """
    if not deck:
        raise EmptyDeckError("Tried to deal from an empty deck")
    return deck.pop()
