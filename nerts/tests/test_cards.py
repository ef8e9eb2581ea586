"""
Tests for the card/deck primitive and rank/suit ordering.
"""

import random

import pytest

from ..engine_core.cards import (
    Card,
    EmptyDeckError,
    Rank,
    Suit,
    create_deck,
    deal_one,
    is_red,
    rank_value,
    shuffle,
)


class TestCreateDeck:
    """Tests for deck creation."""

    def test_deck_has_52_unique_cards(self):
        deck = create_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_deck_order_is_suit_major(self):
        """Spades A..K first, clubs K last."""
        deck = create_deck()
        assert deck[0] == Card(Suit.SPADES, Rank.ACE)
        assert deck[12] == Card(Suit.SPADES, Rank.KING)
        assert deck[13] == Card(Suit.HEARTS, Rank.ACE)
        assert deck[-1] == Card(Suit.CLUBS, Rank.KING)

    def test_cards_are_immutable(self):
        card = create_deck()[0]
        with pytest.raises(AttributeError):
            card.rank = Rank.KING  # type: ignore[misc]

    def test_card_str(self):
        assert str(Card(Suit.HEARTS, Rank.TEN)) == "10♥"


class TestShuffle:
    """Tests for shuffling."""

    def test_shuffle_is_a_permutation(self):
        deck = create_deck()
        shuffled = shuffle(deck, random.Random(1))
        assert sorted(shuffled, key=str) == sorted(deck, key=str)

    def test_shuffle_does_not_mutate_input(self):
        deck = create_deck()
        before = list(deck)
        shuffle(deck, random.Random(1))
        assert deck == before

    def test_seeded_shuffle_is_reproducible(self):
        deck = create_deck()
        assert shuffle(deck, random.Random(9)) == shuffle(deck, random.Random(9))

    def test_shuffle_without_rng(self):
        assert len(shuffle(create_deck())) == 52


class TestDealOne:
    """Tests for dealing."""

    def test_deals_last_card(self):
        deck = create_deck()
        card = deal_one(deck)
        assert card == Card(Suit.CLUBS, Rank.KING)
        assert len(deck) == 51

    def test_empty_deck_raises(self):
        with pytest.raises(EmptyDeckError):
            deal_one([])


class TestOrdering:
    """Tests for rank/suit helpers."""

    def test_rank_values(self):
        assert rank_value(Rank.ACE) == 1
        assert rank_value(Rank.TEN) == 10
        assert rank_value(Rank.JACK) == 11
        assert rank_value(Rank.KING) == 13

    def test_rank_values_are_consecutive(self):
        assert [rank_value(r) for r in Rank] == list(range(1, 14))

    def test_red_suits(self):
        assert is_red(Suit.HEARTS)
        assert is_red(Suit.DIAMONDS)
        assert not is_red(Suit.SPADES)
        assert not is_red(Suit.CLUBS)
