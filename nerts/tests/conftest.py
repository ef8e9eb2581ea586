"""
Pytest fixtures for Nerts tests.
"""

import itertools

import pytest

from ..engine_core.cards import Rank, Suit
from ..engine_core.setup import init_game
from ..engine_core.state import FoundationPile, GameState, NertsCard, PlayerState


def spades_last(deck):
    """Stacked shuffle: spades end up on top, so the Nerts pile is A..K of spades."""
    return deck[13:] + deck[:13]


@pytest.fixture
def make_card():
    """
    Factory for tagged cards from a short label.

    make_card("10♥"), make_card("K♠", face_up=False, owner="bob")
    """
    counter = itertools.count()

    def _make(label: str, owner: str = "alice", face_up: bool = True) -> NertsCard:
        rank, suit = Rank(label[:-1]), Suit(label[-1])
        return NertsCard(
            suit=suit,
            rank=rank,
            card_id=f"{owner}-{label}-t{next(counter)}",
            owner_id=owner,
            face_up=face_up,
        )

    return _make


@pytest.fixture
def make_state():
    """
    Factory for hand-built states.

    Pads the tableau to 4 columns and creates 4 foundation slots per
    player unless foundations are given.
    """

    def _make(*players: PlayerState, foundations=None) -> GameState:
        for player in players:
            while len(player.tableau) < 4:
                player.tableau.append([])
        if foundations is None:
            foundations = [FoundationPile() for _ in range(4 * len(players))]
        return GameState(game_id="test_game", players=list(players), foundations=foundations)

    return _make


@pytest.fixture
def two_player_state() -> GameState:
    """A freshly dealt, seeded 2-player game."""
    return init_game(["alice", "bob"], random_seed=42, game_id="test_game")


@pytest.fixture
def stacked_state() -> GameState:
    """2-player game where both Nerts piles are A..K of spades, Ace on top."""
    return init_game(["alice", "bob"], shuffler=spades_last, game_id="stacked_game")
