"""
Nerts Game Setup - Creates the initial game state.

This module handles:
- Shuffling a private deck per player (seedable for determinism)
- Dealing the Nerts pile, tableau seeds and stock
- Building the empty shared foundation pool

Structural problems (no players, duplicate ids, a short deck) raise;
they mean the game cannot be constructed.
"""

from __future__ import annotations
from functools import partial
from typing import Callable
import logging
import random
import time
import uuid

from ..config import NertsRules, DEFAULT_RULES
from .cards import Card, create_deck, deal_one, shuffle
from .state import FoundationPile, GameState, NertsCard, PlayerId, PlayerState

logger = logging.getLogger(__name__)

Shuffler = Callable[[list[Card]], list[Card]]


def init_game(
    player_ids: list[PlayerId],
    rules: NertsRules | None = None,
    random_seed: int | None = None,
    shuffler: Shuffler | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Set up a new Nerts game.

    Args:
        player_ids: Ordered, non-empty list of unique player ids
        rules: Table rules (defaults to standard Nerts)
        random_seed: Seed for deterministic shuffling
        shuffler: Replaces the shuffle entirely (stacked decks in tests)
        game_id: Explicit game id (generated if not provided)

    Returns:
        A dealt GameState, in progress
    """
    if not player_ids:
        raise ValueError("Nerts needs at least one player")
    if len(set(player_ids)) != len(player_ids):
        raise ValueError(f"Player ids must be unique: {player_ids}")

    rules = rules or DEFAULT_RULES
    if shuffler is None:
        shuffler = partial(shuffle, rng=random.Random(random_seed))

    players = [_deal_player(player_id, shuffler(create_deck()), rules) for player_id in player_ids]
    foundations = [
        FoundationPile() for _ in range(rules.foundations_per_player * len(player_ids))
    ]

    state = GameState(
        game_id=game_id or f"nerts_{uuid.uuid4().hex[:12]}",
        players=players,
        foundations=foundations,
        started_at=time.time(),
    )
    logger.info(
        "Dealt game %s for %d players (%d foundation slots)",
        state.game_id, len(players), len(foundations),
    )
    return state


def _deal_player(player_id: PlayerId, deck: list[Card], rules: NertsRules) -> PlayerState:
    """Deal one player's private deck into Nerts pile, tableau and stock."""
    remaining = [
        NertsCard(
            suit=card.suit,
            rank=card.rank,
            card_id=f"{player_id}-{card.rank.value}{card.suit.value}-{idx}",
            owner_id=player_id,
            face_up=False,
        )
        for idx, card in enumerate(deck)
    ]

    # Dealt bottom-first: the last card dealt is the face-up top
    nerts_pile = [deal_one(remaining) for _ in range(rules.nerts_pile_size)]
    nerts_pile[-1] = nerts_pile[-1].flipped_up()

    tableau = [[deal_one(remaining).flipped_up()] for _ in range(rules.tableau_columns)]

    return PlayerState(
        player_id=player_id,
        nerts_pile=nerts_pile,
        tableau=tableau,
        stock=remaining,
        waste=[],
        score=0,
    )
