"""
Placement Rules - Where a card may legally go.

Shared by the reducer (validation), the action generator (enumeration)
and the bots (feasibility checks), so all three agree on legality.
"""

from __future__ import annotations

from .cards import Rank, is_red, rank_value
from .state import FoundationPile, NertsCard


def can_place_on_foundation(pile: FoundationPile, card: NertsCard) -> bool:
    """
    Foundation rule.

    An empty slot takes only an Ace. Otherwise the card must match the
    slot's suit and be exactly one rank above the top card.
    """
    top = pile.top_card
    if top is None:
        return card.rank == Rank.ACE
    if card.suit != top.suit:
        return False
    return rank_value(card.rank) == rank_value(top.rank) + 1


def can_place_on_tableau(
    dest_top: NertsCard | None,
    card: NertsCard,
    allow_any_on_empty: bool = False,
) -> bool:
    """
    Tableau rule: alternating colour, descending rank.

    An empty column takes only a King, unless allow_any_on_empty is set
    (cards coming off the Nerts pile may start any empty column).
    """
    if dest_top is None:
        return allow_any_on_empty or card.rank == Rank.KING
    if is_red(card.suit) == is_red(dest_top.suit):
        return False
    return rank_value(card.rank) == rank_value(dest_top.rank) - 1


def is_movable_run(run: list[NertsCard]) -> bool:
    """A run moves as a unit only if it is non-empty and fully face-up."""
    return bool(run) and all(card.face_up for card in run)


def find_card_index(column: list[NertsCard], card_id: str | None) -> int | None:
    for idx, card in enumerate(column):
        if card.card_id == card_id:
            return idx
    return None
