"""
Game State - The Nerts aggregate: per-player piles plus shared foundations.

Design principles:
- Immutable-friendly: the reducer clones containers, never edits a snapshot
- Structural equality: dataclass __eq__ compares every pile
- Players are plain records looked up by id
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

from .cards import Card, Suit


PlayerId = str


class GamePhase(Enum):
    """High-level game phases."""
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True)
class NertsCard(Card):
    """
    A dealt card instance.

    Each player deals from a private deck, so suit+rank is not unique
    across the table. card_id is, and owner_id never changes even after
    the card lands on a shared foundation.
    """
    card_id: str = ""
    owner_id: PlayerId = ""
    face_up: bool = False

    def flipped_up(self) -> NertsCard:
        return self if self.face_up else replace(self, face_up=True)

    def flipped_down(self) -> NertsCard:
        return replace(self, face_up=False) if self.face_up else self


def top_of(pile: list[NertsCard]) -> NertsCard | None:
    """Get the top (last) card of a pile."""
    return pile[-1] if pile else None


@dataclass
class FoundationPile:
    """
    A shared foundation slot, built A->K in one suit by any player.

    suit is None until an Ace opens the slot.
    """
    suit: Suit | None = None
    cards: list[NertsCard] = field(default_factory=list)

    @property
    def top_card(self) -> NertsCard | None:
        return top_of(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    def clone(self) -> FoundationPile:
        return FoundationPile(suit=self.suit, cards=list(self.cards))


@dataclass
class PlayerState:
    """
    State for a single player.

    Piles store their top card last.
    """
    player_id: PlayerId
    nerts_pile: list[NertsCard] = field(default_factory=list)
    tableau: list[list[NertsCard]] = field(default_factory=list)
    stock: list[NertsCard] = field(default_factory=list)
    waste: list[NertsCard] = field(default_factory=list)
    score: int = 0

    @property
    def nerts_top(self) -> NertsCard | None:
        return top_of(self.nerts_pile)

    @property
    def waste_top(self) -> NertsCard | None:
        return top_of(self.waste)

    def column_top(self, index: int) -> NertsCard | None:
        return top_of(self.tableau[index])

    def has_column(self, index: int | None) -> bool:
        return index is not None and 0 <= index < len(self.tableau)

    @property
    def card_count(self) -> int:
        return (
            len(self.nerts_pile)
            + sum(len(column) for column in self.tableau)
            + len(self.stock)
            + len(self.waste)
        )

    def clone(self) -> PlayerState:
        """Copy every container so the clone can be edited freely."""
        return PlayerState(
            player_id=self.player_id,
            nerts_pile=list(self.nerts_pile),
            tableau=[list(column) for column in self.tableau],
            stock=list(self.stock),
            waste=list(self.waste),
            score=self.score,
        )


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    All state changes go through the reducer.
    """
    game_id: str
    players: list[PlayerState] = field(default_factory=list)
    foundations: list[FoundationPile] = field(default_factory=list)
    phase: GamePhase = GamePhase.IN_PROGRESS
    winner_id: PlayerId | None = None
    started_at: float = 0.0

    @property
    def finished(self) -> bool:
        return self.phase == GamePhase.FINISHED

    @property
    def player_ids(self) -> list[PlayerId]:
        return [p.player_id for p in self.players]

    def player_index(self, player_id: PlayerId | None) -> int | None:
        for idx, player in enumerate(self.players):
            if player.player_id == player_id:
                return idx
        return None

    def get_player(self, player_id: PlayerId | None) -> PlayerState | None:
        """Get player by ID."""
        idx = self.player_index(player_id)
        return None if idx is None else self.players[idx]

    # Read-only projections

    def score_of(self, player_id: PlayerId) -> int | None:
        player = self.get_player(player_id)
        return None if player is None else player.score

    def container_counts(self, player_id: PlayerId) -> dict[str, int] | None:
        """Card counts for each of a player's containers."""
        player = self.get_player(player_id)
        if player is None:
            return None
        return {
            "nerts_pile": len(player.nerts_pile),
            "tableau": sum(len(column) for column in player.tableau),
            "stock": len(player.stock),
            "waste": len(player.waste),
        }

    def total_cards(self) -> int:
        """Count every card on the table, foundations included."""
        return (
            sum(p.card_count for p in self.players)
            + sum(len(f.cards) for f in self.foundations)
        )

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


def is_finished(state: GameState) -> bool:
    return state.finished
