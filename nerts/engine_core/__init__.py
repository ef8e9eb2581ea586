"""
Engine Core - Deterministic Nerts state management.

The engine is the runtime that:
1. Deals a GameState
2. Applies actions via the reducer
3. Generates legal actions for any player
"""

from .cards import Card, Suit, Rank, EmptyDeckError, create_deck, shuffle, deal_one, rank_value, is_red
from .state import GameState, GamePhase, PlayerState, FoundationPile, NertsCard, PlayerId, is_finished
from .action import Action, ActionType, ActionPayload, ActionResult
from .setup import init_game
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions, is_legal

__all__ = [
    "Card",
    "Suit",
    "Rank",
    "EmptyDeckError",
    "create_deck",
    "shuffle",
    "deal_one",
    "rank_value",
    "is_red",
    "GameState",
    "GamePhase",
    "PlayerState",
    "FoundationPile",
    "NertsCard",
    "PlayerId",
    "is_finished",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "init_game",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "is_legal",
]
