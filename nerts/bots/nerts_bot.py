"""
Nerts Bot - Priority-cascade automa for Nerts.

The bot checks a fixed list of move kinds in order and takes the first
one that is feasible:

1. Nerts pile -> foundation
2. Tableau top -> foundation
3. Waste -> foundation
4. Nerts pile -> tableau
5. Tableau run -> tableau, only when it uncovers a face-down card
6. Waste -> tableau
7. Draw from stock

The bot does NOT:
- Look further than one move ahead
- Remember anything between calls
- Decide how often it is called (that's the game loop's job)
"""

from __future__ import annotations
from typing import Callable
import logging

from ..config import NertsRules
from ..engine_core.action import Action
from ..engine_core.reducer import apply_action
from ..engine_core.rules import can_place_on_foundation, can_place_on_tableau
from ..engine_core.state import GameState, PlayerId, PlayerState
from .policy import BotDecision, BotPolicy

logger = logging.getLogger(__name__)

Finder = Callable[[GameState, PlayerState], "Action | None"]


def find_nerts_to_foundation(state: GameState, player: PlayerState) -> Action | None:
    top = player.nerts_top
    if top is None or not top.face_up:
        return None
    for f_idx, pile in enumerate(state.foundations):
        if can_place_on_foundation(pile, top):
            return Action.nerts_to_foundation(player.player_id, f_idx)
    return None


def find_tableau_to_foundation(state: GameState, player: PlayerState) -> Action | None:
    for t_idx, column in enumerate(player.tableau):
        if not column or not column[-1].face_up:
            continue
        for f_idx, pile in enumerate(state.foundations):
            if can_place_on_foundation(pile, column[-1]):
                return Action.tableau_to_foundation(player.player_id, t_idx, f_idx)
    return None


def find_waste_to_foundation(state: GameState, player: PlayerState) -> Action | None:
    top = player.waste_top
    if top is None:
        return None
    for f_idx, pile in enumerate(state.foundations):
        if can_place_on_foundation(pile, top):
            return Action.waste_to_foundation(player.player_id, f_idx)
    return None


def find_nerts_to_tableau(state: GameState, player: PlayerState) -> Action | None:
    top = player.nerts_top
    if top is None or not top.face_up:
        return None
    for t_idx, column in enumerate(player.tableau):
        if can_place_on_tableau(column[-1] if column else None, top, allow_any_on_empty=True):
            return Action.nerts_to_tableau(player.player_id, t_idx)
    return None


def exposes_face_down(column: list, idx: int) -> bool:
    """
    Would moving the run starting at idx uncover a face-down card?

    True only when the run itself is face-up and the card directly
    beneath it is face-down.
    """
    if idx == 0 or column[idx - 1].face_up:
        return False
    return all(card.face_up for card in column[idx:])


def find_revealing_tableau_move(state: GameState, player: PlayerState) -> Action | None:
    """Tableau run moves, restricted to those that reveal a card."""
    for source, column in enumerate(player.tableau):
        for idx, card in enumerate(column):
            if not exposes_face_down(column, idx):
                continue
            for dest, dest_column in enumerate(player.tableau):
                if dest == source:
                    continue
                if can_place_on_tableau(dest_column[-1] if dest_column else None, card):
                    return Action.tableau_to_tableau(player.player_id, source, dest, card.card_id)
    return None


def find_waste_to_tableau(state: GameState, player: PlayerState) -> Action | None:
    top = player.waste_top
    if top is None:
        return None
    for t_idx, column in enumerate(player.tableau):
        if can_place_on_tableau(column[-1] if column else None, top):
            return Action.waste_to_tableau(player.player_id, t_idx)
    return None


CASCADE: list[tuple[str, Finder]] = [
    ("Nerts pile to foundation", find_nerts_to_foundation),
    ("Tableau to foundation", find_tableau_to_foundation),
    ("Waste to foundation", find_waste_to_foundation),
    ("Nerts pile to tableau", find_nerts_to_tableau),
    ("Tableau move that reveals a card", find_revealing_tableau_move),
    ("Waste to tableau", find_waste_to_tableau),
]


class NertsBot(BotPolicy):
    """
    Nerts automa using the fixed priority cascade.

    Usage:
        bot = NertsBot()
        decision = bot.select_action(state, "bot1")
        state = apply_action(state, decision.action)
    """

    def select_action(self, state: GameState, player_id: PlayerId) -> BotDecision | None:
        if state.finished:
            return None
        player = state.get_player(player_id)
        if player is None:
            return None

        for evaluated, (label, finder) in enumerate(CASCADE, start=1):
            action = finder(state, player)
            if action is not None:
                return BotDecision(action=action, explanation=label, evaluated_actions=evaluated)

        return BotDecision(
            action=Action.stock_draw(player_id),
            explanation="Draw from stock",
            evaluated_actions=len(CASCADE) + 1,
        )


def bot_step(state: GameState, player_id: PlayerId, rules: NertsRules | None = None) -> GameState:
    """
    One bot move for player_id.

    Returns the state after the cascade's chosen action, or `state`
    unchanged for an unknown player or a finished game.
    """
    decision = NertsBot().select_action(state, player_id)
    if decision is None:
        return state
    logger.debug("Bot %s chose %s (%s)", player_id, decision.action.describe(), decision.explanation)
    return apply_action(state, decision.action, rules)
