"""
Action Generator - Generates all legal actions for a player.

The action generator is used by:
1. Baseline bots to enumerate possible moves
2. UI to highlight available moves
3. Tests, to cross-check the reducer

Design: Generates fully-specified Action objects using the same
placement rules the reducer validates with.
"""

from __future__ import annotations

from .action import Action
from .rules import can_place_on_foundation, can_place_on_tableau, is_movable_run
from .state import GameState, PlayerId, PlayerState


class ActionGenerator:
    """Generates legal actions for one player in the current state."""

    def generate(self, state: GameState, player_id: PlayerId) -> list[Action]:
        """
        Generate every legal action for the player.

        Returns [] once the game is over or for an unknown player.
        """
        if state.finished:
            return []
        player = state.get_player(player_id)
        if player is None:
            return []

        actions: list[Action] = []
        actions.extend(self._generate_nerts_actions(state, player))
        actions.extend(self._generate_tableau_actions(state, player))
        actions.extend(self._generate_waste_actions(state, player))
        if player.stock or player.waste:
            actions.append(Action.stock_draw(player_id))
        return actions

    def _generate_nerts_actions(self, state: GameState, player: PlayerState) -> list[Action]:
        top = player.nerts_top
        if top is None or not top.face_up:
            return []

        actions = [
            Action.nerts_to_foundation(player.player_id, f_idx)
            for f_idx, pile in enumerate(state.foundations)
            if can_place_on_foundation(pile, top)
        ]
        actions.extend(
            Action.nerts_to_tableau(player.player_id, t_idx)
            for t_idx, column in enumerate(player.tableau)
            if can_place_on_tableau(column[-1] if column else None, top, allow_any_on_empty=True)
        )
        return actions

    def _generate_tableau_actions(self, state: GameState, player: PlayerState) -> list[Action]:
        actions = []
        for source, column in enumerate(player.tableau):
            if not column:
                continue

            top = column[-1]
            if top.face_up:
                actions.extend(
                    Action.tableau_to_foundation(player.player_id, source, f_idx)
                    for f_idx, pile in enumerate(state.foundations)
                    if can_place_on_foundation(pile, top)
                )

            for idx, card in enumerate(column):
                if not is_movable_run(column[idx:]):
                    continue
                for dest, dest_column in enumerate(player.tableau):
                    if dest == source:
                        continue
                    if can_place_on_tableau(dest_column[-1] if dest_column else None, card):
                        actions.append(
                            Action.tableau_to_tableau(player.player_id, source, dest, card.card_id)
                        )
        return actions

    def _generate_waste_actions(self, state: GameState, player: PlayerState) -> list[Action]:
        top = player.waste_top
        if top is None:
            return []

        actions = [
            Action.waste_to_foundation(player.player_id, f_idx)
            for f_idx, pile in enumerate(state.foundations)
            if can_place_on_foundation(pile, top)
        ]
        actions.extend(
            Action.waste_to_tableau(player.player_id, t_idx)
            for t_idx, column in enumerate(player.tableau)
            if can_place_on_tableau(column[-1] if column else None, top)
        )
        return actions


def legal_actions(state: GameState, player_id: PlayerId) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    return ActionGenerator().generate(state, player_id)


def is_legal(state: GameState, action: Action) -> bool:
    """Check if a specific action is legal."""
    return action in legal_actions(state, action.player_id)
