"""
Reducer - Applies actions to game state.

The reducer is the single point of state change.
All moves must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Total: an illegal action is a silent no-op, never an exception
- Never touches the input snapshot; containers are cloned first
- Atomic: a move, its score and the win check land together
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging

from ..config import NertsRules, DEFAULT_RULES
from .action import Action, ActionResult, ActionType
from .rules import (
    can_place_on_foundation,
    can_place_on_tableau,
    find_card_index,
    is_movable_run,
)
from .state import FoundationPile, GamePhase, GameState, NertsCard, PlayerState

logger = logging.getLogger(__name__)


@dataclass
class _Draft:
    """Scratch copies for one transition. Handlers edit these, never the snapshot."""
    player: PlayerState
    foundations: list[FoundationPile]
    score_delta: int = 0
    changes: list[str] = field(default_factory=list)

    def has_foundation(self, index: int | None) -> bool:
        return index is not None and 0 <= index < len(self.foundations)


Handler = Callable[[_Draft, Action], "str | None"]


def _flip_top(pile: list[NertsCard]) -> None:
    """Turn the newly exposed top card face-up."""
    if pile and not pile[-1].face_up:
        pile[-1] = pile[-1].flipped_up()


def _push_foundation(pile: FoundationPile, card: NertsCard) -> None:
    pile.cards.append(card)
    if pile.suit is None:
        pile.suit = card.suit


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    Rules provide draw count and scoring.
    """
    rules: NertsRules = field(default_factory=lambda: DEFAULT_RULES)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult; when rejected, new_state is `state` itself.
        """
        if state.finished:
            return self._reject(state, action, "Game is over - no actions accepted")

        player_idx = state.player_index(action.player_id)
        if player_idx is None:
            return self._reject(state, action, f"Unknown player {action.player_id}")

        handler = self._get_handler(action.action_type)
        if handler is None:
            return self._reject(state, action, f"No handler for action type: {action.action_type}")

        draft = _Draft(
            player=state.players[player_idx].clone(),
            foundations=[f.clone() for f in state.foundations],
        )
        error = handler(draft, action)
        if error:
            return self._reject(state, action, error)

        logger.debug("Applied %s", action.describe())
        return ActionResult.applied(
            self._finalize(state, player_idx, draft),
            score_delta=draft.score_delta,
            changes=draft.changes,
        )

    def _finalize(self, state: GameState, player_idx: int, draft: _Draft) -> GameState:
        """Commit the draft: score, win check, new snapshot."""
        player = draft.player
        player.score += draft.score_delta

        players = list(state.players)
        players[player_idx] = player

        phase, winner_id = state.phase, state.winner_id
        if not player.nerts_pile:
            phase, winner_id = GamePhase.FINISHED, player.player_id
            draft.changes.append(f"{player.player_id} emptied their Nerts pile and wins")
            logger.info("Game %s won by %s (score %d)", state.game_id, winner_id, player.score)

        return state._copy_with(
            players=players,
            foundations=draft.foundations,
            phase=phase,
            winner_id=winner_id,
        )

    def _reject(self, state: GameState, action: Action, reason: str) -> ActionResult:
        logger.debug("Rejected %s: %s", action.describe(), reason)
        return ActionResult.rejected(state, reason)

    def _get_handler(self, action_type: ActionType) -> Handler | None:
        """Get the handler function for an action type."""
        handlers = {
            ActionType.STOCK_DRAW: self._handle_stock_draw,
            ActionType.WASTE_TO_TABLEAU: self._handle_waste_to_tableau,
            ActionType.WASTE_TO_FOUNDATION: self._handle_waste_to_foundation,
            ActionType.TABLEAU_TO_TABLEAU: self._handle_tableau_to_tableau,
            ActionType.TABLEAU_TO_FOUNDATION: self._handle_tableau_to_foundation,
            ActionType.NERTS_TO_TABLEAU: self._handle_nerts_to_tableau,
            ActionType.NERTS_TO_FOUNDATION: self._handle_nerts_to_foundation,
        }
        return handlers.get(action_type)

    def _handle_stock_draw(self, draft: _Draft, action: Action) -> str | None:
        """
        Draw up to draw_count cards from stock to waste.

        With an empty stock, the waste is turned back over into the
        stock face-down, so the next draw starts where the last pass did.
        """
        player = draft.player
        if player.stock:
            drawn = []
            for _ in range(min(self.rules.draw_count, len(player.stock))):
                card = player.stock.pop().flipped_up()
                player.waste.append(card)
                drawn.append(str(card))
            draft.changes.append(f"{player.player_id} drew {', '.join(drawn)}")
            return None

        if player.waste:
            player.stock = [card.flipped_down() for card in reversed(player.waste)]
            player.waste = []
            draft.changes.append(f"{player.player_id} recycled waste into stock")
            return None

        return "Stock and waste are both empty"

    def _handle_waste_to_tableau(self, draft: _Draft, action: Action) -> str | None:
        player = draft.player
        index = action.payload.tableau_index
        if not player.has_column(index):
            return f"No tableau column {index}"
        card = player.waste_top
        if card is None:
            return "Waste is empty"
        if not can_place_on_tableau(player.column_top(index), card):
            return f"{card} cannot go on tableau column {index}"

        player.tableau[index].append(player.waste.pop())
        draft.changes.append(f"{player.player_id} moved {card} from waste to column {index}")
        return None

    def _handle_waste_to_foundation(self, draft: _Draft, action: Action) -> str | None:
        player = draft.player
        index = action.payload.foundation_index
        if not draft.has_foundation(index):
            return f"No foundation {index}"
        card = player.waste_top
        if card is None:
            return "Waste is empty"
        pile = draft.foundations[index]
        if not can_place_on_foundation(pile, card):
            return f"{card} cannot go on foundation {index}"

        _push_foundation(pile, player.waste.pop())
        draft.score_delta += self.rules.waste_to_foundation_points
        draft.changes.append(f"{player.player_id} played {card} from waste to foundation {index}")
        return None

    def _handle_tableau_to_tableau(self, draft: _Draft, action: Action) -> str | None:
        player = draft.player
        source, dest = action.payload.from_index, action.payload.to_index
        if not player.has_column(source) or not player.has_column(dest):
            return f"No tableau column {source} or {dest}"
        if source == dest:
            return "Source and destination columns are the same"

        column = player.tableau[source]
        idx = find_card_index(column, action.payload.card_id)
        if idx is None:
            return f"Card {action.payload.card_id} is not in column {source}"

        run = column[idx:]
        if not is_movable_run(run):
            return "Only a fully face-up run can move"
        if not can_place_on_tableau(player.column_top(dest), run[0]):
            return f"{run[0]} cannot go on tableau column {dest}"

        player.tableau[source] = column[:idx]
        _flip_top(player.tableau[source])
        player.tableau[dest].extend(run)
        draft.changes.append(
            f"{player.player_id} moved {len(run)} card(s) from {run[0]} "
            f"from column {source} to column {dest}"
        )
        return None

    def _handle_tableau_to_foundation(self, draft: _Draft, action: Action) -> str | None:
        player = draft.player
        source, index = action.payload.from_index, action.payload.foundation_index
        if not player.has_column(source):
            return f"No tableau column {source}"
        if not draft.has_foundation(index):
            return f"No foundation {index}"
        card = player.column_top(source)
        if card is None or not card.face_up:
            return f"Column {source} has no face-up top card"
        pile = draft.foundations[index]
        if not can_place_on_foundation(pile, card):
            return f"{card} cannot go on foundation {index}"

        column = player.tableau[source]
        _push_foundation(pile, column.pop())
        _flip_top(column)
        draft.score_delta += self.rules.tableau_to_foundation_points
        draft.changes.append(
            f"{player.player_id} played {card} from column {source} to foundation {index}"
        )
        return None

    def _handle_nerts_to_tableau(self, draft: _Draft, action: Action) -> str | None:
        player = draft.player
        index = action.payload.tableau_index
        if not player.has_column(index):
            return f"No tableau column {index}"
        card = player.nerts_top
        if card is None or not card.face_up:
            return "Nerts pile has no face-up top card"
        if not can_place_on_tableau(player.column_top(index), card, allow_any_on_empty=True):
            return f"{card} cannot go on tableau column {index}"

        player.tableau[index].append(player.nerts_pile.pop())
        _flip_top(player.nerts_pile)
        draft.changes.append(f"{player.player_id} moved {card} from Nerts pile to column {index}")
        return None

    def _handle_nerts_to_foundation(self, draft: _Draft, action: Action) -> str | None:
        player = draft.player
        index = action.payload.foundation_index
        if not draft.has_foundation(index):
            return f"No foundation {index}"
        card = player.nerts_top
        if card is None or not card.face_up:
            return "Nerts pile has no face-up top card"
        pile = draft.foundations[index]
        if not can_place_on_foundation(pile, card):
            return f"{card} cannot go on foundation {index}"

        _push_foundation(pile, player.nerts_pile.pop())
        _flip_top(player.nerts_pile)
        draft.score_delta += self.rules.nerts_to_foundation_points
        draft.changes.append(
            f"{player.player_id} played {card} from Nerts pile to foundation {index}"
        )
        return None


def apply_action(
    state: GameState, action: Action, rules: NertsRules | None = None
) -> GameState:
    """
    Convenience function to apply an action.

    Returns the next state, or `state` unchanged if the action is illegal.
    """
    return Reducer(rules=rules or DEFAULT_RULES).apply(state, action).new_state
