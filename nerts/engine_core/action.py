"""
Action System - Actions, payloads, and results.

Every state change flows through one of seven player actions.
Any player may submit any action at any time; the reducer decides
whether it applies.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(str, Enum):
    """Types of actions a player can take."""
    STOCK_DRAW = "stock_draw"
    WASTE_TO_TABLEAU = "waste_to_tableau"
    WASTE_TO_FOUNDATION = "waste_to_foundation"
    TABLEAU_TO_TABLEAU = "tableau_to_tableau"
    TABLEAU_TO_FOUNDATION = "tableau_to_foundation"
    NERTS_TO_TABLEAU = "nerts_to_tableau"
    NERTS_TO_FOUNDATION = "nerts_to_foundation"


@dataclass(frozen=True)
class ActionPayload:
    """
    Parameters for an action.

    Only the fields an action type uses are set; the reducer treats a
    missing or out-of-range index as an illegal move.
    """
    player_id: str
    tableau_index: int | None = None
    foundation_index: int | None = None
    from_index: int | None = None
    to_index: int | None = None
    card_id: str | None = None


@dataclass(frozen=True)
class Action:
    """A complete action to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload

    @property
    def player_id(self) -> str:
        return self.payload.player_id

    @classmethod
    def stock_draw(cls, player_id: str) -> Action:
        return cls(ActionType.STOCK_DRAW, ActionPayload(player_id=player_id))

    @classmethod
    def waste_to_tableau(cls, player_id: str, tableau_index: int) -> Action:
        return cls(
            ActionType.WASTE_TO_TABLEAU,
            ActionPayload(player_id=player_id, tableau_index=tableau_index),
        )

    @classmethod
    def waste_to_foundation(cls, player_id: str, foundation_index: int) -> Action:
        return cls(
            ActionType.WASTE_TO_FOUNDATION,
            ActionPayload(player_id=player_id, foundation_index=foundation_index),
        )

    @classmethod
    def tableau_to_tableau(
        cls, player_id: str, from_index: int, to_index: int, card_id: str
    ) -> Action:
        """Move the run starting at card_id from one column to another."""
        return cls(
            ActionType.TABLEAU_TO_TABLEAU,
            ActionPayload(
                player_id=player_id,
                from_index=from_index,
                to_index=to_index,
                card_id=card_id,
            ),
        )

    @classmethod
    def tableau_to_foundation(
        cls, player_id: str, from_index: int, foundation_index: int
    ) -> Action:
        return cls(
            ActionType.TABLEAU_TO_FOUNDATION,
            ActionPayload(
                player_id=player_id,
                from_index=from_index,
                foundation_index=foundation_index,
            ),
        )

    @classmethod
    def nerts_to_tableau(cls, player_id: str, tableau_index: int) -> Action:
        return cls(
            ActionType.NERTS_TO_TABLEAU,
            ActionPayload(player_id=player_id, tableau_index=tableau_index),
        )

    @classmethod
    def nerts_to_foundation(cls, player_id: str, foundation_index: int) -> Action:
        return cls(
            ActionType.NERTS_TO_FOUNDATION,
            ActionPayload(player_id=player_id, foundation_index=foundation_index),
        )

    def describe(self) -> str:
        """Compact description for logs."""
        params = {
            k: v for k, v in vars(self.payload).items()
            if v is not None and k != "player_id"
        }
        args = ", ".join(f"{k}={v}" for k, v in params.items())
        return f"{self.player_id}: {self.action_type.value}({args})"


@dataclass
class ActionResult:
    """
    Result of applying an action.

    A rejected action is not an error: new_state is the original,
    untouched state and reason says why the move was illegal.
    """
    accepted: bool
    new_state: Any  # GameState
    reason: str | None = None
    score_delta: int = 0

    # For presentation
    changes: list[str] = field(default_factory=list)

    @classmethod
    def rejected(cls, state: Any, reason: str) -> ActionResult:
        return cls(accepted=False, new_state=state, reason=reason)

    @classmethod
    def applied(
        cls,
        state: Any,
        score_delta: int = 0,
        changes: list[str] | None = None,
    ) -> ActionResult:
        return cls(
            accepted=True,
            new_state=state,
            score_delta=score_delta,
            changes=changes or [],
        )
