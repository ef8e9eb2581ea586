"""
Bot Policy - Interface for bot decision-making.

A BotPolicy looks at a game state from one player's seat and proposes
a single action. Policies never change state themselves; the caller
hands the proposed action to the reducer.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random

from ..engine_core.action import Action
from ..engine_core.action_generator import legal_actions
from ..engine_core.state import GameState, PlayerId


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation (for UI/debugging)
    - How many candidates were considered
    """
    action: Action
    explanation: str = ""
    evaluated_actions: int = 0


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    Implementations can range from a fixed priority cascade to
    random play.
    """

    @abstractmethod
    def select_action(self, state: GameState, player_id: PlayerId) -> BotDecision | None:
        """
        Select an action for player_id.

        Returns None when the player has nothing to do (unknown player,
        finished game, or no legal move at all).
        """

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects legal actions uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(self, state: GameState, player_id: PlayerId) -> BotDecision | None:
        legal = legal_actions(state, player_id)
        if not legal:
            return None

        return BotDecision(
            action=self.rng.choice(legal),
            explanation="Selected randomly",
            evaluated_actions=len(legal),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first legal action.

    Used for:
    - Deterministic testing
    - Baseline comparison
    """

    def select_action(self, state: GameState, player_id: PlayerId) -> BotDecision | None:
        legal = legal_actions(state, player_id)
        if not legal:
            return None

        return BotDecision(
            action=legal[0],
            explanation="Selected first legal action",
            evaluated_actions=1,
        )
