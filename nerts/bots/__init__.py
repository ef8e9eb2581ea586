"""
Bots module - Automa AI implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- NertsBot: Priority-cascade Nerts bot
- RandomPolicy / FirstLegalPolicy: Baselines over legal actions
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .nerts_bot import NertsBot, bot_step

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "NertsBot",
    "bot_step",
]
