"""
Session Module - Owns live games.

A session represents one play-through:
- Created when a game is dealt
- Holds the authoritative game state
- Serializes human and bot actions
- Forgotten when the game ends
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopResult",
]
