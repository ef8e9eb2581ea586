"""
Session Manager - Creates and manages game sessions.

A session owns the one authoritative GameState for a game. Humans and
bots may act at any time, possibly from different threads, so every
action goes through Session.submit(), which applies actions strictly
one at a time. The reducer itself has no locking.

Sessions are in-memory only; nothing is persisted.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import logging
import threading
import time
import uuid

from ..bots import BotPolicy, NertsBot
from ..config import NertsRules, DEFAULT_RULES
from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import Reducer
from ..engine_core.setup import init_game
from ..engine_core.state import GameState, PlayerId

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Someone emptied their Nerts pile
    ABANDONED = "abandoned"  # Ended before a winner


@dataclass
class Session:
    """
    A game session.

    Contains:
    - Current canonical game state
    - Bots, keyed by the player id they play for
    - The lock that serializes every state change
    """
    session_id: str
    game_state: GameState
    created_at: float
    rules: NertsRules = field(default_factory=lambda: DEFAULT_RULES)
    bots: dict[PlayerId, BotPolicy] = field(default_factory=dict)
    state: SessionState = SessionState.ACTIVE
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state == SessionState.ACTIVE

    @property
    def human_player_ids(self) -> list[PlayerId]:
        return [pid for pid in self.game_state.player_ids if pid not in self.bots]

    def submit(self, action: Action) -> ActionResult:
        """
        Apply one action to the session's state.

        This is the serialization point: concurrent callers are applied
        one after another against the latest state.
        """
        with self._lock:
            result = Reducer(rules=self.rules).apply(self.game_state, action)
            if result.accepted:
                self.game_state = result.new_state
                if self.game_state.finished and self.state == SessionState.ACTIVE:
                    self.state = SessionState.GAME_OVER
                    logger.info(
                        "Session %s finished, winner %s",
                        self.session_id, self.game_state.winner_id,
                    )
            return result

    def step_bot(self, player_id: PlayerId) -> ActionResult | None:
        """
        Let the bot for player_id choose and apply one action.

        Choosing and applying happen under the same lock so the bot never
        acts on a stale state. Returns None if no bot plays that seat or
        the bot has nothing to do.
        """
        bot = self.bots.get(player_id)
        if bot is None:
            return None
        with self._lock:
            decision = bot.select_action(self.game_state, player_id)
            if decision is None:
                return None
            return self.submit(decision.action)


PolicyFactory = Callable[[PlayerId], BotPolicy]


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Deal new games
    - Track active sessions
    - Clean up ended sessions
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        player_ids: list[PlayerId],
        bot_ids: list[PlayerId] | None = None,
        random_seed: int | None = None,
        rules: NertsRules | None = None,
        policy_factory: PolicyFactory | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            player_ids: Every seat at the table, in order
            bot_ids: Seats played by bots (must be in player_ids)
            random_seed: Seed for deterministic dealing
            rules: Table rules
            policy_factory: Builds the bot for a seat (defaults to NertsBot)

        Returns:
            New active Session
        """
        bot_ids = bot_ids or []
        unknown = [pid for pid in bot_ids if pid not in player_ids]
        if unknown:
            raise ValueError(f"Bot ids not seated at the table: {unknown}")

        rules = rules or DEFAULT_RULES
        factory = policy_factory or (lambda _pid: NertsBot())
        session_id = str(uuid.uuid4())

        session = Session(
            session_id=session_id,
            game_state=init_game(player_ids, rules=rules, random_seed=random_seed, game_id=session_id),
            created_at=time.time(),
            rules=rules,
            bots={pid: factory(pid) for pid in bot_ids},
        )

        with self._lock:
            self._sessions[session_id] = session
        logger.info("Created session %s with players %s (bots %s)", session_id, player_ids, bot_ids)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and forget it.

        Returns False if the session did not exist.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.state == SessionState.ACTIVE:
            session.state = SessionState.ABANDONED
        logger.info("Ended session %s (%s)", session_id, session.state.value)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in list(self._sessions.items())
            if session.is_active()
        ]
