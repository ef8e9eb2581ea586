"""
Game Loop - Drives the bots in a session.

Each tick gives every bot one chance to act. A bot acts with
probability `skill`, so weaker bots hesitate more often. How often
tick() is called (timers, intervals) is up to the caller.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

from .manager import Session

logger = logging.getLogger(__name__)


@dataclass
class LoopResult:
    """Outcome of running the loop."""
    ticks: int
    actions_applied: int
    finished: bool
    winner_id: str | None = None
    scores: dict[str, int] = field(default_factory=dict)


class GameLoop:
    """
    Bot driver for one session.

    Usage:
        loop = GameLoop(session, skill=0.6, seed=7)
        loop.tick()              # from a timer, or
        result = loop.run(500)   # to play bots out
    """

    def __init__(self, session: Session, skill: float = 1.0, seed: int | None = None):
        if not 0.0 <= skill <= 1.0:
            raise ValueError(f"skill must be between 0 and 1, got {skill}")
        self.session = session
        self.skill = skill
        self.rng = random.Random(seed)
        self.ticks = 0
        self.actions_applied = 0

    def tick(self) -> int:
        """
        Give every bot one chance to act, in seat order.

        Returns the number of actions applied this tick.
        """
        applied = 0
        for player_id in self.session.game_state.player_ids:
            if self.session.game_state.finished:
                break
            if player_id not in self.session.bots:
                continue
            if self.rng.random() > self.skill:
                continue
            result = self.session.step_bot(player_id)
            if result is not None and result.accepted:
                applied += 1

        self.ticks += 1
        self.actions_applied += applied
        return applied

    def run(self, max_ticks: int) -> LoopResult:
        """Tick until the game finishes or max_ticks is reached."""
        for _ in range(max_ticks):
            if self.session.game_state.finished:
                break
            self.tick()

        state = self.session.game_state
        if not state.finished:
            logger.warning(
                "Session %s unfinished after %d ticks", self.session.session_id, self.ticks
            )
        return LoopResult(
            ticks=self.ticks,
            actions_applied=self.actions_applied,
            finished=state.finished,
            winner_id=state.winner_id,
            scores={p.player_id: p.score for p in state.players},
        )
