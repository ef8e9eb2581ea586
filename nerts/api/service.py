"""
Nerts Service - Business logic layer between clients and the engine.

The service:
1. Translates requests to engine calls
2. Manages sessions
3. Runs bots
4. Formats snapshots for renderers

This layer is framework-agnostic; a UI or any transport can sit on top.
Lookup failures come back as ErrorResponse objects, not exceptions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging

from pydantic import ValidationError

from ..session import GameLoop, Session, SessionManager
from .schemas import (
    ActionRequest,
    ActionResponse,
    CreateGameRequest,
    ErrorCode,
    ErrorResponse,
    GameSnapshot,
    RunBotsRequest,
    RunBotsResponse,
)

logger = logging.getLogger(__name__)


@dataclass
class NertsService:
    """
    Main service for game clients.

    Usage:
        service = NertsService()
        snapshot = service.create_game(CreateGameRequest(player_ids=["me", "bot1"], bot_ids=["bot1"]))
        response = service.submit_action(snapshot.game_id, ActionRequest(...))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_game(self, request: CreateGameRequest) -> GameSnapshot:
        """Deal a new game and return its first snapshot."""
        session = self.session_manager.create_session(
            player_ids=request.player_ids,
            bot_ids=request.bot_ids,
            random_seed=request.seed,
            rules=request.rules,
        )
        return self._snapshot(session)

    def get_state(self, game_id: str) -> GameSnapshot | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if session is None:
            return self._not_found(game_id)
        return self._snapshot(session)

    def submit_action(
        self, game_id: str, request: ActionRequest | dict[str, Any]
    ) -> ActionResponse | ErrorResponse:
        """
        Apply a player's move.

        Accepts a parsed ActionRequest or its raw dict form. Illegal moves
        are not errors: the response has accepted=False and an unchanged
        snapshot.
        """
        if isinstance(request, dict):
            try:
                request = ActionRequest.model_validate(request)
            except ValidationError as e:
                return ErrorResponse(
                    error="Invalid action request",
                    error_code=ErrorCode.VALIDATION_ERROR,
                    details={"errors": [err["msg"] for err in e.errors()]},
                )

        session = self.session_manager.get_session(game_id)
        if session is None:
            return self._not_found(game_id)
        if session.game_state.get_player(request.player_id) is None:
            return ErrorResponse(
                error=f"Player {request.player_id} is not in game {game_id}",
                error_code=ErrorCode.PLAYER_NOT_FOUND,
            )

        result = session.submit(request.to_action())
        return ActionResponse(
            game_id=game_id,
            accepted=result.accepted,
            reason=result.reason,
            score_delta=result.score_delta,
            changes=result.changes,
            snapshot=self._snapshot(session),
        )

    def bot_step(self, game_id: str, player_id: str) -> ActionResponse | ErrorResponse:
        """Let one bot make one move."""
        session = self.session_manager.get_session(game_id)
        if session is None:
            return self._not_found(game_id)
        if player_id not in session.bots:
            return ErrorResponse(
                error=f"Player {player_id} is not a bot in game {game_id}",
                error_code=ErrorCode.NOT_A_BOT,
                details={"bots": sorted(session.bots)},
            )

        result = session.step_bot(player_id)
        if result is None:
            return ActionResponse(
                game_id=game_id,
                accepted=False,
                reason="No action available",
                snapshot=self._snapshot(session),
            )
        return ActionResponse(
            game_id=game_id,
            accepted=result.accepted,
            reason=result.reason,
            score_delta=result.score_delta,
            changes=result.changes,
            snapshot=self._snapshot(session),
        )

    def run_bots(self, game_id: str, request: RunBotsRequest) -> RunBotsResponse | ErrorResponse:
        """Tick every bot until the game ends or max_ticks runs out."""
        session = self.session_manager.get_session(game_id)
        if session is None:
            return self._not_found(game_id)

        loop = GameLoop(session, skill=request.skill, seed=request.seed)
        result = loop.run(request.max_ticks)
        return RunBotsResponse(
            game_id=game_id,
            ticks=result.ticks,
            actions_applied=result.actions_applied,
            finished=result.finished,
            winner_id=result.winner_id,
            scores=result.scores,
            snapshot=self._snapshot(session),
        )

    def end_game(self, game_id: str) -> bool:
        return self.session_manager.end_session(game_id)

    def list_games(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def _snapshot(self, session: Session) -> GameSnapshot:
        return GameSnapshot.from_state(session.game_state, bot_ids=set(session.bots))

    def _not_found(self, game_id: str) -> ErrorResponse:
        logger.debug("Game %s not found", game_id)
        return ErrorResponse(
            error=f"Game {game_id} not found",
            error_code=ErrorCode.GAME_NOT_FOUND,
        )
