"""
Tests for the service layer and its pydantic schemas.
"""

import json

import pydantic
import pytest

from ..api import (
    ActionRequest,
    CardView,
    CreateGameRequest,
    ErrorCode,
    ErrorResponse,
    GameSnapshot,
    NertsService,
    RunBotsRequest,
)
from ..engine_core.action import Action, ActionType
from ..engine_core.state import GamePhase


@pytest.fixture
def service():
    return NertsService()


@pytest.fixture
def game_id(service):
    snapshot = service.create_game(
        CreateGameRequest(player_ids=["me", "bot1"], bot_ids=["bot1"], seed=3)
    )
    return snapshot.game_id


class TestSnapshots:
    """Tests for read-only projections."""

    def test_create_game_snapshot(self, service):
        snapshot = service.create_game(
            CreateGameRequest(player_ids=["me", "bot1"], bot_ids=["bot1"], seed=3)
        )
        assert not snapshot.finished
        assert snapshot.winner_id is None
        assert snapshot.total_cards == 104
        assert len(snapshot.foundations) == 8
        me, bot = snapshot.players
        assert (me.player_id, me.is_bot) == ("me", False)
        assert (bot.player_id, bot.is_bot) == ("bot1", True)
        assert me.nerts_count == 13
        assert me.stock_count == 35
        assert me.waste_top is None
        assert me.nerts_top.face_up

    def test_face_down_card_hides_identity(self, make_card):
        view = CardView.from_card(make_card("Q♠", face_up=False))
        assert view.rank is None
        assert view.suit is None
        assert view.owner_id == "alice"

    def test_face_up_card_shows_identity(self, make_card):
        view = CardView.from_card(make_card("10♥"))
        assert (view.rank, view.suit) == ("10", "♥")

    def test_snapshot_of_finished_state(self, two_player_state):
        finished = two_player_state._copy_with(phase=GamePhase.FINISHED, winner_id="bob")
        snapshot = GameSnapshot.from_state(finished)
        assert snapshot.finished
        assert snapshot.winner_id == "bob"
        assert [p.is_winner for p in snapshot.players] == [False, True]

    def test_snapshot_serializes(self, service, game_id):
        data = json.loads(service.get_state(game_id).model_dump_json())
        assert data["game_id"] == game_id
        assert len(data["players"]) == 2

    def test_get_unknown_game(self, service):
        response = service.get_state("missing")
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.GAME_NOT_FOUND


class TestSubmitAction:
    """Tests for submitting human moves."""

    def test_legal_move(self, service, game_id):
        response = service.submit_action(
            game_id, ActionRequest(action_type=ActionType.STOCK_DRAW, player_id="me")
        )
        assert response.accepted
        assert response.reason is None
        assert response.changes
        me = response.snapshot.players[0]
        assert me.waste_count == 3
        assert me.waste_top.face_up

    def test_illegal_move_is_not_an_error(self, service, game_id):
        before = service.get_state(game_id)
        response = service.submit_action(
            game_id,
            ActionRequest(action_type=ActionType.WASTE_TO_FOUNDATION, player_id="me", foundation_index=0),
        )
        assert not response.accepted
        assert response.reason == "Waste is empty"
        assert response.snapshot == before

    def test_unknown_player(self, service, game_id):
        response = service.submit_action(
            game_id, ActionRequest(action_type=ActionType.STOCK_DRAW, player_id="mallory")
        )
        assert response.error_code == ErrorCode.PLAYER_NOT_FOUND

    def test_unknown_game(self, service):
        response = service.submit_action(
            "missing", ActionRequest(action_type=ActionType.STOCK_DRAW, player_id="me")
        )
        assert response.error_code == ErrorCode.GAME_NOT_FOUND

    def test_raw_dict_request(self, service, game_id):
        response = service.submit_action(game_id, {"action_type": "stock_draw", "player_id": "me"})
        assert response.accepted

    def test_malformed_dict_request(self, service, game_id):
        response = service.submit_action(game_id, {"action_type": "fly", "player_id": "me"})
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.VALIDATION_ERROR
        assert response.details["errors"]


class TestBots:
    """Tests for bot endpoints."""

    def test_bot_step(self, service, game_id):
        response = service.bot_step(game_id, "bot1")
        assert response.accepted
        assert response.changes

    def test_bot_step_for_human(self, service, game_id):
        response = service.bot_step(game_id, "me")
        assert response.error_code == ErrorCode.NOT_A_BOT
        assert response.details == {"bots": ["bot1"]}

    def test_bot_step_after_finish(self, service, game_id):
        session = service.session_manager.get_session(game_id)
        session.game_state = session.game_state._copy_with(phase=GamePhase.FINISHED, winner_id="me")
        response = service.bot_step(game_id, "bot1")
        assert not response.accepted
        assert response.reason == "No action available"

    def test_run_bots_leaves_humans_alone(self, service, game_id):
        response = service.run_bots(game_id, RunBotsRequest(max_ticks=5, seed=1))
        assert response.ticks == 5
        assert not response.finished
        assert 1 <= response.actions_applied <= 5
        assert response.scores["me"] == 0
        assert response.snapshot.players[0].stock_count == 35

    def test_run_bots_unknown_game(self, service):
        response = service.run_bots("missing", RunBotsRequest())
        assert response.error_code == ErrorCode.GAME_NOT_FOUND


class TestGameLifecycle:
    """Tests for listing and ending games."""

    def test_list_and_end(self, service, game_id):
        assert service.list_games() == [game_id]
        assert service.end_game(game_id)
        assert service.list_games() == []
        assert service.get_state(game_id).error_code == ErrorCode.GAME_NOT_FOUND
        assert not service.end_game(game_id)


class TestRequests:
    """Tests for request validation."""

    def test_duplicate_players_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            CreateGameRequest(player_ids=["a", "a"])

    def test_empty_players_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            CreateGameRequest(player_ids=[])

    def test_blank_player_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            CreateGameRequest(player_ids=["a", ""])

    def test_unseated_bot_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            CreateGameRequest(player_ids=["a"], bot_ids=["b"])

    def test_custom_rules_in_request(self, service):
        snapshot = service.create_game(
            CreateGameRequest(player_ids=["a"], rules={"nerts_pile_size": 5})
        )
        assert snapshot.players[0].nerts_count == 5

    def test_action_request_from_json(self):
        request = ActionRequest.model_validate(
            {"action_type": "nerts_to_foundation", "player_id": "me", "foundation_index": 2}
        )
        assert request.to_action() == Action.nerts_to_foundation("me", 2)

    def test_tableau_move_request(self):
        request = ActionRequest(
            action_type="tableau_to_tableau", player_id="me", from_index=0, to_index=1, card_id="me-7♥-3",
        )
        assert request.to_action() == Action.tableau_to_tableau("me", 0, 1, "me-7♥-3")

    def test_unknown_action_type_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            ActionRequest(action_type="shuffle_everything", player_id="me")

    def test_run_bots_bounds(self):
        with pytest.raises(pydantic.ValidationError):
            RunBotsRequest(skill=2.0)
        with pytest.raises(pydantic.ValidationError):
            RunBotsRequest(max_ticks=0)
