"""
Tests for legal action generation.
"""

from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import ActionGenerator, is_legal, legal_actions
from ..engine_core.reducer import Reducer
from ..engine_core.state import GamePhase, PlayerState


def test_generated_actions_are_all_accepted(two_player_state):
    """The generator and the reducer agree on legality."""
    reducer = Reducer()
    state = two_player_state
    for _ in range(15):
        for player_id in state.player_ids:
            for action in legal_actions(state, player_id):
                assert reducer.apply(state, action).accepted, action.describe()
        state = reducer.apply(state, Action.stock_draw("alice")).new_state


def test_stacked_opening_moves(stacked_state):
    """Ace of spades may open any of the eight empty slots."""
    actions = legal_actions(stacked_state, "alice")
    foundation_moves = [a for a in actions if a.action_type == ActionType.NERTS_TO_FOUNDATION]
    assert len(foundation_moves) == 8
    assert actions[-1] == Action.stock_draw("alice")
    assert len(actions) == 9


def test_finished_game_has_no_actions(two_player_state):
    finished = two_player_state._copy_with(phase=GamePhase.FINISHED, winner_id="alice")
    assert legal_actions(finished, "alice") == []


def test_unknown_player_has_no_actions(two_player_state):
    assert ActionGenerator().generate(two_player_state, "mallory") == []


def test_no_stock_draw_when_both_empty(make_card, make_state):
    state = make_state(PlayerState("alice", nerts_pile=[make_card("K♦")]))
    actions = legal_actions(state, "alice")
    assert Action.stock_draw("alice") not in actions


def test_stock_draw_offered_for_recycle(make_card, make_state):
    state = make_state(PlayerState("alice", nerts_pile=[make_card("5♦")], waste=[make_card("9♣")]))
    assert Action.stock_draw("alice") in legal_actions(state, "alice")


def test_runs_from_every_face_up_card(make_card, make_state):
    nine, eight = make_card("9♠"), make_card("8♥")
    state = make_state(PlayerState(
        "alice",
        nerts_pile=[make_card("3♦")],
        tableau=[[nine, eight], [make_card("10♦")], [make_card("9♣")], [make_card("K♥")]],
    ))
    moves = [
        a for a in legal_actions(state, "alice")
        if a.action_type == ActionType.TABLEAU_TO_TABLEAU
    ]
    assert Action.tableau_to_tableau("alice", 0, 1, nine.card_id) in moves
    assert Action.tableau_to_tableau("alice", 0, 2, eight.card_id) in moves
    assert Action.tableau_to_tableau("alice", 2, 1, state.players[0].tableau[2][0].card_id) in moves
    assert len(moves) == 3


def test_face_down_cards_do_not_start_runs(make_card, make_state):
    hidden = make_card("9♠", face_up=False)
    state = make_state(PlayerState(
        "alice",
        nerts_pile=[make_card("3♦")],
        tableau=[[hidden, make_card("8♥")], [make_card("10♦")], [make_card("2♣")], [make_card("K♥")]],
    ))
    moves = legal_actions(state, "alice")
    assert Action.tableau_to_tableau("alice", 0, 1, hidden.card_id) not in moves


def test_nerts_card_may_start_empty_column(make_card, make_state):
    state = make_state(PlayerState("alice", nerts_pile=[make_card("7♦")]))
    moves = [a for a in legal_actions(state, "alice") if a.action_type == ActionType.NERTS_TO_TABLEAU]
    assert len(moves) == 4


def test_is_legal(stacked_state):
    assert is_legal(stacked_state, Action.nerts_to_foundation("alice", 3))
    assert not is_legal(stacked_state, Action.waste_to_foundation("alice", 0))
    assert not is_legal(stacked_state, Action.stock_draw("mallory"))
