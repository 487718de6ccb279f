"""Tests for repetition and stagnation tracking and the per-game session."""

import pytest

from taifho.ai.position_history import (
    PositionHistory,
    previous_player,
    total_distance,
)
from taifho.ai.session import (
    MAX_RECENT_MOVES,
    AISession,
    get_default_session,
    reset_ai_history,
)
from taifho.ai.transposition_table import TTFlag
from taifho.models import PlayerColor

from tests.helpers import make_move

RED = PlayerColor.RED
BLUE = PlayerColor.BLUE
GREEN = PlayerColor.GREEN
YELLOW = PlayerColor.YELLOW


class TestRepetition:
    def test_counts_increase(self, initial_board):
        history = PositionHistory()
        assert history.record_position(initial_board, RED) == 1
        assert history.record_position(initial_board, RED) == 2
        assert history.position_count(initial_board, RED) == 2
        assert history.move_count == 2

    def test_side_to_move_is_part_of_position(self, initial_board):
        history = PositionHistory()
        history.record_position(initial_board, RED)
        assert history.position_count(initial_board, BLUE) == 0

    def test_would_cause_repetition_and_draw(self, initial_board):
        history = PositionHistory()
        history.record_position(initial_board, RED)
        assert not history.would_cause_repetition(initial_board, RED)
        history.record_position(initial_board, RED)
        assert history.would_cause_repetition(initial_board, RED)
        assert not history.is_draw_by_repetition(initial_board, RED)
        history.record_position(initial_board, RED)
        assert history.is_draw_by_repetition(initial_board, RED)

    def test_repetition_penalty(self, initial_board):
        history = PositionHistory()
        assert history.repetition_penalty(initial_board, RED) == 0.0
        history.record_position(initial_board, RED)
        assert history.repetition_penalty(initial_board, RED) == pytest.approx(2020.0)
        history.record_position(initial_board, RED)
        assert history.repetition_penalty(initial_board, RED) == pytest.approx(4080.0)

    def test_unique_and_repeated_counts(self, initial_board):
        history = PositionHistory()
        history.record_position(initial_board, RED)
        history.record_position(initial_board, RED)
        history.record_position(initial_board, BLUE)
        assert history.unique_position_count() == 2
        assert history.repeated_position_count() == 1

    def test_reset(self, initial_board):
        history = PositionHistory()
        history.record_position(initial_board, RED)
        history.reset()
        assert history.move_count == 0
        assert history.position_count(initial_board, RED) == 0
        assert history.stagnation_count(BLUE) == 0


class TestStagnation:
    def test_grace_period(self, initial_board):
        history = PositionHistory()
        for _ in range(3):
            history.record_position(initial_board, BLUE, mover=RED)
        assert history.stagnation_count(RED) == 2
        assert history.stagnation_penalty(RED) == 0.0

    def test_penalty_after_grace(self, initial_board):
        history = PositionHistory()
        for _ in range(5):
            history.record_position(initial_board, BLUE, mover=RED)
        assert history.stagnation_count(RED) == 4
        # 500 * 1.5 ** (4 - 3) * (5 / 50)
        assert history.stagnation_penalty(RED) == pytest.approx(75.0)
        assert history.combined_penalty(initial_board, RED) == pytest.approx(75.0)

    def test_progress_resets_counter(self, initial_board):
        history = PositionHistory()
        for _ in range(4):
            history.record_position(initial_board, BLUE, mover=RED)
        advanced = initial_board.with_move(1, 0, 1, 1)
        history.record_position(advanced, BLUE, mover=RED)
        assert history.stagnation_count(RED) == 0

    def test_mover_inferred_from_turn_order(self, initial_board):
        history = PositionHistory()
        history.record_position(initial_board, BLUE)
        history.record_position(initial_board, BLUE)
        assert history.stagnation_count(RED) == 1
        assert history.stagnation_count(BLUE) == 0


class TestHelpers:
    def test_total_distance(self, initial_board):
        assert total_distance(initial_board, RED) == 8 * 9
        assert total_distance(initial_board, YELLOW) == 0

    def test_previous_player(self, initial_board, initial_board_4p):
        assert previous_player(initial_board, BLUE) == RED
        assert previous_player(initial_board, RED) == BLUE
        assert previous_player(initial_board_4p, RED) == YELLOW
        assert previous_player(initial_board_4p, BLUE) == GREEN


class TestAISession:
    def test_search_state_per_color(self):
        session = AISession()
        assert session.for_player(RED) is session.for_player(RED)
        assert session.for_player(RED) is not session.for_player(BLUE)

    def test_recent_move_buffers_bounded(self, initial_board):
        state = AISession().for_player(RED)
        move = make_move(initial_board, 1, 0, 1, 1)
        for _ in range(MAX_RECENT_MOVES + 5):
            state.recent_moves.append(move)
        assert len(state.recent_moves) == MAX_RECENT_MOVES

    def test_oscillation_checks(self, initial_board):
        state = AISession().for_player(RED)
        out = make_move(initial_board, 1, 0, 1, 1)
        back = make_move(initial_board.with_move(1, 0, 1, 1), 1, 1, 1, 0)
        state.recent_moves.append(out)
        state.mcts_recent_moves.append(out)
        assert state.is_reverse_of_recent(back)
        assert not state.is_reverse_of_recent(out)
        assert state.is_mcts_oscillation(back)
        assert state.is_mcts_oscillation(out)

    def test_mark_finished_once(self):
        session = AISession()
        session.mark_finished(GREEN)
        session.mark_finished(GREEN)
        session.mark_finished(RED)
        assert session.finished == [GREEN, RED]
        assert session.finished_set == frozenset({GREEN, RED})

    def test_reset_clears_everything(self, initial_board):
        session = AISession(rng_seed=5)
        state = session.for_player(RED)
        state.transposition_table.store(1, 1, 0.0, TTFlag.EXACT)
        state.history.update(make_move(initial_board, 1, 0, 1, 1), 2)
        session.position_history.record_position(initial_board, RED)
        session.mark_finished(BLUE)

        session.reset()

        assert len(state.transposition_table) == 0
        assert len(state.history) == 0
        assert session.move_count == 0
        assert session.finished == []
        assert len(session.for_player(RED).transposition_table) == 0

    def test_seeded_rng_replays_after_reset(self):
        session = AISession(rng_seed=99)
        first = [session.rng.random() for _ in range(3)]
        session.reset()
        assert [session.rng.random() for _ in range(3)] == first

    def test_reset_ai_history_default_session(self, initial_board):
        default = get_default_session()
        default.position_history.record_position(initial_board, RED)
        reset_ai_history()
        assert default.move_count == 0

    def test_reset_ai_history_explicit_session(self, initial_board):
        session = AISession()
        session.position_history.record_position(initial_board, RED)
        reset_ai_history(session)
        assert session.move_count == 0

    def test_record_position_helper(self, initial_board):
        from taifho.ai import record_position

        session = AISession()
        assert record_position(initial_board, RED, session) == 1
        assert record_position(initial_board, RED, session) == 2
        assert record_position(initial_board, RED) == 1
        assert get_default_session().move_count == 1

    def test_record_position_helper_passes_mover(self, initial_board_4p):
        from taifho.ai import record_position

        # Green has finished, so red's move hands the turn straight to blue.
        session = AISession()
        for _ in range(2):
            record_position(initial_board_4p, BLUE, session, mover=RED)
        history = session.position_history
        assert history.stagnation_count(RED) == 1
        assert history.stagnation_count(GREEN) == 0
