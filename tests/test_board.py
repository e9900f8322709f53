"""
Tests for the board engine: guess evaluation, state machine and timer.
"""

import pytest

from game.board import Board
from game.colors import PegColor
from game.events import InputEvent
from game.secret_code import to_colors
from state.game_state import GameState


def press(board, *events):
    for event in events:
        board.handle_event(event)


class TestNewSession:
    def test_initial_state(self, board):
        assert board.state is GameState.PLAYING
        assert board.attempts_used == 0
        assert board.cursor_position == 0
        assert board.current_guess.sequence == [PegColor.NONE] * 4
        assert board.total_time_ms() == 0
        assert board.running

    def test_random_secret_follows_rules(self, clock, rng, hirn_rules):
        board = Board(rules=hirn_rules, clock=clock, rng=rng)
        assert board.secret_code.is_valid
        assert len(set(board.secret_code.sequence)) == 4


class TestEditing:
    def test_cursor_clamped(self, board):
        press(board, InputEvent.MOVE_LEFT)
        assert board.cursor_position == 0
        press(board, *[InputEvent.MOVE_RIGHT] * 10)
        assert board.cursor_position == 3

    def test_color_cycles_at_cursor(self, board):
        press(board, InputEvent.MOVE_RIGHT, InputEvent.COLOR_DOWN)
        assert board.current_guess.sequence[1] is PegColor.YELLOW
        press(board, *[InputEvent.COLOR_UP] * 5)
        assert board.current_guess.sequence[1] is PegColor.YELLOW
        press(board, InputEvent.COLOR_UP)
        assert board.current_guess.sequence[1] is PegColor.NONE

    def test_set_guess_rejects_bad_colors(self, board):
        with pytest.raises(ValueError):
            board.set_guess("RRGB")
        assert board.current_guess.sequence == [PegColor.NONE] * 4


class TestSubmission:
    def test_incomplete_guess_ignored(self, board):
        press(board, InputEvent.COLOR_UP, InputEvent.CONFIRM)
        assert board.attempts_used == 0
        assert not board.can_submit()

    def test_non_winning_guess_recorded(self, board):
        board.set_guess("GRBY")
        press(board, InputEvent.CONFIRM)
        assert board.attempts_used == 1
        assert board.state is GameState.PLAYING
        assert board.get_feedback_history() == [(to_colors("GRBY"), (2, 2))]

    def test_guess_carries_over(self, board):
        board.set_guess("GRBY")
        press(board, InputEvent.CONFIRM)
        assert board.current_guess.sequence == to_colors("GRBY")

    def test_identical_resubmission_rejected(self, board):
        board.set_guess("GRBY")
        press(board, InputEvent.CONFIRM)
        assert not board.is_guess_different()
        press(board, InputEvent.CONFIRM)
        assert board.attempts_used == 1

    def test_history_entries_are_frozen(self, board):
        board.set_guess("GRBY")
        press(board, InputEvent.CONFIRM, InputEvent.COLOR_UP)
        assert board.guesses[0].sequence == to_colors("GRBY")
        assert board.current_guess.sequence[0] is PegColor.BLUE

    def test_exact_guess_wins(self, board, clock):
        clock.advance(4_000)
        board.set_guess("RGBY")
        press(board, InputEvent.CONFIRM)
        assert board.state is GameState.WON
        assert board.is_won and board.is_over
        assert board.guesses[-1].get_feedback() == (4, 0)
        # Timer frozen at the win
        clock.advance(10_000)
        assert board.total_time_ms() == 4_000

    def test_lost_after_last_attempt(self, make_board, short_rules):
        board = make_board("RGBY", rules=short_rules)
        for guess in ("OOOO", "PPPP", "OOPP"):
            assert board.state is GameState.PLAYING
            board.set_guess(guess)
            press(board, InputEvent.CONFIRM)
        assert board.state is GameState.LOST
        assert board.attempts_used == short_rules["max_attempts"]
        assert board.remaining_attempts() == 0
        # No further attempts can be recorded
        assert board.submit_guess() is False
        assert board.attempts_used == 3

    def test_win_on_last_attempt(self, make_board, short_rules):
        board = make_board("RGBY", rules=short_rules)
        for guess in ("OOOO", "PPPP", "RGBY"):
            board.set_guess(guess)
            press(board, InputEvent.CONFIRM)
        assert board.state is GameState.WON

    def test_attempts_never_decrease(self, make_board, short_rules):
        board = make_board("RGBY", rules=short_rules)
        seen = [board.attempts_used]
        for guess in ("OOOO", "OOOO", "PPPP", "PPPP", "OOPP"):
            board.set_guess(guess)
            press(board, InputEvent.CONFIRM)
            seen.append(board.attempts_used)
        assert board.state is GameState.LOST
        assert seen == sorted(seen)
        assert max(seen) == short_rules["max_attempts"]


class TestStateMachine:
    def test_pause_and_resume(self, board):
        press(board, InputEvent.CANCEL)
        assert board.state is GameState.PAUSED
        press(board, InputEvent.MOVE_RIGHT, InputEvent.COLOR_UP)
        assert board.cursor_position == 0
        assert board.current_guess.sequence[0] is PegColor.NONE
        press(board, InputEvent.CONFIRM)
        assert board.state is GameState.PLAYING

    def test_cancel_while_paused_quits(self, board):
        press(board, InputEvent.CANCEL)
        assert board.handle_event(InputEvent.CANCEL) is False
        assert not board.running

    def test_long_cancel_quits_from_playing(self, board):
        assert board.handle_event(InputEvent.CANCEL_LONG) is False

    def test_reveal_and_back(self, board):
        press(board, InputEvent.CONFIRM_LONG)
        assert board.state is GameState.REVEAL
        assert board.get_current_state().secret_code == "RGBY"
        press(board, InputEvent.CONFIRM)
        assert board.state is GameState.PLAYING
        assert board.get_current_state().secret_code is None
        press(board, InputEvent.CONFIRM_LONG, InputEvent.CONFIRM_LONG)
        assert board.state is GameState.PLAYING

    def test_reveal_does_not_submit(self, board):
        board.set_guess("GRBY")
        press(board, InputEvent.CONFIRM_LONG, InputEvent.CONFIRM)
        assert board.attempts_used == 0

    def test_confirm_after_win_restarts(self, board, clock):
        board.set_guess("RGBY")
        press(board, InputEvent.MOVE_RIGHT, InputEvent.CONFIRM)
        clock.advance(1_000)
        press(board, InputEvent.CONFIRM)
        assert board.state is GameState.PLAYING
        assert board.attempts_used == 0
        assert board.cursor_position == 0
        assert board.current_guess.sequence == [PegColor.NONE] * 4
        assert board.total_time_ms() == 0
        assert board.secret_code.is_valid

    def test_ignored_events_when_over(self, board):
        board.set_guess("RGBY")
        press(board, InputEvent.CONFIRM)
        press(board, InputEvent.CANCEL, InputEvent.CONFIRM_LONG, InputEvent.MOVE_RIGHT)
        assert board.state is GameState.WON
        assert board.running
        assert board.handle_event(InputEvent.CANCEL_LONG) is False


class TestTimer:
    def test_pause_resume_sums_active_intervals(self, board, clock):
        active = [1_500, 700, 3_200, 50]
        for interval in active:
            clock.advance(interval)
            press(board, InputEvent.CANCEL)
            clock.advance(60_000)
            assert board.total_time_ms() == board.timer.elapsed_ms
            press(board, InputEvent.CONFIRM)
        assert board.timer.elapsed_ms == sum(active)
        assert board.total_time_ms() == sum(active)

    def test_reveal_time_not_counted(self, board, clock):
        clock.advance(1_000)
        press(board, InputEvent.CONFIRM_LONG)
        clock.advance(5_000)
        press(board, InputEvent.CONFIRM)
        clock.advance(1_000)
        assert board.total_time_ms() == 2_000

    def test_time_limit_forces_loss(self, make_board, short_rules, clock):
        board = make_board("RGBY", rules=short_rules)
        clock.advance(9_999)
        assert board.tick() is False
        assert board.state is GameState.PLAYING
        clock.advance(1)
        assert board.tick() is True
        assert board.state is GameState.LOST
        assert board.attempts_used == 0
        clock.advance(5_000)
        assert board.total_time_ms() == short_rules["max_time_ms"]

    def test_total_clamped_before_tick(self, make_board, short_rules, clock):
        board = make_board("RGBY", rules=short_rules)
        clock.advance(25_000)
        assert board.total_time_ms() == short_rules["max_time_ms"]
        board.tick()
        assert board.timer.elapsed_ms == short_rules["max_time_ms"]

    def test_pause_after_budget_spent_loses_on_next_tick(
        self, make_board, short_rules, clock
    ):
        board = make_board("RGBY", rules=short_rules)
        clock.advance(12_000)
        press(board, InputEvent.CANCEL)
        assert board.state is GameState.PAUSED
        assert board.timer.elapsed_ms == short_rules["max_time_ms"]
        clock.advance(30_000)
        press(board, InputEvent.CONFIRM)
        assert board.state is GameState.PLAYING
        assert board.tick() is True
        assert board.state is GameState.LOST
        assert board.total_time_ms() == short_rules["max_time_ms"]

    def test_tick_ignored_while_paused(self, make_board, short_rules, clock):
        board = make_board("RGBY", rules=short_rules)
        clock.advance(5_000)
        press(board, InputEvent.CANCEL)
        clock.advance(60_000)
        assert board.tick() is False
        assert board.state is GameState.PAUSED
        press(board, InputEvent.CONFIRM)
        clock.advance(4_999)
        assert board.tick() is False
        clock.advance(1)
        assert board.tick() is True


class TestSnapshot:
    def test_snapshot_hides_code_while_playing(self, board):
        data = board.get_current_state().to_dict()
        assert "secret_code" not in data
        assert data["state"] == "playing"
        assert data["current_guess"] == "...."
        assert data["max_attempts"] == 99

    def test_snapshot_reveal_flag(self, board):
        data = board.get_current_state().to_dict(reveal_code=True)
        assert data["secret_code"] == "RGBY"

    def test_snapshot_history(self, board):
        board.set_guess("GRBY")
        press(board, InputEvent.CONFIRM)
        snapshot = board.get_current_state()
        assert snapshot.last_feedback == (2, 2)
        assert snapshot.to_dict()["guesses"] == [{"guess": "GRBY", "feedback": [2, 2]}]
        assert snapshot.can_submit is False
