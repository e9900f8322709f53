# Autoplay: plays a solver's guesses through the board's input events
from __future__ import annotations

import time
from dataclasses import dataclass, field

from game.events import InputEvent
from state.game_state import GameState


@dataclass
class SessionResult:
    rules: str
    won: bool
    attempts: int
    play_time_ms: int
    secret: str
    # candidates left after each attempt
    candidates: list[int] = field(default_factory=list)
    # wall-clock seconds the solver needed per attempt
    turn_times: list[float] = field(default_factory=list)


def color_steps(current, target, num_colors) -> int:
    """
    Shortest signed number of color steps from `current` to `target`
    on the NONE..num_colors cycle.
    """
    size = num_colors + 1
    up = (target - current) % size
    down = (current - target) % size
    return up if up <= down else -down


def guess_events(board, target) -> list[InputEvent]:
    """
    Events that turn the board's current guess into `target`, visiting
    slots left to right from the current cursor position.

    Args:
        board (Board): The board to drive.
        target (Sequence[PegColor]): Wanted colors.
    Returns:
        list[InputEvent]: Moves and color changes, no confirm.
    """
    events = []
    cursor = board.cursor_position
    num_colors = board.rules["num_colors"]
    for pos, (have, want) in enumerate(zip(board.current_guess.sequence, target)):
        if have == want:
            continue
        move = InputEvent.MOVE_RIGHT if pos > cursor else InputEvent.MOVE_LEFT
        events.extend([move] * abs(pos - cursor))
        cursor = pos
        steps = color_steps(have, want, num_colors)
        color = InputEvent.COLOR_UP if steps > 0 else InputEvent.COLOR_DOWN
        events.extend([color] * abs(steps))
    return events


def enter_guess(board, target, clock=None, step_ms=0):
    """
    Drive the board's input until its current guess equals `target`.

    Args:
        board (Board): The board to drive.
        target (Sequence[PegColor]): Wanted colors.
        clock (StepClock, optional): Advanced by `step_ms` per event.
        step_ms (int): Simulated time per key press.
    """
    for event in guess_events(board, target):
        board.handle_event(event)
        if clock is not None:
            clock.advance(step_ms)
            board.tick()


def play_session(board, solver, clock=None, step_ms=0) -> SessionResult:
    """
    Play one session to the end with `solver` choosing the guesses.

    Args:
        board (Board): A board in PLAYING state.
        solver (CandidateSolver): Fresh solver for the board's rules.
        clock (StepClock, optional): Simulated clock of the board.
        step_ms (int): Simulated time per key press.
    Returns:
        SessionResult: Outcome of the session.
    """
    candidates = []
    turn_times = []

    while board.state is GameState.PLAYING:
        start = time.perf_counter()
        guess = solver.choose_guess()
        turn_times.append(time.perf_counter() - start)

        enter_guess(board, guess, clock=clock, step_ms=step_ms)
        if board.state is not GameState.PLAYING:
            # Time ran out while entering the guess
            break
        board.handle_event(InputEvent.CONFIRM)
        if clock is not None:
            clock.advance(step_ms)

        black, white = board.guesses[-1].get_feedback()
        candidates.append(solver.apply_feedback(guess, (black, white)))
        board.tick()

    return SessionResult(
        rules=board.rules["name"],
        won=board.is_won,
        attempts=board.attempts_used,
        play_time_ms=board.total_time_ms(),
        secret=board.reveal_code(),
        candidates=candidates,
        turn_times=turn_times,
    )
