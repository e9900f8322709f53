# Command-line interface (text-based play)

import logging
import queue
import sys
import threading

from game.board import Board
from game.events import InputEvent
from game.ruleset import DEFAULT_RULES
from state.game_state import GameState
from state.serializer import snapshot_to_json
from ui.render import format_time, render_board

logger = logging.getLogger(__name__)

KEY_MAP = {
    "a": InputEvent.MOVE_LEFT,
    "d": InputEvent.MOVE_RIGHT,
    "w": InputEvent.COLOR_UP,
    "s": InputEvent.COLOR_DOWN,
    "o": InputEvent.CONFIRM,
    "r": InputEvent.CONFIRM_LONG,
    "p": InputEvent.CANCEL,
    "q": InputEvent.CANCEL_LONG,
}

QUEUE_SIZE = 8
PUT_TIMEOUT_S = 0.1
JOIN_TIMEOUT_S = 1.0


def parse_keys(text):
    """
    Turn one input line into events. An empty line confirms, a line
    starting with '=' types a whole guess (e.g. '=RGBY').

    Args:
        text (str): The raw line.
    Returns:
        list: InputEvent values, or a single str holding a typed guess.
    """
    text = text.strip()
    if not text:
        return [InputEvent.CONFIRM]
    if text.startswith("="):
        return [text[1:].strip().upper()]
    return [KEY_MAP[c] for c in text.lower() if c in KEY_MAP]


class InputReader(threading.Thread):
    """
    Reads lines from a stream and queues the parsed events, blocking when
    the queue is full. Queues CANCEL_LONG at end of input. Gives up once
    stop() was called.
    """

    def __init__(self, events, stream=None):
        super().__init__(daemon=True)
        self.events = events
        self.stream = stream if stream is not None else sys.stdin
        self.stopped = threading.Event()

    def stop(self):
        self.stopped.set()

    def run(self):
        for line in self.stream:
            if self.stopped.is_set():
                return
            for item in parse_keys(line):
                if not self._offer(item):
                    return
        self._offer(InputEvent.CANCEL_LONG)

    def _offer(self, item):
        """Put `item`, waiting while the queue is full. False once stopped."""
        while not self.stopped.is_set():
            try:
                self.events.put(item, timeout=PUT_TIMEOUT_S)
                return True
            except queue.Full:
                continue
        return False


def dispatch(board, item):
    """
    Apply one queued item to the board.

    Returns:
        bool: False once the session is terminated.
    """
    if isinstance(item, str):
        try:
            board.set_guess(item)
        except ValueError as e:
            print(f"Invalid input: {e}")
        return board.running
    running = board.handle_event(item)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s -> %s", item.value, snapshot_to_json(board.get_current_state()))
    return running


def gameloop(rules=None, stream=None, clock=None, out=print):
    """
    Run an interactive session until the player quits.

    Args:
        rules (dict, optional): Ruleset to play.
        stream (iterable, optional): Line source, stdin by default.
        clock (callable, optional): Millisecond clock for the board.
        out (callable): Frame sink.
    Returns:
        Board: The board as it was when the loop ended.
    """
    rules = rules or DEFAULT_RULES
    tick_s = rules.get("tick_ms", 100) / 1000

    out("=== Hirn CLI ===")
    out(
        "Keys: a/d move, w/s color, o or Enter confirm, r reveal, "
        "p pause, q quit, =RGBY types a guess.\n"
    )

    board = Board(rules=rules, clock=clock)
    events = queue.Queue(maxsize=QUEUE_SIZE)
    reader = InputReader(events, stream)
    reader.start()
    try:
        _run(board, events, tick_s, out)
    finally:
        # stdin may still be blocked in readline; the thread is a daemon
        reader.stop()
        reader.join(JOIN_TIMEOUT_S)

    out("\n=== Game Over ===")
    if board.is_over or board.state is GameState.REVEAL:
        out(f"The secret code was: {board.reveal_code()}")
    return board


def _run(board, events, tick_s, out):
    """Dispatch queued input and tick the board until it stops running."""
    out(render_board(board.get_current_state()))
    shown_time = format_time(board.total_time_ms())

    while board.running:
        try:
            item = events.get(timeout=tick_s)
        except queue.Empty:
            item = None

        if item is not None:
            if not dispatch(board, item):
                break
            out(render_board(board.get_current_state()))
            shown_time = format_time(board.total_time_ms())

        if board.state is GameState.PLAYING:
            timed_out = board.tick()
            now_shown = format_time(board.total_time_ms())
            # Redraw the clock once per displayed second
            if timed_out or now_shown != shown_time:
                out(render_board(board.get_current_state()))
                shown_time = now_shown

