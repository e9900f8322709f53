import logging

from .events import InputEvent
from .guess import Guess
from .ruleset import DEFAULT_RULES, validate_rules
from .secret_code import Code
from .timer import PlayTimer, monotonic_ms
from state.game_state import GameSnapshot, GameState

logger = logging.getLogger(__name__)


class Board:
    """Main game board class: owns one session, secret code, guess buffer,
    cursor, attempt history, play timer and the game state machine.

    Attributes:
        rules (dict): The ruleset of the session.
        state (GameState): The active state.
        secret_code (Code): The hidden code.
        current_guess (Guess): The guess being edited; kept between attempts.
        cursor_position (int): Slot affected by color changes.
        guesses (list[Guess]): Finalized guesses with feedback, oldest first.
        timer (PlayTimer): Active play time accounting.
        running (bool): False once the player quit.
    """

    def __init__(self, rules=None, clock=None, rng=None):
        """
        Initialize the board and start a session.

        Args:
            rules (dict, optional): Ruleset. Defaults to DEFAULT_RULES.
            clock (callable, optional): Monotonic millisecond clock.
            rng (random.Random, optional): Entropy for secret generation.
        Raises:
            RulesError: If the ruleset cannot produce a playable game.
        """
        self.rules = validate_rules(rules or DEFAULT_RULES)
        self.clock = clock or monotonic_ms
        self.rng = rng
        self.max_attempts = self.rules["max_attempts"]
        self.timer = PlayTimer(self.rules["max_time_ms"])
        self.running = True
        self.initialize_game()

    def initialize_game(self, secret=None):
        """
        Set up a new session: generate a secret code and reset state.

        Args:
            secret (list | str, optional): Use this code instead of a random one.
        """
        if secret is None:
            self.secret_code = Code(rules=self.rules)
            self.secret_code.generate_random(self.rng)
        else:
            self.secret_code = Code(secret, rules=self.rules)
        self.current_guess = Guess(rules=self.rules)
        self.cursor_position = 0
        self.guesses = []
        self.state = GameState.PLAYING
        self.timer.start(self.clock())
        logger.info(
            "New %s session: %d pegs, %d colors, %d attempts",
            self.rules["name"],
            self.rules["code_length"],
            self.rules["num_colors"],
            self.max_attempts,
        )

    # --- Queries ---

    @property
    def attempts_used(self):
        return len(self.guesses)

    @property
    def is_won(self):
        return self.state is GameState.WON

    @property
    def is_over(self):
        return self.state in (GameState.WON, GameState.LOST)

    def remaining_attempts(self):
        """Return how many guesses are left."""
        return max(0, self.max_attempts - self.attempts_used)

    def total_time_ms(self):
        """Play time so far, frozen outside PLAYING and clamped to the budget."""
        return self.timer.total(
            self.clock(), self.state is GameState.PLAYING
        )

    def is_guess_complete(self):
        return self.current_guess.is_complete()

    def is_guess_different(self):
        """First guess is always different; later ones must change a slot."""
        previous = self.guesses[-1] if self.guesses else None
        return self.current_guess.differs_from(previous)

    def can_submit(self):
        return (
            self.state is GameState.PLAYING
            and self.is_guess_complete()
            and self.is_guess_different()
        )

    def get_feedback_history(self):
        """Return the full history of guesses and feedback."""
        return [(g.get_guess(), g.get_feedback()) for g in self.guesses]

    def reveal_code(self):
        """Return the secret code."""
        return self.secret_code.as_string()

    def get_current_state(self):
        """Return a read-only snapshot for rendering or logging."""
        return GameSnapshot(
            rules=self.rules,
            state=self.state,
            current_guess=list(self.current_guess.sequence),
            cursor_position=self.cursor_position,
            guesses=list(self.guesses),
            attempts_used=self.attempts_used,
            total_time_ms=self.total_time_ms(),
            can_submit=self.can_submit(),
            code=self.secret_code.as_string(),
        )

    # --- Editing ---

    def move_cursor(self, delta):
        if self.state is not GameState.PLAYING:
            return
        last = self.rules["code_length"] - 1
        self.cursor_position = min(last, max(0, self.cursor_position + delta))

    def adjust_color(self, step):
        if self.state is not GameState.PLAYING:
            return
        self.current_guess.cycle(self.cursor_position, step)

    # --- Transitions ---

    def submit_guess(self):
        """
        Evaluate the current guess if it may be submitted, record it, and
        move to WON or LOST when the session ends.

        Returns:
            bool: True if the guess was evaluated, False if it was ignored.
        """
        if not self.can_submit():
            logger.debug(
                "Ignored submission of %s in state %s",
                self.current_guess,
                self.state.value,
            )
            return False

        feedback = self.secret_code.evaluate(self.current_guess)
        won = self.secret_code.matches(self.current_guess)

        # Record a frozen copy; the buffer itself carries over
        entry = self.current_guess.copy()
        entry.apply_feedback(feedback)
        self._record(entry)

        black, white = entry.get_feedback()
        logger.debug(
            "Attempt %d: %s -> black=%d white=%d",
            self.attempts_used,
            entry,
            black,
            white,
        )

        if won:
            self._leave_play(GameState.WON)
            logger.info(
                "Code %s cracked in %d attempts", self.reveal_code(), self.attempts_used
            )
        elif self.attempts_used >= self.max_attempts:
            self._leave_play(GameState.LOST)
            logger.info("Out of attempts, code was %s", self.reveal_code())
        return True

    def set_guess(self, guess_input):
        """
        Replace the whole guess buffer, e.g. from typed symbols. Does not
        submit.

        Args:
            guess_input (list | str): The colors to place, e.g. 'RGBY'.
        Raises:
            ValueError: If the colors break the ruleset.
        """
        if self.state is not GameState.PLAYING:
            return
        typed = Guess(guess_input, rules=self.rules)
        typed.validate(strict=True)
        self.current_guess.set_colors(typed.sequence)

    def pause(self):
        if self.state is GameState.PLAYING:
            self._leave_play(GameState.PAUSED)
            logger.debug("Paused at %d ms", self.timer.elapsed_ms)

    def resume(self):
        if self.state is GameState.PAUSED:
            self._enter_play()
            logger.debug("Resumed")

    def reveal(self):
        if self.state is GameState.PLAYING:
            self._leave_play(GameState.REVEAL)

    def hide_code(self):
        if self.state is GameState.REVEAL:
            self._enter_play()

    def restart(self):
        """Start a new session after a win or loss."""
        if self.is_over:
            self.initialize_game()

    def quit(self):
        self.running = False
        logger.info("Session closed in state %s", self.state.value)

    def tick(self):
        """
        Periodic time check. While playing, force a loss once the play time
        reaches the budget, regardless of attempts left.

        Returns:
            bool: True if the time limit ended the game on this tick.
        """
        if self.state is not GameState.PLAYING:
            return False
        now = self.clock()
        if self.timer.total(now, True) >= self.timer.max_time_ms:
            self.timer.expire()
            self.state = GameState.LOST
            logger.info("Time is up, code was %s", self.reveal_code())
            return True
        return False

    def handle_event(self, event):
        """
        Apply one input event to the state machine. Events that have no
        transition in the current state are ignored.

        Args:
            event (InputEvent): The input to apply.
        Returns:
            bool: False once the session is terminated, True otherwise.
        """
        state = self.state

        if event is InputEvent.CANCEL_LONG:
            self.quit()
        elif event is InputEvent.CANCEL:
            if state is GameState.PAUSED:
                self.quit()
            else:
                self.pause()
        elif event is InputEvent.MOVE_LEFT:
            self.move_cursor(-1)
        elif event is InputEvent.MOVE_RIGHT:
            self.move_cursor(1)
        elif event is InputEvent.COLOR_UP:
            self.adjust_color(1)
        elif event is InputEvent.COLOR_DOWN:
            self.adjust_color(-1)
        elif event is InputEvent.CONFIRM:
            if state is GameState.PLAYING:
                self.submit_guess()
            elif state is GameState.PAUSED:
                self.resume()
            elif state is GameState.REVEAL:
                self.hide_code()
            else:
                self.restart()
        elif event is InputEvent.CONFIRM_LONG:
            if state is GameState.PLAYING:
                self.reveal()
            else:
                self.hide_code()

        return self.running

    def _record(self, entry):
        if self.attempts_used >= self.max_attempts:
            raise RuntimeError(
                f"History is full ({self.max_attempts} attempts)."
            )
        self.guesses.append(entry)

    def _leave_play(self, new_state):
        self.timer.fold(self.clock())
        self.state = new_state

    def _enter_play(self):
        self.timer.resume(self.clock())
        self.state = GameState.PLAYING
