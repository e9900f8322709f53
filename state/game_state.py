# state/game_state.py
from enum import Enum


class GameState(Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    WON = "won"
    LOST = "lost"
    REVEAL = "reveal"


# States in which the secret code may be shown
CODE_VISIBLE = (GameState.REVEAL, GameState.WON, GameState.LOST)


class GameSnapshot:
    """Read-only view of a board, for renderers and logs"""

    def __init__(
        self,
        rules,
        state,
        current_guess,
        cursor_position,
        guesses,
        attempts_used,
        total_time_ms,
        can_submit,
        code=None,
    ):
        self.rules = rules
        self.state = state
        self.current_guess = current_guess
        self.cursor_position = cursor_position
        self.guesses = guesses
        self.attempts_used = attempts_used
        self.total_time_ms = total_time_ms
        self.can_submit = can_submit
        self._code = code

    @property
    def secret_code(self):
        # Hidden unless the state exposes it
        return self._code if self.state in CODE_VISIBLE else None

    @property
    def max_attempts(self):
        return self.rules["max_attempts"]

    @property
    def last_feedback(self):
        return self.guesses[-1].get_feedback() if self.guesses else None

    def to_dict(self, reveal_code=False):
        # Return the snapshot as dictionary for i.e. json
        data = {
            "rules": self.rules["name"],
            "state": self.state.value,
            "current_guess": "".join(c.symbol for c in self.current_guess),
            "cursor_position": self.cursor_position,
            "guesses": [
                {"guess": g.as_string(), "feedback": list(g.get_feedback())}
                for g in self.guesses
            ],
            "attempts_used": self.attempts_used,
            "max_attempts": self.max_attempts,
            "total_time_ms": self.total_time_ms,
            "can_submit": self.can_submit,
        }
        if reveal_code or self.secret_code is not None:
            data["secret_code"] = self._code
        return data
