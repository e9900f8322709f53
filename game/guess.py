from .colors import FeedbackMark, PegColor
from .ruleset import DEFAULT_RULES, palette
from .secret_code import count_marks, to_colors


class Guess:
    """
        Represents the player's guess: the editable buffer while playing,
        and a frozen copy with feedback once it is recorded in the history.
    Attributes:
        sequence (list[PegColor]): The guessed colors, NONE for empty slots.
        rules (dict): The ruleset for validation.
        feedback (list[FeedbackMark] | None): Marks after evaluation."""

    def __init__(self, sequence=None, rules=None):
        """
        Initialize a Guess instance.
        Args:
            sequence (list | str | None): The guessed colors. None gives an
            all-empty guess of the rule set's length.
            rules (dict, optional): The ruleset for validation. Defaults to DEFAULT_RULES.
        """

        self.rules = rules or DEFAULT_RULES
        if sequence is None:
            self.sequence = [PegColor.NONE] * self.rules["code_length"]
        else:
            self.sequence = to_colors(sequence)
        self.feedback = None

    def validate(self, strict: bool = True):
        """
        Check if the guess follows the rules
        (length, valid colors, duplicates).

        Args:
            strict (bool): If True, raise ValueError on invalid guess.
        Returns:
            bool: True if valid, False otherwise.
        """

        def fail(msg: str) -> bool:
            if strict:
                raise ValueError(msg)
            return False

        if len(self.sequence) != self.rules["code_length"]:
            return fail(
                f"Code length must be {self.rules['code_length']}, "
                f"but got {len(self.sequence)}."
            )

        if not self.is_complete():
            return fail("Every peg needs a color.")

        if not self.rules.get("allow_duplicates", True) and len(
            set(self.sequence)
        ) != len(self.sequence):
            return fail("Duplicates are not allowed in this ruleset.")

        allowed = palette(self.rules)
        for color in self.sequence:
            if color not in allowed:
                names = ", ".join(c.symbol for c in allowed)
                return fail(f"Invalid color '{color.symbol}'. Allowed: {names}.")

        return True

    def is_complete(self) -> bool:
        """True if no slot is empty."""
        return all(c is not PegColor.NONE for c in self.sequence)

    def differs_from(self, other) -> bool:
        """
        True if this guess differs in at least one slot from `other`.
        Anything compares as different from None (no previous guess).
        """
        if other is None:
            return True
        return self.sequence != getattr(other, "sequence", other)

    def cycle(self, position: int, step: int):
        """
        Move the color at `position` by `step` through NONE..max color,
        wrapping in either direction.
        """
        num_colors = self.rules["num_colors"]
        color = self.sequence[position]
        for _ in range(abs(step)):
            color = color.succ(num_colors) if step > 0 else color.pred(num_colors)
        self.sequence[position] = color

    def set_colors(self, sequence):
        self.sequence = to_colors(sequence)

    def copy(self):
        """Return an independent copy (used to freeze a history entry)."""
        clone = Guess(list(self.sequence), rules=self.rules)
        if self.feedback is not None:
            clone.feedback = list(self.feedback)
        return clone

    def apply_feedback(self, feedback: list[FeedbackMark]):
        """
        Store the marks computed by the secret code.
        Args:
            feedback (list[FeedbackMark]): Black marks, white marks, padding.
        """
        self.feedback = list(feedback)

    def get_feedback(self):
        """
        Return the stored feedback as a tuple (black_pegs, white_pegs).
        Returns:
            tuple[int, int] | tuple[None, None]: The feedback counts, or
            (None, None) before evaluation.
        """
        if self.feedback is None:
            return (None, None)
        return count_marks(self.feedback)

    def get_guess(self):
        return self.sequence

    def as_string(self):
        """
        Return a string representation of the guess (e.g. 'RGB.').
        Returns:
            str: The guess as a string."""
        return "".join(c.symbol for c in self.sequence) if self.sequence else "EMPTY"

    def __str__(self):
        return self.as_string()
