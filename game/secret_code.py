import random
from .colors import FeedbackMark, PegColor
from .ruleset import DEFAULT_RULES, palette


def to_colors(sequence) -> list[PegColor]:
    """
    Normalize a color sequence given as symbols ('RGBY', 'R G B Y'),
    a list of symbols, or a list of PegColor values.
    """
    if sequence is None:
        return []
    if isinstance(sequence, str):
        sequence = sequence.replace(" ", "")
    return [
        c if isinstance(c, PegColor) else PegColor.from_symbol(c)
        for c in sequence
    ]


class Code:
    """
        Represents the secret code for the game.
    Attributes:
        sequence (list[PegColor]): The colors of the code.
        rules (dict): The ruleset for validation.
        is_valid (bool): Whether the code is valid according to the rules."""

    def __init__(self, sequence=None, rules=None):
        """
        Initialize a Code instance.

        Args:
            sequence (list or str or None): The colors of the code, as
            PegColor values or symbols.
            rules (dict or None): Reference to the ruleset (defines length,
            colors, duplicates, etc.).
        """

        self.rules = rules or DEFAULT_RULES
        self.sequence = to_colors(sequence)

        self.is_valid = False
        if self.sequence:
            self.is_valid = self.validate()

    def generate_random(self, rng=None):
        """
        Generate a random valid code according to the rules.

        Args:
            rng (random.Random or None): Entropy source. Defaults to the
            process-wide `random` module.
        """

        rng = rng or random
        colors = palette(self.rules)
        length = self.rules["code_length"]
        allow_dup = self.rules["allow_duplicates"]

        # Independent draws with repetition, a permutation without.
        if allow_dup:
            self.sequence = rng.choices(colors, k=length)
        else:
            self.sequence = rng.sample(colors, k=length)

        self.is_valid = self.validate()

    def validate(self, strict: bool = True) -> bool:
        """
        Validate the current code (length, colors, duplicates).

        Args:
            strict (bool): If True, raise ValueError with an explanatory
            message when validation fails. If False, return False on failure.

        Returns:
            bool: True if the code sequence is valid; False if invalid and
            strict is False.
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

        if not self.rules.get("allow_duplicates", True) and len(
            set(self.sequence)
        ) != len(self.sequence):
            return fail("Duplicates are not allowed in this ruleset.")

        allowed = palette(self.rules)
        for color in self.sequence:
            if color not in allowed:
                names = ", ".join(c.symbol for c in allowed)
                return fail(
                    f"Invalid color '{color.symbol}'. Allowed: {names}."
                )

        return True

    def evaluate(self, guess) -> list[FeedbackMark]:
        """
        Score a guess against this code.

        Args:
            guess (Guess or list[PegColor]): The guess to score.

        Returns:
            list[FeedbackMark]: One mark per peg: black marks first, then
            white marks, padded with FeedbackMark.NONE.
        """
        guessed = getattr(guess, "sequence", guess)
        black, white = score(self.sequence, guessed)
        return (
            [FeedbackMark.BLACK] * black
            + [FeedbackMark.WHITE] * white
            + [FeedbackMark.NONE] * (len(self.sequence) - black - white)
        )

    def compare_with(self, guess=None) -> tuple[int, int]:
        """
        Compare this secret code with a guess and return (black, white)
        counts.

        Args:
            guess (Guess or list[PegColor]): The guess to compare.

        Returns:
            tuple[int, int]: (black, white)
        """
        return count_marks(self.evaluate(guess))

    def matches(self, guess) -> bool:
        """Win check: every peg of the guess equals the code at its position."""
        guessed = getattr(guess, "sequence", guess)
        if len(guessed) != len(self.sequence):
            return False
        return all(g == s for g, s in zip(guessed, self.sequence))

    def as_string(self):
        """
        Return a string representation of the code (e.g. 'RGBY').
        Returns:
            str: The code as a string.
        """
        return (
            "".join(c.symbol for c in self.sequence)
            if self.sequence
            else "EMPTY"
        )

    def __eq__(self, other):
        if isinstance(other, Code):
            return self.sequence == other.sequence
        if isinstance(other, list):
            return self.sequence == to_colors(other)
        return False

    def __str__(self):
        return self.as_string()


def count_marks(marks) -> tuple[int, int]:
    """Return (black, white) counts of a feedback sequence."""
    black = sum(1 for m in marks if m is FeedbackMark.BLACK)
    white = sum(1 for m in marks if m is FeedbackMark.WHITE)
    return (black, white)


def score(secret, guessed) -> tuple[int, int]:
    """
    Count black and white marks of `guessed` against `secret`.

    Args:
        secret (Sequence[PegColor]): The code.
        guessed (Sequence[PegColor]): The guess, same length.
    Returns:
        tuple[int, int]: (black, white)

    Notes:
        Exact matches are consumed before any color-only matching.
        Each remaining guess peg takes the first unconsumed secret peg of
        its color, scanning secret positions in ascending order.
    """
    n = len(secret)
    secret_used = [False] * n
    guess_used = [False] * n
    black = 0
    white = 0

    # Exact color and position
    for i in range(n):
        if guessed[i] == secret[i]:
            black += 1
            secret_used[i] = True
            guess_used[i] = True

    # Color only, first fit
    for i in range(n):
        if guess_used[i]:
            continue
        for j in range(n):
            if not secret_used[j] and guessed[i] == secret[j]:
                white += 1
                secret_used[j] = True
                break

    return (black, white)
