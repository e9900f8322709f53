from __future__ import annotations

import os
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from itertools import permutations, product

from game.colors import PegColor
from game.ruleset import palette
from game.secret_code import score


# drop-in helper for progress and log line
def progress_print(msg: str) -> None:
    # overwrite same line, no newline
    print(f"\r\033[K{msg}", end="", flush=True)


def log_print(msg: str) -> None:
    # first terminate the progress line, then print normally
    print("\r\033[K", end="", flush=True)
    print(msg, flush=True)


@dataclass(frozen=True)
class MinimaxConfig:
    max_workers: int = max(1, (os.cpu_count() or 4) - 1)
    # run minimax only when this few candidates are left
    minimax_limit: int = 256
    # guesses scored per worker task
    chunk_size: int = 32


class CandidateSolver:
    """
    Candidate elimination with minimax guess selection:
    - keep every code consistent with all feedback seen so far
    - for each remaining candidate, the worst case is the largest group of
      candidates sharing one feedback
    - next guess = candidate with the smallest worst case (first on ties)
    - with more than `minimax_limit` candidates, play the first candidate

    Attributes:
        rules: dict
        cfg: MinimaxConfig
        candidates: list[tuple[PegColor, ...]]
    """

    def __init__(self, rules: dict, config: MinimaxConfig | None = None):
        self.rules = rules
        self.cfg = config or MinimaxConfig()
        self.code_length = rules["code_length"]
        self.colors = palette(rules)
        self.candidates = self.all_codes()

    def all_codes(self) -> list[tuple[PegColor, ...]]:
        if self.rules.get("allow_duplicates", True):
            return list(product(self.colors, repeat=self.code_length))
        return list(permutations(self.colors, self.code_length))

    def reset(self):
        self.candidates = self.all_codes()

    def apply_feedback(self, guess, feedback: tuple[int, int]) -> int:
        """
        Drop candidates that would not have produced `feedback` for `guess`.

        Args:
            guess: The guessed colors.
            feedback (tuple[int, int]): (black, white) received.
        Returns:
            int: Number of candidates left.
        """
        guess = tuple(guess)
        self.candidates = [
            c for c in self.candidates if score(c, guess) == tuple(feedback)
        ]
        return len(self.candidates)

    def _worst_case(self, guess) -> int:
        groups = Counter(score(c, guess) for c in self.candidates)
        return max(groups.values())

    def _score_chunk(self, start: int, chunk) -> list[tuple[int, int]]:
        return [
            (self._worst_case(guess), start + i) for i, guess in enumerate(chunk)
        ]

    def choose_guess(self) -> tuple[PegColor, ...]:
        """
        Choose the next guess.

        Returns:
            tuple[PegColor, ...]: The guess to play.
        Raises:
            RuntimeError: If no candidate is left (inconsistent feedback).
        """
        if not self.candidates:
            raise RuntimeError("No code is consistent with the feedback given.")
        if len(self.candidates) <= 2 or len(self.candidates) > self.cfg.minimax_limit:
            return self.candidates[0]

        results = []
        size = self.cfg.chunk_size
        with ThreadPoolExecutor(max_workers=self.cfg.max_workers) as pool:
            futures = [
                pool.submit(self._score_chunk, i, self.candidates[i : i + size])
                for i in range(0, len(self.candidates), size)
            ]
            for fut in as_completed(futures):
                results.extend(fut.result())

        _, best = min(results)
        return self.candidates[best]
