# Peg colors and feedback marks
from __future__ import annotations

from enum import Enum, IntEnum


class PegColor(IntEnum):
    """
    Closed set of peg colors. NONE marks an empty slot of a guess in
    progress and never appears in a secret or a finalized guess.
    A rule set uses the first `num_colors` non-empty members.
    """

    NONE = 0
    RED = 1
    GREEN = 2
    BLUE = 3
    YELLOW = 4
    PURPLE = 5
    ORANGE = 6

    @property
    def symbol(self) -> str:
        """One-letter symbol (e.g. 'R'), '.' for an empty slot."""
        return _SYMBOLS[self]

    @classmethod
    def palette(cls, num_colors: int) -> list[PegColor]:
        """
        Return the usable colors for a rule set.

        Args:
            num_colors (int): Palette size.
        Returns:
            list[PegColor]: The first `num_colors` non-empty colors.
        """
        if not 1 <= num_colors <= len(cls) - 1:
            raise ValueError(
                f"Palette size must be between 1 and {len(cls) - 1}, "
                f"but got {num_colors}."
            )
        return [cls(i) for i in range(1, num_colors + 1)]

    @classmethod
    def from_symbol(cls, symbol: str) -> PegColor:
        """Look up a color by its letter, case-insensitive."""
        for color, sym in _SYMBOLS.items():
            if sym == symbol.upper():
                return color
        raise ValueError(f"Unknown color symbol '{symbol}'.")

    def succ(self, num_colors: int) -> PegColor:
        # NONE -> 1 -> ... -> num_colors -> NONE
        return PegColor((self.value + 1) % (num_colors + 1))

    def pred(self, num_colors: int) -> PegColor:
        return PegColor((self.value - 1) % (num_colors + 1))


_SYMBOLS = {
    PegColor.NONE: ".",
    PegColor.RED: "R",
    PegColor.GREEN: "G",
    PegColor.BLUE: "B",
    PegColor.YELLOW: "Y",
    PegColor.PURPLE: "P",
    PegColor.ORANGE: "O",
}


class FeedbackMark(Enum):
    NONE = 0
    BLACK = 1  # correct color, correct position
    WHITE = 2  # correct color, wrong position
