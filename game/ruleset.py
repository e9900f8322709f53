# Configuration: palette size, code length, repetition, attempt and time limits.
from .colors import PegColor


class RulesError(ValueError):
    """Raised when a rule set cannot produce a playable game."""


# Emoji per color symbol, used by the text renderer
EMOJI_MAP = {
    ".": "◯",
    "R": "🔴",
    "G": "🟢",
    "B": "🔵",
    "Y": "🟡",
    "P": "🟣",
    "O": "🟠",
    "BK": "⚫",
    "W": "⚪",
}

DEFAULT_RULES = {
    "name": "hirn",  # Identifier for this ruleset
    "code_length": 4,  # Number of pegs in the code
    "num_colors": 4,  # Available colors (first N of PegColor)
    "allow_duplicates": False,  # Can the code contain repeated colors?
    "max_attempts": 99,  # Number of guesses per game
    "max_time_ms": 90 * 60 * 1000,  # Play time budget: 90 minutes
    "tick_ms": 100,  # Host tick interval for the time-limit check
    "display": {
        "emoji_map": EMOJI_MAP,
        "history_rows": 1,  # Past attempts shown under the current guess
    },
}

CLASSIC_RULES = {
    "name": "classic",
    "code_length": 4,
    "num_colors": 6,
    "allow_duplicates": True,
    "max_attempts": 12,
    "max_time_ms": 30 * 60 * 1000,
    "tick_ms": 100,
    "display": {
        "emoji_map": EMOJI_MAP,
        "history_rows": 6,
    },
}

RULESETS = {
    DEFAULT_RULES["name"]: DEFAULT_RULES,
    CLASSIC_RULES["name"]: CLASSIC_RULES,
}


def get_rules(name: str) -> dict:
    """
    Look up a rule set by name.

    Args:
        name (str): Rule set identifier, e.g. 'hirn' or 'classic'.
    Returns:
        dict: The rule set.
    """
    try:
        return RULESETS[name]
    except KeyError:
        available = ", ".join(sorted(RULESETS))
        raise KeyError(
            f"Unknown ruleset '{name}'. Available: {available}."
        ) from None


def palette(rules: dict) -> list[PegColor]:
    """Return the colors a secret may be built from."""
    return PegColor.palette(rules["num_colors"])


def validate_rules(rules: dict) -> dict:
    """
    Check that a rule set describes a playable game. Called once when a
    board is created.

    Args:
        rules (dict): The rule set to check.
    Returns:
        dict: The same rule set.
    Raises:
        RulesError: If any constant is out of range.
    """
    for key in ("code_length", "num_colors", "max_attempts", "max_time_ms"):
        value = rules.get(key)
        if not isinstance(value, int) or value < 1:
            raise RulesError(f"'{key}' must be a positive integer, got {value!r}.")

    if rules["num_colors"] > len(PegColor) - 1:
        raise RulesError(
            f"At most {len(PegColor) - 1} colors are available, "
            f"but {rules['num_colors']} were requested."
        )

    if not rules.get("allow_duplicates", True) and (
        rules["num_colors"] < rules["code_length"]
    ):
        raise RulesError(
            f"Without repetition the palette ({rules['num_colors']} colors) "
            f"must be at least as large as the code ({rules['code_length']} pegs)."
        )

    return rules
