# Convert board snapshots and benchmark data to JSON (for logging or export)
import json
from enum import Enum


def _default(value):
    # GameState and FeedbackMark members; PegColor is an IntEnum and stays a number
    if isinstance(value, Enum):
        return value.name
    raise TypeError(f"Cannot serialize {type(value).__name__}.")


def to_json(data_dict: dict) -> str:
    """
    Convert a dictionary to a JSON string. Enum members are written by name.
    Args:
        data_dict (dict): The dictionary to convert.
    Returns:
        str: The JSON string representation of the dictionary.
    """
    return json.dumps(data_dict, indent=2, default=_default)


def from_json(json_string: str) -> dict:
    return json.loads(json_string)


def snapshot_to_json(snapshot, reveal_code=False) -> str:
    """Single-line JSON of a board snapshot, for log records."""
    return json.dumps(snapshot.to_dict(reveal_code=reveal_code), default=_default)
