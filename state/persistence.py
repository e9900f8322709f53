# state/persistence.py
from pathlib import Path

from .serializer import from_json, to_json


def results_to_games(results) -> dict:
    """
    Turn a list of SessionResult records into column lists, keyed the way
    the plot tool reads them.
    """
    longest = max((len(r.candidates) for r in results), default=0)
    turn_headers = [f"turn_{i + 1}" for i in range(longest)]
    return {
        "won": [r.won for r in results],
        "attempts": [r.attempts for r in results],
        "play_time_ms": [r.play_time_ms for r in results],
        "secret": [r.secret for r in results],
        "turn_headers": turn_headers,
        "candidates_columns": {
            th: [r.candidates[i] if i < len(r.candidates) else None for r in results]
            for i, th in enumerate(turn_headers)
        },
        "turn_time_s_columns": {
            th: [r.turn_times[i] if i < len(r.turn_times) else None for r in results]
            for i, th in enumerate(turn_headers)
        },
    }


def save_results(runs: dict, path: str):
    """
    Save benchmark runs to disk as JSON.
    Args:
        runs (dict): Rule set name -> {"games": columns}.
        path (str): The file path to write.
    """
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(to_json({"runs": runs}))


def load_results(path: str) -> dict:
    """
    Load benchmark runs from disk.
    Args:
        path (str): The file path to read.
    Returns:
        dict: Rule set name -> {"games": columns}."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = from_json(f.read())
    if not isinstance(data, dict) or "runs" not in data:
        raise ValueError(f"{path} holds no benchmark runs.")
    return data["runs"]

