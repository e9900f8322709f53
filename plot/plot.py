import argparse
import re
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

from state.persistence import load_results


def _natural_turn_sort_key(s: str):
    m = re.search(r"(\d+)", str(s))
    return int(m.group(1)) if m else s


def _annotate_points(ax, xs, ys, *, fmt="{:.2f}", dx=0, dy=6, fontsize=8):
        """
        Annotate points (x, y) on ax with formatted y values.

        Args:
            ax: matplotlib Axes
            xs: list of x coordinates
            ys: list of y coordinates
            fmt: format string for y values
            dx: x offset in points
            dy: y offset in points
            fontsize: font size for annotations
        """

        for x, y in zip(xs, ys):
            if y is None or np.isnan(y):
                continue
            ax.annotate(
                fmt.format(y),
                (x, y),
                textcoords="offset points",
                xytext=(dx, dy),
                ha="center",
                va="center",
                fontsize=fontsize,
            )


def _column_stats(col):
    vals = [float(v) for v in col if v is not None]
    if not vals:
        return np.nan, np.nan, np.nan
    return float(np.mean(vals)), float(np.min(vals)), float(np.max(vals))


def compute_run_stats(games: dict):
    """
    Returns a dict with:
      n_games, n_won (int)
      win_rate (float, np.nan if no games)
      avg/min/max_attempts (float, won games only, np.nan if none)
      avg/min/max_time_s (float, won games only, np.nan if none)
      attempts_won (np.ndarray) attempts of each won game
      avg/min/max_candidates (list[float]) candidates left per turn index
      (turn 1 at index 0), all games
    """
    won = np.array(games.get("won", []), dtype=bool)
    attempts = np.array(games.get("attempts", []), dtype=np.int32)
    play_time = np.array(games.get("play_time_ms", []), dtype=np.float64) / 1000.0

    # Guard against length mismatches
    n = min(len(won), len(attempts), len(play_time))
    won = won[:n]
    attempts = attempts[:n]
    play_time = play_time[:n]

    attempts_won = attempts[won]
    time_won = play_time[won]

    def _triple(arr):
        if arr.size == 0:
            return np.nan, np.nan, np.nan
        return float(np.mean(arr)), float(np.min(arr)), float(np.max(arr))

    avg_attempts, min_attempts, max_attempts = _triple(attempts_won)
    avg_time, min_time, max_time = _triple(time_won)

    turn_headers = sorted(games.get("turn_headers", []), key=_natural_turn_sort_key)
    cand_cols = games.get("candidates_columns", {}) or {}
    avg_cand, min_cand, max_cand = [], [], []
    for th in turn_headers:
        a, lo, hi = _column_stats(cand_cols.get(th, [])[:n])
        avg_cand.append(a)
        min_cand.append(lo)
        max_cand.append(hi)

    return {
        "n_games": int(n),
        "n_won": int(attempts_won.size),
        "win_rate": float(np.mean(won)) if n else np.nan,
        "avg_attempts": avg_attempts,
        "min_attempts": min_attempts,
        "max_attempts": max_attempts,
        "avg_time_s": avg_time,
        "min_time_s": min_time,
        "max_time_s": max_time,
        "attempts_won": attempts_won,
        "avg_candidates": avg_cand,
        "min_candidates": min_cand,
        "max_candidates": max_cand,
    }


def plot_runs(runs: dict, outdir: Path, rules=None) -> list[Path]:
    """
    Draw the benchmark charts of each rule set into `outdir`.

    Args:
        runs (dict): Rule set name -> {"games": columns}.
        outdir (Path): Output directory for PNGs.
        rules (list[str], optional): Rule sets to plot. Default: all.
    Returns:
        list[Path]: Written files.
    """
    outdir.mkdir(parents=True, exist_ok=True)
    written = []

    # Plot configuration:
    plt.rcParams["lines.solid_capstyle"] = "round"
    plt.rcParams["lines.solid_joinstyle"] = "round"
    plt.rcParams["lines.linewidth"] = 1.0

    for name in rules or sorted(runs):
        if name not in runs:
            print(f"[skip] No runs for ruleset '{name}'.")
            continue
        stats = compute_run_stats(runs[name].get("games", {}))
        if stats["n_games"] == 0:
            print(f"[skip] Ruleset '{name}' has no games.")
            continue

        # Plot 1: attempts needed per won game
        plt.figure(figsize=(10, 6))
        attempts = stats["attempts_won"]
        if attempts.size:
            bins = np.arange(attempts.min(), attempts.max() + 2) - 0.5
            plt.hist(attempts, bins=bins, rwidth=0.8)
            plt.axvline(stats["avg_attempts"], linestyle="--", label="Average")
            plt.legend()
        plt.title(
            f"Attempts per won game ({name})\n"
            f"Games won: {stats['n_won']}/{stats['n_games']}"
        )
        plt.xlabel("Attempts")
        plt.ylabel("Games")
        plt.grid(True)
        out1 = outdir / f"{name}_attempts.png"
        plt.savefig(out1, dpi=200, bbox_inches="tight")
        plt.close()
        written.append(out1)

        # Plot 2: candidates left after each turn
        y_avg = stats["avg_candidates"]
        if not y_avg:
            print(f"[info] No candidate data to plot for '{name}'.")
            continue
        x = np.arange(1, len(y_avg) + 1)
        plt.figure(figsize=(12, 8))
        plt.plot(x, y_avg, marker="o", label="Average")
        plt.scatter(x, stats["max_candidates"], marker="^", s=20, label="Max")
        plt.scatter(x, stats["min_candidates"], marker="v", s=20, label="Min")
        plt.fill_between(
            x, stats["min_candidates"], stats["max_candidates"], alpha=0.2,
            label="Min–Max range",
        )
        _annotate_points(plt.gca(), x, y_avg, fmt="{:.1f}", dy=8)
        plt.yscale("log")
        plt.title(f"Candidates left per turn ({name})")
        plt.xlabel("Turn Number")
        plt.ylabel("Consistent codes")
        plt.xticks(x)
        plt.grid(True)
        plt.legend()
        out2 = outdir / f"{name}_candidates.png"
        plt.savefig(out2, dpi=200, bbox_inches="tight")
        plt.close()
        written.append(out2)

    return written


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--file", default="benchmark_all.json", help="Path to benchmark JSON")
    ap.add_argument("--rules", nargs="*", default=None,
                    help="Which rulesets to plot (e.g. --rules hirn classic). Default: all found.")
    ap.add_argument("--outdir", default="./results", help="Output directory for PNGs")
    args = ap.parse_args(argv)

    runs = load_results(args.file)
    if not runs:
        raise ValueError(f"No runs found in {args.file}.")

    for path in plot_runs(runs, Path(args.outdir), rules=args.rules):
        print(f"[saved] {path}")


if __name__ == "__main__":
    main()
