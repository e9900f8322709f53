from __future__ import annotations

import argparse
import logging
import random
import sys
import time

from game.board import Board
from game.ruleset import RULESETS, RulesError, get_rules, validate_rules
from game.timer import StepClock
from solver.candidate_solver import CandidateSolver, MinimaxConfig, log_print, progress_print
from solver.driver import play_session
from state.persistence import results_to_games, save_results
from ui.cli import gameloop

logger = logging.getLogger(__name__)


def run_benchmark(rules, games, seed=None, step_ms=250, config=None, progress=True):
    """
    Autoplay `games` sessions of one ruleset on a simulated clock.

    Args:
        rules (dict): Ruleset to play.
        games (int): Number of sessions.
        seed (int, optional): Seed for secret generation.
        step_ms (int): Simulated time per key press.
        config (MinimaxConfig, optional): Solver settings.
        progress (bool): Print a progress line.
    Returns:
        list[SessionResult]: One record per session.
    """
    rng = random.Random(seed)
    results = []
    for counter in range(1, games + 1):
        clock = StepClock()
        board = Board(rules=rules, clock=clock, rng=rng)
        solver = CandidateSolver(rules, config)
        result = play_session(board, solver, clock=clock, step_ms=step_ms)
        results.append(result)
        if progress:
            progress_print(
                f"{rules['name']}: game {counter}/{games} "
                f"{'won' if result.won else 'lost'} in {result.attempts} attempts"
            )
    return results


def print_summary(name, results):
    attempts = [r.attempts for r in results if r.won]
    log_print(f"\n=== {name}: {len(attempts)}/{len(results)} games won ===")
    if attempts:
        log_print(f"Average attempts: {sum(attempts) / len(attempts):.2f}")
        log_print(f"Max attempts: {max(attempts)}")
        log_print(f"Min attempts: {min(attempts)}")
    solve_times = [sum(r.turn_times) for r in results]
    if solve_times:
        log_print(f"Average solver time: {sum(solve_times) / len(solve_times):.3f} seconds.")


def bench(args):
    names = args.rules or sorted(RULESETS)
    config = MinimaxConfig(minimax_limit=args.minimax_limit)
    runs = {}
    for name in names:
        rules = get_rules(name)
        start_time = time.perf_counter()
        results = run_benchmark(
            rules, args.games, seed=args.seed, step_ms=args.step_ms, config=config
        )
        print_summary(name, results)
        log_print(f"Total time taken: {time.perf_counter() - start_time:.2f} seconds.")
        runs[name] = {"games": results_to_games(results)}

    save_results(runs, args.out)
    log_print(f"Results saved to {args.out}")


def play(args):
    gameloop(rules=get_rules(args.rules))


def positive_int(value):
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser():
    ap = argparse.ArgumentParser(description="Hirn code-breaking puzzle")
    ap.add_argument("--log-level", default="WARNING", help="Logging level, e.g. INFO or DEBUG")
    sub = ap.add_subparsers(dest="command")

    p_play = sub.add_parser("play", help="Play in the terminal")
    p_play.add_argument("--rules", default="hirn", help="Ruleset name")
    p_play.set_defaults(func=play)

    p_bench = sub.add_parser("bench", help="Autoplay sessions and save statistics")
    p_bench.add_argument("--rules", nargs="*", default=None, help="Rulesets to run. Default: all.")
    p_bench.add_argument("--games", type=positive_int, default=10, help="Sessions per ruleset")
    p_bench.add_argument("--seed", type=int, default=None)
    p_bench.add_argument("--step-ms", type=int, default=250, help="Simulated time per key press")
    p_bench.add_argument("--minimax-limit", type=int, default=MinimaxConfig.minimax_limit)
    p_bench.add_argument("--out", default="benchmark_all.json", help="Results JSON path")
    p_bench.set_defaults(func=bench)
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if args.command is None:
        args.func, args.rules = play, "hirn"

    names = args.rules if isinstance(args.rules, list) else [args.rules]
    try:
        for name in names or []:
            validate_rules(get_rules(name))
    except (RulesError, KeyError) as e:
        logger.error("Cannot start: %s", e)
        return 1

    args.func(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
