#!/usr/bin/env python3
"""
Command line front end.

Usage:
    exprevolve 42
    exprevolve 3.5 --popsize 200 --seed 7
    exprevolve --eval "2+3*4"
"""

import argparse
import math
import sys

from exprevolve.config import CONFIG
from exprevolve.errors import ExprError, InvalidTargetError
from exprevolve.expr_eval import evaluate
from exprevolve.expr_evolve import ga, make_rng


def parse_target(text) -> float:
    """
    Parse the target number. Raises InvalidTargetError for missing,
    non-numeric, nan or infinite input.
    """
    if text is None or not str(text).strip():
        raise InvalidTargetError("Need a number", "" if text is None else str(text))
    try:
        value = float(text)
    except ValueError:
        raise InvalidTargetError(f"{text} is not a valid number", str(text)) from None
    if not math.isfinite(value):
        raise InvalidTargetError(f"{text} is not a finite number", str(text))
    return value


def progress_printer(max_generations: int, every: int = CONFIG["progress_every"]):
    """Callback for ga(): prints every `every` gens and the last ten."""
    def on_generation(stats):
        i = stats.generation
        if (i + 1) % every == 0 or i + 10 >= max_generations:
            print(f"Generation {i + 1} of {max_generations}")
    return on_generation


def run_search(target: float, popsize: int, max_generations: int, seed=None, quiet: bool = False) -> int:
    on_generation = None if quiet else progress_printer(max_generations)
    ngens, best = ga(
        popsize,
        target,
        rng=make_rng(seed),
        max_generations=max_generations,
        on_generation=on_generation,
    )
    if best is not None:
        print(f"Found a solution in {ngens} generations:")
        print(f"\t{best.decode()}")
        return 0
    print(f"Could not find a solution in {ngens} generations.")
    return 1


def run_eval(text: str) -> int:
    try:
        value = evaluate(text)
    except ExprError as e:
        print(f"error: {e}")
        return 1
    print(f"{value:g}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exprevolve",
        description="Use a genetic algorithm to find an arithmetic expression "
                    "(digits and + - * / **) that evaluates to TARGET.",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Number to match with a generated expression.",
    )
    parser.add_argument(
        "-p", "--popsize",
        type=int,
        default=CONFIG["pop_size"],
        help="Number of chromosomes in a population.",
    )
    parser.add_argument(
        "-g", "--generations",
        type=int,
        default=CONFIG["max_generations"],
        help="Maximum number of generations.",
    )
    parser.add_argument(
        "-s", "--seed",
        type=int,
        default=CONFIG["random_seed"],
        help="Random seed (default: system entropy).",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Don't print generation progress.",
    )
    parser.add_argument(
        "-e", "--eval",
        dest="expr",
        default=None,
        metavar="EXPR",
        help="Evaluate EXPR and print its value instead of searching.",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.expr is not None:
        return run_eval(args.expr)

    try:
        target = parse_target(args.target)
    except InvalidTargetError as e:
        parser.error(str(e))
    if args.popsize < 1:
        parser.error("--popsize must be at least 1")

    return run_search(target, args.popsize, args.generations, seed=args.seed, quiet=args.quiet)


if __name__ == "__main__":
    sys.exit(main())
