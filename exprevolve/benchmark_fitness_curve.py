#!/usr/bin/env python3
"""
Run the GA a few times against one target and plot best + mean fitness
vs generation for every run in a single figure.

Usage:
    python -m exprevolve.benchmark_fitness_curve --target 42 --runs 3 --out fitness_curve.png
"""

import argparse
import csv
from pathlib import Path

import matplotlib.pyplot as plt

from exprevolve.config import CONFIG
from exprevolve.expr_evolve import ga, make_rng


def record_runs(target: float, runs: int, popsize: int, max_generations: int, seed=None):
    """
    Run the GA `runs` times, collecting GenerationStats.

    Returns:
        list of (stats_list, ngens, solution_or_None), one per run.
        Run r is seeded with seed + r when a seed is given.
    """
    results = []
    for r in range(runs):
        history = []
        rng = make_rng(None if seed is None else seed + r)
        ngens, best = ga(
            popsize,
            target,
            rng=rng,
            max_generations=max_generations,
            on_generation=history.append,
        )
        results.append((history, ngens, best))
    return results


def write_stats_csv(results, csv_path: Path) -> None:
    fieldnames = ["run", "generation", "best_fitness", "mean_fitness", "best_expression"]
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for run_idx, (history, _, _) in enumerate(results, start=1):
            for s in history:
                writer.writerow({
                    "run": run_idx,
                    "generation": s.generation,
                    "best_fitness": f"{s.best_fitness:.9f}",
                    "mean_fitness": f"{s.mean_fitness:.9f}",
                    "best_expression": s.best_expression,
                })


def plot_fitness_curve_multi(results, target: float, out_path: Path) -> None:
    """
    One colour per run; best = solid line, mean = dashed line.
    """
    plt.figure()

    colors = ["tab:blue", "tab:orange", "tab:green",
              "tab:red", "tab:purple", "tab:brown"]

    for idx, (history, _, _) in enumerate(results, start=1):
        c = colors[(idx - 1) % len(colors)]
        gens = [s.generation for s in history]
        best = [s.best_fitness for s in history]
        mean = [s.mean_fitness for s in history]

        plt.plot(gens, best, linestyle="-", color=c, label=f"Run {idx} best")
        plt.plot(gens, mean, linestyle="--", color=c, label=f"Run {idx} mean")

    plt.xlabel("Generation")
    plt.ylabel("Fitness (1 = exact match)")
    plt.title(f"Expression GA: fitness over generations (target {target:g})")
    plt.ylim(0.0, 1.05)
    plt.legend()
    plt.grid(True, which="both", linestyle="--", linewidth=0.5)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Plot GA fitness (best + mean) vs generation over several runs."
    )
    parser.add_argument("--target", type=float, default=42.0, help="Target number.")
    parser.add_argument("--runs", type=int, default=3, help="Number of GA runs.")
    parser.add_argument(
        "--popsize",
        type=int,
        default=CONFIG["pop_size"],
        help="Population size per run.",
    )
    parser.add_argument(
        "--generations",
        type=int,
        default=CONFIG["max_generations"],
        help="Generation budget per run.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Base random seed.")
    parser.add_argument(
        "--out",
        type=str,
        default="fitness_curve.png",
        help="Output PNG filename.",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Optional CSV filename for the per-generation stats.",
    )
    args = parser.parse_args(argv)

    results = record_runs(args.target, args.runs, args.popsize, args.generations, seed=args.seed)

    for i, (history, ngens, best) in enumerate(results, start=1):
        outcome = f"found {best.decode()!r}" if best is not None else "no solution"
        print(f"[bench] Run {i}: {len(history)} generations recorded, "
              f"stopped at {ngens}, {outcome}")

    if args.csv:
        csv_path = Path(args.csv)
        write_stats_csv(results, csv_path)
        print(f"[bench] wrote CSV to {csv_path}")

    out_path = Path(args.out)
    plot_fitness_curve_multi(results, args.target, out_path)
    print(f"[bench] wrote fitness curve to {out_path}")


if __name__ == "__main__":
    main()
