#!/usr/bin/env python3
"""
Benchmark GA runtime and generations-to-solution against population size.

Usage:
    python -m exprevolve.benchmark_runtime --popsizes 50 100 200 --runs-per-size 3
"""

import argparse
import time
from pathlib import Path

import matplotlib.pyplot as plt

from exprevolve.config import CONFIG
from exprevolve.expr_evolve import ga, make_rng


def time_runs(popsizes, runs_per_size: int, target: float, max_generations: int, seed=None):
    """
    Returns rows of (popsize, run_idx, generations, found, runtime_seconds).
    """
    rows = []
    for ps in popsizes:
        for r in range(runs_per_size):
            print(f"[bench] popsize={ps}, run {r+1}/{runs_per_size}")
            rng = make_rng(None if seed is None else seed + r)
            t0 = time.perf_counter()
            ngens, best = ga(ps, target, rng=rng, max_generations=max_generations)
            t1 = time.perf_counter()
            rows.append((ps, r + 1, ngens, best is not None, t1 - t0))
    return rows


def mean_runtime_by_popsize(rows):
    totals = {}
    for ps, _, _, _, rt in rows:
        acc = totals.setdefault(ps, [0.0, 0])
        acc[0] += rt
        acc[1] += 1
    return {ps: s / n for ps, (s, n) in sorted(totals.items())}


def write_runtime_csv(rows, csv_path: Path) -> None:
    csv_lines = ["popsize,run_idx,generations,found,runtime_seconds\n"]
    for ps, run_idx, gens, found, rt in rows:
        csv_lines.append(f"{ps},{run_idx},{gens},{int(found)},{rt:.6f}\n")
    csv_path.write_text("".join(csv_lines), encoding="utf-8")


def plot_runtime(rows, fig_path: Path) -> None:
    means = mean_runtime_by_popsize(rows)
    plt.figure()
    plt.plot(list(means.keys()), list(means.values()), marker="o")
    plt.xlabel("Population size")
    plt.ylabel("Mean runtime per run (seconds)")
    plt.title("Expression GA: runtime vs population size")
    plt.grid(True, which="both", linestyle="--", linewidth=0.5)
    plt.tight_layout()
    plt.savefig(fig_path, dpi=200)
    plt.close()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Benchmark GA runtime vs population size."
    )
    parser.add_argument(
        "--popsizes",
        type=int,
        nargs="+",
        default=[50, 100, 200, 500],
        help="Population sizes to test.",
    )
    parser.add_argument(
        "--runs-per-size",
        type=int,
        default=3,
        help="Number of repeated GA runs per population size.",
    )
    parser.add_argument("--target", type=float, default=42.0, help="Target number.")
    parser.add_argument(
        "--generations",
        type=int,
        default=CONFIG["max_generations"],
        help="Generation budget per run.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Base random seed.")
    parser.add_argument(
        "--csv",
        type=str,
        default="ga_runtime_bench.csv",
        help="Output CSV filename.",
    )
    parser.add_argument(
        "--png",
        type=str,
        default="ga_runtime_vs_popsize.png",
        help="Output PNG filename.",
    )
    args = parser.parse_args(argv)

    rows = time_runs(args.popsizes, args.runs_per_size, args.target, args.generations, seed=args.seed)

    for ps, avg_rt in mean_runtime_by_popsize(rows).items():
        print(f"[bench] popsize={ps}: avg_runtime={avg_rt:.3f}s")

    csv_path = Path(args.csv)
    write_runtime_csv(rows, csv_path)
    print(f"[bench] wrote CSV to {csv_path}")

    fig_path = Path(args.png)
    plot_runtime(rows, fig_path)
    print(f"[bench] wrote plot to {fig_path}")


if __name__ == "__main__":
    main()
