import csv

import matplotlib

matplotlib.use("Agg")

from exprevolve import benchmark_fitness_curve as bfc  # noqa: E402
from exprevolve import benchmark_runtime as brt  # noqa: E402

UNREACHABLE = 1.2345678912345e200


def test_record_runs_and_csv(tmp_path):
    results = bfc.record_runs(UNREACHABLE, runs=2, popsize=8, max_generations=4, seed=10)
    assert len(results) == 2
    for history, ngens, best in results:
        assert ngens == 4 and best is None
        assert [s.generation for s in history] == [0, 1, 2, 3]

    csv_path = tmp_path / "stats.csv"
    bfc.write_stats_csv(results, csv_path)
    with csv_path.open(encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 8
    assert rows[0]["run"] == "1" and rows[-1]["run"] == "2"


def test_fitness_curve_main_writes_png(tmp_path, capsys):
    out = tmp_path / "curve.png"
    csv_path = tmp_path / "curve.csv"
    bfc.main([
        "--target", str(UNREACHABLE), "--runs", "1", "--popsize", "6",
        "--generations", "3", "--seed", "2", "--out", str(out), "--csv", str(csv_path),
    ])
    assert out.exists() and out.stat().st_size > 0
    assert csv_path.exists()
    assert "[bench] Run 1" in capsys.readouterr().out


def test_runtime_bench(tmp_path, capsys):
    rows = brt.time_runs([4, 6], runs_per_size=2, target=UNREACHABLE, max_generations=2, seed=0)
    assert [(r[0], r[1]) for r in rows] == [(4, 1), (4, 2), (6, 1), (6, 2)]
    assert all(r[2] == 2 and r[3] is False for r in rows)
    means = brt.mean_runtime_by_popsize(rows)
    assert list(means) == [4, 6]

    csv_path = tmp_path / "rt.csv"
    png_path = tmp_path / "rt.png"
    brt.write_runtime_csv(rows, csv_path)
    brt.plot_runtime(rows, png_path)
    lines = csv_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "popsize,run_idx,generations,found,runtime_seconds"
    assert len(lines) == 5
    assert png_path.exists()
