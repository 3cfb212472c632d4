import os
import numpy as np
import pandas as pd
from tqdm import tqdm

from tsp_core import Metric, TSPError
from tour_solver import TourSolver
from data_generator import generate_random_graph


# ================================
# CONFIGURATION
# ================================
OUTPUT_DIR = "benchmarks"
SIZES = range(4, 10)
RUNS_PER_SIZE = 5
DENSITY = 1.0
SEED = 42


# =============================================================
# SINGLE INSTANCE
# =============================================================
def compare_on_graph(graph, metric, start=0):
    """
    Run both solvers on one graph and return a result row.

    The gap is how much worse nearest neighbor is than the optimum, in
    percent. A solver that fails leaves NaN costs, a False *_valid flag and,
    for brute force, the error class name in brute_error.
    """
    solver = TourSolver(graph)
    row = {
        "n": graph.size(),
        "metric": Metric.parse(metric).label,
        "brute_cost": np.nan,
        "brute_time": np.nan,
        "brute_valid": False,
        "brute_error": None,
        "nn_cost": np.nan,
        "nn_time": np.nan,
        "nn_valid": False,
    }

    try:
        exact = solver.solve_exhaustive(metric, start)
        row["brute_cost"] = exact.total
        row["brute_time"] = exact.elapsed
        row["brute_valid"] = True
    except TSPError as e:
        row["brute_error"] = type(e).__name__

    greedy = solver.solve_nearest_neighbor(metric, start)
    row["nn_time"] = greedy.elapsed
    row["nn_valid"] = greedy.is_valid
    if greedy.is_valid:
        row["nn_cost"] = greedy.total

    if np.isfinite(row["brute_cost"]) and np.isfinite(row["nn_cost"]) and row["brute_cost"] > 0:
        row["gap_pct"] = (row["nn_cost"] - row["brute_cost"]) / row["brute_cost"] * 100
    else:
        row["gap_pct"] = np.nan

    return row


# =============================================================
# SWEEP
# =============================================================
def run_benchmark(sizes=SIZES, runs=RUNS_PER_SIZE, density=DENSITY, seed=SEED, verbose=True):
    rng = np.random.default_rng(seed)
    rows = []

    for n in sizes:
        for _ in tqdm(range(runs), desc=f"n={n}", disable=not verbose):
            graph = generate_random_graph(n, density=density, seed=int(rng.integers(2**31)))
            for metric in Metric:
                rows.append(compare_on_graph(graph, metric))

    return pd.DataFrame(rows)


def summarize(df):
    """Mean gap and mean times per (n, metric)."""
    return (
        df.groupby(["n", "metric"])
        .agg(
            avg_gap_pct=("gap_pct", "mean"),
            max_gap_pct=("gap_pct", "max"),
            brute_valid_rate=("brute_valid", "mean"),
            nn_valid_rate=("nn_valid", "mean"),
            optimal_rate=("gap_pct", lambda s: float(np.mean(s <= 1e-9))),
            avg_brute_time=("brute_time", "mean"),
            avg_nn_time=("nn_time", "mean"),
        )
        .reset_index()
    )


def main():
    os.makedirs(OUTPUT_DIR, exist_ok=True)

    df = run_benchmark()
    df.to_csv(os.path.join(OUTPUT_DIR, "brute_vs_nn_runs.csv"), index=False)

    summary = summarize(df)
    summary.to_csv(os.path.join(OUTPUT_DIR, "brute_vs_nn_summary.csv"), index=False)

    print("\n=== Nearest Neighbor vs Brute Force (gap %, lower = better) ===")
    print(summary.to_string(index=False))

    print("\n[Bench] Saved:")
    print(" - brute_vs_nn_runs.csv")
    print(" - brute_vs_nn_summary.csv")


if __name__ == "__main__":
    main()
