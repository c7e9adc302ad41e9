import argparse
import csv
import logging
import os
import statistics
import time

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .session import DEFAULT_COLS, DEFAULT_MAX_TICKS, DEFAULT_ROWS, Session

DEFAULT_SIZES = [
    (5, 5),
    (10, 10),
    (DEFAULT_ROWS, DEFAULT_COLS),
    (40, 40),
]

METRICS = [
    "elapsed_sec",
    "ticks",
    "walls_removed",
    "nodes_expanded",
    "frontier_max",
    "path_length",
]


def run_single(rows, cols, seed=None, max_ticks=DEFAULT_MAX_TICKS):
    session = Session(rows, cols, seed=seed)

    t0 = time.perf_counter()
    state = session.run_to_completion(max_ticks)
    elapsed = time.perf_counter() - t0

    m = session.metrics
    result = {
        "rows": rows,
        "cols": cols,
        "seed": seed,
        "state": state.value,
        "elapsed_sec": elapsed,
        "ticks": m["ticks"],
        "walls_removed": m["walls_removed"],
        "nodes_expanded": m["nodes_expanded"],
        "frontier_max": m["frontier_max"],
        "path_length": m["path_length"],
        "finished": state.is_terminal,
    }
    return result


def aggregate_results(rows, group_by=("rows", "cols")):
    # Aggregate by group-by keys
    grouped = {}
    for r in rows:
        key = tuple(r[k] for k in group_by)
        grouped.setdefault(key, []).append(r)

    def agg_stat(values):
        if not values:
            return {"avg": 0, "min": 0, "max": 0, "stdev": 0}
        return {
            "avg": statistics.mean(values),
            "min": min(values),
            "max": max(values),
            "stdev": statistics.pstdev(values) if len(values) > 1 else 0,
        }

    summary = []
    for key, items in grouped.items():
        entry = {"group": key, "count": len(items)}
        for m in METRICS:
            stats = agg_stat([it[m] for it in items])
            for stat_name, value in stats.items():
                entry[f"{m}_{stat_name}"] = value
        entry["finished_rate"] = sum(1 for it in items if it["finished"]) / len(items)
        summary.append(entry)
    return summary


def write_csv(path, rows):
    if not rows:
        return
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        for r in rows:
            writer.writerow(r)


def plot_metric(summary, metric_key, out_path):
    # summary rows are the expanded ones written to summary.csv
    labels = [f"{row['rows']}x{row['cols']}" for row in summary]
    values = [row.get(metric_key, 0) for row in summary]
    fig = plt.figure(figsize=(max(6, len(labels) * 0.8), 4))
    plt.bar(range(len(values)), values)
    plt.xticks(range(len(values)), labels)
    plt.xlabel("grid size")
    plt.ylabel(metric_key)
    plt.tight_layout()
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    plt.savefig(out_path)
    plt.close(fig)


def parse_size(value):
    try:
        r, c = value.lower().split("x", 1)
        return int(r), int(c)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ROWSxCOLS, got {value!r}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run repeated maze generate-and-solve sessions and plot metrics.")
    parser.add_argument("--runs", type=int, default=10, help="Runs per grid size")
    parser.add_argument("--sizes", nargs="*", type=parse_size, default=DEFAULT_SIZES, metavar="ROWSxCOLS")
    parser.add_argument("--seed", type=int, default=None, help="Base seed (default: current time)")
    parser.add_argument("--max_ticks", type=int, default=DEFAULT_MAX_TICKS)
    parser.add_argument("--out_dir", default="metrics_output")
    parser.add_argument("--no-plots", dest="plots", action="store_false", help="Skip writing PNG charts")
    parser.add_argument("--verbose", action="store_true", help="Log every session result")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    all_rows = []
    seed_base = args.seed if args.seed is not None else int(time.time())

    for rows, cols in args.sizes:
        for i in range(args.runs):
            res = run_single(rows, cols, seed=seed_base + i, max_ticks=args.max_ticks)
            all_rows.append(res)

    os.makedirs(args.out_dir, exist_ok=True)
    write_csv(os.path.join(args.out_dir, "raw_results.csv"), all_rows)

    summary = aggregate_results(all_rows)
    # Expand group columns so CSV is nice
    expanded = []
    for row in summary:
        r, c = row["group"]
        new_row = {k: v for k, v in row.items() if k != "group"}
        new_row["rows"] = r
        new_row["cols"] = c
        expanded.append(new_row)
    write_csv(os.path.join(args.out_dir, "summary.csv"), expanded)

    if args.plots:
        for metric in [
            "elapsed_sec_avg",
            "nodes_expanded_avg",
            "frontier_max_avg",
            "path_length_avg",
        ]:
            plot_metric(expanded, metric, os.path.join(args.out_dir, f"{metric}.png"))

    print(f"Wrote results to {args.out_dir}")


if __name__ == "__main__":
    main()
