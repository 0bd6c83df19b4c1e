"""
Performance benchmarking for the PT floor system searches.

Measures search time, evaluated grid points and peak memory for a set of
bays, serial and with worker processes.

Usage:
    python scripts/benchmark.py --bay 30 30
    python scripts/benchmark.py --bay 40 30 --workers 4
    python scripts/benchmark.py --all
"""

import argparse
import logging
import sys
import time
import tracemalloc
from pathlib import Path
from typing import Any, Dict, List

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.data_models import CostParameters, ProjectInput
from src.search.comparator import SEARCHES

logger = logging.getLogger("benchmark")

STANDARD_BAYS = ((20.0, 20.0), (30.0, 30.0), (40.0, 30.0), (60.0, 30.0))


def benchmark_bay(bay_length: float, bay_width: float, workers: int = 1) -> List[Dict[str, Any]]:
    """Run each system search once and record timing and memory."""
    project = ProjectInput(bay_length=bay_length, bay_width=bay_width,
                           name=f"Benchmark {bay_length:g}x{bay_width:g}")
    costs = CostParameters()
    rows = []

    for system, search_cls in SEARCHES.items():
        search = search_cls(project, costs)
        tracemalloc.start()
        start = time.perf_counter()
        outcome = search.run(workers=workers)
        elapsed = time.perf_counter() - start
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        result = outcome.result
        rows.append({
            "system": system.value,
            "grid": len(search.grid()),
            "evaluated": outcome.diagnostics.evaluated,
            "feasible": outcome.diagnostics.feasible,
            "seconds": elapsed,
            "peak_mb": peak / 1024 / 1024,
            "cost_per_sf": result.total_cost / project.plan_area if result else None,
        })
    return rows


def print_rows(bay_length: float, bay_width: float, rows: List[Dict[str, Any]]) -> None:
    print(f"\n=== Bay {bay_length:g} x {bay_width:g} ft ===")
    print(f"{'System':<14}{'Grid':>8}{'Eval':>8}{'Feas':>8}{'Time(s)':>10}{'Peak MB':>10}{'$/sf':>10}")
    for row in rows:
        cost = f"{row['cost_per_sf']:.2f}" if row["cost_per_sf"] is not None else "n/a"
        print(
            f"{row['system']:<14}{row['grid']:>8}{row['evaluated']:>8}{row['feasible']:>8}"
            f"{row['seconds']:>10.2f}{row['peak_mb']:>10.1f}{cost:>10}"
        )


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark the PT floor system searches")
    parser.add_argument("--bay", nargs=2, type=float, metavar=("LENGTH", "WIDTH"),
                        help="Bay length and width in feet")
    parser.add_argument("--all", action="store_true", help="Run the standard bay set")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes per search")
    parser.add_argument("--verbose", action="store_true", help="Log search progress")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.all:
        bays = STANDARD_BAYS
    elif args.bay:
        bays = (tuple(args.bay),)
    else:
        parser.error("Specify --bay LENGTH WIDTH or --all")

    for bay_length, bay_width in bays:
        print_rows(bay_length, bay_width, benchmark_bay(bay_length, bay_width, args.workers))
    return 0


if __name__ == "__main__":
    sys.exit(main())
