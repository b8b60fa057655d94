"""
Module: quickhull_sim
Description: Drive the QuickHull computation and evaluate it empirically.
             - Place points uniformly in the unit square, or evenly on a
               circle (the arrangement where every point is on the hull).
             - Run QuickHull on one point set, resetting between runs and
               keeping a history of run times.
             - Measure median runtime per n and compare it against a
               normalized n log n curve.
             - Produce plots: points + convex hull, and runtime vs theory.

@author: quickhull-sim contributors
@date: October 17, 2026
@version: 1.0
"""

__author__  = "quickhull-sim contributors"
__version__ = "1.0"
__date__    = "2026-10-17"


from dataclasses import dataclass, field
from statistics import median
from typing import List, Optional, Sequence
import argparse
import logging
import math
import time

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

import quickhull as qh


logger = logging.getLogger(__name__)

POINT_COUNT_PRESETS = (10, 100, 1_000, 10_000, 100_000, 1_000_000)


# ---------- Configuration ----------
@dataclass
class SimulationConfig:
    point_count: int = 10
    worst_case: bool = False          # points on a circle instead of the unit square
    debug: bool = False               # keep construction segments
    seed: Optional[int] = None
    sizes: List[int] = field(default_factory=lambda: [100, 1_000, 10_000])
    repeats: int = 5

    def validate(self) -> None:
        if self.point_count < 1:
            raise ValueError(f"point_count must be positive, got {self.point_count}")
        if not self.sizes:
            raise ValueError("sizes must not be empty")
        if any(n < 1 for n in self.sizes):
            raise ValueError(f"every size must be positive, got {self.sizes}")
        if self.repeats < 1:
            raise ValueError(f"repeats must be at least 1, got {self.repeats}")


# ---------- Point placement ----------
def place_points_uniformly(points: Sequence[qh.Point], rng: np.random.Generator) -> None:
    """Move every point to a uniform random position in [0, 1) x [0, 1)."""
    coords = rng.random((len(points), 2))
    for point, (x, y) in zip(points, coords):
        point.x, point.y = float(x), float(y)


def place_points_on_circle(points: Sequence[qh.Point]) -> None:
    """
    Spread the points evenly on the circle of radius 0.5 centred at
    (0.5, 0.5). Every point is then a hull vertex.
    """
    step = 2.0 * math.pi / len(points)
    for i, point in enumerate(points):
        point.x = math.cos(step * i) * 0.5 + 0.5
        point.y = math.sin(step * i) * 0.5 + 0.5


# ---------- Simulation ----------
class QuickHullSim:
    """
    Owns one point set and the hull computed over it.
    reset() re-places the points and clears flags and edges; run() computes
    the hull once and records how long it took.
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()
        self.config.validate()
        self.rng = np.random.default_rng(self.config.seed)
        self.points: List[qh.Point] = [qh.Point(0.0, 0.0) for _ in range(self.config.point_count)]
        self.edges: List[qh.HullEdge] = []
        self.debug_edges: List[qh.HullEdge] = []
        self.run_times: List[float] = []
        self.complete = False
        self.reset()

    def set_point_count(self, point_count: int) -> None:
        """Resize the point set; the run-time history no longer applies."""
        if point_count < 1:
            raise ValueError(f"point_count must be positive, got {point_count}")
        self.config.point_count = point_count
        self.points = [qh.Point(0.0, 0.0) for _ in range(point_count)]
        self.run_times.clear()
        logger.info("Point count = %d", point_count)
        self.reset()

    def reset(self) -> None:
        self.edges = []
        self.debug_edges = []
        if self.config.worst_case:
            place_points_on_circle(self.points)
        else:
            place_points_uniformly(self.points, self.rng)
        qh.reset_hull_flags(self.points)
        self.complete = False

    def run(self) -> qh.HullResult:
        start = time.perf_counter()
        result = qh.quickhull(self.points, debug=self.config.debug)
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        self.edges = result.edges
        self.debug_edges = result.debug_edges
        self.run_times.append(elapsed_ms)
        self.complete = True
        logger.info("Time to QuickHull %d points (milliseconds): %.3f avg: %.3f",
                    len(self.points), elapsed_ms, self.average_time)
        return result

    @property
    def average_time(self) -> float:
        if not self.run_times:
            return 0.0
        return sum(self.run_times) / len(self.run_times)

    def hull_points(self) -> List[qh.Point]:
        return [p for p in self.points if p.is_on_hull()]


# ---------- Experiment ----------
def run_experiment(sizes: Sequence[int], repeats: int = 5, worst_case: bool = False,
                   seed: Optional[int] = None) -> pd.DataFrame:
    """
    Median QuickHull runtime for each n in `sizes` (fresh placement per
    repeat), next to an n log n curve scaled so that it matches the measured
    median at the largest n.
    """
    rows = []
    for n in sizes:
        sim = QuickHullSim(SimulationConfig(point_count=n, worst_case=worst_case, seed=seed,
                                            sizes=list(sizes), repeats=repeats))
        for r in range(repeats):
            if r:
                sim.reset()
            sim.run()
        rows.append({
            "n": n,
            "median_ms": median(sim.run_times),
            "nlogn": n * math.log2(n) if n > 1 else 1.0,
            "hull_size": len(sim.hull_points()),
        })

    df = pd.DataFrame(rows, columns=["n", "median_ms", "nlogn", "hull_size"])
    ref = df.loc[df["n"].idxmax()]
    scale = ref["median_ms"] / ref["nlogn"] if ref["nlogn"] else 0.0
    df["theory_ms"] = df["nlogn"] * scale
    return df


# ---------- Plots ----------
def plot_points_and_hull(points: Sequence[qh.Point], edges: Sequence[qh.HullEdge]):
    """Scatter the point set and draw the closed hull (robust for 1/2/>=3 vertices)."""
    fig, ax = plt.subplots()
    if points:
        xy = np.array([p.as_tuple() for p in points], dtype=float)
        ax.scatter(xy[:, 0], xy[:, 1], s=15, label="Points")

    hull = np.array(qh.hull_polygon(points, edges), dtype=float) if points else np.empty((0, 2))
    if len(hull) == 1:
        ax.scatter(hull[0, 0], hull[0, 1], s=40, marker="x", label="Hull point")
    elif len(hull) >= 2:
        closed = np.vstack([hull, hull[0]])
        ax.plot(closed[:, 0], closed[:, 1], "-", label=f"Hull (|V|={len(hull)})")

    ax.set_aspect("equal", adjustable="box")
    ax.set_title(f"Points + Convex Hull (|V| = {len(hull)})")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    if len(points) > 0:
        ax.legend()
    return fig


def plot_runtime_vs_theory(df: pd.DataFrame):
    fig, ax = plt.subplots()
    ax.plot(df["n"], df["median_ms"], "o-", label="QuickHull (median)")
    ax.plot(df["n"], df["theory_ms"], "--", label="n log n (normalized)")
    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_title("Runtime vs. O(n log n)")
    ax.set_xlabel("n")
    ax.set_ylabel("time (ms)")
    ax.legend()
    return fig


# ---------- Command line ----------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run QuickHull on random or worst-case point sets.")
    parser.add_argument("--points", "-n", type=int, default=10,
                        help=f"number of points (presets: {', '.join(map(str, POINT_COUNT_PRESETS))})")
    parser.add_argument("--worst-case", "-w", action="store_true",
                        help="place points evenly on a circle")
    parser.add_argument("--debug", "-d", action="store_true",
                        help="collect construction segments")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--runs", type=int, default=1,
                        help="number of runs, re-placing points between runs")
    parser.add_argument("--experiment", action="store_true",
                        help="measure runtime against n log n instead of a single run")
    parser.add_argument("--sizes", type=int, nargs="+", default=[100, 1_000, 10_000],
                        help="point counts for --experiment")
    parser.add_argument("--repeats", type=int, default=5, help="repeats per size for --experiment")
    parser.add_argument("--plot", action="store_true", help="show matplotlib figures")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = SimulationConfig(point_count=args.points, worst_case=args.worst_case,
                              debug=args.debug, seed=args.seed,
                              sizes=args.sizes, repeats=args.repeats)
    try:
        config.validate()
        if args.runs < 1:
            raise ValueError(f"runs must be at least 1, got {args.runs}")

        if args.experiment:
            df = run_experiment(config.sizes, config.repeats, config.worst_case, config.seed)
            logger.info("Runtime experiment:\n%s", df.to_string(index=False))
            if args.plot:
                plot_runtime_vs_theory(df)
        else:
            sim = QuickHullSim(config)
            for r in range(args.runs):
                if r:
                    sim.reset()
                result = sim.run()
            logger.info("Hull: %d vertices, %d edges, depth %d",
                        len(sim.hull_points()), len(result.edges), result.depth)
            if args.plot:
                plot_points_and_hull(sim.points, sim.edges)
    except Exception as e:
        logger.exception("An error occurred: %s", e)
        return 1

    if args.plot:
        plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
