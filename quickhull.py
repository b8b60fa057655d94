"""
Module: quickhull
Description: QuickHull convex hull over a fixed, caller-owned point set.
             - Seed the hull with the lexicographic min/max points.
             - Partition candidates into two index buffers that swap roles
               at every level (ping-pong), with -1 marking an empty range.
             - Replace recursion with an explicit work stack so that
               adversarial inputs cannot exhaust the call stack.

@author: quickhull-sim contributors
@date: October 17, 2026
@version: 1.0
"""

__author__  = "quickhull-sim contributors"
__version__ = "1.0"
__date__    = "2026-10-17"
__project__ = "QuickHull: in-place divide-and-conquer convex hull"


from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple
import logging
import math

import numpy as np


logger = logging.getLogger(__name__)

# Buffer slot value meaning "this sub-range received no points".
NO_POINT = -1


# ---------- Errors ----------
class EmptyPointSetError(ValueError):
    """Raised when a hull is requested for zero points."""


class HullInvariantError(AssertionError):
    """Internal invariant violated (bad range bounds or runaway depth)."""


# ---------- Data model ----------
@dataclass
class Point:
    """A 2D position plus the 'on hull' marker set by the algorithm."""
    x: float
    y: float
    on_hull: bool = False

    def set_as_on_hull(self) -> None:
        self.on_hull = True

    def is_on_hull(self) -> bool:
        return self.on_hull

    def reset(self) -> None:
        self.on_hull = False

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


class HullEdge(NamedTuple):
    """Segment between two points of the set, referenced by index."""
    start: int
    end: int

    def coords(self, points: Sequence[Point]) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        return points[self.start].as_tuple(), points[self.end].as_tuple()


@dataclass
class HullResult:
    """
    Output of one QuickHull run.
      edges       : hull boundary, ordered as a closed cycle from the seed A
      debug_edges : split line A-B and every A-C / C-B probe (debug runs only)
      depth       : deepest sub-problem reached (seeds are depth 1)
      steps       : number of sub-problems taken off the work stack
    """
    edges: List[HullEdge] = field(default_factory=list)
    debug_edges: List[HullEdge] = field(default_factory=list)
    depth: int = 0
    steps: int = 0


def make_points(coords) -> List[Point]:
    """
    Build a PointSet from an (N, 2) array or any iterable of (x, y) pairs.
    Coordinates are converted to Python floats.
    """
    arr = np.asarray(coords, dtype=float)
    if arr.size == 0:
        return []
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"expected an (N, 2) array of coordinates, got shape {arr.shape}")
    return [Point(float(x), float(y)) for x, y in arr]


def reset_hull_flags(points: Iterable[Point]) -> None:
    for point in points:
        point.reset()


# ---------- Geometry predicates ----------
def orient(a: Point, b: Point, p: Point) -> float:
    """
    cross((b-a), (p-a)), twice the signed area of triangle abp.
    > 0  => p is counterclockwise of a->b
    < 0  => p is clockwise of a->b
    == 0 => collinear (also when p coincides with a or b)
    """
    return (b.x - a.x) * (p.y - a.y) - (b.y - a.y) * (p.x - a.x)


def is_above_line(a: Point, b: Point, p: Point) -> bool:
    """
    True when p lies strictly on the outer side of a->b.
    The outer side is the clockwise one ("above" on a y-down screen), so the
    resulting hull is traversed counterclockwise in a y-up frame.
    """
    return orient(a, b, p) < 0.0


def line_coefficients(a: Point, b: Point) -> Tuple[float, float, float]:
    """Implicit form a*x + b*y + c = 0 of the line through a and b."""
    return a.y - b.y, b.x - a.x, a.x * b.y - b.x * a.y


def dist_from_line(coeffs: Tuple[float, float, float], p: Point) -> float:
    la, lb, lc = coeffs
    return abs(la * p.x + lb * p.y + lc) / math.sqrt(la * la + lb * lb)


# ---------- Seeds ----------
def find_seed_points(points: Sequence[Point]) -> Tuple[int, int]:
    """
    Indices (A, B) of the lexicographically smallest and largest points by
    (x, y). Ties on x are broken by y so that A and B are always hull
    vertices, never points in the middle of a vertical hull edge. Exact
    duplicates: the first occurrence wins.
    """
    if not points:
        raise EmptyPointSetError("cannot compute the hull of an empty point set")
    ia = ib = 0
    for i in range(1, len(points)):
        p = points[i]
        a, b = points[ia], points[ib]
        if p.x < a.x or (p.x == a.x and p.y < a.y):
            ia = i
        if p.x > b.x or (p.x == b.x and p.y > b.y):
            ib = i
    return ia, ib


# ---------- Partitioning ----------
def split_all_points(points: Sequence[Point], ia: int, ib: int,
                     destination: List[int]) -> Tuple[int, int]:
    """
    Initial split of the whole set against A->B into `destination`.
    Points above A->B fill from index 0 forward, points above B->A fill from
    the last index backward. Points on the line and points already on the
    hull go nowhere. Returns (last_above, first_below); an empty side leaves
    NO_POINT at its cursor.
    """
    a, b = points[ia], points[ib]
    last_above = 0
    first_below = len(points) - 1
    n_above = n_below = 0

    for i, p in enumerate(points):
        if p.on_hull:
            continue
        side = orient(a, b, p)
        if side < 0.0:
            destination[last_above] = i
            last_above += 1
            n_above += 1
        elif side > 0.0:
            destination[first_below] = i
            first_below -= 1
            n_below += 1

    if n_above:
        last_above -= 1
    else:
        destination[last_above] = NO_POINT
    if n_below:
        first_below += 1
    else:
        destination[first_below] = NO_POINT
    return last_above, first_below


def split_points(points: Sequence[Point], ia: int, ib: int, ic: int,
                 source: List[int], range_start: int, range_end: int,
                 destination: List[int]) -> Tuple[int, int]:
    """
    Split source[range_start..range_end] into the same slots of
    `destination`: points above A->C grow forward from range_start, points
    above C->B grow backward from range_end. Points inside triangle ABC, and
    C itself, are dropped. Returns (last_ac, first_cb) with the same
    NO_POINT convention as split_all_points.
    """
    a, b, c = points[ia], points[ib], points[ic]
    last_ac = range_start
    first_cb = range_end
    n_ac = n_cb = 0

    for k in range(range_start, range_end + 1):
        i = source[k]
        p = points[i]
        if p.on_hull:
            continue
        if is_above_line(a, c, p):
            destination[last_ac] = i
            last_ac += 1
            n_ac += 1
        elif is_above_line(c, b, p):
            destination[first_cb] = i
            first_cb -= 1
            n_cb += 1

    if n_ac:
        last_ac -= 1
    else:
        destination[last_ac] = NO_POINT
    if n_cb:
        first_cb += 1
    else:
        destination[first_cb] = NO_POINT
    return last_ac, first_cb


def is_empty_range(buffer: List[int], range_start: int, range_end: int) -> bool:
    if range_start > range_end or range_start < 0 or range_end >= len(buffer):
        raise HullInvariantError(
            f"malformed range [{range_start}, {range_end}] in buffer of size {len(buffer)}")
    return buffer[range_start] == NO_POINT or buffer[range_end] == NO_POINT


def farthest_point(points: Sequence[Point], ia: int, ib: int,
                   buffer: List[int], range_start: int, range_end: int) -> int:
    """
    Index of the point in buffer[range_start..range_end] farthest from the
    line through A and B.

    Tied points lie on one line parallel to AB; the one farthest along A->B
    wins, so C is always an end of that run and never a point in the middle
    of a hull edge. Exact duplicates: the first encountered wins.
    """
    a, b = points[ia], points[ib]
    coeffs = line_coefficients(a, b)
    dx, dy = b.x - a.x, b.y - a.y

    best = buffer[range_start]
    p = points[best]
    best_dist = dist_from_line(coeffs, p)
    best_along = (p.x - a.x) * dx + (p.y - a.y) * dy
    for k in range(range_start + 1, range_end + 1):
        i = buffer[k]
        p = points[i]
        d = dist_from_line(coeffs, p)
        if d < best_dist:
            continue
        along = (p.x - a.x) * dx + (p.y - a.y) * dy
        if d > best_dist or along > best_along:
            best, best_dist, best_along = i, d, along
    return best


# ---------- QuickHull ----------
def quickhull(points: Sequence[Point], debug: bool = False,
              max_depth: Optional[int] = None) -> HullResult:
    """
    Compute the convex hull of `points`, flagging every hull vertex.

    Every sub-problem (A, B, range, buffer) is a task on an explicit stack.
    The left task (A, C) is pushed last so that it is processed first; hull
    edges therefore come out in boundary order. Depth never exceeds the
    number of hull vertices, so max_depth defaults to len(points).
    """
    n = len(points)
    if n == 0:
        raise EmptyPointSetError("cannot compute the hull of an empty point set")
    if max_depth is None:
        max_depth = n

    reset_hull_flags(points)
    result = HullResult()

    ia, ib = find_seed_points(points)
    points[ia].set_as_on_hull()
    points[ib].set_as_on_hull()
    logger.debug("seed points A=%d %s B=%d %s", ia, points[ia].as_tuple(), ib, points[ib].as_tuple())

    if ia == ib:
        # Only one distinct point: no edges.
        result.depth = 1
        return result

    if debug:
        result.debug_edges.append(HullEdge(ia, ib))

    # 2n index slots in total, reused at every level.
    buffers = ([NO_POINT] * n, [NO_POINT] * n)
    last_above, first_below = split_all_points(points, ia, ib, buffers[0])

    # (A, B, range_start, range_end, buffer id, depth)
    stack = [(ib, ia, first_below, n - 1, 0, 1),
             (ia, ib, 0, last_above, 0, 1)]

    while stack:
        a, b, start, end, src, depth = stack.pop()
        result.steps += 1
        if depth > max_depth:
            raise HullInvariantError(f"sub-problem depth {depth} exceeds limit {max_depth}")
        result.depth = max(result.depth, depth)

        source = buffers[src]
        if is_empty_range(source, start, end):
            result.edges.append(HullEdge(a, b))
            continue

        c = farthest_point(points, a, b, source, start, end)
        points[c].set_as_on_hull()
        if debug:
            result.debug_edges.append(HullEdge(a, c))
            result.debug_edges.append(HullEdge(b, c))

        dst = 1 - src
        last_ac, first_cb = split_points(points, a, b, c, source, start, end, buffers[dst])

        stack.append((c, b, first_cb, end, dst, depth + 1))
        stack.append((a, c, start, last_ac, dst, depth + 1))

    logger.debug("hull of %d points: %d edges, depth %d, %d steps",
                 n, len(result.edges), result.depth, result.steps)
    return result


def compute_hull(points: Sequence[Point]) -> List[HullEdge]:
    """Hull edges of `points`; hull vertices get their on-hull flag set."""
    return quickhull(points).edges


# ---------- Reading the hull back ----------
def hull_vertex_indices(points: Sequence[Point], edges: Sequence[HullEdge]) -> List[int]:
    """
    Hull vertices as an ordered cycle (counterclockwise, y-up).
    Without edges the hull is the single flagged point.
    """
    if edges:
        return [e.start for e in edges]
    return [i for i, p in enumerate(points) if p.on_hull][:1]


def hull_polygon(points: Sequence[Point], edges: Sequence[HullEdge]) -> List[Tuple[float, float]]:
    return [points[i].as_tuple() for i in hull_vertex_indices(points, edges)]
