"""Two-dimensional convex hulls with a height range, and their collision tests."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence


@dataclass(frozen=True)
class Vec2:
    """A point or direction in the xy-plane."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        """Unit vector in the same direction; NaN components for a zero vector."""
        n = self.length()
        if n == 0.0:
            return Vec2(math.nan, math.nan)
        return Vec2(self.x / n, self.y / n)


@dataclass(frozen=True)
class Vector3:
    """A point or direction in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)


@dataclass
class ConvexHull:
    """Counter-clockwise hull polygon with per-edge data and a z range."""

    points: list[Vec2] = field(default_factory=list)
    edges: list[Vec2] = field(default_factory=list)
    normals: list[Vec2] = field(default_factory=list)
    z_min: float = 0.0
    z_max: float = 0.0
    area: float = 0.0


@dataclass
class ConvexHull2D:
    """Hull polygon given as 3D points, with a vertical extent."""

    chull: list[Vector3] = field(default_factory=list)
    min_z: float = 0.0
    max_z: float = 0.0
    center_point: Vector3 = field(default_factory=Vector3)

    def area(self) -> float:
        """Signed shoelace area of the polygon."""
        total = 0.0
        for p1, p2 in zip(self.chull, self.chull[1:] + self.chull[:1]):
            total += 0.5 * (p1.x * p2.y - p2.x * p1.y)
        return total

    def height(self) -> float:
        return self.max_z - self.min_z

    def volume(self) -> float:
        return self.area() * self.height()


def _cross(o: Vec2, a: Vec2, b: Vec2) -> float:
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def convex_hull_indices(points: Sequence[Vec2]) -> list[int]:
    """Indices of the hull vertices of ``points``, counter-clockwise, collinear points dropped."""
    order = sorted(range(len(points)), key=lambda i: (points[i].x, points[i].y))
    if len(order) <= 2:
        distinct = []
        for i in order:
            if not distinct or points[distinct[-1]] != points[i]:
                distinct.append(i)
        return distinct

    def chain(indices):
        result: list[int] = []
        for i in indices:
            while len(result) >= 2 and _cross(points[result[-2]], points[result[-1]], points[i]) <= 0:
                result.pop()
            result.append(i)
        return result

    lower = chain(order)
    upper = chain(reversed(order))
    hull = lower[:-1] + upper[:-1]
    if not hull:
        return [order[0]]
    return hull


def calculate_edges_and_normals(chull: ConvexHull) -> None:
    """Fill ``chull.edges`` and outward ``chull.normals`` from its points."""
    pts = chull.points
    chull.edges = [p2 - p1 for p1, p2 in zip(pts, pts[1:] + pts[:1])]
    chull.normals = [Vec2(e.y, -e.x).normalized() for e in chull.edges]


def calculate_area(chull: ConvexHull) -> float:
    """Set and return the signed area of the hull in the xy-plane."""
    pts = chull.points
    chull.area = sum(0.5 * (p1.x * p2.y - p2.x * p1.y) for p1, p2 in zip(pts, pts[1:] + pts[:1]))
    return chull.area


def create(points: Sequence[Vec2], z_min: float, z_max: float) -> tuple[ConvexHull, Vector3]:
    """Build a hull centred on its own origin.

    Returns the hull and the translation of that origin in the frame of ``points``.
    """
    tz = (z_min + z_max) / 2
    chull = ConvexHull(z_min=z_min - tz, z_max=z_max - tz)

    hull_points = [points[i] for i in convex_hull_indices(points)]

    xy_min = Vec2(
        min((p.x for p in hull_points), default=1e9),
        min((p.y for p in hull_points), default=1e9),
    )
    xy_max = Vec2(
        max((p.x for p in hull_points), default=-1e9),
        max((p.y for p in hull_points), default=-1e9),
    )
    tx = (xy_min.x + xy_max.x) / 2
    ty = (xy_min.y + xy_max.y) / 2

    offset = Vec2(tx, ty)
    chull.points = [p - offset for p in hull_points]
    calculate_edges_and_normals(chull)
    calculate_area(chull)
    return chull, Vector3(tx, ty, tz)


def create_absolute(points: Sequence[Vec2], z_min: float, z_max: float) -> ConvexHull:
    """Build a hull that keeps the frame of ``points``."""
    chull = ConvexHull(z_min=z_min, z_max=z_max)
    chull.points = [points[i] for i in convex_hull_indices(points)]
    calculate_edges_and_normals(chull)
    calculate_area(chull)
    return chull


def collide(
    c1: ConvexHull,
    pos1: Vector3,
    c2: ConvexHull,
    pos2: Vector3,
    xy_padding: float,
    z_padding: float,
) -> bool:
    """True if the two hulls at the given positions overlap, allowing for padding."""
    if len(c1.points) < 3 or len(c2.points) < 3:
        return False

    z_diff = pos2.z - pos1.z
    if c1.z_max < c2.z_min + z_diff - 2 * z_padding or c2.z_max < c1.z_min - z_diff - 2 * z_padding:
        return False

    pos_diff = Vec2(pos2.x - pos1.x, pos2.y - pos1.y)

    for p1, n in zip(c1.points, c1.normals):
        projections = [n.dot(q - p1) for q in c1.points]
        min1 = min(projections) - xy_padding
        max1 = max(projections) + xy_padding

        p1_c2 = p1 - pos_diff
        below = above = False
        overlap = False
        for q in c2.points:
            p = n.dot(q - p1_c2)
            below = below or p < max1
            above = above or p > min1
            if below and above:
                overlap = True
                break

        if not overlap:
            return False

    return True