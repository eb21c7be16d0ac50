"""
Polygon helpers for region boundaries.

A region border is a simple polygon in the horizontal plane. It is split into
triangles once, and each triangle carries precomputed barycentric terms so
point containment is a handful of dot products per triangle.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .math_utils import Position2D, to_horizontal

Triangle = Tuple[Position2D, Position2D, Position2D]

# Points on a shared edge must land in at least one triangle
EDGE_EPSILON = 1e-9


@dataclass(frozen=True)
class BarycentricPrecalc:
    """Per-triangle terms reused by every containment query."""
    origin: Tuple[float, float]
    v0: Tuple[float, float]
    v1: Tuple[float, float]
    dot00: float
    dot01: float
    dot11: float
    inv_denom: float


def precompute_barycentric(triangle: Sequence[Sequence[float]]) -> BarycentricPrecalc:
    """
    Precompute the barycentric terms of a triangle.

    Raises:
        ValueError: If the triangle is degenerate (zero area)
    """
    a, b, c = (np.asarray(to_horizontal(p), dtype=float) for p in triangle)
    v0 = c - a
    v1 = b - a
    dot00 = float(np.dot(v0, v0))
    dot01 = float(np.dot(v0, v1))
    dot11 = float(np.dot(v1, v1))
    denom = dot00 * dot11 - dot01 * dot01
    if abs(denom) < 1e-12:
        raise ValueError(f"Degenerate triangle {tuple(triangle)}")
    return BarycentricPrecalc(
        origin=(float(a[0]), float(a[1])),
        v0=(float(v0[0]), float(v0[1])),
        v1=(float(v1[0]), float(v1[1])),
        dot00=dot00,
        dot01=dot01,
        dot11=dot11,
        inv_denom=1.0 / denom,
    )


def point_in_triangle_fast(point: Sequence[float], triangle: Triangle, precalc: BarycentricPrecalc) -> bool:
    """
    Test whether a point lies inside (or on the edge of) a triangle.

    Args:
        point: (x, z) or (x, y, z); altitude is ignored
        triangle: The triangle vertices (kept for signature parity with callers
            that do not precompute; the precalc fully describes the triangle)
        precalc: Result of precompute_barycentric(triangle)
    """
    px, pz = to_horizontal(point)
    v2 = np.array([px - precalc.origin[0], pz - precalc.origin[1]])
    dot02 = float(np.dot(precalc.v0, v2))
    dot12 = float(np.dot(precalc.v1, v2))

    u = (precalc.dot11 * dot02 - precalc.dot01 * dot12) * precalc.inv_denom
    v = (precalc.dot00 * dot12 - precalc.dot01 * dot02) * precalc.inv_denom
    return u >= -EDGE_EPSILON and v >= -EDGE_EPSILON and (u + v) <= 1.0 + EDGE_EPSILON


def _signed_area(points: np.ndarray) -> float:
    x = points[:, 0]
    z = points[:, 1]
    return 0.5 * float(np.dot(x, np.roll(z, -1)) - np.dot(z, np.roll(x, -1)))


def _cross(o: np.ndarray, a: np.ndarray, b: np.ndarray) -> float:
    return float((a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0]))


def triangulate_polygon(vertices: Sequence[Sequence[float]]) -> List[Triangle]:
    """
    Split a simple polygon into triangles by ear clipping.

    Works for convex and concave polygons in either winding order.

    Args:
        vertices: Ordered polygon vertices, (x, z) or (x, y, z)

    Returns:
        len(vertices) - 2 triangles as tuples of (x, z) points

    Raises:
        ValueError: If fewer than 3 vertices are given or the polygon cannot
            be clipped (self-intersecting or degenerate)
    """
    if len(vertices) < 3:
        raise ValueError(f"A polygon needs at least 3 vertices, got {len(vertices)}")

    points = np.array([to_horizontal(v) for v in vertices], dtype=float)
    if _signed_area(points) < 0:
        points = points[::-1]

    remaining = list(range(len(points)))
    triangles: List[Triangle] = []

    while len(remaining) > 3:
        clipped = False
        for i in range(len(remaining)):
            prev_idx = remaining[i - 1]
            cur_idx = remaining[i]
            next_idx = remaining[(i + 1) % len(remaining)]
            a, b, c = points[prev_idx], points[cur_idx], points[next_idx]

            # Reflex or collinear vertex cannot be an ear
            if _cross(a, b, c) <= 0:
                continue

            precalc = precompute_barycentric((a, b, c))
            others = (j for j in remaining if j not in (prev_idx, cur_idx, next_idx))
            if any(point_in_triangle_fast(points[j], (a, b, c), precalc) for j in others):
                continue

            triangles.append((tuple(a), tuple(b), tuple(c)))
            remaining.pop(i)
            clipped = True
            break

        if not clipped:
            raise ValueError("Polygon is not simple; no ear could be clipped")

    a, b, c = (points[j] for j in remaining)
    triangles.append((tuple(a), tuple(b), tuple(c)))
    return [tuple((float(p[0]), float(p[1])) for p in tri) for tri in triangles]


@dataclass
class RegionBorder:
    """Region boundary: vertices plus triangulation and barycentric data."""
    vertices: List[Position2D]
    triangles: List[Triangle] = field(default_factory=list)
    precalcs: List[BarycentricPrecalc] = field(default_factory=list)

    @classmethod
    def from_vertices(cls, vertices: Sequence[Sequence[float]]) -> "RegionBorder":
        """Triangulate a polygon and precompute its containment data."""
        flat = [to_horizontal(v) for v in vertices]
        triangles = triangulate_polygon(flat)
        return cls(
            vertices=flat,
            triangles=triangles,
            precalcs=[precompute_barycentric(tri) for tri in triangles],
        )

    @classmethod
    def from_triangles(cls, triangles: Sequence[Triangle]) -> "RegionBorder":
        """Build a border from an existing triangulation."""
        tris = [tuple(to_horizontal(p) for p in tri) for tri in triangles]
        vertices: List[Position2D] = []
        for tri in tris:
            for p in tri:
                if p not in vertices:
                    vertices.append(p)
        return cls(
            vertices=vertices,
            triangles=tris,
            precalcs=[precompute_barycentric(tri) for tri in tris],
        )
