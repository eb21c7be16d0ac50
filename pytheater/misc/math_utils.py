"""
Mathematical helpers shared by regions, assets and the inventory code.

Positions follow the map convention used across pytheater: horizontal
positions are (x, z) and full positions are (x, y, z) with y as altitude.
"""
import math
from typing import List, Optional, Sequence, Tuple, Union

Position2D = Tuple[float, float]
Position3D = Tuple[float, float, float]
PositionType = Union[Position2D, Position3D]

ORIGIN: Position3D = (0.0, 0.0, 0.0)


def calculate_2d_distance(pos1: Position2D, pos2: Position2D) -> float:
    """
    Calculate 2D Euclidean distance between two points.

    Examples:
        >>> calculate_2d_distance((0, 0), (3, 4))
        5.0
    """
    x1, z1 = pos1
    x2, z2 = pos2
    return math.sqrt((x2 - x1)**2 + (z2 - z1)**2)


def to_horizontal(position: Sequence[float]) -> Position2D:
    """
    Project a position onto the horizontal plane.

    (x, z) passes through unchanged; (x, y, z) drops the altitude.

    Raises:
        ValueError: If the position has neither 2 nor 3 coordinates
    """
    if len(position) == 2:
        return (float(position[0]), float(position[1]))
    if len(position) == 3:
        return (float(position[0]), float(position[2]))
    raise ValueError(f"Position must have 2 or 3 coordinates, got {len(position)}")


def is_position_in_circle(position: Sequence[float], center: Sequence[float], radius: float) -> bool:
    """
    Check if a position lies within a horizontal circle.

    Examples:
        >>> is_position_in_circle((5, 0), (0, 0), 10)
        True
        >>> is_position_in_circle((15, 0, 0), (0, 0, 0), 10)
        False
    """
    return calculate_2d_distance(to_horizontal(position), to_horizontal(center)) <= radius


def calculate_centroid(positions: List[PositionType]) -> PositionType:
    """
    Calculate the centroid (arithmetic mean) of a list of positions.

    Raises:
        ValueError: If no positions provided or dimensions differ

    Examples:
        >>> calculate_centroid([(0, 0), (2, 0)])
        (1.0, 0.0)
    """
    if not positions:
        raise ValueError("No positions provided")

    dims = len(positions[0])
    if any(len(pos) != dims for pos in positions):
        raise ValueError("All positions must have the same number of coordinates")

    count = len(positions)
    return tuple(sum(pos[i] for pos in positions) / count for i in range(dims))


def running_centroid(
    point: Sequence[float],
    previous: Optional[Sequence[float]],
    count: int
) -> Tuple[PositionType, int]:
    """
    Fold one more point into a running centroid.

    Args:
        point: New point to include
        previous: Centroid of the `count` points seen so far, or None
        count: How many points `previous` already averages

    Returns:
        (new_centroid, new_count)

    Examples:
        >>> c, n = running_centroid((0, 0), None, 0)
        >>> running_centroid((2, 0), c, n)
        ((1.0, 0.0), 2)
    """
    if previous is None or count == 0:
        return tuple(float(v) for v in point), 1

    if len(point) != len(previous):
        raise ValueError(
            f"Cannot mix {len(point)}D and {len(previous)}D points in one centroid"
        )

    new_count = count + 1
    centroid = tuple(
        prev + (float(value) - prev) / new_count
        for prev, value in zip(previous, point)
    )
    return centroid, new_count
