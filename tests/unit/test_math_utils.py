"""Unit tests for position helpers."""

from __future__ import annotations

import pytest

from pytheater.misc.math_utils import (
    calculate_2d_distance,
    calculate_centroid,
    is_position_in_circle,
    running_centroid,
    to_horizontal,
)


def test_to_horizontal():
    assert to_horizontal((1, 2)) == (1.0, 2.0)
    assert to_horizontal((1, 99, 2)) == (1.0, 2.0)
    with pytest.raises(ValueError):
        to_horizontal((1,))


def test_distance_and_circle():
    assert calculate_2d_distance((0, 0), (3, 4)) == pytest.approx(5.0)
    assert is_position_in_circle((3, 500, 4), (0, 0, 0), 5)
    assert not is_position_in_circle((3, 4.1), (0, 0), 5)


def test_running_centroid_matches_batch_centroid():
    points = [(0, 0), (2, 0), (4, 6), (-2, 2)]
    centroid, count = None, 0
    for p in points:
        centroid, count = running_centroid(p, centroid, count)
    assert count == 4
    assert centroid == pytest.approx(calculate_centroid(points))


def test_running_centroid_rejects_mixed_dimensions():
    centroid, count = running_centroid((0, 0), None, 0)
    with pytest.raises(ValueError):
        running_centroid((1, 2, 3), centroid, count)


def test_centroid_requires_points():
    with pytest.raises(ValueError):
        calculate_centroid([])
