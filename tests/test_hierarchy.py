import numpy as np
import pytest

from oglkit.hierarchy import (
    CIRCLE_VERTEX_COUNT,
    GRID_VERTEX_COUNT,
    animation_time,
    circle_positions,
    circle_transform,
    grid_lines,
)
from oglkit.transforms import translate


def test_circle_fan_layout():
    points = circle_positions()
    assert points.shape == (CIRCLE_VERTEX_COUNT, 3)
    assert np.allclose(points[0], [0.0, 0.0, 0.0])
    assert np.allclose(np.linalg.norm(points[1:], axis=1), 1.0, atol=1e-6)
    assert np.allclose(points[1], [1.0, 0.0, 0.0])
    assert np.all(points[:, 2] == 0.0)


def test_grid_lines_layout():
    lines = grid_lines()
    assert lines.shape == (GRID_VERTEX_COUNT, 3)
    assert np.all(np.abs(lines[:, :2]) <= 5.0)
    assert np.all(lines[:, 2] == 0.0)
    first_half = lines[: GRID_VERTEX_COUNT // 2]
    assert np.all(first_half[0::2, 0] == first_half[1::2, 0])


def test_animation_time_is_periodic():
    for t in (0.3, 2.0, 4.9, 13.7):
        assert animation_time(t + 5.0) == pytest.approx(animation_time(t))
        assert 0.0 <= animation_time(t) < 1.0


def test_animation_time_starts_at_zero():
    assert animation_time(0.0) == 0.0
    assert animation_time(5.0) == pytest.approx(0.0)


def test_circle_transform_scales_unit_points():
    m = circle_transform(2.0, 3.0, np.identity(4))
    assert np.allclose(m @ [1.0, 0.0, 0.0, 1.0], [2.0, 0.0, 0.0, 1.0])
    assert np.allclose(m @ [0.0, 1.0, 0.0, 1.0], [0.0, 3.0, 0.0, 1.0])
    assert np.allclose(m @ [0.0, 0.0, 1.0, 1.0], [0.0, 0.0, 1.0, 1.0])


def test_circle_transform_keeps_parent():
    parent = translate(np.identity(4), (1.0, -2.0, 0.0))
    m = circle_transform(0.5, 0.5, parent)
    assert np.allclose(m @ [0.0, 0.0, 0.0, 1.0], [1.0, -2.0, 0.0, 1.0])
    assert np.allclose(m @ [2.0, 0.0, 0.0, 1.0], [2.0, -2.0, 0.0, 1.0])