import math

import numpy as np
import pytest

from oglkit.picking import (
    NO_SELECTION,
    PickingScene,
    build_color_map,
    get_int_from_rgba,
    get_rgba,
    pick,
    spiral_geometry,
    spiral_translation,
)


def test_geometry_has_two_vertices_per_step():
    geometry = spiral_geometry(100)
    assert geometry.vertex_count == 200
    for array in (geometry.colors, geometry.selected_colors, geometry.normals):
        assert array.shape == (200, 3)


def test_geometry_first_step_values():
    geometry = spiral_geometry(100)
    np.testing.assert_allclose(geometry.vertices[0], [0.3, 0.0, 0.05], atol=1e-6)
    np.testing.assert_allclose(geometry.vertices[1], [0.5, 0.0, -0.5], atol=1e-6)
    np.testing.assert_allclose(geometry.colors[0], [1.0, 0.2, 0.0], atol=1e-6)
    np.testing.assert_allclose(geometry.selected_colors[1], [1.0, 0.8, 0.0], atol=1e-6)


def test_geometry_normals_are_unit_length():
    geometry = spiral_geometry(50)
    lengths = np.linalg.norm(geometry.normals, axis=1)
    np.testing.assert_allclose(lengths, 1.0, atol=1e-6)
    np.testing.assert_allclose(geometry.normals[:, 2], math.sqrt(0.75), atol=1e-6)


def test_geometry_pairs_share_colours():
    geometry = spiral_geometry(20)
    np.testing.assert_array_equal(geometry.colors[0::2], geometry.colors[1::2])
    np.testing.assert_array_equal(geometry.normals[0::2], geometry.normals[1::2])


def test_geometry_rejects_no_steps():
    with pytest.raises(ValueError):
        spiral_geometry(0)


@pytest.mark.parametrize("value", [0, 1, 9, 255, 256, 65535, 0x12345678, 0xFFFFFFFF])
def test_rgba_round_trip(value):
    assert get_int_from_rgba(get_rgba(value)) == value


def test_rgba_channel_order():
    red, green, blue, alpha = get_rgba(0x01020304)
    assert (red, green, blue, alpha) == (0x02, 0x03, 0x04, 0x01)


def test_small_ids_use_blue_channel():
    assert get_rgba(7) == (0, 0, 7, 0)


def test_get_rgba_rejects_out_of_range():
    with pytest.raises(ValueError):
        get_rgba(-1)
    with pytest.raises(ValueError):
        get_rgba(1 << 32)


def test_get_int_from_rgba_needs_four_components():
    with pytest.raises(ValueError):
        get_int_from_rgba((1, 2, 3))


def test_spiral_translation_on_unit_circle():
    np.testing.assert_allclose(spiral_translation(0, 10), [1.0, 0.0, 0.0], atol=1e-12)
    for i in range(10):
        t = spiral_translation(i, 10)
        assert math.isclose(np.linalg.norm(t), 1.0)
        assert t[2] == 0.0


def test_spiral_translation_rejects_zero_count():
    with pytest.raises(ValueError):
        spiral_translation(0, 0)


def test_color_map_and_pick():
    color_map = build_color_map(10)
    assert len(color_map) == 10
    for i in range(10):
        assert pick(get_rgba(i), color_map) == i


def test_pick_background_is_no_selection():
    color_map = build_color_map(10)
    assert pick((255, 255, 255, 255), color_map) == NO_SELECTION


def test_pick_rejects_bad_pixel():
    with pytest.raises(ValueError):
        pick((0, 0, 0), build_color_map(10))


def test_scene_transforms_place_spirals_on_circle():
    scene = PickingScene()
    transforms = scene.spiral_transforms()
    assert len(transforms) == scene.spiral_count
    inverse_view = np.linalg.inv(scene.model_view)
    for i, matrix in enumerate(transforms):
        local = inverse_view @ matrix
        np.testing.assert_allclose(local[:3, 3], spiral_translation(i, 10), atol=1e-9)
        np.testing.assert_allclose(local[:3, :3], np.identity(3), atol=1e-9)


def test_scene_projection_follows_resize():
    scene = PickingScene(1200, 800)
    proj = scene.projection
    assert math.isclose(proj[1, 1] / proj[0, 0], 1200 / 800)
    scene.resize(400, 400)
    proj = scene.projection
    assert math.isclose(proj[1, 1] / proj[0, 0], 1.0)


def test_scene_resize_rejects_empty():
    scene = PickingScene()
    with pytest.raises(ValueError):
        scene.resize(0, 10)


def test_scene_select_and_clear():
    scene = PickingScene()
    assert scene.selected_spiral == NO_SELECTION
    assert scene.select(get_rgba(4)) == 4
    assert scene.selected_spiral == 4
    assert scene.select((255, 255, 255, 255)) == NO_SELECTION
    assert scene.selected_spiral == NO_SELECTION


def test_picking_color_matches_identifier():
    scene = PickingScene()
    colour = scene.picking_color(3)
    recovered = tuple(round(channel * 255) for channel in colour)
    assert pick(recovered, scene.color_map) == 3