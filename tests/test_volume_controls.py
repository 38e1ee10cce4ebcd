import pytest

from ukmedia.volume_controls import (
    OSD_BASE_SIZE,
    Key,
    key_volume_gain,
    osd_geometry,
    slider_click_value,
    slider_drag_value,
    tip_text,
    wheel_step,
)


def test_tip_text_appends_percent():
    assert tip_text(42) == "42%"
    assert tip_text(0) == "0%"


@pytest.mark.parametrize("x", [-50, 0, 13, 77, 150, 219, 220, 400])
def test_drag_value_stays_in_range(x):
    value = slider_drag_value(x, 220, 0, 100)
    assert 0 <= value <= 100


def test_drag_value_reaches_both_ends():
    assert slider_drag_value(0, 220, 0, 100) == 0
    assert slider_drag_value(220, 220, 0, 100) == 100


def test_drag_value_is_monotonic():
    values = [slider_drag_value(x, 220, 0, 100) for x in range(0, 221)]
    assert values == sorted(values)


def test_drag_value_middle_is_uncompensated():
    assert slider_drag_value(50, 100, 0, 100) == 50


def test_drag_value_small_range_matches_rounding():
    assert slider_drag_value(5, 10, 0, 10) == 5
    assert slider_drag_value(10, 10, 0, 10) == 10


def test_drag_value_with_offset_minimum():
    assert slider_drag_value(0, 200, 20, 120) == 20
    assert slider_drag_value(200, 200, 20, 120) == 120


def test_click_value_ends_and_clamping():
    assert slider_click_value(0, 220, 0, 100) == 0
    assert slider_click_value(220, 220, 0, 100) == 100
    assert slider_click_value(500, 220, 0, 100) == 100
    assert slider_click_value(-10, 220, 0, 100) == 0


def test_click_value_is_monotonic():
    values = [slider_click_value(x, 220, 0, 100) for x in range(0, 221)]
    assert values == sorted(values)


@pytest.mark.parametrize("func", [slider_click_value, slider_drag_value])
def test_slider_rejects_bad_geometry(func):
    with pytest.raises(ValueError):
        func(10, 0, 0, 100)
    with pytest.raises(ValueError):
        func(10, 100, 50, 10)


def test_osd_geometry_small_screen_uses_base_size():
    geometry = osd_geometry(640, 480)
    assert geometry.size == OSD_BASE_SIZE
    assert geometry.corner_radius == OSD_BASE_SIZE // 10
    assert osd_geometry(320, 240).size == OSD_BASE_SIZE


def test_osd_geometry_full_hd():
    geometry = osd_geometry(1920, 1080)
    assert geometry.size == 292
    assert geometry.x == 814
    assert geometry.y == 664


@pytest.mark.parametrize("width,height", [(640, 480), (1366, 768), (1920, 1080), (3840, 2160)])
def test_osd_geometry_invariants(width, height):
    geometry = osd_geometry(width, height)
    assert geometry.icon_size < geometry.size
    assert geometry.icon_size + 2 * geometry.margin <= geometry.size
    assert abs(width - 2 * geometry.x - geometry.size) <= 1
    assert geometry.y >= height // 2
    assert geometry.y + geometry.size <= height


def test_osd_geometry_grows_with_screen():
    assert osd_geometry(3840, 2160).size > osd_geometry(1920, 1080).size


def test_osd_geometry_rejects_empty_screen():
    with pytest.raises(ValueError):
        osd_geometry(0, 1080)


@pytest.mark.parametrize(
    "key,gain",
    [
        (Key.MINUS, -1),
        (Key.PLUS, 1),
        (Key.UP, 1),
        (Key.DOWN, -1),
        (Key.LEFT, -1),
        (Key.RIGHT, 1),
    ],
)
def test_key_volume_gain(key, gain):
    assert key_volume_gain(key) == gain
    assert key_volume_gain(int(key)) == gain


def test_key_volume_gain_escape_and_unknown():
    assert key_volume_gain(Key.ESCAPE) is None
    assert key_volume_gain(0x41) is None


def test_wheel_step():
    assert wheel_step(120) is True
    assert wheel_step(-120) is False
    assert wheel_step(0) is None