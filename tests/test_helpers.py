import math

import pytest

from armkin_sim.utils.helpers import (
    angle_lerp,
    clamp,
    deg_to_rad,
    ease_in_out_cubic,
    floor_clamp,
    lerp,
    m_to_mm,
    mm_display,
    mm_to_m,
    norm_deg_360,
    rad_to_deg,
    wrap_deg_180,
)


def test_degree_radian_conversion():
    assert deg_to_rad(180.0) == pytest.approx(math.pi)
    assert rad_to_deg(math.pi / 2) == pytest.approx(90.0)
    assert rad_to_deg(deg_to_rad(37.5)) == pytest.approx(37.5)


def test_clamp_and_lerp():
    assert clamp(5.0, 0.0, 1.0) == 1.0
    assert clamp(-5.0, 0.0, 1.0) == 0.0
    assert clamp(0.3, 0.0, 1.0) == 0.3
    assert lerp(2.0, 4.0, 0.25) == pytest.approx(2.5)


def test_angle_lerp_takes_shortest_path_through_zero():
    assert angle_lerp(350.0, 10.0, 0.5) == pytest.approx(0.0)
    assert angle_lerp(10.0, 350.0, 0.5) == pytest.approx(0.0)


def test_angle_lerp_endpoints():
    assert angle_lerp(350.0, 10.0, 0.0) == pytest.approx(350.0)
    assert angle_lerp(350.0, 10.0, 1.0) == pytest.approx(10.0)
    assert angle_lerp(30.0, 90.0, 0.5) == pytest.approx(60.0)


@pytest.mark.parametrize(
    "value, expected",
    [(0.0, 0.0), (360.0, 0.0), (-90.0, 270.0), (725.0, 5.0), (-1e-15, 0.0)],
)
def test_norm_deg_360(value, expected):
    out = norm_deg_360(value)
    assert 0.0 <= out < 360.0
    assert out == pytest.approx(expected, abs=1e-9)


def test_wrap_deg_180():
    assert wrap_deg_180(190.0) == pytest.approx(-170.0)
    assert wrap_deg_180(-190.0) == pytest.approx(170.0)
    assert wrap_deg_180(45.0) == pytest.approx(45.0)


def test_ease_in_out_cubic_fixed_points():
    assert ease_in_out_cubic(0.0) == 0.0
    assert ease_in_out_cubic(1.0) == 1.0
    assert ease_in_out_cubic(0.5) == pytest.approx(0.5)


def test_ease_in_out_cubic_is_monotonic():
    samples = [ease_in_out_cubic(i / 200.0) for i in range(201)]
    assert all(b >= a for a, b in zip(samples, samples[1:]))


def test_unit_conversions():
    assert m_to_mm(0.35) == pytest.approx(350.0)
    assert mm_to_m(400.0) == pytest.approx(0.4)
    assert m_to_mm(None) == 0.0
    assert mm_to_m(None) == 0.0
    assert mm_display(0.12349) == 123
    assert floor_clamp(-0.2) == 0.0
    assert floor_clamp(0.2) == 0.2
