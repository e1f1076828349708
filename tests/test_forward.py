import math

import numpy as np
import pytest

from armkin_sim.kinematics.forward import (
    fk_2r,
    fk_3r,
    fk_3r_batch,
    fk_3r_elbow,
    fk_polar,
    tip_height_3r,
)


def test_fk_2r_straight_arm_along_x():
    out = fk_2r(0.25, 0.18, 0.0, 0.0)
    assert out.joint.x == pytest.approx(0.25)
    assert out.joint.y == pytest.approx(0.0)
    assert out.tip.x == pytest.approx(0.43)
    assert out.tip.y == pytest.approx(0.0)


def test_fk_2r_right_angle_elbow():
    out = fk_2r(1.0, 1.0, math.pi / 2, -math.pi / 2)
    assert out.joint.x == pytest.approx(0.0, abs=1e-12)
    assert out.joint.y == pytest.approx(1.0)
    assert out.tip.x == pytest.approx(1.0)
    assert out.tip.y == pytest.approx(1.0)


def test_fk_3r_zero_yaw_points_along_z():
    p = fk_3r(0.35, 0.4, 0.0, 0.0, 0.0)
    assert p.x == pytest.approx(0.0, abs=1e-12)
    assert p.y == pytest.approx(0.0, abs=1e-12)
    assert p.z == pytest.approx(0.75)


def test_fk_3r_quarter_yaw_points_along_x():
    p = fk_3r(0.35, 0.4, math.pi / 2, 0.0, 0.0)
    assert p.x == pytest.approx(0.75)
    assert p.z == pytest.approx(0.0, abs=1e-12)


def test_fk_3r_height_matches_tip_height_and_ignores_yaw():
    q2, q3 = math.radians(40.0), math.radians(-70.0)
    h = tip_height_3r(0.35, 0.4, q2, q3)
    for q1 in (0.0, 1.0, -2.5):
        assert fk_3r(0.35, 0.4, q1, q2, q3).y == pytest.approx(h)


def test_fk_3r_elbow_lies_on_upper_link():
    q1, q2 = math.radians(30.0), math.radians(60.0)
    e = fk_3r_elbow(0.35, q1, q2)
    assert math.sqrt(e.x ** 2 + e.y ** 2 + e.z ** 2) == pytest.approx(0.35)
    assert e.y == pytest.approx(0.35 * math.sin(q2))


def test_fk_3r_batch_matches_scalar():
    joints = np.array([[0.1, 0.5, -0.3], [2.0, 1.2, 0.4], [-1.0, 0.0, 1.5]])
    batch = fk_3r_batch(0.35, 0.4, joints)
    assert batch.shape == (3, 3)
    for row, out in zip(joints, batch):
        assert np.allclose(out, fk_3r(0.35, 0.4, *row).as_array())


def test_fk_polar():
    p = fk_polar(0.0, math.pi / 2, 0.5)
    assert p.y == pytest.approx(0.5)
    assert math.hypot(p.x, p.z) == pytest.approx(0.0, abs=1e-12)

    q = fk_polar(math.radians(90.0), math.radians(30.0), 0.6)
    assert q.x == pytest.approx(0.6 * math.cos(math.radians(30.0)))
    assert q.y == pytest.approx(0.3)
    assert q.z == pytest.approx(0.0, abs=1e-12)
