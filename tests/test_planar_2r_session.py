import pytest

from armkin_sim.kinematics.types import IKFailure, JointAngles2R, Point2
from armkin_sim.robots.configs import TwoRArmConfig
from armkin_sim.session.planar_2r import Planar2RSession


def _close(p, q, tol=1e-6):
    return abs(p.x - q.x) < tol and abs(p.y - q.y) < tol


@pytest.fixture
def session():
    return Planar2RSession()


def test_initial_state(session):
    assert session.arm_type == "2r"
    assert session.joints == JointAngles2R(20.0, 30.0)
    assert _close(session.target, session.forward().tip)


def test_go_to_target(session):
    assert session.set_target(0.2, 0.15)
    assert session.go_to_target()
    assert _close(session.forward().tip, Point2(0.2, 0.15))
    assert _close(session.target, Point2(0.2, 0.15))
    assert session.last_failure is None


def test_go_to_unreachable_target(session):
    before = session.joints
    session.set_target(1.0, 0.5)
    assert not session.go_to_target()
    assert session.joints == before
    assert session.last_failure is IKFailure.BEYOND_REACH


def test_target_is_kept_above_the_floor(session):
    session.set_target(0.1, -0.2)
    assert session.target == Point2(0.1, 0.0)
    session.set_target_field("y", -1.0)
    assert session.target.y == 0.0
    session.set_target_field_mm("x", 150.0)
    assert session.target.x == pytest.approx(0.15)
    with pytest.raises(ValueError):
        session.set_target_field("z", 0.1)


def test_link_length_change_refuses_to_sink_the_tip():
    session = Planar2RSession(TwoRArmConfig(joints_deg=(30.0, -70.0)))
    assert session.forward().tip.y >= 0.0
    before = session.links
    assert not session.set_link_lengths(l2=0.3)
    assert session.links == before
    assert not session.set_link_lengths_mm(l2_mm=300.0)
    assert session.links == before
    assert session.set_link_lengths(l2=0.1)
    assert session.links.l2 == 0.1
    assert session.forward().tip.y >= 0.0


def test_joint_slider_floor_guard(session):
    before = session.joints
    assert not session.set_joint("q1", -90.0)
    assert session.joints == before
    assert session.set_joint("q1", 45.0)
    assert session.joints.q1 == 45.0
    assert _close(session.target, session.forward().tip)
    with pytest.raises(ValueError):
        session.set_joint("q3", 0.0)


def test_elbow_and_link_inputs(session):
    assert session.set_elbow(-1)
    assert session.elbow == -1
    with pytest.raises(ValueError):
        session.set_elbow(2)
    assert session.set_link_lengths_mm(300.0, 200.0)
    assert session.links.l1 == pytest.approx(0.3)
    assert session.links.l2 == pytest.approx(0.2)
    assert session.set_link_lengths_mm(l1_mm=5.0)
    assert session.links.l1 == pytest.approx(0.05)
    with pytest.raises(ValueError):
        session.set_link_lengths(l1=-0.1)


def test_calculate_then_apply(session):
    result = session.calculate(0.2, 0.15)
    assert result.ok
    assert result.arm_type == "2r"
    assert result.elbow == 1
    assert session.apply_calculation()
    assert _close(session.target, Point2(0.2, 0.15))

    failed = session.calculate(1.0, 0.5)
    assert not failed.ok
    assert failed.failure is IKFailure.BEYOND_REACH
    assert not session.apply_calculation()


def test_cartesian_animation(session):
    start = session.target
    assert session.animate_target_to_opposite(now=0.0, duration=1.0)
    assert session.tick(0.5)
    assert session.target.x == pytest.approx(0.0, abs=1e-12)
    assert not session.tick(1.0)
    assert session.target == Point2(-start.x, start.y)


def test_joint_animation_reaches_mirrored_target(session):
    session.set_target(0.2, 0.15)
    session.go_to_target()
    assert session.animate_joints_to_opposite(now=0.0, duration=0.8)
    assert not session.set_joint("q1", 45.0)
    assert not session.set_target(0.1, 0.1)
    assert not session.animate_target_to_opposite(now=0.1)
    assert session.tick(0.4)
    assert -180.0 <= session.joints.q1 < 180.0
    assert -180.0 <= session.joints.q2 < 180.0
    assert not session.tick(0.8)
    assert _close(session.target, Point2(-0.2, 0.15))
    assert not session.is_animating


def test_joint_animation_needs_a_solvable_mirror(session):
    session.set_target(1.0, 0.2)
    assert not session.animate_joints_to_opposite(now=0.0)
    assert not session.is_animating
    assert session.last_failure is IKFailure.BEYOND_REACH


def test_configured_session():
    s = Planar2RSession(TwoRArmConfig(l1=0.3, l2=0.2, joints_deg=(90.0, 0.0), elbow=-1))
    assert _close(s.target, Point2(0.0, 0.5))
    assert s.elbow == -1
