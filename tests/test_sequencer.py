import numpy as np
import pytest

from armkin_sim.animation.sequencer import (
    AnimationKind,
    AnimationState,
    Sequencer,
    SequencerStatus,
    advance,
    eased_fraction,
    interpolate_animation,
    reflect_through_origin,
    sample_timeline,
)
from armkin_sim.kinematics.types import JointAngles3R, Point2, Point3


def test_eased_fraction_clamps_and_eases():
    assert eased_fraction(0.0, 1000.0) == 0.0
    assert eased_fraction(500.0, 1000.0) == pytest.approx(0.5)
    assert eased_fraction(1000.0, 1000.0) == 1.0
    assert eased_fraction(5000.0, 1000.0) == 1.0
    assert eased_fraction(10.0, 0.0) == 1.0


def test_reflect_through_origin():
    assert reflect_through_origin(Point3(0.1, 0.2, 0.3)) == Point3(-0.1, 0.2, -0.3)
    assert reflect_through_origin(Point2(0.1, 0.2)) == Point2(-0.1, 0.2)
    with pytest.raises(TypeError):
        reflect_through_origin((0.1, 0.2, 0.3))


def test_cartesian_lerp_midpoint_and_type():
    start = Point3(0.2, 0.3, 0.4)
    end = reflect_through_origin(start)
    mid = interpolate_animation(AnimationKind.CARTESIAN_LERP, start, end, 500.0, 1000.0)
    assert isinstance(mid, Point3)
    assert mid.x == pytest.approx(0.0)
    assert mid.y == pytest.approx(0.3)
    assert mid.z == pytest.approx(0.0)


def test_cartesian_lerp_ignores_wrap_mask():
    out = interpolate_animation(
        AnimationKind.CARTESIAN_LERP, (350.0,), (10.0,), 500.0, 1000.0, wrap_mask=(True,)
    )
    assert out == (pytest.approx(180.0),)


def test_joint_lerp_wraps_only_flagged_components():
    start = JointAngles3R(350.0, 20.0, 10.0)
    end = JointAngles3R(10.0, 60.0, 300.0)
    mid = interpolate_animation(
        AnimationKind.JOINT_LERP, start, end, 500.0, 1000.0, wrap_mask=(True, False, True)
    )
    assert isinstance(mid, JointAngles3R)
    assert mid.q1 == pytest.approx(0.0)
    assert mid.q2 == pytest.approx(40.0)
    assert mid.q3 == pytest.approx(335.0)


def test_joint_lerp_endpoints():
    start = (10.0, 20.0)
    end = (30.0, -40.0)
    assert interpolate_animation(AnimationKind.JOINT_LERP, start, end, 0.0, 800.0) == start
    assert interpolate_animation(AnimationKind.JOINT_LERP, start, end, 800.0, 800.0) == end


def test_interpolate_rejects_mismatched_arity():
    with pytest.raises(ValueError):
        interpolate_animation(AnimationKind.JOINT_LERP, (1.0, 2.0), (1.0,), 0.0, 1.0)
    with pytest.raises(ValueError):
        interpolate_animation(AnimationKind.JOINT_LERP, (1.0, 2.0), (1.0, 3.0), 0.0, 1.0, (True,))


def test_advance_is_idempotent_after_completion():
    state = AnimationState(Point2(0.0, 0.0), Point2(1.0, 2.0), 10.0, 0.5, AnimationKind.CARTESIAN_LERP)
    value, done = advance(state, 10.25)
    assert not done
    assert value.x == pytest.approx(0.5)
    first, done_a = advance(state, 10.5)
    again, done_b = advance(state, 12.0)
    assert done_a and done_b
    assert first == again == Point2(1.0, 2.0)


def test_sequencer_lifecycle():
    frames = []
    seq = Sequencer(on_frame=frames.append)
    assert seq.status is SequencerStatus.IDLE
    assert seq.tick(0.0) is None

    assert seq.start(AnimationKind.CARTESIAN_LERP, Point2(0.0, 0.0), Point2(1.0, 0.0), now=0.0, duration=1.0)
    assert seq.is_running
    assert seq.tick(0.5).x == pytest.approx(0.5)
    assert seq.is_running
    assert seq.tick(1.0) == Point2(1.0, 0.0)
    assert seq.status is SequencerStatus.IDLE
    assert seq.state is None
    assert len(frames) == 2


def test_sequencer_drops_second_start():
    seq = Sequencer()
    assert seq.start(AnimationKind.CARTESIAN_LERP, Point2(0.0, 0.0), Point2(1.0, 0.0), now=0.0)
    assert not seq.start(AnimationKind.CARTESIAN_LERP, Point2(5.0, 5.0), Point2(6.0, 6.0), now=0.1)
    assert seq.state.start_value == Point2(0.0, 0.0)


def test_sequencer_cancel_returns_to_idle():
    seq = Sequencer()
    seq.start(AnimationKind.JOINT_LERP, (0.0,), (90.0,), now=0.0, duration=2.0)
    seq.tick(0.5)
    seq.cancel()
    assert not seq.is_running
    assert seq.tick(1.0) is None
    assert seq.start(AnimationKind.JOINT_LERP, (0.0,), (90.0,), now=1.0)


def test_sample_timeline_shape_and_endpoints():
    frames = sample_timeline(
        AnimationKind.JOINT_LERP, (350.0, 0.0), (10.0, 90.0), duration=1.0, fps=10, wrap_mask=(True, False)
    )
    assert frames.shape == (11, 2)
    assert frames[0] == pytest.approx([350.0, 0.0])
    assert frames[-1] == pytest.approx([10.0, 90.0])
    assert frames[5, 1] == pytest.approx(45.0)
    assert np.all(np.diff(frames[:, 1]) >= 0.0)
