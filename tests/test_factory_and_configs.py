import math

import pytest

from armkin_sim.kinematics.types import LinkLengths, NoSolution, IKFailure
from armkin_sim.robots.configs import (
    PolarArmConfig,
    ThreeRArmConfig,
    TwoRArmConfig,
    validate_elbow,
    validate_rho_band,
)
from armkin_sim.session.arm_3d import Arm3DSession, RobotType
from armkin_sim.session.factory import make_session, resolve_config
from armkin_sim.session.planar_2r import Planar2RSession


@pytest.mark.parametrize(
    "cfg_cls, name",
    [(ThreeRArmConfig, "3r"), (PolarArmConfig, "polar"), (TwoRArmConfig, "2r")],
)
def test_config_arm_type(cfg_cls, name):
    assert cfg_cls().arm_type == name


@pytest.mark.parametrize("l1, l2", [(0.0, 0.4), (0.35, -0.1), (math.nan, 0.4), (0.35, math.inf)])
def test_link_lengths_must_be_positive_and_finite(l1, l2):
    with pytest.raises(ValueError):
        LinkLengths(l1, l2)
    with pytest.raises(ValueError):
        ThreeRArmConfig(l1=l1, l2=l2)
    with pytest.raises(ValueError):
        TwoRArmConfig(l1=l1, l2=l2)


def test_link_lengths_reach():
    links = LinkLengths(0.35, 0.4)
    assert links.max_reach == pytest.approx(0.75)
    assert links.min_reach == pytest.approx(0.05)


def test_elbow_validation():
    validate_elbow(1)
    validate_elbow(-1)
    with pytest.raises(ValueError):
        validate_elbow(0)
    with pytest.raises(ValueError):
        TwoRArmConfig(elbow=2)
    with pytest.raises(ValueError):
        ThreeRArmConfig(preferred_elbow=0)


@pytest.mark.parametrize("rho_min, rho_max", [(0.0, 0.9), (0.5, 0.5), (0.6, 0.2), (0.05, math.inf)])
def test_rho_band_validation(rho_min, rho_max):
    with pytest.raises(ValueError):
        validate_rho_band(rho_min, rho_max)


def test_polar_start_must_lie_in_band():
    with pytest.raises(ValueError):
        PolarArmConfig(rho=0.95)
    with pytest.raises(ValueError):
        PolarArmConfig(rho_min=0.2, rho_max=0.6, rho=0.1)


def test_no_solution_is_falsy():
    failure = NoSolution(IKFailure.BELOW_FLOOR)
    assert not failure
    assert failure.reason is IKFailure.BELOW_FLOOR


def test_make_session_by_name():
    three_r = make_session("3r")
    polar = make_session("polar")
    planar = make_session("2r")
    assert isinstance(three_r, Arm3DSession) and three_r.robot_type is RobotType.THREE_R
    assert isinstance(polar, Arm3DSession) and polar.robot_type is RobotType.POLAR
    assert isinstance(planar, Planar2RSession)


def test_make_session_from_config():
    session = make_session(ThreeRArmConfig(l1=0.3, l2=0.3, animation_duration=0.5))
    assert session.links == LinkLengths(0.3, 0.3)
    assert session.animation_duration == 0.5
    planar = make_session(TwoRArmConfig(elbow=-1))
    assert planar.elbow == -1


def test_make_session_unknown_name():
    with pytest.raises(ValueError):
        make_session("scara")


def test_resolve_config_by_name_and_passthrough():
    assert isinstance(resolve_config("polar"), PolarArmConfig)
    cfg = TwoRArmConfig(l1=0.3)
    assert resolve_config(cfg) is cfg
    with pytest.raises(ValueError):
        resolve_config("scara")
