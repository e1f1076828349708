"""Geometry of the viewer; nothing here opens a window."""

import pytest

from armkin_sim.session.arm_3d import Arm3DSession
from armkin_sim.session.planar_2r import Planar2RSession
from armkin_sim.visualization.viewer import ArmViewer


@pytest.fixture
def viewer():
    return ArmViewer(width=640, height=480, scale=100.0, floor_margin=40)


def test_world_to_screen(viewer):
    assert viewer.world_to_screen(0.0, 0.0) == (320, 440)
    assert viewer.world_to_screen(1.0, 2.0) == (420, 240)
    assert viewer.world_to_screen(-0.5, 0.0) == (270, 440)


def test_planar_polyline_starts_at_base(viewer):
    session = Planar2RSession()
    points = viewer.arm_polyline(session)
    assert len(points) == 3
    assert points[0] == (320, 440)
    assert points[-1] == viewer.target_pixel(session)


def test_spatial_polylines(viewer):
    session = Arm3DSession()
    assert len(viewer.arm_polyline(session)) == 3
    assert viewer.arm_polyline(session)[-1] == viewer.target_pixel(session)
    session.toggle_robot_type()
    assert len(viewer.arm_polyline(session)) == 2


def test_hud_reports_arm_and_status(viewer):
    session = Arm3DSession()
    lines = viewer._hud_lines(session)
    assert lines[0].startswith("arm: 3r")
    assert "idle" in lines[0]
    session.animate_target_to_opposite(now=0.0)
    assert "animating" in viewer._hud_lines(session)[0]
