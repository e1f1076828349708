"""
Shared constants for the armkin_sim package.

Collects the default arm geometry, joint ranges, solver tolerances and
animation timing used by the kinematics core, the sessions and the
viewer.  Lengths are in metres and angles in degrees unless the name
says otherwise.
"""

from __future__ import annotations

from typing import Tuple

# ---------------------------------------------------------------------------
# 3R arm (base yaw + shoulder + elbow)
# ---------------------------------------------------------------------------
THREE_R_LINK_LENGTHS: Tuple[float, float] = (0.35, 0.40)
THREE_R_DEFAULT_JOINTS_DEG: Tuple[float, float, float] = (10.0, 30.0, 15.0)
THREE_R_Q1_RANGE_DEG: Tuple[float, float] = (0.0, 360.0)
THREE_R_Q2_RANGE_DEG: Tuple[float, float] = (0.0, 180.0)
THREE_R_Q3_RANGE_DEG: Tuple[float, float] = (0.0, 360.0)

# ---------------------------------------------------------------------------
# Polar arm (yaw + elevation + extension)
# ---------------------------------------------------------------------------
POLAR_DEFAULT_THETA_DEG: float = 10.0
POLAR_DEFAULT_PHI_DEG: float = 25.0
POLAR_DEFAULT_RHO: float = 0.45
POLAR_RHO_MIN: float = 0.05
POLAR_RHO_MAX: float = 0.9
POLAR_THETA_RANGE_DEG: Tuple[float, float] = (-180.0, 180.0)
POLAR_PHI_RANGE_DEG: Tuple[float, float] = (0.0, 90.0)

# ---------------------------------------------------------------------------
# 2R planar arm
# ---------------------------------------------------------------------------
TWO_R_LINK_LENGTHS: Tuple[float, float] = (0.25, 0.18)
TWO_R_DEFAULT_JOINTS_DEG: Tuple[float, float] = (20.0, 30.0)
TWO_R_JOINT_RANGE_DEG: Tuple[float, float] = (-180.0, 180.0)

# ---------------------------------------------------------------------------
# Entry limits and solver tuning
# ---------------------------------------------------------------------------
LINK_LENGTH_RANGE_MM: Tuple[float, float] = (50.0, 1000.0)
ELBOW_UP: int = 1
ELBOW_DOWN: int = -1
ELBOW_PENALTY: float = 0.1
REACH_TOLERANCE: float = 1e-6

# ---------------------------------------------------------------------------
# Animation timing
# ---------------------------------------------------------------------------
DEFAULT_ANIMATION_DURATION: float = 1.0
REFLECT_ANIMATION_DURATION: float = 0.8
DEFAULT_FPS: int = 60

# ---------------------------------------------------------------------------
# Colour palette (RGB 0-255) used by the viewer
# ---------------------------------------------------------------------------
COLOR_BACKGROUND: Tuple[int, int, int] = (243, 244, 246)
COLOR_LINK: Tuple[int, int, int] = (55, 65, 81)
COLOR_JOINT: Tuple[int, int, int] = (17, 24, 39)
COLOR_TARGET: Tuple[int, int, int] = (219, 68, 55)
COLOR_FLOOR: Tuple[int, int, int] = (200, 200, 200)
COLOR_TEXT: Tuple[int, int, int] = (50, 50, 50)
