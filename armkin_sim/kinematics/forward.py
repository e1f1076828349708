"""
Closed-form forward kinematics for the 2R, 3R and polar arms.

All functions are pure and total: any real input produces a position.
Angles are in radians and lengths in metres.  The spatial arms use a
y-up frame in which a base yaw of zero points along +z, so the yaw
rotation of a planar radius ``r`` is ``x = sin(yaw) r, z = cos(yaw) r``.

Functions:
    fk_2r: Elbow and tip of the planar 2R arm.
    fk_3r: Tip of the yaw + 2-link arm.
    fk_3r_elbow: Elbow joint of the yaw + 2-link arm.
    fk_3r_batch: Vectorised ``fk_3r`` over many joint rows.
    fk_polar: Tip of the yaw + elevation + extension arm.
    tip_height_3r: Tip height of the 3R arm from its pitch joints.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from armkin_sim.kinematics.types import FK2RResult, Point2, Point3


def fk_2r(l1: float, l2: float, q1: float, q2: float) -> FK2RResult:
    """Compute the elbow and tip of a planar two-link arm.

    Args:
        l1: Upper link length.
        l2: Lower link length.
        q1: Shoulder angle measured from +x.
        q2: Elbow angle relative to the upper link.

    Returns:
        ``FK2RResult`` with the elbow ``joint`` and the ``tip``.
    """
    x1 = l1 * math.cos(q1)
    y1 = l1 * math.sin(q1)
    x2 = x1 + l2 * math.cos(q1 + q2)
    y2 = y1 + l2 * math.sin(q1 + q2)
    return FK2RResult(joint=Point2(x1, y1), tip=Point2(x2, y2))


def _sagittal(l1: float, l2: float, q2: float, q3: float) -> Tuple[float, float]:
    """Return (radius, height) of the tip in the arm's vertical plane."""
    r = l1 * math.cos(q2) + l2 * math.cos(q2 + q3)
    y = l1 * math.sin(q2) + l2 * math.sin(q2 + q3)
    return r, y


def _yaw(radius: float, height: float, yaw: float) -> Point3:
    """Rotate a (radius, height) pair about the vertical axis by *yaw*."""
    return Point3(x=math.sin(yaw) * radius, y=height, z=math.cos(yaw) * radius)


def fk_3r(l1: float, l2: float, q1: float, q2: float, q3: float) -> Point3:
    """Compute the tip of the yaw + shoulder + elbow arm.

    The shoulder and elbow form a planar two-link chain in the vertical
    plane selected by the base yaw ``q1``.

    Args:
        l1: Upper link length.
        l2: Lower link length.
        q1: Base yaw (0 points along +z).
        q2: Shoulder pitch above the horizontal.
        q3: Elbow angle relative to the upper link.

    Returns:
        Tip position.
    """
    r, y = _sagittal(l1, l2, q2, q3)
    return _yaw(r, y, q1)


def fk_3r_elbow(l1: float, q1: float, q2: float) -> Point3:
    """Position of the 3R elbow joint."""
    return _yaw(l1 * math.cos(q2), l1 * math.sin(q2), q1)


def tip_height_3r(l1: float, l2: float, q2: float, q3: float) -> float:
    """Height of the 3R tip; independent of the base yaw."""
    return l1 * math.sin(q2) + l2 * math.sin(q2 + q3)


def fk_3r_batch(l1: float, l2: float, joints: np.ndarray) -> np.ndarray:
    """Vectorised ``fk_3r`` over an ``(N, 3)`` array of radian joint rows.

    Args:
        l1: Upper link length.
        l2: Lower link length.
        joints: Array whose columns are ``q1, q2, q3``.

    Returns:
        ``(N, 3)`` array of ``x, y, z`` tip positions.
    """
    joints = np.atleast_2d(np.asarray(joints, dtype=np.float64))
    q1, q2, q3 = joints[:, 0], joints[:, 1], joints[:, 2]
    r = l1 * np.cos(q2) + l2 * np.cos(q2 + q3)
    y = l1 * np.sin(q2) + l2 * np.sin(q2 + q3)
    return np.stack([np.sin(q1) * r, y, np.cos(q1) * r], axis=1)


def fk_polar(theta: float, phi: float, rho: float) -> Point3:
    """Compute the tip of the yaw + elevation + extension arm.

    Args:
        theta: Base yaw (0 points along +z).
        phi: Elevation above the horizontal.
        rho: Extension length.

    Returns:
        Tip position.
    """
    radial = rho * math.cos(phi)
    return _yaw(radial, rho * math.sin(phi), theta)
