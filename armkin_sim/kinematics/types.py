"""
Value types shared by the forward and inverse kinematics routines.

Every type here is an immutable dataclass.  Solvers work in radians and
return solution objects that know how to present themselves in degrees;
sessions hold joint values in degrees and convert at the call boundary.

Classes:
    Point2, Point3: Cartesian positions (metres).
    LinkLengths: Validated pair of link lengths.
    JointAngles3R, JointAnglesPolar, JointAngles2R: Joint containers.
    PlanarIKResult: Raw output of the two-link planar solver.
    FK2RResult: Elbow and tip of the planar 2R arm.
    Solution3R, SolutionPolar, Solution2R: Accepted IK solutions.
    IKFailure: Why a target could not be solved.
    NoSolution: Falsy sentinel returned instead of a solution.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum

import numpy as np

from armkin_sim.utils.constants import THREE_R_Q2_RANGE_DEG
from armkin_sim.utils.helpers import clamp, floor_clamp, norm_deg_360, rad_to_deg


@dataclass(frozen=True)
class Point2:
    """A point in the vertical plane of the 2R arm (x right, y up)."""

    x: float
    y: float

    def as_array(self) -> np.ndarray:
        """Return the point as a float64 array of shape ``(2,)``."""
        return np.array([self.x, self.y], dtype=np.float64)

    def floor_clamped(self) -> Point2:
        """Return a copy with ``y`` raised to the floor if it is below it."""
        return replace(self, y=floor_clamp(self.y))


@dataclass(frozen=True)
class Point3:
    """A point in arm space: y is up, yaw 0 points along +z."""

    x: float
    y: float
    z: float

    def as_array(self) -> np.ndarray:
        """Return the point as a float64 array of shape ``(3,)``."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def floor_clamped(self) -> Point3:
        """Return a copy with ``y`` raised to the floor if it is below it."""
        return replace(self, y=floor_clamp(self.y))


@dataclass(frozen=True)
class LinkLengths:
    """Lengths of the two serial links of an arm, in metres.

    Attributes:
        l1: Shoulder-to-elbow length.
        l2: Elbow-to-tip length.

    Raises:
        ValueError: If either length is not a positive finite number.
    """

    l1: float
    l2: float

    def __post_init__(self) -> None:
        for name, value in (("l1", self.l1), ("l2", self.l2)):
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"Link length {name} must be positive and finite, got {value!r}")

    @property
    def max_reach(self) -> float:
        """Radius of the outer boundary of the reach annulus."""
        return self.l1 + self.l2

    @property
    def min_reach(self) -> float:
        """Radius of the inner boundary of the reach annulus."""
        return abs(self.l1 - self.l2)


@dataclass(frozen=True)
class JointAngles3R:
    """Base yaw ``q1``, shoulder pitch ``q2`` and elbow ``q3``."""

    q1: float
    q2: float
    q3: float


@dataclass(frozen=True)
class JointAnglesPolar:
    """Base yaw ``theta``, elevation ``phi`` and extension ``rho`` (metres)."""

    theta: float
    phi: float
    rho: float


@dataclass(frozen=True)
class JointAngles2R:
    """Shoulder ``q1`` and elbow ``q2`` of the planar arm."""

    q1: float
    q2: float


class IKFailure(Enum):
    """Distinct reasons an inverse-kinematics request has no solution."""

    BEYOND_REACH = "beyond_reach"
    INSIDE_DEAD_ZONE = "inside_dead_zone"
    BELOW_FLOOR = "below_floor"


@dataclass(frozen=True)
class NoSolution:
    """Absent-value result of an IK solver.

    Instances are falsy so callers can test ``if not solution``; the
    ``reason`` keeps the three failure causes apart for messaging.

    Attributes:
        reason: Why the target could not be solved.
    """

    reason: IKFailure

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class PlanarIKResult:
    """Output of the two-link planar solver.

    The angles are always defined (the law-of-cosines term is clamped) but
    must be discarded when ``ok`` is False.

    Attributes:
        q1: Shoulder angle (radians).
        q2: Elbow angle (radians).
        ok: Whether the target lies inside the reach annulus.
        failure: Cause when ``ok`` is False, otherwise ``None``.
    """

    q1: float
    q2: float
    ok: bool
    failure: IKFailure | None = None


@dataclass(frozen=True)
class FK2RResult:
    """Elbow joint and tip positions of the planar 2R arm."""

    joint: Point2
    tip: Point2


@dataclass(frozen=True)
class Solution3R:
    """An accepted 3R solution in radians.

    Attributes:
        q1: Base yaw.
        q2: Shoulder pitch.
        q3: Elbow angle relative to the upper link.
        elbow: Elbow sign (+1 or -1) the candidate was solved with.
        y_elbow: Height of the elbow joint above the floor.
        y_tip: Height of the tip above the floor.
        cost: Selection cost; lower wins.
    """

    q1: float
    q2: float
    q3: float
    elbow: int
    y_elbow: float
    y_tip: float
    cost: float

    def to_degrees(self) -> JointAngles3R:
        """Return presentation angles: q1, q3 in [0, 360) and q2 in [0, 180]."""
        lo, hi = THREE_R_Q2_RANGE_DEG
        return JointAngles3R(
            q1=norm_deg_360(rad_to_deg(self.q1)),
            q2=clamp(rad_to_deg(self.q2), lo, hi),
            q3=norm_deg_360(rad_to_deg(self.q3)),
        )


@dataclass(frozen=True)
class SolutionPolar:
    """An accepted polar solution; angles in radians, ``rho`` in metres."""

    theta: float
    phi: float
    rho: float
    y_tip: float

    def to_degrees(self) -> JointAnglesPolar:
        return JointAnglesPolar(
            theta=rad_to_deg(self.theta),
            phi=rad_to_deg(self.phi),
            rho=self.rho,
        )


@dataclass(frozen=True)
class Solution2R:
    """An accepted planar 2R solution in radians."""

    q1: float
    q2: float
    elbow: int

    def to_degrees(self) -> JointAngles2R:
        return JointAngles2R(q1=rad_to_deg(self.q1), q2=rad_to_deg(self.q2))
