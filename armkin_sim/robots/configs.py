"""
Dataclass configurations for every simulated arm.

Each config carries the geometry, starting pose and joint ranges of one
arm topology and is validated on construction, so sessions built from a
config can assume positive link lengths and a sane extension band.

Classes:
    ArmConfig: Abstract base configuration shared by all arms.
    ThreeRArmConfig: Yaw + shoulder + elbow arm.
    PolarArmConfig: Yaw + elevation + extension arm.
    TwoRArmConfig: Planar two-link arm.
"""

from __future__ import annotations

import abc
import math
from dataclasses import dataclass
from typing import Tuple

from armkin_sim.kinematics.types import LinkLengths
from armkin_sim.utils.constants import (
    ELBOW_DOWN,
    ELBOW_UP,
    POLAR_DEFAULT_PHI_DEG,
    POLAR_DEFAULT_RHO,
    POLAR_DEFAULT_THETA_DEG,
    POLAR_PHI_RANGE_DEG,
    POLAR_RHO_MAX,
    POLAR_RHO_MIN,
    POLAR_THETA_RANGE_DEG,
    REFLECT_ANIMATION_DURATION,
    THREE_R_DEFAULT_JOINTS_DEG,
    THREE_R_LINK_LENGTHS,
    THREE_R_Q1_RANGE_DEG,
    THREE_R_Q2_RANGE_DEG,
    THREE_R_Q3_RANGE_DEG,
    TWO_R_DEFAULT_JOINTS_DEG,
    TWO_R_JOINT_RANGE_DEG,
    TWO_R_LINK_LENGTHS,
)


def validate_elbow(elbow: int) -> None:
    """Raise if *elbow* is not +1 or -1.

    Args:
        elbow: Elbow sign to check.

    Raises:
        ValueError: When the sign is anything else.
    """
    if elbow not in (ELBOW_UP, ELBOW_DOWN):
        raise ValueError(f"Elbow sign must be +1 or -1, got {elbow!r}")


def validate_rho_band(rho_min: float, rho_max: float) -> None:
    """Raise unless ``0 < rho_min < rho_max`` and both are finite.

    Args:
        rho_min: Shortest extension.
        rho_max: Longest extension.

    Raises:
        ValueError: When the band is empty, inverted or non-positive.
    """
    if not (math.isfinite(rho_min) and math.isfinite(rho_max)):
        raise ValueError(f"Extension band must be finite, got [{rho_min!r}, {rho_max!r}]")
    if not 0.0 < rho_min < rho_max:
        raise ValueError(f"Extension band needs 0 < rho_min < rho_max, got [{rho_min}, {rho_max}]")


@dataclass
class ArmConfig(abc.ABC):
    """Base configuration shared by all armkin_sim arms.

    Attributes:
        animation_duration: Default length of reflection animations (s).
    """

    animation_duration: float = REFLECT_ANIMATION_DURATION

    @property
    @abc.abstractmethod
    def arm_type(self) -> str:
        """Return the short name used by ``make_session``.

        Returns:
            One of ``'3r'``, ``'polar'`` or ``'2r'``.
        """
        raise NotImplementedError


@dataclass
class ThreeRArmConfig(ArmConfig):
    """Configuration for the yaw + shoulder + elbow arm.

    Attributes:
        l1: Upper link length (m).
        l2: Lower link length (m).
        joints_deg: Starting ``(q1, q2, q3)`` in degrees.
        preferred_elbow: Elbow sign favoured by the IK tie-break.
        q1_range: Base yaw slider range.
        q2_range: Shoulder range; IK results are clamped into it.
        q3_range: Elbow slider range.
    """

    l1: float = THREE_R_LINK_LENGTHS[0]
    l2: float = THREE_R_LINK_LENGTHS[1]
    joints_deg: Tuple[float, float, float] = THREE_R_DEFAULT_JOINTS_DEG
    preferred_elbow: int = ELBOW_UP
    q1_range: Tuple[float, float] = THREE_R_Q1_RANGE_DEG
    q2_range: Tuple[float, float] = THREE_R_Q2_RANGE_DEG
    q3_range: Tuple[float, float] = THREE_R_Q3_RANGE_DEG

    def __post_init__(self) -> None:
        """Validate the link lengths and elbow preference."""
        LinkLengths(self.l1, self.l2)
        validate_elbow(self.preferred_elbow)

    @property
    def arm_type(self) -> str:
        return "3r"

    @property
    def link_lengths(self) -> LinkLengths:
        return LinkLengths(self.l1, self.l2)


@dataclass
class PolarArmConfig(ArmConfig):
    """Configuration for the yaw + elevation + extension arm.

    Attributes:
        theta_deg: Starting base yaw.
        phi_deg: Starting elevation.
        rho: Starting extension (m); must lie in the band.
        rho_min: Shortest extension (m).
        rho_max: Longest extension (m).
        theta_range: Base yaw slider range.
        phi_range: Elevation slider range.
    """

    theta_deg: float = POLAR_DEFAULT_THETA_DEG
    phi_deg: float = POLAR_DEFAULT_PHI_DEG
    rho: float = POLAR_DEFAULT_RHO
    rho_min: float = POLAR_RHO_MIN
    rho_max: float = POLAR_RHO_MAX
    theta_range: Tuple[float, float] = POLAR_THETA_RANGE_DEG
    phi_range: Tuple[float, float] = POLAR_PHI_RANGE_DEG

    def __post_init__(self) -> None:
        """Validate the extension band and the starting extension."""
        validate_rho_band(self.rho_min, self.rho_max)
        if not self.rho_min <= self.rho <= self.rho_max:
            raise ValueError(
                f"Starting rho {self.rho} is outside [{self.rho_min}, {self.rho_max}]"
            )

    @property
    def arm_type(self) -> str:
        return "polar"


@dataclass
class TwoRArmConfig(ArmConfig):
    """Configuration for the planar two-link arm.

    Attributes:
        l1: Upper link length (m).
        l2: Lower link length (m).
        joints_deg: Starting ``(q1, q2)`` in degrees.
        elbow: Elbow sign used by the IK.
        joint_range: Slider range shared by both joints.
    """

    l1: float = TWO_R_LINK_LENGTHS[0]
    l2: float = TWO_R_LINK_LENGTHS[1]
    joints_deg: Tuple[float, float] = TWO_R_DEFAULT_JOINTS_DEG
    elbow: int = ELBOW_UP
    joint_range: Tuple[float, float] = TWO_R_JOINT_RANGE_DEG

    def __post_init__(self) -> None:
        """Validate the link lengths and elbow sign."""
        LinkLengths(self.l1, self.l2)
        validate_elbow(self.elbow)

    @property
    def arm_type(self) -> str:
        return "2r"

    @property
    def link_lengths(self) -> LinkLengths:
        return LinkLengths(self.l1, self.l2)
