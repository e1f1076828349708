"""
Interactive session for the spatial arms (3R and polar).

The session is the only owner of mutable state: link lengths, the joint
pose of both arm types, the target marker and the animation slot.  The
kinematics core is called with plain numbers and never sees the session.
A renderer reads ``joints``, ``polar`` and ``target`` after each call and
calls ``tick`` once per display frame while ``is_animating`` is True.

Joint values are kept in degrees (``rho`` in metres); the conversion to
radians happens at every call into the core.

Classes:
    RobotType: Which spatial arm is active.
    Arm3DSession: Controller for the 3R / polar arms.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Any, Optional, Union

from armkin_sim.animation.sequencer import AnimationKind, reflect_through_origin
from armkin_sim.kinematics.forward import fk_3r, fk_3r_elbow, fk_polar, tip_height_3r
from armkin_sim.kinematics.inverse import ik_3r, ik_polar
from armkin_sim.kinematics.types import (
    JointAngles3R,
    JointAnglesPolar,
    LinkLengths,
    NoSolution,
    Point3,
    Solution3R,
    SolutionPolar,
)
from armkin_sim.robots.configs import (
    PolarArmConfig,
    ThreeRArmConfig,
    validate_elbow,
    validate_rho_band,
)
from armkin_sim.session.common import BaseSession, CalcResult
from armkin_sim.utils.constants import LINK_LENGTH_RANGE_MM
from armkin_sim.utils.helpers import clamp, deg_to_rad, floor_clamp, mm_to_m, norm_deg_360

logger = logging.getLogger(__name__)

# Shortest-arc flags for (q1, q2, q3): yaw and elbow wrap, the shoulder is bounded.
_THREE_R_WRAP = (True, False, True)
_AXES = ("x", "y", "z")


class RobotType(Enum):
    THREE_R = "3r"
    POLAR = "polar"


class Arm3DSession(BaseSession):
    """Controller for the yaw + 2-link (3R) and yaw + elevation + extension arms.

    Both arm types keep their own pose so toggling between them restores
    where each one was left.

    Attributes:
        robot_type: The active arm.
        links: 3R link lengths.
        joints: 3R joints in degrees.
        preferred_elbow: Elbow sign favoured by the 3R solver.
        polar: Polar joints (degrees, ``rho`` in metres).
        rho_min: Shortest polar extension.
        rho_max: Longest polar extension.
        target: Target marker; its height is never below the floor.
        animation_duration: Default reflection animation length (s).
    """

    def __init__(
        self,
        three_r: Optional[ThreeRArmConfig] = None,
        polar: Optional[PolarArmConfig] = None,
        robot_type: RobotType = RobotType.THREE_R,
    ) -> None:
        super().__init__()
        self._three_r_cfg = three_r if three_r is not None else ThreeRArmConfig()
        self._polar_cfg = polar if polar is not None else PolarArmConfig()

        self.robot_type = robot_type
        self.links = self._three_r_cfg.link_lengths
        self.joints = JointAngles3R(*self._three_r_cfg.joints_deg)
        self.preferred_elbow = self._three_r_cfg.preferred_elbow
        self.polar = JointAnglesPolar(
            self._polar_cfg.theta_deg, self._polar_cfg.phi_deg, self._polar_cfg.rho
        )
        self.rho_min = self._polar_cfg.rho_min
        self.rho_max = self._polar_cfg.rho_max
        self.animation_duration = self._three_r_cfg.animation_duration
        self.target = self.tip_position().floor_clamped()

    @property
    def arm_type(self) -> str:
        return self.robot_type.value

    # ------------------------------------------------------------------
    # Forward kinematics of the current pose
    # ------------------------------------------------------------------

    def _fk_3r(self, joints: JointAngles3R) -> Point3:
        return fk_3r(
            self.links.l1,
            self.links.l2,
            deg_to_rad(joints.q1),
            deg_to_rad(joints.q2),
            deg_to_rad(joints.q3),
        )

    def _fk_polar(self, joints: JointAnglesPolar) -> Point3:
        return fk_polar(deg_to_rad(joints.theta), deg_to_rad(joints.phi), joints.rho)

    def tip_position(self) -> Point3:
        """Return the tip of the active arm, straight from forward kinematics."""
        if self.robot_type is RobotType.THREE_R:
            return self._fk_3r(self.joints)
        return self._fk_polar(self.polar)

    def elbow_position(self) -> Optional[Point3]:
        """Return the 3R elbow joint, or ``None`` for the polar arm."""
        if self.robot_type is not RobotType.THREE_R:
            return None
        return fk_3r_elbow(self.links.l1, deg_to_rad(self.joints.q1), deg_to_rad(self.joints.q2))

    def _sync_target(self) -> None:
        self.target = self.tip_position().floor_clamped()

    # ------------------------------------------------------------------
    # Parameter inputs
    # ------------------------------------------------------------------

    def set_link_lengths(self, l1: Optional[float] = None, l2: Optional[float] = None) -> bool:
        """Change one or both 3R link lengths (metres).

        Args:
            l1: New upper link length, or ``None`` to keep it.
            l2: New lower link length, or ``None`` to keep it.

        Returns:
            False if ignored because an animation is running.

        Raises:
            ValueError: If a length is not positive and finite.
        """
        if self.is_animating:
            return False
        self.links = LinkLengths(
            self.links.l1 if l1 is None else l1,
            self.links.l2 if l2 is None else l2,
        )
        return True

    def set_link_lengths_mm(self, l1_mm: Optional[float] = None, l2_mm: Optional[float] = None) -> bool:
        """Millimetre variant of ``set_link_lengths``; entries are clamped to the field range."""
        return self.set_link_lengths(
            None if l1_mm is None else mm_to_m(clamp(l1_mm, *LINK_LENGTH_RANGE_MM)),
            None if l2_mm is None else mm_to_m(clamp(l2_mm, *LINK_LENGTH_RANGE_MM)),
        )

    def set_preferred_elbow(self, elbow: int) -> bool:
        if self.is_animating:
            return False
        validate_elbow(elbow)
        self.preferred_elbow = elbow
        return True

    def set_joint(self, name: str, value_deg: float) -> bool:
        """Slider handler for one joint of the active arm.

        The value is clamped into the joint's slider range.  For the 3R
        arm a shoulder or elbow change that would put the tip below the
        floor is refused.  On success the target follows the tip.

        Args:
            name: ``'q1'``, ``'q2'``, ``'q3'`` (3R) or ``'theta'``, ``'phi'``
                (polar).
            value_deg: New joint value in degrees.

        Returns:
            True if the pose changed.

        Raises:
            ValueError: If *name* is not a joint of the active arm.
        """
        if self.is_animating:
            return False
        if self.robot_type is RobotType.THREE_R:
            ranges = {
                "q1": self._three_r_cfg.q1_range,
                "q2": self._three_r_cfg.q2_range,
                "q3": self._three_r_cfg.q3_range,
            }
            if name not in ranges:
                raise ValueError(f"Unknown 3R joint '{name}'. Choose from {list(ranges)}")
            candidate = replace(self.joints, **{name: clamp(value_deg, *ranges[name])})
            height = tip_height_3r(
                self.links.l1, self.links.l2, deg_to_rad(candidate.q2), deg_to_rad(candidate.q3)
            )
            if name != "q1" and height < 0.0:
                return False
            self.joints = candidate
        else:
            ranges = {"theta": self._polar_cfg.theta_range, "phi": self._polar_cfg.phi_range}
            if name not in ranges:
                raise ValueError(f"Unknown polar joint '{name}'. Choose from {list(ranges)}")
            self.polar = replace(self.polar, **{name: clamp(value_deg, *ranges[name])})
        self._sync_target()
        return True

    def set_rho(self, rho: float) -> bool:
        """Set the polar extension, clamped into the extension band."""
        if self.is_animating:
            return False
        self.polar = replace(self.polar, rho=clamp(rho, self.rho_min, self.rho_max))
        if self.robot_type is RobotType.POLAR:
            self._sync_target()
        return True

    def set_rho_band(self, rho_min: float, rho_max: float) -> bool:
        """Change the polar extension band and re-clamp the current extension.

        Args:
            rho_min: Shortest extension (m).
            rho_max: Longest extension (m).

        Returns:
            False if ignored because an animation is running.

        Raises:
            ValueError: Unless ``0 < rho_min < rho_max``.
        """
        if self.is_animating:
            return False
        validate_rho_band(rho_min, rho_max)
        self.rho_min, self.rho_max = rho_min, rho_max
        return self.set_rho(self.polar.rho)

    def set_rho_band_mm(self, rho_min_mm: float, rho_max_mm: float) -> bool:
        return self.set_rho_band(mm_to_m(rho_min_mm), mm_to_m(rho_max_mm))

    def set_target_field(self, axis: str, value: float) -> bool:
        """Numeric-entry handler for one target coordinate (metres).

        Args:
            axis: ``'x'``, ``'y'`` or ``'z'``; ``y`` is raised to the floor.
            value: New coordinate.

        Returns:
            False if ignored because an animation is running.

        Raises:
            ValueError: If *axis* is not a coordinate name.
        """
        if self.is_animating:
            return False
        if axis not in _AXES:
            raise ValueError(f"Unknown axis '{axis}'. Choose from {list(_AXES)}")
        if axis == "y":
            value = floor_clamp(value)
        self.target = replace(self.target, **{axis: value})
        return True

    def set_target_field_mm(self, axis: str, value_mm: float) -> bool:
        return self.set_target_field(axis, mm_to_m(value_mm))

    # ------------------------------------------------------------------
    # Inverse kinematics
    # ------------------------------------------------------------------

    def _solve(self, x: float, y: float, z: float) -> Union[Solution3R, SolutionPolar, NoSolution]:
        if self.robot_type is RobotType.THREE_R:
            return ik_3r(self.links.l1, self.links.l2, x, y, z, self.preferred_elbow)
        return ik_polar(self.rho_min, self.rho_max, x, y, z, self._polar_cfg.theta_range)

    def solve_ik(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        z: Optional[float] = None,
    ) -> bool:
        """Move the active arm to a target.

        Omitted coordinates default to the current target.  On success the
        pose takes the normalised solution and the target becomes the
        request with its height raised to the floor; on failure nothing
        changes and ``last_failure`` records why.

        Returns:
            True if a solution was applied.
        """
        if self.is_animating:
            return False
        x = self.target.x if x is None else x
        y = self.target.y if y is None else y
        z = self.target.z if z is None else z

        solution = self._solve(x, y, z)
        if not solution:
            self._record_failure(solution.reason)
            return False
        self._record_failure(None)
        if self.robot_type is RobotType.THREE_R:
            self.joints = solution.to_degrees()
            logger.debug("3R IK -> %s (elbow %+d)", self.joints, solution.elbow)
        else:
            self.polar = solution.to_degrees()
            logger.debug("Polar IK -> %s", self.polar)
        self.target = Point3(x, floor_clamp(y), z)
        return True

    def drag_target(self, x: float, y: float, z: float) -> bool:
        """Pointer-drag handler for the target marker.

        The marker always moves (height raised to the floor); the arm
        follows only when the new position is solvable.

        Returns:
            True if the arm followed the marker.
        """
        if self.is_animating:
            return False
        y = floor_clamp(y)
        self.target = Point3(x, y, z)
        return self.solve_ik(x, y, z)

    def drag_on_floor(self, x: float, z: float) -> bool:
        """Drag across the horizontal plane, keeping the target height."""
        return self.drag_target(x, self.target.y, z)

    def calculate(self, x: float, y: float, z: float) -> CalcResult:
        """Solve a target without moving the arm.

        The result is kept in ``calc_result`` for ``apply_calculation``.

        Args:
            x: Target x.
            y: Target height.
            z: Target z.

        Returns:
            ``CalcResult`` in degrees (``rho`` in metres).
        """
        solution = self._solve(x, y, z)
        if not solution:
            result = CalcResult(ok=False, arm_type=self.arm_type, failure=solution.reason)
        elif self.robot_type is RobotType.THREE_R:
            result = CalcResult(
                ok=True,
                arm_type=self.arm_type,
                joints=solution.to_degrees(),
                elbow=solution.elbow,
                y_elbow=solution.y_elbow,
                y_tip=solution.y_tip,
            )
        else:
            result = CalcResult(
                ok=True,
                arm_type=self.arm_type,
                joints=solution.to_degrees(),
                y_tip=solution.y_tip,
            )
        self.calc_result = result
        return result

    def apply_calculation(self) -> bool:
        """Apply the last successful ``calculate`` result to the arm.

        Returns:
            False when there is nothing valid to apply, the result belongs
            to the other arm type, or an animation is running.
        """
        result = self.calc_result
        if result is None or not result.ok or self.is_animating:
            return False
        if result.arm_type != self.arm_type:
            return False
        if self.robot_type is RobotType.THREE_R:
            lo, hi = self._three_r_cfg.q2_range
            self.joints = JointAngles3R(
                norm_deg_360(result.joints.q1),
                clamp(result.joints.q2, lo, hi),
                norm_deg_360(result.joints.q3),
            )
        else:
            self.polar = result.joints
        self._sync_target()
        return True

    def toggle_robot_type(self) -> bool:
        """Switch between the 3R and polar arm; the target follows the new tip."""
        if self.is_animating:
            return False
        self.robot_type = RobotType.POLAR if self.robot_type is RobotType.THREE_R else RobotType.THREE_R
        self.calc_result = None
        self._sync_target()
        logger.info("Switched to %s arm", self.robot_type.value)
        return True

    # ------------------------------------------------------------------
    # Animations
    # ------------------------------------------------------------------

    def animate_target_to_opposite(self, now: Optional[float] = None, duration: Optional[float] = None) -> bool:
        """Slide the target marker to its reflection through the vertical axis.

        Only the marker moves; the joints are not driven.

        Args:
            now: Host clock reading (s); ``None`` reads the clock.
            duration: Animation length (s); defaults to the configured one.

        Returns:
            True if the animation started.
        """
        start = self.target
        end = reflect_through_origin(start)
        return self._start_animation(
            AnimationKind.CARTESIAN_LERP, start, end, now, self._duration(duration)
        )

    def animate_joints_to_opposite(self, now: Optional[float] = None, duration: Optional[float] = None) -> bool:
        """Drive the joints to the pose that reaches the reflected target.

        The reflected target is solved first; if it has no solution the
        animation is not started.  During playback the target is re-derived
        from forward kinematics every frame.

        Args:
            now: Host clock reading (s); ``None`` reads the clock.
            duration: Animation length (s); defaults to the configured one.

        Returns:
            True if the animation started.
        """
        if self.is_animating:
            logger.info("%s session busy; joint animation request ignored", self.arm_type)
            return False
        end_target = reflect_through_origin(self.target)
        solution = self._solve(end_target.x, end_target.y, end_target.z)
        if not solution:
            self._record_failure(solution.reason)
            return False
        if self.robot_type is RobotType.THREE_R:
            return self._start_animation(
                AnimationKind.JOINT_LERP,
                self.joints,
                solution.to_degrees(),
                now,
                self._duration(duration),
                _THREE_R_WRAP,
            )
        return self._start_animation(
            AnimationKind.JOINT_LERP,
            self.polar,
            solution.to_degrees(),
            now,
            self._duration(duration),
        )

    def _duration(self, duration: Optional[float]) -> float:
        return self.animation_duration if duration is None else duration

    def _apply_frame(self, kind: AnimationKind, value: Any) -> None:
        if kind is AnimationKind.CARTESIAN_LERP:
            self.target = value
            return
        if isinstance(value, JointAngles3R):
            lo, hi = self._three_r_cfg.q2_range
            self.joints = JointAngles3R(norm_deg_360(value.q1), clamp(value.q2, lo, hi), norm_deg_360(value.q3))
            self.target = self._fk_3r(value).floor_clamped()
        else:
            self.polar = value
            self.target = self._fk_polar(value).floor_clamped()
