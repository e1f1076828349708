"""
Interactive session for the planar two-link (2R) arm.

The planar arm lives in a vertical plane with x to the right and y up;
its floor is the line ``y = 0``.  Joint sliders refuse moves that would
put the tip below the floor, and the target marker can never sit below it.

Classes:
    Planar2RSession: Controller for the 2R arm.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional

from armkin_sim.animation.sequencer import AnimationKind, reflect_through_origin
from armkin_sim.kinematics.forward import fk_2r
from armkin_sim.kinematics.inverse import ik_2r
from armkin_sim.kinematics.types import FK2RResult, JointAngles2R, LinkLengths, Point2
from armkin_sim.robots.configs import TwoRArmConfig, validate_elbow
from armkin_sim.session.common import BaseSession, CalcResult
from armkin_sim.utils.constants import LINK_LENGTH_RANGE_MM
from armkin_sim.utils.helpers import clamp, deg_to_rad, floor_clamp, mm_to_m, wrap_deg_180

logger = logging.getLogger(__name__)

_JOINTS = ("q1", "q2")
_AXES = ("x", "y")


class Planar2RSession(BaseSession):
    """Controller for the planar 2R arm.

    Attributes:
        links: Link lengths.
        joints: Joint angles in degrees.
        elbow: Elbow sign used by the IK.
        target: Target marker; never below the floor.
        animation_duration: Default reflection animation length (s).
    """

    arm_type = "2r"

    def __init__(self, config: Optional[TwoRArmConfig] = None) -> None:
        super().__init__()
        self._cfg = config if config is not None else TwoRArmConfig()
        self.links = self._cfg.link_lengths
        self.joints = JointAngles2R(*self._cfg.joints_deg)
        self.elbow = self._cfg.elbow
        self.animation_duration = self._cfg.animation_duration
        self.target = self.forward().tip.floor_clamped()

    def forward(self, joints: Optional[JointAngles2R] = None) -> FK2RResult:
        """Elbow and tip for *joints* (degrees), defaulting to the current pose."""
        joints = self.joints if joints is None else joints
        return fk_2r(self.links.l1, self.links.l2, deg_to_rad(joints.q1), deg_to_rad(joints.q2))

    def would_go_below_floor(self, joints: JointAngles2R, links: Optional[LinkLengths] = None) -> bool:
        if links is None:
            return self.forward(joints).tip.y < 0.0
        tip = fk_2r(links.l1, links.l2, deg_to_rad(joints.q1), deg_to_rad(joints.q2)).tip
        return tip.y < 0.0

    def _sync_target(self) -> None:
        self.target = self.forward().tip.floor_clamped()

    # ------------------------------------------------------------------
    # Parameter inputs
    # ------------------------------------------------------------------

    def set_link_lengths(self, l1: Optional[float] = None, l2: Optional[float] = None) -> bool:
        """Change one or both link lengths (metres).

        Returns:
            False when animating or when the current pose would then put
            the tip below the floor.

        Raises:
            ValueError: If a length is not positive and finite.
        """
        if self.is_animating:
            return False
        candidate = LinkLengths(
            self.links.l1 if l1 is None else l1,
            self.links.l2 if l2 is None else l2,
        )
        if self.would_go_below_floor(self.joints, candidate):
            return False
        self.links = candidate
        return True

    def set_link_lengths_mm(self, l1_mm: Optional[float] = None, l2_mm: Optional[float] = None) -> bool:
        return self.set_link_lengths(
            None if l1_mm is None else mm_to_m(clamp(l1_mm, *LINK_LENGTH_RANGE_MM)),
            None if l2_mm is None else mm_to_m(clamp(l2_mm, *LINK_LENGTH_RANGE_MM)),
        )

    def set_elbow(self, elbow: int) -> bool:
        if self.is_animating:
            return False
        validate_elbow(elbow)
        self.elbow = elbow
        return True

    def set_joint(self, name: str, value_deg: float) -> bool:
        """Slider handler: move one joint unless the tip would cross the floor.

        Args:
            name: ``'q1'`` or ``'q2'``.
            value_deg: New joint value, clamped into the slider range.

        Returns:
            True if the pose changed; the target then follows the tip.

        Raises:
            ValueError: If *name* is not a joint of the arm.
        """
        if self.is_animating:
            return False
        if name not in _JOINTS:
            raise ValueError(f"Unknown 2R joint '{name}'. Choose from {list(_JOINTS)}")
        candidate = replace(self.joints, **{name: clamp(value_deg, *self._cfg.joint_range)})
        if self.would_go_below_floor(candidate):
            return False
        self.joints = candidate
        self._sync_target()
        return True

    def set_target(self, x: float, y: float) -> bool:
        """Click handler: place the target marker without moving the arm."""
        if self.is_animating:
            return False
        self.target = Point2(x, floor_clamp(y))
        return True

    def set_target_field(self, axis: str, value: float) -> bool:
        """Numeric-entry handler for one target coordinate (metres).

        Raises:
            ValueError: If *axis* is not ``'x'`` or ``'y'``.
        """
        if axis not in _AXES:
            raise ValueError(f"Unknown axis '{axis}'. Choose from {list(_AXES)}")
        x = value if axis == "x" else self.target.x
        y = value if axis == "y" else self.target.y
        return self.set_target(x, y)

    def set_target_field_mm(self, axis: str, value_mm: float) -> bool:
        return self.set_target_field(axis, mm_to_m(value_mm))

    # ------------------------------------------------------------------
    # Inverse kinematics
    # ------------------------------------------------------------------

    def go_to_target(self) -> bool:
        """Solve the current target and move the arm there.

        On success the target snaps to the reached tip.

        Returns:
            True if the arm moved; otherwise ``last_failure`` says why.
        """
        if self.is_animating:
            return False
        solution = ik_2r(self.links.l1, self.links.l2, self.target.x, self.target.y, self.elbow)
        if not solution:
            self._record_failure(solution.reason)
            return False
        self._record_failure(None)
        self.joints = solution.to_degrees()
        logger.debug("2R IK -> %s", self.joints)
        self._sync_target()
        return True

    def calculate(self, x: float, y: float) -> CalcResult:
        """Solve a target without moving the arm; kept in ``calc_result``."""
        solution = ik_2r(self.links.l1, self.links.l2, x, y, self.elbow)
        if not solution:
            result = CalcResult(ok=False, arm_type=self.arm_type, failure=solution.reason)
        else:
            result = CalcResult(
                ok=True, arm_type=self.arm_type, joints=solution.to_degrees(), elbow=solution.elbow
            )
        self.calc_result = result
        return result

    def apply_calculation(self) -> bool:
        """Apply the last successful ``calculate`` result unless it crosses the floor."""
        result = self.calc_result
        if result is None or not result.ok or self.is_animating:
            return False
        if self.would_go_below_floor(result.joints):
            return False
        self.joints = result.joints
        self._sync_target()
        return True

    # ------------------------------------------------------------------
    # Animations
    # ------------------------------------------------------------------

    def animate_target_to_opposite(self, now: Optional[float] = None, duration: Optional[float] = None) -> bool:
        """Slide the target marker to ``(-x, y)`` without driving the joints."""
        start = self.target
        return self._start_animation(
            AnimationKind.CARTESIAN_LERP,
            start,
            reflect_through_origin(start),
            now,
            self.animation_duration if duration is None else duration,
        )

    def animate_joints_to_opposite(self, now: Optional[float] = None, duration: Optional[float] = None) -> bool:
        """Drive both joints along their shortest arcs to reach ``(-x, y)``.

        Returns:
            True if the animation started; False when busy or when the
            mirrored target has no solution.
        """
        if self.is_animating:
            logger.info("2r session busy; joint animation request ignored")
            return False
        end_target = reflect_through_origin(self.target)
        solution = ik_2r(self.links.l1, self.links.l2, end_target.x, end_target.y, self.elbow)
        if not solution:
            self._record_failure(solution.reason)
            return False
        return self._start_animation(
            AnimationKind.JOINT_LERP,
            self.joints,
            solution.to_degrees(),
            now,
            self.animation_duration if duration is None else duration,
            (True, True),
        )

    def _apply_frame(self, kind: AnimationKind, value: Any) -> None:
        if kind is AnimationKind.CARTESIAN_LERP:
            self.target = value
            return
        self.joints = JointAngles2R(wrap_deg_180(value.q1), wrap_deg_180(value.q2))
        self._sync_target()
