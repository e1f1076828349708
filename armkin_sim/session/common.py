"""
Pieces shared by the interactive arm sessions.

Classes:
    CalcResult: Outcome of a compute-only IK request.
    BaseSession: Animation plumbing and the input lock shared by sessions.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from armkin_sim.animation.sequencer import AnimationKind, Sequencer
from armkin_sim.kinematics.types import IKFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalcResult:
    """Result of a compute-only IK request, in presentation units.

    Attributes:
        ok: Whether a solution was found.
        arm_type: ``'3r'``, ``'polar'`` or ``'2r'``.
        joints: Joint values in degrees (``rho`` in metres), or ``None``.
        elbow: Elbow sign of the chosen solution, if the arm has one.
        y_elbow: Elbow height (3R only).
        y_tip: Tip height, where the solver reports it.
        failure: Cause when ``ok`` is False.
    """

    ok: bool
    arm_type: str
    joints: Any = None
    elbow: Optional[int] = None
    y_elbow: Optional[float] = None
    y_tip: Optional[float] = None
    failure: Optional[IKFailure] = None


def _now(now: Optional[float]) -> float:
    return time.perf_counter() if now is None else now


class BaseSession:
    """Owns the sequencer of a session and the input lock it implies.

    While an animation is running every mutating input handler is a no-op
    returning False, which mirrors disabled controls in a GUI.  Subclasses
    implement ``_apply_frame`` to write interpolated values into the pose.

    Attributes:
        sequencer: Single-slot animation player.
        last_failure: Cause of the most recent failed IK request.
        calc_result: Output of the last ``calculate`` call.
    """

    arm_type: str = "base"

    def __init__(self) -> None:
        self.sequencer = Sequencer()
        self.last_failure: Optional[IKFailure] = None
        self.calc_result: Optional[CalcResult] = None
        self._anim_kind: Optional[AnimationKind] = None

    @property
    def is_animating(self) -> bool:
        """Whether an animation is in flight (inputs are disabled)."""
        return self.sequencer.is_running

    def _start_animation(
        self,
        kind: AnimationKind,
        start: Any,
        end: Any,
        now: Optional[float],
        duration: float,
        wrap_mask: Optional[Sequence[bool]] = None,
    ) -> bool:
        """Hand an animation to the sequencer and remember its kind.

        Args:
            kind: Cartesian or joint interpolation.
            start: Start value.
            end: End value.
            now: Host clock reading (seconds); ``None`` reads the clock.
            duration: Animation length in seconds.
            wrap_mask: Shortest-arc flags for joint animations.

        Returns:
            True if the animation started.
        """
        started = self.sequencer.start(kind, start, end, _now(now), duration, wrap_mask)
        if not started:
            logger.info("%s session busy; %s request ignored", self.arm_type, kind.value)
            return False
        self._anim_kind = kind
        logger.info("%s session: %s animation started (%.2fs)", self.arm_type, kind.value, duration)
        return True

    def tick(self, now: Optional[float] = None) -> bool:
        """Advance the running animation by one frame.

        Args:
            now: Host clock reading in seconds; ``None`` reads the clock.

        Returns:
            True while the animation is still running after this frame.
        """
        kind = self._anim_kind
        value = self.sequencer.tick(_now(now))
        if value is None or kind is None:
            return False
        self._apply_frame(kind, value)
        if not self.sequencer.is_running:
            self._anim_kind = None
            logger.info("%s session: %s animation finished", self.arm_type, kind.value)
            return False
        return True

    def close(self) -> None:
        """Cancel any running animation; call on host teardown."""
        self.sequencer.cancel()
        self._anim_kind = None

    def _apply_frame(self, kind: AnimationKind, value: Any) -> None:
        raise NotImplementedError

    def _record_failure(self, failure: Optional[IKFailure]) -> None:
        self.last_failure = failure
        if failure is not None:
            logger.debug("%s session: no IK solution (%s)", self.arm_type, failure.value)
