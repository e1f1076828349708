"""
Eased interpolation between two kinematic states, driven frame by frame.

The sequencer never schedules anything itself.  A host (the viewer, a
test, a GUI timer) calls ``Sequencer.tick(now)`` once per display frame
and writes the returned value into its pose.  The pure helpers
``interpolate_animation`` and ``advance`` hold all of the maths, so a
frame value can be recomputed for any time without touching state.

Values are either Cartesian points (``Point2``/``Point3``) or joint
containers (``JointAngles*`` or plain tuples) in degrees.  Joint
components flagged in a ``wrap_mask`` travel the shortest arc; the rest
are interpolated linearly.

Classes:
    AnimationKind: Cartesian or joint interpolation.
    SequencerStatus: ``IDLE`` or ``RUNNING``.
    AnimationState: One in-flight animation.
    Sequencer: Single-slot animation state machine.

Functions:
    eased_fraction: Normalised, eased progress for an elapsed time.
    interpolate_animation: Frame value at an elapsed time.
    advance: Frame value and completion flag for an ``AnimationState``.
    reflect_through_origin: Point reflection in the horizontal plane.
    sample_timeline: Precompute every frame of an animation.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Tuple

import numpy as np

from armkin_sim.kinematics.types import Point2, Point3
from armkin_sim.utils.constants import DEFAULT_ANIMATION_DURATION, DEFAULT_FPS
from armkin_sim.utils.helpers import angle_lerp, ease_in_out_cubic, lerp

logger = logging.getLogger(__name__)


class AnimationKind(Enum):
    """How the two endpoints of an animation are blended."""

    CARTESIAN_LERP = "cartesian_lerp"
    JOINT_LERP = "joint_lerp"


class SequencerStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class AnimationState:
    """A single animation between two values.

    Attributes:
        start_value: Value at ``start_time``.
        end_value: Value once ``duration`` has elapsed.
        start_time: Host clock reading when the animation began (seconds).
        duration: Length of the animation in seconds.
        kind: Cartesian or joint interpolation.
        wrap_mask: Per-component flags selecting shortest-arc
            interpolation; only consulted for ``JOINT_LERP``.
    """

    start_value: Any
    end_value: Any
    start_time: float
    duration: float
    kind: AnimationKind
    wrap_mask: Optional[Tuple[bool, ...]] = None


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def _components(value: Any) -> Tuple[float, ...]:
    """Flatten a dataclass value or a sequence into a tuple of floats."""
    if dataclasses.is_dataclass(value):
        return tuple(float(v) for v in dataclasses.astuple(value))
    return tuple(float(v) for v in value)


def _rebuild(template: Any, components: Sequence[float]) -> Any:
    """Build a value of the same type as *template* from *components*."""
    if dataclasses.is_dataclass(template):
        return type(template)(*components)
    return tuple(components)


def eased_fraction(elapsed: float, duration: float) -> float:
    """Return the eased progress of an animation.

    Args:
        elapsed: Time since the animation started.
        duration: Total animation time, in the same unit as *elapsed*.

    Returns:
        ``ease_in_out_cubic(min(1, elapsed / duration))``; a non-positive
        duration counts as already finished.
    """
    if duration <= 0.0:
        return 1.0
    t = min(1.0, max(0.0, elapsed / duration))
    return ease_in_out_cubic(t)


def interpolate_animation(
    kind: AnimationKind,
    start: Any,
    end: Any,
    elapsed_ms: float,
    duration_ms: float,
    wrap_mask: Optional[Sequence[bool]] = None,
) -> Any:
    """Compute the value of an animation at a given elapsed time.

    Args:
        kind: Cartesian or joint interpolation.
        start: Start value (point or joint container).
        end: End value of the same type and arity as *start*.
        elapsed_ms: Milliseconds since the animation started.
        duration_ms: Animation length in milliseconds.
        wrap_mask: For ``JOINT_LERP``, which components are angles that
            should take the shortest arc.

    Returns:
        A value of the same type as *start*.

    Raises:
        ValueError: If *start* and *end* (or *wrap_mask*) differ in arity.
    """
    a = _components(start)
    b = _components(end)
    if len(a) != len(b):
        raise ValueError(f"Animation endpoints differ in arity: {len(a)} vs {len(b)}")
    mask: Tuple[bool, ...] = (False,) * len(a)
    if kind is AnimationKind.JOINT_LERP and wrap_mask is not None:
        mask = tuple(bool(m) for m in wrap_mask)
        if len(mask) != len(a):
            raise ValueError(f"wrap_mask has {len(mask)} entries for {len(a)} components")

    e = eased_fraction(elapsed_ms, duration_ms)
    out = [angle_lerp(s, f, e) if wrap else lerp(s, f, e) for s, f, wrap in zip(a, b, mask)]
    return _rebuild(start, out)


def advance(state: AnimationState, now: float) -> Tuple[Any, bool]:
    """Step an animation to time *now*.

    Calling again after completion keeps returning the end value, so the
    final frame may be delivered more than once without drifting.

    Args:
        state: The animation being played.
        now: Current host clock reading in seconds.

    Returns:
        ``(value, done)`` where ``done`` is True once the duration has
        fully elapsed.
    """
    elapsed = now - state.start_time
    value = interpolate_animation(
        state.kind,
        state.start_value,
        state.end_value,
        elapsed * 1000.0,
        state.duration * 1000.0,
        state.wrap_mask,
    )
    return value, elapsed >= state.duration


def reflect_through_origin(point: Any) -> Any:
    """Reflect a point through the vertical axis, keeping its height.

    Args:
        point: ``Point3`` or ``Point2``.

    Returns:
        ``(-x, y, -z)`` for 3-D points, ``(-x, y)`` for planar ones.

    Raises:
        TypeError: For any other value type.
    """
    if isinstance(point, Point3):
        return Point3(-point.x, point.y, -point.z)
    if isinstance(point, Point2):
        return Point2(-point.x, point.y)
    raise TypeError(f"Cannot reflect value of type {type(point).__name__}")


def sample_timeline(
    kind: AnimationKind,
    start: Any,
    end: Any,
    duration: float = DEFAULT_ANIMATION_DURATION,
    fps: int = DEFAULT_FPS,
    wrap_mask: Optional[Sequence[bool]] = None,
) -> np.ndarray:
    """Precompute the frames an animation would show at a fixed frame rate.

    Args:
        kind: Cartesian or joint interpolation.
        start: Start value.
        end: End value.
        duration: Animation length in seconds.
        fps: Frames per second.
        wrap_mask: Shortest-arc flags for ``JOINT_LERP``.

    Returns:
        ``(n_frames, n_components)`` float array, first row the start
        value and last row the end value.
    """
    n_steps = max(1, int(math.ceil(duration * fps)))
    times = np.linspace(0.0, max(duration, 0.0), n_steps + 1)
    rows = [
        _components(interpolate_animation(kind, start, end, t * 1000.0, duration * 1000.0, wrap_mask))
        for t in times
    ]
    return np.asarray(rows, dtype=np.float64)


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


@dataclass
class Sequencer:
    """Single-slot animation player: ``IDLE -> RUNNING -> IDLE``.

    Only one animation can be in flight.  A ``start`` while running is
    dropped and reported as False.  The host drives playback by calling
    ``tick`` once per frame; the sequencer returns to ``IDLE`` on the
    frame that reaches the end, or when ``cancel`` is called.

    Attributes:
        on_frame: Optional callback receiving every frame value.
        status: Current machine state.
        state: The running animation, ``None`` while idle.
    """

    on_frame: Optional[Callable[[Any], None]] = None
    status: SequencerStatus = SequencerStatus.IDLE
    state: Optional[AnimationState] = None

    @property
    def is_running(self) -> bool:
        return self.status is SequencerStatus.RUNNING

    def start(
        self,
        kind: AnimationKind,
        start_value: Any,
        end_value: Any,
        now: float,
        duration: float = DEFAULT_ANIMATION_DURATION,
        wrap_mask: Optional[Sequence[bool]] = None,
    ) -> bool:
        """Begin a new animation unless one is already running.

        Args:
            kind: Cartesian or joint interpolation.
            start_value: Value at *now*.
            end_value: Value after *duration* seconds.
            now: Current host clock reading in seconds.
            duration: Animation length in seconds.
            wrap_mask: Shortest-arc flags for ``JOINT_LERP``.

        Returns:
            True if the animation was started, False if it was dropped.
        """
        if self.is_running:
            logger.debug("Dropping %s request: an animation is already running", kind.value)
            return False
        mask = tuple(wrap_mask) if wrap_mask is not None else None
        self.state = AnimationState(start_value, end_value, now, duration, kind, mask)
        self.status = SequencerStatus.RUNNING
        return True

    def tick(self, now: float) -> Any:
        """Advance the running animation to *now*.

        Args:
            now: Current host clock reading in seconds.

        Returns:
            The frame value, or ``None`` when idle.
        """
        if not self.is_running or self.state is None:
            return None
        value, done = advance(self.state, now)
        if self.on_frame is not None:
            self.on_frame(value)
        if done:
            self._finish()
        return value

    def cancel(self) -> None:
        """Stop the running animation, leaving the last delivered frame."""
        if self.is_running:
            logger.debug("Animation cancelled")
        self._finish()

    def _finish(self) -> None:
        self.state = None
        self.status = SequencerStatus.IDLE
