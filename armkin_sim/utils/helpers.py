"""
Small stateless angle and unit helpers used across the armkin_sim package.

Provides degree/radian conversion, clamping, linear and shortest-path
angular interpolation, the ease-in-out timing curve, and the
metre/millimetre conversions used at the display boundary.
"""

from __future__ import annotations

import math
from typing import Optional


def deg_to_rad(d: float) -> float:
    """Convert degrees to radians."""
    return d * math.pi / 180.0


def rad_to_deg(r: float) -> float:
    """Convert radians to degrees."""
    return r * 180.0 / math.pi


def clamp(value: float, lo: float, hi: float) -> float:
    """Return *value* clamped to the closed interval [*lo*, *hi*].

    Args:
        value: The scalar to clamp.
        lo: Lower bound (inclusive).
        hi: Upper bound (inclusive).

    Returns:
        The clamped scalar.
    """
    return max(lo, min(hi, value))


def lerp(a: float, b: float, t: float) -> float:
    """Linearly interpolate from *a* to *b* by fraction *t*."""
    return a + (b - a) * t


def norm_deg_360(d: float) -> float:
    """Normalise an angle in degrees to the half-open range [0, 360).

    Args:
        d: Angle in degrees, any magnitude or sign.

    Returns:
        Equivalent angle in ``[0, 360)``.
    """
    wrapped = d % 360.0
    # tiny negative inputs round up to exactly 360.0
    return 0.0 if wrapped == 360.0 else wrapped


def wrap_deg_180(d: float) -> float:
    """Wrap an angle in degrees into [-180, 180)."""
    return norm_deg_360(d + 180.0) - 180.0


def angle_lerp(a: float, b: float, t: float) -> float:
    """Interpolate between two angles along the shortest arc.

    The signed difference ``b - a`` is first wrapped into [-180, 180) so
    that, for example, 350 -> 10 travels 20 degrees through 0 instead of
    340 degrees back through 180.

    Args:
        a: Start angle in degrees.
        b: End angle in degrees.
        t: Interpolation fraction, normally in [0, 1].

    Returns:
        Interpolated angle normalised to ``[0, 360)``.
    """
    d = ((b - a) + 540.0) % 360.0 - 180.0
    return norm_deg_360(a + d * t)


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out timing curve on [0, 1].

    Args:
        t: Normalised time fraction.

    Returns:
        Eased fraction; 0 at 0, 0.5 at 0.5 and 1 at 1.
    """
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - math.pow(-2.0 * t + 2.0, 3) / 2.0


def floor_clamp(y: float) -> float:
    """Raise a height below the floor plane to the floor."""
    return max(0.0, y)


def m_to_mm(m: Optional[float]) -> float:
    """Convert metres to millimetres; ``None`` maps to 0."""
    return m * 1000.0 if m is not None else 0.0


def mm_to_m(mm: Optional[float]) -> float:
    """Convert millimetres to metres; ``None`` maps to 0."""
    return mm / 1000.0 if mm is not None else 0.0


def mm_display(m: float) -> int:
    """Return *m* metres as whole millimetres for display."""
    return int(round(m_to_mm(m)))
