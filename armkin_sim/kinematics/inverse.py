"""
Closed-form inverse kinematics for the 2R, 3R and polar arms.

The two-link planar solver is the core routine: the 3R solver reuses it
in the vertical plane picked by the base yaw, and the standalone 2R arm
wraps it with its own reach and floor checks.  The polar arm needs no
planar solve at all.

Failures are returned, never raised: solvers hand back a falsy
``NoSolution`` that records whether the target was beyond reach, inside
the unreachable inner zone, or only reachable through the floor.

Functions:
    ik_2link: Law-of-cosines solve for one elbow sign.
    enumerate_3r: All floor-safe 3R candidates ordered by cost.
    ik_3r: Best 3R candidate.
    ik_polar: Unique polar solution.
    ik_2r: Planar 2R solution with floor rejection.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple, Union

from armkin_sim.kinematics.forward import fk_2r
from armkin_sim.kinematics.types import (
    IKFailure,
    NoSolution,
    PlanarIKResult,
    Solution2R,
    Solution3R,
    SolutionPolar,
)
from armkin_sim.utils.constants import (
    ELBOW_DOWN,
    ELBOW_PENALTY,
    ELBOW_UP,
    REACH_TOLERANCE,
)
from armkin_sim.utils.helpers import clamp, floor_clamp

_ELBOW_ORDER: Tuple[int, int] = (ELBOW_UP, ELBOW_DOWN)


# ---------------------------------------------------------------------------
# Planar two-link core
# ---------------------------------------------------------------------------


def ik_2link(l1: float, l2: float, x: float, y: float, elbow: int = ELBOW_UP) -> PlanarIKResult:
    """Solve a planar two-link arm for one elbow configuration.

    The law-of-cosines term is clamped to [-1, 1] before use, so the
    returned angles are defined for every target; ``ok`` tells whether
    they actually reach it.

    Args:
        l1: Upper link length.
        l2: Lower link length.
        x: Target x in the arm plane.
        y: Target y in the arm plane.
        elbow: Elbow sign, +1 or -1.

    Returns:
        ``PlanarIKResult`` with shoulder ``q1`` and elbow ``q2`` in radians.
    """
    rr = x * x + y * y
    c2 = clamp((rr - l1 * l1 - l2 * l2) / (2.0 * l1 * l2), -1.0, 1.0)
    s2 = elbow * math.sqrt(max(0.0, 1.0 - c2 * c2))
    q2 = math.atan2(s2, c2)
    k1 = l1 + l2 * c2
    k2 = l2 * s2
    q1 = math.atan2(y, x) - math.atan2(k2, k1)

    failure: Optional[IKFailure] = None
    if rr > (l1 + l2) ** 2:
        failure = IKFailure.BEYOND_REACH
    elif rr < (l1 - l2) ** 2:
        failure = IKFailure.INSIDE_DEAD_ZONE
    return PlanarIKResult(q1=q1, q2=q2, ok=failure is None, failure=failure)


# ---------------------------------------------------------------------------
# 3R arm
# ---------------------------------------------------------------------------


def _candidates_3r(
    l1: float,
    l2: float,
    x: float,
    y: float,
    z: float,
    preferred_elbow: int,
) -> Tuple[List[Solution3R], Optional[IKFailure]]:
    """Collect floor-safe candidates and the failure cause if there are none."""
    y_target = floor_clamp(y)
    r = math.hypot(x, z)
    yaw = math.atan2(x, z)

    candidates: List[Solution3R] = []
    reach_failure: Optional[IKFailure] = None
    reachable = False
    for e in _ELBOW_ORDER:
        planar = ik_2link(l1, l2, r, y_target, e)
        if not planar.ok:
            reach_failure = planar.failure
            continue
        reachable = True
        y_elbow = l1 * math.sin(planar.q1)
        y_tip = y_elbow + l2 * math.sin(planar.q1 + planar.q2)
        if y_elbow < 0.0 or y_tip < 0.0:
            continue
        cost = -y_elbow + (0.0 if e == preferred_elbow else ELBOW_PENALTY)
        candidates.append(
            Solution3R(
                q1=yaw,
                q2=planar.q1,
                q3=planar.q2,
                elbow=e,
                y_elbow=y_elbow,
                y_tip=y_tip,
                cost=cost,
            )
        )

    candidates.sort(key=lambda c: c.cost)
    if candidates:
        return candidates, None
    return candidates, IKFailure.BELOW_FLOOR if reachable else reach_failure


def enumerate_3r(
    l1: float,
    l2: float,
    x: float,
    y: float,
    z: float,
    preferred_elbow: int = ELBOW_UP,
) -> List[Solution3R]:
    """Return every floor-safe 3R candidate for a target, cheapest first.

    Args:
        l1: Upper link length.
        l2: Lower link length.
        x: Target x.
        y: Target height; negative values are solved as if on the floor.
        z: Target z.
        preferred_elbow: Elbow sign that is not penalised.

    Returns:
        Zero, one or two ``Solution3R`` objects sorted by ``cost``.
    """
    candidates, _ = _candidates_3r(l1, l2, x, y, z, preferred_elbow)
    return candidates


def ik_3r(
    l1: float,
    l2: float,
    x: float,
    y: float,
    z: float,
    preferred_elbow: int = ELBOW_UP,
) -> Union[Solution3R, NoSolution]:
    """Solve the yaw + shoulder + elbow arm for a target point.

    The base yaw is ``atan2(x, z)``, matching the forward convention that
    yaw 0 points along +z.  The planar solver then runs in that vertical
    plane for both elbow signs.  Candidates that would put the elbow or
    the tip below the floor are dropped outright; the survivor with the
    highest elbow wins, with a small penalty on the non-preferred elbow
    sign breaking near-ties.

    Args:
        l1: Upper link length.
        l2: Lower link length.
        x: Target x.
        y: Target height; negative values are solved as if on the floor.
        z: Target z.
        preferred_elbow: Elbow sign that is not penalised.

    Returns:
        The best ``Solution3R`` in radians, or ``NoSolution``.
    """
    candidates, failure = _candidates_3r(l1, l2, x, y, z, preferred_elbow)
    if not candidates:
        return NoSolution(failure)
    return candidates[0]


# ---------------------------------------------------------------------------
# Polar arm
# ---------------------------------------------------------------------------


def ik_polar(
    rho_min: float,
    rho_max: float,
    x: float,
    y: float,
    z: float,
    theta_range: Optional[Tuple[float, float]] = None,
) -> Union[SolutionPolar, NoSolution]:
    """Solve the yaw + elevation + extension arm for a target point.

    Unlike the link solvers there is no fallback for out-of-band targets:
    the straight-line distance must lie within [*rho_min*, *rho_max*].

    Args:
        rho_min: Shortest extension.
        rho_max: Longest extension.
        x: Target x.
        y: Target height; negative values are solved as if on the floor.
        z: Target z.
        theta_range: Accepted for call compatibility; yaw is unrestricted.

    Returns:
        ``SolutionPolar`` in radians, or ``NoSolution``.
    """
    y_target = floor_clamp(y)
    r = math.hypot(x, z)
    s = math.hypot(r, y_target)
    if s > rho_max:
        return NoSolution(IKFailure.BEYOND_REACH)
    if s < rho_min:
        return NoSolution(IKFailure.INSIDE_DEAD_ZONE)

    theta = math.atan2(x, z)
    phi = math.atan2(y_target, r)
    y_tip = s * math.sin(phi)
    if y_tip < 0.0:
        return NoSolution(IKFailure.BELOW_FLOOR)
    return SolutionPolar(theta=theta, phi=phi, rho=clamp(s, rho_min, rho_max), y_tip=y_tip)


# ---------------------------------------------------------------------------
# Planar 2R arm
# ---------------------------------------------------------------------------


def ik_2r(
    l1: float,
    l2: float,
    x: float,
    y: float,
    elbow: int = ELBOW_UP,
) -> Union[Solution2R, NoSolution]:
    """Solve the planar 2R arm, rejecting floor violations.

    Reach is checked on the floor-clamped target with a small tolerance
    on both annulus boundaries, so targets exactly on a boundary solve.

    Args:
        l1: Upper link length.
        l2: Lower link length.
        x: Target x.
        y: Target height; negative values are solved as if on the floor.
        elbow: Elbow sign, +1 or -1.

    Returns:
        ``Solution2R`` in radians, or ``NoSolution``.
    """
    y_target = floor_clamp(y)
    d = math.hypot(x, y_target)
    if d > l1 + l2 + REACH_TOLERANCE:
        return NoSolution(IKFailure.BEYOND_REACH)
    if d < abs(l1 - l2) - REACH_TOLERANCE:
        return NoSolution(IKFailure.INSIDE_DEAD_ZONE)

    planar = ik_2link(l1, l2, x, y_target, elbow)
    if fk_2r(l1, l2, planar.q1, planar.q2).tip.y < 0.0:
        return NoSolution(IKFailure.BELOW_FLOOR)
    return Solution2R(q1=planar.q1, q2=planar.q2, elbow=elbow)
