"""
Factory function for creating interactive arm sessions.

Callers can build a session from a config instance or from a short name
and receive the matching controller, already posed at its defaults.

Functions:
    resolve_config: Turn an arm name into its default config.
    make_session: Create a session for the 3R, polar or 2R arm.
"""

from __future__ import annotations

from typing import Dict, Union

from armkin_sim.robots.configs import (
    ArmConfig,
    PolarArmConfig,
    ThreeRArmConfig,
    TwoRArmConfig,
)
from armkin_sim.session.arm_3d import Arm3DSession, RobotType
from armkin_sim.session.planar_2r import Planar2RSession

# ---------------------------------------------------------------------------
# Config look-up table (name -> default config constructor)
# ---------------------------------------------------------------------------
_SESSION_REGISTRY: Dict[str, type] = {
    "3r": ThreeRArmConfig,
    "polar": PolarArmConfig,
    "2r": TwoRArmConfig,
}


def resolve_config(cfg: Union[ArmConfig, str]) -> ArmConfig:
    """Convert a string name to its default config, or pass through a config.

    Args:
        cfg: Either an ``ArmConfig`` instance or one of ``'3r'``,
            ``'polar'``, ``'2r'``.

    Returns:
        A concrete ``ArmConfig`` instance.

    Raises:
        ValueError: If the string name is not in the registry.
    """
    if isinstance(cfg, ArmConfig):
        return cfg
    if cfg not in _SESSION_REGISTRY:
        raise ValueError(f"Unknown arm '{cfg}'. Choose from {list(_SESSION_REGISTRY)}")
    return _SESSION_REGISTRY[cfg]()


def make_session(cfg: Union[ArmConfig, str]) -> Union[Arm3DSession, Planar2RSession]:
    """Create an interactive session for one arm.

    The 3R and polar arms share an ``Arm3DSession`` (which can toggle
    between them); the name or config only picks the starting arm.

    Args:
        cfg: Either an ``ArmConfig`` instance or a string name
            (``'3r'``, ``'polar'``, ``'2r'``).

    Returns:
        An ``Arm3DSession`` or a ``Planar2RSession``.
    """
    resolved = resolve_config(cfg)
    if isinstance(resolved, TwoRArmConfig):
        return Planar2RSession(resolved)
    if isinstance(resolved, PolarArmConfig):
        return Arm3DSession(polar=resolved, robot_type=RobotType.POLAR)
    return Arm3DSession(three_r=resolved, robot_type=RobotType.THREE_R)
