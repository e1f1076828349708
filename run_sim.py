#!/usr/bin/env python3
"""
Main entry point for the Arm Kinematics Simulator.

Runs forward kinematics, inverse kinematics, a joint-space reflection
animation, or the live viewer for one of the three arms.  Run directly
with ``python run_sim.py`` or import ``armkin_sim`` for custom workflows.

Usage examples::

    # Tip of the 3R arm at q1=0, q2=45, q3=-30 degrees
    python run_sim.py --robot 3r --mode fk --joints 0 45 -30

    # Solve the polar arm for a target (metres)
    python run_sim.py --robot polar --mode ik --target 0.2 0.3 0.4

    # Print the frames of the "joints to opposite" animation
    python run_sim.py --robot 2r --mode animate --fps 10

    # Precomputed joint timeline of the 3R reflection, with tip heights
    python run_sim.py --robot 3r --mode preview --fps 10

    # Live viewer
    python run_sim.py --robot 3r --mode view
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Any, List

import numpy as np

from armkin_sim.animation.sequencer import AnimationKind, reflect_through_origin, sample_timeline
from armkin_sim.kinematics.forward import fk_3r_batch
from armkin_sim.robots.configs import (
    ArmConfig,
    PolarArmConfig,
    TwoRArmConfig,
)
from armkin_sim.session.factory import make_session, resolve_config
from armkin_sim.session.planar_2r import Planar2RSession
from armkin_sim.utils.helpers import mm_display

# ======================================================================
# Configuration builders
# ======================================================================


def _build_arm_config(args: argparse.Namespace) -> ArmConfig:
    """Return the arm configuration for the CLI arguments.

    Args:
        args: Parsed CLI arguments.

    Returns:
        A concrete ``ArmConfig`` instance.

    Raises:
        ValueError: If the robot name is unknown or a joint list has the
            wrong length.
    """
    cfg = replace(resolve_config(args.robot), animation_duration=args.duration)

    if isinstance(cfg, PolarArmConfig):
        if args.rho_min is not None or args.rho_max is not None:
            cfg = replace(
                cfg,
                rho_min=cfg.rho_min if args.rho_min is None else args.rho_min,
                rho_max=cfg.rho_max if args.rho_max is None else args.rho_max,
            )
        if args.joints:
            _check_arity(args.joints, 3, "--joints (theta phi rho)")
            cfg = replace(cfg, theta_deg=args.joints[0], phi_deg=args.joints[1], rho=args.joints[2])
        return cfg

    if args.l1 is not None or args.l2 is not None:
        cfg = replace(
            cfg,
            l1=cfg.l1 if args.l1 is None else args.l1,
            l2=cfg.l2 if args.l2 is None else args.l2,
        )
    if args.elbow is not None:
        field = "elbow" if isinstance(cfg, TwoRArmConfig) else "preferred_elbow"
        cfg = replace(cfg, **{field: args.elbow})
    if args.joints:
        n = 2 if isinstance(cfg, TwoRArmConfig) else 3
        _check_arity(args.joints, n, "--joints")
        cfg = replace(cfg, joints_deg=tuple(args.joints))
    return cfg


def _check_arity(values: List[float], n: int, name: str) -> None:
    if len(values) != n:
        raise ValueError(f"{name} expects {n} values, got {len(values)}")


# ======================================================================
# Formatting
# ======================================================================


def _format_point(point: Any) -> str:
    coords = [("x", point.x), ("y", point.y)]
    if hasattr(point, "z"):
        coords.append(("z", point.z))
    return "  ".join(f"{k}={mm_display(v):>5d} mm" for k, v in coords)


def _format_pose(session: Any) -> str:
    if isinstance(session, Planar2RSession):
        j = session.joints
        return f"q1={j.q1:7.2f}  q2={j.q2:7.2f}"
    if session.arm_type == "3r":
        j = session.joints
        return f"q1={j.q1:7.2f}  q2={j.q2:7.2f}  q3={j.q3:7.2f}"
    p = session.polar
    return f"theta={p.theta:7.2f}  phi={p.phi:6.2f}  rho={mm_display(p.rho):>4d} mm"


# ======================================================================
# Mode runners
# ======================================================================


def _run_fk(session: Any, args: argparse.Namespace) -> None:
    """Print the pose and tip position of the configured arm.

    Args:
        session: Session built from the CLI configuration.
        args: Parsed CLI arguments.
    """
    if isinstance(session, Planar2RSession):
        fk = session.forward()
        print(f"Pose:  {_format_pose(session)}")
        print(f"Elbow: {_format_point(fk.joint)}")
        print(f"Tip:   {_format_point(fk.tip)}")
        return
    print(f"Pose:  {_format_pose(session)}")
    elbow = session.elbow_position()
    if elbow is not None:
        print(f"Elbow: {_format_point(elbow)}")
    print(f"Tip:   {_format_point(session.tip_position())}")


def _run_ik(session: Any, args: argparse.Namespace) -> None:
    """Solve the ``--target`` point and print the joints or the failure cause.

    Args:
        session: Session built from the CLI configuration.
        args: Parsed CLI arguments.

    Raises:
        ValueError: If ``--target`` is missing or has the wrong length.
    """
    n = 2 if isinstance(session, Planar2RSession) else 3
    if not args.target:
        raise ValueError("--mode ik requires --target")
    _check_arity(args.target, n, "--target")
    result = session.calculate(*args.target)
    if not result.ok:
        print(f"No solution: {result.failure.value}")
        return
    print(f"Solution: {result.joints}")
    if result.elbow is not None:
        print(f"Elbow sign: {result.elbow:+d}")
    if result.y_elbow is not None:
        print(f"Elbow height: {mm_display(result.y_elbow)} mm")
    if result.y_tip is not None:
        print(f"Tip height: {mm_display(result.y_tip)} mm")


def _run_animate(session: Any, args: argparse.Namespace) -> None:
    """Play the joint-space reflection animation on a synthetic clock.

    Args:
        session: Session built from the CLI configuration.
        args: Parsed CLI arguments.
    """
    if not session.animate_joints_to_opposite(now=0.0):
        reason = session.last_failure.value if session.last_failure else "busy"
        print(f"Animation not started: {reason}")
        return
    frame = 0
    running = True
    while running:
        frame += 1
        running = session.tick(frame / args.fps)
        print(f"[{frame:>4d}] {_format_pose(session)} | {_format_point(session.target)}")
    print(f"Animation complete after {frame} frames.")


def _run_preview(session: Any, args: argparse.Namespace) -> None:
    """Print the precomputed frames of the joint-space reflection.

    Unlike ``animate`` this never touches the session pose: the end pose is
    solved with ``calculate`` and the frames are sampled up front.  For the
    3R arm each frame also carries the tip from vectorised FK.

    Args:
        session: Session built from the CLI configuration.
        args: Parsed CLI arguments.
    """
    end_target = reflect_through_origin(session.target)
    if isinstance(session, Planar2RSession):
        result = session.calculate(end_target.x, end_target.y)
    else:
        result = session.calculate(end_target.x, end_target.y, end_target.z)
    if not result.ok:
        print(f"No solution for the reflected target: {result.failure.value}")
        return
    start = session.polar if session.arm_type == "polar" else session.joints
    wrap = {"3r": (True, False, True), "2r": (True, True)}.get(session.arm_type)
    frames = sample_timeline(
        AnimationKind.JOINT_LERP, start, result.joints, session.animation_duration, args.fps, wrap
    )
    tips = None
    if session.arm_type == "3r":
        tips = fk_3r_batch(session.links.l1, session.links.l2, np.radians(frames))
    for i, row in enumerate(frames):
        line = f"[{i:>4d}] " + "  ".join(f"{v:8.2f}" for v in row)
        if tips is not None:
            line += " | " + "  ".join(f"{mm_display(v):>5d}" for v in tips[i]) + " mm"
        print(line)
    print(f"{len(frames)} frames over {session.animation_duration:.2f}s at {args.fps} fps.")


def _run_view(session: Any, args: argparse.Namespace) -> None:
    """Open the live viewer for the session."""
    from armkin_sim.visualization.viewer import ArmViewer

    print("Viewer: O = slide target, J = drive joints, T = toggle 3R/polar, Space = solve, Esc = quit.")
    ArmViewer(fps=args.fps).run(session)


# ======================================================================
# CLI
# ======================================================================


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed ``argparse.Namespace``.
    """
    parser = argparse.ArgumentParser(description="Arm Kinematics Simulator")
    parser.add_argument("--robot", choices=["3r", "polar", "2r"], default="3r")
    parser.add_argument("--mode", choices=["fk", "ik", "animate", "preview", "view"], default="fk")
    parser.add_argument("--joints", type=float, nargs="+", help="Joint values in degrees (rho in metres)")
    parser.add_argument("--target", type=float, nargs="+", help="Target coordinates in metres")
    parser.add_argument("--l1", type=float)
    parser.add_argument("--l2", type=float)
    parser.add_argument("--rho-min", type=float)
    parser.add_argument("--rho-max", type=float)
    parser.add_argument("--elbow", type=int, choices=[1, -1])
    parser.add_argument("--duration", type=float, default=0.8)
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args()


# ======================================================================
# Dispatch
# ======================================================================


# Mapping from mode name to runner function
_MODE_DISPATCH = {
    "fk": _run_fk,
    "ik": _run_ik,
    "animate": _run_animate,
    "preview": _run_preview,
    "view": _run_view,
}


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------
if __name__ == "__main__":
    args = _parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    arm_cfg = _build_arm_config(args)
    session = make_session(arm_cfg)
    print(f"Robot: {args.robot} | Mode: {args.mode}")
    print("-" * 60)

    runner = _MODE_DISPATCH[args.mode]
    runner(session, args)
