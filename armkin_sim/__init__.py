"""
Arm Kinematics Simulator.

An educational simulator for forward and inverse kinematics of small
robot arms: a yaw + shoulder + elbow arm (3R), a yaw + elevation +
extension arm (polar) and a planar two-link arm (2R).  Closed-form
solvers handle reachability, elbow-up/elbow-down selection and a floor
plane; an eased animation sequencer moves arms between poses; sessions
own the interactive state and a Pygame viewer hosts them.

Modules:
    kinematics: Forward/inverse kinematics and their value types.
    animation: Eased interpolation and the per-frame sequencer.
    robots: Validated arm configurations.
    session: Interactive controllers owning the mutable arm state.
    visualization: Live side-view rendering.
    utils: Shared constants and angle/unit helpers.
"""

__version__ = "0.1.0"
