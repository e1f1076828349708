"""
Interactive sessions that own the mutable arm state.

A session holds link lengths, the current pose, the target marker and
the animation slot, and calls into the pure kinematics core on every
user input.  Rendering hosts drive animations by calling ``tick`` once
per frame.
"""
