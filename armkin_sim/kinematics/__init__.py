"""
Closed-form forward and inverse kinematics for the 2R, 3R and polar arms.

Pure functions over plain floats and small immutable value types; no
state, no rendering, no scheduling.
"""
