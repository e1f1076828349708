"""
Arm configurations.

Provides validated dataclass configs for the 3R, polar and planar 2R
arms, consumed by the interactive sessions.
"""
