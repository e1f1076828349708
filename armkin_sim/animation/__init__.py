"""
Frame-driven animation between two kinematic states.

Provides eased Cartesian and joint-space interpolation and a single-slot
sequencer advanced by an external per-frame tick.
"""
