"""
Shared constants and small stateless helpers.

Centralizes default arm geometry, joint ranges, animation timing, and the
angle/unit conversion helpers used across the armkin_sim package.
"""
