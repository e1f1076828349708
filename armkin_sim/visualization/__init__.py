"""
Live side-view viewer that hosts a session's per-frame tick.
"""
