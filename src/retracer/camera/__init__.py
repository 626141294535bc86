"""Camera module for view and ray generation.

Components:
    pinhole: Simple pinhole (perspective) camera model

Camera responsibilities:
    - Carry the output resolution (width, height)
    - Transform (u, v) image coordinates to world-space rays
    - Apply sub-pixel jitter for anti-aliasing
    - Support look-at positioning with up vector
"""

from .pinhole import PinholeCamera

__all__ = [
    "PinholeCamera",
]
