"""Preview module for render output.

Components:
    export: PNG export of finished renders via Pillow
"""

from src.retracer.preview.export import save_png, to_pil_image

__all__ = [
    "save_png",
    "to_pil_image",
]
