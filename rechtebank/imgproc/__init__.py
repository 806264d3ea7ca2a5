"""Photo orientation and normalisation helpers."""

from .exif import apply_orientation, read_orientation
from .normalize import ImageNormalizer, PillowRasterTransform, RasterTransform, canvas_size
from .rotation import initial_rotation, initial_rotation_from, rotate_left, rotate_right

__all__ = [
    "ImageNormalizer",
    "PillowRasterTransform",
    "RasterTransform",
    "apply_orientation",
    "canvas_size",
    "initial_rotation",
    "initial_rotation_from",
    "read_orientation",
    "rotate_left",
    "rotate_right",
]
