"""Core transformations for rasterkit.

This package contains the geometric operations on raster buffers and the
edge scanning that trimming is built on.

Public API:
    - resize: Scale, extent or extent-plus-ratio resizing.
    - crop: Rectangular crop with bounds clamping.
    - rotate / skew_angle: Rotation onto an expanded canvas.
    - trim: Automatic background trimming that never fails.
    - add_border: Solid-color padding.
    - find_content_bounds and the per-edge finders.
    - RasterTransformer: Facade binding a skew estimator and settings.
"""

from rasterkit.core.border import add_border
from rasterkit.core.cropper import crop
from rasterkit.core.engine import RasterTransformer
from rasterkit.core.resizer import (
    resize,
    resize_by_scale,
    resize_to_extent,
    resize_with_ratio,
)
from rasterkit.core.rotator import rotate, skew_angle
from rasterkit.core.scanner import (
    differs_from_background,
    find_bottom,
    find_content_bounds,
    find_left,
    find_right,
    find_top,
    is_foreground,
)
from rasterkit.core.trimmer import trim

__all__ = [
    "RasterTransformer",
    "add_border",
    "crop",
    "differs_from_background",
    "find_bottom",
    "find_content_bounds",
    "find_left",
    "find_right",
    "find_top",
    "is_foreground",
    "resize",
    "resize_by_scale",
    "resize_to_extent",
    "resize_with_ratio",
    "rotate",
    "skew_angle",
    "trim",
]
