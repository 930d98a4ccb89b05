"""Geometry module for rasterkit.

This package provides the value types, validation and matrix math that
the raster transformations are built on.

Key Components:
    - Primitives: Rectangle, Size and Color models
    - Validators: Crop-area clamping against buffer bounds
    - Transforms: Affine matrices and canvas-size calculations

Example:
    from rasterkit.geometry import CropValidator, Rectangle, Size

    # Negative origin and zero height are "unspecified" sentinels
    request = Rectangle(x=-10, y=20, width=500, height=0)

    clamped = CropValidator().clamp_crop_area(request, Size(width=300, height=200))
    # Rectangle(x=0, y=20, width=300, height=180)
"""

from rasterkit.geometry.primitives import Color, Rectangle, Size
from rasterkit.geometry.transforms import (
    Affine,
    border_extent,
    border_ratio,
    rotated_bounds,
    scaled_extent,
)
from rasterkit.geometry.validators import CropValidator

__all__ = [
    "Affine",
    "Color",
    "CropValidator",
    "Rectangle",
    "Size",
    "border_extent",
    "border_ratio",
    "rotated_bounds",
    "scaled_extent",
]
