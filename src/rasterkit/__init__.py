"""rasterkit: deterministic geometric transformations on raster images.

Resize, crop, rotate, pad and trim in-memory buffers. Every operation
takes a Raster and returns a new one.
"""

__version__ = "0.1.0"

from rasterkit.core import (  # noqa: E402
    RasterTransformer,
    add_border,
    crop,
    resize,
    rotate,
    skew_angle,
    trim,
)
from rasterkit.geometry import Color, Rectangle  # noqa: E402
from rasterkit.raster import (  # noqa: E402
    AllocationFailure,
    CropOutOfRange,
    Raster,
    RasterError,
)

__all__ = [
    "AllocationFailure",
    "Color",
    "CropOutOfRange",
    "Raster",
    "RasterError",
    "RasterTransformer",
    "Rectangle",
    "__version__",
    "add_border",
    "crop",
    "resize",
    "rotate",
    "skew_angle",
    "trim",
]
