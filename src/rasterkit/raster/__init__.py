"""Raster data layer for rasterkit.

This package provides the in-memory pixel store the transformations work
on, the protocols they consume, and the errors they raise.

Key Components:
    - Raster: Pillow-backed buffer with per-pixel access and drawing
    - RasterBufferProtocol: Protocol for dependency injection
    - SkewEstimatorProtocol: Protocol for externally supplied angle estimators
    - Exceptions: AllocationFailure, CropOutOfRange and friends
    - load_raster / save_raster: File helpers for the command line

Example:
    from rasterkit.geometry import Color
    from rasterkit.raster import Raster

    with Raster.new(640, 480, fill=Color.white()) as canvas:
        canvas.set_pixel(10, 10, Color.black())
        print(canvas.get_pixel(10, 10))
"""

from rasterkit.raster.buffer import SUPPORTED_MODES, Raster, resample_filter
from rasterkit.raster.exceptions import (
    AllocationFailure,
    CropOutOfRange,
    NoContentError,
    RasterError,
    SkewEstimatorMissingError,
    UnsupportedModeError,
)
from rasterkit.raster.io import load_raster, save_raster
from rasterkit.raster.types import (
    FixedAngleEstimator,
    RasterBufferProtocol,
    Resample,
    SkewEstimatorProtocol,
)

__all__ = [
    "SUPPORTED_MODES",
    "AllocationFailure",
    "CropOutOfRange",
    "FixedAngleEstimator",
    "NoContentError",
    "Raster",
    "RasterBufferProtocol",
    "RasterError",
    "Resample",
    "SkewEstimatorMissingError",
    "SkewEstimatorProtocol",
    "UnsupportedModeError",
    "load_raster",
    "resample_filter",
    "save_raster",
]
