"""Rectangular cropping with automatic bounds clamping.

The requested rectangle is clamped with `CropValidator.clamp_crop_area`
and the clamped region is copied verbatim into a freshly allocated buffer
of the same pixel mode. Requests that reach past the right or bottom edge
are cut back rather than rejected; only a request that clamps to an empty
region (origin at or beyond the edge) fails, with CropOutOfRange.
"""

from __future__ import annotations

from rasterkit.geometry import CropValidator, Rectangle, Size
from rasterkit.raster.buffer import Raster
from rasterkit.raster.exceptions import AllocationFailure, CropOutOfRange
from rasterkit.utils.logging import get_logger

logger = get_logger(__name__)

_validator = CropValidator()


def crop(raster: Raster, region: Rectangle | None) -> Raster:
    """Extract a rectangular region of a buffer.

    Args:
        raster: Source buffer; never modified.
        region: Requested rectangle. Negative x/y clamp to 0, non-positive
            width/height mean the full buffer extent. None returns the
            input itself, uncopied.

    Returns:
        A new buffer holding the clamped region, or `raster` when region
        is None.

    Raises:
        CropOutOfRange: If the clamped region cannot be allocated or
            copied. The low-level error is chained as __cause__.
    """
    if region is None:
        return raster

    bounds = Size(width=raster.width, height=raster.height)
    clamped = _validator.clamp_crop_area(region, bounds)

    destination: Raster | None = None
    try:
        destination = Raster.new(clamped.width, clamped.height, raster.mode)
        destination.copy_region(raster, clamped)
    except (AllocationFailure, MemoryError) as exc:
        if destination is not None:
            destination.close()
        logger.warning(
            "Crop region could not be materialized",
            requested=region.to_tuple(),
            clamped=clamped.to_tuple(),
            size=raster.size,
        )
        raise CropOutOfRange(
            requested=region, clamped=clamped, size=raster.size
        ) from exc

    logger.debug(
        "Cropped raster",
        requested=region.to_tuple(),
        clamped=clamped.to_tuple(),
        size=raster.size,
    )
    return destination
