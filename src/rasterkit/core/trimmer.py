"""Automatic whitespace trimming.

Trim composes the four edge scans from `rasterkit.core.scanner` into a
content rectangle and crops to it. It never fails observably: when the
buffer has no content to trim around, or the crop itself fails, the
result is an independent copy of the input.
"""

from __future__ import annotations

from rasterkit.config import settings
from rasterkit.core.cropper import crop
from rasterkit.core.scanner import WHITE, find_content_bounds
from rasterkit.geometry import Color
from rasterkit.raster.buffer import Raster
from rasterkit.raster.exceptions import RasterError
from rasterkit.utils.logging import get_logger

logger = get_logger(__name__)


def trim(
    raster: Raster,
    *,
    background: Color = WHITE,
    legacy_right_edge: bool | None = None,
) -> Raster:
    """Crop away the background margin around the content.

    Args:
        raster: Source buffer; never modified.
        background: Color treated as empty space. Fully transparent pixels
            are always treated as empty space too.
        legacy_right_edge: Scan the right edge with exact inequality, as
            older releases did; defaults to settings.TRIM_LEGACY_RIGHT_EDGE.

    Returns:
        New buffer cropped to the content, or a copy of `raster` if no
        content rectangle could be found or cropped.
    """
    if legacy_right_edge is None:
        legacy_right_edge = settings.TRIM_LEGACY_RIGHT_EDGE

    try:
        bounds = find_content_bounds(
            raster, background, legacy_right_edge=legacy_right_edge
        )
        trimmed = crop(raster, bounds)
    except RasterError as exc:
        logger.info("Trim returned an unchanged copy", reason=str(exc))
        return raster.clone()

    logger.debug("Trimmed raster", bounds=bounds.to_tuple(), source=raster.size)
    return trimmed
