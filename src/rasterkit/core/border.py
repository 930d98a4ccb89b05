"""Border composition.

The destination is (W + 2*size) x (H + 2*size), filled with the border
color, with the source composited over it (source-over, so transparent
source pixels show the border color through).

Placement:
    Default: the source is drawn 1:1 at (size, size), giving a literal
    `size`-pixel margin on every side.

    Legacy (`legacy_scale=True`): the source is drawn at
    ((newW - W) // 2, (newH - H) // 2) under a uniform scale of
    min(newW / W, newH / H). The offset is scaled too, so the source is
    enlarged and shifted toward the bottom-right; the visible margin is
    not `size` pixels and the source can run off the right and bottom
    edges. Kept for callers that depend on that rendering.

The output is always RGBA.
"""

from __future__ import annotations

from rasterkit.config import settings
from rasterkit.geometry import Affine, Color, border_extent, border_ratio
from rasterkit.raster.buffer import Raster
from rasterkit.raster.types import Resample
from rasterkit.utils.logging import get_logger

logger = get_logger(__name__)


def add_border(
    raster: Raster,
    color: Color,
    size: int,
    *,
    legacy_scale: bool | None = None,
    resample: Resample | None = None,
) -> Raster:
    """Pad a buffer with a solid border.

    Args:
        raster: Source buffer; never modified.
        color: Border fill color.
        size: Border thickness in pixels, >= 0.
        legacy_scale: Use the legacy scaled placement; defaults to
            settings.BORDER_LEGACY_SCALE.
        resample: Filter for the legacy scaled draw; defaults to
            settings.RESAMPLE_FILTER.

    Returns:
        New RGBA buffer of size (W + 2*size) x (H + 2*size).

    Raises:
        ValueError: If size is negative.
        AllocationFailure: If the padded buffer cannot be allocated.
    """
    if size < 0:
        raise ValueError(f"Border size must be >= 0, got {size}")
    if legacy_scale is None:
        legacy_scale = settings.BORDER_LEGACY_SCALE

    width, height = border_extent(raster.width, raster.height, size)
    destination = Raster.new(width, height, "RGBA", fill=color)

    if legacy_scale:
        ratio = border_ratio(raster.width, raster.height, size)
        offset_x = (width - raster.width) // 2
        offset_y = (height - raster.height) // 2
        matrix = Affine.scaling(ratio).translate(offset_x, offset_y)
    else:
        matrix = Affine.translation(size, size)

    destination.draw(raster, matrix, resample or settings.RESAMPLE_FILTER)

    logger.debug(
        "Added border",
        border=size,
        color=color.to_hex(),
        legacy_scale=legacy_scale,
        source=raster.size,
        size=(width, height),
    )
    return destination
