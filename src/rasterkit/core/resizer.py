"""Resizing by scale factor, by extent, and by extent plus ratio.

The three variants deliberately behave differently:

- `resize_by_scale` allocates floor(W*s) x floor(H*s) and draws the
  source through a uniform scale matrix.
- `resize_to_extent` does NOT scale. It allocates exactly width x height
  and copies the top-left overlap of the source into it; anything the
  source does not cover stays at the default fill (transparent for modes
  with alpha, black otherwise).
- `resize_with_ratio` allocates exactly width x height and draws the
  source scaled by `ratio` from the origin.

All three keep the pixel mode of the input.
"""

from __future__ import annotations

from typing import overload

from rasterkit.config import settings
from rasterkit.geometry import Affine, Rectangle, scaled_extent
from rasterkit.raster.buffer import Raster
from rasterkit.raster.types import Resample
from rasterkit.utils.logging import get_logger

logger = get_logger(__name__)


def resize_by_scale(
    raster: Raster,
    scale: float,
    *,
    resample: Resample | None = None,
) -> Raster:
    """Scale a buffer uniformly.

    Args:
        raster: Source buffer; never modified.
        scale: Scale factor, normally in (0, 1].
        resample: Filter name; defaults to settings.RESAMPLE_FILTER.

    Returns:
        New buffer of size (int(W * scale), int(H * scale)).

    Raises:
        AllocationFailure: If either resulting dimension is not positive
            (scale <= 0, or a scale too small for the source).
    """
    width, height = scaled_extent(raster.width, raster.height, scale)
    destination = Raster.new(width, height, raster.mode)
    destination.draw(
        raster, Affine.scaling(scale), resample or settings.RESAMPLE_FILTER
    )
    logger.debug("Resized by scale", scale=scale, source=raster.size, size=(width, height))
    return destination


def resize_to_extent(raster: Raster, width: int, height: int) -> Raster:
    """Resize to an exact extent by subset extraction, without scaling.

    Raises:
        AllocationFailure: If width or height is not positive.
    """
    destination = Raster.new(width, height, raster.mode)
    destination.copy_region(raster, Rectangle(x=0, y=0, width=width, height=height))
    logger.debug("Resized to extent", source=raster.size, size=(width, height))
    return destination


def resize_with_ratio(
    raster: Raster,
    width: int,
    height: int,
    ratio: float,
    *,
    resample: Resample | None = None,
) -> Raster:
    """Draw the source scaled by `ratio` onto a width x height buffer.

    Raises:
        ValueError: If ratio is not positive.
        AllocationFailure: If width or height is not positive.
    """
    if ratio <= 0:
        raise ValueError(f"ratio must be positive, got {ratio}")
    destination = Raster.new(width, height, raster.mode)
    destination.draw(
        raster, Affine.scaling(ratio), resample or settings.RESAMPLE_FILTER
    )
    logger.debug(
        "Resized with ratio", ratio=ratio, source=raster.size, size=(width, height)
    )
    return destination


@overload
def resize(
    raster: Raster, scale: float, /, *, resample: Resample | None = None
) -> Raster: ...


@overload
def resize(
    raster: Raster, width: int, height: int, /, *, resample: Resample | None = None
) -> Raster: ...


@overload
def resize(
    raster: Raster,
    width: int,
    height: int,
    ratio: float,
    /,
    *,
    resample: Resample | None = None,
) -> Raster: ...


def resize(
    raster: Raster,
    *dimensions: float,
    resample: Resample | None = None,
) -> Raster:
    """Resize by scale, by extent, or by extent and ratio.

    Dispatches on the number of positional arguments:

    - resize(raster, scale) -> resize_by_scale
    - resize(raster, width, height) -> resize_to_extent
    - resize(raster, width, height, ratio) -> resize_with_ratio

    Raises:
        TypeError: If called with any other number of dimensions, or with
            a non-integer width or height.
    """
    if len(dimensions) == 1:
        return resize_by_scale(raster, dimensions[0], resample=resample)
    if len(dimensions) not in (2, 3):
        raise TypeError(
            f"resize() takes a scale, (width, height) or (width, height, ratio); "
            f"got {len(dimensions)} values"
        )

    width, height = dimensions[0], dimensions[1]
    if not isinstance(width, int) or not isinstance(height, int):
        raise TypeError(f"width and height must be integers, got {width!r}, {height!r}")
    if len(dimensions) == 2:
        return resize_to_extent(raster, width, height)
    return resize_with_ratio(raster, width, height, dimensions[2], resample=resample)
