"""Rotation onto an expanded canvas.

The canvas is the axis-aligned bounding box of the rotated source, so no
corner is clipped at any angle. The source is drawn through

    translate(canvas_w / 2, canvas_h / 2)
    rotate(angle)
    translate(-source_w / 2, -source_h / 2)

i.e. rotated about its own center and re-centered on the canvas. Angles
are degrees, clockwise-positive. The output is always RGBA; canvas areas
the rotated source does not cover are transparent.
"""

from __future__ import annotations

from rasterkit.config import settings
from rasterkit.geometry import Affine, rotated_bounds
from rasterkit.raster.buffer import Raster
from rasterkit.raster.exceptions import SkewEstimatorMissingError
from rasterkit.raster.types import Resample, SkewEstimatorProtocol
from rasterkit.utils.logging import get_logger

logger = get_logger(__name__)


def skew_angle(raster: Raster, estimator: SkewEstimatorProtocol) -> float:
    """Return the estimator's deskew angle for `raster`, in degrees."""
    return float(estimator.estimate(raster))


def rotate(
    raster: Raster,
    angle: float | None = None,
    *,
    estimator: SkewEstimatorProtocol | None = None,
    resample: Resample | None = None,
) -> Raster:
    """Rotate a buffer about its center.

    Args:
        raster: Source buffer; never modified.
        angle: Rotation in degrees, clockwise-positive. None asks the
            estimator for the deskew angle.
        estimator: Skew estimator used when angle is None.
        resample: Filter name; defaults to settings.RESAMPLE_FILTER.

    Returns:
        New RGBA buffer of size round(|cos|W + |sin|H) x round(|cos|H + |sin|W).

    Raises:
        SkewEstimatorMissingError: If angle and estimator are both None.
        AllocationFailure: If the expanded canvas cannot be allocated.
    """
    if angle is None:
        if estimator is None:
            raise SkewEstimatorMissingError()
        angle = skew_angle(raster, estimator)
        logger.debug("Estimated skew angle", angle=angle)

    width, height = rotated_bounds(raster.width, raster.height, angle)
    destination = Raster.new(width, height, "RGBA")

    matrix = (
        Affine.identity()
        .translate(width / 2, height / 2)
        .rotate(angle)
        .translate(-raster.width / 2, -raster.height / 2)
    )
    destination.draw(raster, matrix, resample or settings.RESAMPLE_FILTER)

    logger.debug("Rotated raster", angle=angle, source=raster.size, size=(width, height))
    return destination
