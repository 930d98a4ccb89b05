"""Transformation facade binding a skew estimator and settings.

`RasterTransformer` offers every operation with the defaults a caller
configured once (resampling filter, legacy flags) and the skew estimator
that `rotate(angle=None)` and `skew_angle` delegate to.
"""

from __future__ import annotations

from rasterkit.config import Settings
from rasterkit.config import settings as default_settings
from rasterkit.core.border import add_border
from rasterkit.core.cropper import crop
from rasterkit.core.resizer import resize_by_scale, resize_to_extent, resize_with_ratio
from rasterkit.core.rotator import rotate, skew_angle
from rasterkit.core.scanner import WHITE
from rasterkit.core.trimmer import trim
from rasterkit.geometry import Color, Rectangle
from rasterkit.raster.buffer import Raster
from rasterkit.raster.exceptions import SkewEstimatorMissingError
from rasterkit.raster.types import SkewEstimatorProtocol


class RasterTransformer:
    """Applies geometric transformations with injected collaborators.

    Every method takes an input Raster and returns a new one; the input is
    never modified (crop with region=None returns the input itself).

    Example:
        >>> from rasterkit.raster import FixedAngleEstimator
        >>> transformer = RasterTransformer(estimator=FixedAngleEstimator(0.0))
        >>> page = Raster.new(20, 10, fill=Color.white())
        >>> transformer.rotate(page).size
        (20, 10)
    """

    __slots__ = ("_estimator", "_settings")

    def __init__(
        self,
        estimator: SkewEstimatorProtocol | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the transformer.

        Args:
            estimator: Skew estimator for rotations without an explicit
                angle. Optional; rotating without an angle fails without it.
            settings: Settings providing defaults. Defaults to the
                module-level settings singleton.
        """
        self._estimator = estimator
        self._settings = settings or default_settings

    @property
    def estimator(self) -> SkewEstimatorProtocol | None:
        return self._estimator

    def resize(
        self,
        raster: Raster,
        scale: float | None = None,
        *,
        width: int | None = None,
        height: int | None = None,
        ratio: float | None = None,
    ) -> Raster:
        """Resize by scale, or to width x height (optionally with a ratio).

        Raises:
            TypeError: If neither scale nor both width and height are given,
                or if both forms are given at once.
        """
        has_extent = width is not None and height is not None
        if scale is not None and (has_extent or ratio is not None):
            raise TypeError("Pass either scale or width/height[/ratio], not both")
        resample = self._settings.RESAMPLE_FILTER
        if scale is not None:
            return resize_by_scale(raster, scale, resample=resample)
        if width is None or height is None:
            raise TypeError("resize() needs a scale or both width and height")
        if ratio is None:
            return resize_to_extent(raster, width, height)
        return resize_with_ratio(raster, width, height, ratio, resample=resample)

    def crop(self, raster: Raster, region: Rectangle | None) -> Raster:
        return crop(raster, region)

    def skew_angle(self, raster: Raster) -> float:
        """Return the configured estimator's angle for `raster`.

        Raises:
            SkewEstimatorMissingError: If no estimator was configured.
        """
        if self._estimator is None:
            raise SkewEstimatorMissingError()
        return skew_angle(raster, self._estimator)

    def rotate(self, raster: Raster, angle: float | None = None) -> Raster:
        return rotate(
            raster,
            angle,
            estimator=self._estimator,
            resample=self._settings.RESAMPLE_FILTER,
        )

    def trim(self, raster: Raster, background: Color = WHITE) -> Raster:
        return trim(
            raster,
            background=background,
            legacy_right_edge=self._settings.TRIM_LEGACY_RIGHT_EDGE,
        )

    def add_border(self, raster: Raster, color: Color, size: int) -> Raster:
        return add_border(
            raster,
            color,
            size,
            legacy_scale=self._settings.BORDER_LEGACY_SCALE,
            resample=self._settings.RESAMPLE_FILTER,
        )
