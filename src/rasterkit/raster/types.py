"""Type definitions for the raster layer.

Contains the protocols that the transformations consume. The concrete
Pillow-backed buffer lives in `rasterkit.raster.buffer`; the skew
estimator is always supplied by the caller.
"""

from __future__ import annotations

from typing import Literal, Protocol, Self

from rasterkit.geometry import Affine, Color, Rectangle

Resample = Literal["nearest", "bilinear", "bicubic"]


class RasterBufferProtocol(Protocol):
    """Protocol defining the capabilities every transformation relies on.

    This protocol allows for dependency injection and testing with
    alternative pixel stores.
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    @property
    def mode(self) -> str: ...

    @property
    def size(self) -> tuple[int, int]: ...

    def get_pixel(self, x: int, y: int) -> Color:
        """Return the color at (x, y) as RGBA.

        Raises:
            IndexError: If (x, y) lies outside the buffer.
        """
        ...

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        """Write a color at (x, y).

        Raises:
            IndexError: If (x, y) lies outside the buffer.
        """
        ...

    def clone(self) -> Self:
        """Return an independent copy."""
        ...

    def copy_region(
        self,
        source: Self,
        region: Rectangle,
        origin: tuple[int, int] = (0, 0),
    ) -> None:
        """Copy `region` of `source` verbatim into this buffer at `origin`."""
        ...

    def draw(
        self,
        source: Self,
        matrix: Affine,
        resample: Resample = "bilinear",
    ) -> None:
        """Composite `source` over this buffer through `matrix`."""
        ...

    def close(self) -> None:
        """Release the pixel store."""
        ...


class SkewEstimatorProtocol(Protocol):
    """Protocol for components that estimate a deskew rotation angle."""

    def estimate(self, raster: RasterBufferProtocol) -> float:
        """Return the rotation, in degrees, that best deskews the content."""
        ...


class FixedAngleEstimator:
    """Skew estimator that always reports the same angle.

    Useful when the angle is known up front (e.g., from scanner metadata)
    and in tests.
    """

    __slots__ = ("_angle",)

    def __init__(self, angle: float) -> None:
        self._angle = float(angle)

    def estimate(self, raster: RasterBufferProtocol) -> float:
        del raster
        return self._angle
