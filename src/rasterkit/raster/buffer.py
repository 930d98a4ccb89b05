"""Pillow-backed raster buffer.

`Raster` is the pixel store every rasterkit transformation reads from and
allocates into. It wraps a `PIL.Image.Image` and exposes exactly the
capabilities the transformations need: dimensions, per-pixel access as
`Color` values, verbatim region copies, and source-over drawing through
an affine matrix.

Pixel Modes:
    RGBA, RGB, LA and L images are wrapped as they are. Pixels read from
    modes without alpha report alpha 255; grayscale pixels report equal
    R, G and B. Other Pillow modes (P, 1, CMYK, ...) are converted to RGBA
    by `Raster.from_image`.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, Self

import numpy as np
from PIL import Image

from rasterkit.config import settings
from rasterkit.geometry import Affine, Color, Rectangle
from rasterkit.raster.exceptions import (
    AllocationFailure,
    RasterError,
    UnsupportedModeError,
)
from rasterkit.raster.types import Resample

SUPPORTED_MODES = ("RGBA", "RGB", "LA", "L")

_RESAMPLE_FILTERS: dict[str, Image.Resampling] = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
}

_TRANSPARENT = (0, 0, 0, 0)


def _luma(color: Color) -> int:
    """ITU-R 601-2 luma, the transform Pillow uses for RGB -> L."""
    return (color.r * 299 + color.g * 587 + color.b * 114) // 1000


def _encode(color: Color, mode: str) -> Any:
    """Convert a Color to the pixel value Pillow expects for `mode`."""
    if mode == "RGBA":
        return color.to_tuple()
    if mode == "RGB":
        return (color.r, color.g, color.b)
    if mode == "LA":
        return (_luma(color), color.a)
    return _luma(color)


def _decode(value: Any, mode: str) -> Color:
    """Convert a Pillow pixel value in `mode` to a Color."""
    if mode == "RGBA":
        return Color(r=value[0], g=value[1], b=value[2], a=value[3])
    if mode == "RGB":
        return Color(r=value[0], g=value[1], b=value[2])
    if mode == "LA":
        return Color(r=value[0], g=value[0], b=value[0], a=value[1])
    return Color(r=value, g=value, b=value)


def resample_filter(name: Resample) -> Image.Resampling:
    """Map a resampling name to Pillow's enum.

    Raises:
        ValueError: If the name is not one of nearest, bilinear, bicubic.
    """
    try:
        return _RESAMPLE_FILTERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown resample filter {name!r}; "
            f"expected one of {', '.join(_RESAMPLE_FILTERS)}"
        ) from None


class Raster:
    """An in-memory image with per-pixel access and canvas-style drawing.

    A Raster owns its Pillow image. Transformations never mutate the
    Raster they are given; they allocate a new one with `Raster.new` and
    draw into it.

    Example:
        >>> canvas = Raster.new(4, 4, fill=Color.white())
        >>> canvas.set_pixel(1, 1, Color.black())
        >>> canvas.get_pixel(1, 1) == Color.black()
        True
    """

    __slots__ = ("_closed", "_image", "_pixels")

    def __init__(self, image: Image.Image) -> None:
        """Wrap an existing Pillow image without copying it.

        Args:
            image: Image in one of SUPPORTED_MODES.

        Raises:
            UnsupportedModeError: If the image mode is not supported.
        """
        if image.mode not in SUPPORTED_MODES:
            raise UnsupportedModeError(
                f"Pixel mode must be one of {', '.join(SUPPORTED_MODES)}",
                size=image.size,
                mode=image.mode,
            )
        self._image = image
        self._pixels: Any = None
        self._closed = False

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(
        cls,
        width: int,
        height: int,
        mode: str = "RGBA",
        fill: Color | None = None,
        *,
        max_pixels: int | None = None,
    ) -> Self:
        """Allocate a buffer filled with a single color.

        Args:
            width: Width in pixels.
            height: Height in pixels.
            mode: Pixel mode, one of SUPPORTED_MODES.
            fill: Initial color of every pixel. Defaults to transparent.
            max_pixels: Upper bound on width * height. Defaults to
                settings.MAX_PIXELS.

        Returns:
            A new Raster.

        Raises:
            AllocationFailure: If a dimension is not positive, the buffer
                would exceed max_pixels, or Pillow cannot allocate it.
            UnsupportedModeError: If mode is not supported.
        """
        if mode not in SUPPORTED_MODES:
            raise UnsupportedModeError(
                f"Pixel mode must be one of {', '.join(SUPPORTED_MODES)}",
                size=(width, height),
                mode=mode,
            )
        if width <= 0 or height <= 0:
            raise AllocationFailure(
                "Buffer dimensions must be positive",
                size=(width, height),
                mode=mode,
            )
        limit = settings.MAX_PIXELS if max_pixels is None else max_pixels
        if width * height > limit:
            raise AllocationFailure(
                f"Buffer exceeds the {limit} pixel limit",
                size=(width, height),
                mode=mode,
            )

        fill = fill or Color.transparent()
        try:
            image = Image.new(mode, (width, height), _encode(fill, mode))
        except (MemoryError, ValueError) as exc:
            raise AllocationFailure(
                f"Could not allocate buffer: {exc}",
                size=(width, height),
                mode=mode,
            ) from exc
        return cls(image)

    @classmethod
    def from_image(cls, image: Image.Image) -> Self:
        """Create a Raster from a copy of a Pillow image.

        Unsupported modes are converted to RGBA.
        """
        if image.mode in SUPPORTED_MODES:
            return cls(image.copy())
        return cls(image.convert("RGBA"))

    @classmethod
    def from_array(cls, array: np.ndarray) -> Self:
        """Create a Raster from a uint8 array.

        Args:
            array: Shape (H, W) or (H, W, 1) for L, or (H, W, C) with
                C = 2, 3 or 4 for LA, RGB or RGBA.

        Raises:
            UnsupportedModeError: If the array shape maps to no mode.
        """
        data = np.ascontiguousarray(array, dtype=np.uint8)
        if data.ndim == 3 and data.shape[2] == 1:
            data = data[:, :, 0]
        channels = 1 if data.ndim == 2 else (data.shape[2] if data.ndim == 3 else 0)
        if channels not in (1, 2, 3, 4):
            raise UnsupportedModeError(
                f"Cannot build a raster from array of shape {data.shape}"
            )
        return cls(Image.fromarray(data))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> tuple[int, int]:
        """Return (width, height)."""
        return self._image.size

    @property
    def mode(self) -> str:
        return self._image.mode

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Pixel access
    # ------------------------------------------------------------------

    def _access(self) -> Any:
        if self._closed:
            raise RasterError("Buffer is closed", size=self.size, mode=self.mode)
        if self._pixels is None:
            self._pixels = self._image.load()
        return self._pixels

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside buffer of size {self.width}x{self.height}"
            )

    def get_pixel(self, x: int, y: int) -> Color:
        """Return the color at (x, y) as RGBA.

        Raises:
            IndexError: If (x, y) lies outside the buffer.
        """
        self._check_bounds(x, y)
        return _decode(self._access()[x, y], self.mode)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        """Write a color at (x, y), converted to this buffer's mode.

        Raises:
            IndexError: If (x, y) lies outside the buffer.
        """
        self._check_bounds(x, y)
        self._access()[x, y] = _encode(color, self.mode)

    # ------------------------------------------------------------------
    # Copying and drawing
    # ------------------------------------------------------------------

    def clone(self) -> Self:
        """Return an independent copy of this buffer."""
        self._access()
        return type(self)(self._image.copy())

    def copy_region(
        self,
        source: Raster,
        region: Rectangle,
        origin: tuple[int, int] = (0, 0),
    ) -> None:
        """Copy `region` of `source` into this buffer at `origin`, verbatim.

        Pixels are replaced, not blended. The part of `region` outside
        `source` is ignored, leaving the destination pixels untouched.
        """
        self._access()
        source._access()
        left = max(region.x, 0)
        top = max(region.y, 0)
        right = min(region.right, source.width)
        bottom = min(region.bottom, source.height)
        if right <= left or bottom <= top:
            return

        patch = source._image.crop((left, top, right, bottom))
        if patch.mode != self.mode:
            patch = patch.convert(self.mode)
        self._image.paste(
            patch, (origin[0] + left - region.x, origin[1] + top - region.y)
        )

    def draw(
        self,
        source: Raster,
        matrix: Affine,
        resample: Resample = "bilinear",
    ) -> None:
        """Composite `source` over this buffer through `matrix` (source-over).

        Whole-pixel translations are pasted directly so they are exact;
        any other matrix is resampled with the named filter.

        Raises:
            ValueError: If matrix is singular or resample is unknown.
        """
        self._access()
        source._access()
        layer_source = source._image
        if layer_source.mode != "RGBA":
            layer_source = layer_source.convert("RGBA")

        if matrix.is_integer_translation:
            layer = Image.new("RGBA", self.size, _TRANSPARENT)
            layer.paste(layer_source, (int(matrix.c), int(matrix.f)))
        else:
            layer = layer_source.transform(
                self.size,
                Image.Transform.AFFINE,
                data=matrix.to_pillow(),
                resample=resample_filter(resample),
                fillcolor=_TRANSPARENT,
            )

        base = self._image if self.mode == "RGBA" else self._image.convert("RGBA")
        composed = Image.alpha_composite(base, layer)
        if self.mode != "RGBA":
            composed = composed.convert(self.mode)
        self._image = composed
        self._pixels = None

    # ------------------------------------------------------------------
    # Interop and lifetime
    # ------------------------------------------------------------------

    def to_image(self) -> Image.Image:
        """Return a Pillow copy of this buffer."""
        self._access()
        return self._image.copy()

    def to_array(self) -> np.ndarray:
        """Return the pixels as a uint8 array of shape (H, W) or (H, W, C)."""
        self._access()
        return np.array(self._image)

    def close(self) -> None:
        """Release the pixel store. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._pixels = None
        self._image.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = " closed" if self._closed else ""
        return f"<Raster {self.width}x{self.height} {self.mode}{state}>"
