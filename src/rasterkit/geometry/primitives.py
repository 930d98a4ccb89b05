"""Geometry primitives for rasterkit.

This module provides immutable Pydantic models for the value types every
transformation works with: rectangles, sizes and RGBA colors. All
coordinates follow the raster convention where (0, 0) is the top-left
pixel, x grows rightward and y grows downward.
"""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, Field

_HEX_COLOR = re.compile(r"^#?(?P<rgb>[0-9a-fA-F]{6})(?P<alpha>[0-9a-fA-F]{2})?$")


class Size(BaseModel, frozen=True):
    """A 2D size representing width and height.

    Both dimensions must be strictly positive (> 0). Used to describe the
    extent of an existing buffer.

    Attributes:
        width: Horizontal extent in pixels.
        height: Vertical extent in pixels.
    """

    width: int = Field(..., gt=0, description="Width in pixels")
    height: int = Field(..., gt=0, description="Height in pixels")

    @property
    def area(self) -> int:
        """Calculate the area in square pixels."""
        return self.width * self.height

    def to_tuple(self) -> tuple[int, int]:
        """Convert to (width, height) tuple."""
        return (self.width, self.height)

    @classmethod
    def from_tuple(cls, size: tuple[int, int]) -> Self:
        """Create Size from (width, height) tuple."""
        return cls(width=size[0], height=size[1])


class Rectangle(BaseModel, frozen=True):
    """An axis-aligned rectangle in pixel coordinates.

    Represents a box defined by its top-left corner (x, y) and dimensions
    (width, height):

    - Top-left: (x, y)
    - Bottom-right: (x + width, y + height) [exclusive]

    Unlike Size, no field is range-checked. Crop requests use negative
    origins and non-positive dimensions as sentinels meaning "unspecified,
    use the full extent", so the validator that consumes the rectangle
    decides what a value means.

    Attributes:
        x: Left edge X coordinate.
        y: Top edge Y coordinate.
        width: Horizontal extent in pixels (<= 0 means unspecified).
        height: Vertical extent in pixels (<= 0 means unspecified).
    """

    x: int = Field(default=0, description="Left edge X coordinate")
    y: int = Field(default=0, description="Top edge Y coordinate")
    width: int = Field(default=0, description="Width in pixels")
    height: int = Field(default=0, description="Height in pixels")

    @property
    def right(self) -> int:
        """Return the X coordinate of the right edge (exclusive)."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Return the Y coordinate of the bottom edge (exclusive)."""
        return self.y + self.height

    @property
    def area(self) -> int:
        """Calculate the area in square pixels (0 for degenerate rectangles)."""
        return max(self.width, 0) * max(self.height, 0)

    @property
    def is_unspecified_width(self) -> bool:
        """True when width is a sentinel for "use the full extent"."""
        return self.width <= 0

    @property
    def is_unspecified_height(self) -> bool:
        """True when height is a sentinel for "use the full extent"."""
        return self.height <= 0

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Convert to (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)

    def to_box(self) -> tuple[int, int, int, int]:
        """Convert to a (left, top, right, bottom) box as used by Pillow."""
        return (self.x, self.y, self.right, self.bottom)

    @classmethod
    def from_tuple(cls, bbox: tuple[int, int, int, int]) -> Self:
        """Create Rectangle from (x, y, width, height) tuple."""
        return cls(x=bbox[0], y=bbox[1], width=bbox[2], height=bbox[3])

    @classmethod
    def from_edges(cls, left: int, top: int, right: int, bottom: int) -> Self:
        """Create a Rectangle spanning inclusive edge indices.

        Args:
            left: Index of the leftmost column inside the rectangle.
            top: Index of the topmost row inside the rectangle.
            right: Index of the rightmost column inside the rectangle.
            bottom: Index of the bottommost row inside the rectangle.

        Returns:
            Rectangle whose width is right - left + 1 and height is
            bottom - top + 1.
        """
        return cls(x=left, y=top, width=right - left + 1, height=bottom - top + 1)


class Color(BaseModel, frozen=True):
    """An 8-bit RGBA color.

    Equality is exact component equality. Transparency is a separate
    question answered by `is_transparent`: a color with alpha 0 is fully
    transparent whatever its stored RGB values are.

    Attributes:
        r: Red channel (0-255).
        g: Green channel (0-255).
        b: Blue channel (0-255).
        a: Alpha channel (0-255), 255 is opaque.
    """

    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)
    a: int = Field(default=255, ge=0, le=255)

    @property
    def is_transparent(self) -> bool:
        """True when the alpha channel is zero."""
        return self.a == 0

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Convert to (r, g, b, a) tuple."""
        return (self.r, self.g, self.b, self.a)

    def to_hex(self) -> str:
        """Format as #RRGGBBAA."""
        return "#{:02X}{:02X}{:02X}{:02X}".format(*self.to_tuple())

    @classmethod
    def from_tuple(cls, rgba: tuple[int, ...]) -> Self:
        """Create Color from an (r, g, b) or (r, g, b, a) tuple."""
        if len(rgba) == 3:
            return cls(r=rgba[0], g=rgba[1], b=rgba[2])
        if len(rgba) == 4:
            return cls(r=rgba[0], g=rgba[1], b=rgba[2], a=rgba[3])
        raise ValueError(f"Color tuple must have 3 or 4 components, got {len(rgba)}")

    @classmethod
    def from_hex(cls, value: str) -> Self:
        """Create Color from "#RRGGBB" or "#RRGGBBAA" (leading # optional).

        Raises:
            ValueError: If the string is not a hex color.
        """
        match = _HEX_COLOR.match(value.strip())
        if match is None:
            raise ValueError(f"Not a hex color: {value!r}")
        rgb = match.group("rgb")
        alpha = match.group("alpha") or "FF"
        return cls(
            r=int(rgb[0:2], 16),
            g=int(rgb[2:4], 16),
            b=int(rgb[4:6], 16),
            a=int(alpha, 16),
        )

    @classmethod
    def white(cls) -> Self:
        """Opaque white, the default trim background."""
        return cls(r=255, g=255, b=255, a=255)

    @classmethod
    def black(cls) -> Self:
        """Opaque black."""
        return cls(r=0, g=0, b=0, a=255)

    @classmethod
    def transparent(cls) -> Self:
        """Fully transparent black, the fill of a freshly allocated buffer."""
        return cls(r=0, g=0, b=0, a=0)
