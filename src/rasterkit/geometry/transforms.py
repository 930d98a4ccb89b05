"""Affine transforms and canvas-size math for rasterkit.

Drawing in rasterkit follows the canvas model: a destination buffer
carries a current transform matrix, and every `translate`, `scale` or
`rotate` call pre-concatenates onto it, so the call made last is the
first one applied to a source point. `Affine` is that matrix.

Coordinate Systems:
    - Raster frame: origin at the top-left pixel corner, x rightward,
      y downward. Positive angles therefore rotate clockwise on screen.
    - Pillow's `Image.transform` wants the inverse mapping (destination
      to source), which `Affine.to_pillow` provides.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# sin/cos results this close to zero are snapped, so quarter turns are exact
_TRIG_EPSILON = 1e-12


def _snap(value: float) -> float:
    return 0.0 if abs(value) < _TRIG_EPSILON else value


@dataclass(frozen=True)
class Affine:
    """A 2x3 affine matrix mapping (x, y) to (a*x + b*y + c, d*x + e*y + f).

    Attributes:
        a: X scale / rotation component.
        b: X shear / rotation component.
        c: X translation.
        d: Y shear / rotation component.
        e: Y scale / rotation component.
        f: Y translation.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0
    e: float = 1.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> Affine:
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> Affine:
        return cls(c=tx, f=ty)

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> Affine:
        return cls(a=sx, e=sx if sy is None else sy)

    @classmethod
    def rotation(cls, degrees: float) -> Affine:
        """Rotation about the origin, clockwise-positive in the raster frame."""
        radians = math.radians(degrees)
        cos = _snap(math.cos(radians))
        sin = _snap(math.sin(radians))
        return cls(a=cos, b=-sin, d=sin, e=cos)

    def __matmul__(self, other: Affine) -> Affine:
        """Compose so that `other` is applied first, then `self`."""
        return Affine(
            a=self.a * other.a + self.b * other.d,
            b=self.a * other.b + self.b * other.e,
            c=self.a * other.c + self.b * other.f + self.c,
            d=self.d * other.a + self.e * other.d,
            e=self.d * other.b + self.e * other.e,
            f=self.d * other.c + self.e * other.f + self.f,
        )

    def translate(self, tx: float, ty: float) -> Affine:
        """Pre-concatenate a translation (canvas semantics)."""
        return self @ Affine.translation(tx, ty)

    def scale(self, sx: float, sy: float | None = None) -> Affine:
        """Pre-concatenate a scale (canvas semantics)."""
        return self @ Affine.scaling(sx, sy)

    def rotate(self, degrees: float) -> Affine:
        """Pre-concatenate a rotation (canvas semantics)."""
        return self @ Affine.rotation(degrees)

    @property
    def determinant(self) -> float:
        return self.a * self.e - self.b * self.d

    def inverse(self) -> Affine:
        """Return the inverse matrix.

        Raises:
            ValueError: If the matrix is singular (e.g., a zero scale).
        """
        det = self.determinant
        if det == 0:
            raise ValueError(f"Affine matrix is not invertible: {self}")
        a = self.e / det
        b = -self.b / det
        d = -self.d / det
        e = self.a / det
        return Affine(
            a=a,
            b=b,
            c=-(a * self.c + b * self.f),
            d=d,
            e=e,
            f=-(d * self.c + e * self.f),
        )

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Map a point through the matrix."""
        return (self.a * x + self.b * y + self.c, self.d * x + self.e * y + self.f)

    @property
    def is_integer_translation(self) -> bool:
        """True when the matrix only shifts by whole pixels."""
        return (
            self.a == 1.0
            and self.b == 0.0
            and self.d == 0.0
            and self.e == 1.0
            and float(self.c).is_integer()
            and float(self.f).is_integer()
        )

    def to_pillow(self) -> tuple[float, float, float, float, float, float]:
        """Coefficients for `Image.transform(..., Image.Transform.AFFINE)`.

        Pillow maps destination pixels back to the source, so this is the
        inverse matrix flattened row by row.
        """
        inv = self.inverse()
        return (inv.a, inv.b, inv.c, inv.d, inv.e, inv.f)


def scaled_extent(width: int, height: int, scale: float) -> tuple[int, int]:
    """Dimensions of a buffer scaled by `scale`, truncated toward zero.

    Args:
        width: Source width in pixels.
        height: Source height in pixels.
        scale: Uniform scale factor.

    Returns:
        (int(width * scale), int(height * scale)). Non-positive results are
        returned as-is; allocating them fails.
    """
    return (int(width * scale), int(height * scale))


def rotated_bounds(width: int, height: int, angle: float) -> tuple[int, int]:
    """Axis-aligned canvas size that holds a rotated rectangle without clipping.

    Args:
        width: Source width in pixels.
        height: Source height in pixels.
        angle: Rotation in degrees.

    Returns:
        (round(|cos|*W + |sin|*H), round(|cos|*H + |sin|*W)).
    """
    radians = math.radians(angle)
    sine = abs(math.sin(radians))
    cosine = abs(math.cos(radians))
    return (
        round(cosine * width + sine * height),
        round(cosine * height + sine * width),
    )


def border_extent(width: int, height: int, size: int) -> tuple[int, int]:
    """Dimensions of a buffer padded by `size` pixels on every side."""
    return (width + 2 * size, height + 2 * size)


def border_ratio(width: int, height: int, size: int) -> float:
    """Scale factor used by legacy border rendering.

    The smaller of the padded-to-original ratios on the two axes.
    """
    padded_width, padded_height = border_extent(width, height, size)
    return min(padded_width / width, padded_height / height)
