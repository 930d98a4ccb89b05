"""Crop-area validation for rasterkit.

This module clamps requested crop rectangles to the extent of a buffer.
Clamping never fails: a request that cannot be satisfied comes out of
`clamp_crop_area` with a non-positive width or height, and it is the
allocation of the destination buffer that reports the problem.
"""

from __future__ import annotations

from rasterkit.geometry.primitives import Rectangle, Size


class CropValidator:
    """Validator for crop requests against buffer bounds.

    The validator is stateless and operates purely on the inputs provided
    to each method.
    """

    def clamp_crop_area(self, region: Rectangle, bounds: Size) -> Rectangle:
        """Clamp a requested crop rectangle to the buffer bounds.

        The clamping rules are:

        1. A negative origin is moved to 0 on that axis.
        2. A non-positive width or height means "unspecified" and is
           replaced by the full buffer width or height.
        3. If the rectangle then extends past the right (bottom) edge, its
           width (height) is cut back to end exactly at that edge.

        An origin at or beyond the buffer edge is left where it is, so the
        resulting width or height is zero or negative.

        Args:
            region: The requested rectangle.
            bounds: Dimensions of the buffer being cropped.

        Returns:
            A new Rectangle clamped to the bounds.

        Example:
            >>> validator = CropValidator()
            >>> bounds = Size(width=100, height=80)
            >>> validator.clamp_crop_area(
            ...     Rectangle(x=90, y=-5, width=50, height=0), bounds
            ... ).to_tuple()
            (90, 0, 10, 80)
        """
        x = max(region.x, 0)
        y = max(region.y, 0)
        width = bounds.width if region.is_unspecified_width else region.width
        height = bounds.height if region.is_unspecified_height else region.height

        if x + width > bounds.width:
            width = bounds.width - x
        if y + height > bounds.height:
            height = bounds.height - y

        return Rectangle(x=x, y=y, width=width, height=height)
