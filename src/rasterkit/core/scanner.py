"""Bounding-box scanning for content detection.

Each edge finder walks the buffer one line at a time in a fixed
direction and stops at the first line holding a foreground pixel, so the
answer is always the first match in scan order:

    find_left    columns left -> right, rows top -> bottom inside each
    find_right   columns right -> left, rows top -> bottom inside each
    find_top     rows top -> bottom, columns left -> right inside each
    find_bottom  rows bottom -> top, columns left -> right inside each

Foreground Predicates:
    is_foreground (default): a pixel is foreground when it is not fully
    transparent and differs from the background in any channel. Fully
    transparent pixels are background whatever RGB they store.

    differs_from_background (legacy right edge): plain inequality. A fully
    transparent pixel with non-background RGB counts as foreground. Older
    releases applied this to the right edge only, so a buffer with such
    pixels trimmed differently on its right side than on the other three.
    It is kept for callers that need those results reproduced exactly.
"""

from __future__ import annotations

from collections.abc import Callable

from rasterkit.geometry import Color, Rectangle
from rasterkit.raster.exceptions import NoContentError
from rasterkit.raster.types import RasterBufferProtocol
from rasterkit.utils.logging import get_logger

logger = get_logger(__name__)

ForegroundPredicate = Callable[[Color, Color], bool]

WHITE = Color.white()


def is_foreground(pixel: Color, background: Color) -> bool:
    """Transparency-aware foreground test."""
    return not pixel.is_transparent and pixel != background


def differs_from_background(pixel: Color, background: Color) -> bool:
    """Exact-inequality foreground test (legacy right-edge behavior)."""
    return pixel != background


def _column_has_content(
    raster: RasterBufferProtocol,
    x: int,
    background: Color,
    predicate: ForegroundPredicate,
) -> bool:
    for y in range(raster.height):
        if predicate(raster.get_pixel(x, y), background):
            return True
    return False


def _row_has_content(
    raster: RasterBufferProtocol,
    y: int,
    background: Color,
    predicate: ForegroundPredicate,
) -> bool:
    for x in range(raster.width):
        if predicate(raster.get_pixel(x, y), background):
            return True
    return False


def find_left(
    raster: RasterBufferProtocol,
    background: Color = WHITE,
    predicate: ForegroundPredicate = is_foreground,
) -> int | None:
    """Index of the leftmost column with content, or None if there is none."""
    for x in range(raster.width):
        if _column_has_content(raster, x, background, predicate):
            return x
    return None


def find_right(
    raster: RasterBufferProtocol,
    background: Color = WHITE,
    predicate: ForegroundPredicate = is_foreground,
) -> int | None:
    """Index of the rightmost column with content, or None if there is none."""
    for x in range(raster.width - 1, -1, -1):
        if _column_has_content(raster, x, background, predicate):
            return x
    return None


def find_top(
    raster: RasterBufferProtocol,
    background: Color = WHITE,
    predicate: ForegroundPredicate = is_foreground,
) -> int | None:
    """Index of the topmost row with content, or None if there is none."""
    for y in range(raster.height):
        if _row_has_content(raster, y, background, predicate):
            return y
    return None


def find_bottom(
    raster: RasterBufferProtocol,
    background: Color = WHITE,
    predicate: ForegroundPredicate = is_foreground,
) -> int | None:
    """Index of the bottommost row with content, or None if there is none."""
    for y in range(raster.height - 1, -1, -1):
        if _row_has_content(raster, y, background, predicate):
            return y
    return None


def find_content_bounds(
    raster: RasterBufferProtocol,
    background: Color = WHITE,
    *,
    legacy_right_edge: bool = False,
) -> Rectangle:
    """Tightest rectangle enclosing every foreground pixel.

    Args:
        raster: Buffer to scan.
        background: Reference background color.
        legacy_right_edge: Use exact inequality instead of the
            transparency-aware predicate for the right edge scan.

    Returns:
        Rectangle built from the four inclusive edge indices.

    Raises:
        NoContentError: If an edge finds no content, or the edges found
            do not enclose a positive area (possible only with the legacy
            right-edge predicate).
    """
    right_predicate = differs_from_background if legacy_right_edge else is_foreground

    left = find_left(raster, background)
    right = find_right(raster, background, right_predicate)
    top = find_top(raster, background)
    bottom = find_bottom(raster, background)

    logger.debug(
        "Scanned content edges",
        left=left,
        right=right,
        top=top,
        bottom=bottom,
        legacy_right_edge=legacy_right_edge,
    )

    if left is None or right is None or top is None or bottom is None:
        raise NoContentError(
            "No foreground pixels found",
            size=(raster.width, raster.height),
            mode=raster.mode,
        )
    if right < left or bottom < top:
        raise NoContentError(
            f"Content edges do not enclose an area "
            f"(left={left}, right={right}, top={top}, bottom={bottom})",
            size=(raster.width, raster.height),
            mode=raster.mode,
        )

    return Rectangle.from_edges(left, top, right, bottom)
