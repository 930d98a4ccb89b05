"""Unit tests for the Pillow-backed Raster buffer.

Tests Raster including:
- Allocation and its failure modes
- Pixel access across modes
- Verbatim region copies
- Source-over drawing through affine matrices
- Interop (Pillow, numpy) and lifetime
"""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from rasterkit.config import settings
from rasterkit.geometry import Affine, Color, Rectangle
from rasterkit.raster import (
    AllocationFailure,
    Raster,
    RasterError,
    UnsupportedModeError,
)
from rasterkit.raster.buffer import resample_filter

RED = Color(r=255, g=0, b=0)
BLUE = Color(r=0, g=0, b=255)


class TestRasterNew:
    """Tests for Raster.new allocation."""

    def test_new_defaults_to_transparent_rgba(self) -> None:
        raster = Raster.new(3, 2)
        assert raster.size == (3, 2)
        assert raster.mode == "RGBA"
        assert raster.get_pixel(2, 1) == Color.transparent()

    def test_new_with_fill(self) -> None:
        raster = Raster.new(2, 2, fill=RED)
        assert all(raster.get_pixel(x, y) == RED for x in range(2) for y in range(2))

    @pytest.mark.parametrize(("width", "height"), [(0, 5), (5, 0), (-1, 5), (5, -3)])
    def test_new_rejects_non_positive_dimensions(self, width: int, height: int) -> None:
        with pytest.raises(AllocationFailure, match="must be positive") as exc_info:
            Raster.new(width, height)
        assert exc_info.value.size == (width, height)

    def test_new_respects_pixel_limit(self) -> None:
        with pytest.raises(AllocationFailure, match="pixel limit"):
            Raster.new(10, 10, max_pixels=99)

    def test_new_default_limit_comes_from_settings(self) -> None:
        side = int(settings.MAX_PIXELS**0.5) + 1
        with pytest.raises(AllocationFailure):
            Raster.new(side, side)

    def test_new_rejects_unsupported_mode(self) -> None:
        with pytest.raises(UnsupportedModeError):
            Raster.new(2, 2, "CMYK")

    def test_allocation_failure_is_a_raster_error(self) -> None:
        with pytest.raises(RasterError):
            Raster.new(0, 0)


class TestRasterPixels:
    """Tests for get_pixel / set_pixel."""

    def test_set_then_get(self) -> None:
        raster = Raster.new(4, 4)
        raster.set_pixel(3, 0, BLUE)
        assert raster.get_pixel(3, 0) == BLUE

    @pytest.mark.parametrize(("x", "y"), [(-1, 0), (0, -1), (4, 0), (0, 4)])
    def test_out_of_range_raises_index_error(self, x: int, y: int) -> None:
        raster = Raster.new(4, 4)
        with pytest.raises(IndexError, match="outside buffer"):
            raster.get_pixel(x, y)
        with pytest.raises(IndexError):
            raster.set_pixel(x, y, RED)

    def test_rgb_pixels_report_opaque(self) -> None:
        raster = Raster.new(1, 1, "RGB", fill=RED)
        assert raster.get_pixel(0, 0) == RED

    def test_grayscale_pixels_report_equal_channels(self) -> None:
        raster = Raster.new(1, 1, "L", fill=Color.white())
        assert raster.get_pixel(0, 0) == Color.white()

    def test_la_pixels_keep_alpha(self) -> None:
        raster = Raster.new(1, 1, "LA", fill=Color(r=0, g=0, b=0, a=7))
        assert raster.get_pixel(0, 0) == Color(r=0, g=0, b=0, a=7)


class TestRasterCopying:
    """Tests for clone and copy_region."""

    def test_clone_is_independent(self, gradient_raster: Raster) -> None:
        copy = gradient_raster.clone()
        copy.set_pixel(0, 0, RED)
        assert gradient_raster.get_pixel(0, 0) != RED
        assert copy.size == gradient_raster.size

    def test_copy_region_is_verbatim(self, gradient_raster: Raster) -> None:
        destination = Raster.new(2, 2)
        destination.copy_region(gradient_raster, Rectangle(x=3, y=1, width=2, height=2))
        assert destination.get_pixel(0, 0) == gradient_raster.get_pixel(3, 1)
        assert destination.get_pixel(1, 1) == gradient_raster.get_pixel(4, 2)

    def test_copy_region_replaces_instead_of_blending(self) -> None:
        source = Raster.new(1, 1, fill=Color(r=10, g=20, b=30, a=0))
        destination = Raster.new(1, 1, fill=RED)
        destination.copy_region(source, Rectangle(x=0, y=0, width=1, height=1))
        assert destination.get_pixel(0, 0) == Color(r=10, g=20, b=30, a=0)

    def test_copy_region_ignores_part_outside_source(self) -> None:
        source = Raster.new(2, 2, fill=BLUE)
        destination = Raster.new(4, 4, fill=RED)
        destination.copy_region(source, Rectangle(x=0, y=0, width=4, height=4))
        assert destination.get_pixel(1, 1) == BLUE
        assert destination.get_pixel(3, 3) == RED

    def test_copy_region_converts_mode(self) -> None:
        source = Raster.new(1, 1, "RGBA", fill=RED)
        destination = Raster.new(1, 1, "RGB")
        destination.copy_region(source, Rectangle(x=0, y=0, width=1, height=1))
        assert destination.mode == "RGB"
        assert destination.get_pixel(0, 0) == RED


class TestRasterDraw:
    """Tests for source-over drawing."""

    def test_integer_translation_is_exact(self, gradient_raster: Raster) -> None:
        destination = Raster.new(8, 6)
        destination.draw(gradient_raster, Affine.translation(2, 1))
        assert destination.get_pixel(2, 1) == gradient_raster.get_pixel(0, 0)
        assert destination.get_pixel(7, 4) == gradient_raster.get_pixel(5, 3)
        assert destination.get_pixel(0, 0) == Color.transparent()

    def test_draw_blends_source_over(self) -> None:
        """Test transparent source pixels leave the destination visible."""
        source = Raster.new(2, 1, fill=Color.transparent())
        source.set_pixel(1, 0, BLUE)
        destination = Raster.new(2, 1, fill=RED)
        destination.draw(source, Affine.identity())
        assert destination.get_pixel(0, 0) == RED
        assert destination.get_pixel(1, 0) == BLUE

    def test_draw_scaled_uniform_color_stays_uniform(self) -> None:
        source = Raster.new(8, 8, fill=BLUE)
        destination = Raster.new(4, 4)
        destination.draw(source, Affine.scaling(0.5), "bilinear")
        assert destination.get_pixel(0, 0) == BLUE
        assert destination.get_pixel(3, 3) == BLUE

    def test_draw_quarter_turn_nearest(self) -> None:
        source = Raster.new(2, 2, fill=Color.white())
        source.set_pixel(0, 0, RED)
        destination = Raster.new(2, 2)
        matrix = Affine.identity().translate(1, 1).rotate(90).translate(-1, -1)
        destination.draw(source, matrix, "nearest")
        # Clockwise: top-left moves to top-right
        assert destination.get_pixel(1, 0) == RED
        assert destination.get_pixel(0, 0) == Color.white()

    def test_draw_keeps_destination_mode(self) -> None:
        destination = Raster.new(2, 2, "RGB")
        destination.draw(Raster.new(2, 2, fill=RED), Affine.identity())
        assert destination.mode == "RGB"
        assert destination.get_pixel(1, 1) == RED

    def test_draw_rejects_unknown_filter(self) -> None:
        destination = Raster.new(2, 2)
        with pytest.raises(ValueError, match="Unknown resample filter"):
            destination.draw(Raster.new(2, 2), Affine.scaling(0.5), "box")  # type: ignore[arg-type]

    def test_resample_filter_mapping(self) -> None:
        assert resample_filter("nearest") == Image.Resampling.NEAREST
        assert resample_filter("bicubic") == Image.Resampling.BICUBIC


class TestRasterInterop:
    """Tests for Pillow/numpy interop and lifetime."""

    def test_from_image_copies(self) -> None:
        image = Image.new("RGB", (3, 2), (1, 2, 3))
        raster = Raster.from_image(image)
        image.putpixel((0, 0), (9, 9, 9))
        assert raster.get_pixel(0, 0) == Color(r=1, g=2, b=3)

    def test_from_image_converts_palette_to_rgba(self) -> None:
        raster = Raster.from_image(Image.new("P", (2, 2)))
        assert raster.mode == "RGBA"

    def test_wrapping_unsupported_mode_raises(self) -> None:
        with pytest.raises(UnsupportedModeError, match="mode=P"):
            Raster(Image.new("P", (2, 2)))

    def test_array_round_trip(self, gradient_raster: Raster) -> None:
        array = gradient_raster.to_array()
        assert array.shape == (4, 6, 4)
        again = Raster.from_array(array)
        assert np.array_equal(again.to_array(), array)

    def test_from_array_grayscale(self) -> None:
        raster = Raster.from_array(np.full((2, 3), 128, dtype=np.uint8))
        assert raster.mode == "L"
        assert raster.size == (3, 2)

    def test_from_array_rejects_bad_shape(self) -> None:
        with pytest.raises(UnsupportedModeError):
            Raster.from_array(np.zeros((2, 2, 5), dtype=np.uint8))

    def test_close_is_idempotent_and_blocks_access(self) -> None:
        raster = Raster.new(2, 2)
        raster.close()
        raster.close()
        assert raster.closed
        with pytest.raises(RasterError, match="closed"):
            raster.get_pixel(0, 0)

    def test_context_manager_closes(self) -> None:
        with Raster.new(2, 2) as raster:
            assert not raster.closed
        assert raster.closed

    def test_repr(self) -> None:
        assert repr(Raster.new(3, 2, "RGB")) == "<Raster 3x2 RGB>"
