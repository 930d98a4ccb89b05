"""Unit tests for geometry primitives.

Tests Size, Rectangle and Color Pydantic models including:
- Construction and validation
- Sentinel handling in Rectangle
- Computed properties (area, right, bottom)
- Tuple / hex conversion
- Transparency versus equality in Color
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rasterkit.geometry import Color, Rectangle, Size


class TestSize:
    """Tests for the Size model."""

    def test_size_creation_valid(self) -> None:
        size = Size(width=500, height=300)
        assert size.width == 500
        assert size.height == 300

    def test_size_rejects_zero_width(self) -> None:
        with pytest.raises(ValidationError, match="greater than 0"):
            Size(width=0, height=100)

    def test_size_rejects_negative_height(self) -> None:
        with pytest.raises(ValidationError, match="greater than 0"):
            Size(width=100, height=-1)

    def test_size_area(self) -> None:
        assert Size(width=100, height=200).area == 20000

    def test_size_tuple_round_trip(self) -> None:
        assert Size.from_tuple((7, 3)).to_tuple() == (7, 3)


class TestRectangle:
    """Tests for the Rectangle model."""

    def test_rectangle_defaults_are_sentinels(self) -> None:
        """Test a bare Rectangle means "everything"."""
        rect = Rectangle()
        assert rect.to_tuple() == (0, 0, 0, 0)
        assert rect.is_unspecified_width
        assert rect.is_unspecified_height

    def test_rectangle_accepts_negative_values(self) -> None:
        """Test negative fields are legal sentinels, not validation errors."""
        rect = Rectangle(x=-5, y=-1, width=-10, height=0)
        assert rect.x == -5
        assert rect.is_unspecified_width
        assert rect.is_unspecified_height

    def test_rectangle_edges(self) -> None:
        rect = Rectangle(x=10, y=20, width=30, height=40)
        assert rect.right == 40
        assert rect.bottom == 60
        assert rect.to_box() == (10, 20, 40, 60)

    def test_rectangle_area_of_degenerate_is_zero(self) -> None:
        assert Rectangle(x=0, y=0, width=-3, height=5).area == 0

    def test_rectangle_from_tuple(self) -> None:
        rect = Rectangle.from_tuple((1, 2, 3, 4))
        assert rect == Rectangle(x=1, y=2, width=3, height=4)

    def test_rectangle_from_edges_is_inclusive(self) -> None:
        """Test a single pixel's edges produce a 1x1 rectangle."""
        rect = Rectangle.from_edges(left=3, top=5, right=3, bottom=5)
        assert rect.to_tuple() == (3, 5, 1, 1)

    def test_rectangle_from_edges_span(self) -> None:
        rect = Rectangle.from_edges(left=1, top=2, right=4, bottom=6)
        assert rect.to_tuple() == (1, 2, 4, 5)

    def test_rectangle_is_frozen(self) -> None:
        rect = Rectangle(x=1, y=1, width=1, height=1)
        with pytest.raises(ValidationError):
            rect.x = 2  # type: ignore[misc]

    def test_rectangle_hashable(self) -> None:
        rects = {Rectangle(x=1, y=1, width=2, height=2), Rectangle(x=1, y=1, width=2, height=2)}
        assert len(rects) == 1


class TestColor:
    """Tests for the Color model."""

    def test_color_alpha_defaults_to_opaque(self) -> None:
        assert Color(r=1, g=2, b=3).a == 255

    @pytest.mark.parametrize("channel", ["r", "g", "b", "a"])
    def test_color_rejects_out_of_range(self, channel: str) -> None:
        values = {"r": 0, "g": 0, "b": 0, "a": 0, channel: 256}
        with pytest.raises(ValidationError):
            Color(**values)

    def test_named_colors(self) -> None:
        assert Color.white().to_tuple() == (255, 255, 255, 255)
        assert Color.black().to_tuple() == (0, 0, 0, 255)
        assert Color.transparent().to_tuple() == (0, 0, 0, 0)

    def test_transparency_is_alpha_zero_regardless_of_rgb(self) -> None:
        """Test a transparent pixel with stored RGB is still transparent."""
        assert Color(r=200, g=10, b=10, a=0).is_transparent
        assert not Color(r=0, g=0, b=0, a=1).is_transparent

    def test_equality_is_exact(self) -> None:
        """Test transparent colors with different RGB are not equal."""
        assert Color(r=1, g=2, b=3, a=0) != Color.transparent()
        assert Color(r=255, g=255, b=255) == Color.white()

    def test_from_tuple_rgb_and_rgba(self) -> None:
        assert Color.from_tuple((1, 2, 3)) == Color(r=1, g=2, b=3, a=255)
        assert Color.from_tuple((1, 2, 3, 4)) == Color(r=1, g=2, b=3, a=4)

    def test_from_tuple_rejects_wrong_length(self) -> None:
        with pytest.raises(ValueError, match="3 or 4 components"):
            Color.from_tuple((1, 2))

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("#FF0000", (255, 0, 0, 255)),
            ("00ff0080", (0, 255, 0, 128)),
            ("  #0000FF  ", (0, 0, 255, 255)),
        ],
    )
    def test_from_hex(self, text: str, expected: tuple[int, int, int, int]) -> None:
        assert Color.from_hex(text).to_tuple() == expected

    @pytest.mark.parametrize("text", ["", "#FFF", "#GGGGGG", "#1234567"])
    def test_from_hex_rejects_malformed(self, text: str) -> None:
        with pytest.raises(ValueError, match="Not a hex color"):
            Color.from_hex(text)

    def test_to_hex(self) -> None:
        assert Color(r=1, g=171, b=255, a=16).to_hex() == "#01ABFF10"
