"""Shared pytest fixtures and configuration."""

from collections.abc import Callable, Iterator

import pytest

from rasterkit.config import Settings
from rasterkit.geometry import Color
from rasterkit.raster import Raster
from rasterkit.utils.logging import clear_correlation_context, configure_logging

RasterFactory = Callable[..., Raster]


@pytest.fixture(autouse=True)
def reset_logging_context() -> Iterator[None]:
    """Reset correlation context between tests."""
    clear_correlation_context()
    yield
    clear_correlation_context()


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
        RESAMPLE_FILTER="nearest",
    )


@pytest.fixture
def configure_test_logging() -> Iterator[None]:
    """Configure logging for tests with console output."""
    configure_logging(level="DEBUG", log_format="console")
    yield


@pytest.fixture
def make_raster() -> RasterFactory:
    """Factory for solid rasters with optional individually colored pixels.

    Usage:
        make_raster(4, 4, pixels={(1, 1): Color.black()})
    """

    def _make(
        width: int,
        height: int,
        *,
        mode: str = "RGBA",
        fill: Color | None = None,
        pixels: dict[tuple[int, int], Color] | None = None,
    ) -> Raster:
        raster = Raster.new(width, height, mode, fill=fill or Color.white())
        for (x, y), color in (pixels or {}).items():
            raster.set_pixel(x, y, color)
        return raster

    return _make


@pytest.fixture
def gradient_raster() -> Raster:
    """A 6x4 RGBA raster where every pixel has a distinct opaque color."""
    raster = Raster.new(6, 4)
    for y in range(4):
        for x in range(6):
            raster.set_pixel(x, y, Color(r=x * 40, g=y * 60, b=(x + y) * 10))
    return raster
