"""Custom exceptions for raster operations.

These exceptions provide context-rich error handling for buffer
allocation and transformation failures, replacing low-level Pillow and
memory errors with meaningful messages.
"""

from __future__ import annotations

from rasterkit.geometry.primitives import Rectangle


class RasterError(Exception):
    """Base exception for all raster-related errors."""

    def __init__(
        self,
        message: str,
        *,
        size: tuple[int, int] | None = None,
        mode: str | None = None,
    ) -> None:
        """Initialize raster error with optional buffer context.

        Args:
            message: Human-readable error description.
            size: (width, height) of the buffer involved.
            mode: Pixel mode of the buffer involved.
        """
        self.message = message
        self.size = size
        self.mode = mode
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with buffer context if available."""
        parts = [self.message]
        if self.size is not None:
            parts.append(f"size={self.size}")
        if self.mode is not None:
            parts.append(f"mode={self.mode}")

        if len(parts) == 1:
            return parts[0]
        return f"{parts[0]} ({', '.join(parts[1:])})"


class AllocationFailure(RasterError):
    """Raised when a buffer cannot be created.

    This error is raised when:
    - A requested width or height is zero or negative
    - The pixel count exceeds the configured MAX_PIXELS guard
    - Pillow runs out of memory or rejects the dimensions
    """

    pass


class UnsupportedModeError(RasterError):
    """Raised when a pixel mode cannot be represented as RGBA colors."""

    pass


class CropOutOfRange(RasterError):
    """Raised when a clamped crop rectangle cannot be materialized.

    Attributes:
        requested: The rectangle passed by the caller.
        clamped: The rectangle after clamping to the buffer bounds.
    """

    MESSAGE = "crop rectangle is larger than the input image"

    def __init__(
        self,
        *,
        requested: Rectangle,
        clamped: Rectangle,
        size: tuple[int, int] | None = None,
    ) -> None:
        self.requested = requested
        self.clamped = clamped
        super().__init__(self.MESSAGE, size=size)

    def _format_message(self) -> str:
        parts = [
            f"requested={self.requested.to_tuple()}",
            f"clamped={self.clamped.to_tuple()}",
        ]
        if self.size is not None:
            parts.append(f"size={self.size}")
        return f"{self.message} ({', '.join(parts)})"


class SkewEstimatorMissingError(RasterError):
    """Raised when rotation needs an estimated angle but no estimator was given."""

    def __init__(self) -> None:
        super().__init__(
            "No rotation angle given and no skew estimator configured. "
            "Pass angle= or construct the transformer with an estimator."
        )


class NoContentError(RasterError):
    """Raised when a buffer has no foreground pixels to trim around.

    Internal to trimming: the public trim operation recovers from it by
    returning a copy of its input.
    """

    pass
