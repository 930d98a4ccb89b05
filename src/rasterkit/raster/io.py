"""File helpers for loading and saving rasters.

Decoding and encoding are Pillow's business; these helpers only translate
its errors into RasterError so the command line can report them.
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from rasterkit.raster.buffer import Raster
from rasterkit.raster.exceptions import RasterError


def load_raster(path: str | Path) -> Raster:
    """Open an image file and wrap it as a Raster.

    Args:
        path: Path to any image Pillow can decode.

    Returns:
        Raster holding the decoded pixels. Palette, bilevel and other
        modes are converted to RGBA.

    Raises:
        FileNotFoundError: If the path does not exist or is not a file.
        RasterError: If the file is not a decodable image.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Image not found: {path}")

    try:
        with Image.open(path) as image:
            image.load()
            return Raster.from_image(image)
    except (UnidentifiedImageError, OSError) as exc:
        raise RasterError(f"Cannot decode image {path}: {exc}") from exc


def save_raster(raster: Raster, path: str | Path) -> Path:
    """Encode a Raster to a file; the format follows the file extension.

    RGBA and LA buffers saved to formats without alpha (e.g., JPEG) are
    flattened to RGB or L first.

    Raises:
        RasterError: If Pillow cannot encode to the requested format.
    """
    path = Path(path)
    image = raster.to_image()
    try:
        format_name = Image.registered_extensions().get(path.suffix.lower())
        if format_name == "JPEG" and image.mode in ("RGBA", "LA"):
            image = image.convert("RGB" if image.mode == "RGBA" else "L")
        image.save(path, format=format_name)
    except (KeyError, ValueError, OSError) as exc:
        raise RasterError(f"Cannot encode image {path}: {exc}") from exc
    return path
