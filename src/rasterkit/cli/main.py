"""rasterkit CLI - geometric transformations on image files.

Each command reads one image, applies one transformation and writes the
result. The output format follows the destination file extension.
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer

from rasterkit import __version__
from rasterkit.config import settings
from rasterkit.core import add_border, crop, resize, rotate, trim
from rasterkit.geometry import Color, Rectangle
from rasterkit.raster import Raster, RasterError, load_raster, save_raster
from rasterkit.utils.logging import (
    configure_logging,
    correlation_context,
    get_logger,
)

app = typer.Typer(
    name="rasterkit",
    help="rasterkit: resize, crop, rotate, trim and pad raster images",
    add_completion=False,
)

SourceArg = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Input image",
    ),
]
DestinationArg = Annotated[Path, typer.Argument(help="Output image")]
VerboseOpt = Annotated[
    int,
    typer.Option("--verbose", "-v", count=True, help="Increase verbosity (-v, -vv)"),
]
JsonOpt = Annotated[bool, typer.Option("--json", help="Output summary as JSON")]


# =============================================================================
# Commands
# =============================================================================


@app.command()
def version(
    json_output: JsonOpt = False,
) -> None:
    """Show version information."""
    if json_output:
        typer.echo(json.dumps({"version": __version__}))
    else:
        typer.echo(f"rasterkit {__version__}")


@app.command(name="resize")
def resize_command(  # noqa: PLR0913
    source: SourceArg,
    destination: DestinationArg,
    scale: Annotated[
        float | None, typer.Option("--scale", "-s", help="Uniform scale factor")
    ] = None,
    width: Annotated[int | None, typer.Option("--width", help="Target width")] = None,
    height: Annotated[
        int | None, typer.Option("--height", help="Target height")
    ] = None,
    ratio: Annotated[
        float | None,
        typer.Option("--ratio", help="Scale drawn onto the width x height canvas"),
    ] = None,
    verbose: VerboseOpt = 0,
    json_output: JsonOpt = False,
) -> None:
    """Resize by --scale, or to --width/--height (optionally with --ratio).

    Without --ratio, --width/--height extract the top-left region instead
    of scaling.
    """
    if scale is not None:
        if width is not None or height is not None or ratio is not None:
            raise typer.BadParameter(
                "--scale cannot be combined with --width/--height/--ratio"
            )
        dimensions: tuple[float, ...] = (scale,)
    elif width is not None and height is not None:
        dimensions = (width, height) if ratio is None else (width, height, ratio)
    else:
        raise typer.BadParameter("Give --scale, or both --width and --height")

    _run(
        "resize",
        source,
        destination,
        lambda raster: resize(raster, *dimensions),
        verbose=verbose,
        json_output=json_output,
    )


@app.command(name="crop")
def crop_command(  # noqa: PLR0913
    source: SourceArg,
    destination: DestinationArg,
    x: Annotated[int, typer.Option("--x", help="Left edge (negative clamps to 0)")] = 0,
    y: Annotated[int, typer.Option("--y", help="Top edge (negative clamps to 0)")] = 0,
    width: Annotated[
        int, typer.Option("--width", help="Width (<= 0 means full width)")
    ] = 0,
    height: Annotated[
        int, typer.Option("--height", help="Height (<= 0 means full height)")
    ] = 0,
    verbose: VerboseOpt = 0,
    json_output: JsonOpt = False,
) -> None:
    """Crop a rectangle, clamped to the image bounds."""
    region = Rectangle(x=x, y=y, width=width, height=height)
    _run(
        "crop",
        source,
        destination,
        lambda raster: crop(raster, region),
        verbose=verbose,
        json_output=json_output,
    )


@app.command(name="rotate")
def rotate_command(
    source: SourceArg,
    destination: DestinationArg,
    angle: Annotated[
        float,
        typer.Option("--angle", "-a", help="Degrees, clockwise-positive"),
    ],
    verbose: VerboseOpt = 0,
    json_output: JsonOpt = False,
) -> None:
    """Rotate about the center onto an expanded canvas."""
    _run(
        "rotate",
        source,
        destination,
        lambda raster: rotate(raster, angle),
        verbose=verbose,
        json_output=json_output,
    )


@app.command(name="trim")
def trim_command(
    source: SourceArg,
    destination: DestinationArg,
    background: Annotated[
        str, typer.Option("--background", help="Background color #RRGGBB[AA]")
    ] = "#FFFFFF",
    legacy_right_edge: Annotated[
        bool,
        typer.Option(
            "--legacy-right-edge",
            help="Scan the right edge with exact inequality (older behavior)",
        ),
    ] = settings.TRIM_LEGACY_RIGHT_EDGE,
    verbose: VerboseOpt = 0,
    json_output: JsonOpt = False,
) -> None:
    """Trim the background margin around the content."""
    background_color = _parse_color(background)
    _run(
        "trim",
        source,
        destination,
        lambda raster: trim(
            raster, background=background_color, legacy_right_edge=legacy_right_edge
        ),
        verbose=verbose,
        json_output=json_output,
    )


@app.command(name="border")
def border_command(  # noqa: PLR0913
    source: SourceArg,
    destination: DestinationArg,
    size: Annotated[int, typer.Option("--size", min=0, help="Border thickness")],
    color: Annotated[
        str, typer.Option("--color", help="Border color #RRGGBB[AA]")
    ] = "#000000",
    legacy_scale: Annotated[
        bool,
        typer.Option(
            "--legacy-scale",
            help="Scale the source by the padded/original ratio (older behavior)",
        ),
    ] = settings.BORDER_LEGACY_SCALE,
    verbose: VerboseOpt = 0,
    json_output: JsonOpt = False,
) -> None:
    """Pad the image with a solid border."""
    border_color = _parse_color(color)
    _run(
        "border",
        source,
        destination,
        lambda raster: add_border(
            raster, border_color, size, legacy_scale=legacy_scale
        ),
        verbose=verbose,
        json_output=json_output,
    )


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """rasterkit: resize, crop, rotate, trim and pad raster images."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


# =============================================================================
# Helpers
# =============================================================================


def _run(  # noqa: PLR0913
    operation: str,
    source: Path,
    destination: Path,
    transform: Callable[[Raster], Raster],
    *,
    verbose: int,
    json_output: bool,
) -> None:
    """Load, transform and save one image, reporting the outcome."""
    _configure_logging(verbose)
    logger = get_logger(__name__)

    with correlation_context(
        job_id=uuid.uuid4().hex[:12], source=str(source), operation=operation
    ):
        try:
            raster = load_raster(source)
            result = transform(raster)
            save_raster(result, destination)
        except (RasterError, OSError, ValueError) as e:
            logger.error("Transformation failed", error=str(e))
            if json_output:
                typer.echo(json.dumps({"operation": operation, "error": str(e)}))
            else:
                typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1) from None

        logger.info(
            "Transformation complete", output=str(destination), size=result.size
        )

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "operation": operation,
                    "input_size": list(raster.size),
                    "output_size": list(result.size),
                    "output": str(destination),
                }
            )
        )
    else:
        typer.echo(
            f"{operation}: {raster.width}x{raster.height} -> "
            f"{result.width}x{result.height} ({destination})"
        )


def _parse_color(value: str) -> Color:
    try:
        return Color.from_hex(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from None


def _configure_logging(verbose: int) -> None:
    """Configure logging based on verbosity level."""
    if verbose == 0:
        level = "WARNING"
    elif verbose == 1:
        level = "INFO"
    else:  # verbose >= 2
        level = "DEBUG"

    configure_logging(level=level)
