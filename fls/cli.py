"""Command-line interface for fls.

Reads a PNG or JPEG image, optionally rescales it, dithers it to black and
white and writes the paletted result as a PNG.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

logger = logging.getLogger("fls")

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fls",
        description=(
            "fls produces paletted black and white images using the "
            "Floyd-Steinberg dithering algorithm. Rescaling is applied "
            "before the dithering with the nearest-neighbor algorithm."
        ),
    )
    parser.add_argument("input", help="Input PNG or JPEG file path.")
    parser.add_argument(
        "-s", "--scale",
        type=float,
        default=1.0,
        help="Scaling coefficient (default: 1.0).",
    )
    parser.add_argument(
        "-o", "--output",
        default="",
        help="Path to output file. Defaults to <input stem>_fls.png.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Set verbose execution.",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    """Errors only by default; progress messages with --verbose."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.ERROR,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def _fail(message: str) -> None:
    """Print error to stderr and exit with code 1."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def run(args: argparse.Namespace) -> Path:
    """Run the read → process → write pipeline. Returns the output path."""
    from fls.core.processor import Settings, process
    from fls.core.reader import read_raster
    from fls.core.writer import auto_output_path, save_png

    input_path = Path(args.input)
    settings = Settings(scale=args.scale)

    logger.info("read file %r", str(input_path))
    raster = read_raster(input_path)
    logger.info("decoded %dx%d image", raster.width, raster.height)

    result = process(raster, settings)

    output_path = Path(args.output) if args.output else auto_output_path(input_path)
    logger.info("writing result PNG image at path %r", str(output_path))
    save_png(result, output_path)
    return output_path


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        run(args)
    except ValueError as e:
        # Includes InvalidArgumentError for bad scale factors
        _fail(str(e))
    except OSError as e:
        # Read and write failures; the message carries the offending path
        _fail(str(e))


if __name__ == "__main__":
    main()
