"""Save paletted rasters as PNG."""

from __future__ import annotations

from pathlib import Path

from fls.core.raster import PalettedRaster

OUTPUT_SUFFIX = "_fls.png"


def auto_output_path(input_path: Path) -> Path:
    """Default output path: ``<stem>_fls.png`` in the working directory."""
    return Path(input_path.stem + OUTPUT_SUFFIX)


def save_png(paletted: PalettedRaster, output_path: str | Path) -> None:
    """Write a paletted raster to ``output_path`` as a PNG.

    Palette index values are stored as-is, so decoding the PNG back gives
    the same 0 (white) / 1 (black) indices. The file is always PNG-encoded,
    whatever its extension.
    """
    paletted.to_image().save(str(output_path), format="PNG")
