"""Image loading for PNG and JPEG files.

The decoder is picked from the file extension, and only that decoder is
tried, so a mislabelled file fails instead of being sniffed.
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from fls.core.raster import Raster

# Extension → (format name, Pillow decoder id)
_FORMATS = {
    ".png": ("png", "PNG"),
    ".jpg": ("jpeg", "JPEG"),
    ".jpeg": ("jpeg", "JPEG"),
}


def detect_format(path: Path) -> str:
    """Detect image format from file extension."""
    suffix = path.suffix.lower()
    if suffix in _FORMATS:
        return _FORMATS[suffix][0]
    raise ValueError(f"Unsupported format: {suffix or '(none)'}")


def read_raster(path: str | Path) -> Raster:
    """Decode an image file into an RGBA raster.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
        ValueError: if the extension is not a supported image type.
        OSError: if Pillow cannot decode the file as that type.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    detect_format(path)
    decoder = _FORMATS[path.suffix.lower()][1]
    with Image.open(path, formats=[decoder]) as img:
        img.load()
        return Raster.from_image(img)
