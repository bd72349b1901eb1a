"""Raster containers passed between the rescaler, the ditherer and I/O.

A ``Raster`` holds straight 8-bit RGBA pixels. A ``PalettedRaster`` holds
one palette index per pixel into the fixed two-color palette.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

from fls.core.errors import InvalidArgumentError

Color = tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)

# Index 0 = white, index 1 = black.
PALETTE: tuple[Color, Color] = (WHITE, BLACK)


def _check_bounds(x: int, y: int, width: int, height: int) -> None:
    if not (0 <= x < width and 0 <= y < height):
        raise IndexError(f"Pixel ({x}, {y}) outside {width}x{height} raster")


@dataclass(frozen=True)
class Raster:
    """A decoded RGBA image.

    ``pixels`` has shape (height, width, 4) and dtype uint8, row-major.
    """

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise InvalidArgumentError(
                f"Raster dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.pixels.shape != (self.height, self.width, 4):
            raise InvalidArgumentError(
                f"Pixel buffer shape {self.pixels.shape} does not match "
                f"{self.width}x{self.height} RGBA"
            )
        if self.pixels.dtype != np.uint8:
            raise InvalidArgumentError(
                f"Pixel buffer must be uint8, got {self.pixels.dtype}"
            )

    @classmethod
    def from_array(cls, array: np.ndarray) -> Raster:
        """Build a raster from a luminance, RGB or RGBA uint8 array.

        Args:
            array: shape (H, W), (H, W, 3) or (H, W, 4). Gray values are
                   copied to all three color channels; missing alpha is opaque.
        """
        arr = np.asarray(array)
        if arr.dtype != np.uint8:
            raise InvalidArgumentError(f"Expected uint8 pixels, got {arr.dtype}")

        if arr.ndim == 2:
            arr = np.repeat(arr[:, :, None], 3, axis=2)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise InvalidArgumentError(f"Unsupported pixel array shape {arr.shape}")
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)

        h, w = arr.shape[:2]
        return cls(width=w, height=h, pixels=np.ascontiguousarray(arr))

    @classmethod
    def from_image(cls, img: Image.Image) -> Raster:
        """Build a raster from a Pillow image of any mode."""
        return cls.from_array(np.array(img.convert("RGBA"), dtype=np.uint8))

    def at(self, x: int, y: int) -> Color:
        _check_bounds(x, y, self.width, self.height)
        r, g, b, a = (int(v) for v in self.pixels[y, x])
        return (r, g, b, a)


@dataclass(frozen=True)
class PalettedRaster:
    """Two-color output raster: one palette index (0 or 1) per pixel."""

    width: int
    height: int
    palette: tuple[Color, Color]
    indices: np.ndarray

    def __post_init__(self) -> None:
        if self.indices.shape != (self.height, self.width):
            raise InvalidArgumentError(
                f"Index buffer shape {self.indices.shape} does not match "
                f"{self.width}x{self.height}"
            )
        if len(self.palette) != 2:
            raise InvalidArgumentError(
                f"Palette must have exactly two entries, got {len(self.palette)}"
            )
        if not np.isin(self.indices, (0, 1)).all():
            bad = sorted(set(np.unique(self.indices).tolist()) - {0, 1})
            raise InvalidArgumentError(f"Palette indices must be 0 or 1, got {bad}")
        # Read-only once handed to the caller
        self.indices.flags.writeable = False

    def index_at(self, x: int, y: int) -> int:
        _check_bounds(x, y, self.width, self.height)
        return int(self.indices[y, x])

    def color_at(self, x: int, y: int) -> Color:
        return self.palette[self.index_at(x, y)]

    @property
    def black_ratio(self) -> float:
        """Fraction of pixels mapped to black (index 1)."""
        return float(np.count_nonzero(self.indices)) / self.indices.size

    def to_image(self) -> Image.Image:
        """Return a Pillow "P" mode image using the two-entry palette."""
        data = np.ascontiguousarray(self.indices, dtype=np.uint8).tobytes()
        img = Image.frombytes("P", (self.width, self.height), data)
        flat: list[int] = []
        for r, g, b, _ in self.palette:
            flat.extend((r, g, b))
        img.putpalette(flat)
        return img
