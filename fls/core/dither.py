"""Floyd-Steinberg error diffusion to a white/black palette."""

from __future__ import annotations

import numpy as np

from fls.core.errors import InvalidArgumentError
from fls.core.raster import PALETTE, PalettedRaster, Raster

# ITU-R BT.601 luma weights, in thousandths so gray stays exact.
LUMA_WEIGHTS = (299, 587, 114)

# Luma of each palette entry, by palette index.
PALETTE_LUMA = (255.0, 0.0)

# (dx, dy, weight / 16) targets, all of them not yet visited in scan order.
KERNEL = (
    (1, 0, 7 / 16),
    (-1, 1, 3 / 16),
    (0, 1, 5 / 16),
    (1, 1, 1 / 16),
)


def luminance(pixels: np.ndarray) -> np.ndarray:
    """Reduce RGBA pixels to premultiplied BT.601 luma.

    Y = (299 R + 587 G + 114 B) / 1000, scaled by A / 255, so a fully
    transparent pixel reads as black.

    Args:
        pixels: uint8 array of shape (H, W, 4).

    Returns:
        float64 array of shape (H, W) with values in [0.0, 255.0].
    """
    rgba = pixels.astype(np.int64)
    wr, wg, wb = LUMA_WEIGHTS
    weighted = wr * rgba[..., 0] + wg * rgba[..., 1] + wb * rgba[..., 2]
    return (weighted * rgba[..., 3]) / (1000.0 * 255.0)


def nearest_index(value: float) -> int:
    """Palette index whose luma is closest to ``value``.

    Exactly equidistant values (127.5) resolve to white, index 0.
    """
    if abs(value - PALETTE_LUMA[0]) <= abs(value - PALETTE_LUMA[1]):
        return 0
    return 1


def floyd_steinberg(luma: np.ndarray) -> np.ndarray:
    """Dither a luma plane to palette indices.

    Pixels are visited row by row, left to right. Each one has the error
    diffused onto it by earlier pixels added, is clamped to [0, 255] and
    quantized, and its own error is spread over the KERNEL targets. Targets
    outside the raster are skipped and their share of the error is dropped.

    Args:
        luma: 2D float array, nominally in [0.0, 255.0]. Not modified.

    Returns:
        uint8 array of the same shape holding 0 (white) or 1 (black).
    """
    if luma.ndim != 2 or luma.size == 0:
        raise InvalidArgumentError(
            f"Expected a non-empty 2D luma plane, got shape {luma.shape}"
        )

    h, w = luma.shape
    values = luma.astype(np.float64).ravel().tolist()
    errors = [0.0] * (w * h)
    out = bytearray(w * h)

    for y in range(h):
        row = y * w
        for x in range(w):
            i = row + x
            # Clamp to the channel range; error is measured from the clamped value
            effective = min(255.0, max(0.0, values[i] + errors[i]))
            idx = nearest_index(effective)
            out[i] = idx
            err = effective - PALETTE_LUMA[idx]
            if err == 0.0:
                continue

            for dx, dy, weight in KERNEL:
                nx = x + dx
                ny = y + dy
                if 0 <= nx < w and ny < h:
                    errors[ny * w + nx] += err * weight

    return np.frombuffer(bytes(out), dtype=np.uint8).reshape(h, w).copy()


def dither(raster: Raster) -> PalettedRaster:
    """Convert a raster to the two-color palette."""
    indices = floyd_steinberg(luminance(raster.pixels))
    return PalettedRaster(
        width=raster.width,
        height=raster.height,
        palette=PALETTE,
        indices=indices,
    )
