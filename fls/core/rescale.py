"""Nearest-neighbor rescaling."""

from __future__ import annotations

import math

import numpy as np

from fls.core.errors import InvalidArgumentError
from fls.core.raster import Raster


def check_scale(scale: float) -> float:
    """Return ``scale`` as a float, rejecting non-finite or non-positive values."""
    try:
        value = float(scale)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Scale must be a number, got {scale!r}") from None
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidArgumentError(f"Scale must be a positive number, got {scale!r}")
    return value


def target_size(width: int, height: int, scale: float) -> tuple[int, int]:
    """Destination dimensions for a uniform scale factor.

    floor(width * scale) x floor(height * scale), never smaller than 1x1.
    """
    scale = check_scale(scale)
    return (
        max(1, math.floor(width * scale)),
        max(1, math.floor(height * scale)),
    )


def _source_coords(dst_len: int, src_len: int, scale: float) -> np.ndarray:
    """Map destination coordinates back onto the source axis: floor(d / scale)."""
    coords = np.floor(np.arange(dst_len, dtype=np.float64) / scale).astype(np.intp)
    return np.clip(coords, 0, src_len - 1)


def nearest_neighbor(raster: Raster, scale: float) -> Raster:
    """Resample ``raster`` by ``scale`` without blending.

    Each destination pixel copies the color of exactly one source pixel.
    The source raster is left untouched.
    """
    scale = check_scale(scale)
    w, h = target_size(raster.width, raster.height, scale)

    xs = _source_coords(w, raster.width, scale)
    ys = _source_coords(h, raster.height, scale)

    # Fancy indexing always returns a fresh array
    pixels = raster.pixels[ys[:, None], xs[None, :]]
    return Raster(width=w, height=h, pixels=pixels)
