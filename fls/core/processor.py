"""Image processing pipeline.

Rescale (only when scale != 1.0) → Floyd-Steinberg dither → paletted raster.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fls.core.dither import dither
from fls.core.raster import PalettedRaster, Raster
from fls.core.rescale import check_scale, nearest_neighbor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Processing settings that affect output."""

    scale: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale", check_scale(self.scale))


def process(raster: Raster, settings: Settings | None = None) -> PalettedRaster:
    """Run one image through the full pipeline.

    Pure: the input raster is not modified and no global state is read.
    """
    settings = settings or Settings()

    if settings.scale != 1.0:
        logger.info("resizing (scale=%s)", settings.scale)
        raster = nearest_neighbor(raster, settings.scale)
        logger.debug("resized to %dx%d", raster.width, raster.height)

    logger.info("applying Floyd-Steinberg dithering...")
    result = dither(raster)
    logger.debug("black pixel ratio %.3f", result.black_ratio)
    return result


def convert(raster: Raster, scale: float = 1.0) -> PalettedRaster:
    """Dither ``raster`` after rescaling it by ``scale``."""
    return process(raster, Settings(scale=scale))
