"""fls: black and white Floyd-Steinberg dithering of raster images."""

__version__ = "0.1.0"
