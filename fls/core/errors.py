"""Error types raised by the fls core."""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """A caller passed a raster or parameter the core cannot process.

    Raised before any work starts, so no partial output is ever produced.
    """
