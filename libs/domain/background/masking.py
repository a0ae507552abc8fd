# libs/domain/background/masking.py
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Final

from ports.display import Rect

from .errors import NoActiveDisplays
from .model import OPAQUE, CanonicalRaster

LOG: Final = logging.getLogger("bgdump.masking")


def clip_to_canvas(rect: Rect, canvas: tuple[int, int]) -> Rect | None:
    """Visible part of ``rect`` on a ``(width, height)`` canvas, or None if nothing shows.

    A negative origin is clamped to 0 and the size shrinks by the same amount,
    so the far edge stays where it was before it is cut at the canvas border.
    """
    canvas_w, canvas_h = canvas
    if rect.x + rect.width < 0 or rect.y + rect.height < 0:
        return None

    x = max(rect.x, 0)
    y = max(rect.y, 0)
    width = min(rect.width - (x - rect.x), canvas_w - x)
    height = min(rect.height - (y - rect.y), canvas_h - y)
    if width <= 0 or height <= 0:
        return None
    return Rect(x, y, width, height)


def mask(raster: CanonicalRaster, layout: Sequence[Rect]) -> CanonicalRaster:
    """Make every pixel outside all display rectangles fully transparent.

    The result always carries alpha and has the same size as ``raster``.
    A single display needs no masking: the raster comes back alpha-promoted.
    """
    if not layout:
        raise NoActiveDisplays()
    src = raster.with_alpha()
    if len(layout) == 1:
        return src

    stride = src.stride
    dst = bytearray(len(src.pixels))  # transparent black
    for rect in layout:
        visible = clip_to_canvas(rect, src.size())
        if visible is None:
            LOG.debug("display %s is off the canvas", rect.as_tuple())
            continue
        start = visible.x * 4
        end = visible.right * 4
        for row in range(visible.y, visible.bottom):
            off = row * stride
            dst[off + start : off + end] = src.pixels[off + start : off + end]
            dst[off + start + 3 : off + end : 4] = bytes([OPAQUE]) * visible.width

    return CanonicalRaster(src.width, src.height, True, bytes(dst))
