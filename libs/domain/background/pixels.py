from __future__ import annotations

from typing import Final

from .errors import UnsupportedColorDepth
from .model import CanonicalRaster, RawPixelBuffer

RGB_DEPTH: Final = 24
RGBA_DEPTH: Final = 32


def normalize(buf: RawPixelBuffer) -> CanonicalRaster:
    """Reorder server-native BGR0/BGRA pixels into RGB or RGBA.

    Depth 24 drops the pad byte. Depth 32 keeps byte 3 as alpha; that layout
    is assumed from depth 24 being BGR0 and has not been confirmed against a
    real 32-bit root pixmap.
    """
    src = buf.data
    n = buf.width * buf.height

    if buf.depth == RGB_DEPTH:
        out = bytearray(n * 3)
        out[0::3] = src[2::4]
        out[1::3] = src[1::4]
        out[2::3] = src[0::4]
        return CanonicalRaster(buf.width, buf.height, has_alpha=False, pixels=bytes(out))

    if buf.depth == RGBA_DEPTH:
        out = bytearray(n * 4)
        out[0::4] = src[2::4]
        out[1::4] = src[1::4]
        out[2::4] = src[0::4]
        out[3::4] = src[3::4]
        return CanonicalRaster(buf.width, buf.height, has_alpha=True, pixels=bytes(out))

    raise UnsupportedColorDepth(buf.depth)
