from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ports.display import Rect

from .errors import BufferSizeMismatch

BYTES_PER_PIXEL: Final = 4
OPAQUE: Final = 0xFF


@dataclass(frozen=True)
class RawPixelBuffer:
    """Server-native pixels: B, G, R, pad/alpha per pixel, row-major, no row padding."""

    width: int
    height: int
    depth: int
    data: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * BYTES_PER_PIXEL
        if len(self.data) != expected:
            raise BufferSizeMismatch(self.width, self.height, expected, len(self.data))


@dataclass(frozen=True)
class CanonicalRaster:
    width: int
    height: int
    has_alpha: bool
    # R, G, B(, A) bytes, row-major. Keep it tech-agnostic.
    pixels: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * self.channels
        if len(self.pixels) != expected:
            raise ValueError(
                f"{self.width}x{self.height}x{self.channels} raster needs {expected} bytes, "
                f"got {len(self.pixels)}"
            )

    @property
    def channels(self) -> int:
        return 4 if self.has_alpha else 3

    @property
    def stride(self) -> int:
        return self.width * self.channels

    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def pixel(self, x: int, y: int) -> tuple[int, ...]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        off = y * self.stride + x * self.channels
        return tuple(self.pixels[off : off + self.channels])

    def with_alpha(self) -> CanonicalRaster:
        """Return an RGBA copy (fully opaque) or self when already RGBA."""
        if self.has_alpha:
            return self
        n = self.width * self.height
        out = bytearray(bytes([OPAQUE]) * (n * 4))
        out[0::4] = self.pixels[0::3]
        out[1::4] = self.pixels[1::3]
        out[2::4] = self.pixels[2::3]
        return CanonicalRaster(self.width, self.height, True, bytes(out))


@dataclass(frozen=True)
class CaptureResult:
    raster: CanonicalRaster
    surface_rect: Rect
    layout: tuple[Rect, ...] = ()
    masked: bool = False
    skipped_mask_reason: str | None = None
