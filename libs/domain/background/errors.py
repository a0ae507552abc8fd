from __future__ import annotations


class CaptureError(RuntimeError):
    """Base class: the current capture attempt is over. Nothing is retried."""


class NoBackgroundSet(CaptureError):
    def __init__(self, property_name: str) -> None:
        super().__init__(f"No background set: root property {property_name} is absent or empty")
        self.property_name = property_name


class MalformedBackgroundProperty(CaptureError):
    def __init__(self, property_name: str, format: int, count: int) -> None:
        super().__init__(
            f"Malformed {property_name}: expected one 32-bit value, "
            f"got format={format} count={count}"
        )
        self.property_name = property_name
        self.format = format
        self.count = count


class SurfaceQueryFailed(CaptureError):
    def __init__(self, request: str, surface: int, cause: BaseException) -> None:
        super().__init__(f"{request} on surface {surface:#x} failed: {cause}")
        self.request = request
        self.surface = surface
        self.cause = cause


class BufferSizeMismatch(CaptureError):
    def __init__(self, width: int, height: int, expected: int, actual: int) -> None:
        super().__init__(
            f"Pixel buffer for {width}x{height} should be {expected} bytes, got {actual}"
        )
        self.width = width
        self.height = height
        self.expected = expected
        self.actual = actual


class UnsupportedColorDepth(CaptureError):
    def __init__(self, depth: int) -> None:
        super().__init__(f"Unsupported pixel depth: {depth}")
        self.depth = depth


class LayoutUnavailable(CaptureError):
    """Display layout could not be read. Callers may skip masking on this one."""

    def __init__(self, reason: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Display layout unavailable: {reason}")
        self.reason = reason
        self.cause = cause


class NoActiveDisplays(CaptureError):
    def __init__(self) -> None:
        super().__init__("No active displays in the current layout")


__all__ = [
    "CaptureError",
    "NoBackgroundSet",
    "MalformedBackgroundProperty",
    "SurfaceQueryFailed",
    "BufferSizeMismatch",
    "UnsupportedColorDepth",
    "LayoutUnavailable",
    "NoActiveDisplays",
]
