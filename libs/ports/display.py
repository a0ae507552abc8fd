# libs/ports/display.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import NewType

# Server-side XID. The server owns the resource; clients never free it.
SurfaceHandle = NewType("SurfaceHandle", int)


@dataclass(frozen=True)
class Rect:
    x: int  # signed; a monitor may sit left of / above the desktop origin
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect size must be non-negative, got {self.width}x{self.height}")

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def as_tuple(self) -> tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


@dataclass(frozen=True)
class PropertyReply:
    format: int  # item width in bits: 8, 16 or 32
    values: tuple[int, ...]


@dataclass(frozen=True)
class ImageReply:
    depth: int
    # packed Z-pixmap bytes, 4 per pixel, server byte order
    data: bytes


@dataclass(frozen=True)
class ScreenResources:
    config_timestamp: int  # generation token for every dependent CRTC query
    crtcs: tuple[int, ...]


class CrtcStatus(IntEnum):
    OK = 0
    INVALID_CONFIG_TIME = 1
    INVALID_TIME = 2
    FAILED = 3


@dataclass(frozen=True)
class CrtcInfo:
    crtc: int
    status: CrtcStatus
    rect: Rect
    mode: int  # 0 means the controller is disabled


class DisplayQueryError(RuntimeError):
    """A request against the display server failed (no reply, X error, closed link)."""

    def __init__(self, request: str, detail: object = None) -> None:
        msg = f"{request} failed" if detail is None else f"{request} failed: {detail}"
        super().__init__(msg)
        self.request = request
        self.detail = detail


class DisplayConnectionFailed(DisplayQueryError):
    pass


class DisplayServerPort(ABC):
    """Request/reply session with a display server; domain never sees Xlib directly.

    Every method blocks until the reply arrives and raises DisplayQueryError
    on failure. Nothing is retried.
    """

    @abstractmethod
    def root(self) -> SurfaceHandle: ...

    @abstractmethod
    def get_property(self, surface: SurfaceHandle, name: str) -> PropertyReply | None:
        """Return the named property of ``surface`` or None when it does not exist."""

    @abstractmethod
    def get_geometry(self, drawable: SurfaceHandle) -> Rect: ...

    @abstractmethod
    def get_image(self, drawable: SurfaceHandle, rect: Rect) -> ImageReply:
        """All planes, packed pixel format."""

    @abstractmethod
    def has_layout_extension(self) -> bool: ...

    @abstractmethod
    def get_screen_resources(self, root: SurfaceHandle) -> ScreenResources: ...

    @abstractmethod
    def get_crtc_info(self, crtc: int, config_timestamp: int) -> CrtcInfo: ...

    @abstractmethod
    def close(self) -> None: ...
