from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Final, TypeVar

from ports.display import (
    CrtcInfo,
    CrtcStatus,
    DisplayConnectionFailed,
    DisplayQueryError,
    DisplayServerPort,
    ImageReply,
    PropertyReply,
    Rect,
    ScreenResources,
    SurfaceHandle,
)
from Xlib import X
from Xlib import display as xdisplay
from Xlib import error as xerror
from Xlib.ext import randr

LOG: Final = logging.getLogger("bgdump.xlib")

ALL_PLANES: Final = 0xFFFFFFFF  # X ignores planes beyond the drawable depth

T = TypeVar("T")


class XlibDisplay(DisplayServerPort):
    """python-xlib session. Opens lazily; every request blocks for its reply."""

    def __init__(self, display_name: str | None = None) -> None:
        self._display_name = display_name
        self._dpy: xdisplay.Display | None = None

    def open(self) -> None:
        if self._dpy is not None:
            return
        try:
            self._dpy = xdisplay.Display(self._display_name)
        except xerror.DisplayError as e:
            raise DisplayConnectionFailed(
                f"connect to {self._display_name or '$DISPLAY'}", e
            ) from e
        LOG.debug("connected to %s", self._dpy.get_display_name())

    def _conn(self) -> xdisplay.Display:
        if self._dpy is None:
            self.open()
        assert self._dpy is not None
        return self._dpy

    def _call(self, request: str, fn: Callable[..., T], *args: Any) -> T:
        try:
            return fn(*args)
        except (xerror.XError, xerror.ConnectionClosedError) as e:
            raise DisplayQueryError(request, e) from e

    def _resource(self, kind: str, xid: int) -> Any:
        return self._conn().create_resource_object(kind, xid)

    def root(self) -> SurfaceHandle:
        return SurfaceHandle(self._conn().screen().root.id)

    def get_property(self, surface: SurfaceHandle, name: str) -> PropertyReply | None:
        dpy = self._conn()
        # only_if_exists: an atom nobody interned cannot name a property
        atom = self._call("InternAtom", dpy.intern_atom, name, True)
        if atom == X.NONE:
            return None
        window = self._resource("window", surface)
        # two items, so a multi-valued property is visible to the caller
        reply = self._call("GetProperty", window.get_property, atom, X.AnyPropertyType, 0, 2)
        if reply is None:
            return None
        return PropertyReply(format=int(reply.format), values=tuple(int(v) for v in reply.value))

    def get_geometry(self, drawable: SurfaceHandle) -> Rect:
        g = self._call("GetGeometry", self._resource("pixmap", drawable).get_geometry)
        return Rect(int(g.x), int(g.y), int(g.width), int(g.height))

    def get_image(self, drawable: SurfaceHandle, rect: Rect) -> ImageReply:
        reply = self._call(
            "GetImage",
            self._resource("pixmap", drawable).get_image,
            rect.x,
            rect.y,
            rect.width,
            rect.height,
            X.ZPixmap,
            ALL_PLANES,
        )
        return ImageReply(depth=int(reply.depth), data=bytes(reply.data))

    def has_layout_extension(self) -> bool:
        return bool(self._conn().has_extension(randr.extname))

    def get_screen_resources(self, root: SurfaceHandle) -> ScreenResources:
        window = self._resource("window", root)
        r = self._call("RRGetScreenResources", window.xrandr_get_screen_resources)
        return ScreenResources(
            config_timestamp=int(r.config_timestamp), crtcs=tuple(int(c) for c in r.crtcs)
        )

    def get_crtc_info(self, crtc: int, config_timestamp: int) -> CrtcInfo:
        r = self._call(
            "RRGetCrtcInfo", self._conn().xrandr_get_crtc_info, crtc, config_timestamp
        )
        try:
            status = CrtcStatus(int(r.status))
        except ValueError:
            status = CrtcStatus.FAILED
        return CrtcInfo(
            crtc=crtc,
            status=status,
            rect=Rect(int(r.x), int(r.y), int(r.width), int(r.height)),
            mode=int(r.mode),
        )

    def close(self) -> None:
        if self._dpy is not None:
            try:
                self._dpy.close()
            except xerror.ConnectionClosedError:
                LOG.debug("connection already closed")
        self._dpy = None
