from __future__ import annotations

from ports.display import (
    CrtcInfo,
    CrtcStatus,
    DisplayQueryError,
    DisplayServerPort,
    ImageReply,
    PropertyReply,
    Rect,
    ScreenResources,
    SurfaceHandle,
)


class FakeDisplayServer(DisplayServerPort):
    """In-memory display server. Tests poke the dicts directly or use the helpers."""

    ROOT = SurfaceHandle(0x1E0)

    def __init__(self, layout_extension: bool = True) -> None:
        self.properties: dict[tuple[int, str], PropertyReply] = {}
        self.pixmaps: dict[int, tuple[Rect, ImageReply]] = {}
        self.crtcs: dict[int, tuple[Rect, int]] = {}  # crtc -> (rect, mode)
        self.config_timestamp = 1
        self.layout_extension = layout_extension
        # request names listed here raise DisplayQueryError
        self.fail_on: set[str] = set()
        # simulates a hotplug between GetScreenResources and GetCrtcInfo
        self.reconfigure_after_resources = False
        self.requests: list[str] = []
        self.closed = False
        self._next_crtc = 0x40

    # --- test helpers -------------------------------------------------------

    def set_property(self, name: str, fmt: int, *values: int) -> None:
        self.properties[(self.ROOT, name)] = PropertyReply(format=fmt, values=tuple(values))

    def set_background(
        self,
        xid: int,
        width: int,
        height: int,
        data: bytes,
        depth: int = 24,
        name: str = "_XROOTPMAP_ID",
    ) -> None:
        self.set_property(name, 32, xid)
        self.pixmaps[xid] = (Rect(0, 0, width, height), ImageReply(depth=depth, data=data))

    def add_crtc(self, x: int, y: int, width: int, height: int, mode: int = 0x4A) -> int:
        crtc = self._next_crtc
        self._next_crtc += 1
        self.crtcs[crtc] = (Rect(x, y, width, height), mode)
        return crtc

    def add_disabled_crtc(self) -> int:
        return self.add_crtc(0, 0, 0, 0, mode=0)

    # --- port ---------------------------------------------------------------

    def _request(self, name: str) -> None:
        self.requests.append(name)
        if name in self.fail_on:
            raise DisplayQueryError(name, "BadDrawable (injected)")

    def root(self) -> SurfaceHandle:
        return self.ROOT

    def get_property(self, surface: SurfaceHandle, name: str) -> PropertyReply | None:
        self._request("GetProperty")
        return self.properties.get((surface, name))

    def get_geometry(self, drawable: SurfaceHandle) -> Rect:
        self._request("GetGeometry")
        if drawable not in self.pixmaps:
            raise DisplayQueryError("GetGeometry", f"BadDrawable {drawable:#x}")
        return self.pixmaps[drawable][0]

    def get_image(self, drawable: SurfaceHandle, rect: Rect) -> ImageReply:
        self._request("GetImage")
        if drawable not in self.pixmaps:
            raise DisplayQueryError("GetImage", f"BadDrawable {drawable:#x}")
        return self.pixmaps[drawable][1]

    def has_layout_extension(self) -> bool:
        return self.layout_extension

    def get_screen_resources(self, root: SurfaceHandle) -> ScreenResources:
        self._request("RRGetScreenResources")
        res = ScreenResources(
            config_timestamp=self.config_timestamp, crtcs=tuple(sorted(self.crtcs))
        )
        if self.reconfigure_after_resources:
            self.config_timestamp += 1
        return res

    def get_crtc_info(self, crtc: int, config_timestamp: int) -> CrtcInfo:
        self._request("RRGetCrtcInfo")
        rect, mode = self.crtcs[crtc]
        status = CrtcStatus.OK
        if config_timestamp != self.config_timestamp:
            status = CrtcStatus.INVALID_CONFIG_TIME
        return CrtcInfo(crtc=crtc, status=status, rect=rect, mode=mode)

    def close(self) -> None:
        self.closed = True
