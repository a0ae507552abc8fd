# libs/domain/background/layout.py
from __future__ import annotations

import logging
from typing import Final

from ports.display import CrtcStatus, DisplayQueryError, DisplayServerPort, Rect, SurfaceHandle

from .errors import LayoutUnavailable, NoActiveDisplays

LOG: Final = logging.getLogger("bgdump.layout")


def resolve_layout(display: DisplayServerPort, root: SurfaceHandle) -> tuple[Rect, ...]:
    """One rectangle per enabled CRTC, all read under the same config timestamp."""
    if not display.has_layout_extension():
        raise LayoutUnavailable("RANDR extension not supported by the server")

    try:
        resources = display.get_screen_resources(root)
    except DisplayQueryError as e:
        raise LayoutUnavailable("screen resources query failed", e) from e

    rects: list[Rect] = []
    for crtc in resources.crtcs:
        try:
            info = display.get_crtc_info(crtc, resources.config_timestamp)
        except DisplayQueryError as e:
            raise LayoutUnavailable(f"CRTC {crtc:#x} query failed", e) from e

        # stale token: the layout changed after GetScreenResources
        if info.status is not CrtcStatus.OK:
            raise LayoutUnavailable(f"CRTC {crtc:#x} replied {info.status.name}")

        if info.mode == 0 or info.rect.width == 0 or info.rect.height == 0:
            LOG.debug("CRTC %#x disabled", crtc)
            continue
        rects.append(info.rect)

    if not rects:
        raise NoActiveDisplays()
    LOG.debug("layout: %s", [r.as_tuple() for r in rects])
    return tuple(rects)
