# libs/domain/background/surface.py
from __future__ import annotations

import logging
from typing import Final

from ports.display import DisplayQueryError, DisplayServerPort, Rect, SurfaceHandle

from .errors import MalformedBackgroundProperty, NoBackgroundSet, SurfaceQueryFailed
from .model import RawPixelBuffer

LOG: Final = logging.getLogger("bgdump.surface")

# Set by feh, nitrogen, xsetroot -bitmap wrappers, hsetroot, ...
BACKGROUND_PROPERTY: Final = "_XROOTPMAP_ID"


def resolve_background_surface(
    display: DisplayServerPort,
    root: SurfaceHandle,
    property_name: str = BACKGROUND_PROPERTY,
) -> SurfaceHandle:
    """Read the pixmap id the wallpaper setter stored on the root window."""
    try:
        reply = display.get_property(root, property_name)
    except DisplayQueryError as e:
        raise SurfaceQueryFailed("GetProperty", root, e) from e

    if reply is None or not reply.values:
        raise NoBackgroundSet(property_name)
    if reply.format != 32:
        raise MalformedBackgroundProperty(property_name, reply.format, len(reply.values))
    if len(reply.values) != 1:
        raise MalformedBackgroundProperty(property_name, reply.format, len(reply.values))

    xid = reply.values[0]
    if xid == 0:  # None pixmap
        raise NoBackgroundSet(property_name)
    LOG.debug("%s -> pixmap %#x", property_name, xid)
    return SurfaceHandle(xid)


def fetch_raster(
    display: DisplayServerPort, surface: SurfaceHandle
) -> tuple[Rect, RawPixelBuffer]:
    try:
        geometry = display.get_geometry(surface)
    except DisplayQueryError as e:
        raise SurfaceQueryFailed("GetGeometry", surface, e) from e

    try:
        image = display.get_image(surface, geometry)
    except DisplayQueryError as e:
        raise SurfaceQueryFailed("GetImage", surface, e) from e

    LOG.debug(
        "pixmap %#x: %dx%d+%d+%d depth=%d bytes=%d",
        surface,
        geometry.width,
        geometry.height,
        geometry.x,
        geometry.y,
        image.depth,
        len(image.data),
    )
    # RawPixelBuffer rejects a byte count other than width*height*4 (BufferSizeMismatch)
    buf = RawPixelBuffer(
        width=geometry.width, height=geometry.height, depth=image.depth, data=image.data
    )
    return geometry, buf
