from __future__ import annotations

from domain.background import BackgroundCaptureService
from ports.display import DisplayServerPort

from apps.bgdump.settings import BgdumpSettings


def build_display(settings: BgdumpSettings) -> DisplayServerPort:
    if settings.capture.transport == "xlib":
        from adapters.xlib_display.xlib import XlibDisplay

        return XlibDisplay(settings.capture.display)
    raise ValueError(f"Unknown display transport: {settings.capture.transport}")


def build_service(
    settings: BgdumpSettings, display: DisplayServerPort
) -> BackgroundCaptureService:
    cfg = settings.capture
    return BackgroundCaptureService(
        display,
        property_name=cfg.background_property,
        mask_offscreen=cfg.mask_offscreen,
        on_layout_unavailable=cfg.on_layout_unavailable,
    )
