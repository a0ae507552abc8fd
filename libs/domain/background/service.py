# libs/domain/background/service.py
from __future__ import annotations

import logging
from typing import Final, Literal

from ports.display import DisplayServerPort

from .errors import LayoutUnavailable
from .layout import resolve_layout
from .masking import mask
from .model import CaptureResult
from .pixels import normalize
from .surface import BACKGROUND_PROPERTY, fetch_raster, resolve_background_surface

LOG: Final = logging.getLogger("bgdump.capture")

LayoutPolicy = Literal["fail", "skip"]


class BackgroundCaptureService:
    """Pure domain service (no OS calls). One capture attempt per call, no retries."""

    def __init__(
        self,
        display: DisplayServerPort,
        property_name: str = BACKGROUND_PROPERTY,
        mask_offscreen: bool = True,
        on_layout_unavailable: LayoutPolicy = "fail",
    ) -> None:
        if on_layout_unavailable not in ("fail", "skip"):
            raise ValueError(f"Unknown layout policy: {on_layout_unavailable!r}")
        self.display: Final = display
        self.property_name = property_name
        self.mask_offscreen = mask_offscreen
        self.on_layout_unavailable = on_layout_unavailable

    def capture(self) -> CaptureResult:
        root = self.display.root()
        surface = resolve_background_surface(self.display, root, self.property_name)
        geometry, raw = fetch_raster(self.display, surface)
        raster = normalize(raw)

        if not self.mask_offscreen:
            return CaptureResult(raster=raster, surface_rect=geometry)

        try:
            layout = resolve_layout(self.display, root)
        except LayoutUnavailable as e:
            if self.on_layout_unavailable != "skip":
                raise
            LOG.warning("%s; writing unmasked background", e)
            return CaptureResult(raster=raster, surface_rect=geometry, skipped_mask_reason=str(e))

        return CaptureResult(
            raster=mask(raster, layout),
            surface_rect=geometry,
            layout=layout,
            masked=len(layout) > 1,
        )
