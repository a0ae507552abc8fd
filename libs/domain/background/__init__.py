from .errors import (
    BufferSizeMismatch,
    CaptureError,
    LayoutUnavailable,
    MalformedBackgroundProperty,
    NoActiveDisplays,
    NoBackgroundSet,
    SurfaceQueryFailed,
    UnsupportedColorDepth,
)
from .layout import resolve_layout
from .masking import clip_to_canvas, mask
from .model import CanonicalRaster, CaptureResult, RawPixelBuffer
from .pixels import normalize
from .service import BackgroundCaptureService
from .surface import BACKGROUND_PROPERTY, fetch_raster, resolve_background_surface

__all__ = [
    "BackgroundCaptureService",
    "BACKGROUND_PROPERTY",
    "resolve_background_surface",
    "fetch_raster",
    "normalize",
    "resolve_layout",
    "clip_to_canvas",
    "mask",
    "RawPixelBuffer",
    "CanonicalRaster",
    "CaptureResult",
    "CaptureError",
    "NoBackgroundSet",
    "MalformedBackgroundProperty",
    "SurfaceQueryFailed",
    "BufferSizeMismatch",
    "UnsupportedColorDepth",
    "LayoutUnavailable",
    "NoActiveDisplays",
]
