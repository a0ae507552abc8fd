from .display import (
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

__all__ = [
    "DisplayServerPort",
    "DisplayQueryError",
    "DisplayConnectionFailed",
    "SurfaceHandle",
    "Rect",
    "PropertyReply",
    "ImageReply",
    "ScreenResources",
    "CrtcInfo",
    "CrtcStatus",
]
