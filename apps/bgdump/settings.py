from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CaptureSettings(BaseModel):
    transport: str = "xlib"  # "xlib" now; "xcffib" later
    display: str | None = None  # None -> $DISPLAY
    background_property: str = "_XROOTPMAP_ID"
    mask_offscreen: bool = True
    on_layout_unavailable: Literal["fail", "skip"] = "fail"


class OutputSettings(BaseModel):
    path: str = "bg.png"  # "-" writes to stdout
    format: str | None = None  # any Pillow writer, e.g. "png", "ppm", "jpeg"; None -> extension


class BgdumpSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="XBG_", env_nested_delimiter="__", extra="ignore"
    )

    log_level: LogLevel = "WARNING"
    capture: CaptureSettings = CaptureSettings()
    output: OutputSettings = OutputSettings()

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v
