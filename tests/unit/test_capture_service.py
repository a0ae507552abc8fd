from __future__ import annotations

import pytest
from adapters.xlib_display import FakeDisplayServer
from domain.background import (
    BackgroundCaptureService,
    LayoutUnavailable,
    NoActiveDisplays,
    NoBackgroundSet,
    UnsupportedColorDepth,
    normalize,
)
from domain.background.model import RawPixelBuffer
from ports.display import Rect

PIXMAP = 0x1200003
BGRX_SOLID = bytes([50, 100, 200, 0])  # B, G, R, pad


def _fake(width: int = 4, height: int = 4, depth: int = 24) -> FakeDisplayServer:
    fake = FakeDisplayServer()
    fake.set_background(PIXMAP, width, height, BGRX_SOLID * (width * height), depth=depth)
    return fake


def test_two_adjacent_displays_tiling_the_canvas():
    fake = _fake()
    fake.add_crtc(0, 0, 2, 4)
    fake.add_crtc(2, 0, 2, 4)

    result = BackgroundCaptureService(fake).capture()

    unmasked = normalize(RawPixelBuffer(4, 4, 24, BGRX_SOLID * 16)).with_alpha()
    assert result.masked is True
    assert result.layout == (Rect(0, 0, 2, 4), Rect(2, 0, 2, 4))
    assert result.raster == unmasked
    assert result.raster.pixel(3, 3) == (200, 100, 50, 255)


def test_gap_between_displays_is_masked():
    fake = _fake(6, 2)
    fake.add_crtc(0, 0, 2, 2)
    fake.add_crtc(4, 0, 2, 2)

    raster = BackgroundCaptureService(fake).capture().raster

    assert raster.pixel(1, 0) == (200, 100, 50, 255)
    assert raster.pixel(2, 1) == (0, 0, 0, 0)
    assert raster.pixel(3, 0) == (0, 0, 0, 0)
    assert raster.pixel(5, 1) == (200, 100, 50, 255)


def test_single_display_not_marked_masked():
    fake = _fake()
    fake.add_crtc(0, 0, 4, 4)
    result = BackgroundCaptureService(fake).capture()
    assert result.masked is False
    assert result.raster.has_alpha is True


def test_mask_disabled_skips_layout_queries():
    fake = _fake()
    result = BackgroundCaptureService(fake, mask_offscreen=False).capture()
    assert result.raster.has_alpha is False
    assert result.layout == ()
    assert not any(r.startswith("RR") for r in fake.requests)


def test_layout_unavailable_fails_by_default():
    fake = _fake()
    fake.layout_extension = False
    with pytest.raises(LayoutUnavailable):
        BackgroundCaptureService(fake).capture()


def test_layout_unavailable_skip_policy_returns_unmasked():
    fake = _fake()
    fake.layout_extension = False
    result = BackgroundCaptureService(fake, on_layout_unavailable="skip").capture()
    assert result.masked is False
    assert result.raster.has_alpha is False
    assert result.skipped_mask_reason and "RANDR" in result.skipped_mask_reason


def test_skip_policy_does_not_hide_other_errors():
    fake = _fake()
    with pytest.raises(NoActiveDisplays):
        BackgroundCaptureService(fake, on_layout_unavailable="skip").capture()


def test_errors_propagate_verbatim():
    fake = FakeDisplayServer()
    with pytest.raises(NoBackgroundSet):
        BackgroundCaptureService(fake).capture()

    fake = _fake(depth=16)
    with pytest.raises(UnsupportedColorDepth):
        BackgroundCaptureService(fake).capture()


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        BackgroundCaptureService(FakeDisplayServer(), on_layout_unavailable="retry")  # type: ignore[arg-type]
