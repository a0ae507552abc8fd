from __future__ import annotations

import pytest
from adapters.xlib_display import FakeDisplayServer
from ports.display import CrtcStatus, DisplayQueryError, DisplayServerPort, Rect


def test_fake_is_a_display_port():
    assert isinstance(FakeDisplayServer(), DisplayServerPort)


def test_absent_property_is_none():
    fake = FakeDisplayServer()
    assert fake.get_property(fake.root(), "_XROOTPMAP_ID") is None


def test_image_matches_geometry():
    fake = FakeDisplayServer()
    fake.set_background(0x10, 3, 2, bytes(24))
    rect = fake.get_geometry(0x10)
    reply = fake.get_image(0x10, rect)
    assert len(reply.data) == rect.width * rect.height * 4


def test_stale_timestamp_reports_status():
    fake = FakeDisplayServer()
    crtc = fake.add_crtc(0, 0, 5, 5)
    res = fake.get_screen_resources(fake.root())
    assert fake.get_crtc_info(crtc, res.config_timestamp).status is CrtcStatus.OK
    assert fake.get_crtc_info(crtc, res.config_timestamp + 1).status is not CrtcStatus.OK


def test_injected_failure_raises_query_error():
    fake = FakeDisplayServer()
    fake.fail_on.add("GetProperty")
    with pytest.raises(DisplayQueryError) as exc:
        fake.get_property(fake.root(), "x")
    assert exc.value.request == "GetProperty"


def test_rect_rejects_negative_size():
    with pytest.raises(ValueError):
        Rect(0, 0, -1, 5)
    assert Rect(-5, -5, 10, 10).right == 5
