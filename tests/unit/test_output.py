from __future__ import annotations

import io
from pathlib import Path

import pytest
from domain.background import CanonicalRaster
from PIL import Image

from apps.bgdump.output import infer_format, resolve_format, to_image, write_raster


def _rgba() -> CanonicalRaster:
    return CanonicalRaster(2, 1, True, bytes([10, 20, 30, 255, 40, 50, 60, 0]))


@pytest.mark.parametrize(
    "dest,writer",
    [
        ("-", "PNG"),
        ("bg.png", "PNG"),
        ("BG.PNG", "PNG"),
        ("x.ppm", "PPM"),
        ("x.pnm", "PPM"),
        ("x.jpg", "JPEG"),
        ("x.bmp", "BMP"),
    ],
)
def test_infer_format(dest: str, writer: str):
    assert infer_format(dest) == writer


@pytest.mark.parametrize("dest", ["bg.nope", "background"])
def test_infer_format_rejects_unknown_extension(dest: str):
    with pytest.raises(ValueError):
        infer_format(dest)


def test_resolve_format_explicit_names():
    assert resolve_format("whatever.bin", "png") == "PNG"
    assert resolve_format("x.png", "ppm") == "PPM"
    assert resolve_format("x.png", "jpg") == "JPEG"
    with pytest.raises(ValueError):
        resolve_format("x.png", "nope")


def test_to_image_modes():
    assert to_image(_rgba()).mode == "RGBA"
    assert to_image(CanonicalRaster(1, 1, False, bytes(3))).mode == "RGB"


def test_png_to_stream_keeps_alpha():
    buf = io.BytesIO()
    assert write_raster(_rgba(), "-", stream=buf) == "PNG"
    img = Image.open(io.BytesIO(buf.getvalue()))
    assert img.format == "PNG"
    assert img.getpixel((0, 0)) == (10, 20, 30, 255)
    assert img.getpixel((1, 0)) == (40, 50, 60, 0)


def test_ppm_file_drops_alpha(tmp_path: Path):
    dest = tmp_path / "bg.ppm"
    write_raster(_rgba(), str(dest))
    img = Image.open(dest)
    assert img.mode == "RGB"
    assert img.getpixel((0, 0)) == (10, 20, 30)


@pytest.mark.parametrize("name,writer", [("bg.jpg", "JPEG"), ("bg.bmp", "BMP")])
def test_other_pillow_formats_from_extension(tmp_path: Path, name: str, writer: str):
    dest = tmp_path / name
    assert write_raster(_rgba(), str(dest)) == writer
    img = Image.open(dest)
    assert img.format == writer
    assert img.mode == "RGB"
    assert img.size == (2, 1)


def test_explicit_format_wins(tmp_path: Path):
    dest = tmp_path / "background.out"
    assert write_raster(_rgba(), str(dest), fmt="png") == "PNG"
    assert Image.open(dest).format == "PNG"
