# apps/bgdump/output.py
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, Final

from domain.background import CanonicalRaster
from PIL import Image

LOG: Final = logging.getLogger("bgdump.output")

STDOUT: Final = "-"

# short names that differ from the Pillow writer id
FORMATS: Final = {"png": "PNG", "ppm": "PPM", "pnm": "PPM", "jpg": "JPEG"}
# writers that keep an RGBA alpha channel; everything else gets RGB
ALPHA_WRITERS: Final = frozenset({"PNG", "TIFF", "WEBP", "TGA"})


def _writer(fmt: str) -> str:
    Image.init()
    name = FORMATS.get(fmt.lower(), fmt.upper())
    if name not in Image.SAVE:
        raise ValueError(f"Unknown output format: {fmt}")
    return name


def infer_format(dest: str) -> str:
    """Pillow writer id for ``dest``: PNG for stdout, else from the extension."""
    if dest == STDOUT:
        return "PNG"
    suffix = Path(dest).suffix.lower()
    name = Image.registered_extensions().get(suffix)
    if name is None or name not in Image.SAVE:
        raise ValueError(f"Cannot tell the image format from {dest!r}; use e.g. .png or .ppm")
    return name


def resolve_format(dest: str, fmt: str | None = None) -> str:
    return _writer(fmt) if fmt else infer_format(dest)


def to_image(raster: CanonicalRaster) -> Image.Image:
    mode = "RGBA" if raster.has_alpha else "RGB"
    return Image.frombytes(mode, raster.size(), raster.pixels)


def write_raster(
    raster: CanonicalRaster,
    dest: str,
    fmt: str | None = None,
    stream: IO[bytes] | None = None,
) -> str:
    """Encode ``raster`` to ``dest`` (a path or "-"). Returns the Pillow writer used."""
    name = resolve_format(dest, fmt)

    image = to_image(raster)
    if image.mode == "RGBA" and name not in ALPHA_WRITERS:
        # masked pixels are transparent black and stay black
        LOG.info("%s output drops the alpha channel", name)
        image = image.convert("RGB")

    if dest == STDOUT:
        out = stream if stream is not None else sys.stdout.buffer
        image.save(out, format=name)
        out.flush()
    else:
        image.save(dest, format=name)
    LOG.info("wrote %dx%d %s to %s", raster.width, raster.height, name, dest)
    return name
