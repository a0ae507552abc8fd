from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, Final

from domain.background import CaptureError, CaptureResult
from pydantic import ValidationError
from ports.display import DisplayQueryError, DisplayServerPort
from shared.config.loader import load_bgdump_settings

from apps.bgdump.compose import build_display, build_service
from apps.bgdump.output import resolve_format, write_raster
from apps.bgdump.settings import BgdumpSettings

LOG: Final = logging.getLogger("bgdump")

USAGE: Final = "bgdump [options] [OUTFILE.png|OUTFILE.ppm|OUTFILE.jpg|...|-]"
DESCRIPTION: Final = (
    "bgdump saves the current X11 background to the specified file (or stdout for -)."
)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="bgdump", usage=USAGE, description=DESCRIPTION)
    ap.add_argument("outfile", nargs="?", default=None, help="Output path, or - for stdout.")
    ap.add_argument("--display", default=None, help="X display to connect to.")
    ap.add_argument("--format", default=None, help="Force format (png, ppm, jpeg, ...).")
    ap.add_argument(
        "--no-mask", action="store_true", help="Keep regions outside every monitor."
    )
    ap.add_argument(
        "--skip-mask-on-error",
        action="store_true",
        help="Write the unmasked background if the monitor layout cannot be read.",
    )
    ap.add_argument("--profile", default=None, help="Config profile under configs/profiles.")
    ap.add_argument("--verbose", action="store_true", help="Log every query.")
    ap.add_argument("--quiet", action="store_true", help="Only report errors.")
    return ap.parse_args(argv)


def _apply_cli(settings: BgdumpSettings, args: argparse.Namespace) -> BgdumpSettings:
    capture = settings.capture.model_copy()
    output = settings.output.model_copy()
    if args.display is not None:
        capture.display = args.display
    if args.no_mask:
        capture.mask_offscreen = False
    if args.skip_mask_on_error:
        capture.on_layout_unavailable = "skip"
    if args.outfile is not None:
        output.path = args.outfile
    if args.format is not None:
        output.format = args.format

    level = settings.log_level
    if args.verbose:
        level = "DEBUG"
    elif args.quiet:
        level = "ERROR"
    return settings.model_copy(update={"capture": capture, "output": output, "log_level": level})


def run(
    settings: BgdumpSettings,
    display: DisplayServerPort | None = None,
    stream: IO[bytes] | None = None,
) -> CaptureResult:
    """Capture once and write the result where the settings say."""
    # fail on a bad destination before talking to the server
    fmt = resolve_format(settings.output.path, settings.output.format)
    if display is None:
        display = build_display(settings)
    try:
        result = build_service(settings, display).capture()
    finally:
        display.close()
    write_raster(result.raster, settings.output.path, fmt, stream=stream)
    return result


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        settings = _apply_cli(load_bgdump_settings(profile=args.profile), args)
    except (RuntimeError, ValidationError) as ex:
        print(f"[bgdump] config error: {ex}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="[bgdump] %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        result = run(settings)
    except CaptureError as ex:
        print(f"[bgdump] {type(ex).__name__}: {ex}", file=sys.stderr)
        return 1
    except DisplayQueryError as ex:
        print(f"[bgdump] display error: {ex}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as ex:
        print(f"[bgdump] output error: {ex}", file=sys.stderr)
        return 1

    LOG.info(
        "background %dx%d, %d display(s), masked=%s",
        result.raster.width,
        result.raster.height,
        len(result.layout),
        result.masked,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
