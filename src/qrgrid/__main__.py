"""Command line interface for encoding QR Code symbols."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import generator, render
from .errors import DataTooLongError
from .qrcode import QrCode
from .segment import make_bytes, make_segments

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qrgrid", description="Encode text or data as a QR Code symbol")
    data_group = parser.add_mutually_exclusive_group(required=True)
    data_group.add_argument("--text", help="Literal text/URL to encode")
    data_group.add_argument("--file", type=Path, help="Encode the raw bytes of a file")
    data_group.add_argument("--totp-secret", help="Encode a TOTP key URI for this secret")

    parser.add_argument("--service", help="TOTP service (issuer) name", default="")
    parser.add_argument("--user", help="TOTP account name", default="")
    parser.add_argument("--digits", type=int, default=6, help="TOTP code length")

    parser.add_argument("-o", "--output", type=Path, help="Write a PNG here instead of printing the symbol")
    parser.add_argument("--ecc", choices=["low", "medium", "quartile", "high"], default="low", help="Error correction level")
    parser.add_argument("--mask", type=int, default=-1, help="Force a mask 0-7 (-1 picks the best)")
    parser.add_argument("--min-version", type=int, default=QrCode.MIN_VERSION, help="Smallest version to try")
    parser.add_argument("--max-version", type=int, default=QrCode.MAX_VERSION, help="Largest version to try")
    parser.add_argument("--no-boost", action="store_true", help="Keep the requested error correction level")
    parser.add_argument("--utf8", action="store_true", help="Encode non-Latin-1 text as UTF-8 bytes")
    parser.add_argument("--border", type=int, default=4, help="Quiet-zone width in modules")
    parser.add_argument("--square-size", type=int, default=5, help="Pixels per module in PNG output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log encoding details")
    return parser


def build_segments(args: argparse.Namespace) -> list:
    if args.totp_secret is not None:
        if not args.service or not args.user:
            raise SystemExit("--service and --user are required when using --totp-secret")
        uri = generator.build_totp_uri(args.totp_secret, args.service, args.user, digits=args.digits)
        return make_segments(uri, code_units=not args.utf8)
    if args.text is not None:
        return make_segments(args.text, code_units=not args.utf8)
    if args.file is not None:
        return [make_bytes(args.file.read_bytes())]
    raise SystemExit("No payload provided")


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        segments = build_segments(args)
        qr = QrCode.encode_segments(
            segments,
            generator.ecc_from_name(args.ecc),
            min_version=args.min_version,
            max_version=args.max_version,
            mask=args.mask,
            boost_ecl=not args.no_boost,
        )
    except DataTooLongError as exc:
        raise SystemExit(f"Payload does not fit: {exc}") from exc
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    logger.info("Version %d, level %s, mask %d", qr.version, qr.error_correction_level.name, qr.mask)
    if args.output is None:
        sys.stdout.write(render.render_text(qr, border=args.border))
        return
    args.output.write_bytes(render.render_png(qr, square_size=args.square_size, border=args.border))
    parser.exit(0, f"Saved PNG to {args.output}\n")


if __name__ == "__main__":
    main()
