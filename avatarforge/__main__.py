"""CLI entry point for AvatarForge."""

import argparse
import logging
import sys
from pathlib import Path

from . import describe_identity, is_valid_identity, render
from .renderer import FORMATS, IMAGE_FORMATS
from .safezone import SHAPES
from .shapes import CHARACTER_SHAPES, verify_uniqueness
from .styles import DEFAULT_STYLE, STYLES

EXTENSIONS = {"png": ".png", "webp": ".webp", "jpeg": ".jpg"}


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="avatarforge",
        description="Generate deterministic glyph avatars from identity strings",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log pipeline details to stderr"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    rend = commands.add_parser(
        "render", parents=[common], help="Render an avatar to a file"
    )
    rend.add_argument("identity", help="Identity string, usually an email")
    rend.add_argument(
        "--size", "-s", type=int, default=256,
        help="Output size in pixels (default: 256)"
    )
    rend.add_argument(
        "--background", "-b", default="cosmos",
        help="cosmos, white, or any colour token (default: cosmos)"
    )
    rend.add_argument(
        "--shape", choices=SHAPES, default="rounded",
        help="Silhouette shape (default: rounded)"
    )
    rend.add_argument(
        "--format", "-f", choices=FORMATS, default="raster",
        help="raster image or vector SVG (default: raster)"
    )
    rend.add_argument(
        "--image-format", choices=IMAGE_FORMATS + ("jpg",), default="png",
        help="Raster encoding (default: png)"
    )
    rend.add_argument(
        "--quality", "-q", type=int, default=None,
        help="WEBP/JPEG quality 1-100"
    )
    rend.add_argument(
        "--style", choices=sorted(STYLES), default=DEFAULT_STYLE,
        help=f"Art style (default: {DEFAULT_STYLE})"
    )
    rend.add_argument(
        "--output", "-o", default=None,
        help="Output file path (default: avatar.<ext>)"
    )
    rend.add_argument(
        "--no-validate", action="store_true",
        help="Accept identities that are not email addresses"
    )

    brk = commands.add_parser(
        "breakdown", parents=[common],
        help="Show the shape and palette of each character"
    )
    brk.add_argument("identity", help="Identity string")

    commands.add_parser(
        "table", parents=[common],
        help="Print the character table and check it is unique"
    )
    return parser


def _render(parser, args):
    if not args.no_validate and not is_valid_identity(args.identity):
        parser.error(
            f"{args.identity!r} is not a valid email address "
            "(use --no-validate to render it anyway)"
        )

    try:
        artifact = render(
            args.identity,
            size=args.size,
            background=args.background,
            shape=args.shape,
            format=args.format,
            quality=args.quality,
            image_format=args.image_format,
            style=args.style,
        )
    except ValueError as exc:
        parser.error(str(exc))

    if args.output:
        output = Path(args.output)
    elif args.format == "vector":
        output = Path("avatar.svg")
    else:
        fmt = "jpeg" if args.image_format == "jpg" else args.image_format
        output = Path("avatar" + EXTENSIONS[fmt])

    output.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(artifact, str):
        output.write_text(artifact, encoding="utf-8")
    else:
        output.write_bytes(artifact)
    print(f"Saved avatar ({args.size}x{args.size}) to {output}")
    return 0


def _breakdown(args):
    rows = describe_identity(args.identity)
    if not rows:
        print("No supported characters.")
        return 0
    for char, shape, palette in rows:
        print(f"{char}  {shape.kind}/{shape.variant:<3} {shape.label:<16} "
              f"{' '.join(palette)}")
    return 0


def _table():
    for char, shape in CHARACTER_SHAPES.items():
        print(f"{char}  {shape.kind}/{shape.variant:<3} {shape.label:<16} "
              f"{shape.description}")

    report = verify_uniqueness()
    if report.ok:
        print(f"OK: {len(CHARACTER_SHAPES)} characters, all shapes unique")
        return 0
    for char, other, (kind, variant) in report.colliding_pairs:
        print(f"COLLISION: {char} and {other} share {kind}/{variant}",
              file=sys.stderr)
    return 1


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "render":
        return _render(parser, args)
    if args.command == "breakdown":
        return _breakdown(args)
    return _table()


if __name__ == "__main__":
    sys.exit(main())
