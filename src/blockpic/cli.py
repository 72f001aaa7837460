import argparse
import logging
import sys
from pathlib import Path

from blockpic.converter import image_to_ansi
from blockpic.errors import BlockpicError
from blockpic.pixel import BgColor
from blockpic.region import Region
from blockpic.terminal import get_terminal_size
from blockpic.view import Fit


def _parse_region(value: str) -> Region:
    try:
        x, y, width, height = (int(part) for part in value.split(","))
        return Region(x, y, width, height)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y,W,H with non-negative integers, got {value!r}") from None


def _parse_bg(value: str) -> BgColor:
    try:
        return BgColor.from_hex(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _parse_cells(value: str) -> int:
    try:
        cells = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number of cells, got {value!r}") from None
    if cells < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative number of cells, got {value!r}")
    return cells


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Render an image with half-block characters")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-W", "--width", type=_parse_cells, default=None, help="Output width in cells (default: terminal width)"
    )
    parser.add_argument(
        "-H",
        "--height",
        type=_parse_cells,
        default=None,
        help="Output height in cells (default: terminal height minus one)",
    )
    parser.add_argument(
        "-f",
        "--fit",
        default="zoom",
        choices=[f.value for f in Fit],
        help="How to fit the output area (default: zoom)",
    )
    parser.add_argument(
        "-b",
        "--bg",
        type=_parse_bg,
        default=BgColor(),
        help="Background for transparent pixels, as RRGGBB (default: 000000)",
    )
    parser.add_argument("-r", "--region", type=_parse_region, default=None, help="Show only the pixels in X,Y,W,H")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug output to stderr")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    columns, rows = get_terminal_size()
    width = args.width if args.width is not None else columns
    height = args.height if args.height is not None else max(1, rows - 1)

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    try:
        output = image_to_ansi(
            image_path,
            width=width,
            height=height,
            fit=Fit(args.fit),
            bg=args.bg,
            region=args.region,
        )
    except BlockpicError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(output)
