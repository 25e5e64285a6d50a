import argparse
import json
import logging
import sys
from pathlib import Path

from pixelgrid.config import GridConfig, parse_config_or_default
from pixelgrid.converter import format_colour, image_to_grid
from pixelgrid.errors import GridError


def _build_config(args: argparse.Namespace) -> GridConfig:
    overrides = {
        "width": args.width,
        "height": args.height,
        "scale": args.scale,
        "colors": args.colors,
    }
    base = parse_config_or_default(args.config).to_dict() if args.config else {}
    base.update({key: value for key, value in overrides.items() if value is not None})
    return parse_config_or_default(base)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render an image as a character grid with a colour palette")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument("-W", "--width", type=int, default=None, help="Output width in characters")
    parser.add_argument("-H", "--height", type=int, default=None, help="Output height in characters")
    parser.add_argument("-s", "--scale", type=float, default=None, help="Scale factor applied to the image size")
    parser.add_argument(
        "-c", "--colors", type=int, default=None, help="Maximum palette size, clamped to 2-256 (default: 64)"
    )
    parser.add_argument("--config", default=None, help="JSON configuration object; flags override its fields")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", default=False, help="Print the art and palette as JSON")
    output.add_argument("--colour", action="store_true", default=False, help="Preview with truecolor ANSI output")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        return 1

    try:
        result = image_to_grid(image_path, _build_config(args))
    except GridError as e:
        print(f"{image_path}: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False))
    elif args.colour:
        print(format_colour(result))
    else:
        print(result.art)
    return 0


if __name__ == "__main__":
    sys.exit(main())
