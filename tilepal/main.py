#!/usr/bin/env python
"""
tilepal CLI - Pack tile colours into 4bpp palette banks

Usage:
    python -m tilepal.main <config.yaml | image.png> [options]

Examples:
    python -m tilepal.main gfx.yaml                       # Build everything in the config
    python -m tilepal.main water.png -o build/            # Single image, 8x8 tiles
    python -m tilepal.main font.png --tile-size 16 --inc  # Also write .inc listings
    python -m tilepal.main gfx.yaml --analyze             # Just show the banks
"""

import argparse
import logging
import sys
from pathlib import Path

from . import analyze, compile_tileset
from .core import BuildConfig, ConfigLoader, ImageConfig, PaletteError, parse_colour
from .core.parser import TileSize


CONFIG_SUFFIXES = {'.yaml', '.yml'}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Pack tile colours into 4bpp palette banks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Config files (.yaml) list several images that share one set of banks.
Passing an image instead builds just that image.

Examples:
  %(prog)s gfx.yaml
  %(prog)s water.png -o build/ --transparent "#ff00ff"
  %(prog)s gfx.yaml --analyze
        """
    )

    parser.add_argument(
        'input',
        type=str,
        help='Build config (.yaml) or image (PNG, GIF, ...)'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output directory (config value or image directory if not specified)'
    )

    parser.add_argument(
        '-t', '--tile-size',
        type=int,
        default=None,
        choices=[t.value for t in TileSize],
        help='Tile size sharing one palette (default: 8)'
    )

    parser.add_argument(
        '--transparent',
        type=str,
        default=None,
        help='Transparent colour as #rrggbb (placed in slot 0 of every bank)'
    )

    parser.add_argument(
        '--inc',
        action='store_true',
        help='Also write ca65 .inc listings'
    )

    parser.add_argument(
        '--analyze',
        action='store_true',
        help='Print the banks and assignments without writing files'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug logging'
    )

    return parser


def load_config(args: argparse.Namespace) -> BuildConfig:
    """Build configuration from a YAML file or a single image plus flags"""
    input_path = Path(args.input)

    if input_path.suffix.lower() in CONFIG_SUFFIXES:
        config = ConfigLoader.load(input_path)
    else:
        config = BuildConfig(
            images={input_path.stem: ImageConfig(name=input_path.stem, path=input_path)},
            output_dir=input_path.parent,
            name=input_path.stem,
        )

    # Command line overrides
    if args.output:
        config.output_dir = Path(args.output)
    if args.tile_size:
        config.tile_size = TileSize(args.tile_size)
    if args.transparent:
        config.transparent_colour = parse_colour(args.transparent)
    if args.inc:
        config.inc = True

    return config


def print_analysis(summary: dict) -> None:
    print(f"Banks: {summary['palette_count']}")
    for i, palette in enumerate(summary['palettes']):
        print(f"  {i:2d}: {' '.join(palette)}")

    for name, image in summary['images'].items():
        print(f"\n{name}: {image['tiles']} tiles")
        print(f"  assignments: {image['assignments']}")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    try:
        config = load_config(args)

        if not config.images:
            print("Error: no images to build", file=sys.stderr)
            return 1

        if args.analyze:
            print_analysis(analyze(config))
            return 0

        paths = compile_tileset(config)
    except (PaletteError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for kind, path in paths.items():
        print(f"  {kind}: {path}")
    print(f"Output: {config.output_dir}")
    print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
