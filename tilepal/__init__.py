"""
tilepal - Palette bank packing for 4bpp tiled displays
"""

from pathlib import Path
from typing import Dict, List, Tuple

from .core import (
    Colour, Palette16, Palette16Optimiser, Palette16OptimisationResults,
    Tileset, TilesetParser, TilesetExporter, BuildConfig, ConfigLoader,
    PaletteError, add_tileset,
)

__version__ = "0.1.0"
__all__ = [
    'Colour',
    'Palette16',
    'Palette16Optimiser',
    'Palette16OptimisationResults',
    'TilesetParser',
    'TilesetExporter',
    'BuildConfig',
    'ConfigLoader',
    'PaletteError',
    'optimise_images',
    'compile_tileset',
    'analyze',
]


def optimise_images(
    config: BuildConfig
) -> Tuple[Palette16OptimisationResults, List[Tuple[Tileset, int]]]:
    """
    Load every image of a build and pack all tiles into shared banks.

    Args:
        config: Build configuration

    Returns:
        The optimisation results and (tileset, assignment offset) pairs
    """
    optimiser = Palette16Optimiser(config.transparent_colour)
    tilesets = []

    for image in config.images.values():
        tileset = TilesetParser.parse(image.path, tile_size=config.tile_size_for(image))
        tileset.name = image.name
        offset = add_tileset(optimiser, tileset)
        tilesets.append((tileset, offset))

    return optimiser.optimise(), tilesets


def compile_tileset(config: BuildConfig) -> Dict[str, Path]:
    """
    Run a full build: optimise palettes and write all output files.

    Returns:
        Mapping of output kind to written path
    """
    results, tilesets = optimise_images(config)

    paths = TilesetExporter.export_palettes(
        results,
        config.output_dir,
        name=config.name,
        colour_mapping=config.colours,
        inc=config.inc,
    )
    for tileset, offset in tilesets:
        written = TilesetExporter.export_tileset(
            tileset, results, config.output_dir, assignment_offset=offset, inc=config.inc
        )
        paths.update({f"{tileset.name}.{kind}": path for kind, path in written.items()})

    return paths


def analyze(config: BuildConfig) -> dict:
    """
    Optimise a build without writing anything.

    Returns:
        Dictionary with the banks and per-image assignments
    """
    results, tilesets = optimise_images(config)

    return {
        'palette_count': results.palette_count,
        'palettes': [
            [colour.to_hex() for colour in palette]
            for palette in results.optimised_palettes
        ],
        'images': {
            tileset.name: {
                'tiles': tileset.tile_count,
                'assignments': results.assignments[offset:offset + tileset.tile_count],
            }
            for tileset, offset in tilesets
        },
    }
