"""
tilepal - Core palette and tileset handling
"""

from .colour import Colour, TRANSPARENT_SENTINEL, EMPTY_SLOT
from .errors import (
    PaletteError, PaletteCapacityError, UncoverablePaletteError,
    ColourLookupError, TilesetError, ConfigError,
)
from .palette16 import Palette16, MAX_COLOURS, MAX_COLOURS_PER_PALETTE
from .optimiser import Palette16Optimiser, Palette16OptimisationResults, MAX_PALETTES
from .parser import TileSize, Tileset, TilesetParser, add_tileset
from .exporter import (
    TilesetExporter,
    pad_palettes, mapped_colour_indices, palette_bytes,
    collapse_to_4bpp, format_bytes_as_inc,
)
from .config import BuildConfig, ImageConfig, ConfigLoader, parse_colour

__all__ = [
    # Colours
    'Colour', 'TRANSPARENT_SENTINEL', 'EMPTY_SLOT',
    # Errors
    'PaletteError', 'PaletteCapacityError', 'UncoverablePaletteError',
    'ColourLookupError', 'TilesetError', 'ConfigError',
    # Palettes
    'Palette16', 'MAX_COLOURS', 'MAX_COLOURS_PER_PALETTE',
    'Palette16Optimiser', 'Palette16OptimisationResults', 'MAX_PALETTES',
    # Tilesets
    'TileSize', 'Tileset', 'TilesetParser', 'add_tileset',
    # Export
    'TilesetExporter',
    'pad_palettes', 'mapped_colour_indices', 'palette_bytes',
    'collapse_to_4bpp', 'format_bytes_as_inc',
    # Configuration
    'BuildConfig', 'ImageConfig', 'ConfigLoader', 'parse_colour',
]
