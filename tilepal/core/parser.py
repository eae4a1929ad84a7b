"""
Tileset Parser - Reads image files and splits them into 4bpp tiles
Supports: PNG, GIF, BMP, WEBP
"""

from PIL import Image
import numpy as np
import logging
from pathlib import Path
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .colour import Colour
from .errors import TilesetError
from .optimiser import Palette16Optimiser
from .palette16 import MAX_COLOURS_PER_PALETTE, Palette16


logger = logging.getLogger(__name__)


class TileSize(Enum):
    """Square tile sizes the display can address with one palette"""
    TILE_8 = 8
    TILE_16 = 16
    TILE_32 = 32

    @classmethod
    def from_pixels(cls, size: int) -> 'TileSize':
        try:
            return cls(int(size))
        except ValueError:
            available = [t.value for t in cls]
            raise TilesetError(f"Unsupported tile size {size}. Available: {available}") from None

    @property
    def pixels(self) -> int:
        return self.value


@dataclass
class Tileset:
    """An RGBA image cut into square tiles"""
    width: int
    height: int
    pixels: np.ndarray  # HxWx4 uint8
    tile_size: TileSize = TileSize.TILE_8
    name: str = "tileset"
    source_path: Optional[Path] = None

    @property
    def tiles_x(self) -> int:
        return self.width // self.tile_size.pixels

    @property
    def tiles_y(self) -> int:
        return self.height // self.tile_size.pixels

    @property
    def tile_count(self) -> int:
        return self.tiles_x * self.tiles_y

    def colour_at(self, x: int, y: int) -> Colour:
        return Colour.from_tuple(self.pixels[y, x])

    def tile_pixels(self, index: int) -> np.ndarray:
        """Pixels of tile ``index`` (row-major tile order)"""
        size = self.tile_size.pixels
        tx = index % self.tiles_x
        ty = index // self.tiles_x
        return self.pixels[ty * size:(ty + 1) * size, tx * size:(tx + 1) * size]

    def tile_palette(self, index: int, transparent_colour: Optional[Colour] = None) -> Palette16:
        """
        Collect the colours used by one tile.

        Transparent pixels count as ``transparent_colour`` when one is set.

        Raises:
            TilesetError: if the tile uses more than 16 colours
        """
        palette = Palette16()
        block = self.tile_pixels(index)

        for row in block:
            for pixel in row:
                colour = Colour.from_tuple(pixel)
                if transparent_colour is not None and colour.is_transparent():
                    colour = transparent_colour

                if not palette.try_add_colour(colour):
                    tx = index % self.tiles_x
                    ty = index // self.tiles_x
                    raise TilesetError(
                        f"Tile {index} at ({tx}, {ty}) of '{self.name}' uses more than "
                        f"{MAX_COLOURS_PER_PALETTE} colours"
                    )

        return palette


class TilesetParser:
    """Parses image files into Tileset objects"""

    SUPPORTED_FORMATS = {'.png', '.gif', '.bmp', '.webp'}

    @classmethod
    def parse(cls, path: str | Path, tile_size: TileSize | int = TileSize.TILE_8) -> Tileset:
        """Parse an image file into a Tileset

        Args:
            path: Path to the image file
            tile_size: Size of the tiles that share one palette (8, 16 or 32)
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        suffix = path.suffix.lower()
        if suffix not in cls.SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported format: {suffix}")

        with Image.open(path) as img:
            # Convert to RGBA
            if img.mode != 'RGBA':
                img = img.convert('RGBA')
            pixels = np.array(img)

        tileset = cls.from_array(pixels, name=path.stem, tile_size=tile_size)
        tileset.source_path = path
        return tileset

    @classmethod
    def from_array(
        cls,
        pixels: np.ndarray,
        name: str = "tileset",
        tile_size: TileSize | int = TileSize.TILE_8
    ) -> Tileset:
        """Create a Tileset from a numpy array"""
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError("Pixels must be HxWx3 or HxWx4 array")

        if not isinstance(tile_size, TileSize):
            tile_size = TileSize.from_pixels(tile_size)

        # Ensure RGBA
        if pixels.shape[2] == 3:
            alpha = np.full((*pixels.shape[:2], 1), 255, dtype=pixels.dtype)
            pixels = np.concatenate([pixels, alpha], axis=2)

        height, width = pixels.shape[:2]
        size = tile_size.pixels
        if width % size != 0 or height % size != 0:
            raise TilesetError(
                f"Image dimensions ({width}x{height}) of '{name}' must be multiples of {size}"
            )

        return Tileset(
            width=width,
            height=height,
            pixels=pixels.astype(np.uint8),
            tile_size=tile_size,
            name=name,
        )


def add_tileset(
    optimiser: Palette16Optimiser,
    tileset: Tileset,
    transparent_colour: Optional[Colour] = None
) -> int:
    """
    Register every tile of a tileset with an optimiser.

    Transparent pixels are mapped to the optimiser's transparent colour
    unless another one is given.

    Returns:
        Assignment offset: the optimiser index of the tileset's first tile
    """
    if transparent_colour is None:
        transparent_colour = optimiser.transparent_colour

    offset = len(optimiser)
    for index in range(tileset.tile_count):
        optimiser.add_palette(tileset.tile_palette(index, transparent_colour))

    logger.debug("Added %d tiles of '%s' at offset %d", tileset.tile_count, tileset.name, offset)
    return offset
