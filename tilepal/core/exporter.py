"""
Tileset Exporter - Turns optimised palettes and tilesets into hardware data

Outputs:
  - palette banks: 16 slots each, little-endian 15-bit colours
  - tile data: 4bpp, two pixels per byte with the left pixel in the low nibble
  - palette assignment: one byte per tile, the bank index
  - optional ca65 .inc listings and a JSON metadata sidecar
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from .colour import Colour, EMPTY_SLOT
from .errors import PaletteCapacityError
from .optimiser import Palette16OptimisationResults
from .palette16 import MAX_COLOURS_PER_PALETTE
from .parser import Tileset


logger = logging.getLogger(__name__)

SUBTILE_SIZE = 8


# =============================================================================
# Palette Data
# =============================================================================

def pad_palettes(
    results: Palette16OptimisationResults,
    colour_mapping: Optional[Dict[str, Colour]] = None
) -> List[List[Colour]]:
    """
    Expand every bank to exactly 16 colours.

    Named colours that no bank contains are placed into the free slots,
    filling banks in order. Remaining slots hold transparent black.

    Raises:
        PaletteCapacityError: if the named colours don't fit in the free slots
    """
    colour_mapping = colour_mapping or {}

    current_colours = {c for palette in results.optimised_palettes for c in palette}
    missing_colours = list(dict.fromkeys(
        colour for colour in colour_mapping.values() if colour not in current_colours
    ))

    padded = []
    for palette in results.optimised_palettes:
        colours = list(palette)
        free_slots = MAX_COLOURS_PER_PALETTE - len(colours)
        colours.extend(missing_colours[:free_slots])
        del missing_colours[:free_slots]
        colours.extend([EMPTY_SLOT] * (MAX_COLOURS_PER_PALETTE - len(colours)))
        padded.append(colours)

    if missing_colours:
        raise PaletteCapacityError("Not enough space left in palette for mapped colours!")

    return padded


def mapped_colour_indices(
    padded_palettes: List[List[Colour]],
    colour_mapping: Dict[str, Colour]
) -> Dict[str, int]:
    """Flat palette index (bank * 16 + slot) of the first occurrence of each named colour"""
    first_index: Dict[Colour, int] = {}
    for idx, colour in enumerate(c for palette in padded_palettes for c in palette):
        first_index.setdefault(colour, idx)

    return {name: first_index[colour] for name, colour in colour_mapping.items()}


def palette_bytes(padded_palettes: List[List[Colour]]) -> bytes:
    """Palette banks as little-endian 15-bit colours"""
    data = bytearray()
    for palette in padded_palettes:
        for colour in palette:
            value = colour.to_rgb15()
            data.append(value & 0xFF)
            data.append((value >> 8) & 0xFF)
    return bytes(data)


# =============================================================================
# Tile Data
# =============================================================================

def collapse_to_4bpp(indices: List[int]) -> bytes:
    """Pack palette indices two per byte, first pixel in the low nibble"""
    if len(indices) % 2:
        raise ValueError("4bpp data needs an even number of pixels")
    return bytes(
        (indices[i] & 0x0F) | ((indices[i + 1] & 0x0F) << 4)
        for i in range(0, len(indices), 2)
    )


def format_bytes_as_inc(data: bytes, label: str, bytes_per_line: int = 16) -> str:
    """Format byte data as ca65 .byte directives"""
    lines = [f"{label}:"]
    for i in range(0, len(data), bytes_per_line):
        chunk = data[i:i + bytes_per_line]
        hex_vals = ", ".join(f"${b:02X}" for b in chunk)
        lines.append(f"    .byte {hex_vals}")
    return "\n".join(lines) + "\n"


class TilesetExporter:
    """Exports tilesets and their palette banks to binary data"""

    @classmethod
    def tile_indices(
        cls,
        tileset: Tileset,
        results: Palette16OptimisationResults,
        assignment_offset: int = 0
    ) -> List[int]:
        """
        Slot index of every pixel in hardware order.

        Tiles larger than 8x8 are emitted as their 8x8 sub-tiles, row by row.
        """
        indices = []
        size = tileset.tile_size.pixels

        for tile in range(tileset.tile_count):
            palette = results.palette_for(assignment_offset + tile)
            block = tileset.tile_pixels(tile)

            for sub_y in range(0, size, SUBTILE_SIZE):
                for sub_x in range(0, size, SUBTILE_SIZE):
                    for y in range(sub_y, sub_y + SUBTILE_SIZE):
                        for x in range(sub_x, sub_x + SUBTILE_SIZE):
                            colour = Colour.from_tuple(block[y, x])
                            indices.append(
                                palette.colour_index(colour, results.transparent_colour)
                            )

        return indices

    @classmethod
    def tile_data(
        cls,
        tileset: Tileset,
        results: Palette16OptimisationResults,
        assignment_offset: int = 0
    ) -> bytes:
        return collapse_to_4bpp(cls.tile_indices(tileset, results, assignment_offset))

    @classmethod
    def tile_assignments(
        cls,
        tileset: Tileset,
        results: Palette16OptimisationResults,
        assignment_offset: int = 0
    ) -> bytes:
        assignments = results.assignments[assignment_offset:assignment_offset + tileset.tile_count]
        return bytes(assignments)

    @classmethod
    def export_palettes(
        cls,
        results: Palette16OptimisationResults,
        directory: str | Path,
        name: str = "palettes",
        colour_mapping: Optional[Dict[str, Colour]] = None,
        inc: bool = False
    ) -> Dict[str, Path]:
        """Write the padded banks plus a JSON sidecar with named colour slots"""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        colour_mapping = colour_mapping or {}

        padded = pad_palettes(results, colour_mapping)
        data = palette_bytes(padded)

        paths = {'palette': directory / f"{name}.pal.bin"}
        paths['palette'].write_bytes(data)

        if inc:
            paths['palette_inc'] = directory / f"{name}.pal.inc"
            paths['palette_inc'].write_text(format_bytes_as_inc(data, f"{name}_palette"))

        metadata = {
            'palettes': len(padded),
            'transparent_colour': (
                results.transparent_colour.to_hex() if results.transparent_colour is not None else None
            ),
            'banks': [[colour.to_hex() for colour in palette] for palette in padded],
            'mapped_colours': mapped_colour_indices(padded, colour_mapping),
        }
        paths['metadata'] = directory / f"{name}.json"
        with open(paths['metadata'], 'w') as f:
            json.dump(metadata, f, indent=2)

        return paths

    @classmethod
    def export_tileset(
        cls,
        tileset: Tileset,
        results: Palette16OptimisationResults,
        directory: str | Path,
        assignment_offset: int = 0,
        inc: bool = False
    ) -> Dict[str, Path]:
        """Write tile data and palette assignments for one tileset"""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        tiles = cls.tile_data(tileset, results, assignment_offset)
        assignments = cls.tile_assignments(tileset, results, assignment_offset)

        paths = {
            'tiles': directory / f"{tileset.name}.tiles.bin",
            'assignments': directory / f"{tileset.name}.map.bin",
        }
        paths['tiles'].write_bytes(tiles)
        paths['assignments'].write_bytes(assignments)

        if inc:
            paths['tiles_inc'] = directory / f"{tileset.name}.tiles.inc"
            paths['tiles_inc'].write_text(
                f"; {tileset.tile_count} tiles, 4bpp, {len(tiles)} bytes\n"
                + format_bytes_as_inc(tiles, f"{tileset.name}_tiles")
            )
            paths['assignments_inc'] = directory / f"{tileset.name}.map.inc"
            paths['assignments_inc'].write_text(
                format_bytes_as_inc(assignments, f"{tileset.name}_palette_assignment")
            )

        logger.debug("Exported '%s': %d tile bytes", tileset.name, len(tiles))
        return paths
