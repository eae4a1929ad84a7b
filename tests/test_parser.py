import numpy as np
import pytest

from tilepal.core import (
    Colour, Palette16Optimiser, TileSize, TilesetParser, TilesetError, add_tileset,
)


RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
GREEN = (0, 255, 0, 255)
CLEAR = (0, 0, 0, 0)


def two_tile_image():
    """16x8: left tile red/blue stripes, right tile green with a clear corner"""
    pixels = np.zeros((8, 16, 4), dtype=np.uint8)
    pixels[:, 0:4] = RED
    pixels[:, 4:8] = BLUE
    pixels[:, 8:16] = GREEN
    pixels[0, 8] = CLEAR
    return pixels


def test_from_array_splits_into_tiles():
    tileset = TilesetParser.from_array(two_tile_image(), name="stripes")

    assert (tileset.width, tileset.height) == (16, 8)
    assert (tileset.tiles_x, tileset.tiles_y, tileset.tile_count) == (2, 1, 2)
    assert tileset.tile_pixels(1).shape == (8, 8, 4)
    assert tileset.colour_at(0, 0) == Colour(*RED)


def test_rgb_arrays_become_opaque():
    tileset = TilesetParser.from_array(np.full((8, 8, 3), 40, dtype=np.uint8))

    assert tileset.colour_at(3, 3) == Colour(40, 40, 40, 255)


def test_tile_palette_in_pixel_order():
    tileset = TilesetParser.from_array(two_tile_image())

    assert list(tileset.tile_palette(0)) == [Colour(*RED), Colour(*BLUE)]
    assert list(tileset.tile_palette(1)) == [Colour(*CLEAR), Colour(*GREEN)]


def test_tile_palette_maps_clear_pixels_to_transparent_colour():
    transparent = Colour(255, 0, 255)
    tileset = TilesetParser.from_array(two_tile_image())

    assert list(tileset.tile_palette(1, transparent)) == [transparent, Colour(*GREEN)]


def test_tile_with_too_many_colours_fails():
    pixels = np.zeros((8, 8, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    pixels[:, :, 0] = np.arange(64, dtype=np.uint8).reshape(8, 8)

    tileset = TilesetParser.from_array(pixels, name="noisy")

    with pytest.raises(TilesetError, match="noisy"):
        tileset.tile_palette(0)


def test_dimensions_must_be_tile_multiples():
    with pytest.raises(TilesetError):
        TilesetParser.from_array(np.zeros((8, 12, 4), dtype=np.uint8))

    with pytest.raises(TilesetError):
        TilesetParser.from_array(np.zeros((16, 16, 4), dtype=np.uint8), tile_size=32)


def test_bad_tile_size_and_shape():
    with pytest.raises(TilesetError):
        TilesetParser.from_array(np.zeros((8, 8, 4), dtype=np.uint8), tile_size=12)

    with pytest.raises(ValueError):
        TilesetParser.from_array(np.zeros((8, 8), dtype=np.uint8))


def test_larger_tiles():
    pixels = np.zeros((16, 32, 4), dtype=np.uint8)
    tileset = TilesetParser.from_array(pixels, tile_size=TileSize.TILE_16)

    assert tileset.tile_count == 2
    assert tileset.tile_pixels(1).shape == (16, 16, 4)


def test_parse_png(write_png):
    path = write_png(two_tile_image(), name="level.png")

    tileset = TilesetParser.parse(path)

    assert tileset.name == "level"
    assert tileset.source_path == path
    assert np.array_equal(tileset.pixels, two_tile_image())


def test_parse_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        TilesetParser.parse(tmp_path / "missing.png")

    other = tmp_path / "tiles.txt"
    other.write_text("not an image")
    with pytest.raises(ValueError):
        TilesetParser.parse(other)


def test_add_tileset_returns_offsets():
    optimiser = Palette16Optimiser(Colour(255, 0, 255))
    first = TilesetParser.from_array(two_tile_image())
    second = TilesetParser.from_array(two_tile_image())

    assert add_tileset(optimiser, first) == 0
    assert add_tileset(optimiser, second) == 2
    assert len(optimiser) == 4
    # Clear pixels were registered as the optimiser's transparent colour
    assert Colour(*CLEAR) not in optimiser.colours
    assert Colour(255, 0, 255) in optimiser.colours
