import pytest

from tilepal.core import BuildConfig, Colour, ConfigError, ConfigLoader, TileSize


CONFIG = """
transparent_colour: "#ff00ff"
tile_size: 8
output_dir: build/gfx
inc: true
name: game
images:
  water_tiles:
    path: water_tiles.png
  font:
    path: fonts/font.png
    tile_size: 16
  title: title.png
colours:
  text_colour: "#ffffff"
  shadow: [0, 0, 0]
unknown_key: ignored
"""


def test_load_resolves_paths_against_config(tmp_path):
    path = tmp_path / "gfx.yaml"
    path.write_text(CONFIG)

    config = ConfigLoader.load(path)

    assert config.transparent_colour == Colour(255, 0, 255)
    assert config.tile_size == TileSize.TILE_8
    assert config.output_dir == tmp_path / "build/gfx"
    assert config.inc is True
    assert config.name == "game"
    assert list(config.images) == ["water_tiles", "font", "title"]
    assert config.images['font'].path == tmp_path / "fonts/font.png"
    assert config.images['title'].path == tmp_path / "title.png"
    assert config.tile_size_for(config.images['font']) == TileSize.TILE_16
    assert config.tile_size_for(config.images['water_tiles']) == TileSize.TILE_8
    assert config.colours == {'text_colour': Colour(255, 255, 255), 'shadow': Colour(0, 0, 0)}


def test_defaults():
    config = BuildConfig.from_dict({})

    assert config.images == {}
    assert config.transparent_colour is None
    assert config.tile_size == TileSize.TILE_8
    assert config.inc is False


@pytest.mark.parametrize("data", [
    {'tile_size': 12},
    {'transparent_colour': "#12"},
    {'transparent_colour': 7},
    {'images': ["a.png"]},
    {'images': {'a': {'tile_size': 8}}},
    {'colours': {'bad': [300, 0, 0]}},
])
def test_invalid_values(data):
    with pytest.raises(ConfigError):
        BuildConfig.from_dict(data)


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("images: [unclosed")

    with pytest.raises(ConfigError):
        ConfigLoader.load(path)


def test_save_and_reload(tmp_path):
    path = tmp_path / "gfx.yaml"
    path.write_text(CONFIG)
    config = ConfigLoader.load(path)

    saved = ConfigLoader.save(config, tmp_path / "copy" / "gfx.yaml")
    reloaded = ConfigLoader.load(saved)

    assert reloaded.transparent_colour == config.transparent_colour
    assert reloaded.colours == config.colours
    assert reloaded.images['font'].path == config.images['font'].path
    assert reloaded.images['font'].tile_size == TileSize.TILE_16
