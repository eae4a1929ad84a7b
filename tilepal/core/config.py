"""
Build Configuration - YAML description of a tileset build

Example:

    transparent_colour: "#ff00ff"
    tile_size: 8
    output_dir: build/gfx
    inc: true
    images:
      water_tiles:
        path: water_tiles.png
      font:
        path: font.png
        tile_size: 16
    colours:
      text_colour: "#ffffff"
"""

import yaml
from pathlib import Path
from typing import Dict, Optional, Any
from dataclasses import dataclass, field

from .colour import Colour
from .errors import ConfigError
from .parser import TileSize


def parse_colour(value: Any) -> Colour:
    """Accept '#rrggbb[aa]' strings or [r, g, b(, a)] lists"""
    try:
        if isinstance(value, str):
            return Colour.from_hex(value)
        if isinstance(value, (list, tuple)):
            return Colour.from_tuple(value)
    except ValueError as e:
        raise ConfigError(str(e)) from None
    raise ConfigError(f"Invalid colour: {value!r}")


def parse_tile_size(value: Any) -> TileSize:
    if value not in (8, 16, 32):
        raise ConfigError(f"Invalid tile_size {value!r}. Available: [8, 16, 32]")
    return TileSize(value)


@dataclass
class ImageConfig:
    """One image in the build"""
    name: str
    path: Path
    tile_size: Optional[TileSize] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'path': str(self.path)}
        if self.tile_size is not None:
            data['tile_size'] = self.tile_size.value
        return data

    @classmethod
    def from_dict(cls, name: str, data: Any, base_dir: Optional[Path] = None) -> 'ImageConfig':
        if isinstance(data, str):
            data = {'path': data}
        if not isinstance(data, dict) or 'path' not in data:
            raise ConfigError(f"Image '{name}' needs a path")

        path = Path(data['path'])
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path

        tile_size = data.get('tile_size')
        return cls(
            name=name,
            path=path,
            tile_size=parse_tile_size(tile_size) if tile_size is not None else None,
        )


@dataclass
class BuildConfig:
    """All images compiled against one shared set of palette banks"""

    images: Dict[str, ImageConfig] = field(default_factory=dict)
    transparent_colour: Optional[Colour] = None
    tile_size: TileSize = TileSize.TILE_8

    # Named colours that must end up somewhere in the banks
    colours: Dict[str, Colour] = field(default_factory=dict)

    # Output settings
    output_dir: Path = Path('.')
    name: str = "palettes"
    inc: bool = False

    def tile_size_for(self, image: ImageConfig) -> TileSize:
        return image.tile_size or self.tile_size

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        data: Dict[str, Any] = {
            'name': self.name,
            'tile_size': self.tile_size.value,
            'output_dir': str(self.output_dir),
            'inc': self.inc,
            'images': {name: image.to_dict() for name, image in self.images.items()},
        }
        if self.transparent_colour is not None:
            data['transparent_colour'] = self.transparent_colour.to_hex()
        if self.colours:
            data['colours'] = {name: c.to_hex() for name, c in self.colours.items()}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> 'BuildConfig':
        """Create from dictionary; unknown keys are ignored"""
        if not isinstance(data, dict):
            raise ConfigError("Build configuration must be a mapping")

        images = data.get('images') or {}
        if not isinstance(images, dict):
            raise ConfigError("'images' must map names to image settings")

        colours = data.get('colours') or {}
        if not isinstance(colours, dict):
            raise ConfigError("'colours' must map names to colours")

        transparent = data.get('transparent_colour')
        output_dir = Path(data.get('output_dir', '.'))
        if base_dir is not None and not output_dir.is_absolute():
            output_dir = base_dir / output_dir

        return cls(
            images={
                name: ImageConfig.from_dict(name, image, base_dir)
                for name, image in images.items()
            },
            transparent_colour=parse_colour(transparent) if transparent is not None else None,
            tile_size=parse_tile_size(data.get('tile_size', 8)),
            colours={name: parse_colour(value) for name, value in colours.items()},
            output_dir=output_dir,
            name=str(data.get('name', 'palettes')),
            inc=bool(data.get('inc', False)),
        )


class ConfigLoader:
    """Loads and saves build configurations"""

    @staticmethod
    def load(path: str | Path) -> BuildConfig:
        """
        Load a build configuration from YAML.

        Relative paths in the file resolve against the file's directory.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with open(path, 'r') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Could not parse {path}: {e}") from e

        return BuildConfig.from_dict(data or {}, base_dir=path.parent)

    @staticmethod
    def save(config: BuildConfig, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

        return path
