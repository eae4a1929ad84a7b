"""
Build errors raised by the palette pipeline

Every error here is fatal for the build: the inputs have to change before
a retry can succeed, so nothing in the library catches them.
"""


class PaletteError(RuntimeError):
    """Base class for palette build failures."""


class PaletteCapacityError(PaletteError):
    """Too many colours for a palette bank or for the whole device."""


class UncoverablePaletteError(PaletteError):
    """The input palettes cannot be covered by the available banks."""


class ColourLookupError(PaletteError):
    """A colour was looked up in a palette that does not contain it."""


class TilesetError(PaletteError):
    """The source image cannot be split into 4bpp tiles."""


class ConfigError(PaletteError):
    """The build configuration is invalid."""
