"""
Colour value type

An RGBA colour with 8 bits per channel, hashable so it can key palettes
and lookup tables, and convertible to the 15-bit packed format used by
the display hardware (xbbbbbgggggrrrrr).
"""

import string
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Colour:
    """Immutable RGBA colour (0-255 per channel)"""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self):
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"Colour channel out of range 0-255: {self!r}")

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int, a: int = 255) -> 'Colour':
        return cls(int(r), int(g), int(b), int(a))

    @classmethod
    def from_tuple(cls, values: Sequence[int]) -> 'Colour':
        """Create from an (r, g, b) or (r, g, b, a) sequence"""
        if len(values) == 3:
            return cls.from_rgb(values[0], values[1], values[2])
        if len(values) == 4:
            return cls.from_rgb(values[0], values[1], values[2], values[3])
        raise ValueError(f"Expected 3 or 4 channels, got {len(values)}")

    @classmethod
    def from_hex(cls, value: str) -> 'Colour':
        """
        Parse '#RRGGBB' or '#RRGGBBAA' (the leading '#' is optional).
        """
        hex_str = value.strip().lstrip('#')
        if len(hex_str) not in (6, 8) or not set(hex_str) <= set(string.hexdigits):
            raise ValueError(f"Invalid hex colour: {value!r}")
        channels = [int(hex_str[i:i + 2], 16) for i in range(0, len(hex_str), 2)]
        return cls.from_tuple(channels)

    def is_transparent(self) -> bool:
        return self.a == 0

    def to_rgb15(self) -> int:
        """Pack into 15-bit hardware colour, red in the low bits"""
        return (self.r >> 3) | ((self.g >> 3) << 5) | ((self.b >> 3) << 10)

    def to_hex(self) -> str:
        if self.a == 255:
            return f"#{self.r:02x}{self.g:02x}{self.b:02x}"
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"

    def __repr__(self) -> str:
        return f"Colour({self.r}, {self.g}, {self.b}, {self.a})"


# Placeholder for slot 0 when no transparent colour is configured
TRANSPARENT_SENTINEL = Colour(255, 0, 255, 0)

# Filler for unused slots of exported banks
EMPTY_SLOT = Colour(0, 0, 0, 0)
