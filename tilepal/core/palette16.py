"""
Palette16 - a single 4bpp palette bank

Holds at most 16 distinct colours. Position matters: a colour's index is
the hardware slot that tile pixels refer to, so two palettes with the same
colours in a different order are different palettes. The set queries
(union_length, is_satisfied_by) ignore order.
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from .colour import Colour
from .errors import ColourLookupError, PaletteCapacityError


MAX_COLOURS = 256
MAX_COLOURS_PER_PALETTE = 16


class Palette16:
    """Ordered, duplicate-free list of up to 16 colours"""

    def __init__(self, colours: Optional[Iterable[Colour]] = None):
        self._colours: List[Colour] = []
        for colour in colours or ():
            self.add_colour(colour)

    @property
    def colours(self) -> Tuple[Colour, ...]:
        return tuple(self._colours)

    def add_colour(self, colour: Colour) -> bool:
        """
        Add a colour if it is not already present.

        Returns:
            True if the colour was inserted, False if it was already there

        Raises:
            PaletteCapacityError: if the palette is full and the colour is new
        """
        if colour in self._colours:
            return False

        if len(self._colours) == MAX_COLOURS_PER_PALETTE:
            raise PaletteCapacityError(
                f"Can have at most {MAX_COLOURS_PER_PALETTE} colours in a single palette"
            )
        self._colours.append(colour)
        return True

    def try_add_colour(self, colour: Colour) -> bool:
        """
        Add a colour unless the palette is full.

        Returns:
            True if the colour is present afterwards, False if there was no room
        """
        if colour in self._colours:
            return True

        if len(self._colours) == MAX_COLOURS_PER_PALETTE:
            return False

        self._colours.append(colour)
        return True

    def colour_index(self, colour: Colour, transparent_colour: Optional[Colour] = None) -> int:
        """
        Slot index of a colour.

        Any transparent colour is looked up as ``transparent_colour`` when one
        is given, so every see-through pixel shares the same slot.

        Raises:
            ColourLookupError: if the colour is not in the palette
        """
        search = colour
        if transparent_colour is not None and colour.is_transparent():
            search = transparent_colour

        try:
            return self._colours.index(search)
        except ValueError:
            raise ColourLookupError(
                f"Can't get a colour index without it existing, "
                f"looking for {colour!r}, got {self._colours!r}"
            ) from None

    def union_length(self, other: 'Palette16') -> int:
        """Number of distinct colours across both palettes"""
        return len(set(self._colours) | set(other._colours))

    def is_satisfied_by(self, other: 'Palette16') -> bool:
        """True if every colour here is also in ``other``"""
        return set(self._colours).issubset(other._colours)

    def copy(self) -> 'Palette16':
        palette = Palette16()
        palette._colours = list(self._colours)
        return palette

    def __iter__(self) -> Iterator[Colour]:
        return iter(self._colours)

    def __len__(self) -> int:
        return len(self._colours)

    def __contains__(self, colour: object) -> bool:
        return colour in self._colours

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Palette16):
            return NotImplemented
        return self._colours == other._colours

    def __hash__(self) -> int:
        return hash(tuple(self._colours))

    def __repr__(self) -> str:
        return f"Palette16({self._colours!r})"
