"""
Palette Bank Optimiser

Packs the colour sets of many tiles into as few 16-colour hardware banks
as a greedy set cover finds. Each bank is grown one colour at a time,
always taking the colour wanted by the most tiles that could still fit
in the bank, until nothing more can be gained or the bank is full.

Slot 0 of every bank is reserved for the transparent (backdrop) colour.

The result is deterministic for a given order of add_palette calls: ties
between colours go to the one seen first across all inputs.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .colour import Colour, TRANSPARENT_SENTINEL
from .errors import PaletteCapacityError, UncoverablePaletteError
from .palette16 import MAX_COLOURS, MAX_COLOURS_PER_PALETTE, Palette16


logger = logging.getLogger(__name__)

MAX_PALETTES = MAX_COLOURS // MAX_COLOURS_PER_PALETTE


@dataclass(frozen=True)
class Palette16OptimisationResults:
    """Banks produced by the optimiser and the bank chosen for each input"""
    optimised_palettes: List[Palette16]
    assignments: List[int]
    transparent_colour: Optional[Colour] = None

    @property
    def palette_count(self) -> int:
        return len(self.optimised_palettes)

    def palette_for(self, index: int) -> Palette16:
        """Bank assigned to input palette ``index``"""
        return self.optimised_palettes[self.assignments[index]]


class Palette16Optimiser:
    """
    Collects per-tile palettes and computes the covering banks.

    Use one optimiser per tileset build:

        optimiser = Palette16Optimiser(transparent_colour)
        for palette in tile_palettes:
            optimiser.add_palette(palette)
        results = optimiser.optimise()
    """

    def __init__(self, transparent_colour: Optional[Colour] = None):
        self.transparent_colour = transparent_colour
        self._palettes: List[Palette16] = []
        # First-seen order decides ties, so keep a list plus an index into it
        self._colours: List[Colour] = []
        self._colour_indices: Dict[Colour, int] = {}

    @property
    def palettes(self) -> List[Palette16]:
        return list(self._palettes)

    @property
    def colours(self) -> List[Colour]:
        return list(self._colours)

    def __len__(self) -> int:
        return len(self._palettes)

    def add_palette(self, palette: Palette16) -> int:
        """
        Register an input palette.

        Returns:
            Index of the palette, which is also its index in the assignments

        Raises:
            PaletteCapacityError: if more than 256 distinct colours have been seen
        """
        new_colours = [colour for colour in palette if colour not in self._colour_indices]

        # Checked before storing anything so a failed call leaves no trace
        if len(self._colours) + len(new_colours) > MAX_COLOURS:
            raise PaletteCapacityError(f"Cannot have over {MAX_COLOURS} colours")

        self._palettes.append(palette.copy())
        for colour in new_colours:
            self._colour_indices[colour] = len(self._colours)
            self._colours.append(colour)

        return len(self._palettes) - 1

    def optimise(self) -> Palette16OptimisationResults:
        """
        Build the covering banks.

        Each input palette is assigned the last bank that covers it, since
        every new bank re-claims all inputs it covers.

        Raises:
            UncoverablePaletteError: if more than 16 banks would be needed
        """
        assignments = [0] * len(self._palettes)
        optimised_palettes: List[Palette16] = []

        # Identical inputs are satisfied together
        unsatisfied = list(dict.fromkeys(self._palettes))

        while unsatisfied:
            palette = self._find_maximal_palette_for(unsatisfied)

            unsatisfied = [p for p in unsatisfied if not p.is_satisfied_by(palette)]

            for i, overall_palette in enumerate(self._palettes):
                if overall_palette.is_satisfied_by(palette):
                    assignments[i] = len(optimised_palettes)

            optimised_palettes.append(palette)
            logger.debug(
                "Bank %d: %d colours, %d palettes left",
                len(optimised_palettes) - 1, len(palette), len(unsatisfied)
            )

            if len(optimised_palettes) == MAX_PALETTES and unsatisfied:
                raise UncoverablePaletteError(
                    f"Failed to find covering palettes: {len(unsatisfied)} palettes "
                    f"still unsatisfied after {MAX_PALETTES} banks"
                )

        logger.info(
            "Packed %d palettes (%d colours) into %d banks",
            len(self._palettes), len(self._colours), len(optimised_palettes)
        )

        return Palette16OptimisationResults(
            optimised_palettes=optimised_palettes,
            assignments=assignments,
            transparent_colour=self.transparent_colour,
        )

    # Longer name used by asset build scripts
    optimise_palettes = optimise

    def _find_maximal_palette_for(self, unsatisfied: List[Palette16]) -> Palette16:
        palette = Palette16()

        palette.add_colour(
            self.transparent_colour if self.transparent_colour is not None
            else TRANSPARENT_SENTINEL
        )

        while len(palette) < MAX_COLOURS_PER_PALETTE:
            colour_usage = [0] * len(self._colours)
            a_colour_is_used = False

            for current_palette in unsatisfied:
                if palette.union_length(current_palette) > MAX_COLOURS_PER_PALETTE:
                    continue

                for colour in current_palette:
                    if colour in palette:
                        continue
                    colour_usage[self._colour_indices[colour]] += 1
                    a_colour_is_used = True

            if not a_colour_is_used:
                break

            # max() returns the first maximum, i.e. the lowest colour index
            best_index = max(range(len(colour_usage)), key=colour_usage.__getitem__)
            palette.add_colour(self._colours[best_index])

        return palette
