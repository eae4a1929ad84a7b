import pytest

from tilepal.core import Colour, Palette16, PaletteCapacityError, ColourLookupError

from .conftest import make_colours


def test_add_colour_reports_insertion():
    palette = Palette16()
    red = Colour(255, 0, 0)

    assert palette.add_colour(red)
    assert not palette.add_colour(red)
    assert len(palette) == 1


def test_add_colour_fails_when_full():
    palette = Palette16(make_colours(16))

    # Existing colours are still fine
    assert not palette.add_colour(make_colours(1)[0])

    with pytest.raises(PaletteCapacityError):
        palette.add_colour(Colour(1, 2, 3))
    assert len(palette) == 16


def test_try_add_colour_reports_fullness():
    palette = Palette16(make_colours(15))

    assert palette.try_add_colour(Colour(1, 2, 3))
    assert palette.try_add_colour(Colour(1, 2, 3))
    assert not palette.try_add_colour(Colour(4, 5, 6))
    assert len(palette) == 16
    assert Colour(4, 5, 6) not in palette


def test_iteration_keeps_insertion_order():
    colours = [Colour(9, 9, 9), Colour(1, 1, 1), Colour(5, 5, 5)]
    palette = Palette16()
    for colour in colours + colours:
        palette.add_colour(colour)

    assert list(palette) == colours
    assert palette.colours == tuple(colours)


def test_order_matters_for_equality_but_not_for_set_queries():
    a, b = Colour(1, 0, 0), Colour(0, 1, 0)
    ab = Palette16([a, b])
    ba = Palette16([b, a])

    assert ab != ba
    assert len({ab, ba, Palette16([a, b])}) == 2
    assert ab.union_length(ba) == 2
    assert ab.is_satisfied_by(ba)
    assert ba.is_satisfied_by(ab)


def test_union_length():
    first = Palette16(make_colours(5))
    second = Palette16(make_colours(5, start=3))

    assert first.union_length(second) == 8
    assert first.union_length(Palette16()) == 5


def test_is_satisfied_by_is_subset():
    small = Palette16(make_colours(3))
    big = Palette16(make_colours(6))

    assert small.is_satisfied_by(big)
    assert not big.is_satisfied_by(small)
    assert Palette16().is_satisfied_by(small)


def test_colour_index():
    colours = make_colours(4)
    palette = Palette16(colours)

    assert [palette.colour_index(c) for c in colours] == [0, 1, 2, 3]


def test_colour_index_redirects_transparent_pixels():
    transparent = Colour(255, 0, 255)
    palette = Palette16([transparent, Colour(1, 1, 1), Colour(2, 2, 2)])

    # Any fully transparent pixel uses the override's slot
    assert palette.colour_index(Colour(12, 34, 56, 0), transparent) == 0
    assert palette.colour_index(Colour(0, 0, 0, 0), transparent) == 0
    assert palette.colour_index(Colour(2, 2, 2), transparent) == 2


def test_colour_index_missing_colour_fails():
    palette = Palette16([Colour(1, 1, 1)])

    with pytest.raises(ColourLookupError):
        palette.colour_index(Colour(2, 2, 2))

    # Without an override a transparent pixel is looked up as itself
    with pytest.raises(ColourLookupError):
        palette.colour_index(Colour(1, 1, 1, 0))


def test_copy_is_independent():
    palette = Palette16([Colour(1, 1, 1)])
    clone = palette.copy()
    clone.add_colour(Colour(2, 2, 2))

    assert len(palette) == 1
    assert len(clone) == 2
