import pytest

from cubraycast.colornames import COLOR_NAMES, lookup_color


def test_simple_names():
    assert lookup_color("snow") == 0xFFFAFA
    assert lookup_color("aquamarine") == 0x7FFFD4
    assert lookup_color("red") == 0xFF0000


def test_case_insensitive():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Ghost White") == lookup_color("ghost white")


def test_spaced_and_joined_forms_agree():
    for spaced, joined in [
        ("ghost white", "ghostwhite"),
        ("midnight blue", "midnightblue"),
        ("light green", "lightgreen"),
        ("dark red", "darkred"),
    ]:
        assert lookup_color(spaced) == lookup_color(joined)


def test_first_entry_wins_for_repeated_names():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_none_is_transparent():
    assert lookup_color("none") == -1
    assert lookup_color("NONE") == -1


def test_unknown_name():
    assert lookup_color("no such colour") is None
    assert lookup_color("") is None


@pytest.mark.parametrize("level", range(101))
def test_gray_and_grey_agree(level):
    assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_gray_extremes():
    assert lookup_color("gray0") == 0x0
    assert lookup_color("gray100") == 0xFFFFFF
    assert lookup_color("grey50") == 0x7F7F7F


def test_gray_shades_are_neutral_and_increasing():
    values = [lookup_color(f"gray{n}") for n in range(101)]
    assert values == sorted(values)
    for value in values:
        r, g, b = (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
        assert r == g == b


def test_numbered_shades():
    assert lookup_color("snow1") == 0xFFFAFA
    assert lookup_color("blue4") == 0x8B
    assert lookup_color("thistle4") == 0x8B7B8B


def test_all_values_in_range():
    for name, value in COLOR_NAMES.items():
        assert name == name.lower()
        assert value == -1 or 0 <= value <= 0xFFFFFF


def test_table_is_read_only():
    with pytest.raises(TypeError):
        COLOR_NAMES["snow"] = 0  # type: ignore[index]
    assert lookup_color("snow") == 0xFFFAFA