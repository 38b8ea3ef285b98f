import pytest

from cubraycast.colornames import lookup_color
from cubraycast.xpm import (
    TRANSPARENT,
    XpmError,
    XpmImage,
    find_unquoted,
    load_xpm,
    parse_xpm,
    parse_xpm_lines,
    split_words,
    strip_comments,
    text_to_rgb,
)

SAMPLE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"2 2 3 1",
"a c #FF0000",
"b c white",
"  c None",
// pixels
"ab",
"b ",
};
"""


def test_split_words_spaces_and_tabs():
    assert split_words("  a\tb  c ") == ["a", "b", "c"]


def test_split_words_empty():
    assert split_words(" \t ") == []


def test_find_unquoted_skips_quoted_text():
    assert find_unquoted('"/*" /*', "/*") == 5


def test_find_unquoted_missing_and_too_long():
    assert find_unquoted("abc", "x") == -1
    assert find_unquoted("ab", "abc") == -1


def test_strip_comments_keeps_length_and_strings():
    text = '/* XPM */\n"a//b" // note\n"c"'
    cleaned = strip_comments(text)
    assert len(cleaned) == len(text)
    assert "XPM" not in cleaned
    assert "note" not in cleaned
    assert '"a//b"' in cleaned
    assert cleaned.endswith('"c"')


def test_text_to_rgb_hex():
    assert text_to_rgb("#00ff00", None) == 0x00FF00


def test_text_to_rgb_two_word_name():
    assert text_to_rgb("light", "grey") == lookup_color("light grey")


def test_text_to_rgb_none_and_unknown():
    assert text_to_rgb("None", None) == -1
    assert text_to_rgb("nosuchcolour", None) == 0
    assert text_to_rgb("#zz", None) == 0


def test_parse_sample():
    image = parse_xpm(SAMPLE)
    assert (image.width, image.height) == (2, 2)
    assert image.pixel(0, 0) == 0xFF0000
    assert image.pixel(1, 0) == lookup_color("white")
    assert image.pixel(0, 1) == lookup_color("white")
    assert image.pixel(1, 1) == TRANSPARENT


def test_pixel_out_of_range():
    image = parse_xpm(SAMPLE)
    with pytest.raises(IndexError):
        image.pixel(2, 0)


def test_long_keys_first_definition_wins():
    image = parse_xpm_lines(["1 1 2 3", "abc c #000011", "abc c #000022", "abc"])
    assert image.pixels == (0x000011,)


def test_short_keys_last_definition_wins():
    image = parse_xpm_lines(["1 1 2 1", "a c #000011", "a c #000022", "a"])
    assert image.pixels == (0x000022,)


def test_unknown_key_gives_zero():
    image = parse_xpm_lines(["2 1 1 1", "a c #123456", "az"])
    assert image == XpmImage(2, 1, (0x123456, 0))


def test_zero_width_rejected():
    with pytest.raises(XpmError):
        parse_xpm_lines(["0 1 1 1", "a c #000000", "a"])


def test_colour_line_without_c_rejected():
    with pytest.raises(XpmError):
        parse_xpm_lines(["1 1 1 1", "a m #000000", "a"])


def test_missing_rows_rejected():
    with pytest.raises(XpmError):
        parse_xpm('"1 2 1 1", "a c #000000", "a"')


def test_load_xpm_round_trip(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(SAMPLE)
    assert load_xpm(path) == parse_xpm(SAMPLE)


def test_load_xpm_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "missing.xpm")