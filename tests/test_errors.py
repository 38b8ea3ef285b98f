import pytest

from cubraycast.errors import CubError, MapError, TextureError, is_digit_string


@pytest.mark.parametrize("text", ["255", "0", " 42\n", "007"])
def test_digit_strings_accepted(text):
    assert is_digit_string(text) is True


@pytest.mark.parametrize("text", ["", "  ", "12a", "-1", "1 2", "+3"])
def test_non_digit_strings_rejected(text):
    assert is_digit_string(text) is False


def test_map_error_carries_message_and_exit_code():
    err = MapError("Error: hey, honey, your map is bad")
    assert str(err) == "Error: hey, honey, your map is bad"
    assert err.exit_code == 1
    assert isinstance(err, CubError)


def test_texture_error_is_not_a_map_error():
    err = TextureError("Texture file not found")
    assert str(err) == "Texture file not found"
    assert err.exit_code == 1
    assert isinstance(err, CubError)
    assert not isinstance(err, MapError)