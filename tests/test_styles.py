import pytest

from termprompt.styles import (
    RESET,
    index_to_rgb,
    sgr_codes,
    strip_styles,
    style,
    visible_len,
)
from termprompt.term import ColorTier


def test_style_basic():
    assert style("hi", "bold") == "\x1b[1mhi" + RESET
    assert style("hi", "bold red") == "\x1b[1;31mhi" + RESET
    assert style("hi", ["underline", "on_blue"]) == "\x1b[4;44mhi" + RESET
    assert style("hi", "bright_green") == "\x1b[92mhi" + RESET
    assert style("hi", "on_bright_white") == "\x1b[107mhi" + RESET


def test_style_emphasis():
    codes = sgr_codes("bold dim italic underline invert strike")
    assert codes == ["1", "2", "3", "4", "7", "9"]


def test_style_no_attributes():
    assert style("hi", "") == "hi"
    assert style("hi", []) == "hi"
    assert style("hi", "  ") == "hi"


def test_style_no_color():
    assert style("hi", "bold red", ColorTier.NONE) == "hi"
    # Unknown names are still an error
    with pytest.raises(ValueError):
        style("hi", "blod", ColorTier.NONE)


def test_style_unknown():
    with pytest.raises(ValueError):
        style("hi", "purple")
    with pytest.raises(ValueError):
        style("hi", "color(256)", ColorTier.EXTENDED)
    with pytest.raises(ValueError):
        style("hi", "#12345")


def test_style_extended():
    assert sgr_codes("color(208)", ColorTier.EXTENDED) == ["38", "5", "208"]
    assert sgr_codes("on_color(17)", ColorTier.EXTENDED) == ["48", "5", "17"]
    assert sgr_codes("#ff8800", ColorTier.EXTENDED) == ["38", "2", "255", "136", "0"]
    assert sgr_codes("on_#FF8800", ColorTier.EXTENDED) == ["48", "2", "255", "136", "0"]


def test_style_extended_downgrade():
    # On a basic terminal, extended colors map to the nearest basic color
    assert sgr_codes("#ff0000") == ["91"]
    assert sgr_codes("#cd0000") == ["31"]
    assert sgr_codes("on_#000000") == ["40"]
    assert sgr_codes("color(1)") == ["31"]
    assert sgr_codes("color(231)") == ["97"]
    assert sgr_codes("color(16)") == ["30"]


def test_index_to_rgb():
    assert index_to_rgb(0) == (0, 0, 0)
    assert index_to_rgb(16) == (0, 0, 0)
    assert index_to_rgb(196) == (255, 0, 0)
    assert index_to_rgb(231) == (255, 255, 255)
    assert index_to_rgb(232) == (8, 8, 8)
    assert index_to_rgb(255) == (238, 238, 238)


def test_strip_styles():
    text = style("a", "bold red") + "b" + style("c", "#ff8800", ColorTier.EXTENDED)
    assert strip_styles(text) == "abc"
    assert visible_len(text) == 3
    assert strip_styles("plain") == "plain"
