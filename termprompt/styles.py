"""
Turning logical styles like "bold red" into SGR escape sequences.

The main function is ``style(text, attributes, tier)``. Attributes can be a
string of space-separated names, or an iterable of names:

* Emphasis: bold, dim, italic, underline, invert, strike.
* Foreground colors: black, red, green, yellow, blue, magenta, cyan, white,
  and their bright_ variants, e.g. bright_red.
* Background colors: the same names, prefixed with "on_", e.g. on_blue.
* Extended colors: "color(208)" for a 256-color index, "#ff8800" for 24-bit
  RGB. Both also work with the "on_" prefix. On a terminal with only basic
  color support these are mapped to the nearest basic color.
"""

import re

from .term.capabilities import ColorTier


RESET = "\x1b[0m"

EMPHASIS = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underline": 4,
    "invert": 7,
    "strike": 9,
}

BASIC_COLORS = ["black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"]

# Approximate RGB values of the basic colors, used to downgrade colors
_BASIC_RGB = [
    (0, 0, 0),
    (205, 0, 0),
    (0, 205, 0),
    (205, 205, 0),
    (0, 0, 238),
    (205, 0, 205),
    (0, 205, 205),
    (229, 229, 229),
    (127, 127, 127),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (92, 92, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
]

_re_sgr = re.compile(r"\x1b\[[0-9;]*m")
_re_index = re.compile(r"^color\((\d{1,3})\)$")
_re_rgb = re.compile(r"^#([0-9a-fA-F]{6})$")


def style(text, attributes, tier=ColorTier.BASIC):
    """Apply the given style attributes to text.

    Returns the text wrapped in the escape codes for the attributes, and a
    reset. With ``ColorTier.NONE`` or no attributes, the text is returned
    unchanged. Raises ValueError for unknown attributes.
    """
    codes = sgr_codes(attributes, tier)
    if not codes or tier == ColorTier.NONE:
        return text
    return "\x1b[" + ";".join(codes) + "m" + text + RESET


def sgr_codes(attributes, tier=ColorTier.BASIC):
    """Get the list of SGR parameters (as strings) for the given attributes."""
    if isinstance(attributes, str):
        attributes = attributes.split()
    codes = []
    for name in attributes:
        name = name.strip().lower()
        if not name:
            continue
        if name in EMPHASIS:
            codes.append(str(EMPHASIS[name]))
        elif name.startswith("on_"):
            codes.extend(_color_codes(name[3:], True, tier, name))
        else:
            codes.extend(_color_codes(name, False, tier, name))
    return codes


def _color_codes(name, background, tier, orig_name):
    offset = 10 if background else 0

    if name in BASIC_COLORS:
        return [str(30 + offset + BASIC_COLORS.index(name))]
    elif name.startswith("bright_") and name[7:] in BASIC_COLORS:
        return [str(90 + offset + BASIC_COLORS.index(name[7:]))]

    m = _re_index.match(name)
    if m:
        index = int(m.group(1))
        if index > 255:
            raise ValueError(f"256-color index must be 0-255, got {index}")
        if tier >= ColorTier.EXTENDED:
            return [str(38 + offset), "5", str(index)]
        return [_basic_code(index_to_rgb(index), offset)]

    m = _re_rgb.match(name)
    if m:
        hex = m.group(1)
        rgb = int(hex[0:2], 16), int(hex[2:4], 16), int(hex[4:6], 16)
        if tier >= ColorTier.EXTENDED:
            return [str(38 + offset), "2"] + [str(v) for v in rgb]
        return [_basic_code(rgb, offset)]

    raise ValueError(f"Unknown style attribute: {orig_name!r}")


def index_to_rgb(index):
    """Convert a 256-color palette index to an RGB tuple."""
    if index < 16:
        return _BASIC_RGB[index]
    elif index < 232:
        index -= 16
        levels = [0, 95, 135, 175, 215, 255]
        return levels[index // 36], levels[(index // 6) % 6], levels[index % 6]
    else:
        v = 8 + (index - 232) * 10
        return v, v, v


def _basic_code(rgb, offset):
    def dist(i):
        return sum((a - b) ** 2 for a, b in zip(rgb, _BASIC_RGB[i]))

    i = min(range(16), key=dist)
    if i < 8:
        return str(30 + offset + i)
    return str(90 + offset + i - 8)


def strip_styles(text):
    """Remove SGR escape sequences from the text."""
    return _re_sgr.sub("", text)


def visible_len(text):
    """Get the length of the text as shown in the terminal (ignoring styles)."""
    return len(strip_styles(text))
