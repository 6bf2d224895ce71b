"""
Probing what the terminal can do.
"""

import os
import sys
import enum
import shutil
from collections import namedtuple


class ColorTier(enum.IntEnum):
    """How much color and styling a terminal supports."""

    NONE = 0
    BASIC = 1  # 16 colors and the common SGR attributes
    EXTENDED = 2  # 256 colors and 24-bit RGB


Capabilities = namedtuple("Capabilities", ["is_interactive", "width", "color_tier"])
Capabilities.__doc__ = """What the terminal supports, as seen at the start of a session.

* is_interactive: whether both input and output are attached to a terminal.
* width: the width of the terminal in columns.
* color_tier: a ColorTier.
"""


def _isatty(file):
    try:
        return bool(file.isatty())
    except (AttributeError, ValueError):
        return False


def probe(stdin=None, stdout=None, environ=None):
    """Get the Capabilities of the terminal attached to the given streams."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    environ = os.environ if environ is None else environ

    is_interactive = _isatty(stdin) and _isatty(stdout)
    width = shutil.get_terminal_size().columns
    color_tier = detect_color_tier(_isatty(stdout), environ)
    return Capabilities(is_interactive, width, color_tier)


def detect_color_tier(isatty, environ):
    """Determine the ColorTier from whether output is a tty, and the environment.

    Follows the NO_COLOR (https://no-color.org) and FORCE_COLOR conventions.
    """
    if environ.get("NO_COLOR"):
        return ColorTier.NONE
    force = environ.get("FORCE_COLOR")
    if force is not None:
        if force in ("2", "3"):
            return ColorTier.EXTENDED
        elif force in ("0", "false"):
            return ColorTier.NONE
        return ColorTier.BASIC

    term = environ.get("TERM", "")
    if not isatty or term == "dumb":
        return ColorTier.NONE
    if environ.get("COLORTERM", "").lower() in ("truecolor", "24bit"):
        return ColorTier.EXTENDED
    if "256" in term:
        return ColorTier.EXTENDED
    if sys.platform.startswith("win"):
        # Win10+ consoles do vt100 and 24-bit color
        return ColorTier.EXTENDED
    return ColorTier.BASIC
