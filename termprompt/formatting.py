"""
Simple formatting of text blocks: rules, boxes and indentation.
"""

from collections import namedtuple

from . import config
from .styles import visible_len


BoxStyle = namedtuple(
    "BoxStyle",
    [
        "top_left",
        "top_right",
        "bottom_left",
        "bottom_right",
        "horizontal",
        "vertical",
        "junction_left",
        "junction_right",
        "junction_horizontal",
    ],
)

BOX_STYLES = {
    "ascii": BoxStyle("+", "+", "+", "+", "-", "|", "+", "+", "-"),
    "unicode": BoxStyle("┌", "┐", "└", "┘", "─", "│", "├", "┤", "─"),
    "double": BoxStyle("╔", "╗", "╚", "╝", "═", "║", "╠", "╣", "═"),
    "rounded": BoxStyle("╭", "╮", "╰", "╯", "─", "│", "├", "┤", "─"),
    "heavy": BoxStyle("┏", "┓", "┗", "┛", "━", "┃", "┣", "┫", "━"),
    "block": BoxStyle("█", "█", "█", "█", "█", "█", "█", "█", "█"),
    "minimal": BoxStyle(" ", " ", " ", " ", " ", "|", " ", " ", " "),
}


def get_box_style(name):
    """Get a BoxStyle by name. Unknown names give the ascii style."""
    if isinstance(name, BoxStyle):
        return name
    return BOX_STYLES.get((name or "").lower(), BOX_STYLES["ascii"])


def indent(text, levels=1, unit=None):
    """Indent each line of the text."""
    unit = config.INDENT_UNIT if unit is None else unit
    if not unit:
        raise ValueError("Indent unit cannot be empty")
    prefix = unit * max(0, levels)
    return "\n".join(prefix + line for line in text.split("\n"))


def rule(char="─", width=None, indent=0):
    """Get a horizontal rule of the given width."""
    width = config.RULE_WIDTH if width is None else width
    if width <= 0:
        raise ValueError("Width must be > 0")
    return config.INDENT_UNIT * max(0, indent) + char * width


def _pad(text, width):
    # Styled text is padded by its visible length
    return text + " " * (width - visible_len(text))


def box(content, title=None, box_style=None, indent=0):
    """Draw a box around the (possibly multi-line) content.

    If a title is given, it is shown in a separate section at the top.
    Returns a multi-line string (without trailing newline).
    """
    s = get_box_style(config.BOX_STYLE if box_style is None else box_style)
    prefix = config.INDENT_UNIT * max(0, indent)
    lines = content.splitlines() or [""]

    inner = max(visible_len(line) for line in lines)
    if title and title.strip():
        inner = max(inner, visible_len(title))

    result = [prefix + s.top_left + s.horizontal * (inner + 2) + s.top_right]
    if title and title.strip():
        result.append(prefix + s.vertical + " " + _pad(title, inner) + " " + s.vertical)
        result.append(
            prefix
            + s.junction_left
            + s.junction_horizontal * (inner + 2)
            + s.junction_right
        )
    for line in lines:
        result.append(prefix + s.vertical + " " + _pad(line, inner) + " " + s.vertical)
    result.append(prefix + s.bottom_left + s.horizontal * (inner + 2) + s.bottom_right)
    return "\n".join(result)
