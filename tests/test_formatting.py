import pytest

from termprompt import config
from termprompt.formatting import BOX_STYLES, box, get_box_style, indent, rule
from termprompt.styles import strip_styles, style


def test_indent():
    assert indent("a\nb") == "  a\n  b"
    assert indent("a", 2) == "    a"
    assert indent("a", 0) == "a"
    assert indent("a\nb", unit="> ") == "> a\n> b"
    with pytest.raises(ValueError):
        indent("a", unit="")


def test_rule():
    assert rule() == "─" * config.RULE_WIDTH
    assert rule("=", 5) == "====="
    assert rule("-", 3, indent=1) == "  ---"
    with pytest.raises(ValueError):
        rule("-", 0)


def test_get_box_style():
    assert get_box_style("double") is BOX_STYLES["double"]
    assert get_box_style("DOUBLE") is BOX_STYLES["double"]
    assert get_box_style("nope") is BOX_STYLES["ascii"]
    assert get_box_style(None) is BOX_STYLES["ascii"]
    s = BOX_STYLES["heavy"]
    assert get_box_style(s) is s


def test_box():
    text = box("hello\nyou", box_style="ascii")
    assert text.split("\n") == [
        "+-------+",
        "| hello |",
        "| you   |",
        "+-------+",
    ]


def test_box_with_title():
    text = box("hi", title="Title", box_style="unicode", indent=1)
    assert text.split("\n") == [
        "  ┌───────┐",
        "  │ Title │",
        "  ├───────┤",
        "  │ hi    │",
        "  └───────┘",
    ]


def test_box_empty_and_blank_title():
    assert box("", title="  ", box_style="ascii").split("\n") == [
        "+--+",
        "|  |",
        "+--+",
    ]


def test_box_default_style():
    lines = box("x").split("\n")
    assert lines[0].startswith(get_box_style(config.BOX_STYLE).top_left)


def test_box_with_styled_content():
    content = style("ok", "bold green") + " done\n" + "plain text"
    lines = box(content, title=style("T", "red"), box_style="ascii").split("\n")
    plain = [strip_styles(line) for line in lines]
    assert plain == [
        "+------------+",
        "| T          |",
        "+------------+",
        "| ok done    |",
        "| plain text |",
        "+------------+",
    ]
    # All borders line up
    assert len(set(len(line) for line in plain)) == 1
