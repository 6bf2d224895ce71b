from termprompt.prompt import MULTISELECT, SELECT, TEXT, PromptSpec, PromptState
from termprompt.renderer import ERASE_LINE, SYNC_END, SYNC_START, Renderer
from termprompt.styles import strip_styles
from termprompt.term import Capabilities, ColorTier
from termprompt.term.input_keys import EscapeCodeDecoder, is_char


def make_renderer(width=40, tier=ColorTier.NONE, interactive=True, get_width=None):
    return Renderer(Capabilities(interactive, width, tier), get_width)


def test_layout_text():
    renderer = make_renderer()
    spec = PromptSpec(TEXT, "Name", default="bob")
    state = PromptState(spec)
    state.buffer, state.cursor = "al", 2

    lines, row, col = renderer.layout(state, spec)
    assert lines == ["? Name (bob) al"]
    assert (row, col) == (0, 15)

    # Cursor in the middle of the buffer
    state.cursor = 1
    lines, row, col = renderer.layout(state, spec)
    assert (row, col) == (0, 14)


def test_layout_select():
    renderer = make_renderer()
    spec = PromptSpec(SELECT, "Pick", choices=["A", "B", "C"])
    state = PromptState(spec)
    state.active = 1

    lines, row, col = renderer.layout(state, spec)
    assert lines == ["? Pick (use arrow keys)", "  A", "> B", "  C"]
    assert (row, col) == (0, len(lines[0]))


def test_layout_multiselect_and_error():
    renderer = make_renderer()
    spec = PromptSpec(MULTISELECT, "Pick", choices=["A", "B"])
    state = PromptState(spec)
    state.selected = {0}
    state.error = "pick something else"

    lines, _, _ = renderer.layout(state, spec)
    assert lines == [
        "? Pick (space to toggle)",
        "> [x] A",
        "  [ ] B",
        "x pick something else",
    ]


def test_layout_styled():
    renderer = make_renderer(tier=ColorTier.BASIC)
    spec = PromptSpec(SELECT, "Pick", choices=["A", "B"])
    state = PromptState(spec)

    lines, _, col = renderer.layout(state, spec)
    assert "\x1b[7mA\x1b[0m" in lines[1]
    assert "\x1b[" not in lines[2]
    assert strip_styles(lines[0]) == "? Pick (use arrow keys)"
    assert col == len(strip_styles(lines[0]))


def test_layout_truncates_to_width():
    renderer = make_renderer(width=10)
    spec = PromptSpec(SELECT, "A long label", choices=["short", "a very long choice"])
    state = PromptState(spec)

    lines, _, col = renderer.layout(state, spec)
    assert lines[0] == "? A long "
    assert lines[2] == "  a very "
    assert all(len(line) <= 9 for line in lines)
    assert col <= 9


def test_layout_scrolls_long_input():
    renderer = make_renderer(width=20)
    spec = PromptSpec(TEXT, "Name")
    state = PromptState(spec)
    state.buffer = "abcdefghijklmnopqrst"
    state.cursor = 20

    lines, _, col = renderer.layout(state, spec)
    assert lines[0].startswith("? Name ")
    assert lines[0].endswith("rst")
    assert len(lines[0]) <= 19
    assert col < 19

    # With the cursor at the start, the start of the buffer is shown
    state.cursor = 0
    lines, _, col = renderer.layout(state, spec)
    assert lines[0].startswith("? Name abc")
    assert col == 7


def test_layout_follows_resize():
    width = [40]
    renderer = make_renderer(get_width=lambda: width[0])
    spec = PromptSpec(SELECT, "Pick a color", choices=["red"])
    state = PromptState(spec)

    lines1, _, _ = renderer.layout(state, spec)
    width[0] = 8
    lines2, _, _ = renderer.layout(state, spec)
    assert lines1[0] == "? Pick a color (use arrow keys)"
    assert lines2[0] == "? Pick "


def test_draw_only_when_changed():
    renderer = make_renderer()
    spec = PromptSpec(TEXT, "Name")
    state = PromptState(spec)

    text, frame = renderer.draw(None, state, spec)
    assert text.startswith(SYNC_START)
    assert text.endswith(SYNC_END)
    assert "? Name" in text

    text2, frame2 = renderer.draw(frame, state, spec)
    assert text2 == ""
    assert frame2 is frame

    state.buffer, state.cursor = "x", 1
    state.revision += 1
    text3, frame3 = renderer.draw(frame, state, spec)
    assert "? Name x" in text3
    assert frame3.revision == 1


def test_draw_minimal_diff():
    renderer = make_renderer()
    spec = PromptSpec(SELECT, "Pick", choices=["A", "B", "C"])
    state = PromptState(spec)
    _, frame = renderer.draw(None, state, spec)

    state.active = 2
    state.revision += 1
    text, frame = renderer.draw(frame, state, spec)

    assert "? Pick" not in text
    assert ERASE_LINE + "  B" not in text
    assert ERASE_LINE + "  A" in text
    assert ERASE_LINE + "> C" in text
    # Back to the first line
    assert text.endswith("\x1b[3A\x1b[24G" + SYNC_END)


def test_draw_erases_removed_lines():
    renderer = make_renderer()
    spec = PromptSpec(TEXT, "Code")
    state = PromptState(spec)
    state.error = "invalid"
    _, frame = renderer.draw(None, state, spec)
    assert len(frame.lines) == 2

    state.error = None
    state.revision += 1
    text, frame = renderer.draw(frame, state, spec)
    assert len(frame.lines) == 1
    assert text.count(ERASE_LINE) == 1
    assert text.startswith(SYNC_START + "\x1b[1G\x1b[1B" + ERASE_LINE)
    assert "invalid" not in text


def test_draw_output_decodes_to_plain_chars():
    # Output that is echoed back must not turn into keys like "up"
    renderer = make_renderer(tier=ColorTier.EXTENDED)
    spec = PromptSpec(MULTISELECT, "Pick", choices=["A", "B", "C"])
    state = PromptState(spec)

    text, frame = renderer.draw(None, state, spec)
    keys = EscapeCodeDecoder().decode(text, flush=True)
    expected = "".join(strip_styles(line) for line in frame.lines)
    assert keys.count("enter") == len(frame.lines) - 1
    assert "".join(k for k in keys if k != "enter") == expected

    for key_state in [(1, {0}), (2, {0, 2}), (0, set())]:
        state.active, state.selected = key_state
        state.error = "x" if state.active == 2 else None
        state.revision += 1
        text, frame = renderer.draw(frame, state, spec)
        keys = EscapeCodeDecoder().decode(text, flush=True)
        assert keys
        assert all(is_char(k) or k == "enter" for k in keys)

    text = renderer.finish(frame, state, spec, "A, C")
    keys = EscapeCodeDecoder().decode(text, flush=True)
    assert all(is_char(k) or k == "enter" for k in keys)


def test_finish_interactive():
    renderer = make_renderer()
    spec = PromptSpec(SELECT, "Pick", choices=["A", "B", "C"])
    state = PromptState(spec)
    _, frame = renderer.draw(None, state, spec)

    text = renderer.finish(frame, state, spec, "B")
    assert text.endswith("\n")
    assert ERASE_LINE + "? Pick B" in text
    # The first line is rewritten, the other three erased
    assert text.count(ERASE_LINE) == 4

    text = renderer.finish(frame, state, spec, None)
    assert "cancelled" in text
    assert text.endswith("\n")


def test_non_interactive():
    renderer = make_renderer(interactive=False, tier=ColorTier.BASIC)
    spec = PromptSpec(TEXT, "Name")
    state = PromptState(spec)

    text, frame = renderer.draw(None, state, spec)
    assert text == ""
    state.buffer = "al"
    state.revision += 1
    text, frame = renderer.draw(frame, state, spec)
    assert text == ""

    assert renderer.finish(frame, state, spec, "al") == "Name al\n"
    assert renderer.finish(frame, state, spec, None) == ""


def test_layout_long_label_keeps_input_visible():
    renderer = make_renderer(width=12)
    spec = PromptSpec(TEXT, "What is your name?")
    state = PromptState(spec)
    state.buffer, state.cursor = "abc", 3

    lines, _, col = renderer.layout(state, spec)
    # The label is cut short, but the typed text is shown after it
    assert lines == ["? Wha abc"]
    assert col == 9
    assert lines[0][col - 1] == "c"
    assert len(lines[0]) <= 11

    # Long input scrolls in the columns left after the label
    state.buffer, state.cursor = "abcdefgh", 8
    lines, _, col = renderer.layout(state, spec)
    assert lines == ["? Wha efgh"]
    assert col == 10
    assert col < 11


def test_finish_long_label_keeps_value_visible():
    renderer = make_renderer(width=12)
    spec = PromptSpec(TEXT, "What is your name?")
    state = PromptState(spec)

    text = renderer.finish(None, state, spec, "bob")
    assert ERASE_LINE + "? Wha bob" in text


def test_non_interactive_reports_rejection():
    renderer = make_renderer(interactive=False)
    spec = PromptSpec(TEXT, "Code")
    state = PromptState(spec)
    _, frame = renderer.draw(None, state, spec)

    state.buffer, state.error = "12a", "must contain digits only"
    state.revision += 1
    text, frame = renderer.draw(frame, state, spec)
    assert text == "Code x must contain digits only\n"

    # Editing clears the error, and nothing is written
    state.buffer, state.error = "12", None
    state.revision += 1
    text, frame = renderer.draw(frame, state, spec)
    assert text == ""


def test_layout_uses_locale(monkeypatch):
    from termprompt import config

    monkeypatch.setattr(config, "LOCALE", "de")
    renderer = make_renderer()
    spec = PromptSpec(SELECT, "Farbe", choices=["rot"])
    state = PromptState(spec)

    lines, _, _ = renderer.layout(state, spec)
    assert lines[0] == "? Farbe (Pfeiltasten benutzen)"
    text = renderer.finish(None, state, spec, None)
    assert "abgebrochen" in text
