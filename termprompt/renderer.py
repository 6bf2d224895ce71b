"""
Drawing a prompt in the terminal.

The prompt occupies a small region of lines, starting at the line where the
cursor was when the prompt started. Every redraw moves the cursor back to the
start of that region and only rewrites the lines that changed. Cursor moves
always carry an explicit count (e.g. "\\x1b[1A" rather than "\\x1b[A"), so
that the output can never be mistaken for arrow keys when it is echoed back.
"""

from collections import namedtuple

from . import styles
from .messages import get_message
from .prompt import CONFIRM, MULTISELECT, SELECT, TEXT


# https://gist.github.com/christianparpart/d8a62cc1ab659194337d73e399004036
SYNC_START = "\x1b[?2026h"
SYNC_END = "\x1b[?2026l"

ERASE_LINE = "\x1b[2K"

# Columns kept free for the value when the label is too long
MIN_VALUE_WIDTH = 10


RenderFrame = namedtuple("RenderFrame", ["lines", "cursor_row", "cursor_col", "revision"])
RenderFrame.__doc__ = """The lines that were last drawn, and where the cursor was left."""


class Renderer:
    """Produces the text to write to draw the prompt.

    The renderer does not write anything itself; ``draw()`` and ``finish()``
    return the text to write. The renderer only produces escape codes for
    cursor movement and erasing; styling is delegated to the style function.
    """

    def __init__(self, capabilities, get_width=None, style=styles.style):
        self._caps = capabilities
        self._get_width = get_width or (lambda: capabilities.width)
        self._style_func = style

    def _style(self, text, attributes):
        return self._style_func(text, attributes, self._caps.color_tier)

    def _available_width(self):
        # Never write in the last column, to avoid the terminal wrapping
        return max(2, self._get_width() - 1)

    # %% Layout

    def _fit(self, segments, avail):
        """Turn (text, attributes) segments into a styled line of at most avail chars.

        Returns (styled_line, plain_length).
        """
        parts = []
        n = 0
        for text, attributes in segments:
            text = text[: max(0, avail - n)]
            if not text:
                continue
            parts.append(self._style(text, attributes) if attributes else text)
            n += len(text)
        return "".join(parts), n

    def _fit_head(self, segments, avail):
        """Fit the segments that precede a value, leaving room for the value.

        A head that does not fit is cut short and still ends in a space.
        Returns (styled_line, plain_length).
        """
        room = avail - min(MIN_VALUE_WIDTH, avail // 2)
        if sum(len(text) for text, _ in segments) <= room:
            return self._fit(segments, room)
        line, n = self._fit(segments, room - 1)
        return line + " ", n + 1

    def _hint(self, spec):
        if spec.kind == TEXT:
            if spec.default is not None and str(spec.default):
                return f"({spec.default}) "
            return ""
        elif spec.kind == CONFIRM:
            if spec.default is None:
                return "(y/n) "
            return "(Y/n) " if spec.default else "(y/N) "
        elif spec.kind == SELECT:
            return "(" + get_message("hint.select") + ")"
        else:
            return "(" + get_message("hint.multiselect") + ")"

    def layout(self, state, spec):
        """Get the lines for the given state, and the position of the cursor.

        Returns (lines, cursor_row, cursor_col).
        """
        avail = self._available_width()
        head = [("? ", "bold green"), (spec.label, "bold"), (" ", None)]
        hint = (self._hint(spec), "dim")

        if spec.kind in (TEXT, CONFIRM):
            line, head_len = self._fit_head(head + [hint], avail)
            room = avail - head_len
            start = max(0, state.cursor - room + 1)
            shown = state.buffer[start : start + room]
            lines = [line + shown]
            cursor_row, cursor_col = 0, head_len + state.cursor - start
        else:
            line, n = self._fit(head + [hint], avail)
            lines = [line]
            cursor_row, cursor_col = 0, n
            for i, choice in enumerate(spec.choices):
                is_active = i == state.active
                segments = []
                if is_active:
                    segments.append(("> ", "bold cyan"))
                else:
                    segments.append(("  ", None))
                if spec.kind == MULTISELECT:
                    if i in state.selected:
                        segments.append(("[x] ", "green"))
                    else:
                        segments.append(("[ ] ", None))
                segments.append((choice.label, "invert" if is_active else None))
                lines.append(self._fit(segments, avail)[0])

        if state.error:
            lines.append(self._fit([("x " + state.error, "red")], avail)[0])

        return lines, cursor_row, cursor_col

    # %% Drawing

    def draw(self, previous, state, spec):
        """Get the text to write to go from the previous frame to the given state.

        Returns (text, frame). If the state has not changed since the
        previous frame, the text is empty. On a non-interactive terminal
        nothing is drawn until ``finish()``.
        """
        if previous is not None and previous.revision == state.revision:
            return "", previous
        if not self._caps.is_interactive:
            # Only a rejection is reported, as a plain line
            text = f"{spec.label} x {state.error}\n" if state.error else ""
            return text, RenderFrame((), 0, 0, state.revision)

        lines, cursor_row, cursor_col = self.layout(state, spec)
        frame = RenderFrame(tuple(lines), cursor_row, cursor_col, state.revision)
        return SYNC_START + self._diff(previous, frame) + SYNC_END, frame

    def finish(self, previous, state, spec, value_text):
        """Get the text to write to leave the prompt in its final state.

        With a value_text, the prompt region collapses into a single line
        showing the label and the value. With a value_text of None, the prompt
        was cancelled. On a non-interactive terminal, this is a single plain
        line, or nothing when cancelled.
        """
        if not self._caps.is_interactive:
            if value_text is None:
                return ""
            return f"{spec.label} {value_text}\n"

        avail = self._available_width()
        head = [("? ", "bold green"), (spec.label, "bold"), (" ", None)]
        head_line, head_len = self._fit_head(head, avail)
        if value_text is None:
            value = [(get_message("status.cancelled"), "dim red")]
        else:
            value = [(value_text, "cyan")]
        line, n = self._fit(value, avail - head_len)
        line, n = head_line + line, head_len + n
        frame = RenderFrame((line,), 0, n, None)
        return SYNC_START + self._diff(previous, frame) + SYNC_END + "\n"

    def _diff(self, previous, frame):
        out = []

        if previous is None or not previous.lines:
            out.append("\x1b[1G")
            out.append("\n".join(ERASE_LINE + line for line in frame.lines))
            row = len(frame.lines) - 1
        else:
            # Move to the start of the region
            if previous.cursor_row > 0:
                out.append(f"\x1b[{previous.cursor_row}A")
            out.append("\x1b[1G")

            for i, line in enumerate(frame.lines):
                if i > 0:
                    if i < len(previous.lines):
                        out.append("\x1b[1B")
                    else:
                        out.append("\n")  # this line does not exist yet
                if i < len(previous.lines) and previous.lines[i] == line:
                    continue
                out.append("\x1b[1G" + ERASE_LINE + line)
            row = len(frame.lines) - 1

            # Erase lines that are no longer used
            for i in range(len(frame.lines), len(previous.lines)):
                out.append("\x1b[1B" + ERASE_LINE)
                row += 1

        # Position the cursor
        up = row - frame.cursor_row
        if up > 0:
            out.append(f"\x1b[{up}A")
        out.append(f"\x1b[{frame.cursor_col + 1}G")
        return "".join(out)
