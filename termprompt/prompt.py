import logging
from collections import namedtuple

from .term.input_keys import (
    BACKSPACE,
    DELETE,
    DOWN,
    ENTER,
    INTERRUPT,
    LEFT,
    RIGHT,
    TAB,
    UP,
    is_char,
)
from .validators import Ok, Reject, accept, yes_no


logger = logging.getLogger("termprompt")


# Prompt kinds
TEXT = "text"
CONFIRM = "confirm"
SELECT = "select"
MULTISELECT = "multiselect"

KINDS = (TEXT, CONFIRM, SELECT, MULTISELECT)

# Prompt status
EDITING = "editing"
VALIDATING = "validating"
ACCEPTED = "accepted"
CANCELLED = "cancelled"

DEFAULT_VALIDATORS = {
    TEXT: accept,
    CONFIRM: yes_no,
    SELECT: accept,
    MULTISELECT: accept,
}


class Choice(namedtuple("Choice", ["label", "value"])):
    """An option in a select or multiselect prompt.

    The label is what the user sees, the value is what the prompt returns.
    """

    __slots__ = ()

    def __new__(cls, label, value):
        if not isinstance(label, str) or not label.strip():
            raise ValueError("Choice label cannot be empty")
        return super().__new__(cls, label, value)


def as_choice(ob):
    """Turn a Choice, a (label, value) tuple, or a plain string into a Choice."""
    if isinstance(ob, Choice):
        return ob
    elif isinstance(ob, str):
        return Choice(ob, ob)
    elif isinstance(ob, tuple) and len(ob) == 2:
        return Choice(*ob)
    raise TypeError(f"Cannot turn {ob!r} into a Choice.")


def choice_index(choices, default):
    """Get the index of the choice corresponding to the given value (or index)."""
    for i, choice in enumerate(choices):
        if choice.value == default:
            return i
    if isinstance(default, int) and not isinstance(default, bool):
        if 0 <= default < len(choices):
            return default
    raise ValueError(f"Default {default!r} is not one of the choices.")


class PromptSpec(
    namedtuple("PromptSpec", ["kind", "label", "default", "choices", "validator"])
):
    """Immutable description of a prompt.

    * kind: one of "text", "confirm", "select", "multiselect".
    * label: the question to show.
    * default: for text, the value used when the input is empty; for confirm,
      a bool; for select, the value (or index) of the initially active
      choice; for multiselect, the values that are initially selected.
    * choices: the options for select and multiselect.
    * validator: a callable that returns Ok(value) or Reject(message).
    """

    __slots__ = ()

    def __new__(cls, kind, label, default=None, choices=(), validator=None):
        if kind not in KINDS:
            raise ValueError(f"Invalid prompt kind: {kind!r}")
        choices = tuple(as_choice(c) for c in choices)
        if kind in (SELECT, MULTISELECT):
            if not choices:
                raise ValueError("No choices provided")
            if kind == SELECT and default is not None:
                choice_index(choices, default)
            elif kind == MULTISELECT:
                default = tuple(default or ())
                for value in default:
                    choice_index(choices, value)
        elif kind == CONFIRM and default is not None:
            default = bool(default)
        if validator is None:
            validator = DEFAULT_VALIDATORS[kind]
        elif not callable(validator):
            raise TypeError("The validator must be callable.")
        return super().__new__(cls, kind, label, default, choices, validator)


def next_index(index, step, n):
    """Move through a list of n items, wrapping around at both ends."""
    return (index + step) % n


class PromptState:
    """The mutable state of a prompt during one interaction."""

    def __init__(self, spec):
        self.buffer = ""
        self.cursor = 0
        self.active = 0
        self.selected = set()
        self.error = None
        self.revision = 0

        if spec.kind == SELECT and spec.default is not None:
            self.active = choice_index(spec.choices, spec.default)
        elif spec.kind == MULTISELECT:
            self.selected = {choice_index(spec.choices, v) for v in spec.default}


class Prompt:
    """The prompt state machine.

    Feed it keys via ``on_key()``. Each key that changes the state bumps the
    revision and causes one redraw. On enter, the validator is called; the
    prompt is then either accepted (``prompt.value`` holds the result) or
    goes back to editing with an error message. On ctrl+c the prompt is
    cancelled.
    """

    def __init__(self, spec, renderer=None, write=None):
        self.spec = spec
        self.state = PromptState(spec)
        self.status = EDITING
        self.value = None

        self._renderer = renderer
        self._write = write
        self._frame = None
        self.render_count = 0

    @property
    def done(self):
        return self.status in (ACCEPTED, CANCELLED)

    def start(self):
        """Draw the initial prompt."""
        self._redraw()

    def cancel(self):
        self.status = CANCELLED
        self.value = None

    def on_key(self, key):
        """Process a key. Returns True when the prompt is done."""

        if self.done:
            return True

        kind = self.spec.kind

        if key == INTERRUPT:
            self.cancel()
            return True
        elif key == ENTER:
            self._submit()
            changed = not self.done
        elif kind == TEXT or kind == CONFIRM:
            changed = self._edit(key)
        else:
            changed = self._navigate(key)

        if changed:
            self.state.revision += 1
            self._redraw()
        return self.done

    def _edit(self, key):
        state = self.state
        buffer, cursor = state.buffer, state.cursor

        if is_char(key):
            buffer = buffer[:cursor] + key + buffer[cursor:]
            cursor += 1
        elif key == BACKSPACE:
            if cursor > 0:
                buffer = buffer[: cursor - 1] + buffer[cursor:]
                cursor -= 1
        elif key == DELETE:
            buffer = buffer[:cursor] + buffer[cursor + 1 :]
        elif key == LEFT:
            cursor = max(0, cursor - 1)
        elif key == RIGHT:
            cursor = min(len(buffer), cursor + 1)

        if buffer == state.buffer and cursor == state.cursor:
            return False
        state.buffer, state.cursor = buffer, cursor
        state.error = None
        return True

    def _navigate(self, key):
        state = self.state
        n = len(self.spec.choices)

        if key == UP:
            state.active = next_index(state.active, -1, n)
        elif key == DOWN:
            state.active = next_index(state.active, +1, n)
        elif self.spec.kind == MULTISELECT and key in (TAB, " "):
            state.selected ^= {state.active}
        else:
            return False  # ignore

        state.error = None
        return True

    def compose(self):
        """Get the raw input, as it is passed to the validator."""
        spec, state = self.spec, self.state
        if spec.kind == TEXT:
            if not state.buffer and spec.default is not None:
                return str(spec.default)
            return state.buffer
        elif spec.kind == CONFIRM:
            if not state.buffer and spec.default is not None:
                return "y" if spec.default else "n"
            return state.buffer
        elif spec.kind == SELECT:
            return spec.choices[state.active].value
        else:
            return [c.value for i, c in enumerate(spec.choices) if i in state.selected]

    def display_value(self):
        """Get a text representation of the submitted input."""
        spec, state = self.spec, self.state
        if spec.kind == SELECT:
            return spec.choices[state.active].label
        elif spec.kind == MULTISELECT:
            labels = [c.label for i, c in enumerate(spec.choices) if i in state.selected]
            return ", ".join(labels)
        elif spec.kind == CONFIRM and isinstance(self.value, bool):
            return "yes" if self.value else "no"
        return self.compose()

    def _submit(self):
        self.status = VALIDATING
        result = self.spec.validator(self.compose())
        if isinstance(result, Ok):
            self.status = ACCEPTED
            self.value = result.value
        elif isinstance(result, Reject):
            self.status = EDITING
            self.state.error = result.message
            logger.info(f"input rejected: {result.message}")
        else:
            raise TypeError(f"A validator must return Ok or Reject, not {result!r}")

    def _redraw(self):
        if self._renderer is None:
            return
        text, self._frame = self._renderer.draw(self._frame, self.state, self.spec)
        self.render_count += 1
        if text:
            self._write(text)

    def finish(self):
        """Draw the final state of the prompt, e.g. the accepted value."""
        if self._renderer is None:
            return
        value_text = self.display_value() if self.status == ACCEPTED else None
        text = self._renderer.finish(self._frame, self.state, self.spec, value_text)
        self._frame = None
        if text:
            self._write(text)
