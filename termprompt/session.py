"""
Running a prompt: the blocking loop that ties terminal, keys, state and
rendering together, and a set of convenience functions on top of it.
"""

import sys
import logging

from .errors import Cancelled, StreamClosed
from .prompt import (
    CANCELLED,
    CONFIRM,
    MULTISELECT,
    SELECT,
    TEXT,
    Prompt,
    PromptSpec,
)
from .renderer import Renderer
from .term import KeyReader, TerminalContext, probe
from .validators import chain, integer, mapped, pattern, predicate


logger = logging.getLogger("termprompt")


def ask_prompt(spec, input=None, output=None, capabilities=None, context=None):
    """Show the prompt described by the PromptSpec and return the value.

    Blocks until the user submits valid input. Raises ``Cancelled`` when the
    user presses ctrl+c, and ``StreamClosed`` (a subclass of Cancelled) when
    the input ends before the prompt is submitted. Raises ``AlreadyActive``
    when another prompt is running. In all cases, the terminal mode is
    restored before this function returns or raises.

    * input: binary stream to read keys from (default stdin).
    * output: text stream to draw on (default stdout).
    * capabilities: the terminal Capabilities (default: probe the streams).
    * context: the TerminalContext that provides raw mode (default: a
      context for the given streams).
    """
    input = sys.stdin.buffer if input is None else input
    output = sys.stdout if output is None else output
    if capabilities is None:
        capabilities = probe(input, output)
    if context is None:
        context = TerminalContext(stdin=input, stdout=output)

    def write(text):
        output.write(text)
        output.flush()

    get_width = None
    if capabilities.is_interactive:
        get_width = lambda: context.get_size().columns  # noqa: E731

    prompt = Prompt(spec, Renderer(capabilities, get_width), write)
    stream_closed = False

    with context:
        try:
            prompt.start()
            for key in KeyReader(input):
                if prompt.on_key(key):
                    break
            else:
                stream_closed = True
                prompt.cancel()
        except KeyboardInterrupt:
            prompt.cancel()
        prompt.finish()

    # The terminal is restored at this point
    if stream_closed:
        logger.info(f"prompt {spec.label!r}: input stream closed")
        raise StreamClosed("Input stream closed before the prompt was submitted.")
    elif prompt.status == CANCELLED:
        logger.info(f"prompt {spec.label!r}: cancelled")
        raise Cancelled("Prompt was cancelled.")
    logger.info(f"prompt {spec.label!r}: accepted")
    return prompt.value


def ask(label, default=None, validator=None, **kwargs):
    """Ask for a line of text."""
    spec = PromptSpec(TEXT, label, default=default, validator=validator)
    return ask_prompt(spec, **kwargs)


def ask_int(
    label,
    default=None,
    check=None,
    message=None,
    check_message=None,
    **kwargs,
):
    """Ask for an integer, optionally checked with a predicate."""
    validator = integer(message)
    if check is not None:
        validator = chain(validator, predicate(check, check_message))
    if default is not None:
        default = str(default)
    spec = PromptSpec(TEXT, label, default=default, validator=validator)
    return ask_prompt(spec, **kwargs)


def ask_pattern(label, regex, message=None, **kwargs):
    """Ask for text that matches the given regular expression."""
    spec = PromptSpec(TEXT, label, validator=pattern(regex, message))
    return ask_prompt(spec, **kwargs)


def ask_mapped(label, func, message=None, **kwargs):
    """Ask for text and convert it with func."""
    spec = PromptSpec(TEXT, label, validator=mapped(func, message))
    return ask_prompt(spec, **kwargs)


def confirm(label, default=None, **kwargs):
    """Ask a yes/no question. Returns a bool."""
    spec = PromptSpec(CONFIRM, label, default=default)
    return ask_prompt(spec, **kwargs)


def select(label, choices, default=None, **kwargs):
    """Let the user pick one of the choices, return its value.

    Choices can be Choice objects, (label, value) tuples, or strings.
    """
    spec = PromptSpec(SELECT, label, default=default, choices=choices)
    return ask_prompt(spec, **kwargs)


def multiselect(label, choices, default=(), validator=None, **kwargs):
    """Let the user pick any number of the choices, return a list of their values.

    The values are in the order of the choices.
    """
    spec = PromptSpec(
        MULTISELECT, label, default=default, choices=choices, validator=validator
    )
    return ask_prompt(spec, **kwargs)
