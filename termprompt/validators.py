"""
Validators turn the raw input of a prompt into a value, or reject it.

A validator is a callable that takes the raw input and returns ``Ok(value)``
or ``Reject(message)``. It must not do I/O or keep state between calls,
because it is called again on every submit.

The raw input is the text buffer for text and confirm prompts, the value of
the active choice for select prompts, and a list of the selected values for
multiselect prompts.

Without an explicit message, a rejection uses the message for the current
locale, see ``messages.py``.
"""

import re
from collections import namedtuple

from .messages import get_message


Ok = namedtuple("Ok", ["value"])
Reject = namedtuple("Reject", ["message"])


def accept(raw):
    """Accept any input as is."""
    return Ok(raw)


def non_empty(message=None):
    """Reject empty (or whitespace-only) text."""

    def validate(raw):
        if not raw or not raw.strip():
            return Reject(message or get_message("error.required"))
        return Ok(raw)

    return validate


def digits_only(message=None):
    """Accept only non-empty text of ASCII digits."""

    def validate(raw):
        if raw and raw.isascii() and raw.isdigit():
            return Ok(raw)
        return Reject(message or get_message("error.digitsOnly"))

    return validate


def integer(message=None):
    """Convert the input to an int."""

    def validate(raw):
        try:
            return Ok(int(raw.strip()))
        except ValueError:
            return Reject(message or get_message("error.invalidInt"))

    return validate


def pattern(regex, message=None):
    """Accept text that matches the regular expression as a whole."""
    if regex is None:
        raise TypeError("pattern() needs a regex")
    compiled = re.compile(regex)

    def validate(raw):
        if raw is not None and compiled.fullmatch(raw):
            return Ok(raw)
        return Reject(message or get_message("error.pattern"))

    return validate


def predicate(func, message=None):
    """Accept input for which ``func(raw)`` is true."""
    if func is None:
        raise TypeError("predicate() needs a function")

    def validate(raw):
        if func(raw):
            return Ok(raw)
        return Reject(message or get_message("error.invalid"))

    return validate


def mapped(func, message=None):
    """Convert the input with ``func``; a ValueError, TypeError or KeyError rejects it."""
    if func is None:
        raise TypeError("mapped() needs a function")

    def validate(raw):
        try:
            return Ok(func(raw))
        except (ValueError, TypeError, KeyError):
            return Reject(message or get_message("error.invalid"))

    return validate


def yes_no(raw, message=None):
    """Convert y/yes/n/no (case insensitive) into a bool."""
    text = (raw or "").strip().lower()
    if text in ("y", "yes"):
        return Ok(True)
    elif text in ("n", "no"):
        return Ok(False)
    return Reject(message or get_message("error.yesno"))


def chain(*validators):
    """Combine validators; each one gets the value produced by the previous one."""

    def validate(raw):
        value = raw
        for validator in validators:
            result = validator(value)
            if isinstance(result, Reject):
                return result
            value = result.value
        return Ok(value)

    return validate
