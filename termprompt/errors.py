"""
Exceptions raised by termprompt.
"""


class TermPromptError(Exception):
    """Base class for termprompt errors."""


class AlreadyActive(TermPromptError, RuntimeError):
    """Raised when entering raw mode while another session holds the terminal."""


class Cancelled(TermPromptError):
    """The user cancelled the prompt, e.g. by pressing ctrl+c.

    This is not a failure, but it means there is no value to return.
    """


class StreamClosed(Cancelled):
    """The input stream ended before the prompt was submitted."""
