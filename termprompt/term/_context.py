import sys
import shutil
import logging

from ..errors import AlreadyActive


logger = logging.getLogger("termprompt")


class TerminalContext:
    """Exclusive ownership of the terminal's raw mode.

    Instantiating this class produces a class corresponding with the
    current platform. Use it as a context manager (or call ``enter()`` and
    ``release()``). On entering, the current terminal mode is stored and
    the terminal is put in raw mode: keys are delivered immediately, they
    are not echoed, and ctrl+c is delivered as data. On release, the stored
    mode is restored. Releasing is idempotent.

    The terminal is shared by the whole process, so only one context can
    be active at a time; entering a second one raises ``AlreadyActive``.
    Callers that prompt from multiple places must serialize their prompts.
    """

    _active = None  # the context that currently owns the terminal

    def __new__(cls, **kwargs):
        # Select terminal class, unless a specific subclass is requested
        if cls is not TerminalContext:
            return super().__new__(cls)
        if sys.platform.startswith("win"):
            from ._context_windows import WindowsTerminalContext as PlatformContext
        else:
            from ._context_unix import UnixTerminalContext as PlatformContext
        return super().__new__(PlatformContext)

    def __init__(self, stdin=None, stdout=None):

        self._entered = False

        stdin = stdin or sys.__stdin__
        stdout = stdout or sys.__stdout__
        self.fd_in = _fileno(stdin)
        self.fd_out = _fileno(stdout)

        # Raw mode cannot be set if this is not a terminal. That's fine, e.g.
        # for piped input, but worth a note.
        if self.fd_in is None or not stdin.isatty():
            logger.warning(f"Input is not a tty: {stdin}")

    @property
    def active(self):
        """Whether this context currently holds the terminal."""
        return self._entered

    def enter(self):
        """Store the terminal mode and switch to raw mode. Returns self."""
        if TerminalContext._active is not None:
            raise AlreadyActive("Another terminal session is already active.")
        TerminalContext._active = self
        self._entered = True
        try:
            self._store_terminal_mode()
            self._set_terminal_mode()
        except BaseException:
            self.release()
            raise
        logger.info("entered raw mode")
        return self

    def release(self):
        """Restore the terminal to the state it was when the context was entered.

        Calling this more than once is a no-op.
        """
        if not self._entered:
            return
        self._entered = False
        try:
            self._reset_terminal_mode()
        finally:
            if TerminalContext._active is self:
                TerminalContext._active = None
        logger.info("released raw mode")

    def __enter__(self):
        return self.enter()

    def __exit__(self, *args):
        self.release()

    def get_size(self):
        """Get the (estimate) terminal size."""
        # This should work on both Unix and Windows, but the subclasses
        # can nevertheless override this, e.g. if they keep track of
        # resizes already.
        return shutil.get_terminal_size()

    # For subclasses to implement

    def _store_terminal_mode(self):
        raise NotImplementedError()

    def _set_terminal_mode(self):
        raise NotImplementedError()

    def _reset_terminal_mode(self):
        raise NotImplementedError()


def _fileno(file):
    try:
        return file.fileno()
    except (AttributeError, OSError, ValueError):
        return None
