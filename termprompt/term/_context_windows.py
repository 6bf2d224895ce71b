import msvcrt
import ctypes
import logging
from ctypes import wintypes

from ._context import TerminalContext


logger = logging.getLogger("termprompt")

KERNEL32 = ctypes.WinDLL("kernel32", use_last_error=True)  # type: ignore

ENABLE_PROCESSED_INPUT = 0x0001
ENABLE_LINE_INPUT = 0x0002
ENABLE_ECHO_INPUT = 0x0004
ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004
ENABLE_VIRTUAL_TERMINAL_INPUT = 0x0200


def get_console_mode(fd):
    """Get the console mode for a given file descriptor (for stdout or stdin).

    Returns None if the fd is not a console.
    """
    windows_filehandle = msvcrt.get_osfhandle(fd)  # type: ignore
    mode = wintypes.DWORD()
    if not KERNEL32.GetConsoleMode(windows_filehandle, ctypes.byref(mode)):
        return None
    return mode.value


def set_console_mode(fd, mode: int) -> bool:
    """Set the console mode for a given file descriptor (for stdout or stdin)."""
    windows_filehandle = msvcrt.get_osfhandle(fd)  # type: ignore
    success = KERNEL32.SetConsoleMode(windows_filehandle, mode)
    return bool(success)


class WindowsTerminalContext(TerminalContext):

    def __init__(self, **kwargs):
        self._ori_mode_in = None
        self._ori_mode_out = None
        super().__init__(**kwargs)

    def _store_terminal_mode(self):
        if self.fd_in is not None:
            self._ori_mode_in = get_console_mode(self.fd_in)
        if self.fd_out is not None:
            self._ori_mode_out = get_console_mode(self.fd_out)

    def _set_terminal_mode(self):
        if self._ori_mode_in is not None:
            # No line buffering, no echo, and ctrl+c as data
            mode_in = self._ori_mode_in | ENABLE_VIRTUAL_TERMINAL_INPUT
            mode_in &= ~(ENABLE_PROCESSED_INPUT | ENABLE_LINE_INPUT | ENABLE_ECHO_INPUT)
            if not set_console_mode(self.fd_in, mode_in):
                logger.warning("Could not set console input mode")
        if self._ori_mode_out is not None:
            mode_out = self._ori_mode_out | ENABLE_VIRTUAL_TERMINAL_PROCESSING
            if not set_console_mode(self.fd_out, mode_out):
                logger.warning("Could not set console output mode")

    def _reset_terminal_mode(self):
        if self._ori_mode_in is not None:
            set_console_mode(self.fd_in, self._ori_mode_in)
        if self._ori_mode_out is not None:
            set_console_mode(self.fd_out, self._ori_mode_out)
        self._ori_mode_in = self._ori_mode_out = None
