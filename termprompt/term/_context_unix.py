import os
import tty  # Unix
import signal
import logging
import termios  # Unix

from ._context import TerminalContext


logger = logging.getLogger("termprompt")


def patch_lflag(attrs: int) -> int:
    # Without ISIG, ctrl+c arrives as a key instead of a SIGINT
    return attrs & ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)


def patch_iflag(attrs: int) -> int:
    return attrs & ~(
        # Disable XON/XOFF flow control on output and input.
        # (Don't capture Ctrl-S and Ctrl-Q.)
        # Like executing: "stty -ixon."
        termios.IXON
        | termios.IXOFF
        |
        # Don't translate carriage return into newline on input.
        termios.ICRNL
        | termios.INLCR
        | termios.IGNCR
    )


class UnixTerminalContext(TerminalContext):

    def __init__(self, **kwargs):
        self._ori_term_attr = None
        super().__init__(**kwargs)

    def _ok_to_init(self):
        """Check that we are allowed to change the terminal mode.

        When the process was started in the background, a tcsetattr would
        stop it with SIGTTOU. This performs a no-op tcsetattr to detect that.
        """

        # This was from Textual's start_application_mode()
        def _stop_again(*_) -> None:
            """Signal handler that will put the application back to sleep."""
            os.kill(os.getpid(), signal.SIGSTOP)

        if self.fd_in is None or not os.isatty(self.fd_in):
            return False

        # Set up handlers to ensure that, if there's a SIGTTOU or a SIGTTIN,
        # we go back to sleep.
        signal.signal(signal.SIGTTOU, _stop_again)
        signal.signal(signal.SIGTTIN, _stop_again)
        try:
            termios.tcsetattr(
                self.fd_in, termios.TCSANOW, termios.tcgetattr(self.fd_in)
            )
        except termios.error:
            return False
        finally:
            # We don't need to be hooking SIGTTOU or SIGTTIN any more.
            signal.signal(signal.SIGTTOU, signal.SIG_DFL)
            signal.signal(signal.SIGTTIN, signal.SIG_DFL)

        return True

    def _store_terminal_mode(self):
        self._ori_term_attr = None
        if not self._ok_to_init():
            return
        try:
            self._ori_term_attr = termios.tcgetattr(self.fd_in)
        except termios.error as err:
            logger.warning(f"Could not get terminal mode: {err}")

    def _set_terminal_mode(self):
        if self._ori_term_attr is None:
            return

        newattr = termios.tcgetattr(self.fd_in)
        newattr[tty.LFLAG] = patch_lflag(newattr[tty.LFLAG])
        newattr[tty.IFLAG] = patch_iflag(newattr[tty.IFLAG])

        # VMIN defines the number of characters read at a time in
        # non-canonical mode. It seems to default to 1 on Linux, but on
        # Solaris and derived operating systems it defaults to 4. (This is
        # because the VMIN slot is the same as the VEOF slot, which
        # defaults to ASCII EOT = Ctrl-D = 4.)
        newattr[tty.CC][termios.VMIN] = 1
        newattr[tty.CC][termios.VTIME] = 0

        termios.tcsetattr(self.fd_in, termios.TCSANOW, newattr)

    def _reset_terminal_mode(self):
        if self._ori_term_attr is not None:
            try:
                termios.tcsetattr(self.fd_in, termios.TCSANOW, self._ori_term_attr)
            except termios.error as err:
                logger.error(f"Could not restore terminal mode: {err}")
            self._ori_term_attr = None
