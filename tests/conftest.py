import io
import os

import pytest

from termprompt.term import TerminalContext


class FakeTerminalContext(TerminalContext):
    """A terminal context that records mode changes instead of doing them."""

    def __init__(self, fail_on_set=False, width=80):
        self.calls = []
        self.fail_on_set = fail_on_set
        self.width = width
        super().__init__(stdin=io.BytesIO(), stdout=io.StringIO())

    def _store_terminal_mode(self):
        self.calls.append("store")

    def _set_terminal_mode(self):
        if self.fail_on_set:
            raise OSError("cannot set mode")
        self.calls.append("set")

    def _reset_terminal_mode(self):
        self.calls.append("reset")

    def get_size(self):
        return os.terminal_size((self.width, 24))


@pytest.fixture
def fake_context():
    context = FakeTerminalContext()
    yield context
    context.release()
    TerminalContext._active = None
