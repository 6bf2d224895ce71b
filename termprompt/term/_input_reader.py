import os
import sys
import time
import logging
from codecs import getincrementaldecoder

from .. import config
from .input_keys import EscapeCodeDecoder


logger = logging.getLogger("termprompt")


class KeyReader:
    """Iterator that reads bytes from a binary stream and produces keys.

    Blocks until the next key is available. Iteration ends when the stream
    is closed (EOF). A reader cannot be restarted; create a new one to read
    a new stream.
    """

    def __init__(self, stream, escape_timeout=None):
        self._stream = stream
        self._fd = _get_fileno(stream)
        if escape_timeout is None:
            escape_timeout = config.ESCAPE_TIMEOUT
        self._escape_timeout = escape_timeout
        self._keys = self._iter_keys()

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._keys)

    def _read(self):
        if self._fd is not None:
            return os.read(self._fd, 1024)
        read = getattr(self._stream, "read1", None) or self._stream.read
        return read(1024)

    def _wait_for_input(self, timeout):
        """Wait until input is available, return False on timeout."""
        if self._fd is None:
            # In-memory streams: whatever is not in the stream now won't be
            # there later either.
            peek = getattr(self._stream, "peek", None)
            return bool(peek and peek(1))
        if sys.platform.startswith("win"):
            import msvcrt

            etime = time.perf_counter() + timeout
            while time.perf_counter() < etime:
                if msvcrt.kbhit():
                    return True
                time.sleep(0.005)
            return False
        else:
            import select

            ready, _, _ = select.select([self._fd], [], [], timeout)
            return bool(ready)

    def _iter_keys(self):
        logger.info("key reader started")
        decode_utf8 = getincrementaldecoder("utf-8")(errors="ignore").decode
        decoder = EscapeCodeDecoder()
        decode_escapes = decoder.decode

        while True:
            bb = self._read()
            if not bb:  # stdin is closed
                for key in decode_escapes(decode_utf8(b"", final=True), True):
                    yield key
                break

            for key in decode_escapes(decode_utf8(bb)):
                yield key

            # A partial escape code is an escape key if nothing follows soon
            if decoder.pending and not self._wait_for_input(self._escape_timeout):
                for key in decode_escapes("", True):
                    yield key

        logger.info("key reader stopped: input stream closed")


def _get_fileno(stream):
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        # io.UnsupportedOperation is an OSError and a ValueError
        return None
