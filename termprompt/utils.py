"""
Logging support.

While a prompt is active it owns stdout, so log messages written there would
mess up the prompt. Instead, records can be forwarded over UDP, and shown
in another terminal using ``termprompt --listen``.
"""

import socket
import logging

from . import config


logger = logging.getLogger("termprompt")


class UDPHandler(logging.Handler):
    """Logging handler that sends each record as a UDP packet to localhost."""

    def __init__(self, port=None):
        super().__init__()
        port = config.LOG_PORT if port is None else port
        self.udp_address = ("127.0.0.1", port)
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def emit(self, record):
        try:
            msg = self.format(record)
            bb = msg.encode()
            size = 2**10
            while bb:
                bb1 = bb[:size]
                bb = bb[size:]
                self._socket.sendto(bb1, self.udp_address)
        except Exception:
            self.handleError(record)

    def close(self):
        self._socket.close()
        super().close()


def enable_log_forwarding(level=logging.INFO, port=None):
    """Forward the termprompt logs to the listener. Returns the handler."""
    for handler in logger.handlers:
        if isinstance(handler, UDPHandler):
            return handler
    handler = UDPHandler(port)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def listen_to_logs(port=None):
    """Called from ``termprompt --listen``

    This way we can see the logs from another process, so it does not get
    mixed up with the prompts.
    """
    port = config.LOG_PORT if port is None else port

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", port))
    print(f"Listening for termprompt logs on port {port}")

    try:
        while True:
            data, addr = sock.recvfrom(2**20)
            print(data.decode(errors="replace"))
    except KeyboardInterrupt:
        pass
    finally:
        sock.close()
