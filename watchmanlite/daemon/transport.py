"""Unix socket connection to the watchman daemon.

A Connection owns one stream socket and a buffered file object wrapping it.
The protocol is strictly request/reply: send one message, read one message.
There is no internal locking; use one Connection per thread.

Usage:
    with connect() as conn:
        conn.send_message(["watch-list"])
        reply = conn.read_message()
"""

import logging
import socket
from typing import Any, BinaryIO, Optional

from watchmanlite.daemon.discovery import get_sockname
from watchmanlite.daemon.protocol import decode_message, encode_message, needs_more_input
from watchmanlite.errors import ConnectError, SendError, SocketError, StreamError

logger = logging.getLogger(__name__)


class Connection:
    """
    Duplex newline-framed JSON stream to the daemon.

    Closing is idempotent: the second and later calls do nothing.
    """

    def __init__(self, sock: socket.socket, path: str = ""):
        """
        Wrap an already connected socket.

        Args:
            sock: Connected stream socket
            path: Socket path, kept for diagnostics

        Raises:
            StreamError: If the socket cannot be wrapped as a stream
        """
        self.path = path
        self._sock: Optional[socket.socket] = sock
        try:
            self._fp: Optional[BinaryIO] = sock.makefile("rwb")
        except (OSError, ValueError) as e:
            self._sock = None
            sock.close()
            raise StreamError(f"Failed to connect to watchman socket {path}.") from e

    @property
    def closed(self) -> bool:
        return self._fp is None

    def _stream(self) -> BinaryIO:
        if self._fp is None:
            raise StreamError("Connection to watchman is closed")
        return self._fp

    def send_message(self, value: Any) -> None:
        """
        Write one JSON value followed by a newline.

        Raises:
            SerializeError: If value is not JSON serializable
            SendError: If the write fails
            StreamError: If the connection is closed
        """
        fp = self._stream()
        frame = encode_message(value)
        try:
            fp.write(frame)
            fp.flush()
        except OSError as e:
            raise SendError(f"Failed to send watchman command: {e}") from e
        logger.debug(f"sent {frame[:-1]!r}")

    def read_message(self) -> Any:
        """
        Read exactly one JSON value terminated by a newline.

        Blank lines before the reply are skipped. A document spread over
        several lines is accumulated until it is complete.

        Raises:
            ParseError: If the reply is empty or not valid JSON
            FramingError: If the reply is not followed by a newline
            StreamError: If the read fails or the connection is closed
        """
        fp = self._stream()
        frame = b""
        try:
            while True:
                line = fp.readline()
                if not line:
                    break
                if not frame and not line.strip():
                    continue
                frame += line
                if not needs_more_input(frame):
                    break
        except OSError as e:
            raise StreamError(f"Failed to read from watchman: {e}") from e
        logger.debug(f"received {frame!r}")
        return decode_message(frame)

    def close(self) -> None:
        """Release the stream and the socket."""
        if self._fp is None:
            return
        fp, sock = self._fp, self._sock
        self._fp = None
        self._sock = None
        try:
            fp.close()
        except OSError as e:
            # unsent bytes left behind by a failed write
            logger.warning(f"Dropped unsent data closing {self.path}: {e}")
        finally:
            if sock is not None:
                sock.close()
        logger.info(f"Closed watchman connection {self.path}")

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<Connection {self.path!r} {state}>"


def connect_via_path(path: str, timeout: Optional[float] = None) -> Connection:
    """
    Connect to the daemon listening on a Unix socket.

    Args:
        path: Filesystem path of the daemon socket
        timeout: Optional socket timeout in seconds (None blocks forever)

    Returns:
        Open Connection

    Raises:
        SocketError: If the socket cannot be created
        ConnectError: If connecting to path fails
        StreamError: If the socket cannot be wrapped as a stream
    """
    try:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    except OSError as e:
        raise SocketError(f"socket error {e.errno}") from e

    try:
        if timeout is not None:
            sock.settimeout(timeout)
        sock.connect(str(path))
    except OSError as e:
        sock.close()
        raise ConnectError(f"connect error {e.errno}: {path}") from e

    conn = Connection(sock, str(path))
    logger.info(f"Connected to watchman at {path}")
    return conn


def connect(
    sockname: Optional[str] = None,
    timeout: Optional[float] = None,
    binary: str = "watchman",
) -> Connection:
    """
    Connect to the daemon, discovering its socket when none is given.

    Args:
        sockname: Socket path; when None, `watchman get-sockname` is run
        timeout: Optional socket timeout in seconds
        binary: watchman executable used for discovery

    Raises:
        DiscoveryError: If discovery fails or replies with a bad shape
        TransportError: If connecting fails
    """
    if sockname is None:
        sockname = get_sockname(binary=binary, timeout=timeout)
    return connect_via_path(sockname, timeout=timeout)
