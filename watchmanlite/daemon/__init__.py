"""Connection to the watchman daemon.

This module provides everything needed to talk to a running daemon over its
Unix socket.

Architecture:
- get_sockname: Asks the watchman binary where the daemon socket lives
- Connection: Line-framed JSON stream over the socket
- WatchmanClient: watch / watch-del / watch-list / query commands
"""

from watchmanlite.daemon.client import WatchmanClient, build_query
from watchmanlite.daemon.discovery import get_sockname, parse_sockname
from watchmanlite.daemon.protocol import decode_message, encode_message
from watchmanlite.daemon.transport import Connection, connect, connect_via_path

__all__ = [
    "WatchmanClient",
    "build_query",
    "get_sockname",
    "parse_sockname",
    "decode_message",
    "encode_message",
    "Connection",
    "connect",
    "connect_via_path",
]
