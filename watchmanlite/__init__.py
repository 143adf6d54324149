"""watchmanlite - a small synchronous client for the watchman daemon."""

from watchmanlite.daemon import Connection, WatchmanClient, connect, connect_via_path
from watchmanlite.errors import WatchmanError

__version__ = "0.1.0"

__all__ = [
    "Connection",
    "WatchmanClient",
    "WatchmanError",
    "connect",
    "connect_via_path",
]
