"""Exception hierarchy for watchman client failures.

Every failure raised by the transport, discovery and query layers derives
from WatchmanError and carries a human-readable ``message``. A call that
returns normally succeeded.

    WatchmanError
    ├── TransportError
    │   ├── SocketError      socket() failed
    │   ├── ConnectError     connect() failed
    │   └── StreamError      stream wrap, read or closed-connection failure
    ├── DiscoveryError       watchman get-sockname failed or replied badly
    ├── SendError            writing a request failed
    │   └── SerializeError   request is not JSON serializable
    ├── FrameError
    │   ├── ParseError       reply is not valid JSON
    │   └── FramingError     reply is not followed by a newline
    ├── CommandError         reply object carries "error"
    └── ResponseShapeError   reply is missing a field or has the wrong type
"""

from typing import Optional


class WatchmanError(Exception):
    """Base class for all watchman client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(WatchmanError):
    pass


class SocketError(TransportError):
    pass


class ConnectError(TransportError):
    pass


class StreamError(TransportError):
    pass


class DiscoveryError(WatchmanError):
    pass


class SendError(WatchmanError):
    pass


class SerializeError(SendError):
    pass


class FrameError(WatchmanError):
    pass


class ParseError(FrameError):
    pass


class FramingError(FrameError):
    pass


class CommandError(WatchmanError):
    """The daemon answered with an ``error`` field."""

    def __init__(self, message: str, daemon_error: Optional[str] = None):
        super().__init__(message)
        self.daemon_error = daemon_error


class ResponseShapeError(WatchmanError):
    """A reply did not have the shape the command expects."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
