"""Synchronous watchman client.

Thin command layer over a Connection: each method sends one request,
reads one reply and decodes it. Nothing is retried; any failure raises a
WatchmanError subclass and the reply is discarded.

Usage:
    with WatchmanClient.connect() as client:
        client.watch("/src/project")
        result = client.query(
            "/src/project",
            allof_expression(type_expression("f"), suffix_expression("py")),
            Field.NAME | Field.SIZE,
        )
        for stat in result.files:
            print(stat.name, stat.size)
"""

import logging
from typing import Any, Dict, Optional, Sequence, Union

from watchmanlite.daemon.transport import Connection, connect
from watchmanlite.query.expression import Expression, serialize_expression
from watchmanlite.query.fields import Field, fields_to_json
from watchmanlite.query.results import (
    QueryResult,
    WatchList,
    check_command_reply,
    decode_query_result,
    decode_watch_list,
)

logger = logging.getLogger(__name__)


def build_query(
    path: str,
    expression: Expression,
    fields: Union[Field, int] = Field.NAME,
) -> list:
    """
    Build the wire form of a query command.

    Returns:
        ["query", path, {"expression": [...], "fields": [...]}]
    """
    params: Dict[str, Any] = {
        "expression": serialize_expression(expression),
        "fields": fields_to_json(fields),
    }
    return ["query", str(path), params]


class WatchmanClient:
    """
    Command interface to a watchman daemon.

    One request is in flight at a time. The client is not thread-safe;
    open one client per thread.
    """

    def __init__(self, connection: Connection):
        """
        Args:
            connection: Open connection; the client closes it on close()
        """
        self.connection = connection

    @classmethod
    def connect(
        cls,
        sockname: Optional[str] = None,
        timeout: Optional[float] = None,
        binary: str = "watchman",
    ) -> "WatchmanClient":
        """
        Open a client, discovering the socket when sockname is None.

        Raises:
            DiscoveryError: If socket discovery fails
            TransportError: If connecting fails
        """
        return cls(connect(sockname=sockname, timeout=timeout, binary=binary))

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> "WatchmanClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def watch(self, path: str) -> None:
        """
        Ask the daemon to watch a root.

        Raises:
            CommandError: If the daemon refuses
            WatchmanError: On transport or reply-shape failure
        """
        self._send_simple_command(["watch", str(path)])
        check_command_reply(self.connection.read_message(), "watch")
        logger.info(f"Watching {path}")

    def watch_del(self, path: str) -> None:
        """
        Stop watching a root.

        Raises:
            CommandError: If the daemon refuses
            WatchmanError: On transport or reply-shape failure
        """
        self._send_simple_command(["watch-del", str(path)])
        check_command_reply(self.connection.read_message(), "watch-del")
        logger.info(f"Stopped watching {path}")

    def watch_list(self) -> WatchList:
        """
        List the roots the daemon is watching.

        Raises:
            ResponseShapeError: If the reply has no list of string roots
            WatchmanError: On transport or command failure
        """
        self._send_simple_command(["watch-list"])
        return decode_watch_list(self.connection.read_message())

    def query(
        self,
        path: str,
        expression: Expression,
        fields: Union[Field, int] = Field.NAME,
    ) -> QueryResult:
        """
        Run a query against a watched root.

        Args:
            path: Watched root to query
            expression: Expression tree selecting files
            fields: Attributes to return for each file

        Returns:
            QueryResult with the matching files and the clock to resume from

        Raises:
            ResponseShapeError: If a required reply field is missing or mistyped
            CommandError: If the daemon reported an error
            WatchmanError: On transport failure
        """
        request = build_query(path, expression, fields)
        self.connection.send_message(request)
        result = decode_query_result(self.connection.read_message())
        logger.debug(
            f"query {path}: {len(result.files)} files, clock {result.clock}, "
            f"fresh={result.is_fresh_instance}"
        )
        return result

    def _send_simple_command(self, args: Sequence[str]) -> None:
        """Send a command made only of string arguments."""
        self.connection.send_message([str(arg) for arg in args])
