"""Typed results decoded from daemon replies.

Decoding is all-or-nothing: a reply either decodes into a complete result
or raises ResponseShapeError (or CommandError when the daemon reported an
error). Error messages embed the offending JSON so that a misbehaving daemon
can be diagnosed from the message alone.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from watchmanlite.errors import CommandError, ResponseShapeError

logger = logging.getLogger(__name__)


def dump_fragment(value: Any) -> str:
    """Render a JSON value for inclusion in an error message."""
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


@dataclass
class FileStat:
    """One file record from a query reply."""
    name: str
    exists: bool = False
    mode: int = 0
    is_new: bool = False
    size: int = 0


@dataclass
class QueryResult:
    """Matching files plus the clock to resume from."""
    files: List[FileStat] = field(default_factory=list)
    version: str = ""
    clock: str = ""
    is_fresh_instance: bool = False

    def names(self) -> List[str]:
        return [stat.name for stat in self.files]


@dataclass
class WatchList:
    """Roots the daemon is currently watching."""
    roots: List[str] = field(default_factory=list)

    def __iter__(self) -> Iterator[str]:
        return iter(self.roots)

    def __len__(self) -> int:
        return len(self.roots)


def _shape_error(template: str, value: Any, field_name: Optional[str] = None) -> ResponseShapeError:
    message = template % dump_fragment(value)
    logger.warning(message)
    return ResponseShapeError(message, field=field_name)


def check_command_reply(reply: Any, command: str) -> Dict[str, Any]:
    """
    Validate the envelope shared by every command reply.

    Args:
        reply: Decoded JSON reply
        command: Command name, used in error messages

    Returns:
        The reply, known to be a dict without an "error" key

    Raises:
        ResponseShapeError: If reply is not a JSON object
        CommandError: If reply carries an "error" field
    """
    if not isinstance(reply, dict):
        raise _shape_error(f"Got non-object result from watchman {command}: %s", reply)
    if "error" in reply:
        daemon_error = reply["error"]
        if not isinstance(daemon_error, str):
            daemon_error = dump_fragment(daemon_error)
        raise CommandError(
            f"Got error result from watchman {command}: {daemon_error}",
            daemon_error=daemon_error,
        )
    return reply


def decode_file_stat(item: Any) -> FileStat:
    """
    Decode one element of a query reply's "files" list.

    A bare string is the name-only shorthand the daemon uses when only the
    name field was requested.
    """
    if isinstance(item, str):
        return FileStat(name=item)
    if not isinstance(item, dict):
        raise _shape_error("must be object: %s", item, "files")

    name = item.get("name")
    if not isinstance(name, str):
        raise _shape_error("name must be string: %s", item, "name")

    stat = FileStat(name=name)
    if "exists" in item:
        stat.exists = item["exists"] is True
    if "mode" in item:
        mode = item["mode"]
        if isinstance(mode, bool) or not isinstance(mode, int):
            raise _shape_error("mode must be integer: %s", item, "mode")
        stat.mode = mode
    if "new" in item:
        stat.is_new = item["new"] is True
    if "size" in item:
        size = item["size"]
        if isinstance(size, bool) or not isinstance(size, int):
            raise _shape_error("size must be integer: %s", item, "size")
        stat.size = size
    return stat


def decode_query_result(reply: Any) -> QueryResult:
    """
    Decode a query reply.

    Raises:
        ResponseShapeError: If a required field is missing or mistyped
        CommandError: If the daemon reported an error
    """
    obj = check_command_reply(reply, "query")

    files = obj.get("files")
    if not isinstance(files, list):
        raise _shape_error("Bad files %s", files, "files")
    stats = [decode_file_stat(item) for item in files]

    version = obj.get("version")
    if not isinstance(version, str):
        raise _shape_error("Bad version %s", version, "version")

    clock = obj.get("clock")
    if not isinstance(clock, str):
        raise _shape_error("Bad clock %s", clock, "clock")

    fresh = obj.get("is_fresh_instance")
    if not isinstance(fresh, bool):
        raise _shape_error("Bad is_fresh_instance %s", fresh, "is_fresh_instance")

    return QueryResult(
        files=stats,
        version=version,
        clock=clock,
        is_fresh_instance=fresh,
    )


def decode_watch_list(reply: Any) -> WatchList:
    """
    Decode a watch-list reply.

    Raises:
        ResponseShapeError: If "roots" is missing or holds a non-string
        CommandError: If the daemon reported an error
    """
    obj = check_command_reply(reply, "watch-list")

    roots = obj.get("roots")
    if not isinstance(roots, list):
        raise _shape_error("Got bogus value from watch-list %s", obj, "roots")
    for root in roots:
        if not isinstance(root, str):
            raise _shape_error("Got non-string root from watch-list %s", root, "roots")
    return WatchList(roots=list(roots))
