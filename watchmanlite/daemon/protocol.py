"""Line-delimited JSON framing for the watchman socket protocol.

Every message, in either direction, is one JSON document followed by a
single newline.

Request format (always a JSON array):
    ["watch", "/path/to/root"]
    ["watch-del", "/path/to/root"]
    ["watch-list"]
    ["query", "/path/to/root", {"expression": [...], "fields": [...]}]

Response format (usually a JSON object):
    {
        "version": str,          # daemon version
        "error": str,            # present only on failure
        ...                      # command-specific keys
    }

Requests are written compact so that a frame never spans more than one
line. Replies may be pretty-printed; the reader keeps pulling lines until
the document is complete.
"""

import json
from typing import Any

from watchmanlite.errors import FramingError, ParseError, SerializeError

FRAME_TERMINATOR = b"\n"

_decoder = json.JSONDecoder()


def encode_message(value: Any) -> bytes:
    """
    Serialize a JSON value to one newline-terminated frame.

    Args:
        value: Any JSON serializable value (list, dict, str, int, bool, None)

    Returns:
        UTF-8 encoded compact JSON followed by a newline

    Raises:
        SerializeError: If value cannot be represented as JSON
    """
    try:
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializeError(f"Failed to serialize watchman message: {e}") from e
    return text.encode("utf-8") + FRAME_TERMINATOR


def needs_more_input(frame: bytes) -> bool:
    """
    Check whether a partial frame ends inside an unfinished JSON document.

    True only when the decoder ran out of input, i.e. the error position is
    at the end of the buffered text. Any other decode failure is left for
    decode_message to report.
    """
    try:
        text = frame.decode("utf-8")
    except UnicodeDecodeError:
        return False
    start = len(text) - len(text.lstrip(" \t\r\n"))
    if start == len(text):
        return False
    try:
        _decoder.raw_decode(text, start)
    except json.JSONDecodeError as e:
        return e.pos >= len(text.rstrip())
    return False


def decode_message(frame: bytes) -> Any:
    """
    Decode exactly one JSON document from a frame.

    The document must be followed immediately by the newline terminator.
    Anything else between the end of the document and the newline means
    the reader lost track of the frame boundaries, so the decoded value is
    discarded.

    Args:
        frame: Bytes read from the stream, up to and including the newline
            that follows the document

    Returns:
        The decoded JSON value

    Raises:
        ParseError: If the frame is empty or not valid JSON
        FramingError: If the document is not followed by a newline
    """
    try:
        text = frame.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"Got unparseable or empty result from watchman: {e}") from e

    start = len(text) - len(text.lstrip(" \t\r\n"))
    if start == len(text):
        raise ParseError("Got unparseable or empty result from watchman: empty reply")

    try:
        value, end = _decoder.raw_decode(text, start)
    except json.JSONDecodeError as e:
        raise ParseError(f"Got unparseable or empty result from watchman: {e}") from e

    if text[end:end + 1] != "\n":
        raise FramingError("No newline at end of reply")
    if end + 1 != len(text):
        # the reader stops at the first newline after the document
        raise FramingError("Trailing data after reply")
    return value
