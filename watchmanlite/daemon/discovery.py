"""Locate the daemon socket by asking the watchman binary."""

import json
import logging
import subprocess
from typing import Optional

from watchmanlite.errors import DiscoveryError

logger = logging.getLogger(__name__)

_BAD_JSON = "Got bad JSON from watchman get-sockname"


def parse_sockname(output: str) -> str:
    """
    Extract the socket path from `watchman get-sockname` output.

    Raises:
        DiscoveryError: If output is not an object with a string "sockname"
    """
    try:
        reply = json.loads(output)
    except json.JSONDecodeError as e:
        raise DiscoveryError(f"{_BAD_JSON}: {e}") from e

    if not isinstance(reply, dict):
        raise DiscoveryError(f"{_BAD_JSON}: object expected")
    if "sockname" not in reply:
        raise DiscoveryError(f"{_BAD_JSON}: socket expected")
    sockname = reply["sockname"]
    if not isinstance(sockname, str):
        raise DiscoveryError(f"{_BAD_JSON}: socket is not string")
    return sockname


def get_sockname(binary: str = "watchman", timeout: Optional[float] = None) -> str:
    """
    Run `watchman get-sockname` and return the socket path it reports.

    The daemon is started by the binary if it is not already running.

    Args:
        binary: watchman executable name or path
        timeout: Seconds to wait for the process (None waits forever)

    Raises:
        DiscoveryError: If the process cannot run, fails, or prints bad JSON
    """
    cmd = [binary, "get-sockname"]
    try:
        proc = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        raise DiscoveryError(f"Could not watchman get-sockname: {e}") from e

    if proc.returncode != 0:
        detail = (proc.stderr or "").strip() or f"exit status {proc.returncode}"
        raise DiscoveryError(f"Could not watchman get-sockname: {detail}")

    sockname = parse_sockname(proc.stdout)
    logger.debug(f"watchman get-sockname -> {sockname}")
    return sockname
