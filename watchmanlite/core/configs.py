"""Configuration management for watchmanlite.

Loads user settings from ~/.config/watchmanlite/config.cfg, falling back to
a .env file in the working directory. Environment variables take precedence
over both:

    WATCHMAN_SOCK            socket path; skips `watchman get-sockname`
    WATCHMAN_BINARY          watchman executable used for discovery
    WATCHMANLITE_TIMEOUT_S   socket timeout in seconds
"""

import configparser
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

# Default location for user configuration.
CONFIG_PATH = Path.home() / ".config" / "watchmanlite" / "config.cfg"
ENV_PATH = Path(".env")


@dataclass
class ClientConfig:
    sockname: Optional[str] = None
    binary: str = "watchman"
    timeout: Optional[float] = None


def load_raw_config(path: Path = CONFIG_PATH, env_path: Path = ENV_PATH) -> Dict[str, str]:
    """
    Load configuration values from the config file, or from .env if the
    config file does not exist.
    Values are returned with lowercase keys for convenience.
    """
    data: Dict[str, str] = {}

    if path.exists():
        cfg = configparser.ConfigParser()
        cfg.read(path)
        if "DEFAULT" in cfg:
            data.update({k.lower(): v for k, v in cfg["DEFAULT"].items()})
        if "CLIENT" in cfg:
            data.update({k.lower(): v for k, v in cfg["CLIENT"].items()})
        return data

    if env_path.exists():
        data.update(
            {k.lower(): v for k, v in dotenv_values(env_path).items() if v is not None}
        )

    return data


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if value is None or str(value).strip() == "":
        return None
    try:
        timeout = float(value)
    except ValueError:
        raise ValueError(f"Invalid timeout {value!r}: expected a number of seconds")
    if timeout <= 0:
        # 0 and below mean "no timeout"
        return None
    return timeout


def get_client_config(raw: Optional[Dict[str, str]] = None) -> ClientConfig:
    """
    Build a ClientConfig from raw configuration values and the environment.
    Raises ValueError if the timeout is not a number.
    """
    raw = load_raw_config() if raw is None else raw

    sockname = os.environ.get("WATCHMAN_SOCK") or raw.get("watchman_sock") or raw.get("sockname")
    binary = (
        os.environ.get("WATCHMAN_BINARY")
        or raw.get("watchman_binary")
        or raw.get("binary")
        or "watchman"
    )

    timeout_env = os.environ.get("WATCHMANLITE_TIMEOUT_S")
    if timeout_env is not None and str(timeout_env).strip() != "":
        timeout = _parse_timeout(timeout_env)
    else:
        timeout = _parse_timeout(raw.get("watchmanlite_timeout_s", raw.get("timeout")))

    return ClientConfig(
        sockname=sockname.strip() if sockname else None,
        binary=binary.strip(),
        timeout=timeout,
    )
