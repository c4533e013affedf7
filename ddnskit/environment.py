"""Facts about the running environment and helpers that touch it."""

from __future__ import annotations

import os
import subprocess
import sys
import time
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DOCKER_ENV_FILE = "/.dockerenv"
CONFIG_FILE_PATH_ENV = "DDNS_CONFIG_FILE_PATH"
TERMUX_PREFIX = "/data/data/com.termux/files/usr"
_CONFIG_FILE_NAME = ".ddns_go_config.yaml"


def is_run_in_docker() -> bool:
    """Return True when running inside a Docker container."""
    return os.path.exists(DOCKER_ENV_FILE)


def is_termux() -> bool:
    """Return True when running inside Termux."""
    return os.environ.get("PREFIX") == TERMUX_PREFIX


def get_config_file_path() -> str:
    """Return the configuration file path from the environment or the default."""
    path = os.environ.get(CONFIG_FILE_PATH_ENV, "")
    if path:
        return path
    return get_config_file_path_default()


def get_config_file_path_default() -> str:
    """Return the default configuration file path in the user's home directory."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        return "../" + _CONFIG_FILE_NAME
    return os.path.join(str(home), _CONFIG_FILE_NAME)


def fix_timezone() -> ZoneInfo | None:
    """Adopt the Android system time zone as the local zone; return it, or None."""
    try:
        result = subprocess.run(
            ["/system/bin/getprop", "persist.sys.timezone"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    name = result.stdout.strip() or "UTC"
    try:
        zone = ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None
    os.environ["TZ"] = name
    if hasattr(time, "tzset"):
        time.tzset()
    return zone


def open_explorer(url: str) -> bool:
    """Try to open ``url`` in the local browser; return True if a browser was started."""
    if sys.platform.startswith("win"):
        command = ["rundll32", "url.dll,FileProtocolHandler", url]
    elif sys.platform == "darwin":
        command = ["open", url]
    else:
        # Launching processes from Termux can be killed with a bad system call.
        if is_termux():
            return False
        command = ["xdg-open", url]

    try:
        subprocess.Popen(command)
    except OSError:
        print(f"Please open a browser and visit {url} to finish the configuration")
        return False
    print("Success to open the browser, please configure in the web page")
    return True