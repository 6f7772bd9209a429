"""Build and runtime version information."""

from __future__ import annotations

import platform
import sys

VERSION = "Not provided."
GIT_SHA = "Not provided."
BUILT = "Not provided."


def info(api_version: str) -> list[str]:
    """Return human-readable version lines for the given API version."""
    return [
        f"API Version: {api_version}",
        f"Version: {VERSION}",
        f"Git SHA: {GIT_SHA}",
        f"Built At: {BUILT}",
        f"Python Version: {platform.python_version()}",
        f"Python OS/Arch: {sys.platform}/{platform.machine()}",
    ]


def print_version_and_exit(api_version: str) -> None:
    """Print the lines from :func:`info` and exit with status 0."""
    for line in info(api_version):
        print(line)
    raise SystemExit(0)