"""Print build information."""

from __future__ import annotations

import platform
import sys

from grafana_connect import __version__


def cmd_version(args) -> None:
    print("Grafana Connect")
    print(f"  Version: {__version__}")
    print(f"  Python:  {platform.python_version()} ({sys.implementation.name})")
    print(f"  Runtime: {platform.system().lower()}/{platform.machine()}")
