"""Copy text to the system clipboard via the platform's copy tool."""

from __future__ import annotations

import logging
import shutil
import subprocess

from grafana_connect.errors import ClipboardUnavailable

# Tried in order; the first tool found on PATH wins.
CLIPBOARD_COMMANDS = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip.exe"],
]


def find_clipboard_command() -> list[str] | None:
    for cmd in CLIPBOARD_COMMANDS:
        if shutil.which(cmd[0]):
            return cmd
    return None


def copy_to_clipboard(text: str) -> None:
    """Write text to the clipboard. Raises ClipboardUnavailable on failure."""
    cmd = find_clipboard_command()
    if cmd is None:
        raise ClipboardUnavailable("no clipboard tool found (install xclip, xsel or wl-clipboard)")
    try:
        subprocess.run(cmd, input=text, text=True, capture_output=True, check=True, timeout=5)
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise ClipboardUnavailable(f"{cmd[0]} exited with {e.returncode}: {stderr}") from e
    except subprocess.TimeoutExpired as e:
        raise ClipboardUnavailable(f"{cmd[0]} timed out") from e
    except OSError as e:
        raise ClipboardUnavailable(f"{cmd[0]} failed: {e}") from e
    logging.debug("Copied %d chars to clipboard via %s", len(text), cmd[0])
