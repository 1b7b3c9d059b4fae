"""Copy text to the system clipboard using the platform's command."""

from __future__ import annotations

import subprocess
import sys


class ClipboardError(Exception):
    """Raised when text could not be copied to the clipboard."""


def _clipboard_command() -> list[str]:
    platform = sys.platform
    if platform == "darwin":
        return ["pbcopy"]
    if platform.startswith("linux"):
        return ["xclip", "-selection", "clipboard"]
    if platform == "win32":
        return ["clip"]
    raise ClipboardError(f"unsupported platform: {platform}")


def copy(text: str) -> None:
    """Write text to the system clipboard."""
    command = _clipboard_command()
    try:
        subprocess.run(command, input=text.encode("utf-8"), check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ClipboardError(f"{command[0]} failed: {exc}") from exc