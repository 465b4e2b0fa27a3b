"""Elevated-privilege detection (root / Administrator)."""

from __future__ import annotations

import ctypes
import os
import sys


def is_elevated() -> bool:
    if sys.platform.startswith("win"):
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
        except (AttributeError, OSError):
            return False
    geteuid = getattr(os, "geteuid", None)
    if geteuid is None:
        return False
    return geteuid() == 0


def elevation_hint() -> str:
    """Tell the user how to run with the privileges the hosts file needs."""

    if sys.platform.startswith("win"):
        return "Right-click the program and choose 'Run as administrator'."
    return f"Run it with sudo: sudo {sys.argv[0] or 'hosts-updater'}"
