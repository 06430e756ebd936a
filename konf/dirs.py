"""Directory layout and permissions for konf files."""

from __future__ import annotations

import os

from konf import config

KONF_PERM = 0o600
KONF_DIR_PERM = 0o700


def ensure_dir() -> None:
    """Make sure the konf store and active directories exist."""
    os.makedirs(config.store_dir(), mode=KONF_DIR_PERM, exist_ok=True)
    os.makedirs(config.active_dir(), mode=KONF_DIR_PERM, exist_ok=True)