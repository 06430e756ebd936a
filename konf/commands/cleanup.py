"""Removal of active konfs that no shell process uses any more."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

import psutil

from konf import config, logger
from konf.ids import id_from_file_name, id_from_process_id
from konf.store import StoreManager

_PID = re.compile(r"[+-]?[0-9]+")


def self_clean(sm: StoreManager) -> None:
    """Delete the active konf of the parent process (the calling shell)."""
    path = sm.active_path_from_id(id_from_process_id(os.getppid()))
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.info("current konf '%s' was already deleted, nothing to self-cleanup", path)


def _process_exists(pid: int) -> bool:
    try:
        return psutil.pid_exists(pid)
    except (OverflowError, ValueError):
        return False


def clean_left_overs(sm: StoreManager) -> None:
    """Delete active konfs whose process is gone, e.g. after an unclean shell exit."""
    for name in sorted(os.listdir(sm.active_dir)):
        konf_id = id_from_file_name(name)
        if not _PID.fullmatch(konf_id):
            logger.warn(
                "file '%s' could not be converted into an int, and therefore cannot be "
                "a valid process id. Skip for cleanup",
                name,
            )
            continue
        if not _process_exists(int(konf_id)):
            os.remove(sm.active_path_from_id(konf_id))


def _default_store() -> StoreManager:
    return StoreManager(active_dir=config.active_dir(), store_dir=config.store_dir())


@dataclass
class CleanupCommand:
    """'konf cleanup': remove unused active konfs."""

    sm: StoreManager = field(default_factory=_default_store)

    def run(self, args: list[str]) -> None:
        clean_left_overs(self.sm)
        self_clean(self.sm)