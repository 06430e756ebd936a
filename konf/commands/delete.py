"""Deleting konfs from the konf store."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from typing import Callable

from konf import config, logger
from konf.commands.completion import ShellCompDirective
from konf.commands.set_konf import select_single_konf
from konf.errors import EmptyStore, KonfError
from konf.ids import id_from_cluster_and_context
from konf.prompt import RunFunc, terminal
from konf.store import StoreManager


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def delete_konf_with_id(sm: StoreManager, konf_id: str) -> None:
    """Remove the stored konf with the given id."""
    path = sm.store_path_from_id(konf_id)
    os.remove(path)
    logger.info("Successfully deleted konf %s at %s", _quote(konf_id), _quote(path))


def ids_for_globs(sm: StoreManager, patterns: list[str]) -> list[str]:
    """Ids of all stored konfs matching any of the glob patterns."""
    return [
        id_from_cluster_and_context(meta.cluster, meta.context)
        for pattern in patterns
        for meta in sm.fetch_konfs_for_glob(pattern)
    ]


def _default_store() -> StoreManager:
    return StoreManager(active_dir=config.active_dir(), store_dir=config.store_dir())


@dataclass
class DeleteCommand:
    """'konf delete [<id or glob>...]': remove konfs from the store."""

    sm: StoreManager = field(default_factory=_default_store)
    select_konf: Callable[[StoreManager, RunFunc], str] = select_single_konf
    delete_konf: Callable[[StoreManager, str], None] = delete_konf_with_id
    resolve_globs: Callable[[StoreManager, list[str]], list[str]] = ids_for_globs
    prompt_func: RunFunc = terminal

    def run(self, args: list[str]) -> None:
        if args:
            ids = self.resolve_globs(self.sm, args)
        else:
            ids = [self.select_konf(self.sm, self.prompt_func)]

        for konf_id in ids:
            self.delete_konf(self.sm, konf_id)

        logger.info(
            "Deletion successful. If for security reasons you want to remove any currently "
            "active konfs, close the shell sessions they are used in."
        )

    def complete(self, args: list[str], to_complete: str) -> tuple[list[str], ShellCompDirective]:
        """Ids of all stored konfs as completion candidates."""
        try:
            konfs = self.sm.fetch_all_konfs()
        except EmptyStore:
            return [], ShellCompDirective.NO_FILE_COMP
        except (KonfError, OSError) as exc:
            print(exc, file=sys.stderr)
            return [], ShellCompDirective.ERROR
        ids = [id_from_cluster_and_context(k.cluster, k.context) for k in konfs]
        return ids, ShellCompDirective.NO_FILE_COMP