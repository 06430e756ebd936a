"""Selecting the konf that the current shell session uses."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from konf import config, logger
from konf.commands.completion import ShellCompDirective
from konf.dirs import KONF_PERM
from konf.errors import EmptyStore, KonfError
from konf.ids import id_from_cluster_and_context, id_from_process_id
from konf.prompt import RunFunc, Select, fuzzy_filter_konf, new_table_output_templates, terminal
from konf.store import Metadata, StoreManager

# The shell wrapper looks for lines with this prefix to change $KUBECONFIG.
KUBECONFIG_CHANGE_PREFIX = "KUBECONFIGCHANGE:"

_COLUMN_WIDTH = 25


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _write_file(path: str, data: bytes) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, KONF_PERM)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)


def create_set_prompt(options: list[Metadata]) -> Select:
    """A selection prompt showing konfs as a table, searchable by fuzzy match."""
    templates = new_table_output_templates(_COLUMN_WIDTH)
    return Select(
        label=templates.label,
        items=options,
        active=templates.active,
        inactive=templates.inactive,
        searcher=lambda term, index: fuzzy_filter_konf(term, options[index]),
        size=15,
        hide_selected=True,
    )


def select_single_konf(sm: StoreManager, prompt_func: RunFunc) -> str:
    """Let the user pick one konf from the store and return its id."""
    konfs = sm.fetch_all_konfs()
    position = prompt_func(create_set_prompt(konfs))
    if position >= len(konfs):
        raise KonfError(f"invalid selection {position}")
    chosen = konfs[position]
    return id_from_cluster_and_context(chosen.cluster, chosen.context)


def id_of_latest_konf(sm: StoreManager) -> str:
    """The id of the konf that was set most recently."""
    try:
        return Path(sm.latest_konf_path).read_bytes().decode("utf-8")
    except FileNotFoundError:
        raise KonfError("could not select latest konf, because no konf was yet set") from None


def set_context(konf_id: str, sm: StoreManager) -> str:
    """Copy a stored konf to the active file of the calling shell and return its path."""
    content = Path(sm.store_path_from_id(konf_id)).read_bytes()
    active_path = sm.active_path_from_id(id_from_process_id(os.getppid()))
    _write_file(active_path, content)
    return active_path


def save_latest_konf(sm: StoreManager, konf_id: str) -> None:
    """Remember a konf id as the most recently set one."""
    _write_file(sm.latest_konf_path, konf_id.encode("utf-8"))


def _default_store() -> StoreManager:
    return StoreManager(
        active_dir=config.active_dir(),
        store_dir=config.store_dir(),
        latest_konf_path=config.latest_konf_file_path(),
    )


@dataclass
class SetCommand:
    """'konf set [<id>|-]': choose the kubeconfig for the current shell."""

    sm: StoreManager = field(default_factory=_default_store)
    prompt_func: RunFunc = terminal
    stdout: TextIO | None = None

    def run(self, args: list[str]) -> None:
        if len(args) > 1:
            raise KonfError(f"accepts at most 1 arg(s), received {len(args)}")

        if not args:
            konf_id = select_single_konf(self.sm, self.prompt_func)
        elif args[0] == "-":
            konf_id = id_of_latest_konf(self.sm)
        else:
            konf_id = args[0]

        active_path = set_context(konf_id, self.sm)
        try:
            save_latest_konf(self.sm, konf_id)
        except OSError as exc:
            raise KonfError(
                "could not save latest konf. As a result 'konf set -' might not work: "
                f"{_quote(str(exc))} "
            ) from exc

        logger.info("Setting context to %s", _quote(konf_id))
        print(KUBECONFIG_CHANGE_PREFIX + active_path, file=self.stdout or sys.stdout)

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