"""Importing kubeconfigs into the konf store, one konf per context."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from konf import config, logger
from konf.errors import KonfError
from konf.kubeconfig import Konfig, konfs_from_kubeconfig
from konf.store import StoreManager


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass
class FileWithPath:
    """A file's content together with the path it was read from."""

    file_path: str
    content: bytes


def files_for_dir(path: str) -> list[FileWithPath]:
    """Read all non-hidden files directly inside a directory, or the file itself."""
    if not os.path.isdir(path):
        os.stat(path)
        return [FileWithPath(os.path.normpath(path), Path(path).read_bytes())]

    files = []
    with os.scandir(path) as entries:
        for entry in sorted(entries, key=lambda e: e.name):
            if entry.is_dir() or entry.name.startswith("."):
                continue
            file_path = os.path.normpath(os.path.join(path, entry.name))
            files.append(FileWithPath(file_path, Path(file_path).read_bytes()))
    return files


def delete_original_config(sm: StoreManager, path: str) -> None:
    """Remove an imported kubeconfig file."""
    os.remove(path)


def _default_store() -> StoreManager:
    return StoreManager(active_dir=config.active_dir(), store_dir=config.store_dir())


@dataclass
class ImportCommand:
    """'konf import <file or dir>': split kubeconfigs and store one konf per context."""

    sm: StoreManager = field(default_factory=_default_store)
    list_files: Callable[[str], list[FileWithPath]] = files_for_dir
    determine_configs: Callable[[bytes], list[Konfig]] = konfs_from_kubeconfig
    write_config: Callable[[Konfig], str] | None = None
    delete_original: Callable[[StoreManager, str], None] = delete_original_config
    move: bool = False

    def run(self, args: list[str]) -> None:
        if len(args) != 1:
            raise KonfError(f"accepts 1 arg(s), received {len(args)}")

        files = self.list_files(args[0])
        found = [
            (konf, file.file_path)
            for file in files
            for konf in self.determine_configs(file.content)
        ]

        if not found:
            listing = "".join(f"\t- {_quote(file.file_path)}\n" for file in files)
            raise KonfError("no contexts found in the following file(s):\n" + listing)

        write = self.write_config or self.sm.write_konf_to_store
        for konf, import_path in found:
            write(konf)
            logger.info(
                "Imported konf from %s successfully into %s",
                _quote(import_path),
                _quote(self.sm.store_path_from_id(konf.id)),
            )

        if self.move:
            for file in files:
                self.delete_original(self.sm, file.file_path)
                logger.info(
                    "Successfully deleted original kubeconfig file at %s", _quote(file.file_path)
                )