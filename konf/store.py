"""Management of the konf store and the active konf directory."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from konf import logger
from konf.dirs import KONF_PERM
from konf.errors import EmptyStore, KonfError, KubeConfigOverload, NoMatch
from konf.ids import id_from_file_name
from konf.kubeconfig import Konfig, Kubeconfig, KubeconfigError


@dataclass
class Metadata:
    """What the selection prompt shows about a konf."""

    context: str
    cluster: str
    file: str


class _BadPattern(Exception):
    pass


def _class_char(ch: str | None, chars: Iterator[str]) -> str:
    if ch is None or ch in "-]":
        raise _BadPattern
    if ch == "\\":
        ch = next(chars, None)
        if ch is None:
            raise _BadPattern
    return ch


def _char_class(chars: Iterator[str]) -> str:
    ch = next(chars, None)
    negate = ch == "^"
    if negate:
        ch = next(chars, None)
    body = []
    first = True
    while first or ch != "]":
        first = False
        low = _class_char(ch, chars)
        ch = next(chars, None)
        if ch == "-":
            high = _class_char(next(chars, None), chars)
            if low <= high:
                body.append(f"{re.escape(low)}-{re.escape(high)}")
            ch = next(chars, None)
        else:
            body.append(re.escape(low))
        if ch is None:
            raise _BadPattern
    if not body:
        return "." if negate else "(?!)"
    return "[" + ("^" if negate else "") + "".join(body) + "]"


def _compile_glob(pattern: str) -> re.Pattern:
    """Translate a shell file-name pattern into a regular expression."""
    parts = []
    chars = iter(pattern)
    for ch in chars:
        if ch == "*":
            parts.append("[^/]*")
        elif ch == "?":
            parts.append("[^/]")
        elif ch == "\\":
            escaped = next(chars, None)
            if escaped is None:
                raise _BadPattern
            parts.append(re.escape(escaped))
        elif ch == "[":
            parts.append(_char_class(chars))
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts), re.DOTALL)


def _write_file(path: str, data: bytes) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, KONF_PERM)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)


@dataclass
class StoreManager:
    """Knows where konfs live and how to read and write them."""

    active_dir: str
    store_dir: str
    latest_konf_path: str = ""

    def fetch_all_konfs(self) -> list[Metadata]:
        """Metadata for every konf in the store, sorted by file name."""
        return self.fetch_konfs_for_glob("*")

    def fetch_konfs_for_glob(self, pattern: str) -> list[Metadata]:
        """Metadata for konfs whose id matches a shell-style glob."""
        try:
            matcher = _compile_glob(pattern + ".yaml")
        except _BadPattern:
            raise KonfError(
                f"Could not apply glob {pattern!r}: syntax error in pattern"
            ) from None

        files_checked = 0
        names = []
        with os.scandir(self.store_dir) as entries:
            for entry in entries:
                # directories and hidden files (e.g. .DS_Store) never count as konfs
                if entry.is_dir() or entry.name.startswith("."):
                    continue
                files_checked += 1
                if matcher.fullmatch(entry.name):
                    names.append(entry.name)

        if files_checked == 0:
            raise EmptyStore(self.store_dir)
        if not names:
            raise NoMatch(pattern)
        return list(self._metadata_for(sorted(names)))

    def _metadata_for(self, names: Iterable[str]) -> Iterator[Metadata]:
        for name in names:
            path = self.store_path_from_id(id_from_file_name(name))
            try:
                kubeconfig = Kubeconfig.from_yaml(Path(path).read_bytes())
            except KubeconfigError:
                logger.warn(
                    "file %r does not contain a valid kubeconfig. Skipping for evaluation", path
                )
                continue
            if len(kubeconfig.contexts) > 1 or len(kubeconfig.clusters) > 1:
                raise KubeConfigOverload(path)
            if not kubeconfig.contexts or not kubeconfig.clusters:
                logger.warn(
                    "file %r does not contain a context and a cluster. Skipping for evaluation",
                    path,
                )
                continue
            yield Metadata(
                context=kubeconfig.contexts[0].name,
                cluster=kubeconfig.clusters[0].name,
                file=path,
            )

    def write_konf_to_store(self, konf: Konfig) -> str:
        """Write a konf into the store and return its path."""
        storepath = self.store_path_from_id(konf.id)
        _write_file(storepath, konf.kubeconfig.to_yaml().encode("utf-8"))
        return storepath

    def active_path_from_id(self, konf_id: str) -> str:
        """Path of the active konf file for an id."""
        return f"{self.active_dir}/{konf_id}.yaml"

    def store_path_from_id(self, konf_id: str) -> str:
        """Path of the stored konf file for an id."""
        return f"{self.store_dir}/{konf_id}.yaml"