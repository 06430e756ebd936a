"""Identifiers that konf uses to name konf files."""

from __future__ import annotations

_ILLEGAL_CHARS = ("/", ":")


def id_from_cluster_and_context(cluster: str, context: str) -> str:
    """Build a file-safe id of the form '<context>_<cluster>'."""
    konf_id = f"{context}_{cluster}"
    for char in _ILLEGAL_CHARS:
        konf_id = konf_id.replace(char, "-")
    return konf_id


def id_from_process_id(pid: int) -> str:
    """Build an id from a process id."""
    return str(pid)


def id_from_file_name(name: str) -> str:
    """Build an id from a file name by dropping its extension."""
    stem, dot, _ = name.rpartition(".")
    return stem if dot else name