"""Errors raised by konf."""

from __future__ import annotations

import json


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class KonfError(Exception):
    """Base class for all konf errors."""


class KubeConfigOverload(KonfError):
    """A kubeconfig in the store holds more than one context or cluster."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"Impure Store: The kubeconfig {_quote(path)} contains multiple contexts "
            "and/or clusters. Please only use 'konf import' for populating the store\n"
        )


class EmptyStore(KonfError):
    """The konf store holds no kubeconfig."""

    def __init__(self, storepath: str) -> None:
        self.storepath = storepath
        super().__init__(
            f"The konf store at {_quote(storepath)} is empty. "
            "Please run 'konf import' to populate it"
        )


class NoMatch(KonfError):
    """No konf matched a glob pattern."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"No konf file matched your search pattern {_quote(pattern)}")