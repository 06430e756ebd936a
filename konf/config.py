"""Global configuration for konf: where konfs are stored and how chatty it is."""

from __future__ import annotations

import os
from dataclasses import dataclass

from konf.errors import KonfError


@dataclass
class Config:
    """All values that can currently be configured for konf."""

    konf_dir: str = ""
    silent: bool = False


_state: dict[str, Config] = {"current": Config()}


def default_config() -> Config:
    """Return a config based on the user's home directory."""
    home = os.path.expanduser("~")
    if home == "~":
        raise KonfError("$HOME is not defined")
    return Config(konf_dir=home + "/.kube/konfs", silent=False)


def set_global_config(conf: Config) -> None:
    """Replace the globally active config."""
    _state["current"] = conf


def active_dir() -> str:
    """Directory that holds the konfs currently used by shell sessions."""
    return _state["current"].konf_dir + "/active"


def store_dir() -> str:
    """Directory that holds all imported konfs."""
    return _state["current"].konf_dir + "/store"


def latest_konf_file_path() -> str:
    """File that remembers the most recently set konf."""
    return _state["current"].konf_dir + "/latestkonf"