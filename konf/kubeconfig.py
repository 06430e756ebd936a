"""Kubeconfig model and splitting of kubeconfigs into single-context konfs."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import IO, Any

import yaml

from konf.errors import KonfError
from konf.ids import id_from_cluster_and_context


class KubeconfigError(KonfError):
    """Content is not a valid kubeconfig."""


def _mapping(value: Any, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise KubeconfigError(f"{what} must be a mapping")
    return {key: copy.deepcopy(item) for key, item in value.items() if item is not None}


def _sequence(value: Any, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise KubeconfigError(f"{what} must be a list")
    return value


def _string(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise KubeconfigError(f"{what} must be a string")
    return value


@dataclass
class NamedCluster:
    """A cluster entry with its name."""

    name: str = ""
    cluster: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> NamedCluster:
        data = _mapping(data, "cluster entry")
        cluster = _mapping(data.get("cluster"), "cluster")
        _string(cluster.get("server"), "cluster server")
        return cls(name=_string(data.get("name"), "cluster name"), cluster=cluster)

    def to_dict(self) -> dict:
        return {"name": self.name, "cluster": {"server": "", **copy.deepcopy(self.cluster)}}


@dataclass
class NamedAuthInfo:
    """A user entry with its name."""

    name: str = ""
    user: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> NamedAuthInfo:
        data = _mapping(data, "user entry")
        return cls(
            name=_string(data.get("name"), "user name"),
            user=_mapping(data.get("user"), "user"),
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "user": copy.deepcopy(self.user)}


@dataclass
class NamedContext:
    """A context entry with its name."""

    name: str = ""
    context: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> NamedContext:
        data = _mapping(data, "context entry")
        context = _mapping(data.get("context"), "context")
        for key in ("cluster", "user", "namespace"):
            _string(context.get(key), f"context {key}")
        return cls(name=_string(data.get("name"), "context name"), context=context)

    @property
    def cluster(self) -> str:
        return self.context.get("cluster", "")

    @property
    def auth_info(self) -> str:
        return self.context.get("user", "")

    @property
    def namespace(self) -> str:
        return self.context.get("namespace", "")

    @namespace.setter
    def namespace(self, value: str) -> None:
        if value:
            self.context["namespace"] = value
        else:
            self.context.pop("namespace", None)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "context": {"cluster": "", "user": "", **copy.deepcopy(self.context)},
        }


@dataclass
class Kubeconfig:
    """A kubeconfig document."""

    api_version: str = ""
    kind: str = ""
    preferences: dict = field(default_factory=dict)
    clusters: list[NamedCluster] = field(default_factory=list)
    auth_infos: list[NamedAuthInfo] = field(default_factory=list)
    contexts: list[NamedContext] = field(default_factory=list)
    current_context: str = ""
    extensions: list = field(default_factory=list)

    @classmethod
    def from_yaml(cls, text: str | bytes) -> Kubeconfig:
        """Parse a kubeconfig from YAML text."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise KubeconfigError(f"invalid yaml: {exc}") from exc
        data = _mapping(data, "kubeconfig")
        return cls(
            api_version=_string(data.get("apiVersion"), "apiVersion"),
            kind=_string(data.get("kind"), "kind"),
            preferences=_mapping(data.get("preferences"), "preferences"),
            clusters=[NamedCluster.from_dict(c) for c in _sequence(data.get("clusters"), "clusters")],
            auth_infos=[NamedAuthInfo.from_dict(u) for u in _sequence(data.get("users"), "users")],
            contexts=[NamedContext.from_dict(c) for c in _sequence(data.get("contexts"), "contexts")],
            current_context=_string(data.get("current-context"), "current-context"),
            extensions=copy.deepcopy(_sequence(data.get("extensions"), "extensions")),
        )

    def to_dict(self) -> dict:
        data: dict[str, Any] = {}
        if self.api_version:
            data["apiVersion"] = self.api_version
        if self.kind:
            data["kind"] = self.kind
        data["preferences"] = copy.deepcopy(self.preferences)
        data["clusters"] = [c.to_dict() for c in self.clusters]
        data["users"] = [u.to_dict() for u in self.auth_infos]
        data["contexts"] = [c.to_dict() for c in self.contexts]
        data["current-context"] = self.current_context
        if self.extensions:
            data["extensions"] = copy.deepcopy(self.extensions)
        return data

    def to_yaml(self) -> str:
        """Serialise to YAML with sorted keys."""
        return yaml.safe_dump(
            self.to_dict(),
            sort_keys=True,
            default_flow_style=False,
            allow_unicode=True,
            width=2**31 - 1,
        )


@dataclass
class Konfig:
    """A single-context kubeconfig together with its konf id."""

    id: str = ""
    kubeconfig: Kubeconfig = field(default_factory=Kubeconfig)


def konfs_from_kubeconfig(text: str | bytes | IO) -> list[Konfig]:
    """Split a kubeconfig into one konf per context; no contexts gives an empty list."""
    if hasattr(text, "read"):
        text = text.read()
    original = Kubeconfig.from_yaml(text)

    konfs = []
    for context in original.contexts:
        cluster = next(
            (c for c in original.clusters if c.name == context.cluster), NamedCluster()
        )
        user = next(
            (u for u in original.auth_infos if u.name == context.auth_info), NamedAuthInfo()
        )
        konfs.append(
            Konfig(
                id=id_from_cluster_and_context(cluster.name, context.name),
                kubeconfig=Kubeconfig(
                    api_version=original.api_version,
                    kind=original.kind,
                    clusters=[copy.deepcopy(cluster)],
                    auth_infos=[copy.deepcopy(user)],
                    contexts=[copy.deepcopy(context)],
                    current_context=context.name,
                ),
            )
        )
    return konfs