"""Changing the namespace of the konf used in the current shell."""

from __future__ import annotations

import base64
import binascii
import os
import ssl
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

import httpx

from konf.commands.completion import ShellCompDirective
from konf.dirs import KONF_PERM
from konf.errors import KonfError
from konf.kubeconfig import Kubeconfig, KubeconfigError
from konf.prompt import RunFunc, Select, fuzzy_match, terminal

_REQUEST_TIMEOUT = 30.0


class NamespaceLister(Protocol):
    """Anything that can list the namespaces of a cluster."""

    def list_namespaces(self) -> list[str]: ...


ClientCreator = Callable[[], NamespaceLister]


class KubeClient:
    """A minimal client for the Kubernetes API server."""

    def __init__(self, http: httpx.Client) -> None:
        self.http = http

    @property
    def server(self) -> str:
        """Base URL of the API server."""
        return str(self.http.base_url)

    def list_namespaces(self) -> list[str]:
        """Names of all namespaces in the cluster, in the order the server returns them."""
        try:
            response = self.http.get("/api/v1/namespaces")
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise KonfError(f"could not list namespaces: {exc}") from exc
        except ValueError as exc:
            raise KonfError(f"could not decode namespace list: {exc}") from exc

        items = payload.get("items") if isinstance(payload, dict) else None
        try:
            return [item["metadata"]["name"] for item in items or []]
        except (KeyError, TypeError) as exc:
            raise KonfError(f"malformed namespace list: {exc}") from exc


def kubeconfig_env() -> str:
    """The path in $KUBECONFIG; required by everything that talks to the cluster."""
    path = os.environ.get("KUBECONFIG", "")
    if not path:
        raise KonfError("KUBECONFIG ist not set in your shell. Have you run konf set?")
    return path


def _read_source(base_dir: str, entry: dict, file_key: str, data_key: str) -> bytes | None:
    data = entry.get(data_key)
    if data:
        try:
            return base64.b64decode(data, validate=True)
        except (binascii.Error, TypeError, ValueError) as exc:
            raise KubeconfigError(f"invalid {data_key}: {exc}") from exc
    path = entry.get(file_key)
    if path:
        return Path(os.path.join(base_dir, path)).read_bytes()
    return None


def _ssl_context(cluster: dict, user: dict, base_dir: str) -> ssl.SSLContext:
    try:
        if cluster.get("insecure-skip-tls-verify"):
            context = ssl.create_default_context()
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        else:
            authority = _read_source(
                base_dir, cluster, "certificate-authority", "certificate-authority-data"
            )
            if authority is None:
                context = ssl.create_default_context()
            else:
                context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
                context.load_verify_locations(cadata=authority.decode("ascii"))

        cert = _read_source(base_dir, user, "client-certificate", "client-certificate-data")
        key = _read_source(base_dir, user, "client-key", "client-key-data")
        if cert is not None and key is not None:
            with tempfile.TemporaryDirectory() as tmp:
                cert_path = Path(tmp, "client.crt")
                key_path = Path(tmp, "client.key")
                cert_path.write_bytes(cert)
                key_path.write_bytes(key)
                context.load_cert_chain(cert_path, key_path)
    except (ssl.SSLError, UnicodeDecodeError) as exc:
        raise KubeconfigError(f"invalid TLS configuration: {exc}") from exc
    return context


def new_kube_client() -> KubeClient:
    """A client for the cluster of the konf that $KUBECONFIG points to."""
    path = kubeconfig_env()
    kubeconfig = Kubeconfig.from_yaml(Path(path).read_bytes())
    base_dir = os.path.dirname(os.path.abspath(path))

    name = kubeconfig.current_context
    if not name:
        raise KubeconfigError("invalid configuration: no configuration has been provided")
    context = next((c for c in kubeconfig.contexts if c.name == name), None)
    if context is None:
        raise KubeconfigError(
            f"invalid configuration: context was not found for specified context: {name}"
        )

    cluster = next((c for c in kubeconfig.clusters if c.name == context.cluster), None)
    cluster_entry = cluster.cluster if cluster is not None else {}
    server = cluster_entry.get("server", "")
    if not server:
        raise KubeconfigError(
            f"invalid configuration: no server found for cluster {context.cluster!r}"
        )

    user = next((u for u in kubeconfig.auth_infos if u.name == context.auth_info), None)
    user_entry = user.user if user is not None else {}

    headers = {}
    bearer = user_entry.get("token")
    if not bearer and user_entry.get("tokenFile"):
        token_path = os.path.join(base_dir, user_entry["tokenFile"])
        bearer = Path(token_path).read_text().strip()
    if bearer:
        headers["Authorization"] = f"Bearer {bearer}"

    basic_auth = None
    if user_entry.get("username"):
        basic_auth = (user_entry["username"], user_entry.get("password", ""))

    http = httpx.Client(
        base_url=server,
        verify=_ssl_context(cluster_entry, user_entry, base_dir),
        headers=headers,
        auth=basic_auth,
        timeout=_REQUEST_TIMEOUT,
    )
    return KubeClient(http)


def search_namespace(search_term: str, item: str) -> bool:
    """Fuzzy-match a search term against a namespace name."""
    return fuzzy_match(search_term, item)


def select_namespace(client_creator: ClientCreator, prompt_func: RunFunc) -> str:
    """Let the user pick one of the cluster's namespaces."""
    namespaces = client_creator().list_namespaces()
    select = Select(
        label="Select namespace",
        items=namespaces,
        hide_selected=True,
        start_in_search_mode=True,
        searcher=lambda term, index: search_namespace(term, namespaces[index]),
        size=15,
    )
    position = prompt_func(select)
    if position >= len(namespaces):
        raise KonfError(f"invalid selection {position}")
    return namespaces[position]


def _write_file(path: str, data: bytes) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, KONF_PERM)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)


def set_namespace(namespace: str) -> None:
    """Set the namespace of the single context in the konf $KUBECONFIG points to."""
    path = kubeconfig_env()
    kubeconfig = Kubeconfig.from_yaml(Path(path).read_bytes())
    if not kubeconfig.contexts:
        raise KonfError("could not set namespace as contexts[] is empty in kubeconfig")
    # konf import guarantees a single context per konf
    kubeconfig.contexts[0].namespace = namespace
    _write_file(path, kubeconfig.to_yaml().encode("utf-8"))


@dataclass
class NamespaceCommand:
    """'konf namespace [<name>]' (alias 'ns'): change the namespace of the current konf."""

    prompt_func: RunFunc = terminal
    choose_namespace: Callable[[ClientCreator, RunFunc], str] = select_namespace
    apply_namespace: Callable[[str], None] = set_namespace
    client_creator: ClientCreator = new_kube_client

    def run(self, args: list[str]) -> None:
        if len(args) > 1:
            raise KonfError(f"accepts at most 1 arg(s), received {len(args)}")
        if args:
            namespace = args[0]
        else:
            namespace = self.choose_namespace(self.client_creator, self.prompt_func)
        self.apply_namespace(namespace)

    def complete(self, args: list[str], to_complete: str) -> tuple[list[str], ShellCompDirective]:
        """All namespaces of the cluster; filtering is left to the shell."""
        try:
            namespaces = self.client_creator().list_namespaces()
        except (KonfError, OSError) as exc:
            print(exc, file=sys.stderr)
            return [], ShellCompDirective.ERROR
        return namespaces, ShellCompDirective.NO_FILE_COMP