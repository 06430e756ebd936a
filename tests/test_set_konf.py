import io
import os

import pytest

from konf.commands.completion import ShellCompDirective
from konf.commands.set_konf import (
    SetCommand,
    create_set_prompt,
    id_of_latest_konf,
    save_latest_konf,
    select_single_konf,
    set_context,
)
from konf.errors import KonfError
from konf.store import Metadata, StoreManager

EU = """
apiVersion: v1
clusters:
  - cluster:
      server: https://10.1.1.0
    name: dev-eu-1
contexts:
  - context:
      namespace: kube-public
      cluster: dev-eu-1
      user: dev-eu
    name: dev-eu
current-context: dev-eu
kind: Config
preferences: {}
users:
  - name: dev-eu
    user: {}
"""

ASIA = """
apiVersion: v1
clusters:
  - cluster:
      server: https://10.1.1.0
    name: dev-asia-1
contexts:
  - context:
      namespace: kube-public
      cluster: dev-asia-1
      user: dev-asia
    name: dev-asia
current-context: dev-asia
kind: Config
preferences: {}
users:
  - name: dev-asia
    user: {}
"""

STORE = "./konf/store"
ACTIVE = "./konf/active"
LATEST = "./konf/latestkonf"


@pytest.fixture
def sm(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    os.makedirs(STORE)
    os.makedirs(ACTIVE)
    return StoreManager(active_dir=ACTIVE, store_dir=STORE, latest_konf_path=LATEST)


def _write(path, text):
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)


@pytest.fixture
def filled(sm):
    _write(f"{STORE}/dev-eu_dev-eu-1.yaml", EU)
    _write(f"{STORE}/dev-asia_dev-asia-1.yaml", ASIA)
    return sm


def test_latest_konf_set(sm):
    _write(LATEST, "context_cluster")
    assert id_of_latest_konf(sm) == "context_cluster"


def test_no_latest_konf(sm):
    with pytest.raises(KonfError) as exc:
        id_of_latest_konf(sm)
    assert str(exc.value) == "could not select latest konf, because no konf was yet set"


def test_complete_normal_results(filled):
    res, directive = SetCommand(sm=filled).complete([], "")
    assert res == ["dev-asia_dev-asia-1", "dev-eu_dev-eu-1"]
    assert directive == ShellCompDirective.NO_FILE_COMP


def test_complete_no_results(sm):
    res, directive = SetCommand(sm=sm).complete([], "")
    assert res == []
    assert directive == ShellCompDirective.NO_FILE_COMP


def test_save_latest_konf(sm):
    save_latest_konf(sm, "context_cluster")
    assert id_of_latest_konf(sm) == "context_cluster"


def test_set_context_normal_write(sm):
    _write(f"{STORE}/dev-eu_dev-eu.yaml", EU)
    path = set_context("dev-eu_dev-eu", sm)
    assert path == f"{ACTIVE}/{os.getppid()}.yaml"
    with open(path, encoding="utf-8") as handle:
        assert handle.read() == EU


def test_set_context_invalid_id(sm):
    with pytest.raises(FileNotFoundError):
        set_context("i-am-invalid", sm)


@pytest.mark.parametrize(
    "position, expected",
    [(0, "dev-asia_dev-asia-1"), (1, "dev-eu_dev-eu-1")],
)
def test_select_single_konf(filled, position, expected):
    assert select_single_konf(filled, lambda select: position) == expected


def test_select_single_konf_prompt_failure(filled):
    def failing(select):
        raise KonfError("err")

    with pytest.raises(KonfError, match="^err$"):
        select_single_konf(filled, failing)


def test_select_single_konf_invalid_selection(filled):
    with pytest.raises(KonfError) as exc:
        select_single_konf(filled, lambda select: 2)
    assert str(exc.value) == "invalid selection 2"


def test_create_set_prompt_searches_all_columns():
    options = [
        Metadata(context="dev-eu", cluster="dev-eu-1", file="a.yaml"),
        Metadata(context="prod", cluster="prod-asia", file="b.yaml"),
    ]
    select = create_set_prompt(options)
    assert list(select.items) == options
    assert select.label.startswith("  Context")
    assert select.searcher("asia", 1) is True
    assert select.searcher("asia", 0) is False


def test_run_with_id(filled):
    out = io.StringIO()
    SetCommand(sm=filled, stdout=out).run(["dev-eu_dev-eu-1"])
    assert out.getvalue() == f"KUBECONFIGCHANGE:{ACTIVE}/{os.getppid()}.yaml\n"
    assert id_of_latest_konf(filled) == "dev-eu_dev-eu-1"


def test_run_with_latest(filled):
    save_latest_konf(filled, "dev-asia_dev-asia-1")
    out = io.StringIO()
    SetCommand(sm=filled, stdout=out).run(["-"])
    with open(f"{ACTIVE}/{os.getppid()}.yaml", encoding="utf-8") as handle:
        assert handle.read() == ASIA
    assert out.getvalue().startswith("KUBECONFIGCHANGE:")


def test_run_with_prompt(filled):
    out = io.StringIO()
    SetCommand(sm=filled, prompt_func=lambda select: 0, stdout=out).run([])
    assert id_of_latest_konf(filled) == "dev-asia_dev-asia-1"


def test_run_too_many_args(filled):
    with pytest.raises(KonfError, match="accepts at most 1 arg"):
        SetCommand(sm=filled).run(["a", "b"])