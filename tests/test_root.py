import json
import os

import pytest

from konf.kubeconfig import Kubeconfig
from konf.root import build_parser, execute, main

SINGLE_CLUSTER_SINGLE_CONTEXT_EU = """
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

EU_ID = "dev-eu_dev-eu-1"


@pytest.fixture
def konf_dir(tmp_path):
    return str(tmp_path / "konfs")


@pytest.fixture
def imported(tmp_path, konf_dir, capsys):
    source = tmp_path / "kubeconfig.yaml"
    source.write_text(SINGLE_CLUSTER_SINGLE_CONTEXT_EU)
    assert main(["--konf-dir", konf_dir, "--silent", "import", str(source)]) == 0
    capsys.readouterr()
    return konf_dir


def test_version_prints_json(konf_dir, capsys):
    assert main(["--konf-dir", konf_dir, "--silent", "version"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["GitVersion"] == "dev"
    assert data["BuildDate"] == "1970-01-01T00:00:00Z"


def test_run_creates_directories(konf_dir, capsys):
    assert main(["--konf-dir", konf_dir, "--silent", "version"]) == 0
    assert os.path.isdir(os.path.join(konf_dir, "store"))
    assert os.path.isdir(os.path.join(konf_dir, "active"))


def test_global_options_after_command():
    args = build_parser().parse_args(["set", "--konf-dir", "somewhere", "--silent", "-"])
    assert args.konf_dir == "somewhere"
    assert args.silent is True
    assert args.konf_id == "-"


def test_global_options_default():
    args = build_parser().parse_args(["delete", "a", "b*"])
    assert args.konf_dir == ""
    assert args.silent is False
    assert args.konf_ids == ["a", "b*"]


def test_import_move_flag():
    args = build_parser().parse_args(["import", "-m", "/some/dir"])
    assert args.move is True
    assert args.path == "/some/dir"


def test_too_many_arguments_exit(konf_dir):
    with pytest.raises(SystemExit):
        execute(["--konf-dir", konf_dir, "version", "extra"])


def test_failure_returns_one(konf_dir, capsys):
    assert main(["--konf-dir", konf_dir, "--silent", "shellwrapper", "invalid"]) == 1
    err = capsys.readouterr().err
    assert 'konf execution has failed: "konf currently does not support invalid"' in err


def test_no_command_prints_help(konf_dir, capsys):
    assert main(["--konf-dir", konf_dir, "--silent"]) == 0
    assert "lightweight kubeconfig manager" in capsys.readouterr().out


def test_import_writes_store(imported):
    stored = os.path.join(imported, "store", EU_ID + ".yaml")
    kubeconfig = Kubeconfig.from_yaml(open(stored).read())
    assert kubeconfig.contexts[0].name == "dev-eu"
    assert kubeconfig.clusters[0].name == "dev-eu-1"


def test_set_and_set_latest(imported, capsys):
    assert main(["--konf-dir", imported, "--silent", "set", EU_ID]) == 0
    active = os.path.join(imported, "active", f"{os.getppid()}.yaml")
    assert capsys.readouterr().out.strip() == "KUBECONFIGCHANGE:" + active
    assert os.path.exists(active)
    with open(os.path.join(imported, "latestkonf")) as handle:
        assert handle.read() == EU_ID

    assert main(["--konf-dir", imported, "--silent", "set", "-"]) == 0
    assert capsys.readouterr().out.strip() == "KUBECONFIGCHANGE:" + active


def test_delete_glob(imported):
    assert main(["--konf-dir", imported, "--silent", "delete", "dev-eu*"]) == 0
    assert not os.path.exists(os.path.join(imported, "store", EU_ID + ".yaml"))


def test_namespace_command(imported, capsys, monkeypatch):
    assert main(["--konf-dir", imported, "--silent", "set", EU_ID]) == 0
    active = os.path.join(imported, "active", f"{os.getppid()}.yaml")
    monkeypatch.setenv("KUBECONFIG", active)
    assert main(["--konf-dir", imported, "--silent", "ns", "kube-system"]) == 0
    kubeconfig = Kubeconfig.from_yaml(open(active).read())
    assert kubeconfig.contexts[0].namespace == "kube-system"


def test_complete_command_names(konf_dir, capsys):
    assert main(["--konf-dir", konf_dir, "--silent", "__complete", "sh"]) == 0
    assert capsys.readouterr().out.splitlines() == ["shellwrapper", ":4"]


def test_complete_set_ids(imported, capsys):
    assert main(["--konf-dir", imported, "--silent", "__complete", "set", ""]) == 0
    assert capsys.readouterr().out.splitlines() == [EU_ID, ":4"]


def test_complete_set_empty_store(konf_dir, capsys):
    assert main(["--konf-dir", konf_dir, "--silent", "__complete", "set", ""]) == 0
    assert capsys.readouterr().out.splitlines() == [":4"]


def test_complete_shells(konf_dir, capsys):
    assert main(["--konf-dir", konf_dir, "--silent", "__complete", "completion", ""]) == 0
    assert capsys.readouterr().out.splitlines() == ["bash", "zsh", "fish", ":4"]