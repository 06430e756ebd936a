import io
import json
import platform
import sys

import pytest

from konf.commands.version import VersionCommand, version_string_with_overrides
from konf.errors import KonfError

RUNTIME = {
    "PythonVersion": platform.python_version(),
    "Platform": f"{sys.platform}/{platform.machine()}",
    "Compiler": platform.python_implementation(),
}


@pytest.mark.parametrize(
    "git_version, git_commit, build_date, prefix",
    [
        ("", "", "", '{"GitVersion":"dev","GitCommit":"dev","BuildDate":"1970-01-01T00:00:00Z",'),
        (
            "override",
            "",
            "",
            '{"GitVersion":"override","GitCommit":"dev","BuildDate":"1970-01-01T00:00:00Z",',
        ),
        (
            "",
            "override",
            "",
            '{"GitVersion":"dev","GitCommit":"override","BuildDate":"1970-01-01T00:00:00Z",',
        ),
        ("", "", "override", '{"GitVersion":"dev","GitCommit":"dev","BuildDate":"override",'),
        (
            "override",
            "override",
            "override",
            '{"GitVersion":"override","GitCommit":"override","BuildDate":"override",',
        ),
    ],
)
def test_version_string_with_overrides(git_version, git_commit, build_date, prefix):
    res = version_string_with_overrides(git_version, git_commit, build_date)
    assert res.startswith(prefix)
    parsed = json.loads(res)
    for key, value in RUNTIME.items():
        assert parsed[key] == value
    assert list(parsed) == [
        "GitVersion",
        "GitCommit",
        "BuildDate",
        "PythonVersion",
        "Platform",
        "Compiler",
    ]


def test_version_command_prints_json():
    out = io.StringIO()
    VersionCommand(stdout=out).run([])
    parsed = json.loads(out.getvalue())
    assert parsed["GitVersion"] == "dev"
    assert out.getvalue().endswith("}\n")


def test_version_command_rejects_args():
    with pytest.raises(KonfError, match="accepts 0 arg"):
        VersionCommand(stdout=io.StringIO()).run(["extra"])