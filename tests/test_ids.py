import pytest

from konf.ids import id_from_cluster_and_context, id_from_file_name, id_from_process_id


@pytest.mark.parametrize(
    "context, cluster, expected",
    [
        ("dev-eu", "dev-eu-1", "dev-eu_dev-eu-1"),
        ("con", "mygreathost.com-443", "con_mygreathost.com-443"),
        ("host.com-443/with/slashes", "danger", "host.com-443-with-slashes_danger"),
        ("[email]", "danger", "[email]_danger"),
        ("this:would:break:on:windows", "danger", "this-would-break-on-windows_danger"),
    ],
)
def test_id_from_cluster_and_context(context, cluster, expected):
    assert id_from_cluster_and_context(cluster, context) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("mygreatid.yaml", "mygreatid"),
        ("noextension", "noextension"),
        ("mygreatid.json", "mygreatid"),
    ],
)
def test_id_from_file_name(name, expected):
    assert id_from_file_name(name) == expected


def test_id_from_process_id():
    assert id_from_process_id(1234) == "1234"


def test_ids_are_valid_file_names(tmp_path):
    combos = [
        ("dev-eu", "dev-eu-1"),
        ("host.com-443/with/slashes", "danger"),
        ("this:would:break:on:windows", "danger"),
    ]
    for context, cluster in combos:
        konf_id = id_from_cluster_and_context(cluster, context)
        path = tmp_path / f"{konf_id}.yaml"
        path.write_bytes(b"")
        assert path.parent == tmp_path
        assert path.exists()