import json

import pytest

from prefs_lib import cli


def run_cli(capsys, tmp_path, *args):
    code = cli.main(["--home", str(tmp_path), "--app", "com.example.App", *args])
    out, err = capsys.readouterr()
    return code, out, err


def test_set_get_show_list_delete(tmp_path, capsys):
    code, _, _ = run_cli(capsys, tmp_path, "--context", "settings", "set", "theme", '"dark"')
    assert code == 0
    code, _, _ = run_cli(capsys, tmp_path, "--context", "settings", "set", "size", "12")
    assert code == 0

    code, out, _ = run_cli(capsys, tmp_path, "--context", "settings", "get", "size")
    assert code == 0 and json.loads(out) == 12

    code, out, _ = run_cli(capsys, tmp_path, "--context", "settings", "show")
    assert code == 0
    assert json.loads(out) == {"theme": "dark", "size": 12}

    code, out, _ = run_cli(capsys, tmp_path, "list")
    assert code == 0 and out.split() == ["settings"]

    code, _, _ = run_cli(capsys, tmp_path, "--context", "settings", "remove", "size")
    code, out, _ = run_cli(capsys, tmp_path, "--context", "settings", "get", "size")
    assert code == 1

    code, _, _ = run_cli(capsys, tmp_path, "--context", "settings", "delete")
    assert code == 0
    code, _, err = run_cli(capsys, tmp_path, "--context", "settings", "delete")
    assert code == 1 and "not found" in err


def test_plain_string_values(tmp_path, capsys):
    run_cli(capsys, tmp_path, "set", "name", "not json")
    code, out, _ = run_cli(capsys, tmp_path, "get", "name")
    assert json.loads(out) == "not json"


def test_path_prints_resource_name(tmp_path, capsys):
    code, out, _ = run_cli(capsys, tmp_path, "--context", "settings", "path")
    assert code == 0
    assert out.strip().endswith("com/example/App/settings.json")


def test_show_missing_context_fails(tmp_path, capsys):
    code, _, err = run_cli(capsys, tmp_path, "--context", "x", "show")
    assert code == 1
    assert "not found" in err


def test_corrupt_context_reports_error(tmp_path, capsys):
    run_cli(capsys, tmp_path, "--context", "bad", "set", "a", "1")
    code, out, _ = run_cli(capsys, tmp_path, "--context", "bad", "path")
    with open(out.strip(), "w") as f:
        f.write("{broken")
    code, _, err = run_cli(capsys, tmp_path, "--context", "bad", "get", "a")
    assert code == 1
    assert "unable to read" in err


def test_empty_key_is_usage_error(tmp_path, capsys):
    code, _, err = run_cli(capsys, tmp_path, "set", "", "1")
    assert code == 2
    assert "not a valid key" in err


def test_parse_value():
    assert cli.parse_value("1.5") == 1.5
    assert cli.parse_value("[1, 2]") == [1, 2]
    assert cli.parse_value("hello") == "hello"


def test_missing_command_exits():
    with pytest.raises(SystemExit):
        cli.parse_args([])
