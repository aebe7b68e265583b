"""Command line tests"""
from pathlib import Path

import pytest

from config_editor.cli import EXIT_ERROR, EXIT_OK, EXIT_UNSTRUCTURED, main, parse_cli_value
from config_editor.codecs import parse_config


@pytest.mark.parametrize("raw,expected", [
    ("20", 20.0),
    ("true", True),
    ("null", None),
    ('"quoted"', "quoted"),
    ("[1, 2]", [1.0, 2.0]),
    ('{"a": "b"}', {"a": "b"}),
    ("plain words", "plain words"),
    ("NaN", "NaN"),
    ("1e400", "1e400"),
])
def test_parse_cli_value(raw, expected) -> None:
    assert parse_cli_value(raw) == expected


def test_list(config_root: Path, capsys) -> None:
    assert main(["list", str(config_root)]) == EXIT_OK
    assert "5 files" in capsys.readouterr().out


def test_show(config_root: Path, capsys) -> None:
    assert main(["show", str(config_root / "mods" / "sodium.toml")]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Listening port" in out
    assert "25565" in out


def test_show_text_file(config_root: Path, capsys) -> None:
    assert main(["show", str(config_root / "notes.txt")]) == EXIT_UNSTRUCTURED
    assert "plain text" in capsys.readouterr().out


def test_get_scalar_with_comment(config_root: Path, capsys) -> None:
    assert main(["get", str(config_root / "mods" / "sodium.toml"), "server.port"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "25565" in out
    assert "# Listening port" in out


def test_get_container(config_root: Path, capsys) -> None:
    assert main(["get", str(config_root / "mods" / "sodium.toml"), "server.limits"]) == EXIT_OK
    assert '"players": 20' in capsys.readouterr().out


def test_get_missing_path(config_root: Path) -> None:
    assert main(["get", str(config_root / "mods" / "sodium.toml"), "server.nothing"]) == EXIT_ERROR


def test_set_saves_file(config_root: Path) -> None:
    file_path = config_root / "mods" / "modpack.json"
    assert main(["set", str(file_path), "limits.max", "40"]) == EXIT_OK

    parsed = parse_config(file_path.read_text(encoding="utf-8"), "json")
    assert parsed.values["limits"] == {"max": 40, "min": 1}


def test_set_unresolved_path_leaves_file(config_root: Path) -> None:
    file_path = config_root / "mods" / "modpack.json"
    before = file_path.read_text(encoding="utf-8")

    assert main(["set", str(file_path), "missing.key", "1"]) == EXIT_ERROR
    assert file_path.read_text(encoding="utf-8") == before


def test_delete_saves_file(config_root: Path) -> None:
    file_path = config_root / "server.properties"
    assert main(["delete", str(file_path), "motd"]) == EXIT_OK

    parsed = parse_config(file_path.read_text(encoding="utf-8"), "properties")
    assert "motd" not in parsed.values
    assert parsed.values["server-port"] == 25565


def test_format_override(config_root: Path, capsys) -> None:
    file_path = config_root / "notes.txt"
    file_path.write_text("key: value", encoding="utf-8")

    assert main(["--format", "yaml", "get", str(file_path), "key"]) == EXIT_OK
    assert "value" in capsys.readouterr().out


def test_missing_file(tmp_path: Path) -> None:
    assert main(["get", str(tmp_path / "absent.json"), "a"]) == EXIT_ERROR
