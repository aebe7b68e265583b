"""Config folder access tests"""
from pathlib import Path
from unittest.mock import Mock

import pytest

from config_editor import ConfigEditorAPI, ConfigPathError, EditorConfig
from tests.conftest import SAMPLE_PROPERTIES


@pytest.fixture
def api(config_root: Path) -> ConfigEditorAPI:
    return ConfigEditorAPI(config_root)


def test_list_config_files(api: ConfigEditorAPI) -> None:
    files = api.list_config_files()

    assert [info.path for info in files] == [
        "mods/modpack.json",
        "mods/sodium.toml",
        "notes.txt",
        "plugins/MyPlugin/config.yml",
        "server.properties",
    ]
    assert {info.path: info.file_type for info in files}["notes.txt"] == "text"
    assert all(info.size_bytes > 0 for info in files)


def test_list_missing_root(tmp_path: Path) -> None:
    assert ConfigEditorAPI(tmp_path / "missing").list_config_files() == []


def test_read_config_file(api: ConfigEditorAPI) -> None:
    assert api.read_config_file("server.properties") == SAMPLE_PROPERTIES


@pytest.mark.parametrize("relative_path", ["../outside.txt", "mods/../../outside.txt", "missing.json", "mods"])
def test_read_rejects_bad_paths(config_root: Path, relative_path: str) -> None:
    (config_root.parent / "outside.txt").write_text("secret")
    error_handler = Mock()
    api = ConfigEditorAPI(config_root, EditorConfig(error_handler=error_handler))

    with pytest.raises(ConfigPathError):
        api.read_config_file(relative_path)

    error_handler.assert_called_once()
    assert isinstance(error_handler.call_args[0][0], ConfigPathError)


def test_read_rejects_oversized_files(config_root: Path) -> None:
    error_handler = Mock()
    api = ConfigEditorAPI(config_root, EditorConfig(max_file_size=10, error_handler=error_handler))

    with pytest.raises(ConfigPathError, match="too large"):
        api.read_config_file("server.properties")
    assert error_handler.called


def test_failing_error_handler_does_not_hide_error(config_root: Path) -> None:
    api = ConfigEditorAPI(config_root, EditorConfig(error_handler=Mock(side_effect=RuntimeError("boom"))))

    with pytest.raises(ConfigPathError):
        api.read_config_file("missing.json")


def test_save_config_file_replaces_content(api: ConfigEditorAPI, config_root: Path) -> None:
    api.save_config_file("mods/new.json", '{"a": 1}')
    api.save_config_file("server.properties", "a=1")

    assert (config_root / "mods" / "new.json").read_text(encoding="utf-8") == '{"a": 1}'
    assert (config_root / "server.properties").read_text(encoding="utf-8") == "a=1"
    assert not list(config_root.rglob("*.tmp"))


def test_save_rejects_missing_folder(api: ConfigEditorAPI) -> None:
    with pytest.raises(ConfigPathError):
        api.save_config_file("nowhere/config.json", "{}")


def test_open_document(api: ConfigEditorAPI) -> None:
    document = api.open_document("mods/sodium.toml")

    assert document is not None
    assert document.format_tag == "toml"
    assert document.get("server.port") == 25565
    assert document.comment_for("title") == "Global title"


def test_open_document_falls_back_to_text(api: ConfigEditorAPI, config_root: Path) -> None:
    (config_root / "broken.json").write_text("{broken", encoding="utf-8")

    assert api.open_document("notes.txt") is None
    assert api.open_document("broken.json") is None


def test_open_document_with_format_override(api: ConfigEditorAPI, config_root: Path) -> None:
    (config_root / "data.txt").write_text("a=1", encoding="utf-8")

    document = api.open_document("data.txt", "properties")
    assert document.values == {"a": 1}


def test_property_comments_follow_config(config_root: Path) -> None:
    plain = ConfigEditorAPI(config_root).open_document("server.properties")
    assert plain.comments == {}

    api = ConfigEditorAPI(config_root, EditorConfig(capture_property_comments=True))
    document = api.open_document("server.properties")
    assert document.comments == {"server-port": "Minecraft server properties"}


def test_save_document(api: ConfigEditorAPI, config_root: Path) -> None:
    document = api.open_document("plugins/MyPlugin/config.yml")
    updated = document.set("database.port", 3307.0).array_insert("worlds", 2, "world_the_end")

    content = api.save_document("plugins/MyPlugin/config.yml", updated)

    assert (config_root / "plugins" / "MyPlugin" / "config.yml").read_text(encoding="utf-8") == content
    reopened = api.open_document("plugins/MyPlugin/config.yml")
    assert reopened.values == updated.values
    assert reopened.get("worlds") == ["world", "world_nether", "world_the_end"]
