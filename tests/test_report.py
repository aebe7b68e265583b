from io import StringIO

from rich.console import Console

from config_editor import ConfigFileInfo
from config_editor.report import (
    build_value_tree, format_scalar, format_size, print_document, print_file_list, summarize_files
)


def render(renderable_printer) -> str:
    console = Console(file=StringIO(), width=120)
    renderable_printer(console)
    return console.file.getvalue()


def test_format_scalar() -> None:
    assert format_scalar(None) == "null"
    assert format_scalar(True) == "true"
    assert format_scalar(20.0) == "20"
    assert format_scalar("[text]") == "[text]"


def test_format_size() -> None:
    assert format_size(512) == "512 B"
    assert format_size(2048) == "2.0 KB"
    assert format_size(3 * 1024 * 1024) == "3.0 MB"


def test_value_tree_shows_comments_and_escapes_markup() -> None:
    values = {"server": {"port": 25565.0, "motd": "[bold]hi"}, "tags": ["a"]}
    tree = build_value_tree(values, {"server.port": "Listening port"}, title="server.toml")

    output = render(lambda console: console.print(tree))
    assert "server.toml" in output
    assert "port: 25565" in output
    assert "# Listening port" in output
    assert "[bold]hi" in output
    assert "[0]: a" in output


def test_file_summary() -> None:
    files = [
        ConfigFileInfo(name="a.json", path="a.json", size_bytes=10, file_type="json"),
        ConfigFileInfo(name="b.json", path="b.json", size_bytes=20, file_type="json"),
        ConfigFileInfo(name="c.yml", path="c.yml", size_bytes=30, file_type="yaml"),
    ]
    assert summarize_files(files) == {"json": 2, "yaml": 1}

    output = render(lambda console: print_file_list(files, console))
    assert "3 files: 2 json, 1 yaml" in output
    assert "c.yml" in output


def test_print_document() -> None:
    output = render(lambda console: print_document({"a": {"b": True}}, {}, console, title="doc"))
    assert "b: true" in output
    assert "(1 props)" in output
