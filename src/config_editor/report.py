from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from .codecs.core import CommentMap, ConfigValue, ValueType, format_number, join_index, join_key, value_type
from .models import ConfigFileInfo

TYPE_STYLES = {
    ValueType.BOOLEAN: "magenta",
    ValueType.NUMBER: "green",
    ValueType.STRING: "yellow",
    ValueType.NULL: "dim",
}

def format_scalar(value: ConfigValue) -> str:
    kind = value_type(value)
    if kind is ValueType.NULL:
        return "null"
    if kind is ValueType.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueType.NUMBER:
        return format_number(value)
    return str(value)

def _label(key: str, value: ConfigValue, comment: Optional[str]) -> str:
    kind = value_type(value)
    if kind is ValueType.OBJECT:
        label = f"[cyan]{escape(key)}[/] [dim]({len(value)} props)[/]"
    elif kind is ValueType.ARRAY:
        label = f"[cyan]{escape(key)}[/] [dim]({len(value)} items)[/]"
    else:
        style = TYPE_STYLES[kind]
        label = f"[cyan]{escape(key)}[/]: [{style}]{escape(format_scalar(value))}[/]"
    if comment:
        label += f"  [dim italic]# {escape(comment)}[/]"
    return label

def build_value_tree(values: ConfigValue, comments: CommentMap, title: str = "config") -> Tree:
    """Rich tree of a config document with comments beside their keys"""
    root = Tree(f"[bold]{escape(title)}")

    def add_children(node: Tree, value: ConfigValue, path: str) -> None:
        if isinstance(value, dict):
            children = [(key, child, join_key(path, key)) for key, child in value.items()]
        elif isinstance(value, list):
            children = [(f"[{index}]", child, join_index(path, index)) for index, child in enumerate(value)]
        else:
            return
        for key, child, child_path in children:
            branch = node.add(_label(key, child, comments.get(child_path)))
            add_children(branch, child, child_path)

    add_children(root, values, "")
    return root

def build_file_table(files: List[ConfigFileInfo], title: str = "Config Files") -> Table:
    table = Table(title=title)
    table.add_column("Path", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Size", justify="right", style="green")
    table.add_column("Modified", style="dim")

    for info in files:
        table.add_row(info.path, info.file_type, format_size(info.size_bytes), info.modified or "")
    return table

def summarize_files(files: List[ConfigFileInfo]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for info in files:
        counts[info.file_type] = counts.get(info.file_type, 0) + 1
    return counts

def format_size(size_bytes: int) -> str:
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"

def print_document(values: ConfigValue, comments: CommentMap, console: Console, title: str = "config") -> None:
    console.print(build_value_tree(values, comments, title))

def print_file_list(files: List[ConfigFileInfo], console: Console) -> None:
    console.print(build_file_table(files))
    summary = ", ".join(f"{count} {file_type}" for file_type, count in sorted(summarize_files(files).items()))
    console.print(f"[dim]{len(files)} files{': ' + summary if summary else ''}[/]")
