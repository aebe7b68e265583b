import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler

from .api import ConfigEditorAPI
from .codecs import SUPPORTED_FORMATS
from .codecs.core import ConfigValue, is_scalar
from .codecs.errors import ConfigEditorError
from .codecs.json_codec import JsonCodec, parse_finite_number, reject_json_constant
from .config import EditorConfig
from .document import ConfigDocument
from .report import format_scalar, print_document, print_file_list

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNSTRUCTURED = 2

logger = logging.getLogger("config_editor")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="config-editor",
        description="Inspect and edit JSON, TOML, YAML and .properties config files"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "--format",
        choices=sorted(SUPPORTED_FORMATS),
        help="Override the format detected from the file extension"
    )
    parser.add_argument(
        "--property-comments",
        action="store_true",
        help="Report comments found in .properties files"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List config files below a folder")
    list_cmd.add_argument("root", type=Path, help="Config folder to search")

    show_cmd = commands.add_parser("show", help="Show the value tree of a config file")
    show_cmd.add_argument("file", type=Path)
    show_cmd.add_argument("--filter", default="", help="Only show keys containing this text")

    get_cmd = commands.add_parser("get", help="Print the value at a key path")
    get_cmd.add_argument("file", type=Path)
    get_cmd.add_argument("path", help="Key path, e.g. section.list[0].name")

    set_cmd = commands.add_parser("set", help="Set the value at a key path and save")
    set_cmd.add_argument("file", type=Path)
    set_cmd.add_argument("path")
    set_cmd.add_argument("value", help="JSON literal (20, true, \"text\", [1, 2]) or plain text")

    delete_cmd = commands.add_parser("delete", help="Delete the value at a key path and save")
    delete_cmd.add_argument("file", type=Path)
    delete_cmd.add_argument("path")
    return parser

def setup_logging(verbose: bool, console: Console) -> None:
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for existing in list(logger.handlers):
        if isinstance(existing, RichHandler):
            logger.removeHandler(existing)
    handler = RichHandler(console=console, show_path=False)
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)

def parse_cli_value(raw: str) -> ConfigValue:
    """Read a command line value as a JSON literal, falling back to text"""
    try:
        return json.loads(
            raw, parse_int=parse_finite_number, parse_float=parse_finite_number,
            parse_constant=reject_json_constant
        )
    except ValueError:
        return raw

def _split_file(file: Path) -> Tuple[Path, str]:
    file = file.resolve()
    return file.parent, file.name

def _open(args: argparse.Namespace, config: EditorConfig) -> Tuple[ConfigEditorAPI, str, Optional[ConfigDocument]]:
    root, name = _split_file(args.file)
    api = ConfigEditorAPI(root, config)
    return api, name, api.open_document(name, args.format)

def run(args: argparse.Namespace, console: Console) -> int:
    config = EditorConfig(capture_property_comments=args.property_comments)

    if args.command == "list":
        files = ConfigEditorAPI(args.root, config).list_config_files()
        print_file_list(files, console)
        return EXIT_OK

    api, name, document = _open(args, config)
    if document is None:
        console.print(f"{name} cannot be edited structurally; edit it as plain text", style="yellow", markup=False)
        return EXIT_UNSTRUCTURED

    if args.command == "show":
        print_document(document.filtered(args.filter), document.comments, console, title=name)
        return EXIT_OK

    if args.command == "get":
        if not document.has(args.path):
            logger.error(f"No value at {args.path}")
            return EXIT_ERROR
        value = document.get(args.path)
        if is_scalar(value):
            console.print(format_scalar(value), markup=False)
        else:
            console.print_json(JsonCodec().stringify(value))
        comment = document.comment_for(args.path)
        if comment:
            console.print(f"# {comment}", style="dim", markup=False)
        return EXIT_OK

    if args.command == "set":
        updated = document.set(args.path, parse_cli_value(args.value))
    else:
        updated = document.delete(args.path)

    if updated is document:
        logger.error(f"Key path does not resolve: {args.path}")
        return EXIT_ERROR
    api.save_document(name, updated)
    return EXIT_OK

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    console = Console()
    setup_logging(args.verbose, console)

    try:
        return run(args, console)
    except ConfigEditorError as e:
        logger.error(str(e))
        return EXIT_ERROR
    except OSError as e:
        logger.error(f"File error: {e}")
        return EXIT_ERROR
    except KeyboardInterrupt:
        console.print("\nInterrupted by user")
        return EXIT_ERROR

if __name__ == "__main__":
    sys.exit(main())
