"""Key path addressing for config value trees.

A key path joins object keys with ``.`` and appends ``[i]`` for array
indices, e.g. ``section.sub.list[2].name``. The root is the empty path.
Paths are computed while walking a tree and are never stored in it.

Keys are not escaped. A key that itself contains ``.`` or ``[n]`` (the TOML
line ``a.b = 1`` or the YAML key ``list[0]``) still shows up in ``walk``,
but its path splits into other segments when parsed, so it cannot be
addressed for reads or edits.
"""
import re
from typing import Iterator, List, Optional, Tuple, Union

from .config_value import ConfigValue

PathSegment = Union[str, int]

_INDEX_PATTERN = re.compile(r'\[(\d+)\]')

def join_key(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key

def join_index(parent: str, index: int) -> str:
    return f"{parent}[{index}]"

def parse_key_path(path: str) -> Optional[List[PathSegment]]:
    """Split a key path into object keys and array indices.

    Returns None when the bracket syntax is malformed.
    """
    if not path:
        return []

    segments: List[PathSegment] = []
    for part in path.split('.'):
        bracket = part.find('[')
        key = part if bracket == -1 else part[:bracket]
        if key:
            segments.append(key)
        elif bracket == -1:
            return None

        if bracket != -1:
            suffix = part[bracket:]
            indices = _INDEX_PATTERN.findall(suffix)
            if ''.join(f"[{i}]" for i in indices) != suffix:
                return None
            segments.extend(int(i) for i in indices)
    return segments

def format_key_path(segments: List[PathSegment]) -> str:
    path = ""
    for segment in segments:
        if isinstance(segment, int):
            path = join_index(path, segment)
        else:
            path = join_key(path, segment)
    return path

def walk(tree: ConfigValue, path: str = "") -> Iterator[Tuple[str, ConfigValue]]:
    """Yield (path, value) pairs depth-first in document order"""
    yield path, tree
    if isinstance(tree, dict):
        for key, child in tree.items():
            yield from walk(child, join_key(path, key))
    elif isinstance(tree, list):
        for index, child in enumerate(tree):
            yield from walk(child, join_index(path, index))
