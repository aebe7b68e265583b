"""Path-addressed edits over config value trees.

Every operation returns a new tree and leaves its input untouched. Only the
containers along the edited path are copied; every other subtree is shared
with the input. An invalid path is not an error: the input tree is returned
as-is.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from ..codecs.core.config_value import ConfigValue, get_default_value
from ..codecs.core.key_path import PathSegment, parse_key_path

logger = logging.getLogger(__name__)

MISSING: Any = object()

def _child(container: ConfigValue, segment: PathSegment) -> Any:
    """Child of a container for one path segment, or MISSING"""
    if isinstance(segment, int):
        if isinstance(container, list) and 0 <= segment < len(container):
            return container[segment]
    elif isinstance(container, dict) and segment in container:
        return container[segment]
    return MISSING

def _resolve(tree: ConfigValue, path: str) -> Any:
    segments = parse_key_path(path)
    if segments is None:
        return MISSING
    node: Any = tree
    for segment in segments:
        node = _child(node, segment)
        if node is MISSING:
            break
    return node

def get_value(tree: ConfigValue, path: str, default: ConfigValue = None) -> ConfigValue:
    """Value at ``path``, or ``default`` when the path does not resolve"""
    node = _resolve(tree, path)
    return default if node is MISSING else node

def has_path(tree: ConfigValue, path: str) -> bool:
    return _resolve(tree, path) is not MISSING

def _rebuild(node: ConfigValue, segments: List[PathSegment],
             update: Callable[[Any, PathSegment], Any]) -> Any:
    """Copy the ancestor chain and apply ``update`` to the last container.

    ``update`` receives a shallow copy of the parent container and the last
    segment; it returns the new container or MISSING to abandon the edit.
    """
    segment = segments[0]
    if len(segments) == 1:
        if isinstance(segment, int) and isinstance(node, list):
            return update(list(node), segment)
        if isinstance(segment, str) and isinstance(node, dict):
            return update(dict(node), segment)
        return MISSING

    child = _child(node, segment)
    if child is MISSING:
        return MISSING
    new_child = _rebuild(child, segments[1:], update)
    if new_child is MISSING:
        return MISSING

    copy: Any = list(node) if isinstance(node, list) else dict(node)
    copy[segment] = new_child
    return copy

def _edit(tree: ConfigValue, path: str, update: Callable[[Any, PathSegment], Any],
          operation: str) -> ConfigValue:
    segments = parse_key_path(path)
    if not segments:
        logger.debug(f"{operation}: no addressable target at path '{path}'")
        return tree
    result = _rebuild(tree, segments, update)
    if result is MISSING:
        logger.debug(f"{operation}: path '{path}' does not resolve, tree unchanged")
        return tree
    return result

def set_value(tree: ConfigValue, path: str, value: ConfigValue) -> ConfigValue:
    """Set the value at ``path``; new keys may be added to existing objects"""
    if path == "":
        return value

    def update(container: Any, segment: PathSegment) -> Any:
        if isinstance(segment, int) and segment >= len(container):
            return MISSING
        container[segment] = value
        return container

    return _edit(tree, path, update, "set")

def delete_value(tree: ConfigValue, path: str) -> ConfigValue:
    """Remove the key or array element at ``path``.

    Comments recorded for the removed path are left in the comment map.
    """
    def update(container: Any, segment: PathSegment) -> Any:
        if isinstance(segment, int):
            if segment >= len(container):
                return MISSING
            del container[segment]
            return container
        if segment not in container:
            return MISSING
        del container[segment]
        return container

    return _edit(tree, path, update, "delete")

def _replace_array(tree: ConfigValue, path: str, edit: Callable[[List[ConfigValue]], Optional[List[ConfigValue]]],
                   operation: str) -> ConfigValue:
    current = get_value(tree, path, default=MISSING)
    if not isinstance(current, list):
        logger.debug(f"{operation}: no array at path '{path}', tree unchanged")
        return tree
    new_array = edit(list(current))
    if new_array is None:
        return tree
    return set_value(tree, path, new_array)

def array_insert(tree: ConfigValue, path: str, index: int, value: ConfigValue = MISSING) -> ConfigValue:
    """Insert into the array at ``path``.

    Without an explicit value the new element is an empty placeholder shaped
    like the array's first element.
    """
    def edit(items: List[ConfigValue]) -> Optional[List[ConfigValue]]:
        if not 0 <= index <= len(items):
            return None
        new_item = value
        if new_item is MISSING:
            new_item = get_default_value(items[0]) if items else ""
        items.insert(index, new_item)
        return items

    return _replace_array(tree, path, edit, "array insert")

def array_append(tree: ConfigValue, path: str, value: ConfigValue = MISSING) -> ConfigValue:
    items = get_value(tree, path)
    if not isinstance(items, list):
        return tree
    return array_insert(tree, path, len(items), value)

def array_remove(tree: ConfigValue, path: str, index: int) -> ConfigValue:
    def edit(items: List[ConfigValue]) -> Optional[List[ConfigValue]]:
        if not 0 <= index < len(items):
            return None
        del items[index]
        return items

    return _replace_array(tree, path, edit, "array remove")

def filter_entries(tree: Dict[str, ConfigValue], query: str) -> Dict[str, ConfigValue]:
    """Keep keys containing ``query`` (case-insensitive).

    A matching key keeps its whole subtree. Non-matching objects are kept
    only for the matches found inside them.
    """
    if not query:
        return tree

    needle = query.lower()
    result: Dict[str, ConfigValue] = {}
    for key, value in tree.items():
        if needle in key.lower():
            result[key] = value
        elif isinstance(value, dict):
            filtered = filter_entries(value, query)
            if filtered:
                result[key] = filtered
    return result
