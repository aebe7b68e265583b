from dataclasses import dataclass, field, replace
from typing import Iterator, Optional, Tuple

from .codecs import ParsedConfig, parse_config, stringify_config
from .codecs.core import CommentMap, ConfigValue, walk
from .editor import tree_editor
from .editor.tree_editor import MISSING


@dataclass(frozen=True)
class ConfigDocument:
    """One structured editing session over a config file.

    Edits return new documents. The comment map is carried along unchanged,
    so comments of renamed or deleted keys stay behind as orphans.
    """
    format_tag: str
    values: ConfigValue
    comments: CommentMap = field(default_factory=dict)

    @classmethod
    def parse(cls, content: str, format_tag: str,
              capture_property_comments: bool = False) -> Optional['ConfigDocument']:
        """Parse text into a document, None when only raw editing is possible"""
        parsed = parse_config(content, format_tag, capture_property_comments)
        if parsed is None:
            return None
        return cls.from_parsed(parsed, format_tag)

    @classmethod
    def from_parsed(cls, parsed: ParsedConfig, format_tag: str) -> 'ConfigDocument':
        return cls(format_tag=format_tag, values=parsed.values, comments=dict(parsed.comments))

    def comment_for(self, path: str) -> Optional[str]:
        return self.comments.get(path)

    def get(self, path: str, default: ConfigValue = None) -> ConfigValue:
        return tree_editor.get_value(self.values, path, default)

    def has(self, path: str) -> bool:
        return tree_editor.has_path(self.values, path)

    def set(self, path: str, value: ConfigValue) -> 'ConfigDocument':
        return self._with_values(tree_editor.set_value(self.values, path, value))

    def delete(self, path: str) -> 'ConfigDocument':
        return self._with_values(tree_editor.delete_value(self.values, path))

    def array_insert(self, path: str, index: int, value: ConfigValue = MISSING) -> 'ConfigDocument':
        return self._with_values(tree_editor.array_insert(self.values, path, index, value))

    def array_remove(self, path: str, index: int) -> 'ConfigDocument':
        return self._with_values(tree_editor.array_remove(self.values, path, index))

    def entries(self) -> Iterator[Tuple[str, ConfigValue]]:
        """Every (path, value) pair below the root"""
        for path, value in walk(self.values):
            if path:
                yield path, value

    def filtered(self, query: str) -> ConfigValue:
        if not isinstance(self.values, dict):
            return self.values
        return tree_editor.filter_entries(self.values, query)

    def to_text(self) -> str:
        return stringify_config(self.values, self.format_tag)

    def _with_values(self, values: ConfigValue) -> 'ConfigDocument':
        if values is self.values:
            return self
        return replace(self, values=values)
