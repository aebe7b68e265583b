import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from .base import BaseCodec, ParsedConfig
from .core.config_value import CommentMap, ConfigValue, ValueType, format_number, value_type
from .core.key_path import join_index, join_key
from .errors import SerializationTypeMismatch
from .parsing.patterns import NUMBER_PREFIX_PATTERN, YAML_PATTERNS
from .parsing.value_parser import YAML_FALSE, YAML_NULL, YAML_TRUE, ValueParser

logger = logging.getLogger(__name__)

BLOCK_MARKERS = ('', '|', '>')
INDICATOR_CHARS = ('[', '{', '"', "'", '-', '|', '>', '~', '!', '&', '*', '@', '%', '`')

@dataclass
class Frame:
    """One open mapping on the indentation stack"""
    indent: int
    target: Dict[str, ConfigValue]
    key: str
    path: str
    is_item: bool = False


class YamlCodec(BaseCodec):
    """Indentation-based YAML subset.

    Each ``key:`` with an empty, ``|`` or ``>`` value opens a nested mapping.
    ``- value`` lines append to a list stored under the key of the innermost
    open mapping. ``- key: value`` items open a mapping inside that list.
    Block scalar bodies are not parsed.
    """

    FORMAT_TAG = "yaml"
    INDENT = "  "

    def parse(self, content: str) -> ParsedConfig:
        result: Dict[str, ConfigValue] = {}
        comments: CommentMap = {}
        pending_comment = ""
        stack = [Frame(indent=-1, target=result, key="", path="")]

        for line_number, line in enumerate(self.split_lines(content), 1):
            if not line.strip():
                pending_comment = ""
                continue

            comment_match = YAML_PATTERNS['comment_line'].match(line)
            if comment_match:
                pending_comment = self.append_comment(pending_comment, comment_match.group(2).strip())
                continue

            stripped = line.lstrip()
            indent = len(line) - len(stripped)
            stripped = stripped.rstrip()

            list_match = YAML_PATTERNS['list_item'].match(stripped)
            self._pop_frames(stack, indent, is_list_item=bool(list_match))

            if list_match:
                item_text = list_match.group(1) or ""
                item_indent = indent + len(stripped) - len(item_text)
                if self._add_list_item(stack, item_text, indent, item_indent, pending_comment, comments):
                    pending_comment = ""
                else:
                    logger.debug(f"Ignoring YAML list item without a parent key on line {line_number}")
                continue

            kv_match = YAML_PATTERNS['key_value'].match(stripped)
            if not kv_match:
                logger.debug(f"Ignoring YAML line {line_number}: {stripped}")
                continue

            self._add_key_value(
                stack, stack[-1], indent, kv_match.group(1).strip(), kv_match.group(2).strip(),
                pending_comment, comments
            )
            pending_comment = ""

        return ParsedConfig(result, comments)

    @staticmethod
    def _pop_frames(stack: List[Frame], indent: int, is_list_item: bool) -> None:
        """Close mappings the current line is no longer nested in.

        A list item may sit at the same indent as the key that owns the
        list, so only a sibling item frame is closed at equal indent.
        """
        while len(stack) > 1:
            top = stack[-1]
            if top.indent > indent or (top.indent == indent and (top.is_item or not is_list_item)):
                stack.pop()
            else:
                break

    def _add_key_value(self, stack: List[Frame], frame: Frame, indent: int, key: str, raw_value: str,
                       pending_comment: str, comments: CommentMap) -> None:
        """Store one ``key: value`` pair in ``frame``"""
        is_quoted = raw_value.startswith(('"', "'"))
        if not is_quoted:
            inline_match = YAML_PATTERNS['inline_comment'].match(raw_value)
            if inline_match:
                raw_value = inline_match.group(1).strip()
                pending_comment = inline_match.group(2).strip()

        path = join_key(frame.path, key)
        if pending_comment:
            comments[path] = pending_comment

        if raw_value in BLOCK_MARKERS:
            # Nested mapping, or a block scalar whose body is not parsed
            child: Dict[str, ConfigValue] = {}
            frame.target[key] = child
            stack.append(Frame(indent=indent, target=child, key=key, path=path))
        else:
            frame.target[key] = ValueParser.parse_yaml_value(raw_value)

    def _add_list_item(self, stack: List[Frame], item_text: str, dash_indent: int, item_indent: int,
                       pending_comment: str, comments: CommentMap) -> bool:
        """Append a list item to the list owned by the top frame's key"""
        owner = stack[-1]
        if not owner.key or owner.is_item or len(stack) < 2:
            return False

        container = stack[-2].target
        items = container.get(owner.key)
        if not isinstance(items, list):
            items = []
            container[owner.key] = items

        item_path = join_index(owner.path, len(items))
        if pending_comment:
            comments[item_path] = pending_comment

        kv_match = YAML_PATTERNS["item_key_value"].match(item_text)
        if kv_match and not item_text.startswith(('"', "'", '[', '{')):
            item: Dict[str, ConfigValue] = {}
            items.append(item)
            frame = Frame(indent=dash_indent, target=item, key="", path=item_path, is_item=True)
            stack.append(frame)
            self._add_key_value(stack, frame, item_indent, kv_match.group(1).strip(),
                                (kv_match.group(2) or "").strip(), "", comments)
            return True

        if not item_text.startswith(('"', "'")):
            inline_match = YAML_PATTERNS['inline_comment'].match(item_text)
            if inline_match:
                item_text = inline_match.group(1).strip()
                comments[item_path] = inline_match.group(2).strip()
        items.append(ValueParser.parse_yaml_value(item_text))
        return True

    def stringify(self, values: ConfigValue) -> str:
        if not isinstance(values, dict):
            raise SerializationTypeMismatch("YAML documents must be a mapping at the root")
        return ''.join(f"{line}\n" for line in self._mapping_lines(values, 0))

    def _mapping_lines(self, obj: Dict[str, Any], depth: int) -> List[str]:
        prefix = self.INDENT * depth
        lines: List[str] = []

        for key, value in obj.items():
            if isinstance(value, dict):
                lines.append(f"{prefix}{key}:")
                lines.extend(self._mapping_lines(value, depth + 1))
            elif isinstance(value, list):
                if not value:
                    lines.append(f"{prefix}{key}: []")
                    continue
                lines.append(f"{prefix}{key}:")
                lines.extend(self._sequence_lines(value, depth + 1))
            else:
                lines.append(f"{prefix}{key}: {self.stringify_scalar(value)}")
        return lines

    def _sequence_lines(self, items: List[Any], depth: int) -> List[str]:
        prefix = self.INDENT * depth
        lines: List[str] = []

        for item in items:
            if isinstance(item, dict) and item:
                # First line shares the dash, the rest keep their nesting
                nested = self._mapping_lines(item, 0)
                lines.append(f"{prefix}- {nested[0]}")
                lines.extend(f"{prefix}  {line}" for line in nested[1:])
            elif isinstance(item, dict):
                lines.append(f"{prefix}- {{}}")
            else:
                lines.append(f"{prefix}- {self.stringify_scalar(item)}")
        return lines

    @classmethod
    def stringify_scalar(cls, value: ConfigValue) -> str:
        kind = value_type(value)
        if kind is ValueType.NULL:
            return 'null'
        if kind is ValueType.BOOLEAN:
            return 'true' if value else 'false'
        if kind is ValueType.NUMBER:
            return format_number(value)
        if kind is ValueType.STRING:
            return cls.quote_if_ambiguous(value)
        if kind is ValueType.ARRAY:
            return f"[{', '.join(cls.stringify_scalar(item) for item in value)}]"
        if kind is ValueType.OBJECT and not value:
            return "{}"
        raise SerializationTypeMismatch(f"Cannot render {kind.value} inline in YAML")

    @staticmethod
    def quote_if_ambiguous(text: str) -> str:
        """Quote strings that would otherwise read back as another type"""
        needs_quotes = (
            text in YAML_NULL
            or text in YAML_TRUE
            or text in YAML_FALSE
            or ':' in text
            or '#' in text
            or ',' in text
            or text != text.strip()
            or text.startswith(INDICATOR_CHARS)
            or bool(NUMBER_PREFIX_PATTERN.match(text))
        )
        if not needs_quotes:
            return text
        if '"' in text and "'" not in text:
            return f"'{text}'"
        return f'"{text}"'
