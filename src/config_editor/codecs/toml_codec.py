import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from .base import BaseCodec, ParsedConfig
from .core.config_value import CommentMap, ConfigValue, ValueType, format_number, value_type
from .core.key_path import join_key
from .errors import SerializationTypeMismatch
from .parsing.patterns import TOML_PATTERNS
from .parsing.value_parser import ValueParser

logger = logging.getLogger(__name__)

class TomlCodec(BaseCodec):
    """Dotted-section TOML subset.

    Parsing keeps a single "current section" that ``[a.b.c]`` headers
    repoint; keys land in whatever section is current. Lines that are
    neither comments, headers nor ``key = value`` are ignored.

    A comment block above a section header documents the first key of the
    section when that key directly follows the header, and the section
    itself otherwise.
    """

    FORMAT_TAG = "toml"

    def parse(self, content: str) -> ParsedConfig:
        result: Dict[str, ConfigValue] = {}
        comments: CommentMap = {}
        current_section = result
        current_section_path = ""
        pending_comment = ""
        header_comment: Optional[Tuple[str, str]] = None

        for line_number, line in enumerate(self.split_lines(content), 1):
            trimmed = line.strip()
            section_match = None
            kv_match = None

            if trimmed and not trimmed.startswith('#'):
                section_match = TOML_PATTERNS['section'].match(trimmed)
                if not section_match:
                    kv_match = TOML_PATTERNS['key_value'].match(trimmed)

            carried_comment = None
            if header_comment and kv_match:
                carried_comment = header_comment
                pending_comment = header_comment[1]
            elif header_comment:
                comments[header_comment[0]] = header_comment[1]
            header_comment = None

            if trimmed.startswith('#'):
                pending_comment = self.append_comment(pending_comment, trimmed[1:].strip())
                continue

            if not trimmed:
                pending_comment = ""
                continue

            if section_match:
                current_section_path = section_match.group(1).strip()
                current_section = self._enter_section(result, current_section_path)
                if pending_comment:
                    header_comment = (current_section_path, pending_comment)
                    pending_comment = ""
                continue

            if not kv_match:
                logger.debug(f"Ignoring TOML line {line_number}: {trimmed}")
                continue

            key = kv_match.group(1).strip()
            raw_value = kv_match.group(2).strip()

            raw_value, inline_comment = ValueParser.split_inline_comment(raw_value)
            if inline_comment:
                # Inline comment takes precedence
                if carried_comment:
                    comments[carried_comment[0]] = carried_comment[1]
                pending_comment = inline_comment

            current_section[key] = ValueParser.parse_toml_value(raw_value)

            if pending_comment:
                comments[join_key(current_section_path, key)] = pending_comment
                pending_comment = ""

        if header_comment:
            comments[header_comment[0]] = header_comment[1]
        return ParsedConfig(result, comments)

    @staticmethod
    def _enter_section(root: Dict[str, ConfigValue], dotted_name: str) -> Dict[str, ConfigValue]:
        """Walk or create nested objects for each part of a section name"""
        section = root
        for part in dotted_name.split('.'):
            part = part.strip()
            child = section.get(part)
            if not isinstance(child, dict):
                child = {}
                section[part] = child
            section = child
        return section

    def stringify(self, values: ConfigValue) -> str:
        if not isinstance(values, dict):
            raise SerializationTypeMismatch("TOML documents must be an object at the root")
        return self._stringify_table(values, "")

    def _stringify_table(self, values: Dict[str, Any], prefix: str) -> str:
        lines: List[str] = []
        sections: List[Tuple[str, Dict[str, Any]]] = []

        for key, value in values.items():
            if isinstance(value, dict):
                sections.append((join_key(prefix, key), value))
            else:
                lines.append(f"{key} = {self._stringify_value(value)}\n")

        result = ''.join(lines)
        for section_key, section_value in sections:
            result += f"\n[{section_key}]\n"
            result += self._stringify_table(section_value, section_key)
        return result

    @classmethod
    def _stringify_value(cls, value: ConfigValue) -> str:
        kind = value_type(value)
        if kind is ValueType.BOOLEAN:
            return 'true' if value else 'false'
        if kind is ValueType.NUMBER:
            return format_number(value)
        if kind is ValueType.STRING:
            return cls._quote(value)
        if kind is ValueType.ARRAY:
            return f"[{', '.join(cls._stringify_value(item) for item in value)}]"
        if kind is ValueType.NULL:
            return '""'
        # no inline tables
        return json.dumps(value, ensure_ascii=False)

    @staticmethod
    def _quote(text: str) -> str:
        if '"' in text and "'" not in text:
            return f"'{text}'"
        return f'"{text}"'
