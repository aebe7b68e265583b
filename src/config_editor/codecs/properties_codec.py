import logging
from typing import Dict, Optional

from .base import BaseCodec, ParsedConfig
from .core.config_value import CommentMap, ConfigValue, ValueType, format_number, value_type
from .errors import SerializationTypeMismatch
from .parsing.patterns import PROPERTIES_COMMENT_MARKERS
from .parsing.value_parser import ValueParser

logger = logging.getLogger(__name__)

class PropertiesCodec(BaseCodec):
    """Line-oriented ``key=value`` / ``key:value`` files.

    Comments are recognized so that they never become entries, but they are
    only reported when ``capture_comments`` is set. They are never written
    back.
    """

    FORMAT_TAG = "properties"

    def __init__(self, capture_comments: bool = False) -> None:
        self.capture_comments = capture_comments

    def parse(self, content: str) -> ParsedConfig:
        result: Dict[str, ConfigValue] = {}
        comments: CommentMap = {}
        pending_comment = ""

        for line_number, line in enumerate(self.split_lines(content), 1):
            trimmed = line.strip()

            if trimmed.startswith(PROPERTIES_COMMENT_MARKERS):
                pending_comment = self.append_comment(pending_comment, trimmed[1:].strip())
                continue

            if not trimmed:
                pending_comment = ""
                continue

            separator = self._find_separator(trimmed)
            if separator is None:
                logger.debug(f"Skipping properties line {line_number} without separator: {trimmed}")
                continue

            key = trimmed[:separator].strip()
            result[key] = ValueParser.parse_property_value(trimmed[separator + 1:].strip())

            if pending_comment:
                if self.capture_comments:
                    comments[key] = pending_comment
                pending_comment = ""

        return ParsedConfig(result, comments)

    @staticmethod
    def _find_separator(line: str) -> Optional[int]:
        """Index of the earlier of the first '=' and the first ':'"""
        candidates = [index for index in (line.find('='), line.find(':')) if index != -1]
        return min(candidates) if candidates else None

    def stringify(self, values: ConfigValue) -> str:
        if not isinstance(values, dict):
            raise SerializationTypeMismatch("Properties documents must be a flat object")
        return '\n'.join(f"{key}={self._stringify_value(key, value)}" for key, value in values.items())

    @staticmethod
    def _stringify_value(key: str, value: ConfigValue) -> str:
        kind = value_type(value)
        if kind is ValueType.BOOLEAN:
            return 'true' if value else 'false'
        if kind is ValueType.NUMBER:
            return format_number(value)
        if kind is ValueType.NULL:
            return ""
        if kind is ValueType.STRING:
            return value
        raise SerializationTypeMismatch(f"Properties value for '{key}' cannot be {kind.value}")
