import json
import logging
import math
from typing import Any, Dict, List, Optional

from .base import BaseCodec, ParsedConfig
from .core.config_value import CommentMap, ConfigValue
from .core.key_path import format_key_path
from .errors import ParseFailure
from .parsing.patterns import JSON_PATTERNS

logger = logging.getLogger(__name__)

STRUCTURAL_PREFIXES = ('{', '}', '[', ']')
CLOSING_BRACKETS = ('}', ']')

def reject_json_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")

def parse_finite_number(raw: str) -> float:
    """Read a JSON number literal, rejecting values that overflow to infinity"""
    number = float(raw)
    if not math.isfinite(number):
        raise ValueError(f"Number out of range: {raw}")
    return number

def string_end(text: str, start: int) -> int:
    """Index of the quote closing the JSON string opened at ``start``"""
    i = start + 1
    while i < len(text):
        if text[i] == '\\':
            i += 2
            continue
        if text[i] == '"':
            return i
        i += 1
    return len(text) - 1

def strip_trailing_commas(text: str) -> str:
    """Drop commas directly before a closing bracket, leaving strings alone"""
    parts: List[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == '"':
            end = string_end(text, i)
            parts.append(text[i:end + 1])
            i = end + 1
            continue
        if char == ',':
            j = i + 1
            while j < len(text) and text[j].isspace():
                j += 1
            if j < len(text) and text[j] in CLOSING_BRACKETS:
                i += 1
                continue
        parts.append(char)
        i += 1
    return ''.join(parts)

class JsonCodec(BaseCodec):
    """JSON with non-standard ``//`` comment lines.

    Comments are harvested line by line before parsing. The cleaned text
    (comment lines and trailing commas removed) is parsed strictly; if that
    fails the untouched text is tried and the harvested comments are
    dropped. Only when both attempts fail is the document rejected.
    """

    FORMAT_TAG = "json"
    INDENT = 2

    def parse(self, content: str) -> ParsedConfig:
        lines = self.split_lines(content)
        line_comments = self.harvest_comments(lines)
        cleaned = self.clean(content)

        try:
            values = self._loads(cleaned)
        except ValueError as e:
            logger.debug(f"Cleaned JSON failed to parse ({e}), retrying original text")
            try:
                return ParsedConfig(self._loads(content), {})
            except ValueError as original_error:
                raise ParseFailure(f"Invalid JSON: {original_error}") from original_error

        comments: CommentMap = {}
        if line_comments:
            key_paths = KeyLineScanner(cleaned).scan()
            for line_index, comment in line_comments.items():
                path = key_paths.get(line_index)
                if path is not None:
                    comments[path] = comment
        return ParsedConfig(values, comments)

    @staticmethod
    def harvest_comments(lines: List[str]) -> Dict[int, str]:
        """Map the index of each key line to the comment block above it"""
        attached: Dict[int, str] = {}
        pending_comment = ""

        for index, line in enumerate(lines):
            comment_match = JSON_PATTERNS['comment_line'].match(line)
            if comment_match:
                pending_comment = BaseCodec.append_comment(pending_comment, comment_match.group(1).strip())
                continue

            key_match = JSON_PATTERNS['quoted_key'].search(line)
            if key_match and pending_comment:
                attached[index] = pending_comment
                pending_comment = ""
            elif not line.strip().startswith(STRUCTURAL_PREFIXES):
                pending_comment = ""
        return attached

    @staticmethod
    def clean(content: str) -> str:
        """Blank out comment lines and drop trailing commas, keeping line numbers"""
        without_comments = JSON_PATTERNS['strip_comment_lines'].sub('', content)
        return strip_trailing_commas(without_comments)

    @staticmethod
    def _loads(text: str) -> ConfigValue:
        return json.loads(
            text, parse_int=parse_finite_number, parse_float=parse_finite_number,
            parse_constant=reject_json_constant
        )

    def stringify(self, values: ConfigValue) -> str:
        return json.dumps(self._integral_floats_as_ints(values), indent=self.INDENT, ensure_ascii=False)

    @classmethod
    def _integral_floats_as_ints(cls, value: Any) -> Any:
        if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
            return int(value)
        if isinstance(value, dict):
            return {key: cls._integral_floats_as_ints(child) for key, child in value.items()}
        if isinstance(value, list):
            return [cls._integral_floats_as_ints(child) for child in value]
        return value


class KeyLineScanner:
    """Finds the key path of the first object key on each line of valid JSON"""

    def __init__(self, text: str) -> None:
        self.text = text

    def scan(self) -> Dict[int, str]:
        key_paths: Dict[int, str] = {}
        # each container frame: [segments-to-container, current key or index, is_array]
        stack: List[List[Any]] = []
        line = 0
        i = 0
        text = self.text
        last_string: Optional[str] = None
        last_string_line = 0

        while i < len(text):
            char = text[i]
            if char == '\n':
                line += 1
            elif char == '"':
                end = string_end(text, i)
                last_string = json.loads(text[i:end + 1])
                last_string_line = line
                i = end
            elif char == ':' and stack and not stack[-1][2] and last_string is not None:
                stack[-1][1] = last_string
                path = format_key_path(stack[-1][0] + [last_string])
                key_paths.setdefault(last_string_line, path)
                last_string = None
            elif char in '{[':
                parent = self._current_segments(stack)
                stack.append([parent, 0 if char == '[' else None, char == '['])
                last_string = None
            elif char in '}]':
                if stack:
                    stack.pop()
                last_string = None
            elif char == ',':
                if stack and stack[-1][2]:
                    stack[-1][1] += 1
                last_string = None
            i += 1
        return key_paths

    @staticmethod
    def _current_segments(stack: List[List[Any]]) -> List[Any]:
        if not stack:
            return []
        segments, current, _ = stack[-1]
        if current is None:
            return list(segments)
        return segments + [current]

