import math
from typing import Callable, List, Optional, Tuple

from ..core.config_value import ConfigValue
from .patterns import NUMBER_PATTERN, VALUE_PATTERNS

YAML_TRUE = frozenset({'true', 'yes', 'on'})
YAML_FALSE = frozenset({'false', 'no', 'off'})
YAML_NULL = frozenset({'null', '~', ''})

class ValueParser:
    """Scalar and inline-array parsing shared by the line-oriented codecs"""

    @staticmethod
    def parse_number(raw_value: str) -> Optional[float]:
        """Parse a strict decimal number, None if it is not one or not finite"""
        if not NUMBER_PATTERN.match(raw_value):
            return None
        number = float(raw_value)
        if not math.isfinite(number):
            return None
        return number

    @staticmethod
    def unquote(raw_value: str) -> Optional[str]:
        """Strip matching outer quotes, None if the value is not quoted"""
        if len(raw_value) < 2:
            return None
        for pattern in (VALUE_PATTERNS['double_quoted'], VALUE_PATTERNS['single_quoted']):
            match = pattern.match(raw_value)
            if match:
                return match.group(1)
        return None

    @staticmethod
    def split_inline_comment(raw_value: str) -> Tuple[str, Optional[str]]:
        """Split off a trailing ``# comment`` found outside quotes.

        A quote only opens a string at the start of the value or of an
        array element, so apostrophes inside bare text are plain characters.
        """
        quote: Optional[str] = None
        at_item_start = True
        for index, char in enumerate(raw_value):
            if quote:
                if char == quote:
                    quote = None
                continue
            if char == "#":
                return raw_value[:index].strip(), raw_value[index + 1:].strip()
            if char in "\"'" and at_item_start:
                quote = char
            if not char.isspace():
                at_item_start = char in "[,"
        return raw_value, None

    @staticmethod
    def parse_property_value(raw_value: str) -> ConfigValue:
        if raw_value == 'true':
            return True
        if raw_value == 'false':
            return False
        number = ValueParser.parse_number(raw_value)
        if number is not None:
            return number
        return raw_value

    @staticmethod
    def parse_toml_value(raw_value: str) -> ConfigValue:
        raw_value = raw_value.strip()
        if raw_value == 'true':
            return True
        if raw_value == 'false':
            return False

        text = ValueParser.unquote(raw_value)
        if text is not None:
            return text

        if VALUE_PATTERNS['inline_array'].match(raw_value):
            return ValueParser.parse_inline_array(raw_value, ValueParser.parse_toml_value)

        number = ValueParser.parse_number(raw_value)
        if number is not None:
            return number
        return raw_value

    @staticmethod
    def parse_yaml_value(raw_value: str) -> ConfigValue:
        raw_value = raw_value.strip()
        if raw_value in YAML_NULL:
            return None
        if raw_value in YAML_TRUE:
            return True
        if raw_value in YAML_FALSE:
            return False

        text = ValueParser.unquote(raw_value)
        if text is not None:
            return text

        if VALUE_PATTERNS['inline_array'].match(raw_value):
            return ValueParser.parse_inline_array(raw_value, ValueParser.parse_yaml_value)
        if raw_value == '{}':
            return {}

        number = ValueParser.parse_number(raw_value)
        if number is not None:
            return number
        return raw_value

    @staticmethod
    def parse_inline_array(raw_str: str, parse_item: Callable[[str], ConfigValue]) -> List[ConfigValue]:
        """Parse ``[a, b, c]`` by splitting on top-level commas"""
        content = raw_str.strip()[1:-1].strip()
        if not content:
            return []
        return [parse_item(item) for item in ValueParser.split_top_level(content)]

    @staticmethod
    def split_top_level(content: str) -> List[str]:
        """Split on commas outside quotes and nested brackets"""
        items = []
        current: List[str] = []
        depth = 0
        quote: Optional[str] = None

        for char in content:
            if quote:
                current.append(char)
                if char == quote:
                    quote = None
            elif char in '"\'':
                quote = char
                current.append(char)
            elif char in '[{':
                depth += 1
                current.append(char)
            elif char in ']}':
                depth -= 1
                current.append(char)
            elif char == ',' and depth == 0:
                items.append(''.join(current).strip())
                current = []
            else:
                current.append(char)

        # Add final item
        item = ''.join(current).strip()
        if item:
            items.append(item)
        return items
