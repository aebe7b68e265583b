from .value_parser import ValueParser
from .patterns import JSON_PATTERNS, NUMBER_PATTERN, TOML_PATTERNS, VALUE_PATTERNS, YAML_PATTERNS

__all__ = ['ValueParser', 'JSON_PATTERNS', 'NUMBER_PATTERN', 'TOML_PATTERNS', 'VALUE_PATTERNS', 'YAML_PATTERNS']
