from .config_value import (
    CommentMap, ConfigValue, ValueType, format_number, get_default_value, is_scalar, value_type
)
from .key_path import format_key_path, join_index, join_key, parse_key_path, walk

__all__ = [
    'CommentMap', 'ConfigValue', 'ValueType', 'format_number', 'get_default_value',
    'is_scalar', 'value_type',
    'format_key_path', 'join_index', 'join_key', 'parse_key_path', 'walk'
]
