import math
from enum import Enum
from typing import Any, Dict, List, Union

ConfigValue = Union[None, bool, float, str, List[Any], Dict[str, Any]]
CommentMap = Dict[str, str]

class ValueType(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

def value_type(value: Any) -> ValueType:
    """Classify a tree value into its ConfigValue variant"""
    if value is None:
        return ValueType.NULL
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueType.NUMBER
    if isinstance(value, str):
        return ValueType.STRING
    if isinstance(value, list):
        return ValueType.ARRAY
    if isinstance(value, dict):
        return ValueType.OBJECT
    raise TypeError(f"Not a config value: {type(value).__name__}")

def is_scalar(value: Any) -> bool:
    return not isinstance(value, (list, dict))

def get_default_value(example: ConfigValue) -> ConfigValue:
    """Return an empty placeholder shaped like ``example``"""
    kind = value_type(example)
    if kind is ValueType.BOOLEAN:
        return False
    if kind is ValueType.NUMBER:
        return 0.0
    if kind is ValueType.ARRAY:
        return []
    if kind is ValueType.OBJECT:
        return {}
    return ""

def format_number(number: Union[int, float]) -> str:
    """Render a number the way a config file would spell it"""
    if isinstance(number, int):
        return str(number)
    if math.isfinite(number) and number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)
