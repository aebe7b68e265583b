"""Structured editing of JSON, TOML, YAML and .properties config files."""

from .api import ConfigEditorAPI
from .codecs import ParsedConfig, parse_config, stringify_config
from .codecs.core import ValueType, get_default_value
from .codecs.errors import (
    ConfigEditorError, ConfigPathError, FormatUnsupportedError, ParseFailure, SerializationTypeMismatch
)
from .config import EditorConfig
from .document import ConfigDocument
from .formats import detect_format
from .models import ConfigFileInfo

__all__ = [
    'ConfigEditorAPI',
    'ConfigDocument',
    'ConfigFileInfo',
    'EditorConfig',
    'ParsedConfig',
    'ValueType',
    'parse_config',
    'stringify_config',
    'get_default_value',
    'detect_format',
    'ConfigEditorError',
    'ConfigPathError',
    'FormatUnsupportedError',
    'ParseFailure',
    'SerializationTypeMismatch'
]
