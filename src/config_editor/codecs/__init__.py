"""Parsers and serializers for the supported config file formats."""
import logging
from typing import Dict, Optional, Type

from .base import BaseCodec, ParsedConfig
from .core import CommentMap, ConfigValue, ValueType
from .errors import (
    ConfigEditorError, ConfigPathError, FormatUnsupportedError, ParseFailure, ParsingError,
    SerializationTypeMismatch
)
from .json_codec import JsonCodec
from .properties_codec import PropertiesCodec
from .toml_codec import TomlCodec
from .yaml_codec import YamlCodec

logger = logging.getLogger(__name__)

CODECS: Dict[str, Type[BaseCodec]] = {
    codec.FORMAT_TAG: codec for codec in (JsonCodec, TomlCodec, YamlCodec, PropertiesCodec)
}

SUPPORTED_FORMATS = frozenset(CODECS)

def get_codec(format_tag: str, capture_property_comments: bool = False) -> BaseCodec:
    """Create the codec registered for a format tag"""
    codec_class = CODECS.get(format_tag)
    if codec_class is None:
        raise FormatUnsupportedError(format_tag)
    if codec_class is PropertiesCodec:
        return PropertiesCodec(capture_comments=capture_property_comments)
    return codec_class()

def parse_config(content: str, format_tag: str,
                 capture_property_comments: bool = False) -> Optional[ParsedConfig]:
    """Parse config text, or return None when it cannot be edited structurally"""
    try:
        codec = get_codec(format_tag, capture_property_comments)
        return codec.parse(content)
    except FormatUnsupportedError as e:
        logger.debug(f"No structured editing for format: {e}")
        return None
    except ParsingError as e:
        logger.warning(f"Failed to parse {format_tag} content: {e}")
        return None

def stringify_config(values: ConfigValue, format_tag: str) -> str:
    """Serialize a value tree into text of the given format"""
    return get_codec(format_tag).stringify(values)

__all__ = [
    'BaseCodec', 'ParsedConfig', 'CommentMap', 'ConfigValue', 'ValueType',
    'ConfigEditorError', 'ConfigPathError', 'FormatUnsupportedError', 'ParseFailure', 'ParsingError',
    'SerializationTypeMismatch',
    'JsonCodec', 'PropertiesCodec', 'TomlCodec', 'YamlCodec',
    'CODECS', 'SUPPORTED_FORMATS', 'get_codec', 'parse_config', 'stringify_config'
]
