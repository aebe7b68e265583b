from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .core.config_value import CommentMap, ConfigValue


@dataclass(frozen=True)
class ParsedConfig:
    """Value tree plus the comments captured while parsing it"""
    values: ConfigValue
    comments: CommentMap = field(default_factory=dict)


class BaseCodec(ABC):
    """Base class for a parser/serializer pair of one on-disk format"""

    FORMAT_TAG = ""

    @abstractmethod
    def parse(self, content: str) -> ParsedConfig:
        """Parse raw text into a value tree and comment map"""
        pass

    @abstractmethod
    def stringify(self, values: ConfigValue) -> str:
        """Serialize a value tree back into text of this format"""
        pass

    @staticmethod
    def split_lines(content: str) -> list[str]:
        """Split text into lines, normalizing line endings"""
        return content.replace('\r\n', '\n').replace('\r', '\n').split('\n')

    @staticmethod
    def append_comment(pending: str, text: str) -> str:
        """Join consecutive comment lines with single spaces"""
        return f"{pending} {text}" if pending else text
