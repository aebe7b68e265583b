class ConfigEditorError(Exception):
    """Base error for config editing failures"""
    pass

class FormatUnsupportedError(ConfigEditorError):
    """Error for format tags no codec handles"""

    def __init__(self, format_tag: str) -> None:
        super().__init__(f"Unsupported config format: {format_tag!r}")
        self.format_tag = format_tag

class ParsingError(ConfigEditorError):
    """Base error for parsing failures"""
    pass

class ParseFailure(ParsingError):
    """Error when a document cannot be parsed for structured editing"""
    pass

class SerializationTypeMismatch(ConfigEditorError):
    """Error for values the target format cannot express"""
    pass

class ConfigPathError(ConfigEditorError):
    """Error for config file paths outside the config root or unreadable"""
    pass
