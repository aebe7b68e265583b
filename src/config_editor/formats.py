from pathlib import Path
from typing import Optional

TEXT_FORMAT = "text"

EXTENSION_FORMATS = {
    '.json': 'json',
    '.json5': 'json',
    '.toml': 'toml',
    '.yml': 'yaml',
    '.yaml': 'yaml',
    '.properties': 'properties',
    '.cfg': 'properties',
    '.txt': TEXT_FORMAT,
}

def detect_format(path: str | Path) -> Optional[str]:
    """Format tag for a config file, from its extension only.

    Returns None for files that are not config files at all.
    """
    return EXTENSION_FORMATS.get(Path(path).suffix.lower())
