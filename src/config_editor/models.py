from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

MODIFIED_FORMAT = "%Y-%m-%d %H:%M:%S"

@dataclass(frozen=True)
class ConfigFileInfo:
    """A config file found under a config root"""
    name: str
    path: str
    size_bytes: int
    file_type: str
    modified: Optional[str] = None

    def __post_init__(self) -> None:
        normalized = self.path.replace('\\', '/').strip('/')
        if normalized != self.path:
            object.__setattr__(self, 'path', normalized)

    @property
    def folder(self) -> str:
        """Folder part of the relative path, empty at the root"""
        return self.path.rsplit('/', 1)[0] if '/' in self.path else ""

    @classmethod
    def from_path(cls, file_path: Path, root: Path, file_type: str) -> 'ConfigFileInfo':
        stat = file_path.stat()
        return cls(
            name=file_path.name,
            path=file_path.relative_to(root).as_posix(),
            size_bytes=stat.st_size,
            file_type=file_type,
            modified=datetime.fromtimestamp(stat.st_mtime).strftime(MODIFIED_FORMAT)
        )

    def to_dict(self) -> dict:
        """Convert file info to dictionary for serialization"""
        return {
            'name': self.name,
            'path': self.path,
            'size_bytes': self.size_bytes,
            'file_type': self.file_type,
            'modified': self.modified
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ConfigFileInfo':
        return cls(
            name=data['name'],
            path=data['path'],
            size_bytes=data['size_bytes'],
            file_type=data['file_type'],
            modified=data.get('modified')
        )
