import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from .codecs import SUPPORTED_FORMATS
from .codecs.errors import ConfigPathError
from .config import EditorConfig
from .document import ConfigDocument
from .formats import detect_format
from .models import ConfigFileInfo


class ConfigEditorAPI:
    """Reads, parses and writes config files below one config root"""

    def __init__(self, root: Path, config: Optional[EditorConfig] = None):
        self._logger = logging.getLogger(__name__)
        self.root = Path(root)
        self.config = config or EditorConfig()

    def list_config_files(self) -> List[ConfigFileInfo]:
        """All config files below the root, sorted by relative path"""
        if not self.root.exists():
            return []

        files = []
        try:
            for file_path in self.root.rglob('*'):
                if not file_path.is_file():
                    continue
                file_type = detect_format(file_path)
                if file_type is None:
                    continue
                files.append(ConfigFileInfo.from_path(file_path, self.root, file_type))
        except OSError as e:
            self._handle_error(e, f"listing {self.root}")
            raise

        self._logger.debug(f"Found {len(files)} config files under {self.root}")
        return sorted(files, key=lambda info: info.path)

    def read_config_file(self, relative_path: str) -> str:
        file_path = self._resolve(relative_path, must_exist=True)
        try:
            size = file_path.stat().st_size
            if size > self.config.max_file_size:
                raise ConfigPathError(
                    f"Config file too large: {relative_path} ({size} > {self.config.max_file_size} bytes)"
                )
            return file_path.read_text(encoding=self.config.encoding)
        except (OSError, UnicodeDecodeError, ConfigPathError) as e:
            self._handle_error(e, f"reading {relative_path}")
            raise

    def save_config_file(self, relative_path: str, content: str) -> None:
        """Atomically replace a config file with new content"""
        file_path = self._resolve(relative_path, must_exist=False)
        try:
            fd, temp_name = tempfile.mkstemp(dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, 'w', encoding=self.config.encoding, newline='') as handle:
                    handle.write(content)
                os.replace(temp_name, file_path)
            except BaseException:
                Path(temp_name).unlink(missing_ok=True)
                raise
            self._logger.info(f"Saved {relative_path} ({len(content)} chars)")
        except OSError as e:
            self._handle_error(e, f"saving {relative_path}")
            raise

    def open_document(self, relative_path: str, format_tag: Optional[str] = None) -> Optional[ConfigDocument]:
        """Parse a config file for structured editing.

        Returns None when the file has to be edited as raw text instead.
        """
        format_tag = format_tag or detect_format(relative_path)
        content = self.read_config_file(relative_path)

        if format_tag not in SUPPORTED_FORMATS:
            self._logger.info(f"{relative_path}: no structured editing for format {format_tag!r}")
            return None

        document = ConfigDocument.parse(content, format_tag, self.config.capture_property_comments)
        if document is None:
            self._logger.warning(f"{relative_path}: could not be parsed, falling back to raw text")
        return document

    def save_document(self, relative_path: str, document: ConfigDocument) -> str:
        content = document.to_text()
        self.save_config_file(relative_path, content)
        return content

    def _resolve(self, relative_path: str, must_exist: bool) -> Path:
        """Resolve a path under the root, rejecting anything outside it"""
        try:
            root = self.root.resolve(strict=True)
        except OSError as e:
            error = ConfigPathError(f"Config root not found: {self.root}")
            self._handle_error(error, "resolving config root")
            raise error from e

        file_path = (root / relative_path).resolve()
        if not file_path.is_relative_to(root) or file_path == root:
            error = ConfigPathError(f"Invalid config path: {relative_path}")
            self._handle_error(error, "resolving config path")
            raise error

        if must_exist and not file_path.is_file():
            error = ConfigPathError(f"Config file not found: {relative_path}")
            self._handle_error(error, "resolving config path")
            raise error
        if not must_exist and not file_path.parent.is_dir():
            error = ConfigPathError(f"Config folder not found: {relative_path}")
            self._handle_error(error, "resolving config path")
            raise error
        return file_path

    def _handle_error(self, error: Exception, context: str = "") -> None:
        if self.config and self.config.error_handler:
            try:
                self.config.error_handler(error)
            except Exception as e:
                self._logger.error(f"Error handler failed: {e}")
                return

        self._logger.error(f"Error in {context}: {error}")
