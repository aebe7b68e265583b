from typing import Callable, Optional


class EditorConfig:
    def __init__(
        self,
        max_file_size: int = 5_000_000,
        capture_property_comments: bool = False,
        error_handler: Optional[Callable[[Exception], None]] = None,
        encoding: str = "utf-8"
    ):
        self.max_file_size = max_file_size
        self.capture_property_comments = capture_property_comments
        self.error_handler = error_handler
        self.encoding = encoding
