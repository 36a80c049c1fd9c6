import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional
import structlog

log = structlog.get_logger(__name__)

class OutputFormat(Enum):
    # defines how search results are printed.
    TEXT = "text"
    JSON = "json"
    TABLE = "table"

    @classmethod
    def from_string(cls, s: Optional[str]) -> "OutputFormat":
        if not s:
            return DEFAULT_OUTPUT_FORMAT
        try:
            return cls(s.lower())
        except ValueError:
            log.warning("invalid_output_format_string", input_string=s)
            return DEFAULT_OUTPUT_FORMAT

DEFAULT_LIMIT = 100
DEFAULT_MAX_WORKERS = max(4, os.cpu_count() or 1)
DEFAULT_OUTPUT_FORMAT = OutputFormat.TEXT

@dataclass
class SearchConfig:
    # holds all configuration parameters for a single search run.
    pattern: str = "**/*"
    root_path: Path = field(default_factory=lambda: Path("."))
    limit: int = DEFAULT_LIMIT
    max_workers: int = DEFAULT_MAX_WORKERS
    follow_symlinks: bool = True
    output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT
    relative_paths: bool = False
    output_file: Optional[Path] = None

    def __post_init__(self):
        # coerces values that may arrive as plain strings from toml files.
        if not isinstance(self.root_path, Path):
            self.root_path = Path(self.root_path)
        if isinstance(self.output_file, str):
            self.output_file = Path(self.output_file) if self.output_file else None
        if not isinstance(self.output_format, OutputFormat):
            self.output_format = OutputFormat.from_string(self.output_format)
        if self.max_workers is None or self.max_workers < 1:
            log.warning("invalid_max_workers_using_default", value=self.max_workers)
            self.max_workers = DEFAULT_MAX_WORKERS
