import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict
import structlog
from rich.table import Table

from recentfiles.config.settings import OutputFormat, SearchConfig
from recentfiles.core.ranking import SearchResult
from recentfiles.exceptions import OutputError

log = structlog.get_logger(__name__)

def display_path(path: str, config: SearchConfig) -> str:
    # optionally shows paths relative to the search root.
    if not config.relative_paths:
        return path
    try:
        return os.path.relpath(path, config.root_path)
    except ValueError:
        return path

def result_to_dict(result: SearchResult, config: SearchConfig) -> Dict[str, Any]:
    return {
        "pattern": config.pattern,
        "root": str(config.root_path),
        "limit": config.limit,
        "truncated": result.truncated,
        "paths": [display_path(p, config) for p in result.paths],
    }

def format_result(result: SearchResult, config: SearchConfig) -> str:
    # renders a result as plain text (one path per line) or json.
    if config.output_format == OutputFormat.JSON:
        return json.dumps(result_to_dict(result, config), indent=2) + "\n"
    if not result.files:
        return ""
    return "\n".join(display_path(p, config) for p in result.paths) + "\n"

def render_table(result: SearchResult, config: SearchConfig) -> Table:
    table = Table(title=f"{config.pattern} in {config.root_path}", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Path", style="cyan", overflow="fold")
    table.add_column("Modified", style="green")
    for rank, candidate in enumerate(result.files, start=1):
        modified = datetime.fromtimestamp(candidate.mod_time).isoformat(sep=" ", timespec="seconds")
        table.add_row(str(rank), display_path(candidate.path, config), modified)
    return table

def write_to_stdout(text_content: str):
    # writes text to standard output.
    try:
        sys.stdout.write(text_content)
        sys.stdout.flush()
    except UnicodeEncodeError as e:
        log.warning("stdout_write_failed_trying_binary_fallback", error=str(e))
        sys.stdout.buffer.write(text_content.encode("utf-8", errors="replace"))
        sys.stdout.buffer.flush()

def write_to_file(output_file_path: Path, text_content: str):
    # writes text content to the specified file path.
    log.info("writing_output_to_file", path=str(output_file_path))
    try:
        output_file_path.write_text(text_content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"failed to write to file '{output_file_path}': {e}")
