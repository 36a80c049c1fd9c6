# recentfiles/core/tools.py
"""
Optional external helper discovery.

Nothing in the search path depends on these tools; callers invoke
discover_external_tools() explicitly and decide what to do with the result.
"""
import shutil
from dataclasses import dataclass
from typing import Dict, Iterable, Optional
import structlog

log = structlog.get_logger(__name__)

KNOWN_TOOLS = ("fzf", "rg")


@dataclass(frozen=True)
class ToolStatus:
    name: str
    path: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.path is not None


def discover_tool(name: str) -> ToolStatus:
    path = shutil.which(name)
    if path is None:
        log.warning("external_tool_not_found", tool=name, hint="some features might be limited or slower")
    else:
        log.debug("external_tool_found", tool=name, path=path)
    return ToolStatus(name=name, path=path)


def discover_external_tools(names: Iterable[str] = KNOWN_TOOLS) -> Dict[str, ToolStatus]:
    return {name: discover_tool(name) for name in names}
