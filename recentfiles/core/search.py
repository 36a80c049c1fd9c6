# recentfiles/core/search.py
import os
from typing import Optional
import structlog

from recentfiles.config.settings import SearchConfig
from recentfiles.core.discovery.walker import ConcurrentWalker, SearchRequest
from recentfiles.core.ranking import SearchResult, rank_candidates

log = structlog.get_logger(__name__)

__all__ = ["search", "search_with_config", "SearchRequest", "SearchResult"]


def search(
    pattern: str,
    root_path,
    limit: int = 0,
    *,
    max_workers: Optional[int] = None,
    follow_symlinks: bool = True,
) -> SearchResult:
    """
    Finds files under ``root_path`` matching ``pattern``, newest first.

    Args:
        pattern: Glob matched against the path relative to the root.
            ``**`` matches across directories.
        root_path: Directory to search.
        limit: Maximum number of results; ``<= 0`` means unlimited.
        max_workers: Size of the walker thread pool.
        follow_symlinks: Descend into symlinked directories.

    Returns:
        A SearchResult whose ``truncated`` flag is set when more matches were
        collected than ``limit`` allows.

    Raises:
        DiscoveryError: the root is missing, not a directory or unreadable.
        PatternError: the pattern is blank or invalid.
    """
    request = SearchRequest(pattern=pattern, root_path=os.fspath(root_path), limit=limit)
    walker = ConcurrentWalker(request, max_workers=max_workers, follow_symlinks=follow_symlinks)
    candidates = walker.walk()
    result = rank_candidates(candidates, limit)
    log.info("search_complete", pattern=pattern, root=request.root_path, returned=len(result), truncated=result.truncated)
    return result


def search_with_config(config: SearchConfig) -> SearchResult:
    return search(
        config.pattern,
        config.root_path,
        config.limit,
        max_workers=config.max_workers,
        follow_symlinks=config.follow_symlinks,
    )
