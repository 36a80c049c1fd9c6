# recentfiles/core/ranking.py
"""
Reduces walked candidates to the final newest-first, bounded result.
"""
from dataclasses import dataclass
from typing import Iterable, Tuple
import structlog

from recentfiles.core.discovery.walker import CandidateFile

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SearchResult:
    files: Tuple[CandidateFile, ...] = ()
    truncated: bool = False

    @property
    def paths(self) -> Tuple[str, ...]:
        return tuple(f.path for f in self.files)

    def __len__(self) -> int:
        return len(self.files)


def rank_candidates(candidates: Iterable[CandidateFile], limit: int) -> SearchResult:
    """
    Sorts candidates newest first and applies the limit.

    The sort is stable, so files with equal modification times keep the
    order in which the walker discovered them. ``limit <= 0`` keeps every
    candidate and never reports truncation.

    The walker stops collecting at twice the limit, so for large trees this is
    the newest-N of the collected sample, not necessarily of the whole tree.
    """
    ranked = sorted(candidates, key=lambda c: c.mod_time, reverse=True)
    truncated = False
    if limit > 0 and len(ranked) > limit:
        log.debug("results_truncated", collected=len(ranked), limit=limit)
        ranked = ranked[:limit]
        truncated = True
    return SearchResult(files=tuple(ranked), truncated=truncated)
