# recentfiles/core/discovery/walker.py
import concurrent.futures
import os
import threading
from dataclasses import dataclass
from typing import FrozenSet, List, Optional
import structlog

from recentfiles.config.settings import DEFAULT_MAX_WORKERS
from recentfiles.core.discovery.pattern_matching import (
    GlobMatcher,
    IgnoreIndex,
    relative_to_root,
    should_skip,
)
from recentfiles.exceptions import DiscoveryError

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SearchRequest:
    pattern: str
    root_path: str
    limit: int = 0


@dataclass(frozen=True)
class CandidateFile:
    path: str
    mod_time: float


@dataclass(frozen=True)
class _DirectoryTask:
    # real_path and ancestors are resolved paths of the directories open on this branch.
    path: str
    real_path: str
    ancestors: FrozenSet[str]


class ConcurrentWalker:
    """
    Walks a directory tree on a thread pool, collecting files that survive
    the skip rules and match the glob pattern.

    One task is submitted per directory. A task visits the files of its
    directory first and hands the surviving subdirectories back to the
    coordinating thread, which schedules them. The candidate list and the
    termination flag are only touched while holding ``self._lock``.

    With ``limit > 0`` the walk stops once ``2 * limit`` candidates are
    collected, so ranking sees a bounded sample rather than the whole tree.
    """

    def __init__(self, request: SearchRequest, max_workers: Optional[int] = None, follow_symlinks: bool = True):
        self.request = request
        self.root_path = os.fspath(request.root_path)
        self.max_workers = max_workers or DEFAULT_MAX_WORKERS
        self.follow_symlinks = follow_symlinks
        self.matcher = GlobMatcher(request.pattern)
        self.ignore_index: Optional[IgnoreIndex] = None
        self.threshold = request.limit * 2 if request.limit > 0 else 0

        self._lock = threading.Lock()
        self._candidates: List[CandidateFile] = []
        self._terminated = False

    def walk(self) -> List[CandidateFile]:
        log.info("walk_started", root=self.root_path, pattern=self.request.pattern, limit=self.request.limit)
        self._check_root()
        self.ignore_index = IgnoreIndex.build(self.root_path)
        root_task = _DirectoryTask(path=self.root_path, real_path=os.path.realpath(self.root_path), ancestors=frozenset())

        pool = concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="recentfiles-walk")
        try:
            pending = {pool.submit(self._scan_directory, root_task)}
            while pending:
                done, pending = concurrent.futures.wait(pending, return_when=concurrent.futures.FIRST_COMPLETED)
                if self._is_terminated():
                    log.debug("walk_terminated_early", threshold=self.threshold, abandoned_tasks=len(pending))
                    break
                for future in done:
                    for subdir_task in future.result():
                        pending.add(pool.submit(self._scan_directory, subdir_task))
        finally:
            pool.shutdown(wait=True, cancel_futures=True)

        with self._lock:
            candidates = list(self._candidates)
            terminated = self._terminated
        log.info("walk_complete", root=self.root_path, candidates=len(candidates), terminated_early=terminated)
        return candidates

    def _check_root(self) -> None:
        # the only failure surfaced to callers; everything below the root is best-effort.
        try:
            with os.scandir(self.root_path):
                pass
        except FileNotFoundError:
            raise DiscoveryError(f"search root does not exist: {self.root_path}")
        except NotADirectoryError:
            raise DiscoveryError(f"search root is not a directory: {self.root_path}")
        except OSError as e:
            raise DiscoveryError(f"cannot read search root {self.root_path}: {e}")

    def _is_terminated(self) -> bool:
        with self._lock:
            return self._terminated

    def _scan_directory(self, task: _DirectoryTask) -> List[_DirectoryTask]:
        if self._is_terminated():
            return []
        try:
            with os.scandir(task.path) as it:
                entries = list(it)
        except OSError as e:
            log.debug("directory_unreadable_skipped", path=task.path, error=str(e))
            return []

        files, dirs = [], []
        for entry in entries:
            try:
                is_dir = entry.is_dir()
                is_link = is_dir and entry.is_symlink()
            except OSError as e:
                log.debug("entry_unreadable_skipped", path=entry.path, error=str(e))
                continue
            if is_link and not self.follow_symlinks:
                continue
            if is_dir:
                dirs.append((entry, is_link))
            else:
                files.append(entry)

        for entry in files:
            if self._is_terminated():
                return []
            self._visit_file(entry)

        chain = task.ancestors | {task.real_path}
        subdirs: List[_DirectoryTask] = []
        for entry, is_link in dirs:
            if should_skip(entry.path, self.root_path, self.ignore_index, is_dir=True):
                continue
            real_path = os.path.realpath(entry.path) if is_link else os.path.join(task.real_path, entry.name)
            if real_path in chain:
                # a link back to a directory already open on this path would recurse forever.
                log.debug("symlink_loop_skipped", path=entry.path, target=real_path)
                continue
            subdirs.append(_DirectoryTask(path=entry.path, real_path=real_path, ancestors=chain))
        return subdirs

    def _visit_file(self, entry: os.DirEntry) -> None:
        if should_skip(entry.path, self.root_path, self.ignore_index):
            return

        rel_path = relative_to_root(entry.path, self.root_path)
        if rel_path is None:
            rel_path = entry.path
        if not self.matcher.matches(rel_path):
            return

        try:
            mod_time = entry.stat(follow_symlinks=self.follow_symlinks).st_mtime
        except OSError as e:
            log.debug("file_stat_failed_skipped", path=entry.path, error=str(e))
            return

        with self._lock:
            if self._terminated:
                return
            self._candidates.append(CandidateFile(path=os.path.normpath(entry.path), mod_time=mod_time))
            if self.threshold and len(self._candidates) >= self.threshold:
                self._terminated = True
