# recentfiles/core/discovery/pattern_matching.py
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Pattern
import pathspec
import structlog

from recentfiles.core.discovery.classifier import is_hidden, is_conventionally_ignored
from recentfiles.exceptions import PatternError

log = structlog.get_logger(__name__)

GITIGNORE_FILENAME = ".gitignore"

def load_gitignore_patterns_from_file(gitignore_file_path: Path) -> Optional[pathspec.GitIgnoreSpec]:
    # loads and compiles .gitignore patterns from a given file.
    if not gitignore_file_path.is_file():
        return None
    try:
        with gitignore_file_path.open("r", encoding="utf-8", errors="ignore") as f_obj:
            return pathspec.GitIgnoreSpec.from_lines(f_obj)
    except Exception as e:
        log.warning("failed_to_parse_gitignore_file", path=str(gitignore_file_path), error=str(e))
    return None


@dataclass(frozen=True)
class IgnoreIndex:
    """Compiled .gitignore rules found directly under a search root."""

    root_path: Path
    spec: pathspec.GitIgnoreSpec

    @classmethod
    def build(cls, root_path) -> Optional["IgnoreIndex"]:
        # a missing or unreadable .gitignore means no ignore filtering, never an error.
        root = Path(root_path)
        spec = load_gitignore_patterns_from_file(root / GITIGNORE_FILENAME)
        if spec is None:
            log.debug("no_gitignore_at_root", root=str(root))
            return None
        log.debug("gitignore_loaded", root=str(root), rule_count=len(spec.patterns))
        return cls(root_path=root, spec=spec)

    def matches(self, relative_path: str) -> bool:
        return self.spec.match_file(relative_path)


# pathspec marks "the rest is beneath a matched directory" with this group.
# A glob must account for the whole path, so the group is disabled.
_DESCENDANT_GROUP = "(?P<ps_d>/)"
_NEVER_MATCHES = "(?!)"


def expand_braces(pattern: str) -> List[str]:
    # "*.{py,go}" -> ["*.py", "*.go"]; nested groups expand recursively, "{x}" stays literal.
    depth = 0
    start = 0
    commas: List[int] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "{":
            if depth == 0:
                start, commas = i, []
            depth += 1
        elif ch == "," and depth == 1:
            commas.append(i)
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0 and commas:
                prefix, suffix = pattern[:start], pattern[i + 1:]
                bounds = [start] + commas + [i]
                expanded: List[str] = []
                for a, b in zip(bounds, bounds[1:]):
                    expanded.extend(expand_braces(prefix + pattern[a + 1:b] + suffix))
                return expanded
        i += 1
    return [pattern]


class GlobMatcher:
    """
    Matches root-relative file paths against a single glob pattern.

    Each brace alternative is translated by pathspec's gitignore pattern
    compiler, anchored at the search root, and must match the whole path:
    "*" never crosses a "/", "**" spans any number of directories, so "*.txt"
    only matches files directly under the root while "**/*.txt" matches at
    any depth.
    """

    def __init__(self, pattern: str):
        if not pattern or not pattern.strip():
            raise PatternError("search pattern must not be empty")
        self.pattern = pattern
        stripped = pattern.strip()
        if stripped.endswith("/"):
            raise PatternError(f"search pattern {pattern!r} names a directory and can never match a file")
        self._regexes = [self._compile(alternative) for alternative in expand_braces(stripped)]

    def _compile(self, glob: str) -> Pattern:
        anchored = glob[2:] if glob.startswith("./") else glob
        if not anchored.startswith("/"):
            anchored = "/" + anchored
        try:
            spec = pathspec.GitIgnoreSpec.from_lines([anchored])
        except Exception as e:
            raise PatternError(f"invalid search pattern {self.pattern!r}: {e}")
        compiled = [p for p in spec.patterns if p.include and p.regex is not None]
        if not compiled:
            raise PatternError(f"search pattern {self.pattern!r} can never match a file")
        return re.compile(compiled[0].regex.pattern.replace(_DESCENDANT_GROUP, _NEVER_MATCHES))

    def matches(self, relative_path: str) -> bool:
        candidate = relative_path.replace(os.sep, "/")
        return any(regex.match(candidate) for regex in self._regexes)

    def __repr__(self) -> str:
        return f"GlobMatcher({self.pattern!r})"


def relative_to_root(path: str, root_path: str) -> Optional[str]:
    # returns a "/"-separated path relative to root, or None when it cannot be computed.
    try:
        rel = os.path.relpath(path, root_path)
    except ValueError:
        return None
    if rel == os.pardir or rel.startswith(os.pardir + os.sep):
        return None
    return rel.replace(os.sep, "/")


def should_skip(path: str, root_path: str, index: Optional[IgnoreIndex], is_dir: bool = False) -> bool:
    """
    Decides whether a walked entry is excluded from the search.

    Hidden and conventionally ignored names are checked on the root-relative
    path so that the location of the root itself never excludes everything.
    Directories are matched against the ignore rules with a trailing "/" so
    that directory-only rules such as "build/" prune whole subtrees.
    """
    rel_path = relative_to_root(path, root_path)
    if rel_path == os.curdir:
        return False
    classified = rel_path if rel_path is not None else path
    if is_hidden(classified) or is_conventionally_ignored(classified):
        return True

    if index is not None and rel_path is not None:
        query = rel_path + "/" if is_dir else rel_path
        if index.matches(query):
            return True

    return False
