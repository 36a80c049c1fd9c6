# recentfiles/core/discovery/classifier.py
"""
Pure path predicates used to prune the search walk.

Neither function touches the filesystem; both operate on the path string only.
"""
import os
import re
from typing import FrozenSet

# build output, dependency, version-control and cache directories.
CONVENTIONALLY_IGNORED_DIRS: FrozenSet[str] = frozenset({
    ".recentfiles",
    "node_modules",
    "vendor",
    "dist",
    "build",
    "target",
    ".git",
    ".idea",
    ".vscode",
    "__pycache__",
    "bin",
    "obj",
    "out",
    "coverage",
    "tmp",
    "temp",
    "logs",
    "generated",
    "bower_components",
    "jspm_packages",
})

_SEPARATORS = re.compile(r"[/\\]" if os.sep == "\\" else "/")

def _segments(path: str):
    return _SEPARATORS.split(os.fspath(path))

def is_hidden(path) -> bool:
    # true when the final segment is a dotfile other than ".", including "..".
    base = os.path.basename(os.fspath(path).rstrip(os.sep + "/"))
    return base != "." and base.startswith(".")

def is_conventionally_ignored(path) -> bool:
    # true when any segment exactly matches an ignored directory name.
    return any(part in CONVENTIONALLY_IGNORED_DIRS for part in _segments(path))
