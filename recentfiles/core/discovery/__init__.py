# recentfiles/core/discovery/__init__.py
"""
Directory walking and path filtering for recentfiles.

This package decides which files are candidates for a search: hidden and
conventionally ignored names, root .gitignore rules and the glob pattern.
"""
from .walker import ConcurrentWalker, CandidateFile, SearchRequest

__all__ = ["ConcurrentWalker", "CandidateFile", "SearchRequest"]
