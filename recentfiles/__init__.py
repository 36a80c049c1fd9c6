# recentfiles/__init__.py
"""
recentfiles: gitignore-aware glob search returning the most recently
modified matches first.
"""
__version__ = "0.3.0"

from recentfiles.core.search import search, SearchRequest, SearchResult

__all__ = ["__version__", "search", "SearchRequest", "SearchResult"]
