# recentfiles/config/__init__.py
from .settings import SearchConfig, OutputFormat

__all__ = ["SearchConfig", "OutputFormat"]
