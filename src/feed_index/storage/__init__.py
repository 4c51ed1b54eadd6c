"""
Storage layer for feed files.
"""

from .base import FeedFile
from .local import LocalFeedFile

__all__ = ["FeedFile", "LocalFeedFile"]
