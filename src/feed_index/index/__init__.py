"""
Package index documents.

Loads, mutates and persists the feed's package index and answers lookups.
"""

from .base import IndexFileBase
from .hooks import PersistObserver, TimingObserver
from .package_index_file import PackageIndexFile
from .package_set import PackageSet, PackageSets

__all__ = [
    "IndexFileBase",
    "PackageIndexFile",
    "PackageSet",
    "PackageSets",
    "PersistObserver",
    "TimingObserver",
]
