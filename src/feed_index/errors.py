"""
Exception types raised by the feed index.

Every error derives from FeedIndexError. The concrete types also derive
from ValueError since each one describes a bad input value.
"""


class FeedIndexError(Exception):
    """Base exception for all feed index failures."""


class InvalidPackageArgumentError(FeedIndexError, ValueError):
    """Raised when a package id or version argument is missing."""


class IndexFormatError(FeedIndexError, ValueError):
    """Raised when a persisted index document does not match the schema."""


class VersionFormatError(FeedIndexError, ValueError):
    """Raised when a version string cannot be parsed."""
