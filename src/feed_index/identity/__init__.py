"""
Package identity and version types.
"""

from .package_identity import PackageIdentity, PackageInput, normalize_id
from .version import PackageVersion

__all__ = [
    "PackageIdentity",
    "PackageInput",
    "PackageVersion",
    "normalize_id",
]
