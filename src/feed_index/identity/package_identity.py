"""
Package identity types.

A PackageIdentity names one published artifact. Ids compare
case-insensitively, versions by version precedence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
from pathlib import Path
from typing import Optional, Union

from feed_index.errors import InvalidPackageArgumentError
from feed_index.identity.version import PackageVersion


def normalize_id(package_id: str) -> str:
    """Return the case-folded key used to compare package ids."""
    return package_id.lower()


@total_ordering
@dataclass(frozen=True, eq=False)
class PackageIdentity:
    """(id, version) pair with case-insensitive id equality."""

    id: str
    version: PackageVersion

    def __post_init__(self):
        if not self.id:
            raise InvalidPackageArgumentError("package_id must be a non-empty string")
        if self.version is None:
            raise InvalidPackageArgumentError("version must be set")

    @classmethod
    def create(
        cls, package_id: str, version: Union[str, PackageVersion]
    ) -> "PackageIdentity":
        """Build an identity, parsing the version when given as a string."""
        if isinstance(version, str):
            version = PackageVersion.parse(version)
        return cls(package_id, version)

    @property
    def key(self) -> str:
        """Case-folded id used for grouping and lookup."""
        return normalize_id(self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageIdentity):
            return NotImplemented
        return self.key == other.key and self.version == other.version

    def __lt__(self, other: "PackageIdentity") -> bool:
        if not isinstance(other, PackageIdentity):
            return NotImplemented
        return (self.key, self.version) < (other.key, other.version)

    def __hash__(self) -> int:
        return hash((self.key, self.version))

    def __str__(self) -> str:
        return f"{self.id} {self.version.to_normalized_string()}"


@dataclass(frozen=True)
class PackageInput:
    """A package handed to the index by the publishing pipeline."""

    identity: PackageIdentity
    is_symbols_package: bool = False
    package_path: Optional[Path] = field(default=None, compare=False)

    @property
    def id(self) -> str:
        return self.identity.id

    @property
    def version(self) -> PackageVersion:
        return self.identity.version

    def __str__(self) -> str:
        suffix = " (symbols)" if self.is_symbols_package else ""
        return f"{self.identity}{suffix}"
