"""
Package version parsing, ordering and formatting.

A version is ``major.minor.patch[.revision][-release][+metadata]``:

- 1 to 4 numeric parts, missing parts default to 0
- release labels are dot-separated ``[0-9A-Za-z-]`` identifiers
- build metadata is carried along for display but ignored for ordering,
  equality and hashing

Ordering follows SemVer 2.0 precedence with case-insensitive labels, so
``1.0.0-Beta == 1.0.0-beta`` and any pre-release sorts before its stable
release.
"""

from __future__ import annotations

import re
from functools import total_ordering
from typing import Optional

from feed_index.errors import VersionFormatError

_LABEL = r"[0-9A-Za-z-]+"
_VERSION_PATTERN = re.compile(
    r"^(?P<major>[0-9]+)"
    r"(?:\.(?P<minor>[0-9]+))?"
    r"(?:\.(?P<patch>[0-9]+))?"
    r"(?:\.(?P<revision>[0-9]+))?"
    rf"(?:-(?P<release>{_LABEL}(?:\.{_LABEL})*))?"
    rf"(?:\+(?P<metadata>{_LABEL}(?:\.{_LABEL})*))?$"
)


@total_ordering
class PackageVersion:
    """
    Parsed, comparable package version.

    Instances are immutable and hashable, so they can be used in sets and
    as dictionary keys.
    """

    __slots__ = ("major", "minor", "patch", "revision", "release_labels", "metadata")

    def __init__(
        self,
        major: int,
        minor: int = 0,
        patch: int = 0,
        revision: int = 0,
        release_labels: tuple[str, ...] = (),
        metadata: Optional[str] = None,
    ):
        for part in (major, minor, patch, revision):
            if part < 0:
                raise VersionFormatError(f"Version parts must be non-negative: {part}")

        object.__setattr__(self, "major", major)
        object.__setattr__(self, "minor", minor)
        object.__setattr__(self, "patch", patch)
        object.__setattr__(self, "revision", revision)
        object.__setattr__(self, "release_labels", tuple(release_labels))
        object.__setattr__(self, "metadata", metadata or None)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def parse(cls, value: str) -> "PackageVersion":
        """
        Parse a version string.

        Args:
            value: Version string, e.g. "1.0.0-beta.2+sha.abc"

        Returns:
            Parsed PackageVersion

        Raises:
            VersionFormatError: If the string is not a valid version
        """
        if not isinstance(value, str):
            raise VersionFormatError(f"Version must be a string, got {type(value).__name__}")

        match = _VERSION_PATTERN.match(value.strip())
        if match is None:
            raise VersionFormatError(f"'{value}' is not a valid version string")

        release = match.group("release")
        labels = tuple(release.split(".")) if release else ()
        for label in labels:
            # SemVer forbids leading zeros in numeric identifiers
            if label.isdigit() and len(label) > 1 and label[0] == "0":
                raise VersionFormatError(
                    f"'{value}' is not a valid version string: "
                    f"numeric label '{label}' has a leading zero"
                )

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            patch=int(match.group("patch") or 0),
            revision=int(match.group("revision") or 0),
            release_labels=labels,
            metadata=match.group("metadata"),
        )

    @classmethod
    def try_parse(cls, value: str) -> Optional["PackageVersion"]:
        """Parse a version string, returning None when it is invalid."""
        try:
            return cls.parse(value)
        except VersionFormatError:
            return None

    @property
    def is_prerelease(self) -> bool:
        return bool(self.release_labels)

    @property
    def release(self) -> str:
        """Release labels joined with dots (empty for stable versions)."""
        return ".".join(self.release_labels)

    @property
    def has_metadata(self) -> bool:
        return self.metadata is not None

    def to_normalized_string(self) -> str:
        """Render without build metadata; revision only when non-zero."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.revision > 0:
            text += f".{self.revision}"
        if self.release_labels:
            text += f"-{self.release}"
        return text

    def to_full_string(self) -> str:
        """Render the canonical form, including build metadata."""
        text = self.to_normalized_string()
        if self.metadata:
            text += f"+{self.metadata}"
        return text

    def _sort_key(self) -> tuple:
        labels = tuple(
            (0, int(label), "") if label.isdigit() else (1, 0, label.lower())
            for label in self.release_labels
        )
        return (
            self.major,
            self.minor,
            self.patch,
            self.revision,
            0 if self.release_labels else 1,
            labels,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageVersion):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other: "PackageVersion") -> bool:
        if not isinstance(other, PackageVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __str__(self) -> str:
        return self.to_full_string()

    def __repr__(self) -> str:
        return f"PackageVersion('{self.to_full_string()}')"
