"""
In-memory package sets loaded from an index document.

PackageSet keeps one category of identities (packages or symbols) as an
ordered map of case-folded id -> version-sorted identities. Mutations
return a ``changed`` flag so callers can skip writes when nothing moved.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from feed_index.identity import PackageIdentity, PackageVersion, normalize_id


class PackageSet:
    """Unique collection of package identities for one category."""

    def __init__(self, identities: Iterable[PackageIdentity] = ()):
        self._index: dict[str, list[PackageIdentity]] = {}
        # id spelling of the first identity added under each key
        self._display_ids: dict[str, str] = {}
        self.add_many(identities)

    def add(self, identity: PackageIdentity) -> bool:
        """
        Add an identity.

        Returns:
            True if the set changed, False if an equal identity was present
        """
        entries = self._index.setdefault(identity.key, [])
        self._display_ids.setdefault(identity.key, identity.id)
        pos = bisect.bisect_left(entries, identity.version, key=_version_of)
        if pos < len(entries) and entries[pos].version == identity.version:
            return False

        entries.insert(pos, identity)
        return True

    def add_many(self, identities: Iterable[PackageIdentity]) -> bool:
        changed = False
        for identity in identities:
            changed |= self.add(identity)
        return changed

    def remove(self, identity: PackageIdentity) -> bool:
        """
        Remove an identity.

        Returns:
            True if the identity was present and removed
        """
        entries = self._index.get(identity.key)
        if not entries:
            return False

        pos = bisect.bisect_left(entries, identity.version, key=_version_of)
        if pos == len(entries) or entries[pos].version != identity.version:
            return False

        del entries[pos]
        if not entries:
            del self._index[identity.key]
            del self._display_ids[identity.key]
        return True

    def remove_many(self, identities: Iterable[PackageIdentity]) -> bool:
        changed = False
        for identity in identities:
            changed |= self.remove(identity)
        return changed

    def get_by_id(self, package_id: str) -> list[PackageIdentity]:
        """All identities for an id (case-insensitive), versions ascending."""
        return list(self._index.get(normalize_id(package_id), ()))

    def get_versions(self, package_id: str) -> list[PackageVersion]:
        """All versions for an id, ascending."""
        return [entry.version for entry in self._index.get(normalize_id(package_id), ())]

    def ids(self) -> list[str]:
        """Package ids as stored, ordered case-insensitively."""
        return [self._display_ids[key] for key in self._sorted_keys()]

    def groups(self) -> Iterator[tuple[str, list[PackageIdentity]]]:
        """
        Yield (id, identities) groups ordered by id case-insensitively.

        Identities within a group are ordered by version ascending. The
        group id keeps the spelling of the first identity added under it.
        """
        for key in self._sorted_keys():
            entries = self._index[key]
            if entries:
                yield self._display_ids[key], list(entries)

    def _sorted_keys(self) -> list[str]:
        # Upper-cased ordinal order, so "_" sorts after letters
        return sorted(self._index, key=str.upper)

    def to_set(self) -> set[PackageIdentity]:
        return set(self)

    def __contains__(self, identity: object) -> bool:
        if not isinstance(identity, PackageIdentity):
            return False
        entries = self._index.get(identity.key, ())
        pos = bisect.bisect_left(entries, identity.version, key=_version_of)
        return pos < len(entries) and entries[pos].version == identity.version

    def __iter__(self) -> Iterator[PackageIdentity]:
        for _, entries in self.groups():
            yield from entries

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._index.values())

    def __bool__(self) -> bool:
        return bool(self._index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageSet):
            return NotImplemented
        return self.to_set() == other.to_set()

    def __repr__(self) -> str:
        return f"PackageSet({len(self)} packages, {len(self._index)} ids)"


def _version_of(identity: PackageIdentity) -> PackageVersion:
    return identity.version


@dataclass
class PackageSets:
    """The two independent package sets held by one index document."""

    packages: PackageSet = field(default_factory=PackageSet)
    symbols: PackageSet = field(default_factory=PackageSet)

    @property
    def is_empty(self) -> bool:
        return len(self.packages) == 0 and len(self.symbols) == 0
