"""
Package index document: every package id and version in the feed.

Each operation loads the document fresh, works on the in-memory package
sets and writes the result back when needed. Nothing is cached between
calls and there is no locking; callers serialize publishes themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Optional

from feed_index.config import Config, get_config
from feed_index.errors import InvalidPackageArgumentError
from feed_index.identity import PackageIdentity, PackageVersion
from feed_index.index import codec
from feed_index.index.base import IndexFileBase
from feed_index.index.hooks import PersistObserver, TimingObserver
from feed_index.index.package_set import PackageSets
from feed_index.operations import FeedOperations, apply_add_remove
from feed_index.storage import FeedFile, LocalFeedFile

logger = logging.getLogger(__name__)


class PackageIndexFile(IndexFileBase):
    """
    JSON index of all package ids and versions contained in a feed,
    with a separate index for symbols packages.
    """

    def __init__(
        self,
        feed_file: FeedFile,
        persist_when_empty: bool = False,
        observers: Iterable[PersistObserver] = (),
    ):
        super().__init__(feed_file, persist_when_empty, observers)

    @classmethod
    def from_config(
        cls,
        config: Optional[Config] = None,
        observers: Optional[Iterable[PersistObserver]] = None,
    ) -> "PackageIndexFile":
        """
        Create an index backed by the local file named in the configuration.

        Args:
            config: Configuration (defaults to the global config)
            observers: Persist observers (defaults to a TimingObserver)
        """
        config = config or get_config()
        if observers is None:
            observers = [TimingObserver(config.index.slow_write_threshold)]
        return cls(
            LocalFeedFile(config.index_path),
            persist_when_empty=config.index.persist_when_empty,
            observers=observers,
        )

    # Mutations

    async def add_package(self, package: PackageIdentity) -> None:
        await self.add_packages([package])

    async def add_packages(self, packages: Iterable[PackageIdentity]) -> None:
        """Add packages; the document is always rewritten."""
        sets = await self.get_package_sets()
        changed = sets.packages.add_many(packages)
        logger.debug("Adding packages to %s (changed=%s)", self.file.name, changed)
        await self.create(sets)

    async def remove_package(self, package: PackageIdentity) -> None:
        await self.remove_packages([package])

    async def remove_packages(self, packages: Iterable[PackageIdentity]) -> None:
        """Remove packages; nothing is written if none were present."""
        sets = await self.get_package_sets()
        if sets.packages.remove_many(packages):
            await self.create(sets)
        else:
            logger.debug("No packages removed from %s, skipping write", self.file.name)

    async def add_symbols_package(self, package: PackageIdentity) -> None:
        await self.add_symbols_packages([package])

    async def add_symbols_packages(self, packages: Iterable[PackageIdentity]) -> None:
        sets = await self.get_package_sets()
        sets.symbols.add_many(packages)
        await self.create(sets)

    async def remove_symbols_package(self, package: PackageIdentity) -> None:
        await self.remove_symbols_packages([package])

    async def remove_symbols_packages(self, packages: Iterable[PackageIdentity]) -> None:
        sets = await self.get_package_sets()
        if sets.symbols.remove_many(packages):
            await self.create(sets)
        else:
            logger.debug("No symbols packages removed from %s, skipping write", self.file.name)

    async def create(self, sets: PackageSets) -> None:
        """Write the sets directly without loading the previous document."""
        json = codec.serialize_package_sets(sets)
        await self.save(json, sets.is_empty)

    async def apply_operations(self, operations: FeedOperations) -> None:
        await apply_add_remove(self, operations)

    async def pre_load(self, operations: FeedOperations) -> None:
        """Nothing to preload; every operation reads the document itself."""

    # Queries

    async def get_package_sets(self) -> PackageSets:
        """
        Load the package sets from the persisted document.

        Returns:
            Loaded sets, or two empty sets if the document does not exist

        Raises:
            IndexFormatError: If the packages node is missing or malformed
            VersionFormatError: If a stored version cannot be parsed
        """
        if not await self.file.exists():
            return PackageSets()

        json = await self.file.fetch_json()
        sets = codec.parse_package_sets(json, self.file.name)
        logger.debug(
            "Loaded %s: %d packages, %d symbols packages",
            self.file.name,
            len(sets.packages),
            len(sets.symbols),
        )
        return sets

    async def get_packages(self) -> set[PackageIdentity]:
        sets = await self.get_package_sets()
        return sets.packages.to_set()

    async def get_symbols_packages(self) -> set[PackageIdentity]:
        sets = await self.get_package_sets()
        return sets.symbols.to_set()

    async def get_packages_by_id(self, package_id: str) -> list[PackageIdentity]:
        """All versions of a package, ordered by version ascending."""
        sets = await self.get_package_sets()
        return sets.packages.get_by_id(package_id)

    async def get_symbols_packages_by_id(self, package_id: str) -> list[PackageIdentity]:
        sets = await self.get_package_sets()
        return sets.symbols.get_by_id(package_id)

    async def get_package_versions(self, package_id: str) -> list[PackageVersion]:
        sets = await self.get_package_sets()
        return sets.packages.get_versions(package_id)

    async def get_symbols_package_versions(self, package_id: str) -> list[PackageVersion]:
        sets = await self.get_package_sets()
        return sets.symbols.get_versions(package_id)

    async def exists(self, package_id: str, version: PackageVersion) -> bool:
        """
        True if the package exists in the index.

        Raises:
            InvalidPackageArgumentError: If package_id or version is missing
        """
        identity = _lookup_identity(package_id, version)
        sets = await self.get_package_sets()
        return identity in sets.packages

    async def exists_identity(self, package: PackageIdentity) -> bool:
        if package is None:
            raise InvalidPackageArgumentError("package must be set")
        return await self.exists(package.id, package.version)

    async def symbols_exists(self, package_id: str, version: PackageVersion) -> bool:
        """
        True if the symbols package exists in the index.

        Raises:
            InvalidPackageArgumentError: If package_id or version is missing
        """
        identity = _lookup_identity(package_id, version)
        sets = await self.get_package_sets()
        return identity in sets.symbols

    async def symbols_exists_identity(self, package: PackageIdentity) -> bool:
        if package is None:
            raise InvalidPackageArgumentError("package must be set")
        return await self.symbols_exists(package.id, package.version)

    async def is_empty(self) -> bool:
        sets = await self.get_package_sets()
        return sets.is_empty

    def _get_json_template(self) -> dict[str, Any]:
        return codec.create_template()


def _lookup_identity(package_id: str, version: PackageVersion) -> PackageIdentity:
    if not package_id:
        raise InvalidPackageArgumentError("package_id must be a non-empty string")
    if version is None:
        raise InvalidPackageArgumentError("version must be set")
    return PackageIdentity(package_id, version)
