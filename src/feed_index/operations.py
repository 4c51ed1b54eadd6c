"""
Add/remove operations applied to feed indexes during a publish.

The publishing pipeline decides which packages to add and remove;
apply_add_remove feeds those decisions to any index exposing the
add/remove contract, one batch per category.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from feed_index.identity import PackageIdentity, PackageInput

logger = logging.getLogger(__name__)


class AddRemovePackages(Protocol):
    """Index that can add and remove packages and symbols packages."""

    async def add_packages(self, packages: Iterable[PackageIdentity]) -> None: ...

    async def remove_packages(self, packages: Iterable[PackageIdentity]) -> None: ...

    async def add_symbols_packages(self, packages: Iterable[PackageIdentity]) -> None: ...

    async def remove_symbols_packages(self, packages: Iterable[PackageIdentity]) -> None: ...


@dataclass
class FeedOperations:
    """Packages to add to and remove from a feed in one publish."""

    to_add: list[PackageInput] = field(default_factory=list)
    to_remove: list[PackageInput] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.to_add or self.to_remove)


def split_by_category(
    inputs: Iterable[PackageInput],
) -> tuple[list[PackageIdentity], list[PackageIdentity]]:
    """
    Split package inputs into (packages, symbols packages) identities.
    """
    packages: list[PackageIdentity] = []
    symbols: list[PackageIdentity] = []
    for package_input in inputs:
        if package_input.is_symbols_package:
            symbols.append(package_input.identity)
        else:
            packages.append(package_input.identity)
    return packages, symbols


async def apply_add_remove(target: AddRemovePackages, operations: FeedOperations) -> None:
    """
    Apply removals, then additions, to an index.

    Empty batches are skipped so no write happens for them.

    Args:
        target: Index exposing the add/remove contract
        operations: Packages to add and remove
    """
    remove_packages, remove_symbols = split_by_category(operations.to_remove)
    add_packages, add_symbols = split_by_category(operations.to_add)

    logger.debug(
        "Applying operations: +%d/-%d packages, +%d/-%d symbols packages",
        len(add_packages),
        len(remove_packages),
        len(add_symbols),
        len(remove_symbols),
    )

    if remove_packages:
        await target.remove_packages(remove_packages)
    if remove_symbols:
        await target.remove_symbols_packages(remove_symbols)
    if add_packages:
        await target.add_packages(add_packages)
    if add_symbols:
        await target.add_symbols_packages(add_symbols)
