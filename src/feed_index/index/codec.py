"""
JSON codec for the package index document.

Document layout::

    {
      "packages": {"<PackageId>": ["<newest version>", ..., "<oldest>"]},
      "symbols":  {"<PackageId>": [...]}
    }

Serialization depends only on the logical contents of the sets, so writing
the same state twice produces identical bytes.
"""

from __future__ import annotations

from typing import Any

from feed_index.errors import IndexFormatError
from feed_index.identity import PackageIdentity, PackageVersion
from feed_index.index.package_set import PackageSet, PackageSets

PACKAGES_NODE = "packages"
SYMBOLS_NODE = "symbols"


def create_template() -> dict[str, Any]:
    """Empty document used when no index exists yet."""
    return {PACKAGES_NODE: {}, SYMBOLS_NODE: {}}


def serialize_package_set(packages: PackageSet) -> dict[str, list[str]]:
    """
    Render one package set as an id -> versions object.

    Groups are ordered by id case-insensitively, versions newest first using
    the full version string. Empty groups are omitted.
    """
    node: dict[str, list[str]] = {}
    for package_id, identities in packages.groups():
        versions = [
            identity.version.to_full_string()
            for identity in sorted(identities, key=lambda e: e.version, reverse=True)
        ]
        if versions:
            node[package_id] = versions
    return node


def serialize_package_sets(sets: PackageSets) -> dict[str, Any]:
    """Render both sets; both top-level keys are always present."""
    return {
        PACKAGES_NODE: serialize_package_set(sets.packages),
        SYMBOLS_NODE: serialize_package_set(sets.symbols),
    }


def parse_package_set(node: Any, node_name: str = PACKAGES_NODE) -> PackageSet:
    """
    Build a package set from an id -> versions object.

    Raises:
        IndexFormatError: If the node or a version array has the wrong type
        VersionFormatError: If a version string is invalid
    """
    if not isinstance(node, dict):
        raise IndexFormatError(
            f"'{node_name}' node must be a JSON object, got {type(node).__name__}"
        )

    result = PackageSet()
    for package_id, versions in node.items():
        if not isinstance(versions, list):
            raise IndexFormatError(
                f"Versions for '{package_id}' in '{node_name}' must be a JSON array"
            )
        for version in versions:
            result.add(PackageIdentity(package_id, PackageVersion.parse(version)))
    return result


def parse_package_sets(document: Any, document_name: str = "index") -> PackageSets:
    """
    Build the package sets container from a parsed document.

    ``packages`` is mandatory. ``symbols`` may be missing from documents
    written before symbols packages were tracked.

    Raises:
        IndexFormatError: If the document or its nodes are malformed
        VersionFormatError: If a version string is invalid
    """
    if not isinstance(document, dict):
        raise IndexFormatError(f"{document_name} must contain a JSON object")

    packages_node = document.get(PACKAGES_NODE)
    if not isinstance(packages_node, dict):
        raise IndexFormatError(f"Packages node missing from {document_name}")

    sets = PackageSets(packages=parse_package_set(packages_node, PACKAGES_NODE))

    symbols_node = document.get(SYMBOLS_NODE)
    if symbols_node is not None:
        sets.symbols = parse_package_set(symbols_node, SYMBOLS_NODE)

    return sets
