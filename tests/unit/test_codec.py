"""Unit tests for the package index JSON codec."""

import pytest

from feed_index.errors import IndexFormatError, VersionFormatError
from feed_index.identity import PackageIdentity
from feed_index.index import PackageSet, PackageSets
from feed_index.index import codec


def pkg(package_id, version):
    return PackageIdentity.create(package_id, version)


class TestSerialize:
    """Tests for serialization layout."""

    def test_template(self):
        assert codec.create_template() == {"packages": {}, "symbols": {}}

    def test_empty_sets_emit_both_keys(self):
        assert codec.serialize_package_sets(PackageSets()) == {"packages": {}, "symbols": {}}

    def test_versions_descending_full_string(self):
        packages = PackageSet(
            [pkg("A", "1.0.0"), pkg("A", "2.0.0-beta+build.7"), pkg("A", "1.10.0"), pkg("A", "1.2.0")]
        )

        node = codec.serialize_package_set(packages)

        assert node == {"A": ["2.0.0-beta+build.7", "1.10.0", "1.2.0", "1.0.0"]}

    def test_groups_ordered_case_insensitively(self):
        packages = PackageSet([pkg("zeta", "1.0.0"), pkg("Beta", "1.0.0"), pkg("alpha", "1.0.0")])

        node = codec.serialize_package_set(packages)

        assert list(node) == ["alpha", "Beta", "zeta"]

    def test_group_order_compares_upper_cased_ids(self):
        packages = PackageSet([pkg("a_b", "1.0.0"), pkg("aab", "1.0.0"), pkg("A-b", "1.0.0")])

        node = codec.serialize_package_set(packages)

        # "_" sorts after letters once ids are upper-cased
        assert list(node) == ["A-b", "aab", "a_b"]

    def test_ids_grouped_case_insensitively(self):
        packages = PackageSet([pkg("Foo", "1.0.0"), pkg("foo", "2.0.0")])

        assert codec.serialize_package_set(packages) == {"Foo": ["2.0.0", "1.0.0"]}

    def test_insertion_order_does_not_matter(self):
        identities = [pkg("b", "1.0.0"), pkg("a", "3.0.0"), pkg("a", "1.0.0"), pkg("c", "0.1.0")]

        first = codec.serialize_package_set(PackageSet(identities))
        second = codec.serialize_package_set(PackageSet(reversed(identities)))

        assert list(first.items()) == list(second.items())


class TestParse:
    """Tests for parsing persisted documents."""

    def test_round_trip(self):
        sets = PackageSets(
            packages=PackageSet([pkg("A", "1.0.0"), pkg("A", "2.0.0-rc.1+meta"), pkg("b", "0.0.1.5")]),
            symbols=PackageSet([pkg("A", "1.0.0")]),
        )

        parsed = codec.parse_package_sets(codec.serialize_package_sets(sets))

        assert parsed.packages == sets.packages
        assert parsed.symbols == sets.symbols

    def test_missing_symbols_is_empty(self):
        sets = codec.parse_package_sets({"packages": {"A": ["1.0.0"]}})

        assert len(sets.packages) == 1
        assert len(sets.symbols) == 0

    def test_missing_packages_fails(self):
        with pytest.raises(IndexFormatError, match="Packages node missing"):
            codec.parse_package_sets({"symbols": {"A": ["1.0.0"]}}, "packageindex.json")

    def test_packages_wrong_type_fails(self):
        with pytest.raises(IndexFormatError):
            codec.parse_package_sets({"packages": ["A"]})

    def test_top_level_not_object_fails(self):
        with pytest.raises(IndexFormatError):
            codec.parse_package_sets([])

    def test_version_array_wrong_type_fails(self):
        with pytest.raises(IndexFormatError):
            codec.parse_package_sets({"packages": {"A": "1.0.0"}})

    def test_symbols_wrong_type_fails(self):
        with pytest.raises(IndexFormatError):
            codec.parse_package_sets({"packages": {}, "symbols": "oops"})

    def test_bad_version_propagates(self):
        with pytest.raises(VersionFormatError):
            codec.parse_package_sets({"packages": {"A": ["1.0.0", "not.a.version"]}})

    def test_duplicate_ids_with_different_case_merge(self):
        sets = codec.parse_package_sets({"packages": {"Foo": ["1.0.0"], "foo": ["1.0.0", "2.0.0"]}})

        assert len(sets.packages) == 2
