"""Unit tests for package identities."""

import pytest

from feed_index.errors import InvalidPackageArgumentError
from feed_index.identity import PackageIdentity, PackageInput, PackageVersion


def test_ids_compare_case_insensitively():
    first = PackageIdentity.create("Foo", "1.0.0")
    second = PackageIdentity.create("foo", "1.0.0")

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_id_case_is_preserved():
    identity = PackageIdentity.create("Contoso.Tools", "1.0.0")

    assert identity.id == "Contoso.Tools"
    assert identity.key == "contoso.tools"


def test_different_versions_are_different():
    assert PackageIdentity.create("a", "1.0.0") != PackageIdentity.create("a", "1.0.1")


def test_ordering_by_id_then_version():
    identities = [
        PackageIdentity.create("b", "1.0.0"),
        PackageIdentity.create("A", "2.0.0"),
        PackageIdentity.create("a", "1.0.0"),
    ]

    assert [str(i) for i in sorted(identities)] == ["a 1.0.0", "A 2.0.0", "b 1.0.0"]


def test_create_accepts_parsed_version():
    version = PackageVersion.parse("3.1.0")

    assert PackageIdentity.create("a", version).version is version


@pytest.mark.parametrize("package_id, version", [("", PackageVersion(1)), ("a", None)])
def test_missing_parts_rejected(package_id, version):
    with pytest.raises(InvalidPackageArgumentError):
        PackageIdentity(package_id, version)


def test_package_input_delegates_to_identity():
    package = PackageInput(PackageIdentity.create("a", "1.0.0"), is_symbols_package=True)

    assert package.id == "a"
    assert package.version == PackageVersion(1)
    assert str(package) == "a 1.0.0 (symbols)"
