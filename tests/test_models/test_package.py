"""Unit tests for depflat.models.package.

Test Coverage:
- PackageRecord initialization, defaults and identity validation
- DependencyType coercion and dev-flag mapping
- Package URL derivation, including scoped names
- Classification properties
- JSON serialization and string rendering
"""

from __future__ import annotations

import pytest

from depflat.models import DependencyType, PackageRecord


@pytest.mark.unit
class TestDependencyType:
    """Tests for the DependencyType enum."""

    def test_values_match_npm_manifest_keys(self) -> None:
        assert DependencyType.DEPENDENCY.value == "dependency"
        assert DependencyType.DEV_DEPENDENCY.value == "devDependency"

    @pytest.mark.parametrize(
        "flag,expected",
        [
            (True, DependencyType.DEV_DEPENDENCY),
            (False, DependencyType.DEPENDENCY),
            (None, DependencyType.DEPENDENCY),
        ],
        ids=["dev", "not-dev", "missing"],
    )
    def test_from_dev_flag(self, flag, expected: DependencyType) -> None:
        assert DependencyType.from_dev_flag(flag) is expected


@pytest.mark.unit
class TestPackageRecordInit:
    """Tests for PackageRecord construction."""

    def test_defaults(self) -> None:
        """A fresh record is a transitive runtime dependency with no hash."""
        record = PackageRecord(name="lodash", version="4.17.21")

        assert record.hash == ""
        assert record.is_transitive is True
        assert record.dependency_type is DependencyType.DEPENDENCY

    def test_string_dependency_type_is_coerced(self) -> None:
        record = PackageRecord(
            name="jest", version="29.7.0", dependency_type="devDependency"
        )

        assert record.dependency_type is DependencyType.DEV_DEPENDENCY

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValueError):
            PackageRecord(name="", version="1.0.0")

    def test_empty_version_rejected(self) -> None:
        with pytest.raises(ValueError):
            PackageRecord(name="left-pad", version="")

    def test_unknown_dependency_type_rejected(self) -> None:
        with pytest.raises(ValueError):
            PackageRecord(name="a", version="1.0.0", dependency_type="peer")


@pytest.mark.unit
class TestToPurl:
    """Tests for the canonical identifier."""

    def test_unscoped(self) -> None:
        record = PackageRecord(name="lodash", version="4.17.21")
        assert record.to_purl() == "pkg:npm/lodash@4.17.21"

    def test_scoped_name_encodes_scope_marker(self) -> None:
        record = PackageRecord(name="@scope/pkg", version="1.0.0")
        assert record.to_purl() == "pkg:npm/%40scope/pkg@1.0.0"

    def test_classification_does_not_affect_identity(self) -> None:
        runtime = PackageRecord(name="a", version="1.0.0")
        dev = PackageRecord(
            name="a",
            version="1.0.0",
            is_transitive=False,
            dependency_type=DependencyType.DEV_DEPENDENCY,
        )
        assert runtime.to_purl() == dev.to_purl()

    @pytest.mark.parametrize(
        "first,second",
        [
            (("a", "1.0.0"), ("a", "1.0.1")),
            (("a", "1.0.0"), ("b", "1.0.0")),
            (("@s/a", "1.0.0"), ("s/a", "1.0.0")),
            (("a-b", "1.0.0"), ("a", "b-1.0.0")),
        ],
    )
    def test_distinct_pairs_never_collide(self, first, second) -> None:
        assert (
            PackageRecord(*first).to_purl() != PackageRecord(*second).to_purl()
        )


@pytest.mark.unit
class TestClassificationProperties:
    def test_is_direct(self) -> None:
        assert PackageRecord("a", "1.0.0", is_transitive=False).is_direct is True
        assert PackageRecord("a", "1.0.0").is_direct is False

    def test_is_dev(self) -> None:
        dev = PackageRecord(
            "a", "1.0.0", dependency_type=DependencyType.DEV_DEPENDENCY
        )
        assert dev.is_dev is True
        assert PackageRecord("a", "1.0.0").is_dev is False


@pytest.mark.unit
class TestSerialization:
    def test_to_json(self) -> None:
        record = PackageRecord(
            name="@babel/core",
            version="7.22.0",
            hash="sha512-abc",
            is_transitive=False,
            dependency_type=DependencyType.DEV_DEPENDENCY,
        )

        assert record.to_json() == {
            "name": "@babel/core",
            "version": "7.22.0",
            "hash": "sha512-abc",
            "purl": "pkg:npm/%40babel/core@7.22.0",
            "is_transitive": False,
            "dependency_type": "devDependency",
        }

    def test_str(self) -> None:
        assert str(PackageRecord("@scope/pkg", "1.0.0")) == "@scope/pkg@1.0.0"
