"""Unit tests for the Resolution model."""

import pytest
from packaging.version import Version

from greater_version.models.resolution import Resolution, VersionSource


def test_found_resolution() -> None:
    """Test a resolution holding a version."""
    r = Resolution.found(VersionSource.SOURCE, Version("1.2"), "lib/pkg.py")
    assert r
    assert r.version == Version("1.2")
    assert r.reason is None
    assert str(r) == "source version 1.2 (lib/pkg.py)"


def test_absent_resolution() -> None:
    """Test that an absence result is falsy and carries its reason."""
    r = Resolution.absent(VersionSource.REGISTRY, "not found on registry")
    assert not r
    assert r.version is None
    assert str(r) == "registry version unavailable: not found on registry"


def test_resolution_needs_exactly_one_shape() -> None:
    """Test that a resolution is either found or absent, never both or none."""
    with pytest.raises(ValueError, match="either a version or a reason"):
        Resolution(source=VersionSource.INSTALLED)

    with pytest.raises(ValueError, match="either a version or a reason"):
        Resolution(
            source=VersionSource.INSTALLED, version=Version("1.0"), reason="oops"
        )
