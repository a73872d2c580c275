"""Outcome of a single version lookup."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from packaging.version import Version


class VersionSource(str, Enum):
    """Where a version was looked up."""

    INSTALLED = "installed"
    SOURCE = "source"
    REGISTRY = "registry"


@dataclass(frozen=True)
class Resolution:
    """Either a found version or an absence carrying the reason why not.

    Resolvers always return one of these two shapes and never raise, so an
    unknown version can not be mistaken for the lowest possible one.
    """

    source: VersionSource
    version: Optional[Version] = None
    reason: Optional[str] = None
    location: Optional[str] = None

    def __post_init__(self) -> None:
        """Check that exactly one of version and reason is set."""
        if (self.version is None) == (self.reason is None):
            raise ValueError("Resolution needs either a version or a reason")

    @classmethod
    def found(
        cls, source: VersionSource, version: Version, location: Optional[str] = None
    ) -> "Resolution":
        """Construct a resolution holding a version."""
        return cls(source=source, version=version, location=location)

    @classmethod
    def absent(
        cls, source: VersionSource, reason: str, location: Optional[str] = None
    ) -> "Resolution":
        """Construct an absence result."""
        return cls(source=source, reason=reason, location=location)

    def __bool__(self) -> bool:
        """Return True when a version has been found."""
        return self.version is not None

    def __str__(self) -> str:
        """Return a short description used in diagnostics."""
        where = f" ({self.location})" if self.location else ""
        if self.version is not None:
            return f"{self.source.value} version {self.version}{where}"
        return f"{self.source.value} version unavailable: {self.reason}{where}"
