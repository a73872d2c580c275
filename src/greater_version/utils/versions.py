"""Parse and compare version strings."""

import logging
import re
from decimal import Decimal
from typing import Optional, Union

from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)

# "0.009", "1.00203" or "2", but not "1.2.3" nor "v1.2"
DECIMAL_VERSION_PATTERN = re.compile(r"^\d+(?:\.\d+)?$")


class InvalidVersionError(ValueError):
    """Version string can not be parsed."""


class DeclaredVersion(Version):
    """Version that remembers the text it was parsed from.

    packaging normalizes "0.009" to "0.9", which loses the decimal value a
    plain decimal version stands for.
    """

    def __init__(self, version: str) -> None:
        """Parse `version` and keep the original text."""
        super().__init__(version)
        self.text = version

    def __str__(self) -> str:
        """Return the version as it was declared."""
        return self.text


VersionLike = Union[str, Version]


def parse_version(text: VersionLike) -> Version:
    """
    Parse a declared version into a comparable Version object.

    Both plain dotted-decimal forms with any precision ("0.009", "1.00203")
    and the "v"-prefixed multi-part form ("v1.2.30") are accepted.

    Parameters:
        text (str | Version): Version string, or an already parsed Version
        which is returned unchanged.

    Returns:
        Version: The parsed version.

    Raises:
        InvalidVersionError: If `text` is not a valid version string.
    """
    if isinstance(text, Version):
        return text
    if not isinstance(text, str):
        raise InvalidVersionError(f"Version must be a string, got {type(text).__name__}")
    try:
        return DeclaredVersion(text.strip())
    except InvalidVersion as e:
        raise InvalidVersionError(f"Invalid version '{text}'") from e


def as_decimal(version: VersionLike) -> Optional[Decimal]:
    """Return the decimal value of a plain decimal version, None for other forms."""
    if isinstance(version, DeclaredVersion):
        text = version.text
    elif isinstance(version, str):
        text = version.strip()
    else:
        return None
    if not DECIMAL_VERSION_PATTERN.match(text):
        return None
    return Decimal(text)


def greater_than(a: VersionLike, b: VersionLike) -> bool:
    """
    Check if version `a` is strictly greater than version `b`.

    When both versions are plain decimals ("0.01", "1.05") they are compared
    by numeric value, so "0.01" is greater than "0.009". Any other pair is
    compared by release components left to right, the shorter sequence being
    zero-padded on the right, therefore "1.2" and "1.2.0" are equal and
    neither is greater than the other.

    Raises:
        InvalidVersionError: If either argument can not be parsed.
    """
    left = parse_version(a)
    right = parse_version(b)
    left_decimal = as_decimal(left)
    right_decimal = as_decimal(right)
    if left_decimal is not None and right_decimal is not None:
        logger.debug("Comparing decimal %s > %s", left_decimal, right_decimal)
        return left_decimal > right_decimal
    logger.debug("Comparing %s > %s", left, right)
    return left > right
