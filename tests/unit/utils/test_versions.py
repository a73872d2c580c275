"""Unit tests for functions defined in utils.versions module."""

from decimal import Decimal

import pytest
from packaging.version import Version

from greater_version.utils.versions import (
    DeclaredVersion,
    InvalidVersionError,
    as_decimal,
    greater_than,
    parse_version,
)


class TestParseVersion:
    """Unit tests for parse_version."""

    @pytest.mark.parametrize(
        "text, release",
        [
            ("1.2.3", (1, 2, 3)),
            ("v1.2.30", (1, 2, 30)),
            ("0.009", (0, 9)),
            ("1.00203", (1, 203)),
            ("  2.0\n", (2, 0)),
            ("1.2.3.4.5", (1, 2, 3, 4, 5)),
        ],
    )
    def test_parse_valid(self, text: str, release: tuple[int, ...]) -> None:
        """Test that dotted-decimal and v-prefixed forms are parsed."""
        assert parse_version(text).release == release

    def test_parse_version_object(self) -> None:
        """Test that an already parsed version is returned unchanged."""
        v = Version("1.0")
        assert parse_version(v) is v

    @pytest.mark.parametrize("text", ["", "abc", "1..2", "one.two"])
    def test_parse_invalid(self, text: str) -> None:
        """Test that invalid versions raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError, match="Invalid version"):
            parse_version(text)

    def test_parse_not_a_string(self) -> None:
        """Test that non-string values are rejected."""
        with pytest.raises(InvalidVersionError, match="must be a string"):
            parse_version(1.0)  # type: ignore[arg-type]

    def test_invalid_version_error_is_value_error(self) -> None:
        """Test that callers catching ValueError also catch parse errors."""
        assert issubclass(InvalidVersionError, ValueError)


class TestGreaterThan:
    """Unit tests for greater_than."""

    @pytest.mark.parametrize(
        "a, b",
        [
            ("1.2.30", "1.2.3"),
            ("v1.2.30", "1.2.3"),
            ("1.2.30", "v1.2.3"),
            ("2.0", "1.99.99"),
            ("0.010", "0.009"),
            ("1.2.0.1", "1.2"),
            ("10.0", "9.0"),
        ],
    )
    def test_greater(self, a: str, b: str) -> None:
        """Test strict ordering and its asymmetry."""
        assert greater_than(a, b) is True
        assert greater_than(b, a) is False

    @pytest.mark.parametrize(
        "a, b",
        [
            ("1.2", "1.2.0"),
            ("1.2", "1.2.0.0"),
            ("v1.2", "1.2.0"),
            ("1.20", "1.2"),
        ],
    )
    def test_equal_with_different_padding(self, a: str, b: str) -> None:
        """Test that zero padding does not change the value."""
        assert greater_than(a, b) is False
        assert greater_than(b, a) is False

    @pytest.mark.parametrize("a", ["0.009", "1.2.3", "v1.2.30", "1.00203"])
    def test_irreflexive(self, a: str) -> None:
        """Test that no version is greater than itself."""
        assert greater_than(a, a) is False

    def test_accepts_version_objects(self) -> None:
        """Test that parsed versions can be compared with strings."""
        assert greater_than(Version("1.1"), "1.0")

    def test_invalid_version(self) -> None:
        """Test that unparsable versions are not silently treated as lowest."""
        with pytest.raises(InvalidVersionError):
            greater_than("1.0", "not-a-version")

    @pytest.mark.parametrize(
        "a, b",
        [
            ("0.01", "0.009"),
            ("1.1", "1.05"),
            ("1.2", "1.02"),
            ("0.004", "0.0035"),
            ("2", "1.99"),
        ],
    )
    def test_plain_decimals_by_value(self, a: str, b: str) -> None:
        """Test that plain decimal versions are ordered by numeric value."""
        assert greater_than(a, b) is True
        assert greater_than(b, a) is False

    def test_plain_decimals_after_parsing(self) -> None:
        """Test that the decimal value survives parse_version."""
        assert greater_than(parse_version("0.01"), parse_version("0.009"))

    def test_normalized_version_objects_compare_by_components(self) -> None:
        """Test that a bare Version carries no decimal text."""
        assert not greater_than(Version("0.01"), Version("0.009"))


class TestAsDecimal:
    """Unit tests for as_decimal."""

    @pytest.mark.parametrize("text", ["0.009", "1.00203", "2", " 1.5 "])
    def test_plain_decimal(self, text: str) -> None:
        """Test forms read as decimal numbers."""
        assert as_decimal(text) == Decimal(text.strip())

    @pytest.mark.parametrize("text", ["1.2.3", "v1.2", "1.0rc1", "1.0.post1"])
    def test_other_forms(self, text: str) -> None:
        """Test forms compared by release components."""
        assert as_decimal(text) is None

    def test_declared_version_keeps_text(self) -> None:
        """Test that the parsed version remembers its original text."""
        v = parse_version("0.009")
        assert isinstance(v, DeclaredVersion)
        assert v.text == "0.009"
        assert str(v) == "0.009"
        assert v == Version("0.9")
        assert as_decimal(v) == Decimal("0.009")
