"""Did you update the version?

Checks asserting that the version declared in the local source tree is
greater than the installed one and the one published on the package registry.

    from greater_version import has_greater_version, has_greater_version_than_cpan

    has_greater_version("my_package")
    has_greater_version_than_cpan("my_package")
"""

from greater_version.checks import (
    has_greater_version,
    has_greater_version_than_cpan,
    has_greater_version_than_pypi,
)
from greater_version.configuration import configuration
from greater_version.reporter import Outcome, Reporter, get_reporter
from greater_version.utils.versions import greater_than, parse_version
from greater_version.version import __version__

__all__ = [
    "Outcome",
    "Reporter",
    "__version__",
    "configuration",
    "get_reporter",
    "greater_than",
    "has_greater_version",
    "has_greater_version_than_cpan",
    "has_greater_version_than_pypi",
    "parse_version",
]
