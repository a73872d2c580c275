"""Checks that the version in the source tree has been incremented.

These checks are meant to be called from a release script right before
publishing, not from routine unit tests: the registry lookup goes over the
network and the installed version depends on the state of the machine.
"""

import logging
from typing import Optional

import requests

from greater_version import constants
from greater_version.configuration import configuration
from greater_version.models.config import Configuration
from greater_version.models.resolution import Resolution
from greater_version.reporter import Reporter, get_reporter
from greater_version.resolvers import (
    resolve_from_registry,
    resolve_from_source,
    resolve_installed,
)
from greater_version.utils.versions import greater_than

logger = logging.getLogger(__name__)


def _compare(
    module_name: str,
    local: Resolution,
    other: Resolution,
    other_failure: str,
    description: str,
    reporter: Reporter,
) -> bool:
    """Record local > other, or a diagnostic when either version is unknown."""
    if not other:
        return reporter.report(other, other_failure)
    if not local:
        return reporter.report(
            local, f"Getting version of '{module_name}' in source tree failed"
        )
    logger.debug("%s: %s, %s", module_name, local, other)
    result = greater_than(local.version, other.version)  # type: ignore[arg-type]
    return reporter.report(result, description)


def has_greater_version(
    module_name: Optional[str],
    *,
    reporter: Optional[Reporter] = None,
    config: Optional[Configuration] = None,
) -> bool:
    """
    Check that the source tree declares a greater version than the installed one.

    Parameters:
        module_name (Optional[str]): Module reference, e.g. "pkg.module".
        reporter (Optional[Reporter]): Sink for the result, the process-wide
        reporter when not given.
        config (Optional[Configuration]): Configuration to use instead of the
        global one.

    Returns:
        bool: True if the version in the source tree is strictly greater
        than the installed version. False otherwise, including when either
        version can not be determined; a diagnostic is recorded then.
    """
    sink = reporter if reporter is not None else get_reporter()
    if not isinstance(module_name, str) or not module_name.strip():
        return sink.diag(constants.REASON_NO_MODULE_NAME)

    cfg = config or configuration.configuration
    installed = resolve_installed(module_name, cfg)
    local = resolve_from_source(module_name, cfg)
    return _compare(
        module_name,
        local,
        installed,
        f"Getting installed version of '{module_name}' failed",
        f"{module_name} has greater version",
        sink,
    )


def has_greater_version_than_cpan(
    module_name: Optional[str],
    *,
    reporter: Optional[Reporter] = None,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> bool:
    """
    Check that the source tree declares a greater version than the registry.

    The registry is PyPI unless configured otherwise; the name is kept for
    compatibility with existing release scripts.

    Parameters:
        module_name (Optional[str]): Module reference, e.g. "pkg.module".
        reporter (Optional[Reporter]): Sink for the result, the process-wide
        reporter when not given.
        config (Optional[Configuration]): Configuration to use instead of the
        global one.
        session (Optional[requests.Session]): HTTP session for the registry
        request.

    Returns:
        bool: True if the version in the source tree is strictly greater
        than the published one, False otherwise.
    """
    sink = reporter if reporter is not None else get_reporter()
    if not isinstance(module_name, str) or not module_name.strip():
        return sink.diag(constants.REASON_NO_MODULE_NAME)

    cfg = config or configuration.configuration
    registry_name = cfg.registry.name
    published = resolve_from_registry(module_name, cfg, session=session)
    local = resolve_from_source(module_name, cfg)
    return _compare(
        module_name,
        local,
        published,
        f"Getting version of '{module_name}' on {registry_name} failed",
        f"{module_name} has greater version than on {registry_name}",
        sink,
    )


has_greater_version_than_pypi = has_greater_version_than_cpan
