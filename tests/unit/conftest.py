"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Generator

import pytest

from greater_version.configuration import configuration
from greater_version.models.config import Configuration
from greater_version.reporter import Reporter

# also available through the pytest11 entry point once the package is installed
from greater_version.pytest_plugin import (  # noqa: F401  # pylint: disable=unused-import
    version_reporter_fixture,
)

type SourceTreeFactory = Callable[[str, str], Path]
type DistributionFactory = Callable[[Path, str, str | None], Path]


@pytest.fixture(autouse=True)
def reset_configuration() -> Generator[None, None, None]:
    """Make every test start with the default configuration."""
    configuration.reset()
    yield
    configuration.reset()


@pytest.fixture(name="reporter")
def reporter_fixture() -> Reporter:
    """Return a reporter logging to a propagating logger, so caplog sees it."""
    return Reporter(logger=logging.getLogger("tests.reporter"))


@pytest.fixture(name="project_config")
def project_config_fixture(tmp_path: Path) -> Configuration:
    """Return a configuration with the project root in a temporary directory."""
    return Configuration(source={"project_root": tmp_path})  # type: ignore[arg-type]


@pytest.fixture(name="write_source")
def write_source_fixture(tmp_path: Path) -> SourceTreeFactory:
    """Return a factory writing a file under <tmp_path>/lib.

    The factory takes a relative path ("pkg/module.py") and the file content
    and returns the path of the written file.
    """

    def write(relative: str, content: str) -> Path:
        path = tmp_path / "lib" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return write


@pytest.fixture(name="make_distribution")
def make_distribution_fixture() -> DistributionFactory:
    """Return a factory creating installed distribution metadata.

    The factory takes a site directory, a distribution name and a version
    (None for metadata without a version) and returns the dist-info path.
    """

    def make(site: Path, name: str, version: str | None) -> Path:
        dist_info = site / f"{name}-{version or '0'}.dist-info"
        dist_info.mkdir(parents=True, exist_ok=True)
        lines = ["Metadata-Version: 2.1", f"Name: {name}"]
        if version is not None:
            lines.append(f"Version: {version}")
        (dist_info / "METADATA").write_text("\n".join(lines) + "\n", encoding="utf-8")
        return dist_info

    return make
