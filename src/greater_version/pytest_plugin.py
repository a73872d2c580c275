"""Pytest plugin providing a fresh reporter for every test."""

from typing import Generator

import pytest

from greater_version.reporter import Reporter, set_reporter


@pytest.fixture(name="version_reporter")
def version_reporter_fixture() -> Generator[Reporter, None, None]:
    """Install a new Reporter as the process-wide sink for one test.

    Yields:
        Reporter: The reporter receiving results of checks that are called
        without an explicit reporter. The previous sink is restored afterwards.
    """
    reporter = Reporter()
    previous = set_reporter(reporter)
    yield reporter
    set_reporter(previous)
