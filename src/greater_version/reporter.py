"""Record assertion results and diagnostics of version checks."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from greater_version.log import get_tap_logger
from greater_version.models.resolution import Resolution


class Outcome(str, Enum):
    """Kind of a recorded result."""

    PASS = "pass"
    FAIL = "fail"
    DIAGNOSTIC = "diagnostic"


@dataclass(frozen=True)
class Record:
    """One entry of the reporter.

    Assertions are numbered from 1 in the order they were recorded,
    diagnostics carry no number.
    """

    outcome: Outcome
    message: str
    number: Optional[int] = None


class Reporter:
    """Append-only sink for the results of version checks.

    A diagnostic means "could not evaluate" and is not an assertion failure:
    it does not count as failed, but it makes the check return False.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        """Initialize an empty reporter.

        Parameters:
            logger (Optional[logging.Logger]): Logger every record is emitted
            to; a TAP-style Rich console logger when not given.
        """
        self._records: list[Record] = []
        self._assertions = 0
        self._logger = logger if logger is not None else get_tap_logger(__name__)

    def record(self, outcome: Outcome, message: str) -> Record:
        """Append a record and emit it on the logger."""
        number = None
        if outcome is not Outcome.DIAGNOSTIC:
            self._assertions += 1
            number = self._assertions
        entry = Record(outcome=outcome, message=message, number=number)
        self._records.append(entry)

        if outcome is Outcome.PASS:
            self._logger.info("ok %d - %s", number, message)
        elif outcome is Outcome.FAIL:
            self._logger.warning("not ok %d - %s", number, message)
        else:
            self._logger.warning("%s", message)
        return entry

    def ok(self, condition: bool, description: str) -> bool:
        """Record a passed or failed assertion and return its result."""
        passed = bool(condition)
        self.record(Outcome.PASS if passed else Outcome.FAIL, description)
        return passed

    def diag(self, message: str) -> bool:
        """Record a diagnostic; always returns False."""
        self.record(Outcome.DIAGNOSTIC, message)
        return False

    def report(self, condition: Union[bool, Resolution], description: str) -> bool:
        """
        Record the result of a check.

        Parameters:
            condition (bool | Resolution): Result of the comparison, or a
            resolution without a version, which is recorded as a diagnostic
            carrying its reason instead of an assertion.
            description (str): Assertion description, or the diagnostic
            message prefix for absence results.

        Returns:
            bool: The assertion result, False for diagnostics.
        """
        if isinstance(condition, Resolution):
            if condition:
                raise TypeError(
                    "A found version is not a check result, compare it first"
                )
            return self.diag(f"{description}: {condition.reason}")
        return self.ok(condition, description)

    @property
    def records(self) -> tuple[Record, ...]:
        """Return all records in the order they were recorded."""
        return tuple(self._records)

    @property
    def passed(self) -> list[Record]:
        """Return passed assertions."""
        return [r for r in self._records if r.outcome is Outcome.PASS]

    @property
    def failed(self) -> list[Record]:
        """Return failed assertions."""
        return [r for r in self._records if r.outcome is Outcome.FAIL]

    @property
    def diagnostics(self) -> list[Record]:
        """Return diagnostics."""
        return [r for r in self._records if r.outcome is Outcome.DIAGNOSTIC]

    @property
    def is_passing(self) -> bool:
        """Check that at least one assertion ran and none of them failed."""
        return self._assertions > 0 and not self.failed

    def as_tap(self) -> str:
        """Render the records in Test Anything Protocol format."""
        lines = []
        for entry in self._records:
            if entry.outcome is Outcome.PASS:
                lines.append(f"ok {entry.number} - {entry.message}")
            elif entry.outcome is Outcome.FAIL:
                lines.append(f"not ok {entry.number} - {entry.message}")
            else:
                lines.extend(f"# {line}" for line in entry.message.splitlines())
        lines.append(f"1..{self._assertions}")
        return "\n".join(lines) + "\n"


_default_reporter: Optional[Reporter] = None


def get_reporter() -> Reporter:
    """Return the process-wide reporter, creating it on first use."""
    global _default_reporter  # pylint: disable=global-statement
    if _default_reporter is None:
        _default_reporter = Reporter()
    return _default_reporter


def set_reporter(reporter: Optional[Reporter]) -> Optional[Reporter]:
    """Replace the process-wide reporter and return the previous one."""
    global _default_reporter  # pylint: disable=global-statement
    previous = _default_reporter
    _default_reporter = reporter
    return previous


def reset_reporter() -> None:
    """Drop the process-wide reporter; a new one is created on next use."""
    set_reporter(None)
