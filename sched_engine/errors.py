from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence


class SchedulingError(ValueError):
    """Base class for everything the engine refuses to schedule."""


@dataclass(frozen=True)
class ValidationIssue:
    """
    One problem found in a candidate process set.
    """

    pid: Optional[str]
    kind: str
    message: str

    def __str__(self) -> str:
        if self.pid is None:
            return self.message
        return f"{self.pid}: {self.message}"


class InvalidProcessSet(SchedulingError):
    """
    The process set cannot be scheduled. ``issues`` lists every offending
    process, not only the first one.
    """

    def __init__(self, issues: Sequence[ValidationIssue]):
        self.issues: List[ValidationIssue] = list(issues)
        super().__init__("; ".join(str(i) for i in self.issues) or "invalid process set")

    @property
    def pids(self) -> List[str]:
        return [i.pid for i in self.issues if i.pid is not None]


class InvalidBurst(InvalidProcessSet):
    pass


class InvalidArrival(InvalidProcessSet):
    pass


class DuplicateProcessId(InvalidProcessSet):
    pass


class InvalidQuantum(SchedulingError):
    pass


class UnknownAlgorithm(SchedulingError):
    pass


class WorkloadError(ValueError):
    """A workload file could not be read into processes."""


# Most severe first.
_ISSUE_ERRORS = [
    ("burst", InvalidBurst),
    ("arrival", InvalidArrival),
    ("duplicate_pid", DuplicateProcessId),
]


def error_for_issues(issues: Sequence[ValidationIssue]) -> InvalidProcessSet:
    """
    Build the exception for a non-empty list of issues. The class follows the
    most severe kind present, wherever it sits in the list; all issues are
    attached.
    """
    kinds = {i.kind for i in issues}
    for kind, cls in _ISSUE_ERRORS:
        if kind in kinds:
            return cls(issues)
    return InvalidProcessSet(issues)
