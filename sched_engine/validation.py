from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Set

from .errors import InvalidQuantum, ValidationIssue, error_for_issues
from .models import Process

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Sequence[Process]) -> List[ValidationIssue]:
    """
    Return every problem in the process set, in declaration order.

    An empty list of processes is valid; it schedules to an empty timeline.
    """
    issues: List[ValidationIssue] = []
    seen: Set[str] = set()

    for p in processes:
        if not _is_int(p.burst_time) or p.burst_time <= 0:
            issues.append(ValidationIssue(p.pid, "burst", f"burst time must be a positive integer, got {p.burst_time!r}"))
        if not _is_int(p.arrival_time) or p.arrival_time < 0:
            issues.append(
                ValidationIssue(p.pid, "arrival", f"arrival time must be a non-negative integer, got {p.arrival_time!r}")
            )
        if p.priority is not None and not _is_int(p.priority):
            issues.append(ValidationIssue(p.pid, "priority", f"priority must be an integer, got {p.priority!r}"))
        if p.pid in seen:
            issues.append(ValidationIssue(p.pid, "duplicate_pid", "process id is used more than once"))
        seen.add(p.pid)

    return issues


def ensure_valid(processes: Sequence[Process]) -> None:
    issues = validate_processes(processes)
    if issues:
        logger.debug("Rejected process set: %s", "; ".join(str(i) for i in issues))
        raise error_for_issues(issues)


def validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None:
        raise InvalidQuantum("Round Robin requires a quantum (use --quantum)")
    if not _is_int(quantum) or quantum < 1:
        raise InvalidQuantum(f"Round Robin requires a positive integer quantum, got {quantum!r}")
    return quantum
