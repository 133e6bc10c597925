from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Callable, Deque, Dict, Iterable, List, Optional, Union

from .errors import UnknownAlgorithm
from .metrics import compute_system_metrics, derive_process_metrics
from .models import Process, ScheduledSlice, ScheduleResult
from .timeline import TimelineBuilder, timeline_problems
from .validation import ensure_valid, validate_quantum

logger = logging.getLogger(__name__)


class Algorithm(str, Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    SRTF = "srtf"
    ROUND_ROBIN = "rr"
    PRIORITY = "priority"

    @property
    def label(self) -> str:
        return _INFO[self][0]

    @property
    def description(self) -> str:
        return _INFO[self][1]

    @property
    def preemptive(self) -> bool:
        return self in (Algorithm.SRTF, Algorithm.ROUND_ROBIN)

    @property
    def uses_quantum(self) -> bool:
        return self is Algorithm.ROUND_ROBIN

    @classmethod
    def parse(cls, name: Union[str, "Algorithm"]) -> "Algorithm":
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("-", "_")
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise UnknownAlgorithm(f"Unknown algorithm '{name}' (choose from {choices})") from None


_INFO = {
    Algorithm.FCFS: ("FCFS", "First Come First Served"),
    Algorithm.SJF: ("SJF", "Shortest Job First (non-preemptive)"),
    Algorithm.SRTF: ("SRTF", "Shortest Remaining Time First (preemptive)"),
    Algorithm.ROUND_ROBIN: ("Round Robin", "Round Robin (configurable quantum)"),
    Algorithm.PRIORITY: ("Priority", "Priority, non-preemptive (lower = higher priority)"),
}

_ALIASES = {
    "round_robin": "rr",
    "roundrobin": "rr",
    "first_come_first_served": "fcfs",
    "shortest_job_first": "sjf",
    "shortest_remaining_time_first": "srtf",
}


def _declaration_order(processes: Iterable[Process]) -> Dict[str, int]:
    return {p.pid: idx for idx, p in enumerate(processes)}


def fcfs_timeline(processes: List[Process], quantum: Optional[int] = None) -> List[ScheduledSlice]:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    order = _declaration_order(processes)
    processes_sorted = sorted(processes, key=lambda p: (p.arrival_time, order[p.pid]))

    timeline = TimelineBuilder()
    for p in processes_sorted:
        timeline.idle_until(p.arrival_time)
        timeline.run(p.pid, p.burst_time)

    return timeline.build()


def _non_preemptive_timeline(processes: List[Process], key: Callable[[Process], int]) -> List[ScheduledSlice]:
    """
    Whenever the CPU becomes free, run the arrived process with the smallest
    ``(key, arrival, declaration index)`` to completion.
    """
    order = _declaration_order(processes)
    pending: List[Process] = list(processes)
    timeline = TimelineBuilder()

    while pending:
        ready = [p for p in pending if p.arrival_time <= timeline.time]

        if not ready:
            timeline.idle_until(min(p.arrival_time for p in pending))
            continue

        p = min(ready, key=lambda x: (key(x), x.arrival_time, order[x.pid]))
        timeline.run(p.pid, p.burst_time)
        pending.remove(p)

    return timeline.build()


def sjf_timeline(processes: List[Process], quantum: Optional[int] = None) -> List[ScheduledSlice]:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. A shorter job
    arriving mid-run waits for the running one to finish.
    """
    return _non_preemptive_timeline(processes, key=lambda p: p.burst_time)


def priority_timeline(processes: List[Process], quantum: Optional[int] = None) -> List[ScheduledSlice]:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority; processes without a
    priority use the configured default.
    """
    return _non_preemptive_timeline(processes, key=lambda p: p.effective_priority)


def srtf_timeline(processes: List[Process], quantum: Optional[int] = None) -> List[ScheduledSlice]:
    """
    Shortest Remaining Time First (preemptive SJF).

    The choice can only change when a process arrives or finishes, so the
    chosen process runs until the next of those events. Back-to-back runs of
    the same process are merged into one slice.
    """
    order = _declaration_order(processes)
    remaining = {p.pid: p.burst_time for p in processes}
    timeline = TimelineBuilder()

    def next_arrival_after(t: int) -> Optional[int]:
        future = [p.arrival_time for p in processes if p.arrival_time > t and remaining[p.pid] > 0]
        return min(future) if future else None

    while any(rt > 0 for rt in remaining.values()):
        ready = [p for p in processes if p.arrival_time <= timeline.time and remaining[p.pid] > 0]
        if not ready:
            timeline.idle_until(next_arrival_after(timeline.time))
            continue

        # Smallest remaining time; tie: earlier arrival, then declaration order.
        current = min(ready, key=lambda p: (remaining[p.pid], p.arrival_time, order[p.pid]))

        nxt_arrival = next_arrival_after(timeline.time)
        if nxt_arrival is None:
            run_time = remaining[current.pid]
        else:
            run_time = min(remaining[current.pid], nxt_arrival - timeline.time)

        timeline.run(current.pid, run_time, merge=True)
        remaining[current.pid] -= run_time

    return timeline.build()


def rr_timeline(processes: List[Process], quantum: Optional[int] = None) -> List[ScheduledSlice]:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes arriving during a slice join the ready queue before the
    preempted process goes back to its tail.
    """
    quantum = validate_quantum(quantum)
    order = _declaration_order(processes)

    arrivals: Deque[Process] = deque(sorted(processes, key=lambda p: (p.arrival_time, order[p.pid])))
    remaining = {p.pid: p.burst_time for p in processes}
    ready: Deque[Process] = deque()
    timeline = TimelineBuilder()

    def enqueue_new_arrivals(current_time: int) -> None:
        while arrivals and arrivals[0].arrival_time <= current_time:
            ready.append(arrivals.popleft())

    enqueue_new_arrivals(timeline.time)

    while ready or arrivals:
        if not ready:
            timeline.idle_until(arrivals[0].arrival_time)
            enqueue_new_arrivals(timeline.time)
            continue

        p = ready.popleft()
        run_time = min(quantum, remaining[p.pid])
        timeline.run(p.pid, run_time)
        remaining[p.pid] -= run_time

        enqueue_new_arrivals(timeline.time)

        if remaining[p.pid] > 0:
            ready.append(p)

    return timeline.build()


ALGORITHMS: Dict[Algorithm, Callable[[List[Process], Optional[int]], List[ScheduledSlice]]] = {
    Algorithm.FCFS: fcfs_timeline,
    Algorithm.SJF: sjf_timeline,
    Algorithm.SRTF: srtf_timeline,
    Algorithm.ROUND_ROBIN: rr_timeline,
    Algorithm.PRIORITY: priority_timeline,
}


def schedule(
    processes: Iterable[Process],
    algorithm: Union[str, Algorithm],
    quantum: Optional[int] = None,
) -> ScheduleResult:
    """
    Validate the process set, run the requested algorithm and derive the
    per-process and system metrics from its timeline.

    ``quantum`` is required for Round Robin and ignored otherwise. Invalid
    input raises a ``SchedulingError`` before any timeline is built.
    """
    algorithm = Algorithm.parse(algorithm)
    processes = list(processes)

    ensure_valid(processes)
    quantum = validate_quantum(quantum) if algorithm.uses_quantum else None

    logger.debug("Scheduling %d processes with %s (quantum=%s)", len(processes), algorithm.label, quantum)

    timeline = ALGORITHMS[algorithm](processes, quantum)
    if logger.isEnabledFor(logging.DEBUG):
        for problem in timeline_problems(processes, timeline):
            logger.debug("%s timeline check: %s", algorithm.label, problem)
    metrics = derive_process_metrics(processes, timeline)

    result = ScheduleResult(algorithm=algorithm, quantum=quantum, processes=metrics, timeline=timeline)
    compute_system_metrics(result)

    logger.debug("%s finished at t=%d in %d slices", algorithm.label, result.system.makespan, len(timeline))
    return result
