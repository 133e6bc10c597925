from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .models import Process, ScheduledSlice


class TimelineBuilder:
    """
    Accumulates the slices of one scheduling run.

    The builder owns the simulation clock: every slice starts where the
    previous one ended, so the finished timeline is contiguous from t=0.
    """

    def __init__(self) -> None:
        self.time = 0
        self._slices: List[ScheduledSlice] = []

    def run(self, pid: str, duration: int, merge: bool = False) -> None:
        """
        Give the CPU to ``pid`` for ``duration`` units. With ``merge`` set, a
        slice that continues the previous occupant extends it instead.
        """
        self._append(pid, duration, merge)

    def idle_until(self, time: int) -> None:
        if time > self.time:
            self._append(None, time - self.time, merge=True)

    def _append(self, pid: Optional[str], duration: int, merge: bool) -> None:
        if duration <= 0:
            raise ValueError(f"slice duration must be positive, got {duration}")
        end = self.time + duration
        last = self._slices[-1] if self._slices else None
        if merge and last is not None and last.pid == pid:
            self._slices[-1] = ScheduledSlice(pid=pid, start_time=last.start_time, end_time=end)
        else:
            self._slices.append(ScheduledSlice(pid=pid, start_time=self.time, end_time=end))
        self.time = end

    def build(self) -> List[ScheduledSlice]:
        return list(self._slices)


def busy_time_by_pid(timeline: Sequence[ScheduledSlice]) -> Dict[str, int]:
    totals: Dict[str, int] = {}
    for sl in timeline:
        if not sl.is_idle:
            totals[sl.pid] = totals.get(sl.pid, 0) + sl.duration
    return totals


def timeline_problems(processes: Sequence[Process], timeline: Sequence[ScheduledSlice]) -> List[str]:
    """
    Check a timeline against the process set and describe every broken
    invariant. An empty list means the timeline is consistent.
    """
    problems: List[str] = []

    expected_start = 0
    for idx, sl in enumerate(timeline):
        if sl.end_time <= sl.start_time:
            problems.append(f"slice {idx} ({sl.label}) does not move forward: {sl.start_time}-{sl.end_time}")
        if sl.start_time != expected_start:
            problems.append(f"slice {idx} ({sl.label}) starts at {sl.start_time}, expected {expected_start}")
        expected_start = sl.end_time

    busy = busy_time_by_pid(timeline)
    known = {p.pid for p in processes}
    for p in processes:
        got = busy.get(p.pid, 0)
        if got != p.burst_time:
            problems.append(f"{p.pid} ran for {got} units, burst is {p.burst_time}")
        if any(sl.pid == p.pid and sl.start_time < p.arrival_time for sl in timeline):
            problems.append(f"{p.pid} runs before its arrival at {p.arrival_time}")
    for pid in busy:
        if pid not in known:
            problems.append(f"unknown process {pid} in timeline")

    if timeline and timeline[-1].is_idle:
        problems.append("timeline ends with an idle slice")

    return problems
