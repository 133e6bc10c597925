from __future__ import annotations

from typing import Dict, List, Sequence

from .config import STARVATION_FACTOR
from .models import Process, ProcessMetrics, ScheduledSlice, ScheduleResult, SystemMetrics


def derive_process_metrics(processes: Sequence[Process], timeline: Sequence[ScheduledSlice]) -> List[ProcessMetrics]:
    """
    Turn a finished timeline into per-process metrics, in declaration order.

    The formulas are the same for every algorithm:

    - completion: end of the process's last slice
    - turnaround: completion - arrival
    - waiting: turnaround - burst
    - response: start of the process's first slice - arrival
    """
    first_start: Dict[str, int] = {}
    last_end: Dict[str, int] = {}
    for sl in timeline:
        if sl.is_idle:
            continue
        first_start.setdefault(sl.pid, sl.start_time)
        last_end[sl.pid] = sl.end_time

    metrics: List[ProcessMetrics] = []
    for p in processes:
        start_time = first_start[p.pid]
        completion_time = last_end[p.pid]
        turnaround_time = completion_time - p.arrival_time
        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=start_time,
                completion_time=completion_time,
                waiting_time=turnaround_time - p.burst_time,
                turnaround_time=turnaround_time,
                response_time=start_time - p.arrival_time,
                priority=p.priority,
            )
        )
    return metrics


def _ratio(numerator: float, makespan: int) -> float:
    return numerator / makespan if makespan > 0 else 0.0


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Attach whole-run figures to ``result``. The makespan is the end of the
    last slice and busy time excludes idle slices, so both come straight from
    the timeline; starvation uses the derived waiting times.
    """
    makespan = result.timeline[-1].end_time if result.timeline else 0
    cpu_busy_time = sum(sl.duration for sl in result.timeline if not sl.is_idle)

    starvation_count = 0
    if result.processes:
        threshold = STARVATION_FACTOR * summarize_process_metrics(result.processes)["avg_waiting"]
        starvation_count = sum(1 for p in result.processes if p.waiting_time > threshold)

    result.system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=_ratio(len(result.processes), makespan),
        cpu_utilization=_ratio(cpu_busy_time, makespan),
        idle_time=makespan - cpu_busy_time,
        starvation_count=starvation_count,
    )
    return result.system


def summarize_process_metrics(processes: Sequence[ProcessMetrics]) -> Dict[str, float]:
    """
    Average waiting, turnaround and response time; all zero for an empty run.
    """
    fields = {"avg_waiting": "waiting_time", "avg_turnaround": "turnaround_time", "avg_response": "response_time"}
    if not processes:
        return {key: 0.0 for key in fields}
    return {key: sum(getattr(p, attr) for p in processes) / len(processes) for key, attr in fields.items()}
