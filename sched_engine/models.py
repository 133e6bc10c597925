from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from .config import DEFAULT_PRIORITY

if TYPE_CHECKING:
    from .algorithms import Algorithm

IDLE_LABEL = "Idle"


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: Optional[int] = None

    @property
    def effective_priority(self) -> int:
        return DEFAULT_PRIORITY if self.priority is None else self.priority


@dataclass(frozen=True)
class ScheduledSlice:
    """
    One contiguous slice of the CPU timeline. ``pid`` is None while the CPU
    sits idle.
    """

    pid: Optional[str]
    start_time: int
    end_time: int

    @property
    def is_idle(self) -> bool:
        return self.pid is None

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def label(self) -> str:
        return IDLE_LABEL if self.pid is None else self.pid


@dataclass
class ProcessMetrics:
    pid: str
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: Optional[int] = None


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    idle_time: int = 0
    starvation_count: int = 0


@dataclass
class ScheduleResult:
    algorithm: "Algorithm"
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None

    def metrics_for(self, pid: str) -> ProcessMetrics:
        for m in self.processes:
            if m.pid == pid:
                return m
        raise KeyError(pid)
