"""
CPU scheduling engine.

Computes the CPU timeline and per-process statistics for FCFS, SJF, SRTF,
Round Robin and Priority scheduling, plus a small command-line front end
for inspecting the results.
"""

from .algorithms import Algorithm, schedule
from .errors import (
    DuplicateProcessId,
    InvalidArrival,
    InvalidBurst,
    InvalidProcessSet,
    InvalidQuantum,
    SchedulingError,
    UnknownAlgorithm,
    WorkloadError,
)
from .models import Process, ProcessMetrics, ScheduledSlice, ScheduleResult, SystemMetrics

__all__ = [
    "Algorithm",
    "schedule",
    "Process",
    "ProcessMetrics",
    "ScheduledSlice",
    "ScheduleResult",
    "SystemMetrics",
    "SchedulingError",
    "InvalidProcessSet",
    "InvalidBurst",
    "InvalidArrival",
    "DuplicateProcessId",
    "InvalidQuantum",
    "UnknownAlgorithm",
    "WorkloadError",
]
