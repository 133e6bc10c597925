"""
Defaults shared by the engine and the command-line front end.
"""

from __future__ import annotations

from typing import List

# Priority used when a process does not specify one. Lower is more urgent.
DEFAULT_PRIORITY = 0

DEFAULT_QUANTUM = 2
DEFAULT_STEP_DELAY = 0.3
DEFAULT_LOG_LEVEL = "WARNING"

DEFAULT_COMPARE_ALGORITHMS: List[str] = ["fcfs", "sjf", "srtf", "rr", "priority"]

# A process counts as starved when its waiting time exceeds this multiple
# of the average waiting time.
STARVATION_FACTOR = 2

PROCESS_COLORS: List[str] = [
    "#0066cc",
    "#10b981",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#ec4899",
    "#14b8a6",
    "#f97316",
    "#6366f1",
    "#84cc16",
]
IDLE_COLOR = "#6b7280"
