from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import IDLE_COLOR, PROCESS_COLORS
from .models import ScheduledSlice


def assign_colors(pids: Sequence[str]) -> Dict[str, str]:
    """
    Give each process a colour from the palette by declaration position.
    """
    return {pid: PROCESS_COLORS[idx % len(PROCESS_COLORS)] for idx, pid in enumerate(pids)}


def _time_marks(slices: Sequence[ScheduledSlice]) -> str:
    marks = "0"
    for sl in slices:
        marks += f"{sl.end_time:>3}"
    return marks


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart; idle time is drawn with dots.
    """
    if not slices:
        return "(no execution)"

    line = "|"
    labels = ""

    for sl in slices:
        width = max(1, sl.duration)
        line += ("." if sl.is_idle else "=") * width
        labels += ("" if sl.is_idle else sl.label[:width]).ljust(width)

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            _time_marks(slices),
        ]
    )


def build_rich_gantt(slices: List[ScheduledSlice], pids: Sequence[str] = ()) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.

    ``pids`` fixes the colour order; processes not listed get colours in
    order of first appearance.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    order = list(pids)
    for sl in slices:
        if not sl.is_idle and sl.pid not in order:
            order.append(sl.pid)
    colors = assign_colors(order)

    timeline = Text()
    labels = Text()

    for sl in slices:
        width = max(1, sl.duration)
        color = IDLE_COLOR if sl.is_idle else colors[sl.pid]

        timeline.append(" " * width, style=f"on {color}")
        labels.append(sl.label[:width].ljust(width), style="dim" if sl.is_idle else "bold")

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, _time_marks(slices)
