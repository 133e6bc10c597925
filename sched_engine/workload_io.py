from __future__ import annotations

import csv
import json
import re
from pathlib import Path
from typing import Iterable, List

from .errors import WorkloadError
from .models import Process

_FIELD_SPLIT = re.compile(r"[,\s]+")


def example_processes() -> List[Process]:
    """
    The canned five-process example set.
    """
    return [
        Process("P1", arrival_time=0, burst_time=6, priority=2),
        Process("P2", arrival_time=1, burst_time=4, priority=1),
        Process("P3", arrival_time=2, burst_time=8, priority=3),
        Process("P4", arrival_time=3, burst_time=3, priority=4),
        Process("P5", arrival_time=5, burst_time=2, priority=5),
    ]


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON, CSV or plain-text file into a list of
    Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)
    if suffix == ".txt":
        return _load_text(path)

    raise WorkloadError(f"Unsupported workload format: {suffix} (use .json, .csv or .txt)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"{path}: not valid JSON ({exc})") from exc

    if not isinstance(raw, Iterable) or isinstance(raw, (str, dict)):
        raise WorkloadError("JSON workload must be a list of process objects")

    processes: List[Process] = []
    for entry in raw:
        processes.append(_process_from_mapping(entry))

    return processes


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _load_text(path: Path) -> List[Process]:
    """
    One process per line: ``pid arrival burst [priority]``. Fields may be
    separated by whitespace or commas; ``#`` starts a comment.
    """
    with path.open("r", encoding="utf-8") as f:
        return parse_process_lines(f)


def parse_process_lines(lines: Iterable[str]) -> List[Process]:
    processes: List[Process] = []
    for lineno, line in enumerate(lines, start=1):
        line = line.split("#", 1)[0].strip()
        if not line:
            continue

        fields = [f for f in _FIELD_SPLIT.split(line) if f]
        if len(fields) not in (3, 4):
            raise WorkloadError(f"line {lineno}: expected 'pid arrival burst [priority]', got {line!r}")

        mapping = dict(zip(("pid", "arrival_time", "burst_time", "priority"), fields))
        try:
            processes.append(_process_from_mapping(mapping))
        except WorkloadError as exc:
            raise WorkloadError(f"line {lineno}: {exc}") from exc

    return processes


def _to_int(value) -> int:
    """
    Convert a field to int. Text goes through ``int()``; numbers parsed from
    JSON must already be whole, so 2.7 is refused instead of truncated.
    """
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    return int(value)


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"])
        arrival_time = _to_int(mapping["arrival_time"])
        burst_time = _to_int(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid process entry: {mapping!r}") from exc

    priority_val = mapping.get("priority")
    try:
        priority = _to_int(priority_val) if priority_val not in (None, "") else None
    except (TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid priority in process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
