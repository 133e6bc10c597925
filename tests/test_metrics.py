import pytest

from sched_engine.algorithms import schedule
from sched_engine.metrics import derive_process_metrics, summarize_process_metrics
from sched_engine.models import Process, ScheduledSlice


def test_derive_uses_first_and_last_slices():
    procs = [Process("A", 0, 3), Process("B", 1, 2)]
    timeline = [
        ScheduledSlice("A", 0, 1),
        ScheduledSlice("B", 1, 3),
        ScheduledSlice(None, 3, 4),
        ScheduledSlice("A", 4, 6),
    ]
    a, b = derive_process_metrics(procs, timeline)
    assert (a.start_time, a.completion_time, a.turnaround_time, a.waiting_time, a.response_time) == (0, 6, 6, 3, 0)
    assert (b.start_time, b.completion_time, b.turnaround_time, b.waiting_time, b.response_time) == (1, 3, 2, 0, 0)


def test_system_metrics_exclude_idle_time():
    res = schedule([Process("P1", 0, 2), Process("P2", 6, 2)], "fcfs")
    sys = res.system
    assert sys.makespan == 8
    assert sys.cpu_busy_time == 4
    assert sys.idle_time == 4
    assert sys.cpu_utilization == pytest.approx(0.5)
    assert sys.throughput == pytest.approx(2 / 8)


def test_starvation_count():
    procs = [Process("long", 0, 30), Process("a", 1, 1), Process("b", 1, 1), Process("c", 1, 1)]
    res = schedule(procs, "fcfs")
    # long waits 0, the short jobs wait 29, 30 and 31: nobody exceeds twice the average.
    assert res.system.starvation_count == 0

    res = schedule(procs + [Process("d", 0, 1)], "sjf")
    # The short jobs run first and "long" waits 4 against an average of 1.4.
    assert res.system.starvation_count == 1


def test_summary_averages():
    res = schedule([Process("P1", 0, 5), Process("P2", 2, 3)], "fcfs")
    summary = summarize_process_metrics(res.processes)
    assert summary == {"avg_waiting": 1.5, "avg_turnaround": 5.5, "avg_response": 1.5}


def test_summary_of_nothing():
    assert summarize_process_metrics([]) == {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}


def test_system_metrics_of_empty_run():
    res = schedule([], "fcfs")
    assert res.system.makespan == 0
    assert res.system.throughput == 0.0
    assert res.system.starvation_count == 0
