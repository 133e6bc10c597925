import logging

import pytest

from sched_engine.algorithms import ALGORITHMS, Algorithm, schedule
from sched_engine.models import Process, ScheduledSlice
from sched_engine.timeline import busy_time_by_pid, timeline_problems
from sched_engine.workload_io import example_processes

WORKLOADS = {
    "example": example_processes(),
    "single": [Process("solo", 4, 3)],
    "same_arrival": [Process("A", 0, 3), Process("B", 0, 3), Process("C", 0, 3)],
    "gaps": [Process("P1", 1, 2, 3), Process("P2", 9, 4, 1), Process("P3", 9, 1, 2), Process("P4", 20, 5)],
    "burst_heavy": [Process("L", 0, 20, 5), Process("S1", 2, 1, 1), Process("S2", 3, 2, 1), Process("S3", 18, 1, 0)],
}

ALGORITHM_RUNS = [
    (Algorithm.FCFS, None),
    (Algorithm.SJF, None),
    (Algorithm.SRTF, None),
    (Algorithm.ROUND_ROBIN, 1),
    (Algorithm.ROUND_ROBIN, 3),
    (Algorithm.PRIORITY, None),
]


@pytest.fixture(params=sorted(WORKLOADS))
def workload(request):
    return WORKLOADS[request.param]


@pytest.mark.parametrize("algorithm,quantum", ALGORITHM_RUNS)
def test_timeline_is_consistent(workload, algorithm, quantum):
    res = schedule(workload, algorithm, quantum=quantum)
    assert timeline_problems(workload, res.timeline) == []


@pytest.mark.parametrize("algorithm,quantum", ALGORITHM_RUNS)
def test_busy_time_is_conserved(workload, algorithm, quantum):
    res = schedule(workload, algorithm, quantum=quantum)
    busy = busy_time_by_pid(res.timeline)
    assert busy == {p.pid: p.burst_time for p in workload}
    assert res.system.cpu_busy_time == sum(p.burst_time for p in workload)
    assert res.system.makespan == res.timeline[-1].end_time


@pytest.mark.parametrize("algorithm,quantum", ALGORITHM_RUNS)
def test_metric_identities(workload, algorithm, quantum):
    res = schedule(workload, algorithm, quantum=quantum)
    for m in res.processes:
        assert m.turnaround_time == m.completion_time - m.arrival_time
        assert m.waiting_time == m.turnaround_time - m.burst_time
        assert m.response_time == m.start_time - m.arrival_time
        assert 0 <= m.response_time <= m.waiting_time
    assert max(m.completion_time for m in res.processes) == res.system.makespan


@pytest.mark.parametrize("algorithm,quantum", ALGORITHM_RUNS)
def test_schedule_is_idempotent(workload, algorithm, quantum):
    first = schedule(workload, algorithm, quantum=quantum)
    second = schedule(list(workload), algorithm, quantum=quantum)
    assert first == second
    assert repr(first) == repr(second)


@pytest.mark.parametrize("algorithm", list(Algorithm))
def test_empty_process_set_is_a_no_op(algorithm):
    res = schedule([], algorithm, quantum=2)
    assert res.timeline == []
    assert res.processes == []
    assert res.system.makespan == 0
    assert res.system.cpu_busy_time == 0


@pytest.mark.parametrize("algorithm", [Algorithm.FCFS, Algorithm.SJF, Algorithm.PRIORITY])
def test_non_preemptive_algorithms_run_each_process_once(workload, algorithm):
    res = schedule(workload, algorithm)
    pids = [s.pid for s in res.timeline if not s.is_idle]
    assert sorted(pids) == sorted(p.pid for p in workload)
    for m in res.processes:
        assert m.waiting_time == m.response_time


def test_generator_input_is_accepted():
    res = schedule((p for p in example_processes()), "fcfs")
    assert len(res.processes) == 5


def test_timeline_problems_reports_broken_timelines():
    procs = [Process("A", 2, 3), Process("B", 0, 1)]
    broken = [
        ScheduledSlice("A", 0, 2),
        ScheduledSlice("B", 3, 4),
        ScheduledSlice(None, 4, 5),
    ]
    problems = timeline_problems(procs, broken)
    assert "slice 1 (B) starts at 3, expected 2" in problems
    assert "A ran for 2 units, burst is 3" in problems
    assert "A runs before its arrival at 2" in problems
    assert "timeline ends with an idle slice" in problems


def test_schedule_checks_its_timeline_when_debugging(caplog):
    caplog.set_level(logging.DEBUG, logger="sched_engine.algorithms")
    schedule(example_processes(), "rr", quantum=2)
    assert "Round Robin finished at t=23" in caplog.text
    assert "timeline check" not in caplog.text


def test_schedule_logs_timeline_problems(caplog, monkeypatch):
    caplog.set_level(logging.DEBUG, logger="sched_engine.algorithms")
    monkeypatch.setitem(ALGORITHMS, Algorithm.FCFS, lambda processes, quantum: [ScheduledSlice("P1", 0, 2)])
    schedule([Process("P1", 0, 3)], "fcfs")
    assert "FCFS timeline check: P1 ran for 2 units, burst is 3" in caplog.text
