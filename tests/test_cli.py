from pathlib import Path

from sched_engine.cli import build_parser, main


def test_run_example(capsys):
    assert main(["run", "-a", "srtf", "--example"]) == 0
    out = capsys.readouterr().out
    assert "Algorithm: SRTF" in out
    assert "Per-process metrics" in out
    assert "System metrics" in out
    assert "P5" in out


def test_run_round_robin_workload(tmp_path: Path, capsys):
    wl = tmp_path / "w.txt"
    wl.write_text("P1 0 5\nP2 1 3\nP3 2 1\n")
    assert main(["run", "-a", "rr", "-q", "4", "-w", str(wl)]) == 0
    out = capsys.readouterr().out
    assert "Quantum: 4" in out
    assert "0  4  7  8  9" in out


def test_run_reports_invalid_processes(tmp_path: Path, capsys):
    wl = tmp_path / "w.csv"
    wl.write_text("pid,arrival_time,burst_time\nA,0,0\nB,1,2\nC,-1,4\n")
    assert main(["run", "-a", "fcfs", "-w", str(wl)]) == 2
    out = capsys.readouterr().out
    assert "Invalid process set" in out
    assert "A: burst time" in out
    assert "C: arrival time" in out


def test_run_round_robin_without_quantum(capsys):
    assert main(["run", "-a", "rr", "--example"]) == 2
    assert "quantum" in capsys.readouterr().out


def test_unknown_algorithm(capsys):
    assert main(["run", "-a", "lottery", "--example"]) == 2
    assert "Unknown algorithm" in capsys.readouterr().out


def test_missing_workload_file(tmp_path: Path, capsys):
    assert main(["run", "-a", "fcfs", "-w", str(tmp_path / "missing.json")]) == 2
    assert "Error" in capsys.readouterr().out


def test_compare(capsys):
    assert main(["compare", "--example", "-q", "3"]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out
    for label in ("FCFS", "SJF", "SRTF", "Round Robin", "Priority"):
        assert label in out


def test_algorithms_listing(capsys):
    assert main(["algorithms"]) == 0
    out = capsys.readouterr().out
    assert "srtf" in out
    assert "Preemptive" in out


def test_step_replay(capsys):
    assert main(["run", "-a", "fcfs", "--example", "--step", "--step-delay", "0"]) == 0
    out = capsys.readouterr().out
    assert "t= 0: P1" in out
    assert "t=22: P5" in out


def test_parser_requires_a_workload_source():
    parser = build_parser()
    args = parser.parse_args(["--log-level", "debug", "run", "-a", "sjf", "--example"])
    assert args.log_level == "DEBUG"
    assert args.example
