from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import Algorithm, schedule
from .config import DEFAULT_COMPARE_ALGORITHMS, DEFAULT_LOG_LEVEL, DEFAULT_QUANTUM, DEFAULT_STEP_DELAY
from .errors import InvalidProcessSet, SchedulingError, WorkloadError
from .gantt import build_rich_gantt
from .metrics import summarize_process_metrics
from .models import Process, ScheduleResult
from .workload_io import example_processes, load_workload

logger = logging.getLogger(__name__)


def _add_workload_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON, CSV or text workload file.",
    )
    source.add_argument(
        "--example",
        action="store_true",
        help="Use the built-in five-process example set.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sched-engine",
        description="CPU scheduling engine (FCFS, SJF, SRTF, RR, Priority).",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"Logging verbosity (default: {DEFAULT_LOG_LEVEL}).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help="Algorithm to use (fcfs, sjf, srtf, rr, priority).",
    )
    _add_workload_args(run_parser)
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by the other algorithms).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Replay the computed timeline one time unit at a time.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=DEFAULT_STEP_DELAY,
        help=f"Seconds to wait between steps when --step is used (default: {DEFAULT_STEP_DELAY}).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    _add_workload_args(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(DEFAULT_COMPARE_ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(DEFAULT_COMPARE_ALGORITHMS)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    subparsers.add_parser("algorithms", help="List the available scheduling algorithms.")

    return parser


def _configure_logging(level: str, console: Console) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_processes(args: argparse.Namespace) -> List[Process]:
    if args.example:
        return example_processes()
    return load_workload(Path(args.workload))


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm.label}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline, [p.pid for p in result.processes])
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Complete",
        "Turnaround",
        "Wait",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY, show_footer=True)
    summary = summarize_process_metrics(result.processes)
    footers = {
        "Complete": "Averages:",
        "Turnaround": f"{summary['avg_turnaround']:.2f}",
        "Wait": f"{summary['avg_waiting']:.2f}",
        "Response": f"{summary['avg_response']:.2f}",
    }
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify, footer=footers.get(h, ""))

    for p in result.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            "" if p.priority is None else str(p.priority),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Idle time", str(sys.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")
        sys_table.add_row("Starvation count", str(sys.starvation_count))

        console.print(sys_table)


def _print_compare(processes: List[Process], algorithms: List[str], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for alg in algorithms:
        result = schedule(processes, alg, quantum=quantum)
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.algorithm.label,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
        )

    console.print(summary_table)


def _print_algorithms(console: Console) -> None:
    table = Table(title="Algorithms", box=box.SIMPLE_HEAVY)
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("Preemptive", justify="center")
    for alg in Algorithm:
        table.add_row(alg.value, alg.description, "yes" if alg.preemptive else "no")
    console.print(table)


def _animate_result(result: ScheduleResult, delay: float, console: Console) -> None:
    """
    Replay an already computed timeline one time unit per step.
    """
    if not result.timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    makespan = result.timeline[-1].end_time
    console.print(f"[bold]Simulating {result.algorithm.label}[/bold] (duration {makespan} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for sl in result.timeline:
        for t in range(sl.start_time, sl.end_time):
            if sl.is_idle:
                console.print(f"t={t:2d}: [dim]idle[/dim]")
            else:
                bar = "█" * (t - sl.start_time + 1)
                console.print(f"t={t:2d}: {sl.pid} [green]{bar}[/green]")
            time.sleep(delay)


def _report_error(exc: Exception, console: Console) -> None:
    if isinstance(exc, InvalidProcessSet):
        console.print("[red]Invalid process set:[/red]")
        for issue in exc.issues:
            console.print(f"[red]  - {issue}[/red]")
    else:
        console.print(f"[red]Error: {exc}[/red]")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    _configure_logging(args.log_level, console)

    if args.command == "algorithms":
        _print_algorithms(console)
        return 0

    try:
        processes = _load_processes(args)

        if args.command == "run":
            result = schedule(processes, args.algorithm, quantum=args.quantum)
            if args.step:
                try:
                    _animate_result(result, args.step_delay, console)
                except KeyboardInterrupt:
                    console.print("[yellow]Animation skipped.[/yellow]")
            _print_result(result, console)
            return 0

        if args.command == "compare":
            _print_compare(processes, args.algorithms, args.quantum, console)
            return 0
    except (SchedulingError, WorkloadError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        _report_error(exc, console)
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
