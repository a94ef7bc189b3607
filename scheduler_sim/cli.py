from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import run
from .errors import InvalidInputError
from .gantt import build_rich_gantt, merge_slices
from .metrics import average_times, compute_system_metrics, idle_intervals, summarize_processes
from .models import Algorithm, Process, ProcessResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2
ALGORITHM_CHOICES = [a.value for a in Algorithm]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scheduler-sim",
        description="Single-CPU scheduling simulator (FCFS, RR, Priority, SJF, SRTF).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHM_CHOICES)}; case-insensitive).",
    )
    run_parser.add_argument("--workload", "-w", required=True, help="Path to JSON or CSV workload file.")
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for Round Robin (ignored by other algorithms, default: {DEFAULT_QUANTUM}).",
    )
    run_parser.add_argument(
        "--admit-arrivals",
        action="store_true",
        help="Round Robin: admit processes to the queue only once they have arrived.",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Show a simple time-stepped simulation in the terminal.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument("--workload", "-w", required=True, help="Path to JSON or CSV workload file.")
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=ALGORITHM_CHOICES,
        help=f"Algorithms to compare (default: {' '.join(ALGORITHM_CHOICES)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for Round Robin when included (default: {DEFAULT_QUANTUM}).",
    )
    compare_parser.add_argument(
        "--admit-arrivals",
        action="store_true",
        help="Round Robin: admit processes to the queue only once they have arrived.",
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
    )


def _print_result(
    console: Console,
    algorithm: Algorithm,
    quantum: Optional[int],
    processes: Sequence[Process],
    results: Sequence[ProcessResult],
) -> None:
    console.print(f"[bold]Algorithm:[/bold] {algorithm.value}")
    if algorithm is Algorithm.RR:
        console.print(f"[bold]Quantum:[/bold] {quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(results)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = ["ID", "Name", "Arrive", "Burst", "Priority", "Start", "Complete", "Wait", "Turnaround", "Slices"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"ID", "Name"} else "right"
        proc_table.add_column(h, justify=justify)

    for s in summarize_processes(results):
        p = s.process
        proc_table.add_row(
            str(p.id),
            escape(p.name),
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(s.first_start),
            str(s.completion_time),
            str(s.waiting_time),
            str(s.turnaround_time),
            str(s.slices),
        )

    console.print(proc_table)
    console.print()

    averages = average_times(processes, results)
    sys = compute_system_metrics(results)
    idle = ", ".join(f"{start}-{end}" for start, end in idle_intervals(results)) or "none"

    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{averages['avg_waiting']:.2f}")
    sys_table.add_row("Avg turnaround", f"{averages['avg_turnaround']:.2f}")
    sys_table.add_row("Avg response", f"{averages['avg_response']:.2f}")
    sys_table.add_row("Makespan", str(sys.makespan))
    sys_table.add_row("Idle spans", idle)
    sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")
    sys_table.add_row("Context switches", str(sys.context_switches))

    console.print(sys_table)


def _animate_result(console: Console, algorithm: Algorithm, results: Sequence[ProcessResult], delay: float) -> None:
    """
    Simple time-stepped textual simulation using the computed schedule.
    """
    timeline = merge_slices(results)
    if not timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    makespan = max(s.end_time for s in timeline)
    console.print(f"[bold]Simulating {algorithm.value}[/bold] (duration {makespan} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for t in range(makespan):
        running = next((sl for sl in timeline if sl.start_time <= t < sl.end_time), None)
        if running is None:
            console.print(f"t={t:2d}: [dim]idle[/dim]")
        else:
            bar = "#" * (t - running.start_time + 1)
            console.print(f"t={t:2d}: {escape(running.process.name)} [green]{bar}[/green]")
        time.sleep(delay)


def _run_compare(
    console: Console,
    workload_path: Path,
    algorithms: List[str],
    quantum: int,
    admit_arrivals: bool,
) -> None:
    processes = load_workload(workload_path)

    summary_table = Table(title=f"Algorithm comparison: {workload_path}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Makespan", justify="right")

    for name in algorithms:
        alg = Algorithm.parse(name)
        q = quantum if alg is Algorithm.RR else None
        results = run(alg, processes, quantum=q, admit_arrivals=admit_arrivals)
        averages = average_times(processes, results)
        summary_table.add_row(
            alg.value,
            "" if q is None else str(q),
            f"{averages['avg_waiting']:.2f}",
            f"{averages['avg_turnaround']:.2f}",
            f"{averages['avg_response']:.2f}",
            str(compute_system_metrics(results).makespan),
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    console = Console()

    try:
        if args.command == "run":
            algorithm = Algorithm.parse(args.algorithm)
            processes = load_workload(Path(args.workload))
            logger.info("Loaded %d processes from %s", len(processes), args.workload)
            results = run(algorithm, processes, quantum=args.quantum, admit_arrivals=args.admit_arrivals)
            if args.step:
                try:
                    _animate_result(console, algorithm, results, delay=args.step_delay)
                except KeyboardInterrupt:
                    console.print("[yellow]Animation skipped.[/yellow]")
            _print_result(console, algorithm, args.quantum, processes, results)
            return 0

        if args.command == "compare":
            _run_compare(console, Path(args.workload), args.algorithms, args.quantum, args.admit_arrivals)
            return 0
    except (InvalidInputError, ValueError, OSError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
