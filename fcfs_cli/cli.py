from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import run_algorithm
from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize_process_metrics
from .models import SchedulingResult
from .validation import MAX_BURST, ProcessEntry, validate_processes
from .workload_io import dump_result, load_workload

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 5


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fcfs-cli",
        description="First-Come First-Serve CPU scheduling simulator with a Gantt chart.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Schedule the processes in a workload file.")
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file (keys: id, arrival, burst).",
    )
    run_parser.add_argument(
        "--max-burst",
        type=int,
        default=MAX_BURST,
        help=f"Largest accepted burst time (default: {MAX_BURST}; 0 disables the limit).",
    )
    run_parser.add_argument(
        "--scale",
        type=int,
        default=1,
        help="Gantt chart columns per time unit (default: 1).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart as plain text without colors.",
    )
    run_parser.add_argument(
        "--json",
        nargs="?",
        const="-",
        default=None,
        metavar="PATH",
        help="Write the result as JSON to PATH, or to stdout when PATH is omitted.",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Step through the finished timeline one time unit at a time.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )

    menu_parser = subparsers.add_parser(
        "menu",
        help="Interactive process table: enter times, add/remove rows, calculate.",
    )
    menu_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Workload file to prefill the table with.",
    )
    menu_parser.add_argument(
        "--max-burst",
        type=int,
        default=MAX_BURST,
        help=f"Largest accepted burst time (default: {MAX_BURST}; 0 disables the limit).",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _burst_limit(value: int) -> Optional[int]:
    return value if value > 0 else None


def schedule_entries(entries: List[ProcessEntry], max_burst: Optional[int] = MAX_BURST) -> SchedulingResult:
    processes = validate_processes(entries, max_burst=max_burst)
    return run_algorithm("fcfs", processes)


def _print_result(result: SchedulingResult, console: Console, scale: int = 1, plain: bool = False) -> None:
    console.print("[bold]Algorithm:[/bold] FCFS (non-preemptive)")
    console.print()

    if plain:
        console.print(render_gantt(result, scale=scale), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result, scale=scale)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = ["PID", "Arrive", "Burst", "Start", "Complete", "Turnaround", "Wait"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h == "PID" else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival),
            str(p.burst),
            str(p.start),
            str(p.completion),
            str(p.turnaround),
            str(p.waiting),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes)
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
    if result.system:
        sys = result.system
        sys_table.add_row("Total time", str(result.total_time))
        sys_table.add_row("Idle time", str(sys.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _animate_result(result: SchedulingResult, delay: float, console: Console) -> None:
    """
    Time-stepped replay of the computed timeline.
    """
    if not result.timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    console.print(f"[bold]Replaying FCFS[/bold] (duration {result.total_time} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for block in result.timeline:
        for t in range(block.start, block.end):
            if block.is_idle:
                console.print(f"t={t:3d}: [dim]idle[/dim]")
            else:
                bar = "█" * (t - block.start + 1)
                console.print(f"t={t:3d}: {block.label} [green]{bar}[/green]")
            time.sleep(delay)


def _print_entries(entries: List[ProcessEntry], console: Console) -> None:
    table = Table(title="Processes", box=box.SIMPLE_HEAVY)
    table.add_column("#", justify="right")
    table.add_column("PID", justify="center")
    table.add_column("Arrival (AT)", justify="right")
    table.add_column("Burst (BT)", justify="right")
    for idx, e in enumerate(entries, start=1):
        table.add_row(
            str(idx),
            e.pid,
            "" if e.arrival is None else str(e.arrival),
            "" if e.burst is None else str(e.burst),
        )
    console.print(table)


def _renumber(entries: List[ProcessEntry]) -> List[ProcessEntry]:
    return [ProcessEntry(pid=f"P{i}", arrival=e.arrival, burst=e.burst) for i, e in enumerate(entries, start=1)]


def _next_pid(entries: List[ProcessEntry]) -> str:
    taken = {e.pid for e in entries}
    k = len(entries) + 1
    while f"P{k}" in taken:
        k += 1
    return f"P{k}"


def _read_time(prompt: str, current: Optional[int], console: Console) -> Optional[int]:
    """
    Read a non-negative integer; blank clears the field. Anything else keeps
    the current value.
    """
    raw = input(prompt).strip()
    if raw == "":
        return None
    if not raw.isdigit():
        console.print("[red]Invalid time, kept previous value.[/red]")
        return current
    return int(raw)


def _interactive_menu(entries: List[ProcessEntry], max_burst: Optional[int], console: Console) -> None:
    try:
        _menu_loop(entries, max_burst, console)
    except EOFError:
        # Ctrl-D quits like "q"
        console.print()


def _menu_loop(entries: List[ProcessEntry], max_burst: Optional[int], console: Console) -> None:
    result: Optional[SchedulingResult] = None

    while True:
        console.print("\n[bold cyan]FCFS Scheduling Simulator[/bold cyan] [dim](q to quit)[/dim]")
        _print_entries(entries, console)
        console.print(
            "  [yellow]e[/yellow] <#> edit   [yellow]a[/yellow] add   [yellow]r[/yellow] <#> remove   "
            "[yellow]l[/yellow] load file   [yellow]c[/yellow] calculate   [yellow]s[/yellow] show result"
        )

        parts = input("Choice: ").strip().lower().split()
        if not parts:
            continue
        cmd, args = parts[0], parts[1:]

        if cmd in {"q", "quit", "exit"}:
            return

        if cmd == "a":
            entries.append(ProcessEntry(pid=_next_pid(entries)))
            result = None
            continue

        if cmd in {"e", "r"}:
            try:
                idx = int(args[0]) - 1
                if idx < 0:
                    raise IndexError(idx)
                entry = entries[idx]
            except (ValueError, IndexError):
                console.print("[red]Invalid row number.[/red]")
                continue

            if cmd == "r":
                del entries[idx]
                entries[:] = _renumber(entries)
            else:
                entry.arrival = _read_time(f"Arrival time for {entry.pid}: ", entry.arrival, console)
                entry.burst = _read_time(f"Burst time for {entry.pid}: ", entry.burst, console)
            result = None
            continue

        if cmd == "l":
            path_in = input("Workload path: ").strip()
            try:
                entries[:] = load_workload(Path(path_in))
            except (OSError, ValueError) as exc:
                console.print(f"[red]Error: {exc}[/red]")
            result = None
            continue

        if cmd == "c":
            try:
                result = schedule_entries(entries, max_burst=max_burst)
            except ValueError as exc:
                result = None
                console.print(f"[red]{exc}[/red]")
                continue
            _print_result(result, console)
            continue

        if cmd == "s":
            if result is None:
                console.print("[yellow]Nothing calculated yet.[/yellow]")
            else:
                _print_result(result, console)
            continue

        console.print("[red]Invalid selection.[/red]")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    if args.command == "run":
        try:
            entries = load_workload(Path(args.workload))
            result = schedule_entries(entries, max_burst=_burst_limit(args.max_burst))
        except (OSError, ValueError) as exc:
            console.print(f"[red]Error: {exc}[/red]")
            return 2

        if args.json == "-":
            console.print_json(dump_result(result))
            return 0
        if args.json:
            dump_result(result, args.json)
            logger.info("Wrote result to %s", args.json)

        if args.step:
            try:
                _animate_result(result, delay=args.step_delay, console=console)
            except KeyboardInterrupt:
                console.print("[yellow]Animation skipped.[/yellow]")
        _print_result(result, console, scale=max(1, args.scale), plain=args.plain)
        return 0

    if args.command == "menu":
        if args.workload:
            try:
                entries = load_workload(Path(args.workload))
            except (OSError, ValueError) as exc:
                console.print(f"[red]Error: {exc}[/red]")
                return 2
        else:
            entries = [ProcessEntry(pid=f"P{i}") for i in range(1, DEFAULT_ROWS + 1)]
        _interactive_menu(entries, _burst_limit(args.max_burst), console)
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
