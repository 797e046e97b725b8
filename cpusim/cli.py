from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .algorithms import MENU_CHOICES, Policy, resolve_policy, run_algorithm
from .errors import InvalidPolicy
from .models import Process, ScheduleResult
from .report import render_comparison, render_result
from .workload_io import load_workload

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2
DEFAULT_STEP_DELAY = 0.3
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level: str = "WARNING", console: Optional[Console] = None) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpusim",
        description="Single-CPU scheduling simulator (FCFS, RR, SRT).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every dispatch decision (same as --log-level DEBUG).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling policy on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help="Policy to use (fcfs, rr, srt).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by FCFS and SRT).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Replay the schedule one time unit at a time in the terminal.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=DEFAULT_STEP_DELAY,
        help=f"Seconds to wait between steps when --step is used (default: {DEFAULT_STEP_DELAY}).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several policies on the same workload and compare them.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=[p.value for p in Policy],
        help="Policies to compare (default: fcfs rr srt).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR (default: {DEFAULT_QUANTUM}).",
    )

    menu_parser = subparsers.add_parser(
        "menu",
        help="Enter processes interactively and pick a policy from a menu.",
    )
    menu_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Load processes from a file instead of typing them in.",
    )

    return parser


def _animate_result(result: ScheduleResult, delay: float, console: Console) -> None:
    """
    Time-stepped textual replay of a computed schedule.
    """
    if not result.timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    console.print(f"[bold]Simulating {result.algorithm}[/bold] (duration {result.makespan} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for t in range(result.makespan):
        running = next((sl for sl in result.timeline if sl.start_time <= t < sl.end_time), None)
        if running is None:
            console.print(f"t={t:2d}: [dim]idle[/dim]")
        else:
            bar = "#" * (t - running.start_time + 1)
            console.print(f"t={t:2d}: P{running.pid} [green]{bar}[/green]")
        time.sleep(delay)


def _prompt_int(prompt: str, minimum: int, read: Callable[[str], str], console: Console) -> int:
    while True:
        raw = read(prompt).strip()
        try:
            value = int(raw)
        except ValueError:
            console.print(f"[red]Please enter a whole number >= {minimum}.[/red]")
            continue
        if value < minimum:
            console.print(f"[red]Please enter a whole number >= {minimum}.[/red]")
            continue
        return value


def _read_processes(read: Callable[[str], str], console: Console) -> List[Process]:
    n = _prompt_int("Enter the number of processes: ", 0, read, console)
    processes = []
    for pid in range(1, n + 1):
        arrival = _prompt_int(f"Enter arrival time for Process P{pid}: ", 0, read, console)
        burst = _prompt_int(f"Enter burst time for Process P{pid}: ", 1, read, console)
        processes.append(Process(pid=pid, arrival_time=arrival, burst_time=burst))
    return processes


def _interactive_menu(
    console: Console,
    workload: Optional[str] = None,
    read: Callable[[str], str] = input,
) -> None:
    if workload:
        processes = load_workload(workload)
        console.print(f"Loaded {len(processes)} process(es) from [green]{workload}[/green]")
    else:
        processes = _read_processes(read, console)

    while True:
        console.print("\n[bold]Choose the scheduling algorithm:[/bold] [dim](q to quit)[/dim]")
        for number, policy in MENU_CHOICES.items():
            console.print(f"  [yellow]{number}[/yellow]. {policy.label}")

        choice = read("Choice: ").strip().lower()
        if choice in {"", "q", "quit", "exit"}:
            return

        try:
            policy = resolve_policy(choice)
        except InvalidPolicy:
            logger.info("Rejected menu choice %r", choice)
            console.print("[red]Invalid choice![/red]")
            continue

        quantum = None
        if policy is Policy.RR:
            quantum = _prompt_int("Enter time quantum for Round-Robin (RR): ", 1, read, console)

        console.print()
        render_result(run_algorithm(policy, processes, quantum=quantum), console)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else args.log_level)
    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
            if args.step:
                try:
                    _animate_result(result, delay=args.step_delay, console=console)
                except KeyboardInterrupt:
                    console.print("[yellow]Animation skipped.[/yellow]")
            render_result(result, console)
            return 0

        if args.command == "compare":
            processes = load_workload(Path(args.workload))
            results = [run_algorithm(alg, processes, quantum=args.quantum) for alg in args.algorithms]
            render_comparison(results, console, title=f"Algorithm comparison: {args.workload}")
            return 0

        if args.command == "menu":
            try:
                _interactive_menu(console, workload=args.workload)
            except (EOFError, KeyboardInterrupt):
                # input closed or interrupted: leave the menu like "q"
                console.print()
                logger.debug("Menu input ended")
            return 0
    except InvalidPolicy as exc:
        # nothing was scheduled; report and exit without a traceback
        logger.debug("Run aborted: %s", exc)
        console.print(f"[red]{escape(str(exc))}[/red]")
        return 2
    except (ValueError, OSError) as exc:
        logger.debug("Run aborted: %s", exc)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
