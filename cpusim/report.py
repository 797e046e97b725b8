from __future__ import annotations

from typing import Iterable

from rich import box
from rich.console import Console
from rich.table import Table

from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize_process_metrics
from .models import ScheduleResult


def render_result(result: ScheduleResult, console: Console, show_gantt: bool = True) -> None:
    """
    Print the per-process table, the Gantt chart and the CPU utilization for
    one run.
    """
    title = result.algorithm
    if result.quantum is not None:
        title += f" (Q = {result.quantum})"
    console.print(f"[bold]{title} Scheduling[/bold]")
    console.print()

    if show_gantt and console.color_system is None:
        # background colours are lost without a colour system
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
        console.print()
    elif show_gantt:
        panel, _ = build_rich_gantt(result.timeline)
        console.print(panel)
        console.print()

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for header in ("Process", "Arrival", "Burst", "Finish", "Waiting", "Turnaround"):
        proc_table.add_column(header, justify="center" if header == "Process" else "right")

    for p in result.processes:
        proc_table.add_row(
            f"P{p.pid}",
            str(p.arrival_time),
            str(p.burst_time),
            str(p.finish_time),
            str(p.waiting_time),
            str(p.turnaround_time),
        )

    console.print(proc_table)

    summary = summarize_process_metrics(result.processes)
    console.print(f"Average waiting time: {summary['avg_waiting']:.2f}")
    console.print(f"Average turnaround time: {summary['avg_turnaround']:.2f}")
    console.print(f"CPU Utilization: {result.cpu_utilization:.2f}%")


def render_comparison(results: Iterable[ScheduleResult], console: Console, title: str = "Algorithm comparison") -> None:
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("Algorithm")
    table.add_column("Quantum", justify="right")
    table.add_column("Avg waiting", justify="right")
    table.add_column("Avg turnaround", justify="right")
    table.add_column("Makespan", justify="right")
    table.add_column("CPU utilization", justify="right")

    for result in results:
        summary = summarize_process_metrics(result.processes)
        table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            str(result.makespan),
            f"{result.cpu_utilization:.2f}%",
        )

    console.print(table)
