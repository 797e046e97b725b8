from __future__ import annotations

from typing import List

from .models import ProcessMetrics, ScheduleResult


def cpu_utilization(makespan: int, idle_time: int) -> float:
    """
    Percentage of elapsed time the CPU was busy. An empty run (makespan 0)
    reports 0.0 instead of dividing by zero.
    """
    if makespan <= 0:
        return 0.0
    return (makespan - idle_time) / makespan * 100


def compute_system_metrics(result: ScheduleResult, makespan: int, idle_time: int) -> ScheduleResult:
    """
    Fill in the aggregate fields of ``result`` from the engine's final clock
    and accumulated idle time.
    """
    result.makespan = makespan
    result.idle_time = idle_time
    result.cpu_busy_time = sum(slice_.length for slice_ in result.timeline)
    result.cpu_utilization = cpu_utilization(makespan, idle_time)
    return result


def summarize_process_metrics(processes: List[ProcessMetrics]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
    }
