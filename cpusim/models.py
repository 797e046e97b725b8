from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Policy(str, Enum):
    FCFS = "fcfs"
    RR = "rr"
    SRT = "srt"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Policy.FCFS: "First-Come, First-Served (FCFS)",
    Policy.RR: "Round-Robin (RR)",
    Policy.SRT: "Shortest Remaining Time (SRT)",
}


@dataclass(frozen=True)
class Process:
    """
    Input descriptor for one simulated job. Engines never mutate it, so the
    same list can be scheduled under every policy in turn.
    """

    pid: int
    arrival_time: int
    burst_time: int


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def length(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    finish_time: int
    waiting_time: int
    turnaround_time: int


@dataclass
class ScheduleResult:
    algorithm: str
    policy: Policy
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    makespan: int = 0
    idle_time: int = 0
    cpu_busy_time: int = 0
    # percentage in [0, 100]
    cpu_utilization: float = 0.0
