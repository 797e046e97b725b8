"""
cpusim package.

Discrete-time simulator for single-CPU scheduling under First-Come
First-Served, Shortest Remaining Time and Round-Robin policies.
"""

from .algorithms import Policy, run_algorithm, schedule_fcfs, schedule_rr, schedule_srt
from .errors import InvalidParameter, InvalidPolicy, SchedulerError
from .models import Process, ProcessMetrics, ScheduledSlice, ScheduleResult

__all__ = [
    "InvalidParameter",
    "InvalidPolicy",
    "Policy",
    "Process",
    "ProcessMetrics",
    "ScheduleResult",
    "ScheduledSlice",
    "SchedulerError",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_rr",
    "schedule_srt",
]
