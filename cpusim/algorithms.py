from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, List, Optional, Union

from .errors import InvalidParameter, InvalidPolicy
from .metrics import compute_system_metrics
from .models import Policy, Process, ProcessMetrics, ScheduledSlice, ScheduleResult

logger = logging.getLogger(__name__)


# Numbering used by the interactive menu.
MENU_CHOICES = {1: Policy.FCFS, 2: Policy.RR, 3: Policy.SRT}

_ALIASES = {
    "fcfs": Policy.FCFS,
    "fifo": Policy.FCFS,
    "rr": Policy.RR,
    "round-robin": Policy.RR,
    "round_robin": Policy.RR,
    "srt": Policy.SRT,
    "srtf": Policy.SRT,
}


def _validate(processes: Iterable[Process]) -> List[Process]:
    """
    Check the input contract and return the processes as a list, in the
    order given.
    """
    procs = list(processes)
    seen: set[int] = set()
    for p in procs:
        for name in ("pid", "arrival_time", "burst_time"):
            value = getattr(p, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidParameter(f"{name} must be an integer, got {value!r} for process {p!r}")
        if p.pid <= 0:
            raise InvalidParameter(f"pid must be positive, got {p.pid}")
        if p.pid in seen:
            raise InvalidParameter(f"Duplicate pid {p.pid}")
        if p.arrival_time < 0:
            raise InvalidParameter(f"P{p.pid}: arrival_time must be >= 0, got {p.arrival_time}")
        if p.burst_time <= 0:
            raise InvalidParameter(f"P{p.pid}: burst_time must be > 0, got {p.burst_time}")
        seen.add(p.pid)
    return procs


def _finished(p: Process, finish_time: int) -> ProcessMetrics:
    turnaround_time = finish_time - p.arrival_time
    return ProcessMetrics(
        pid=p.pid,
        arrival_time=p.arrival_time,
        burst_time=p.burst_time,
        finish_time=finish_time,
        waiting_time=turnaround_time - p.burst_time,
        turnaround_time=turnaround_time,
    )


def _finish_run(result: ScheduleResult, makespan: int, idle_time: int) -> ScheduleResult:
    compute_system_metrics(result, makespan=makespan, idle_time=idle_time)
    logger.info(
        "%s completed %d process(es): makespan=%d idle=%d utilization=%.2f%%",
        result.algorithm,
        len(result.processes),
        result.makespan,
        result.idle_time,
        result.cpu_utilization,
    )
    return result


def schedule_fcfs(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes are serviced in the order they are given, which is assumed to
    be arrival order. No sort is performed: a list that is not sorted by
    arrival time is run in list order, and the CPU idles whenever the next
    process in the list has not arrived yet.
    """
    procs = _validate(processes)

    time = 0
    idle_time = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ProcessMetrics] = []

    for p in procs:
        if time < p.arrival_time:
            logger.debug("t=%d: CPU idle until P%d arrives at t=%d", time, p.pid, p.arrival_time)
            idle_time += p.arrival_time - time
            time = p.arrival_time

        finish_time = time + p.burst_time
        logger.debug("t=%d: dispatch P%d until t=%d", time, p.pid, finish_time)
        timeline.append(ScheduledSlice(pid=p.pid, start_time=time, end_time=finish_time))
        metrics.append(_finished(p, finish_time))
        time = finish_time

    result = ScheduleResult(algorithm=Policy.FCFS.label, policy=Policy.FCFS, quantum=None, processes=metrics, timeline=timeline)
    return _finish_run(result, makespan=time, idle_time=idle_time)


def schedule_srt(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Remaining Time (preemptive SJF).

    The choice is re-made every time unit: among arrived, unfinished
    processes the one with the least remaining time runs for one unit. Equal
    remaining times go to the process that comes first in the input list.
    """
    procs = _validate(processes)
    n = len(procs)
    remaining = [p.burst_time for p in procs]
    finished: List[Optional[ProcessMetrics]] = [None] * n

    time = 0
    idle_time = 0
    completed = 0
    running: Optional[int] = None
    timeline: List[ScheduledSlice] = []

    while completed < n:
        idx = -1
        for i, p in enumerate(procs):
            if p.arrival_time <= time and remaining[i] > 0:
                # strict comparison keeps the lowest index on ties
                if idx == -1 or remaining[i] < remaining[idx]:
                    idx = i

        if idx == -1:
            if running is not None:
                logger.debug("t=%d: CPU idle", time)
            running = None
            idle_time += 1
            time += 1
            continue

        p = procs[idx]
        if running != idx:
            logger.debug("t=%d: dispatch P%d (remaining %d)", time, p.pid, remaining[idx])
            running = idx

        remaining[idx] -= 1
        last = timeline[-1] if timeline else None
        if last is not None and last.pid == p.pid and last.end_time == time:
            last.end_time = time + 1
        else:
            timeline.append(ScheduledSlice(pid=p.pid, start_time=time, end_time=time + 1))
        time += 1

        if remaining[idx] == 0:
            finished[idx] = _finished(p, time)
            completed += 1

    metrics = [m for m in finished if m is not None]
    result = ScheduleResult(algorithm=Policy.SRT.label, policy=Policy.SRT, quantum=None, processes=metrics, timeline=timeline)
    return _finish_run(result, makespan=time, idle_time=idle_time)


def _enqueue_arrivals(procs: List[Process], ready: Deque[int], after: int, until: int) -> None:
    """
    Append, in input order, every process whose arrival time falls in the
    half-open window ``(after, until]``.
    """
    for i, p in enumerate(procs):
        if after < p.arrival_time <= until:
            logger.debug("t=%d: P%d enters ready queue (arrived t=%d)", until, p.pid, p.arrival_time)
            ready.append(i)


def schedule_rr(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    A dispatched process runs for ``min(quantum, remaining)`` units. Queue
    ordering rule: processes that arrive during a slice (after it starts, up
    to and including the moment it ends) are appended to the ready queue
    before the preempted process is put back at the tail.
    """
    if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise InvalidParameter(f"Round Robin requires a positive integer quantum, got {quantum!r}")

    procs = _validate(processes)
    n = len(procs)
    remaining = [p.burst_time for p in procs]
    finished: List[Optional[ProcessMetrics]] = [None] * n

    time = 0
    idle_time = 0
    completed = 0
    timeline: List[ScheduledSlice] = []
    ready: Deque[int] = deque(i for i, p in enumerate(procs) if p.arrival_time == time)

    while ready or completed < n:
        if not ready:
            idle_time += 1
            time += 1
            _enqueue_arrivals(procs, ready, time - 1, time)
            continue

        idx = ready.popleft()
        p = procs[idx]
        run_time = min(quantum, remaining[idx])
        logger.debug("t=%d: dispatch P%d for %d unit(s) (remaining %d)", time, p.pid, run_time, remaining[idx])

        timeline.append(ScheduledSlice(pid=p.pid, start_time=time, end_time=time + run_time))
        remaining[idx] -= run_time
        time += run_time

        _enqueue_arrivals(procs, ready, time - run_time, time)

        if remaining[idx] > 0:
            ready.append(idx)
        else:
            finished[idx] = _finished(p, time)
            completed += 1

    metrics = [m for m in finished if m is not None]
    result = ScheduleResult(algorithm=Policy.RR.label, policy=Policy.RR, quantum=quantum, processes=metrics, timeline=timeline)
    return _finish_run(result, makespan=time, idle_time=idle_time)


ALGORITHMS = {
    Policy.FCFS: schedule_fcfs,
    Policy.RR: schedule_rr,
    Policy.SRT: schedule_srt,
}


def resolve_policy(selector: Union[Policy, str, int]) -> Policy:
    """
    Map a policy name, alias or menu number onto a :class:`Policy`.

    Raises :class:`InvalidPolicy` for anything unrecognised.
    """
    if isinstance(selector, Policy):
        return selector
    if isinstance(selector, int) and not isinstance(selector, bool):
        if selector in MENU_CHOICES:
            return MENU_CHOICES[selector]
        raise InvalidPolicy(selector)
    if isinstance(selector, str):
        key = selector.strip().lower()
        if key.isdigit():
            return resolve_policy(int(key))
        if key in _ALIASES:
            return _ALIASES[key]
    raise InvalidPolicy(selector)


def run_algorithm(
    policy: Union[Policy, str, int],
    processes: Iterable[Process],
    quantum: Optional[int] = None,
) -> ScheduleResult:
    """
    Dispatch to the requested policy. The quantum only matters for
    round-robin; FCFS and SRT ignore it.
    """
    resolved = resolve_policy(policy)
    func = ALGORITHMS[resolved]
    return func(processes, quantum=quantum)
