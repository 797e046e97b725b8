from __future__ import annotations

from typing import Dict, List, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

_COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _label(pid: int, width: int) -> str:
    return f"P{pid}"[:width].ljust(width)


def _time_mark(marks: str, t: int, column: int) -> str:
    """
    Append ``t`` so that it starts at ``column``, the position of the time
    unit beginning at ``t``. Marks never touch: a crowded mark is pushed one
    space past the previous one.
    """
    if marks and len(marks) >= column:
        return marks + " " + str(t)
    return marks.ljust(column) + str(t)


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: ``=`` marks busy units, ``.`` marks idle ones.
    """
    if not slices:
        return "(no execution)"

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))

    # column 0 holds the opening "|", so time unit t is drawn at column t + 1
    bar = "|"
    labels = " "
    marks = _time_mark("", 0, 1)
    last_time = 0

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            bar += "." * idle_gap
            labels += " " * idle_gap
            marks = _time_mark(marks, sl.start_time, sl.start_time + 1)

        bar += "=" * sl.length
        labels += _label(sl.pid, sl.length)
        last_time = sl.end_time
        marks = _time_mark(marks, last_time, last_time + 1)

    bar += "|"
    return "\n".join(["Gantt Chart:", bar, labels, marks])


def build_rich_gantt(slices: List[ScheduledSlice]) -> Tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with the
    slice boundaries, each mark starting at the column of its time unit.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))
    pid_to_color: Dict[int, str] = {}

    timeline = Text()
    labels = Text()
    marks = _time_mark("", 0, 0)
    last_time = 0

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            timeline.append("." * idle_gap, style="dim")
            labels.append(" " * idle_gap)
            marks = _time_mark(marks, sl.start_time, sl.start_time)

        color = pid_to_color.setdefault(sl.pid, _COLORS[len(pid_to_color) % len(_COLORS)])
        timeline.append(" " * sl.length, style=f"on {color}")
        labels.append(_label(sl.pid, sl.length), style="bold")

        last_time = sl.end_time
        marks = _time_mark(marks, last_time, last_time)

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)
    table.add_row(Text(marks, style="dim"))

    return Panel.fit(table, title="Gantt Chart"), marks
