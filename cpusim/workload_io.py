from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable, List

from .errors import InvalidParameter
from .models import Process


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Entries keep file order. ``pid`` may be omitted, in which case the
    1-based position in the file is used.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, Iterable) or isinstance(raw, (str, dict)):
        raise InvalidParameter("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry, position) for position, entry in enumerate(raw, start=1)]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    # utf-8-sig: files saved with a byte-order mark
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        for position, row in enumerate(reader, start=1):
            processes.append(_process_from_mapping(row, position))
    return processes


def _as_int(value) -> int:
    """
    Accept ints, whole-number floats and numeric strings. Booleans and
    fractional values are rejected rather than truncated.
    """
    if isinstance(value, bool):
        raise TypeError(f"boolean {value!r} is not a valid time value")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value!r} is not a whole number")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"{value!r} is not a whole number")


def _process_from_mapping(mapping, position: int) -> Process:
    try:
        pid_val = mapping.get("pid")
        pid = _as_int(pid_val) if pid_val not in (None, "") else position
        arrival_time = _as_int(mapping["arrival_time"])
        burst_time = _as_int(mapping["burst_time"])
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise InvalidParameter(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
    )
