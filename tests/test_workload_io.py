from pathlib import Path

import pytest

from cpusim.errors import InvalidParameter
from cpusim.models import Process
from cpusim.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":7,"arrival_time":0,"burst_time":3},'
                 '{"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert procs == [Process(7, 0, 3), Process(2, 1, 2)]


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\n1,0,3\n,4,2\n")
    procs = load_workload(p)
    assert procs[0].pid == 1
    assert procs[1].pid == 2
    assert procs[1].arrival_time == 4


def test_csv_without_pid_column(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time\n0,5\n2,3\n")
    assert [proc.pid for proc in load_workload(p)] == [1, 2]


def test_invalid_entry(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":"soon","burst_time":3}]')
    with pytest.raises(InvalidParameter, match="Invalid process entry"):
        load_workload(p)


def test_json_must_be_a_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid":1,"arrival_time":0,"burst_time":3}')
    with pytest.raises(InvalidParameter):
        load_workload(p)


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("")
    with pytest.raises(ValueError, match="Unsupported workload format"):
        load_workload(p)


@pytest.mark.parametrize(
    "entry",
    [
        '{"pid":1,"arrival_time":0,"burst_time":2.7}',
        '{"pid":1,"arrival_time":0.9,"burst_time":3}',
        '{"pid":1,"arrival_time":true,"burst_time":3}',
        '{"pid":false,"arrival_time":0,"burst_time":3}',
    ],
)
def test_json_rejects_fractional_and_boolean_times(tmp_path: Path, entry):
    p = tmp_path / "w.json"
    p.write_text(f"[{entry}]")
    with pytest.raises(InvalidParameter, match="Invalid process entry"):
        load_workload(p)


def test_json_accepts_whole_number_floats(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":2.0,"burst_time":4.0}]')
    assert load_workload(p) == [Process(1, 2, 4)]


def test_csv_rejects_fractional_times(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\n1,0,2.7\n")
    with pytest.raises(InvalidParameter):
        load_workload(p)


def test_csv_with_byte_order_mark_keeps_pids(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("\ufeffpid,arrival_time,burst_time\n5,0,3\n9,1,2\n", encoding="utf-8")
    assert [proc.pid for proc in load_workload(p)] == [5, 9]
