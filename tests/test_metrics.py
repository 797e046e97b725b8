import pytest

from cpusim.metrics import cpu_utilization, summarize_process_metrics
from cpusim.models import ProcessMetrics


def test_utilization_of_empty_run_is_zero():
    assert cpu_utilization(0, 0) == 0.0


def test_utilization_percentage():
    assert cpu_utilization(10, 0) == 100.0
    assert cpu_utilization(8, 2) == pytest.approx(75.0)


def test_summarize():
    processes = [
        ProcessMetrics(pid=1, arrival_time=0, burst_time=5, finish_time=5, waiting_time=0, turnaround_time=5),
        ProcessMetrics(pid=2, arrival_time=2, burst_time=3, finish_time=8, waiting_time=3, turnaround_time=6),
    ]
    summary = summarize_process_metrics(processes)
    assert summary["avg_waiting"] == pytest.approx(1.5)
    assert summary["avg_turnaround"] == pytest.approx(5.5)


def test_summarize_empty():
    assert summarize_process_metrics([]) == {"avg_waiting": 0.0, "avg_turnaround": 0.0}
