from rich.panel import Panel

from scheduler_sim.algorithms import schedule_fcfs, schedule_sjf, schedule_srtf
from scheduler_sim.gantt import build_rich_gantt, merge_slices, render_gantt
from scheduler_sim.models import Process


def test_merge_slices_coalesces_srtf_units():
    procs = [
        Process(1, "P1", arrival_time=0, burst_time=4),
        Process(2, "P2", arrival_time=1, burst_time=1),
    ]
    merged = merge_slices(schedule_srtf(procs))
    assert [(s.process.id, s.start_time, s.end_time) for s in merged] == [(1, 0, 1), (2, 1, 2), (1, 2, 5)]


def test_merge_slices_keeps_idle_gaps():
    procs = [
        Process(1, "A", arrival_time=0, burst_time=2),
        Process(2, "B", arrival_time=4, burst_time=2),
    ]
    merged = merge_slices(schedule_srtf(procs))
    assert [(s.process.id, s.start_time, s.end_time) for s in merged] == [(1, 0, 2), (2, 4, 6)]


def test_render_gantt_shows_idle_time():
    chart = render_gantt(schedule_sjf([Process(1, "A", arrival_time=5, burst_time=2)]))
    lines = chart.splitlines()
    assert lines[0] == "Gantt Chart:"
    assert lines[1] == "|.....==|"
    assert lines[2].rstrip() == "      A"
    assert lines[3] == "0  5  7"


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_build_rich_gantt_time_marks():
    procs = [
        Process(1, "late", arrival_time=2, burst_time=3),
        Process(2, "early", arrival_time=0, burst_time=2),
    ]
    panel, marks = build_rich_gantt(schedule_fcfs(procs))
    assert isinstance(panel, Panel)
    assert marks == "0  2  5"


def test_build_rich_gantt_empty():
    panel, marks = build_rich_gantt([])
    assert isinstance(panel, Panel)
    assert marks == ""


def test_build_rich_gantt_marks_idle_span():
    _, marks = build_rich_gantt(schedule_sjf([Process(1, "A", arrival_time=5, burst_time=2)]))
    assert marks == "0  5  7"
