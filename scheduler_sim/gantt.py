from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ProcessResult

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def merge_slices(results: Sequence[ProcessResult]) -> List[ProcessResult]:
    """
    Coalesce back-to-back slices of the same process into one bar.

    SRTF emits a slice per time unit; this is only for display.
    """
    merged: List[ProcessResult] = []
    for r in sorted(results, key=lambda s: (s.start_time, s.end_time)):
        prev = merged[-1] if merged else None
        if prev is not None and prev.process.id == r.process.id and prev.end_time == r.start_time:
            merged[-1] = ProcessResult.for_slice(prev.process, prev.start_time, r.end_time)
        else:
            merged.append(r)
    return merged


def render_gantt(results: Sequence[ProcessResult]) -> str:
    """
    Plain-text Gantt chart; idle time is drawn as dots.
    """
    if not results:
        return "(no execution)"

    line = "|"
    labels = " "
    time_marks = "0"
    last_time = 0

    for sl in merge_slices(results):
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap
            last_time = sl.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, sl.duration)
        line += "=" * width
        labels += sl.process.name[:width].ljust(width)
        last_time = sl.end_time
        time_marks += f"{last_time:>3}"

    line += "|"

    return "\n".join(["Gantt Chart:", line, labels, time_marks])


def build_rich_gantt(results: Sequence[ProcessResult]) -> tuple[Panel, str]:
    """
    Colored Gantt chart panel plus the time marks to print under it.

    Each process keeps one color, assigned in order of first appearance.
    """
    if not results:
        return Panel("No execution", title="Gantt Chart"), ""

    bars = merge_slices(results)
    colors: Dict[int, str] = {}
    for bar in bars:
        colors.setdefault(bar.process.id, COLORS[len(colors) % len(COLORS)])

    timeline = Text()
    labels = Text()
    marks = [0]

    for bar in bars:
        gap = bar.start_time - marks[-1]
        if gap > 0:
            timeline.append("." * gap, style="dim")
            labels.append(" " * gap)
            marks.append(bar.start_time)

        width = max(1, bar.duration)
        timeline.append(" " * width, style=f"on {colors[bar.process.id]}")
        labels.append(bar.process.name[:width].ljust(width), style="bold")
        marks.append(bar.end_time)

    grid = Table.grid(padding=(0, 0))
    grid.add_row(timeline)
    grid.add_row(labels)

    time_marks = str(marks[0]) + "".join(f"{m:>3}" for m in marks[1:])
    return Panel.fit(grid, title="Gantt Chart"), time_marks
