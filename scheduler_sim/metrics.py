from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .models import Process, ProcessResult, ProcessSummary, SystemMetrics


def summarize_processes(results: Sequence[ProcessResult]) -> List[ProcessSummary]:
    """
    Fold sibling slices into one summary per process, in order of first
    appearance. Completion is the end of the process's last slice.
    """
    summaries: Dict[int, ProcessSummary] = {}
    for r in results:
        p = r.process
        s = summaries.get(p.id)
        if s is None:
            summaries[p.id] = ProcessSummary(
                process=p,
                first_start=r.start_time,
                completion_time=r.end_time,
                slices=1,
                waiting_time=0,  # finalized below
                turnaround_time=0,
                response_time=r.start_time - p.arrival_time,
            )
            continue
        s.completion_time = max(s.completion_time, r.end_time)
        s.slices += 1

    for s in summaries.values():
        s.turnaround_time = s.completion_time - s.process.arrival_time
        s.waiting_time = s.turnaround_time - s.process.burst_time

    return list(summaries.values())


def average_times(processes: Sequence[Process], results: Sequence[ProcessResult]) -> dict:
    """
    Average waiting, turnaround and response time over the input processes.

    The divisor is the number of processes, not the number of slices.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    summaries = summarize_processes(results)
    n = len(processes)
    return {
        "avg_waiting": sum(s.waiting_time for s in summaries) / n,
        "avg_turnaround": sum(s.turnaround_time for s in summaries) / n,
        "avg_response": sum(s.response_time for s in summaries) / n,
    }


def idle_intervals(results: Sequence[ProcessResult]) -> List[Tuple[int, int]]:
    """
    Spans in [0, makespan) where no slice was running.
    """
    gaps: List[Tuple[int, int]] = []
    last_time = 0
    for r in sorted(results, key=lambda r: (r.start_time, r.end_time)):
        if r.start_time > last_time:
            gaps.append((last_time, r.start_time))
        last_time = max(last_time, r.end_time)
    return gaps


def compute_system_metrics(results: Sequence[ProcessResult]) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from the timeline slices.
    """
    if not results:
        return SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    makespan = max(r.end_time for r in results)
    cpu_busy_time = sum(r.duration for r in results)
    idle_time = sum(end - start for start, end in idle_intervals(results))
    completed = len({r.process.id for r in results})

    context_switches = sum(
        1 for prev, cur in zip(results, results[1:]) if prev.process.id != cur.process.id
    )

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=idle_time,
        makespan=makespan,
        throughput=completed / makespan if makespan > 0 else 0.0,
        cpu_utilization=cpu_busy_time / makespan if makespan > 0 else 0.0,
        context_switches=context_switches,
    )
