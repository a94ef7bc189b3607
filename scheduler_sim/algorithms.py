from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional, Sequence

from .errors import InvalidInputError
from .models import Algorithm, Process, ProcessResult

logger = logging.getLogger(__name__)


@dataclass
class _Job:
    """Per-call working state: a process and the CPU time it still needs."""

    process: Process
    remaining: int


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate(
    processes: Sequence[Process],
    algorithm: "Algorithm | str | None" = None,
    quantum: Optional[int] = None,
) -> None:
    """
    Reject malformed input before any simulation state exists.

    The quantum is only checked for Round Robin; every other algorithm
    ignores it.
    """
    seen_ids = set()
    for p in processes:
        if not _is_int(p.arrival_time) or p.arrival_time < 0:
            raise InvalidInputError(
                "arrival_time",
                f"process {p.id} ({p.name}) has arrival time {p.arrival_time!r}; expected an integer >= 0",
            )
        if not _is_int(p.burst_time) or p.burst_time < 1:
            raise InvalidInputError(
                "burst_time",
                f"process {p.id} ({p.name}) has burst time {p.burst_time!r}; expected an integer >= 1",
            )
        if not _is_int(p.priority):
            raise InvalidInputError("priority", f"process {p.id} ({p.name}) has non-integer priority {p.priority!r}")
        if p.id in seen_ids:
            raise InvalidInputError("id", f"duplicate process id {p.id!r}")
        seen_ids.add(p.id)

    if algorithm is not None and Algorithm.parse(algorithm) is Algorithm.RR:
        if quantum is None or not _is_int(quantum) or quantum < 1:
            raise InvalidInputError("quantum", f"Round Robin requires an integer quantum >= 1, got {quantum!r}")


def _run_in_order(ordered: Sequence[Process]) -> List[ProcessResult]:
    """
    Run each process to completion in the given order, waiting for its
    arrival when the CPU would otherwise start it early.
    """
    time = 0
    results: List[ProcessResult] = []
    for p in ordered:
        if time < p.arrival_time:
            logger.debug("CPU idle from %d to %d", time, p.arrival_time)
            time = p.arrival_time
        results.append(ProcessResult.for_slice(p, time, time + p.burst_time))
        time += p.burst_time
    return results


def schedule_fcfs(processes: Sequence[Process]) -> List[ProcessResult]:
    """
    First-Come First-Serve (non-preemptive).

    Ordered by arrival time; ties keep their input order.
    """
    validate(processes)
    return _run_in_order(sorted(processes, key=lambda p: p.arrival_time))


def schedule_priority(processes: Sequence[Process]) -> List[ProcessResult]:
    """
    Static Priority (non-preemptive).

    Lower value means more urgent. Processes are ordered by (priority,
    arrival time) and then handed to FCFS, whose stable arrival sort keeps
    that order among processes arriving together. So priority only breaks
    arrival ties and never preempts or holds the CPU for a later arrival.
    """
    validate(processes)
    by_priority = sorted(processes, key=lambda p: (p.priority, p.arrival_time))
    return schedule_fcfs(by_priority)


def schedule_sjf(processes: Sequence[Process]) -> List[ProcessResult]:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. ``min`` keeps the
    first of equal candidates, so ties go to the earlier entry in the input.
    """
    validate(processes)
    remaining: List[Process] = list(processes)

    time = 0
    results: List[ProcessResult] = []

    while remaining:
        ready = [p for p in remaining if p.arrival_time <= time]
        if not ready:
            next_arrival = min(p.arrival_time for p in remaining)
            logger.debug("CPU idle from %d to %d", time, next_arrival)
            time = next_arrival
            continue

        p = min(ready, key=lambda x: x.burst_time)
        results.append(ProcessResult.for_slice(p, time, time + p.burst_time))
        time += p.burst_time
        remaining.remove(p)

    return results


def schedule_srtf(processes: Sequence[Process]) -> List[ProcessResult]:
    """
    Shortest Remaining Time First (preemptive SJF).

    The choice is re-made every time unit and each unit is emitted as its own
    slice, so a process with burst N yields N results.
    """
    validate(processes)
    jobs: List[_Job] = [_Job(p, p.burst_time) for p in processes]

    time = 0
    results: List[ProcessResult] = []

    while jobs:
        ready = [j for j in jobs if j.process.arrival_time <= time]
        if not ready:
            next_arrival = min(j.process.arrival_time for j in jobs)
            logger.debug("CPU idle from %d to %d", time, next_arrival)
            time = next_arrival
            continue

        job = min(ready, key=lambda j: j.remaining)
        results.append(ProcessResult.for_slice(job.process, time, time + 1))
        time += 1
        job.remaining -= 1
        if job.remaining == 0:
            jobs.remove(job)

    return results


def schedule_rr(
    processes: Sequence[Process],
    quantum: Optional[int] = None,
    admit_arrivals: bool = False,
) -> List[ProcessResult]:
    """
    Round Robin scheduling with a fixed time quantum.

    By default every process is queued up front in arrival order and arrival
    times are not consulted again. That matches textbook RR only when all
    processes arrive at 0; a later arrival may be run before it arrives and
    its slices then carry a negative waiting time.

    With ``admit_arrivals=True`` processes join the tail of the queue only
    once the clock reaches their arrival time, the clock jumps across idle
    periods, and arrivals during a slice are queued ahead of the preempted
    process.
    """
    validate(processes, Algorithm.RR, quantum)
    ordered = sorted(processes, key=lambda p: p.arrival_time)
    if admit_arrivals:
        return _rr_admitting(ordered, quantum)

    if any(p.arrival_time > 0 for p in ordered):
        logger.warning(
            "Round Robin queues every process at time 0; arrival times after 0 are not honoured "
            "(use admit_arrivals=True for arrival-aware scheduling)"
        )

    queue: Deque[_Job] = deque(_Job(p, p.burst_time) for p in ordered)
    time = 0
    results: List[ProcessResult] = []

    while queue:
        job = queue.popleft()
        if job.remaining <= 0:
            continue

        run_time = min(quantum, job.remaining)
        results.append(ProcessResult.for_slice(job.process, time, time + run_time))
        time += run_time
        job.remaining -= run_time

        if job.remaining > 0:
            queue.append(job)

    return results


def _rr_admitting(ordered: List[Process], quantum: int) -> List[ProcessResult]:
    pending: Deque[_Job] = deque(_Job(p, p.burst_time) for p in ordered)
    ready: Deque[_Job] = deque()
    time = 0
    results: List[ProcessResult] = []

    def enqueue_new_arrivals(current_time: int) -> None:
        while pending and pending[0].process.arrival_time <= current_time:
            ready.append(pending.popleft())

    enqueue_new_arrivals(time)

    while ready or pending:
        if not ready:
            # Jump to next arrival if CPU is idle
            next_arrival = pending[0].process.arrival_time
            logger.debug("CPU idle from %d to %d", time, next_arrival)
            time = next_arrival
            enqueue_new_arrivals(time)
            continue

        job = ready.popleft()
        run_time = min(quantum, job.remaining)
        results.append(ProcessResult.for_slice(job.process, time, time + run_time))
        time += run_time
        job.remaining -= run_time

        # Arrivals during the slice go ahead of the preempted process.
        enqueue_new_arrivals(time)
        if job.remaining > 0:
            ready.append(job)

    return results


ALGORITHMS: Dict[Algorithm, Callable[..., List[ProcessResult]]] = {
    Algorithm.FCFS: schedule_fcfs,
    Algorithm.RR: schedule_rr,
    Algorithm.PRIORITY: schedule_priority,
    Algorithm.SJF: schedule_sjf,
    Algorithm.SRTF: schedule_srtf,
}


def run(
    algorithm: "Algorithm | str",
    processes: Sequence[Process],
    quantum: Optional[int] = None,
    admit_arrivals: bool = False,
) -> List[ProcessResult]:
    """
    Dispatch to the requested algorithm.

    Input is validated before anything runs, so a failure never leaves a
    partial schedule behind. ``quantum`` and ``admit_arrivals`` only affect
    Round Robin.
    """
    alg = Algorithm.parse(algorithm)
    validate(processes, alg, quantum)
    logger.debug("Running %s on %d processes (quantum=%s)", alg.value, len(processes), quantum)

    if alg is Algorithm.RR:
        results = schedule_rr(processes, quantum=quantum, admit_arrivals=admit_arrivals)
    else:
        results = ALGORITHMS[alg](processes)

    logger.debug("%s produced %d slices", alg.value, len(results))
    return results
