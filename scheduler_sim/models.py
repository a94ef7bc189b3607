from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidInputError


class Algorithm(str, Enum):
    FCFS = "FCFS"
    RR = "RR"
    PRIORITY = "Priority"
    SJF = "SJF"
    SRTF = "SRTF"

    @classmethod
    def parse(cls, name: "str | Algorithm") -> "Algorithm":
        """
        Resolve an algorithm from its value or member name, case-insensitively.
        """
        if isinstance(name, Algorithm):
            return name
        wanted = str(name).strip().lower()
        for member in cls:
            if wanted in (member.value.lower(), member.name.lower()):
                return member
        choices = ", ".join(m.value for m in cls)
        raise InvalidInputError("algorithm", f"unknown algorithm {name!r} (choose from {choices})")


@dataclass(frozen=True)
class Process:
    id: int
    name: str
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass(frozen=True)
class ProcessResult:
    """
    One contiguous slice of execution for a process.

    Non-preemptive algorithms emit a single slice per process; RR and SRTF
    emit one per turn, so per-process totals come from aggregating siblings
    (see ``metrics.summarize_processes``).
    """

    process: Process
    start_time: int
    end_time: int
    waiting_time: int
    turnaround_time: int

    @classmethod
    def for_slice(cls, process: Process, start_time: int, end_time: int) -> "ProcessResult":
        return cls(
            process=process,
            start_time=start_time,
            end_time=end_time,
            waiting_time=start_time - process.arrival_time,
            turnaround_time=end_time - process.arrival_time,
        )

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessSummary:
    process: Process
    first_start: int
    completion_time: int
    slices: int
    waiting_time: int
    turnaround_time: int
    response_time: int


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    context_switches: int = 0
