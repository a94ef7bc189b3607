"""
Scheduler simulation package.

Simulates single-CPU process scheduling (FCFS, Round Robin, static Priority,
SJF and SRTF) and reports per-process start, end, waiting and turnaround
times. ``run`` is the entry point; ``scheduler_sim.cli`` wraps it for the
terminal.
"""

from .algorithms import run
from .errors import InvalidInputError
from .models import Algorithm, Process, ProcessResult

__all__ = ["Algorithm", "InvalidInputError", "Process", "ProcessResult", "run"]
