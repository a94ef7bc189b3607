import pytest

from scheduler_sim.algorithms import run, schedule_rr, schedule_sjf
from scheduler_sim.errors import InvalidInputError
from scheduler_sim.models import Algorithm, Process


def _ok():
    return Process(1, "ok", arrival_time=0, burst_time=3)


@pytest.mark.parametrize("algorithm", [a.value for a in Algorithm])
def test_zero_burst_rejected(algorithm):
    procs = [_ok(), Process(2, "empty", arrival_time=1, burst_time=0)]
    with pytest.raises(InvalidInputError) as excinfo:
        run(algorithm, procs, quantum=2)
    assert excinfo.value.field == "burst_time"
    assert "burst_time" in str(excinfo.value)


@pytest.mark.parametrize("algorithm", [a.value for a in Algorithm])
def test_negative_arrival_rejected(algorithm):
    procs = [Process(1, "early", arrival_time=-1, burst_time=2)]
    with pytest.raises(InvalidInputError) as excinfo:
        run(algorithm, procs, quantum=2)
    assert excinfo.value.field == "arrival_time"


@pytest.mark.parametrize("quantum", [0, -3, None])
def test_round_robin_requires_positive_quantum(quantum):
    with pytest.raises(InvalidInputError) as excinfo:
        run("RR", [_ok()], quantum=quantum)
    assert excinfo.value.field == "quantum"


def test_round_robin_quantum_checked_even_for_empty_input():
    with pytest.raises(InvalidInputError):
        schedule_rr([], quantum=0)


def test_duplicate_ids_rejected():
    procs = [_ok(), Process(1, "twin", arrival_time=2, burst_time=1)]
    with pytest.raises(InvalidInputError) as excinfo:
        run("FCFS", procs)
    assert excinfo.value.field == "id"


def test_non_integer_times_rejected():
    with pytest.raises(InvalidInputError) as excinfo:
        schedule_sjf([Process(1, "frac", arrival_time=0, burst_time=1.5)])
    assert excinfo.value.field == "burst_time"


def test_invalid_input_error_is_a_value_error():
    with pytest.raises(ValueError):
        run("SRTF", [Process(1, "bad", arrival_time=0, burst_time=0)])
