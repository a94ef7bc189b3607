from pathlib import Path

from scheduler_sim.cli import build_parser, main


def _workload(tmp_path: Path, body: str) -> Path:
    p = tmp_path / "w.json"
    p.write_text(body)
    return p


GOOD = ('[{"id":1,"name":"P1","arrival_time":0,"burst_time":4},'
        '{"id":2,"name":"P2","arrival_time":1,"burst_time":1}]')


def test_parser_defaults():
    args = build_parser().parse_args(["run", "-a", "rr", "-w", "w.json"])
    assert args.quantum == 2
    assert args.admit_arrivals is False
    assert args.log_level == "WARNING"


def test_run_prints_tables(tmp_path: Path, capsys):
    path = _workload(tmp_path, GOOD)
    assert main(["run", "-a", "srtf", "-w", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Algorithm:" in out
    assert "SRTF" in out
    assert "Per-process metrics" in out


def test_compare_runs_every_algorithm(tmp_path: Path, capsys):
    path = _workload(tmp_path, GOOD)
    assert main(["compare", "-w", str(path), "--admit-arrivals"]) == 0
    out = capsys.readouterr().out
    for name in ("FCFS", "RR", "Priority", "SJF", "SRTF"):
        assert name in out


def test_invalid_workload_reports_error(tmp_path: Path, capsys):
    path = _workload(tmp_path, '[{"id":1,"arrival_time":0,"burst_time":0}]')
    assert main(["run", "-a", "fcfs", "-w", str(path)]) == 2
    assert "burst_time" in capsys.readouterr().out


def test_invalid_quantum_reports_error(tmp_path: Path, capsys):
    path = _workload(tmp_path, GOOD)
    assert main(["run", "-a", "rr", "-q", "0", "-w", str(path)]) == 2
    assert "quantum" in capsys.readouterr().out


def test_unknown_algorithm_reports_error(tmp_path: Path, capsys):
    path = _workload(tmp_path, GOOD)
    assert main(["run", "-a", "lottery", "-w", str(path)]) == 2
    assert "unknown algorithm" in capsys.readouterr().out
