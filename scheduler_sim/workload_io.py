from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, List, Mapping, Optional

from .errors import InvalidInputError
from .models import Process

# Accepted spellings per field; camelCase matches the web app's export format.
FIELD_ALIASES = {
    "id": ("id", "pid"),
    "name": ("name",),
    "arrival_time": ("arrival_time", "arrivalTime"),
    "burst_time": ("burst_time", "burstTime"),
    "priority": ("priority",),
}


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [process_from_mapping(entry, position) for position, entry in enumerate(raw, start=1)]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return [process_from_mapping(row, position) for position, row in enumerate(reader, start=1)]


def _lookup(mapping: Mapping[str, Any], field: str) -> Optional[Any]:
    for key in FIELD_ALIASES[field]:
        value = mapping.get(key)
        if value not in (None, ""):
            return value
    return None


def _as_int(mapping: Mapping[str, Any], field: str, default: Optional[int] = None) -> int:
    value = _lookup(mapping, field)
    if value is None:
        if default is None:
            raise InvalidInputError(field, f"missing in entry {dict(mapping)!r}")
        return default
    # int() would truncate 2.7 to 2.
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidInputError(field, f"expected an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(field, f"expected an integer, got {value!r}") from exc


def process_from_mapping(mapping: Mapping[str, Any], position: int) -> Process:
    """
    Build a Process from one JSON object or CSV row.

    ``id`` defaults to the 1-based position, ``name`` to ``P<id>`` and
    ``priority`` to 0. Range checks are left to the engine.
    """
    if not isinstance(mapping, Mapping):
        raise InvalidInputError("process", f"entry {position} is not an object: {mapping!r}")

    pid = _as_int(mapping, "id", default=position)
    name = _lookup(mapping, "name")

    return Process(
        id=pid,
        name=str(name) if name is not None else f"P{pid}",
        arrival_time=_as_int(mapping, "arrival_time"),
        burst_time=_as_int(mapping, "burst_time"),
        priority=_as_int(mapping, "priority", default=0),
    )
