from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Optional

from .models import SchedulingResult
from .validation import ProcessEntry


def load_workload(path: str | Path) -> List[ProcessEntry]:
    """
    Load a workload from a JSON or CSV file into unvalidated process entries.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[ProcessEntry]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    entries: List[ProcessEntry] = []
    for entry in raw:
        entries.append(_entry_from_mapping(entry))

    return entries


def _load_csv(path: Path) -> List[ProcessEntry]:
    entries: List[ProcessEntry] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            entries.append(_entry_from_mapping(row))
    return entries


def _optional_int(value) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise TypeError("boolean is not a time value")
    if isinstance(value, float) and not value.is_integer():
        raise TypeError(f"time values must be whole numbers (got {value})")
    return int(value)


def _entry_from_mapping(mapping) -> ProcessEntry:
    try:
        pid = mapping["id"] if "id" in mapping else mapping["pid"]
        if pid is None or not str(pid).strip():
            raise ValueError("empty process id")
        arrival = _optional_int(mapping.get("arrival"))
        burst = _optional_int(mapping.get("burst"))
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    return ProcessEntry(pid=str(pid).strip(), arrival=arrival, burst=burst)


def result_to_dict(result: SchedulingResult) -> dict:
    """
    Serialise a result into the JSON response shape used by front ends.
    """
    return {
        "scheduledProcesses": [
            {
                "id": p.pid,
                "arrival": p.arrival,
                "burst": p.burst,
                "completion": p.completion,
                "waiting": p.waiting,
                "turnaround": p.turnaround,
            }
            for p in result.processes
        ],
        "timeline": [{"label": b.label, "start": b.start, "end": b.end} for b in result.timeline],
        "timeMarkers": list(result.time_markers),
        "totalTime": result.total_time,
    }


def dump_result(result: SchedulingResult, path: str | Path | None = None) -> str:
    """
    Return the result as indented JSON, also writing it to path when given.
    """
    text = json.dumps(result_to_dict(result), indent=2)
    if path is not None:
        Path(path).write_text(text + "\n", encoding="utf-8")
    return text

