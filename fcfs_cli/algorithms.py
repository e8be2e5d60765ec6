from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from .errors import InvalidInput
from .metrics import compute_system_metrics
from .models import IDLE, Process, ScheduledProcess, SchedulingResult, TimelineBlock

logger = logging.getLogger(__name__)


def _check_processes(processes: Sequence[Process]) -> None:
    if not processes:
        raise InvalidInput("At least one process is required")

    seen: set[str] = set()
    for p in processes:
        if p.pid in seen:
            raise InvalidInput(f"Duplicate process id '{p.pid}'")
        seen.add(p.pid)
        if p.pid == IDLE:
            raise InvalidInput(f"Process id '{IDLE}' is reserved for idle time")
        if p.arrival < 0:
            raise InvalidInput(f"Process {p.pid}: arrival time must be non-negative (got {p.arrival})")
        if p.burst <= 0:
            raise InvalidInput(f"Process {p.pid}: burst time must be positive (got {p.burst})")


def compress_timeline(intervals: Iterable[Tuple[str, int, int]]) -> List[TimelineBlock]:
    """
    Merge chronological (label, start, end) intervals into maximal blocks.

    Intervals must already be contiguous and in order; adjacent intervals
    with the same label collapse into one block, empty intervals are dropped.
    """
    blocks: List[TimelineBlock] = []
    for label, start, end in intervals:
        if end <= start:
            continue
        if blocks and blocks[-1].label == label and blocks[-1].end == start:
            blocks[-1].end = end
        else:
            blocks.append(TimelineBlock(label=label, start=start, end=end))
    return blocks


def derive_time_markers(blocks: Iterable[TimelineBlock]) -> List[int]:
    markers: set[int] = set()
    for b in blocks:
        markers.add(b.start)
        markers.add(b.end)
    return sorted(markers)


def schedule_fcfs(processes: Sequence[Process]) -> SchedulingResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes run in (arrival, pid) order; the CPU idles until the next
    arrival whenever the ready queue is empty.
    """
    _check_processes(processes)

    processes_sorted = sorted(processes, key=lambda p: (p.arrival, p.pid))

    clock = 0
    intervals: List[Tuple[str, int, int]] = []
    scheduled: List[ScheduledProcess] = []

    for p in processes_sorted:
        if p.arrival > clock:
            intervals.append((IDLE, clock, p.arrival))
            clock = p.arrival

        completion = clock + p.burst
        intervals.append((p.pid, clock, completion))

        turnaround = completion - p.arrival
        scheduled.append(
            ScheduledProcess(
                pid=p.pid,
                arrival=p.arrival,
                burst=p.burst,
                completion=completion,
                turnaround=turnaround,
                waiting=turnaround - p.burst,
            )
        )

        clock = completion

    timeline = compress_timeline(intervals)
    time_markers = derive_time_markers(timeline)
    total_time = time_markers[-1] if time_markers else 0

    logger.debug(
        "FCFS order %s, %d blocks, total time %d",
        [p.pid for p in scheduled],
        len(timeline),
        total_time,
    )

    return SchedulingResult(
        processes=scheduled,
        timeline=timeline,
        time_markers=time_markers,
        total_time=total_time,
    )


ALGORITHMS = {
    "fcfs": schedule_fcfs,
}


def run_algorithm(name: str, processes: Sequence[Process]) -> SchedulingResult:
    """
    Dispatch to the requested algorithm and attach system metrics.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown or unimplemented algorithm '{name}'")

    func = ALGORITHMS[name]
    result = func(processes)
    compute_system_metrics(result)
    return result
