from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .errors import InvalidInput
from .models import IDLE, Process

logger = logging.getLogger(__name__)

MAX_BURST = 500


@dataclass
class ProcessEntry:
    """
    A process row as typed or loaded, before validation. Arrival and burst
    are None when left blank.
    """

    pid: str
    arrival: Optional[int] = None
    burst: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return self.arrival is not None and self.burst is not None


def validate_processes(entries: Iterable[ProcessEntry], max_burst: Optional[int] = MAX_BURST) -> List[Process]:
    """
    Turn raw entries into schedulable processes.

    Rows with a blank arrival or burst are skipped. Any remaining row that is
    out of range rejects the whole request, as do duplicate ids or an empty
    result. A max_burst of None disables the burst ceiling.
    """
    complete: List[ProcessEntry] = []
    for entry in entries:
        if entry.is_complete:
            complete.append(entry)
        else:
            logger.warning("Skipping %s: arrival and burst time are both required", entry.pid)

    if not complete:
        raise InvalidInput("Please enter valid Arrival and Burst times for at least one process.")

    for entry in complete:
        too_long = max_burst is not None and entry.burst > max_burst
        if entry.arrival < 0 or entry.burst <= 0 or too_long:
            limit = f" (max {max_burst})" if max_burst is not None else ""
            raise InvalidInput(f"Arrival Time must be non-negative, and Burst Time must be positive{limit}.")

    if any(entry.pid == IDLE for entry in complete):
        raise InvalidInput(f"Process id '{IDLE}' is reserved for idle time")

    pids = [entry.pid for entry in complete]
    duplicates = sorted({pid for pid in pids if pids.count(pid) > 1})
    if duplicates:
        raise InvalidInput(f"Process ids must be unique (duplicated: {', '.join(duplicates)})")

    return [Process(pid=e.pid, arrival=e.arrival, burst=e.burst) for e in complete]
