from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

IDLE = "IDLE"


@dataclass(frozen=True)
class Process:
    pid: str
    arrival: int
    burst: int


@dataclass
class ScheduledProcess:
    pid: str
    arrival: int
    burst: int
    completion: int
    turnaround: int
    waiting: int

    @property
    def start(self) -> int:
        return self.completion - self.burst


@dataclass
class TimelineBlock:
    """
    One maximal run of CPU time attributed to a process or to IDLE.
    """

    label: str
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def is_idle(self) -> bool:
        return self.label == IDLE


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class SchedulingResult:
    processes: List[ScheduledProcess] = field(default_factory=list)
    timeline: List[TimelineBlock] = field(default_factory=list)
    time_markers: List[int] = field(default_factory=list)
    total_time: int = 0
    system: Optional[SystemMetrics] = None
