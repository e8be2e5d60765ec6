from __future__ import annotations

from typing import List

from .models import SchedulingResult, ScheduledProcess, SystemMetrics


def compute_system_metrics(result: SchedulingResult) -> SystemMetrics:
    """
    Compute busy/idle time, throughput and CPU utilization from the
    timeline of a finished schedule.
    """
    if not result.processes:
        system = SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    makespan = max(p.completion for p in result.processes)
    cpu_busy_time = sum(b.duration for b in result.timeline if not b.is_idle)
    idle_time = sum(b.duration for b in result.timeline if b.is_idle)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=idle_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[ScheduledProcess]) -> dict:
    """
    Return averages of waiting and turnaround time.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting for p in processes) / n,
        "avg_turnaround": sum(p.turnaround for p in processes) / n,
    }
