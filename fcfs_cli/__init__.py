"""
FCFS scheduler CLI package.

Provides a First-Come First-Serve CPU scheduling simulator with a Gantt
chart and per-process metrics rendered in the terminal.
"""

from .algorithms import schedule_fcfs
from .errors import InvalidInput
from .models import IDLE, Process, SchedulingResult

__all__ = ["cli", "schedule_fcfs", "InvalidInput", "IDLE", "Process", "SchedulingResult"]
