from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import SchedulingResult, TimelineBlock


def _width(block: TimelineBlock, scale: int) -> int:
    return max(1, block.duration * scale)


def _marker_row(blocks: List[TimelineBlock], scale: int) -> str:
    """
    Tick labels placed under each block boundary, left aligned on the tick.
    """
    row = "0"
    pos = 0
    for b in blocks:
        pos += _width(b, scale)
        label = str(b.end)
        # keep at least one space between neighbouring labels
        col = max(pos, len(row) + 1)
        row += " " * (col - len(row)) + label
    return row


def render_gantt(result: SchedulingResult, scale: int = 1) -> str:
    """
    Plain-text Gantt chart. Each block is duration * scale columns wide;
    idle time is drawn with dots.
    """
    if not result.timeline:
        return "(no execution)"

    line = "|"
    labels = " "

    for b in result.timeline:
        width = _width(b, scale)
        line += ("." if b.is_idle else "=") * width
        labels += b.label[:width].ljust(width)

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels.rstrip(),
            _marker_row(result.timeline, scale),
        ]
    )


def build_rich_gantt(result: SchedulingResult, scale: int = 1) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not result.timeline:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["blue", "green", "magenta", "yellow", "red", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()

    for b in result.timeline:
        width = _width(b, scale)
        if b.is_idle:
            timeline.append("░" * width, style="dim")
            labels.append(b.label[:width].ljust(width), style="dim")
        else:
            timeline.append(" " * width, style=f"on {pid_color(b.label)}")
            labels.append(b.label[:width].ljust(width), style="bold")

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title=f"Gantt Chart (total time {result.total_time})")
    return panel, _marker_row(result.timeline, scale)
