import pytest

from fcfs_cli.algorithms import compress_timeline, derive_time_markers, run_algorithm, schedule_fcfs
from fcfs_cli.errors import InvalidInput
from fcfs_cli.models import IDLE, Process, TimelineBlock


def _procs():
    return [
        Process("P3", arrival=2, burst=8),
        Process("P1", arrival=0, burst=5),
        Process("P2", arrival=1, burst=3),
        Process("P4", arrival=20, burst=2),
    ]


def _blocks(res):
    return [(b.label, b.start, b.end) for b in res.timeline]


def test_single_process():
    res = schedule_fcfs([Process("P1", arrival=0, burst=5)])
    p = res.processes[0]
    assert (p.pid, p.arrival, p.burst, p.completion, p.waiting, p.turnaround) == ("P1", 0, 5, 5, 0, 5)
    assert _blocks(res) == [("P1", 0, 5)]
    assert res.time_markers == [0, 5]
    assert res.total_time == 5


def test_idle_gap_before_first_arrival():
    res = schedule_fcfs([Process("P1", arrival=2, burst=3)])
    assert _blocks(res) == [(IDLE, 0, 2), ("P1", 2, 5)]
    assert res.processes[0].waiting == 0
    assert res.time_markers == [0, 2, 5]


def test_tie_broken_by_id():
    res = schedule_fcfs([Process("P2", arrival=0, burst=2), Process("P1", arrival=0, burst=3)])
    assert [p.pid for p in res.processes] == ["P1", "P2"]
    assert res.processes[0].completion == 3
    assert res.processes[1].completion == 5
    assert res.processes[1].waiting == 3


def test_tie_break_is_lexicographic():
    res = schedule_fcfs([Process("P10", arrival=0, burst=1), Process("P9", arrival=0, burst=1)])
    assert [p.pid for p in res.processes] == ["P10", "P9"]


def test_non_preemptive_back_to_back():
    res = schedule_fcfs([Process("P1", arrival=0, burst=4), Process("P2", arrival=2, burst=2)])
    p1, p2 = res.processes
    assert p1.completion == 4
    assert p2.start == 4
    assert p2.waiting == 2
    assert all(not b.is_idle for b in res.timeline)


def test_idle_between_processes():
    res = schedule_fcfs(_procs())
    assert [p.pid for p in res.processes] == ["P1", "P2", "P3", "P4"]
    assert _blocks(res) == [("P1", 0, 5), ("P2", 5, 8), ("P3", 8, 16), (IDLE, 16, 20), ("P4", 20, 22)]
    assert res.total_time == 22
    assert res.time_markers == [0, 5, 8, 16, 20, 22]


def test_invariants_hold():
    procs = _procs() + [Process("A", arrival=2, burst=1), Process("Z", arrival=40, burst=7)]
    res = schedule_fcfs(procs)

    assert [p.pid for p in res.processes] == [p.pid for p in sorted(procs, key=lambda p: (p.arrival, p.pid))]
    for p in res.processes:
        assert p.waiting >= 0
        assert p.turnaround >= p.burst

    assert res.timeline[0].start == 0
    for a, b in zip(res.timeline, res.timeline[1:]):
        assert a.end == b.start
        assert a.label != b.label
    assert sum(b.duration for b in res.timeline) == res.total_time
    assert res.total_time == max(p.completion for p in res.processes)

    for p in procs:
        assert sum(1 for b in res.timeline if b.label == p.pid) == 1


def test_repeated_calls_are_identical_and_input_untouched():
    procs = _procs()
    before = list(procs)
    assert schedule_fcfs(procs) == schedule_fcfs(procs)
    assert procs == before


def test_burst_above_ui_ceiling_is_scheduled():
    res = schedule_fcfs([Process("P1", arrival=0, burst=10_000)])
    assert res.total_time == 10_000


def test_empty_input_rejected():
    with pytest.raises(InvalidInput):
        schedule_fcfs([])


def test_idle_label_is_reserved():
    with pytest.raises(InvalidInput, match="reserved"):
        schedule_fcfs([Process(IDLE, arrival=2, burst=3)])


def test_duplicate_ids_rejected():
    with pytest.raises(InvalidInput, match="Duplicate"):
        schedule_fcfs([Process("P1", arrival=0, burst=1), Process("P1", arrival=3, burst=1)])


@pytest.mark.parametrize("arrival,burst", [(-1, 3), (0, 0), (0, -2)])
def test_out_of_range_values_rejected(arrival, burst):
    with pytest.raises(InvalidInput):
        schedule_fcfs([Process("P1", arrival=arrival, burst=burst)])


def test_compress_merges_adjacent_runs():
    blocks = compress_timeline([("P1", 0, 2), ("P1", 2, 5), (IDLE, 5, 5), (IDLE, 5, 7), ("P2", 7, 8)])
    assert blocks == [
        TimelineBlock("P1", 0, 5),
        TimelineBlock(IDLE, 5, 7),
        TimelineBlock("P2", 7, 8),
    ]


def test_derive_time_markers_deduplicates():
    assert derive_time_markers([TimelineBlock("P1", 0, 3), TimelineBlock("P2", 3, 9)]) == [0, 3, 9]
    assert derive_time_markers([]) == []


def test_run_algorithm_attaches_system_metrics():
    res = run_algorithm("FCFS", _procs())
    assert res.system.cpu_busy_time == sum(p.burst for p in _procs())
    assert res.system.idle_time == 4
    assert res.system.makespan == 22


def test_run_algorithm_unknown_name():
    with pytest.raises(ValueError, match="Unknown"):
        run_algorithm("sjf", _procs())
