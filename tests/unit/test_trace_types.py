"""Tests for the shared Trace container and TraceCursor."""

import json

import pytest

from replay.prefix_function import build_failure_trace
from replay.scc import decompose
from replay.string_search import search
from replay.trace_types import Trace, TraceCursor


class TestTrace:
    def test_sequence_protocol(self):
        trace = build_failure_trace("ABA")
        assert len(trace) == len(trace.frames)
        assert list(trace) == list(trace.frames)
        assert trace[-1] is trace.last
        assert trace[1:3] == trace.frames[1:3]

    def test_frames_are_stored_as_tuple(self):
        trace = Trace(frames=[])
        assert trace.frames == ()

    def test_frame_to_dict_is_json_ready(self):
        frame = search("AAAA", "AA")[5]
        d = frame.to_dict()
        assert d["kind"] == "found"
        assert d["matches"] == [0]
        assert d["match_index"] == 0
        json.dumps(d)

    def test_nested_tuples_become_lists(self):
        trace = decompose(["A", "B"], [(0, 1), (1, 0)])
        d = trace.last.to_dict()
        assert d["components"] == [[0, 1]]
        assert d["phase"] == "done"
        assert d["active_edge"] is None

    def test_trace_to_dict(self):
        trace = build_failure_trace("AB")
        d = trace.to_dict()
        assert len(d["frames"]) == len(trace)
        assert d["frames"][0]["table"] == [-1, 0, 0]


class TestTraceCursor:
    def test_starts_at_first_frame(self):
        trace = build_failure_trace("ABABC")
        cursor = TraceCursor(trace)
        assert cursor.position == 0
        assert cursor.frame is trace[0]
        assert cursor.at_start

    def test_next_and_previous(self):
        trace = build_failure_trace("ABABC")
        cursor = TraceCursor(trace)
        assert cursor.next() is trace[1]
        assert cursor.next() is trace[2]
        assert cursor.previous() is trace[1]

    def test_previous_at_start_stays(self):
        cursor = TraceCursor(build_failure_trace("AB"))
        cursor.previous()
        assert cursor.position == 0

    def test_next_at_end_stays(self):
        trace = build_failure_trace("AB")
        cursor = TraceCursor(trace)
        cursor.last()
        assert cursor.at_end
        assert cursor.next() is trace.last
        assert cursor.position == len(trace) - 1

    def test_seek_is_clamped(self):
        trace = build_failure_trace("ABABC")
        cursor = TraceCursor(trace)
        assert cursor.seek(1000) is trace.last
        assert cursor.seek(-5) is trace[0]
        assert cursor.seek(4) is trace[4]

    def test_initial_position_is_clamped(self):
        trace = build_failure_trace("AB")
        assert TraceCursor(trace, position=99).position == len(trace) - 1

    def test_single_frame_trace(self):
        cursor = TraceCursor(search("", "A"))
        assert cursor.at_start and cursor.at_end
        assert cursor.next().kind.value == "init"

    def test_first_after_scrubbing(self):
        trace = decompose(["A"], [])
        cursor = TraceCursor(trace)
        cursor.last()
        assert cursor.first() is trace[0]

    def test_empty_trace_is_rejected(self):
        with pytest.raises(ValueError, match="empty trace"):
            TraceCursor(Trace())
