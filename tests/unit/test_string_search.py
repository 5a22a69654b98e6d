"""Tests for the instrumented KMP search."""

import pytest

from replay.string_search import (
    SearchStep,
    SearchTrace,
    alignment,
    found_positions,
    search,
)


class TestSearchMatches:
    def test_single_match(self):
        trace = search("ABABDABABCABAB", "ABABC")
        assert trace.matches == (5,)

    def test_overlapping_matches(self):
        assert search("AAAA", "AA").matches == (0, 1, 2)

    def test_no_match(self):
        assert search("ABCDEF", "XYZ").matches == ()

    def test_pattern_longer_than_text(self):
        assert search("AB", "ABC").matches == ()

    def test_pattern_equals_text(self):
        assert search("ABC", "ABC").matches == (0,)

    def test_non_ascii_indices_are_code_points(self):
        assert search("naïve naïve", "ïve").matches == (2, 8)
        assert search("a😀b😀", "😀").matches == (1, 3)

    def test_precomputed_table_is_used(self):
        trace = search("AAAA", "AA", table=[-1, 0, 1])
        assert trace.table == (-1, 0, 1)
        assert trace.matches == (0, 1, 2)

    def test_missized_table_is_rejected(self):
        with pytest.raises(ValueError, match="expected 3"):
            search("AAAA", "AA", table=[-1, 0])

    def test_table_without_sentinel_is_rejected(self):
        with pytest.raises(ValueError, match="start with -1"):
            search("AC", "AB", table=[0, 0, 0])

    def test_table_entry_not_below_its_index_is_rejected(self):
        with pytest.raises(ValueError, match=r"b\[2\] = 2"):
            search("AC", "AB", table=[-1, 0, 2])

    def test_table_entry_below_sentinel_is_rejected(self):
        with pytest.raises(ValueError, match=r"b\[1\] = -2"):
            search("AC", "AB", table=[-1, -2, 0])

    def test_valid_but_non_standard_table_terminates(self):
        trace = search("AAAA", "AA", table=[-1, -1, -1])
        assert trace.matches == (0,)


class TestDegenerateInputs:
    def test_empty_pattern_never_matches(self):
        trace = search("ABC", "")
        assert trace.matches == ()
        assert trace.kinds() == ["init"]

    def test_empty_text(self):
        trace = search("", "A")
        assert trace.matches == ()
        assert trace.kinds() == ["init"]

    def test_both_empty(self):
        assert search("", "").kinds() == ["init"]


class TestSearchFrames:
    def test_returns_search_trace(self):
        assert isinstance(search("AB", "B"), SearchTrace)

    def test_overlapping_kinds(self):
        trace = search("AAAA", "AA")
        assert trace.kinds() == [
            "init",
            "compare",
            "advance",
            "compare",
            "advance",
            "found",
            "fallback",
            "compare",
            "advance",
            "found",
            "fallback",
            "compare",
            "advance",
            "found",
            "fallback",
        ]

    def test_init_frame(self):
        init = search("AB", "B")[0]
        assert init.kind == SearchStep.INIT
        assert (init.text_index, init.pattern_index) == (0, 0)
        assert init.matches == ()
        assert init.note == "Start at i=0, j=0."

    def test_found_then_fallback_continues_scanning(self):
        trace = search("AAAA", "AA")
        found = trace[5]
        assert found.kind == SearchStep.FOUND
        assert found.match_index == 0
        assert found.matches == (0,)
        follow = trace[6]
        assert follow.kind == SearchStep.FALLBACK
        assert follow.prev_pattern_index == 2
        assert follow.pattern_index == 1
        assert follow.note == "Continue with j = b[2] = 1."

    def test_mismatch_fallback_records_both_indices(self):
        trace = search("AC", "AB")
        mismatch = next(f for f in trace if f.kind == SearchStep.COMPARE and f.match is False)
        assert (mismatch.text_index, mismatch.pattern_index) == (1, 1)
        fallback = trace[mismatch.step_index + 1]
        assert fallback.kind == SearchStep.FALLBACK
        assert fallback.prev_pattern_index == 1
        assert fallback.pattern_index == 0

    def test_notes_show_spaces(self):
        trace = search("A B", " ")
        assert trace[1].note == "Compare text[0]=A and pattern[0]=[space]: mismatch."

    def test_match_list_snapshots_do_not_grow_retroactively(self):
        trace = search("AAAA", "AA")
        assert [f.matches for f in trace if f.kind == SearchStep.FOUND] == [
            (0,),
            (0, 1),
            (0, 1, 2),
        ]
        assert trace[1].matches == ()

    def test_repeated_runs_are_identical(self):
        assert search("ABABDABABCABAB", "ABAB") == search("ABABDABABCABAB", "ABAB")


class TestFoundPositions:
    def test_covers_every_matched_character(self):
        assert found_positions([0, 1, 2], 2, 4) == {0, 1, 2, 3}

    def test_clipped_to_text_length(self):
        assert found_positions([3], 3, 4) == {3}

    def test_empty_pattern(self):
        assert found_positions([0], 0, 4) == frozenset()


class TestAlignment:
    def test_alignment_follows_pattern_index(self):
        trace = search("ABABDABABCABAB", "ABABC")
        advance = next(f for f in trace if f.kind == SearchStep.ADVANCE and f.text_index == 4)
        assert alignment(advance) == 0

    def test_negative_pattern_index_uses_text_index(self):
        trace = search("B", "A")
        fallback = trace[2]
        assert fallback.pattern_index == -1
        assert alignment(fallback) == 0
