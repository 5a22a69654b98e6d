"""KMP string search, instrumented for replay."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .inputs import display_char
from .prefix_function import failure_table
from .trace_types import Frame, Trace
from . import constants

logger = logging.getLogger(__name__)


class SearchStep(str, Enum):
    INIT = "init"
    COMPARE = "compare"
    FALLBACK = "fallback"
    ADVANCE = "advance"
    FOUND = "found"


@dataclass(frozen=True)
class SearchFrame(Frame):
    """Snapshot of the search loop.

    On ``fallback`` frames ``pattern_index`` already holds the new value and
    ``prev_pattern_index`` the one that was abandoned.
    """

    text_index: int
    pattern_index: int
    matches: tuple[int, ...]
    prev_pattern_index: int | None = None
    match: bool | None = None
    match_index: int | None = None


@dataclass(frozen=True)
class SearchTrace(Trace[SearchFrame]):
    text: tuple[str, ...] = ()
    pattern: tuple[str, ...] = ()
    table: tuple[int, ...] = ()

    @property
    def matches(self) -> tuple[int, ...]:
        return self.last.matches


def search(
    text: Sequence[str],
    pattern: Sequence[str],
    table: Sequence[int] | None = None,
) -> SearchTrace:
    """Find every (possibly overlapping) occurrence of *pattern* in *text*.

    Args:
        text: Characters to scan.
        pattern: Characters to look for.
        table: Precomputed failure table for *pattern*; rebuilt when omitted.

    Returns:
        A SearchTrace whose last frame holds the ascending match list.
        Empty text or an empty pattern produce only the ``init`` frame and
        no matches.

    Raises:
        ValueError: *table* has the wrong length, does not start with the
            -1 sentinel, or has an entry b[k] outside [-1, k).
    """
    text_chars = tuple(text)
    pattern_chars = tuple(pattern)
    n = len(text_chars)
    m = len(pattern_chars)

    if table is None:
        b = failure_table(pattern_chars)
    else:
        b = tuple(table)
        if len(b) != m + 1:
            raise ValueError(
                f"Failure table has {len(b)} entries, "
                f"expected {m + 1} for a {m}-char pattern"
            )
        if b[0] != constants.FAILURE_SENTINEL:
            raise ValueError(f"Failure table must start with -1, got {b[0]}")
        for k in range(1, m + 1):
            if not -1 <= b[k] < k:
                raise ValueError(
                    f"Failure table entry b[{k}] = {b[k]} is outside [-1, {k})"
                )

    frames: list[SearchFrame] = []
    matches: list[int] = []

    def emit(kind: SearchStep, note: str, text_index: int, pattern_index: int, **extra) -> None:
        frames.append(
            SearchFrame(
                step_index=len(frames),
                kind=kind,
                note=note,
                text_index=text_index,
                pattern_index=pattern_index,
                matches=tuple(matches),
                **extra,
            )
        )

    def describe(i: int, j: int) -> str:
        return (
            f"Compare text[{i}]={display_char(text_chars[i])} "
            f"and pattern[{j}]={display_char(pattern_chars[j])}"
        )

    i, j = 0, 0
    emit(SearchStep.INIT, "Start at i=0, j=0.", 0, 0)

    if n == 0 or m == 0:
        return SearchTrace(frames=tuple(frames), text=text_chars, pattern=pattern_chars, table=b)

    while i < n:
        while j >= 0 and text_chars[i] != pattern_chars[j]:
            emit(SearchStep.COMPARE, f"{describe(i, j)}: mismatch.", i, j, match=False)
            next_j = b[j]
            emit(
                SearchStep.FALLBACK,
                f"Fallback j from {j} to b[{j}] = {next_j}.",
                i,
                next_j,
                prev_pattern_index=j,
            )
            j = next_j

        if j >= 0:
            emit(SearchStep.COMPARE, f"{describe(i, j)}: match.", i, j, match=True)

        i += 1
        j += 1
        emit(SearchStep.ADVANCE, f"Advance to i={i}, j={j}.", i, j)

        if j == m:
            match_index = i - j
            matches.append(match_index)
            emit(
                SearchStep.FOUND,
                f"Found match starting at index {match_index}.",
                i,
                j,
                match_index=match_index,
            )
            next_j = b[j]
            emit(
                SearchStep.FALLBACK,
                f"Continue with j = b[{j}] = {next_j}.",
                i,
                next_j,
                prev_pattern_index=j,
            )
            j = next_j

    logger.info(
        "Searched %d chars for %d-char pattern: %d match(es), %d frames",
        n,
        m,
        len(matches),
        len(frames),
    )
    return SearchTrace(frames=tuple(frames), text=text_chars, pattern=pattern_chars, table=b)


def found_positions(
    matches: Sequence[int], pattern_length: int, text_length: int
) -> frozenset[int]:
    """Return every text position covered by at least one match."""
    if pattern_length == 0:
        return frozenset()
    return frozenset(
        start + offset
        for start in matches
        for offset in range(pattern_length)
        if start + offset < text_length
    )


def alignment(frame: SearchFrame) -> int:
    """Offset in the text where the pattern is currently aligned."""
    if frame.pattern_index >= 0:
        return frame.text_index - frame.pattern_index
    return frame.text_index
