"""Prefix-function (KMP failure table) builder, instrumented for replay."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .trace_types import Frame, Trace
from . import constants

logger = logging.getLogger(__name__)


class FailureStep(str, Enum):
    INIT = "init"
    COMPARE = "compare"
    FALLBACK = "fallback"
    SET = "set"


@dataclass(frozen=True)
class FailureFrame(Frame):
    """Snapshot of the failure-table builder.

    ``table`` always has ``len(pattern) + 1`` entries; only the prefix up to
    ``filled_until`` is meaningful, later entries are 0 placeholders.
    """

    i_index: int
    j_index: int
    filled_until: int
    table: tuple[int, ...]
    set_index: int | None = None
    next_j: int | None = None
    match: bool | None = None

    @property
    def filled(self) -> tuple[int, ...]:
        return self.table[: self.filled_until + 1]


@dataclass(frozen=True)
class FailureTrace(Trace[FailureFrame]):
    pattern: tuple[str, ...] = ()

    @property
    def table(self) -> tuple[int, ...]:
        return self.last.table


def failure_table(pattern: Sequence[str]) -> tuple[int, ...]:
    """Return the failure table of *pattern* without recording a trace.

    Entry 0 is the ``-1`` sentinel; entry ``i`` is the length of the
    longest proper border of ``pattern[:i]``.
    """
    chars = tuple(pattern)
    b = [0] * (len(chars) + 1)
    b[0] = constants.FAILURE_SENTINEL
    i, j = 0, constants.FAILURE_SENTINEL
    while i < len(chars):
        while j >= 0 and chars[i] != chars[j]:
            j = b[j]
        i += 1
        j += 1
        b[i] = j
    return tuple(b)


def build_failure_trace(pattern: Sequence[str]) -> FailureTrace:
    """Build the failure table of *pattern*, recording every step.

    Emits ``compare`` (mismatch) and ``fallback`` pairs while the current
    border cannot be extended, a ``compare`` (match) when it can, and a
    ``set`` frame for every table entry written. An empty pattern yields
    only the ``init`` frame.
    """
    chars = tuple(pattern)
    m = len(chars)
    b = [0] * (m + 1)
    b[0] = constants.FAILURE_SENTINEL
    frames: list[FailureFrame] = []
    i, j = 0, constants.FAILURE_SENTINEL
    filled_until = 0

    def emit(kind: FailureStep, note: str, i_index: int, j_index: int, **extra) -> None:
        frames.append(
            FailureFrame(
                step_index=len(frames),
                kind=kind,
                note=note,
                i_index=i_index,
                j_index=j_index,
                filled_until=filled_until,
                table=tuple(b),
                **extra,
            )
        )

    emit(FailureStep.INIT, "Set b[0] = -1. Start with i=0, j=-1.", -1, -1)

    while i < m:
        while j >= 0 and chars[i] != chars[j]:
            emit(
                FailureStep.COMPARE,
                f"Compare pattern[{i}] and pattern[{j}]: mismatch.",
                i,
                j,
                match=False,
            )
            next_j = b[j]
            emit(
                FailureStep.FALLBACK,
                f"Fallback j from {j} to b[{j}] = {next_j}.",
                i,
                j,
                next_j=next_j,
            )
            j = next_j

        if j >= 0:
            emit(
                FailureStep.COMPARE,
                f"Compare pattern[{i}] and pattern[{j}]: match.",
                i,
                j,
                match=True,
            )

        i += 1
        j += 1
        b[i] = j
        filled_until = i
        emit(
            FailureStep.SET,
            f"Advance to i={i}, j={j}. Set b[{i}] = {j}.",
            i,
            j,
            set_index=i,
        )

    logger.debug("Failure table for %d-char pattern: %d frames", m, len(frames))
    return FailureTrace(frames=tuple(frames), pattern=chars)
