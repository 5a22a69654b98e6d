"""Trace data types for step-by-step algorithm replay."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Generic, Iterator, TypeVar


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (tuple, list)):
        return [_jsonable(v) for v in value]
    return value


def _clamp(value: int, low: int, high: int) -> int:
    return min(high, max(low, value))


@dataclass(frozen=True)
class Frame:
    """A single observable step of an instrumented algorithm.

    Tracer-specific subclasses add cursor fields and tuple snapshots of
    every piece of working state visible at this step, so a frame can be
    rendered without looking at its neighbours.
    """

    step_index: int
    kind: Enum
    note: str

    def to_dict(self) -> dict:
        return {f.name: _jsonable(getattr(self, f.name)) for f in fields(self)}


F = TypeVar("F", bound=Frame)


@dataclass(frozen=True)
class Trace(Generic[F]):
    """Complete, ordered trace of one algorithm run on one fixed input.

    Behaves as a read-only sequence of frames. Summaries exposed by the
    subclasses are read off the last frame.
    """

    frames: tuple[F, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "frames", tuple(self.frames))

    def __len__(self) -> int:
        return len(self.frames)

    def __getitem__(self, index):
        return self.frames[index]

    def __iter__(self) -> Iterator[F]:
        return iter(self.frames)

    @property
    def last(self) -> F:
        return self.frames[-1]

    def kinds(self) -> list[str]:
        return [frame.kind.value for frame in self.frames]

    def to_dict(self) -> dict:
        return {"frames": [frame.to_dict() for frame in self.frames]}


@dataclass
class TraceCursor(Generic[F]):
    """Scrub position over a finished trace.

    Every move is clamped into ``[0, len(trace) - 1]``; moving past either
    end leaves the cursor on the boundary frame. Every tracer emits at
    least one frame, so an empty trace is rejected with ``ValueError``.
    """

    trace: Trace[F]
    position: int = 0

    def __post_init__(self) -> None:
        if not len(self.trace):
            raise ValueError("Cannot scrub an empty trace")
        self.position = self._clamped(self.position)

    def _clamped(self, index: int) -> int:
        return _clamp(index, 0, len(self.trace) - 1)

    @property
    def frame(self) -> F:
        return self.trace[self.position]

    @property
    def at_start(self) -> bool:
        return self.position == 0

    @property
    def at_end(self) -> bool:
        return self.position == len(self.trace) - 1

    def seek(self, index: int) -> F:
        self.position = self._clamped(index)
        return self.frame

    def next(self) -> F:
        return self.seek(self.position + 1)

    def previous(self) -> F:
        return self.seek(self.position - 1)

    def first(self) -> F:
        return self.seek(0)

    def last(self) -> F:
        return self.seek(len(self.trace) - 1)
