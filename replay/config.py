"""Trace configuration (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass

from . import constants


@dataclass(frozen=True)
class TraceConfig:
    """Groups caller-side input limits and output options."""

    max_text_length: int = constants.MAX_TEXT_LENGTH
    max_pattern_length: int = constants.MAX_PATTERN_LENGTH
    sanitize: bool = True
