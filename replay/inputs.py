"""Caller-side input helpers: sanitizing raw widget input and display formatting."""

from __future__ import annotations

from . import constants


def sanitize_input(value: str, max_length: int) -> str:
    """Replace control whitespace with spaces and truncate to *max_length* code points."""
    for ch in constants.SANITIZED_CHARS:
        value = value.replace(ch, " ")
    return value[:max_length]


def display_char(ch: str) -> str:
    """Render a character for notes; a bare space is made visible."""
    return constants.SPACE_DISPLAY if ch == " " else ch
