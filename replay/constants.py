"""Named constants shared by the tracers, the API and the CLI."""

from __future__ import annotations

FAILURE_SENTINEL = -1

DEFAULT_TEXT = "ABABDABABCABAB"
DEFAULT_PATTERN = "ABABC"

MAX_TEXT_LENGTH = 24
MAX_PATTERN_LENGTH = 12

SPACE_DISPLAY = "[space]"
SANITIZED_CHARS: tuple[str, ...] = ("\r", "\n", "\t")

PRESET_BRIDGE = "bridge"
PRESET_TRIPLE = "triple"
DEFAULT_PRESET = PRESET_BRIDGE
