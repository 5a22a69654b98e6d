"""Built-in graph presets."""

from __future__ import annotations

from .graph_types import GraphSpec
from . import constants

PRESETS: tuple[GraphSpec, ...] = (
    GraphSpec(
        id=constants.PRESET_BRIDGE,
        name="Two SCCs with a bridge",
        description="Two cycles connected by a one-way bridge.",
        nodes=["A", "B", "C", "D", "E", "F"],
        edges=[(0, 1), (1, 2), (2, 0), (2, 3), (3, 4), (4, 5), (5, 3)],
    ),
    GraphSpec(
        id=constants.PRESET_TRIPLE,
        name="Three SCCs in a chain",
        description="Three SCCs linked by one-way edges.",
        nodes=["A", "B", "C", "D", "E", "F", "G"],
        edges=[(0, 1), (1, 2), (2, 0), (2, 3), (3, 4), (4, 3), (4, 5), (5, 6), (6, 5)],
    ),
)

PRESET_IDS: tuple[str, ...] = tuple(preset.id for preset in PRESETS)


def get_preset(preset_id: str) -> GraphSpec:
    """Look up a preset by id.

    Raises ``ValueError`` if *preset_id* is not registered.
    """
    for preset in PRESETS:
        if preset.id == preset_id:
            return preset
    raise ValueError(f"Unknown graph preset: {preset_id}. Available: {list(PRESET_IDS)}")
