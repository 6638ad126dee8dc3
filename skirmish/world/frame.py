"""Frame — a read-only picture of the world handed to renderers.

Renderers never touch the live World.  Each tick the engine copies the
grid into NumPy arrays, marks them read-only, and bundles them with
agent positions and territory counts.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from skirmish.world.cell import Faction


@dataclass(frozen=True)
class AgentView:
    """Position, faction and glyph of one agent at frame time."""

    x: int
    y: int
    faction: Faction
    symbol: str


@dataclass(frozen=True)
class Frame:
    """Immutable world state for one rendered frame.

    Attributes:
        tick: Tick count when the frame was taken.
        width: Grid columns.
        height: Grid rows.
        factions: ``Faction.value`` per cell, shape ``(height, width)``.
        energy: Energy per cell, shape ``(height, width)``.
        agents: Every agent, in update order.
        territory: Cells held per faction, ``EMPTY`` included.
    """

    tick: int
    width: int
    height: int
    factions: NDArray[np.int8]
    energy: NDArray[np.int64]
    agents: tuple[AgentView, ...]
    territory: tuple[tuple[Faction, int], ...]

    def faction_at(self, x: int, y: int) -> Faction:
        return Faction(int(self.factions[y, x]))

    def territory_of(self, faction: Faction) -> int:
        return dict(self.territory).get(faction, 0)


def readonly(array: NDArray) -> NDArray:
    """Mark ``array`` as non-writeable and return it."""
    array.flags.writeable = False
    return array
