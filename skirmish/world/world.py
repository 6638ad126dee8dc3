"""World grid — the single owner of all simulation state.

The World holds the cell grid and the agent list and answers the
spatial queries (neighbours, territory counts) used by the agent and
cell rules.  It also builds the read-only frames handed to renderers.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from skirmish.agents.agent import Agent
from skirmish.world.cell import Cell, CellSnapshot, Faction
from skirmish.world.frame import AgentView, Frame, readonly

if TYPE_CHECKING:
    from skirmish.simulation.config import SimulationConfig
    from skirmish.simulation.rng import RandomSource

_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


@dataclass
class World:
    """A 2D grid world plus the agents that roam it.

    Attributes:
        width: Number of columns in the grid.
        height: Number of rows in the grid.
        cells: 2D list of Cell objects indexed as ``cells[y][x]``.
        agents: Every agent, in the fixed order they are updated.
    """

    width: int
    height: int
    cells: list[list[Cell]] = field(init=False, repr=False)
    agents: list[Agent] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        """Initialise the grid with unclaimed, zero-energy cells."""
        self.cells = [
            [Cell(x=x, y=y) for x in range(self.width)] for y in range(self.height)
        ]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Cell:
        """Return the cell at grid coordinates ``(x, y)``.

        Args:
            x: Column index.
            y: Row index.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.width}x{self.height}"
            raise IndexError(msg)
        return self.cells[y][x]

    def clamp(self, x: int, y: int) -> tuple[int, int]:
        """Pull ``(x, y)`` back onto the grid along each axis."""
        return (
            min(max(x, 0), self.width - 1),
            min(max(y, 0), self.height - 1),
        )

    def neighbours(self, x: int, y: int) -> Iterator[CellSnapshot]:
        """Yield snapshots of the cells adjacent to ``(x, y)``.

        Diagonals count, positions off the grid are skipped: corners
        have 3 neighbours, edges 5, interior cells 8.  Snapshots are
        taken as the iterator advances.

        Args:
            x: Column index.
            y: Row index.
        """
        for dx, dy in _OFFSETS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield self.cells[ny][nx].snapshot()

    def iter_cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for row in self.cells:
            yield from row

    def populate(
        self,
        rng: RandomSource,
        config: SimulationConfig,
        *,
        agent_count: int | None = None,
    ) -> None:
        """Seed cell energy/resources and create the starting agents.

        Every cell starts unclaimed with energy uniform in
        ``[0, initial_energy_max)`` and resource uniform in
        ``[0, resource_max)``.  Agents get a uniform faction, position
        and symbol.

        Args:
            rng: Random source.
            config: Supplies seeding bounds and symbol sets.
            agent_count: Number of agents; defaults to
                ``config.initial_agents``.
        """
        for cell in self.iter_cells():
            cell.faction = Faction.EMPTY
            cell.energy = int(rng.integers(0, config.initial_energy_max))
            cell.resource = int(rng.integers(0, config.resource_max))

        count = config.initial_agents if agent_count is None else agent_count
        factions = Faction.playable()
        self.agents = [
            Agent.spawn(self.width, self.height, factions, config, rng)
            for _ in range(count)
        ]

    def territory(self) -> Counter[Faction]:
        """Count cells held by each faction (``EMPTY`` included)."""
        counts: Counter[Faction] = Counter({f: 0 for f in Faction})
        counts.update(cell.faction for cell in self.iter_cells())
        return counts

    def snapshot(self, tick: int) -> Frame:
        """Copy the current state into an immutable Frame."""
        factions = np.array(
            [[cell.faction.value for cell in row] for row in self.cells],
            dtype=np.int8,
        )
        energy = np.array(
            [[cell.energy for cell in row] for row in self.cells],
            dtype=np.int64,
        )
        agents = tuple(
            AgentView(x=a.x, y=a.y, faction=a.faction, symbol=a.symbol)
            for a in self.agents
        )
        territory = self.territory()
        return Frame(
            tick=tick,
            width=self.width,
            height=self.height,
            factions=readonly(factions),
            energy=readonly(energy),
            agents=agents,
            territory=tuple((f, territory[f]) for f in Faction),
        )
