"""SimulationEngine — advances the world one tick at a time.

Tick order is fixed:

1. Agent phase: every agent moves and claims, in list order.
2. Cell phase: stabilization, decay, extinction and chaos over every
   cell, in row-major order.

Rendering and pacing live in ``skirmish.simulation.loop``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from skirmish.agents.movement import update_agents
from skirmish.simulation.config import SimulationConfig
from skirmish.simulation.rng import RandomSource, make_rng
from skirmish.world.frame import Frame
from skirmish.world.rules import update_cells
from skirmish.world.world import World

logger = logging.getLogger(__name__)


@dataclass
class SimulationEngine:
    """Drives the simulation forward tick by tick.

    Attributes:
        config: Loaded simulation configuration.
        rng: Random source for every simulation draw.  Seeded from
            ``config.seed`` unless one is supplied.
        world: The grid and its agents.
        tick: Number of completed ticks.
    """

    config: SimulationConfig
    rng: RandomSource | None = None
    world: World = field(init=False)
    tick: int = 0

    def __post_init__(self) -> None:
        """Build and populate the world from config."""
        if self.rng is None:
            self.rng = make_rng(self.config.seed)
        self.world = World(
            width=self.config.world_width,
            height=self.config.world_height,
        )
        self.world.populate(self.rng, self.config)
        logger.info(
            "world %dx%d populated with %d agents (seed=%s)",
            self.world.width,
            self.world.height,
            len(self.world.agents),
            self.config.seed,
        )

    def step(self) -> None:
        """Advance the simulation by one tick."""
        outcomes = update_agents(self.world, self.config, self.rng)
        injected = update_cells(self.world, self.config, self.rng)
        self.tick += 1
        if injected:
            logger.debug("tick %d: chaos injected into %d cell(s)", self.tick, injected)
        logger.debug(
            "tick %d claims: %s",
            self.tick,
            ", ".join(f"{o.name.lower()}={n}" for o, n in outcomes.items()),
        )

    def run(self, ticks: int) -> None:
        """Run the simulation for a fixed number of ticks.

        Args:
            ticks: Number of ticks to advance.
        """
        for _ in range(ticks):
            self.step()

    def snapshot(self) -> Frame:
        """Return a read-only frame of the current state."""
        return self.world.snapshot(self.tick)
