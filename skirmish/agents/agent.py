"""Agent — a mobile unit that claims territory for its faction.

Agents are created once when the world is populated and live for the
whole run.  Their faction never changes; only their position does.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from skirmish.simulation.config import SimulationConfig
    from skirmish.simulation.rng import RandomSource
    from skirmish.world.cell import Faction


@dataclass
class Agent:
    """A single agent.

    Attributes:
        x: Current column position in the world grid.
        y: Current row position in the world grid.
        faction: Owning faction (never ``Faction.EMPTY``).
        symbol: Cosmetic glyph from the faction's symbol set.
    """

    x: int
    y: int
    faction: Faction
    symbol: str = "?"

    @classmethod
    def spawn(
        cls,
        width: int,
        height: int,
        factions: tuple[Faction, ...],
        config: SimulationConfig,
        rng: RandomSource,
    ) -> Agent:
        """Create an agent with random faction, position and symbol.

        Args:
            width: Grid columns.
            height: Grid rows.
            factions: Non-empty factions to choose from.
            config: Supplies the faction symbol sets.
            rng: Random source.

        Returns:
            A new Agent placed uniformly at random within bounds.
        """
        faction = factions[int(rng.integers(0, len(factions)))]
        x = int(rng.integers(0, width))
        y = int(rng.integers(0, height))
        symbols = config.symbols_for(faction)
        symbol = symbols[int(rng.integers(0, len(symbols)))]
        return cls(x=x, y=y, faction=faction, symbol=symbol)
