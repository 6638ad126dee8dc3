"""ANSI terminal renderer.

Draws the grid as coloured glyphs, one character per cell.  Symbols
for held cells are re-picked every frame from the faction's set, using
a generator owned by the renderer so drawing never consumes simulation
randomness.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

import numpy as np

from skirmish.world.cell import Faction

if TYPE_CHECKING:
    from numpy.random import Generator

    from skirmish.simulation.config import SimulationConfig
    from skirmish.world.frame import Frame

CLEAR_SCREEN = "\033[2J"
CURSOR_HOME = "\033[H"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
RESET = "\033[0m"
BOLD = "\033[1m"

BACKGROUND_GLYPH = "·"
_BACKGROUND_COLOUR = "\033[90m"

FACTION_COLOURS: dict[Faction, str] = {
    Faction.BLUE: "\033[94m",
    Faction.RED: "\033[91m",
    Faction.GREEN: "\033[92m",
    Faction.MAGENTA: "\033[95m",
}


class TerminalRenderer:
    """Writes full-grid frames to a text stream using ANSI escapes.

    Attributes:
        config: Supplies faction symbol sets.
        stream: Output stream, ``sys.stdout`` by default.
        show_agents: Overlay agents in bold on top of the cells.
    """

    def __init__(
        self,
        config: SimulationConfig,
        *,
        stream: TextIO | None = None,
        show_agents: bool = False,
        rng: Generator | None = None,
    ) -> None:
        self.config = config
        self.stream = stream if stream is not None else sys.stdout
        self.show_agents = show_agents
        self._rng = rng if rng is not None else np.random.default_rng()
        self._started = False

    def render(self, frame: Frame) -> None:
        """Write one frame, clearing the screen before the first."""
        if not self._started:
            self.stream.write(HIDE_CURSOR + CLEAR_SCREEN)
            self._started = True
        self.stream.write(CURSOR_HOME)
        self.stream.write(self.compose(frame))
        self.stream.flush()

    def compose(self, frame: Frame) -> str:
        """Return the text of one frame (without cursor control)."""
        overlay: dict[tuple[int, int], str] = {}
        if self.show_agents:
            for agent in frame.agents:
                overlay[(agent.x, agent.y)] = (
                    BOLD + FACTION_COLOURS[agent.faction] + agent.symbol + RESET
                )

        lines = []
        for y in range(frame.height):
            row = []
            for x in range(frame.width):
                glyph = overlay.get((x, y))
                if glyph is None:
                    glyph = self._cell_glyph(frame.faction_at(x, y))
                row.append(glyph)
            lines.append(" ".join(row))
        lines.append(self.status_line(frame))
        return "\n".join(lines) + "\n"

    def status_line(self, frame: Frame) -> str:
        parts = [f"tick {frame.tick}"]
        for faction in Faction.playable():
            parts.append(
                FACTION_COLOURS[faction]
                + f"{faction.name.lower()} {frame.territory_of(faction)}"
                + RESET,
            )
        return "  ".join(parts)

    def close(self) -> None:
        if self._started:
            self.stream.write(RESET + SHOW_CURSOR + "\n")
            self.stream.flush()

    def _cell_glyph(self, faction: Faction) -> str:
        if faction is Faction.EMPTY:
            return _BACKGROUND_COLOUR + BACKGROUND_GLYPH + RESET
        symbols = self.config.symbols_for(faction)
        symbol = symbols[int(self._rng.integers(0, len(symbols)))]
        return FACTION_COLOURS[faction] + symbol + RESET
