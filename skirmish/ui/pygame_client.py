"""Pygame 2D visualization for the Skirmish simulation.

Renders owned cells as coloured squares (brighter with more energy),
agents as small dots, and a side panel with territory counts.  The
simulation loop drives the pacing; this renderer only draws the frames
it is handed and polls window events in between.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pygame

from skirmish.ui.renderer import RendererClosed
from skirmish.world.cell import Faction

if TYPE_CHECKING:
    from skirmish.world.frame import Frame

# Colour palette
_BG = (18, 18, 24)
_TEXT = (200, 200, 200)

_FACTION_COLOURS: dict[Faction, tuple[int, int, int]] = {
    Faction.BLUE: (70, 120, 255),
    Faction.RED: (235, 70, 70),
    Faction.GREEN: (70, 210, 90),
    Faction.MAGENTA: (220, 80, 220),
}

# Energy at which a cell is drawn at full brightness
_FULL_ENERGY = 8.0


class PygameRenderer:
    """Draws frames into a Pygame window.

    Attributes:
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
        paused: While True, ``render`` holds the frame on screen.
    """

    def __init__(self, width: int, height: int, cell_size: int = 14) -> None:
        """Open the window.

        Args:
            width: Grid columns.
            height: Grid rows.
            cell_size: Pixel width/height per grid cell.
        """
        self.cell_size = cell_size
        self._grid_w = width * cell_size
        self._panel_width = 200
        self._win_w = self._grid_w + self._panel_width
        self._win_h = max(height * cell_size, 200)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Skirmish")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.paused = False

    def render(self, frame: Frame) -> None:
        """Draw one frame; blocks here while paused.

        Raises:
            RendererClosed: If the window was closed or ESC pressed.
        """
        self._handle_events()
        self._draw(frame)
        while self.paused:
            self.clock.tick(30)
            self._handle_events()
            self._draw(frame)

    def close(self) -> None:
        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                raise RendererClosed
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    raise RendererClosed
                if event.key == pygame.K_SPACE:
                    self.paused = not self.paused

    def _draw(self, frame: Frame) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_cells(frame)
        self._draw_agents(frame)
        self._draw_info_panel(frame)
        pygame.display.flip()

    def _draw_cells(self, frame: Frame) -> None:
        """Draw owned cells, scaled by energy."""
        cs = self.cell_size
        brightness = np.clip(0.35 + frame.energy / _FULL_ENERGY, 0.35, 1.0)
        for y in range(frame.height):
            for x in range(frame.width):
                faction = frame.faction_at(x, y)
                if faction is Faction.EMPTY:
                    continue
                base = np.array(_FACTION_COLOURS[faction], dtype=np.float64)
                colour = (base * brightness[y, x]).astype(int).tolist()
                pygame.draw.rect(self.screen, colour, (x * cs, y * cs, cs, cs))

    def _draw_agents(self, frame: Frame) -> None:
        """Draw each agent as a small dot with a light outline."""
        cs = self.cell_size
        radius = max(2, cs // 3)
        for agent in frame.agents:
            cx = agent.x * cs + cs // 2
            cy = agent.y * cs + cs // 2
            pygame.draw.circle(self.screen, (255, 255, 255), (cx, cy), radius + 1)
            pygame.draw.circle(
                self.screen,
                _FACTION_COLOURS[agent.faction],
                (cx, cy),
                radius,
            )

    def _draw_info_panel(self, frame: Frame) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = self._grid_w + 10
        y = 10

        lines = [
            f"Tick: {frame.tick}",
            f"{'PAUSED' if self.paused else 'RUNNING'}",
            "",
            "--- Territory ---",
        ]
        lines += [
            f"{faction.name.title()}: {frame.territory_of(faction)}"
            for faction in Faction
        ]
        lines += [
            "",
            "--- Controls ---",
            "SPACE: pause",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18
