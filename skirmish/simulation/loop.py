"""Main loop: step, render, wait, forever.

Each iteration runs one engine tick, hands a read-only frame to the
renderer and then blocks for the configured inter-tick delay.  The loop
has no stop condition of its own; it ends when the process is
interrupted, when a renderer raises ``RendererClosed``, or after
``max_ticks`` when one is given.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from skirmish.ui.renderer import RendererClosed

if TYPE_CHECKING:
    from skirmish.simulation.engine import SimulationEngine
    from skirmish.ui.renderer import Renderer

logger = logging.getLogger(__name__)


def run_loop(
    engine: SimulationEngine,
    renderer: Renderer,
    *,
    delay: float | None = None,
    max_ticks: int | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Drive ``engine`` and ``renderer`` until stopped.

    Args:
        engine: The simulation to advance.
        renderer: Receives one frame per tick.
        delay: Seconds between ticks; defaults to ``config.tick_delay``.
        max_ticks: Stop after this many ticks (None runs forever).
        sleep: Blocking wait, replaceable in tests.

    Returns:
        Number of ticks run by this call.
    """
    pause = engine.config.tick_delay if delay is None else delay
    ran = 0
    try:
        while max_ticks is None or ran < max_ticks:
            engine.step()
            ran += 1
            renderer.render(engine.snapshot())
            if pause > 0:
                sleep(pause)
    except RendererClosed:
        logger.info("renderer closed after %d tick(s)", ran)
    finally:
        renderer.close()
    return ran
