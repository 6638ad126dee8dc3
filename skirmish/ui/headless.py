"""Headless renderer — logs territory summaries instead of drawing."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from skirmish.world.cell import Faction

if TYPE_CHECKING:
    from skirmish.world.frame import Frame

logger = logging.getLogger(__name__)


class HeadlessRenderer:
    """Records the latest frame and logs a summary every ``every`` ticks."""

    def __init__(self, every: int = 100) -> None:
        if every <= 0:
            msg = f"every must be positive, got {every}"
            raise ValueError(msg)
        self.every = every
        self.last_frame: Frame | None = None
        self.frames_seen = 0

    def render(self, frame: Frame) -> None:
        self.last_frame = frame
        self.frames_seen += 1
        if frame.tick % self.every == 0:
            logger.info("tick %d: %s", frame.tick, summarize(frame))

    def close(self) -> None:
        if self.last_frame is not None:
            logger.info("final tick %d: %s", self.last_frame.tick, summarize(self.last_frame))


def summarize(frame: Frame) -> str:
    """Return ``"blue=12 red=40 ..."`` for the factions in a frame."""
    return " ".join(
        f"{f.name.lower()}={frame.territory_of(f)}" for f in Faction
    )
