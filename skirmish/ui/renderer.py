"""Renderer protocol shared by every front end."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from skirmish.world.frame import Frame


class RendererClosed(Exception):
    """Raised by a renderer when its user asks to stop (window closed)."""


class Renderer(Protocol):
    """Consumes one frame per tick.

    Implementations receive an immutable Frame and must not hold on to
    the engine or the World.
    """

    def render(self, frame: Frame) -> None:
        """Draw one full-grid frame."""
        ...

    def close(self) -> None:
        """Release any display resources."""
        ...
