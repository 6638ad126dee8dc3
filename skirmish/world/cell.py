"""Cell — a single tile in the contested grid.

Each cell records which faction holds it, how entrenched that hold is
(``energy``) and a slowly cycling ``resource`` counter that agents
drain as they pass through.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Faction(Enum):
    """Competing identities that can own cells and move agents."""

    EMPTY = 0
    BLUE = 1
    RED = 2
    GREEN = 3
    MAGENTA = 4

    @classmethod
    def playable(cls) -> tuple[Faction, ...]:
        """Return every faction except ``EMPTY``, in declaration order."""
        return tuple(f for f in cls if f is not cls.EMPTY)

    @classmethod
    def from_name(cls, name: str) -> Faction:
        """Look up a faction by case-insensitive name.

        Raises:
            ValueError: If no faction has that name.
        """
        try:
            return cls[name.upper()]
        except KeyError:
            msg = f"unknown faction {name!r}"
            raise ValueError(msg) from None


@dataclass(frozen=True)
class CellSnapshot:
    """Immutable value copy of a cell, handed out by neighbour queries."""

    x: int
    y: int
    faction: Faction
    energy: int
    resource: int


@dataclass
class Cell:
    """A single tile in the world grid.

    Attributes:
        x: Column position.
        y: Row position.
        faction: Current owner, ``Faction.EMPTY`` when unclaimed.
        energy: How hard the cell is to take; never negative after a
            cell pass.
        resource: Counter in ``[0, resource_max)`` drained by agents.
    """

    x: int
    y: int
    faction: Faction = Faction.EMPTY
    energy: int = 0
    resource: int = 0

    @property
    def is_empty(self) -> bool:
        return self.faction is Faction.EMPTY

    def claim(self, faction: Faction, energy: int) -> None:
        """Hand the cell to ``faction`` with a fresh energy level."""
        self.faction = faction
        self.energy = energy

    def clear(self) -> None:
        """Return the cell to the unclaimed state."""
        self.faction = Faction.EMPTY
        self.energy = 0

    def snapshot(self) -> CellSnapshot:
        return CellSnapshot(
            x=self.x,
            y=self.y,
            faction=self.faction,
            energy=self.energy,
            resource=self.resource,
        )
