"""Shared fixtures for the Skirmish test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from skirmish.simulation.config import SimulationConfig
from skirmish.world.cell import Faction
from skirmish.world.world import World


class ScriptedRandom:
    """Random source that replays fixed draws.

    ``integers`` pops from ``ints`` and fails loudly when the script runs
    out or a value falls outside the requested range.  ``random`` pops
    from ``floats`` and returns 0.999 once they are used up, so chaos
    and cohesion never fire unless scripted.
    """

    def __init__(self, ints: list[int] | None = None, floats: list[float] | None = None):
        self.ints = list(ints or [])
        self.floats = list(floats or [])

    def integers(self, low: int, high: int | None = None) -> int:
        if high is None:
            low, high = 0, low
        if not self.ints:
            msg = f"unscripted integer draw in [{low}, {high})"
            raise AssertionError(msg)
        value = self.ints.pop(0)
        assert low <= value < high, f"scripted {value} outside [{low}, {high})"
        return value

    def random(self) -> float:
        return self.floats.pop(0) if self.floats else 0.999


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def scripted() -> type[ScriptedRandom]:
    """The scripted random source class, for exact draw sequences."""
    return ScriptedRandom


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def small_config() -> SimulationConfig:
    """A 10x10 world with 12 agents for fast engine tests."""
    return SimulationConfig(seed=777, world_width=10, world_height=10, initial_agents=12)


@pytest.fixture
def small_world() -> World:
    """A small 8x8 world for fast tests."""
    return World(width=8, height=8)


@pytest.fixture
def tiny_world() -> World:
    """A 3x3 world, every cell unclaimed with zero energy and resource 5."""
    world = World(width=3, height=3)
    for cell in world.iter_cells():
        cell.resource = 5
    return world


def _fill(world: World, faction: Faction, energy: int) -> None:
    for cell in world.iter_cells():
        cell.faction = faction
        cell.energy = energy


@pytest.fixture
def fill():
    """Helper that gives every cell of a world to one faction."""
    return _fill
