"""Cell rules applied once per tick after every agent has moved.

Cells are visited in row-major order and updated in place, so a cell's
neighbour counts already reflect changes made earlier in the same
pass.  For each held cell:

- **Stabilization**: ``stabilize_threshold`` or more same-faction
  neighbours add one energy.
- **Pressure decay**: ``pressure_threshold`` or more neighbours held by
  other factions remove ``pressure_decay`` energy.  Both rules can fire
  on the same tick.
- **Extinction**: a cell left with no energy becomes unclaimed.

Unclaimed cells are skipped entirely.  Independently of the rules
above, each held cell has a
``chaos_probability`` chance of being handed to a random faction with
``chaos_energy``, which overrides an extinction decided this tick and
keeps the grid from freezing into a stable layout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from skirmish.world.cell import Faction

if TYPE_CHECKING:
    from skirmish.simulation.config import SimulationConfig
    from skirmish.simulation.rng import RandomSource
    from skirmish.world.cell import Cell
    from skirmish.world.world import World


def count_neighbours(world: World, cell: Cell) -> tuple[int, int]:
    """Return ``(same, diff)`` neighbour counts for a held cell.

    ``diff`` counts neighbours held by any other faction; unclaimed
    neighbours count towards neither.
    """
    same = diff = 0
    for neighbour in world.neighbours(cell.x, cell.y):
        if neighbour.faction is Faction.EMPTY:
            continue
        if neighbour.faction is cell.faction:
            same += 1
        else:
            diff += 1
    return same, diff


def apply_pressure(world: World, cell: Cell, config: SimulationConfig) -> None:
    """Apply stabilization, pressure decay and extinction to one cell."""
    if cell.is_empty:
        return

    same, diff = count_neighbours(world, cell)
    if same >= config.stabilize_threshold:
        cell.energy += 1
    if diff >= config.pressure_threshold:
        cell.energy -= config.pressure_decay
    if cell.energy <= 0:
        cell.clear()


def inject_chaos(cell: Cell, config: SimulationConfig, rng: RandomSource) -> bool:
    """Possibly force the cell to a random faction.

    Returns:
        True if the cell was reassigned.
    """
    if rng.random() >= config.chaos_probability:
        return False
    factions = Faction.playable()
    cell.claim(factions[int(rng.integers(0, len(factions)))], config.chaos_energy)
    return True


def update_cell(
    world: World,
    cell: Cell,
    config: SimulationConfig,
    rng: RandomSource,
) -> bool:
    """Run every cell rule on one held cell; unclaimed cells are skipped.

    Returns:
        True if chaos was injected into the cell.
    """
    if cell.is_empty:
        return False
    apply_pressure(world, cell, config)
    return inject_chaos(cell, config, rng)


def update_cells(
    world: World,
    config: SimulationConfig,
    rng: RandomSource,
) -> int:
    """Run the cell phase over the whole grid in row-major order.

    Returns:
        Number of cells hit by chaos injection this tick.
    """
    injected = 0
    for cell in world.iter_cells():
        if update_cell(world, cell, config, rng):
            injected += 1
    return injected
