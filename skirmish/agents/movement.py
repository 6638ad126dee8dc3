"""Agent movement and territory claims.

Every tick each agent, in list order:

1. **Drifts** one random step (``dx``, ``dy`` each from {-1, 0, 1}).
2. **Coheres**: for every neighbouring cell already held by its own
   faction there is a ``cohesion_probability`` chance of an extra
   random step on both axes, so agents inside friendly territory
   wander further.
3. **Moves**, with the target clamped to the grid edges.
4. **Claims** the destination cell (see ``resolve_claim``).
5. **Drains** one unit of the destination's resource.

Agents are applied one after another against the live grid, so an
agent sees claims made by agents earlier in the list this tick.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING

from skirmish.simulation.rng import draw_step

if TYPE_CHECKING:
    from skirmish.agents.agent import Agent
    from skirmish.simulation.config import SimulationConfig
    from skirmish.simulation.rng import RandomSource
    from skirmish.world.cell import Cell
    from skirmish.world.world import World


class ClaimOutcome(Enum):
    """How a claim on a destination cell was resolved."""

    TAKEN = auto()
    REINFORCED = auto()
    WON_CONTEST = auto()
    LOST_CONTEST = auto()


def choose_displacement(
    agent: Agent,
    world: World,
    config: SimulationConfig,
    rng: RandomSource,
) -> tuple[int, int]:
    """Return the agent's ``(dx, dy)`` for this tick, before clamping."""
    dx = draw_step(rng)
    dy = draw_step(rng)
    for neighbour in world.neighbours(agent.x, agent.y):
        if neighbour.faction is not agent.faction:
            continue
        if rng.random() < config.cohesion_probability:
            dx += draw_step(rng)
            dy += draw_step(rng)
    return dx, dy


def resolve_claim(
    agent: Agent,
    cell: Cell,
    config: SimulationConfig,
    rng: RandomSource,
) -> ClaimOutcome:
    """Apply the agent's claim to the cell it landed on.

    - Unclaimed cells and cells below ``weak_hold_energy`` fall to the
      agent outright.
    - Cells of the agent's own faction are left alone.
    - Otherwise a contest is rolled: ``roll + power`` must strictly
      exceed the cell's energy for the agent to take it.

    A successful take resets the cell's energy to ``claim_energy``.

    Returns:
        Which branch was taken.
    """
    if cell.is_empty or cell.energy < config.weak_hold_energy:
        cell.claim(agent.faction, config.claim_energy)
        return ClaimOutcome.TAKEN

    if cell.faction is agent.faction:
        return ClaimOutcome.REINFORCED

    roll = int(rng.integers(0, config.contest_roll_max))
    if roll + config.power_of(agent.faction) > cell.energy:
        cell.claim(agent.faction, config.claim_energy)
        return ClaimOutcome.WON_CONTEST
    return ClaimOutcome.LOST_CONTEST


def tick_resource(cell: Cell, config: SimulationConfig, rng: RandomSource) -> None:
    """Drain one resource unit, re-rolling the counter once it underflows."""
    cell.resource -= 1
    if cell.resource < 0:
        cell.resource = int(rng.integers(0, config.resource_max))


def update_agent(
    agent: Agent,
    world: World,
    config: SimulationConfig,
    rng: RandomSource,
) -> ClaimOutcome:
    """Move one agent and resolve its claim.

    Args:
        agent: The agent to move.
        world: The live world grid.
        config: Claim and cohesion constants.
        rng: Random source.

    Returns:
        The outcome of the claim on the destination cell.
    """
    dx, dy = choose_displacement(agent, world, config, rng)
    agent.x, agent.y = world.clamp(agent.x + dx, agent.y + dy)

    cell = world.cells[agent.y][agent.x]
    outcome = resolve_claim(agent, cell, config, rng)
    tick_resource(cell, config, rng)
    return outcome


def update_agents(
    world: World,
    config: SimulationConfig,
    rng: RandomSource,
) -> dict[ClaimOutcome, int]:
    """Run the agent phase over every agent in list order.

    Returns:
        Count of claim outcomes this tick.
    """
    outcomes = {outcome: 0 for outcome in ClaimOutcome}
    for agent in world.agents:
        outcomes[update_agent(agent, world, config, rng)] += 1
    return outcomes
