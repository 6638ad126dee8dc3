"""Config — load simulation constants from YAML files.

Grid size, agent count, faction power ratings and symbol sets, and the
thresholds of the fixed cell rules all live here.  They are read once
at start-up and never change during a run.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from skirmish.world.cell import Faction

_DEFAULT_POWER: dict[str, int] = {
    "blue": 3,
    "red": 4,
    "green": 2,
    "magenta": 6,
}

_DEFAULT_SYMBOLS: dict[str, str] = {
    "blue": "▲△◆",
    "red": "●○◉",
    "green": "■□▪",
    "magenta": "★☆✦",
}


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay (None for entropy).
        world_width: Number of grid columns.
        world_height: Number of grid rows.
        initial_agents: Agents created at start; never changes.
        initial_energy_max: Exclusive upper bound of starting cell energy.
        resource_max: Exclusive upper bound of a cell's resource counter.
        claim_energy: Energy a cell receives when an agent takes it.
        weak_hold_energy: Held cells below this energy fall without a
            contest.
        contest_roll_max: Exclusive upper bound of the contest roll.
        cohesion_probability: Chance per same-faction neighbour that an
            agent takes an extra random step.
        stabilize_threshold: Same-faction neighbours needed to gain energy.
        pressure_threshold: Rival neighbours needed to lose energy.
        pressure_decay: Energy lost under rival pressure.
        chaos_probability: Per-cell, per-tick chance of forced reassignment.
        chaos_energy: Energy given to a chaos-injected cell.
        tick_delay: Seconds to wait between ticks.
        faction_power: Contest bonus keyed by lower-case faction name.
        faction_symbols: Glyph set keyed by lower-case faction name.
    """

    seed: int | None = 42
    world_width: int = 44
    world_height: int = 44
    initial_agents: int = 120

    # Cell seeding
    initial_energy_max: int = 5
    resource_max: int = 10

    # Claims and contests
    claim_energy: int = 5
    weak_hold_energy: int = 2
    contest_roll_max: int = 10
    cohesion_probability: float = 0.3

    # Cell rules
    stabilize_threshold: int = 3
    pressure_threshold: int = 4
    pressure_decay: int = 2
    chaos_probability: float = 0.0008
    chaos_energy: int = 4

    tick_delay: float = 0.06

    faction_power: dict[str, int] = field(
        default_factory=lambda: dict(_DEFAULT_POWER),
    )
    faction_symbols: dict[str, str] = field(
        default_factory=lambda: dict(_DEFAULT_SYMBOLS),
    )

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Keys missing from the file keep their defaults.  Power and
        symbol tables are merged per faction, so a file may override a
        single faction.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated, validated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If a value is out of range or a key is unknown.
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"unknown config keys in {path}: {', '.join(unknown)}"
            raise ValueError(msg)

        power = dict(_DEFAULT_POWER)
        power.update(data.pop("faction_power", None) or {})
        symbols = dict(_DEFAULT_SYMBOLS)
        symbols.update(data.pop("faction_symbols", None) or {})

        return cls(faction_power=power, faction_symbols=symbols, **data)

    def validate(self) -> None:
        """Check that every constant is usable.

        Raises:
            ValueError: Describing the first offending value.
        """
        for name in ("world_width", "world_height", "initial_agents"):
            if getattr(self, name) <= 0:
                msg = f"{name} must be positive, got {getattr(self, name)}"
                raise ValueError(msg)
        for name in ("initial_energy_max", "resource_max", "contest_roll_max"):
            if getattr(self, name) <= 0:
                msg = f"{name} must be positive, got {getattr(self, name)}"
                raise ValueError(msg)
        for name in ("cohesion_probability", "chaos_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                msg = f"{name} must be within [0, 1], got {value}"
                raise ValueError(msg)
        if self.claim_energy <= 0 or self.chaos_energy <= 0:
            msg = "claim_energy and chaos_energy must be positive"
            raise ValueError(msg)
        if self.tick_delay < 0:
            msg = f"tick_delay must not be negative, got {self.tick_delay}"
            raise ValueError(msg)

        for table in (self.faction_power, self.faction_symbols):
            for key in table:
                if Faction.from_name(str(key)) is Faction.EMPTY:
                    msg = "the empty faction takes no power or symbols"
                    raise ValueError(msg)

        for faction in Faction.playable():
            key = faction.name.lower()
            power = self.faction_power.get(key)
            if power is None:
                msg = f"no power rating for faction {key!r}"
                raise ValueError(msg)
            if not isinstance(power, int) or isinstance(power, bool):
                msg = f"power for faction {key!r} must be an integer, got {power!r}"
                raise ValueError(msg)
            symbols = self.faction_symbols.get(key)
            if not isinstance(symbols, str) or not symbols:
                msg = f"symbol set for faction {key!r} must be a non-empty string"
                raise ValueError(msg)

    def power_of(self, faction: Faction) -> int:
        """Return the contest bonus for a non-empty faction."""
        return self.faction_power[faction.name.lower()]

    def symbols_for(self, faction: Faction) -> str:
        """Return the glyph set for a non-empty faction."""
        return self.faction_symbols[faction.name.lower()]
