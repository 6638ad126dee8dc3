"""Tests for skirmish.simulation - config loading, engine and loop."""

from pathlib import Path

import numpy as np
import pytest

from skirmish.simulation.config import SimulationConfig
from skirmish.simulation.engine import SimulationEngine
from skirmish.simulation.loop import run_loop
from skirmish.ui.headless import HeadlessRenderer
from skirmish.ui.renderer import RendererClosed
from skirmish.world.cell import Faction

_REPO_CONFIG = Path(__file__).resolve().parent.parent / "config" / "default.yaml"


class TestSimulationConfig:
    """Tests for YAML config loading and validation."""

    def test_defaults(self) -> None:
        cfg = SimulationConfig()
        assert cfg.seed == 42
        assert cfg.world_width == 44
        assert cfg.world_height == 44
        assert cfg.initial_agents == 120
        assert cfg.chaos_probability == 0.0008
        assert cfg.tick_delay == 0.06

    def test_default_powers(self) -> None:
        cfg = SimulationConfig()
        assert cfg.power_of(Faction.BLUE) == 3
        assert cfg.power_of(Faction.RED) == 4
        assert cfg.power_of(Faction.GREEN) == 2
        assert cfg.power_of(Faction.MAGENTA) == 6

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text("seed: 99\nworld_width: 16\nworld_height: 12\n")
        cfg = SimulationConfig.from_yaml(yaml_file)
        assert cfg.seed == 99
        assert cfg.world_width == 16
        assert cfg.world_height == 12
        assert cfg.initial_agents == 120

    def test_from_yaml_merges_faction_tables(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text("faction_power:\n  green: 5\n")
        cfg = SimulationConfig.from_yaml(yaml_file)
        assert cfg.power_of(Faction.GREEN) == 5
        assert cfg.power_of(Faction.MAGENTA) == 6

    def test_from_yaml_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert SimulationConfig.from_yaml(yaml_file) == SimulationConfig()

    def test_from_yaml_unknown_key(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("world_depth: 3\n")
        with pytest.raises(ValueError, match="world_depth"):
            SimulationConfig.from_yaml(yaml_file)

    def test_from_yaml_rejects_bad_power(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad_power.yaml"
        yaml_file.write_text("faction_power:\n  blue: x\n")
        with pytest.raises(ValueError, match="blue"):
            SimulationConfig.from_yaml(yaml_file)

    def test_from_yaml_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            SimulationConfig.from_yaml(tmp_path / "nope.yaml")

    def test_repo_default_matches_builtin(self) -> None:
        assert SimulationConfig.from_yaml(_REPO_CONFIG) == SimulationConfig()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"world_width": 0},
            {"world_height": -1},
            {"initial_agents": 0},
            {"chaos_probability": 1.5},
            {"cohesion_probability": -0.1},
            {"tick_delay": -1.0},
            {"faction_power": {"blue": 3}},
            {"faction_power": {"blue": "x", "red": 4, "green": 2, "magenta": 6}},
            {"faction_power": {"blue": 3.5, "red": 4, "green": 2, "magenta": 6}},
            {"faction_power": {"blue": True, "red": 4, "green": 2, "magenta": 6}},
            {"faction_power": {"blue": 3, "red": 4, "green": 2, "magenta": 6, "orange": 1}},
            {"faction_power": {"blue": 3, "red": 4, "green": 2, "magenta": 6, "empty": 1}},
            {"faction_symbols": {"blue": "", "red": "x", "green": "x", "magenta": "x"}},
            {"faction_symbols": {"blue": ["a"], "red": "x", "green": "x", "magenta": "x"}},
            {"faction_symbols": {"blue": 7, "red": "x", "green": "x", "magenta": "x"}},
        ],
    )
    def test_validation_rejects(self, overrides: dict) -> None:
        with pytest.raises(ValueError):
            SimulationConfig(**overrides)

    def test_unknown_faction_key_named(self) -> None:
        power = {"blue": 3, "red": 4, "green": 2, "magenta": 6, "orange": 1}
        with pytest.raises(ValueError, match="unknown faction 'orange'"):
            SimulationConfig(faction_power=power)

    def test_power_of_returns_validated_int(self) -> None:
        power = {"blue": 9, "red": 4, "green": 2, "magenta": 6}
        assert SimulationConfig(faction_power=power).power_of(Faction.BLUE) == 9


class TestSimulationEngine:
    """Tests for the tick loop."""

    def test_engine_initialises(self, small_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=small_config)
        assert engine.tick == 0
        assert engine.world.width == small_config.world_width
        assert len(engine.world.agents) == small_config.initial_agents

    def test_step_advances_tick(self, small_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=small_config)
        engine.step()
        assert engine.tick == 1

    def test_run_multiple_ticks(self, small_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=small_config)
        engine.run(ticks=10)
        assert engine.tick == 10

    def test_agents_claim_territory(self, small_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=small_config)
        engine.run(ticks=5)
        held = sum(
            n for f, n in engine.world.territory().items() if f is not Faction.EMPTY
        )
        assert held > 0

    def test_determinism(self, small_config: SimulationConfig) -> None:
        """Same seed must produce identical state after N ticks."""
        engine_a = SimulationEngine(config=small_config)
        engine_a.run(ticks=30)
        engine_b = SimulationEngine(config=small_config)
        engine_b.run(ticks=30)

        frame_a = engine_a.snapshot()
        frame_b = engine_b.snapshot()
        assert np.array_equal(frame_a.factions, frame_b.factions)
        assert np.array_equal(frame_a.energy, frame_b.energy)
        assert frame_a.agents == frame_b.agents
        resources_a = [c.resource for c in engine_a.world.iter_cells()]
        resources_b = [c.resource for c in engine_b.world.iter_cells()]
        assert resources_a == resources_b

    def test_injected_rng_is_used(self, small_config: SimulationConfig) -> None:
        engine_a = SimulationEngine(config=small_config, rng=np.random.default_rng(5))
        engine_b = SimulationEngine(config=small_config, rng=np.random.default_rng(5))
        engine_a.run(ticks=3)
        engine_b.run(ticks=3)
        assert engine_a.snapshot().agents == engine_b.snapshot().agents

    def test_snapshot_does_not_touch_state(self, small_config: SimulationConfig) -> None:
        engine_a = SimulationEngine(config=small_config)
        engine_b = SimulationEngine(config=small_config)
        for _ in range(10):
            engine_a.step()
            engine_a.snapshot()
            engine_b.step()
        assert np.array_equal(engine_a.snapshot().factions, engine_b.snapshot().factions)


class _ClosingRenderer:
    def __init__(self, close_on: int) -> None:
        self.close_on = close_on
        self.frames = 0
        self.closed = False

    def render(self, frame) -> None:
        self.frames += 1
        if self.frames == self.close_on:
            raise RendererClosed

    def close(self) -> None:
        self.closed = True


class TestRunLoop:
    """Tests for the step/render/sleep loop."""

    def test_renders_each_tick_and_sleeps(self, small_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=small_config)
        renderer = HeadlessRenderer(every=1)
        pauses: list[float] = []
        ran = run_loop(engine, renderer, max_ticks=4, sleep=pauses.append)
        assert ran == 4
        assert engine.tick == 4
        assert renderer.frames_seen == 4
        assert renderer.last_frame is not None
        assert renderer.last_frame.tick == 4
        assert pauses == [small_config.tick_delay] * 4

    def test_delay_override(self, small_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=small_config)
        pauses: list[float] = []
        run_loop(engine, HeadlessRenderer(), delay=0.25, max_ticks=2, sleep=pauses.append)
        assert pauses == [0.25, 0.25]

    def test_zero_delay_skips_sleep(self, small_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=small_config)
        pauses: list[float] = []
        run_loop(engine, HeadlessRenderer(), delay=0, max_ticks=3, sleep=pauses.append)
        assert pauses == []

    def test_renderer_closed_stops_loop(self, small_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=small_config)
        renderer = _ClosingRenderer(close_on=3)
        ran = run_loop(engine, renderer, sleep=lambda _: None)
        assert ran == 3
        assert renderer.closed
