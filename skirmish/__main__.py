"""Entry point for ``python -m skirmish``.

Loads the default YAML config, builds a simulation engine and runs it
under the chosen renderer until interrupted.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pathlib

from skirmish.simulation.config import SimulationConfig
from skirmish.simulation.engine import SimulationEngine
from skirmish.simulation.loop import run_loop
from skirmish.ui.headless import HeadlessRenderer
from skirmish.ui.terminal import TerminalRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

logger = logging.getLogger("skirmish")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skirmish",
        description="Skirmish - faction territory cellular automaton",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--renderer",
        choices=("terminal", "pygame", "headless"),
        default="terminal",
        help="Front end to draw with (default: terminal)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the config RNG seed",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Stop after this many ticks (default: run until interrupted)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds between ticks (default: from config)",
    )
    parser.add_argument(
        "--show-agents",
        action="store_true",
        help="Overlay agents on the terminal grid",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=14,
        help="Pixel size per grid cell for the pygame renderer (default: 14)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help=(
            "Logging level, written to stderr "
            "(default: INFO for --renderer headless, otherwise WARNING)"
        ),
    )
    return parser


def resolve_log_level(args: argparse.Namespace) -> str:
    """Return the requested level, or a default suited to the renderer."""
    if args.log_level is not None:
        return args.log_level
    return "INFO" if args.renderer == "headless" else "WARNING"


def load_config(args: argparse.Namespace) -> SimulationConfig:
    """Load the config file, falling back to defaults when it is absent."""
    if args.config.exists():
        config = SimulationConfig.from_yaml(args.config)
    elif args.config == _DEFAULT_CONFIG:
        logger.warning("%s not found, using built-in defaults", args.config)
        config = SimulationConfig()
    else:
        msg = f"config file not found: {args.config}"
        raise FileNotFoundError(msg)
    if args.seed is not None:
        config = dataclasses.replace(config, seed=args.seed)
    return config


def main() -> None:
    """Parse CLI args, create engine, launch renderer."""
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=resolve_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args)
    except (OSError, ValueError, TypeError) as exc:
        parser.error(str(exc))

    engine = SimulationEngine(config=config)

    if args.renderer == "pygame":
        from skirmish.ui.pygame_client import PygameRenderer

        renderer = PygameRenderer(
            width=config.world_width,
            height=config.world_height,
            cell_size=args.cell_size,
        )
    elif args.renderer == "headless":
        renderer = HeadlessRenderer()
    else:
        renderer = TerminalRenderer(config, show_agents=args.show_agents)

    try:
        run_loop(engine, renderer, delay=args.delay, max_ticks=args.ticks)
    except KeyboardInterrupt:
        logger.info("interrupted at tick %d", engine.tick)


if __name__ == "__main__":
    main()
