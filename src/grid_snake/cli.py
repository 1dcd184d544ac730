"""Command-line launcher for headless Grid Snake runs."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    ivalue = int(value)
    if ivalue < 1:
        raise argparse.ArgumentTypeError(f"{value} must be a positive integer.")
    return ivalue


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-snake",
        description="Grid Snake simulation, benchmarking, and config tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play one game with random key presses.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (overridden by other flags).",
    )
    sim_p.add_argument("--board-width", type=int, default=None)
    sim_p.add_argument("--board-height", type=int, default=None)
    sim_p.add_argument("--step-delay-ms", type=int, default=None)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--max-ticks", type=_positive_int, default=1000)
    sim_p.add_argument("--turn-probability", type=float, default=0.2)
    sim_p.add_argument(
        "--render", action="store_true",
        help="Print a text frame after every tick.",
    )
    sim_p.add_argument(
        "--realtime", action="store_true",
        help="Sleep step_delay_ms between ticks.",
    )

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Measure engine tick throughput.",
    )
    bench_p.add_argument("--num-games", type=_positive_int, default=100)
    bench_p.add_argument("--board-width", type=int, default=20)
    bench_p.add_argument("--board-height", type=int, default=20)
    bench_p.add_argument("--max-ticks", type=_positive_int, default=200)
    bench_p.add_argument("--seed", type=int, default=42)

    # --- config ---
    config_p = sub.add_parser(
        "config", help="Write the default config to a JSON file.",
    )
    config_p.add_argument("output", help="Path for the config file.")

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    import numpy as np

    from grid_snake.config import GameConfig
    from grid_snake.render import render_text
    from grid_snake.runner import random_keys, run

    overrides: dict = {}
    flag_map = {
        "board_width": "board_width",
        "board_height": "board_height",
        "step_delay_ms": "step_delay_ms",
        "seed": "seed",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val

    try:
        config = GameConfig.load(args.config) if args.config else GameConfig()
        if overrides:
            d = config.to_dict()
            d.update(overrides)
            config = GameConfig.from_dict(d)
        # Key presses draw from a child seed so they never mirror food placement.
        key_seed = np.random.SeedSequence(config.seed).spawn(1)[0]
        key_source = random_keys(
            np.random.default_rng(key_seed),
            turn_probability=args.turn_probability,
        )
    except (OSError, TypeError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)  # noqa: T201
        return 2

    def _print_frame(snap: dict) -> None:
        print(render_text(snap))  # noqa: T201
        print()  # noqa: T201

    result = run(
        config,
        key_source,
        _print_frame if args.render else None,
        max_ticks=args.max_ticks,
        realtime=args.realtime,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_benchmark(args: argparse.Namespace) -> int:
    from grid_snake.benchmark import benchmark_throughput

    try:
        result = benchmark_throughput(
            num_games=args.num_games,
            board_width=args.board_width,
            board_height=args.board_height,
            max_ticks=args.max_ticks,
            seed=args.seed,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)  # noqa: T201
        return 2
    print(result.summary())  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from grid_snake.config import GameConfig

    GameConfig().save(args.output)
    print(f"Wrote default config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grid-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "benchmark": _run_benchmark,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
