"""Command-line interface for map generation."""

import argparse
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from .generator import GenerationResult


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for map generation."""
    parser = argparse.ArgumentParser(description="Generate a symmetric skirmish map")
    parser.add_argument("--width", type=int, default=256, help="Map width (default: 256)")
    parser.add_argument("--height", type=int, default=256, help="Map height (default: 256)")
    parser.add_argument(
        "--players", type=int, default=2, help="Number of players, 1-4 (default: 2)"
    )
    parser.add_argument("--seed", type=int, default=12345, help="Random seed (default: 12345)")
    parser.add_argument(
        "--config", type=str, default=None, help="Path to a TOML config file"
    )
    parser.add_argument(
        "--preview", type=str, default=None, help="Write a PNG preview to this path"
    )
    parser.add_argument(
        "--scale", type=int, default=2, help="Preview pixels per tile (default: 2)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    args = parser.parse_args(argv)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(10 if args.verbose else 20),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )

    # Import here to avoid slow startup for --help
    from .config import MapConfig, load_config
    from .generator import generate_map
    from .preview import save_preview

    config = load_config(Path(args.config)) if args.config else MapConfig()

    print(
        f"Generating {args.width}x{args.height} map for {args.players} players "
        f"with seed {args.seed}"
    )

    start_time = time.time()
    result = generate_map(args.width, args.height, args.players, args.seed, config)
    gen_time = time.time() - start_time

    print(f"Generation complete in {gen_time:.2f}s (symmetry: {result.symmetry.value})")
    _print_stats(result)

    if args.preview and not result.grid.is_empty:
        path = save_preview(result.grid, Path(args.preview), args.scale)
        print(f"Preview saved to {path}")


def _print_stats(result: "GenerationResult") -> None:
    grid = result.grid
    total = grid.width * grid.height
    if total == 0:
        print("Empty map")
        return

    print()
    print(f"Terrain ({total:,} tiles):")
    for terrain, count in sorted(grid.count_terrain().items(), key=lambda kv: -kv[1]):
        print(f"  {terrain.value:<14} {count:>8,} ({count / total * 100:.1f}%)")

    print("Resources:")
    resources = grid.count_resources()
    if not resources:
        print("  none")
    for kind, count in sorted(resources.items(), key=lambda kv: kv[0].value):
        print(f"  {kind.display_name:<14} {count:>8,}")

    print("Spawns:")
    for spawn, report in zip(result.spawns, result.spawn_reports):
        placed = ", ".join(f"{k.value}={v}" for k, v in report.placed.items()) or "none"
        status = "ok" if report.targets_met else "short"
        print(f"  ({spawn.x}, {spawn.y}) starting resources: {placed} [{status}]")

    if result.validation is not None:
        status = "passed" if result.validation.passed else "FAILED"
        print(f"Validation {status}")
        for error in result.validation.errors:
            print(f"  error: {error}")


if __name__ == "__main__":
    main()
