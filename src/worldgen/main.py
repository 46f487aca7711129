"""Command line entrypoint: load a map directory and report what it holds."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from worldgen.config import get_settings
from worldgen.errors import MapError
from worldgen.map import load_map


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="worldgen", description="Load and cross-check a Hearts of Iron IV style map"
    )
    parser.add_argument("root", type=Path, help="Game or mod directory holding map/ and common/")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (defaults to WORLDGEN_LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=args.log_level or settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        world = load_map(args.root, settings=settings)
    except MapError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"Map {world.width}x{world.height} loaded from {args.root}")
    for name, count in world.summary().items():
        print(f"  {name:<18} {count}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual launch helper
    sys.exit(main())
